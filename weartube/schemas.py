from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .text import format_count, parse_duration, sanitize_comment_text


def _thumbnail_url(snippet: dict[str, Any]) -> str:
    thumbs = snippet.get("thumbnails") or {}
    for key in ("medium", "default"):
        url = (thumbs.get(key) or {}).get("url")
        if url:
            return url
    return ""


def _count(stats: dict[str, Any], key: str) -> Optional[int]:
    # Statistics arrive as strings and may be hidden or absent
    value = stats.get(key)
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        return None
    try:
        return int(value)
    except ValueError:
        return None


class Record(BaseModel):
    model_config = ConfigDict(frozen=True)


class VideoSummary(Record):
    id: str
    title: str = ""
    channel_title: str = ""
    channel_id: str = ""
    description: str = ""
    published_at: str = ""
    thumbnail_url: str = ""

    @classmethod
    def from_api(cls, item: dict[str, Any]) -> Optional["VideoSummary"]:
        """Build from a ``search.list`` item; ``None`` when it carries no video id."""
        video_id = (item.get("id") or {}).get("videoId")
        if not video_id:
            return None
        snip = item.get("snippet") or {}
        return cls(
            id=video_id,
            title=snip.get("title") or "",
            channel_title=snip.get("channelTitle") or "",
            channel_id=snip.get("channelId") or "",
            description=snip.get("description") or "",
            published_at=snip.get("publishedAt") or "",
            thumbnail_url=_thumbnail_url(snip),
        )


class VideoDetails(Record):
    id: str
    title: str = ""
    description: str = ""
    channel_id: str = ""
    channel_title: str = ""
    published_at: str = ""
    tags: list[str] = Field(default_factory=list)
    duration_raw: Optional[str] = None
    view_count: Optional[int] = None
    like_count: Optional[int] = None
    comment_count: Optional[int] = None
    thumbnail_url: str = ""

    @computed_field
    @property
    def duration(self) -> str:
        return parse_duration(self.duration_raw)

    @computed_field
    @property
    def view_count_text(self) -> str:
        return format_count(self.view_count)

    @computed_field
    @property
    def like_count_text(self) -> str:
        return format_count(self.like_count, "likes")

    @classmethod
    def from_api(cls, item: dict[str, Any]) -> "VideoDetails":
        snip = item.get("snippet") or {}
        stats = item.get("statistics") or {}
        content = item.get("contentDetails") or {}
        return cls(
            id=item.get("id") or "",
            title=snip.get("title") or "",
            description=snip.get("description") or "",
            channel_id=snip.get("channelId") or "",
            channel_title=snip.get("channelTitle") or "",
            published_at=snip.get("publishedAt") or "",
            tags=list(snip.get("tags") or []),
            duration_raw=content.get("duration"),
            view_count=_count(stats, "viewCount"),
            like_count=_count(stats, "likeCount"),
            comment_count=_count(stats, "commentCount"),
            thumbnail_url=_thumbnail_url(snip),
        )


class CommentThread(Record):
    id: str
    video_id: str = ""
    author_display_name: str = ""
    author_profile_image_url: Optional[str] = None
    text_display: str = ""
    like_count: int = 0
    published_at: str = ""

    @computed_field
    @property
    def display_text(self) -> str:
        return sanitize_comment_text(self.text_display)

    @classmethod
    def from_api(cls, item: dict[str, Any]) -> "CommentThread":
        snip = item.get("snippet") or {}
        top = (snip.get("topLevelComment") or {}).get("snippet") or {}
        return cls(
            id=item.get("id") or "",
            video_id=snip.get("videoId") or top.get("videoId") or "",
            author_display_name=top.get("authorDisplayName") or "",
            author_profile_image_url=top.get("authorProfileImageUrl"),
            text_display=top.get("textDisplay") or "",
            like_count=top.get("likeCount") or 0,
            published_at=top.get("publishedAt") or "",
        )


class ChannelSummary(Record):
    id: str
    title: str = ""
    description: str = ""
    thumbnail_url: str = ""
    subscriber_count: Optional[int] = None
    video_count: Optional[int] = None

    @classmethod
    def from_api(cls, item: dict[str, Any]) -> "ChannelSummary":
        snip = item.get("snippet") or {}
        stats = item.get("statistics") or {}
        hidden = bool(stats.get("hiddenSubscriberCount"))
        return cls(
            id=item.get("id") or "",
            title=snip.get("title") or "",
            description=snip.get("description") or "",
            thumbnail_url=_thumbnail_url(snip),
            subscriber_count=None if hidden else _count(stats, "subscriberCount"),
            video_count=_count(stats, "videoCount"),
        )


class VideoPage(Record):
    items: list[VideoSummary] = Field(default_factory=list)
    next_page_token: Optional[str] = None


class CommentPage(Record):
    items: list[CommentThread] = Field(default_factory=list)
    next_page_token: Optional[str] = None


class VideoOut(VideoDetails):
    embed_url: str


class EmbedOut(BaseModel):
    video_id: str
    embed_url: str
