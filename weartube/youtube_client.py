from __future__ import annotations

import random
from typing import Any, Callable, Optional, Sequence, TypeVar
from urllib.parse import quote

import httpx
from loguru import logger
from pydantic import ValidationError

from .config import Settings
from .errors import ApiError, CatalogError, FallbackError, TransportError
from .result import Result
from .schemas import ChannelSummary, CommentPage, CommentThread, VideoDetails, VideoPage, VideoSummary
from .text import parse_duration

T = TypeVar("T")

# Raised by the record builders when an item does not have the documented shape
SHAPE_ERRORS = (AttributeError, LookupError, TypeError, ValidationError)

YOUTUBE_EMBED_URL = "https://www.youtube.com/embed/"

# Fixed player parameters; autoplay is prepended per call
EMBED_PARAMS = (
    ("controls", "1"),
    ("modestbranding", "1"),
    ("rel", "0"),
    ("enablejsapi", "1"),
    ("playsinline", "1"),
    ("html5", "1"),
    ("fs", "1"),
    ("cc_load_policy", "1"),
)


def build_embed_url(video_id: str, autoplay: bool = False) -> str:
    """Embed player URL for ``video_id``, the hand-off to the external player."""
    params = [("autoplay", "1" if autoplay else "0"), *EMBED_PARAMS]
    query = "&".join(f"{k}={v}" for k, v in params)
    return f"{YOUTUBE_EMBED_URL}{quote(video_id, safe='')}?{query}"


class YouTubeClient:
    """Async YouTube Data API v3 client.

    Every network call returns a ``Result``; errors never escape as
    exceptions. One ``httpx.AsyncClient`` is shared across calls.
    """

    parse_duration = staticmethod(parse_duration)
    build_embed_url = staticmethod(build_embed_url)

    def __init__(
        self,
        settings: Settings,
        http: Optional[httpx.AsyncClient] = None,
        choice: Callable[[Sequence[str]], str] = random.choice,
    ):
        self.settings = settings
        self._owns_http = http is None
        self.client = http or httpx.AsyncClient(timeout=settings.request_timeout)
        self._choice = choice

    async def close(self):
        if self._owns_http:
            await self.client.aclose()

    async def _get(
        self,
        endpoint: str,
        params: dict[str, Any],
        parse: Callable[[dict[str, Any]], T],
    ) -> Result[T]:
        url = f"{self.settings.youtube_base_url.rstrip('/')}/{endpoint}"
        logger.debug("GET {} {}", endpoint, params)
        query = {**params, "key": self.settings.youtube_api_key}
        try:
            resp = await self.client.get(url, params=query)
        except httpx.RequestError as e:
            logger.warning("{} request failed: {}", endpoint, type(e).__name__)
            return Result.failure(TransportError(e))
        if not resp.is_success:
            err = ApiError.from_response(resp)
            logger.warning("{} returned {}", endpoint, err)
            return Result.failure(err)
        try:
            data = resp.json()
        except ValueError:
            return Result.failure(ApiError(resp.status_code, "Malformed JSON response"))
        if not isinstance(data, dict):
            return Result.failure(ApiError(resp.status_code, "Unexpected response shape"))
        try:
            return Result.success(parse(data))
        except SHAPE_ERRORS as e:
            logger.warning("{} payload rejected: {}", endpoint, type(e).__name__)
            return Result.failure(ApiError(resp.status_code, "Unexpected response shape"))

    def _search_params(self, query: str, *, max_results: int, order: str, page_token: Optional[str]) -> dict[str, Any]:
        params: dict[str, Any] = {
            "part": "snippet",
            "type": "video",
            "q": query,
            "maxResults": max_results,
            "order": order,
            "regionCode": self.settings.region_code,
            "safeSearch": self.settings.safe_search,
        }
        if page_token is not None:
            params["pageToken"] = page_token
        return params

    @staticmethod
    def _video_page(data: dict[str, Any]) -> VideoPage:
        items = []
        for it in data.get("items") or []:
            # One odd result should not sink the whole page
            try:
                video = VideoSummary.from_api(it)
            except SHAPE_ERRORS:
                logger.warning("skipping malformed search item")
                continue
            if video is not None:
                items.append(video)
        return VideoPage(items=items, next_page_token=data.get("nextPageToken"))

    @staticmethod
    def _first(builder: Callable[[dict[str, Any]], T]) -> Callable[[dict[str, Any]], Optional[T]]:
        def parse(data: dict[str, Any]) -> Optional[T]:
            items = data.get("items") or []
            return builder(items[0]) if items else None

        return parse

    @staticmethod
    def _comment_page(data: dict[str, Any]) -> CommentPage:
        return CommentPage(
            items=[CommentThread.from_api(it) for it in data.get("items") or []],
            next_page_token=data.get("nextPageToken"),
        )

    async def search(self, query: str, page_token: Optional[str] = None) -> Result[VideoPage]:
        """Relevance-ordered video search. A blank query makes no request."""
        if not query or not query.strip():
            return Result.success(VideoPage())
        params = self._search_params(
            query,
            max_results=self.settings.search_max_results,
            order="relevance",
            page_token=page_token,
        )
        return await self._get("search", params, self._video_page)

    async def browse_trending(self, page_token: Optional[str] = None) -> Result[VideoPage]:
        """Approximate a trending feed with a most-viewed search on a random topic.

        An error or an empty page falls back to one generic search; when that
        fails too the returned error names both causes.
        """
        topic = self._choice(self.settings.trending_queries)
        logger.debug("trending topic: {}", topic)
        params = self._search_params(
            topic,
            max_results=self.settings.trending_max_results,
            order="viewCount",
            page_token=page_token,
        )
        res = await self._get("search", params, self._video_page)
        original: CatalogError | str
        if res.is_success:
            if res.value.items:
                return res
            original = f"no trending results for {topic!r}"
        else:
            original = res.error
        fallback_query = self.settings.trending_fallback_query
        logger.warning("trending failed ({}), falling back to {!r}", original, fallback_query)
        fallback = await self.search(fallback_query, page_token)
        if fallback.is_failure:
            return Result.failure(FallbackError(original, fallback.error))
        return fallback

    async def get_video_details(self, video_id: str) -> Result[Optional[VideoDetails]]:
        """Snippet, statistics and content details; ``None`` if the video is gone."""
        return await self._get(
            "videos",
            {"part": "snippet,statistics,contentDetails", "id": video_id},
            self._first(VideoDetails.from_api),
        )

    async def get_video_comments(self, video_id: str, page_token: Optional[str] = None) -> Result[CommentPage]:
        params: dict[str, Any] = {
            "part": "snippet",
            "videoId": video_id,
            "maxResults": self.settings.comments_max_results,
            "order": "relevance",
        }
        if page_token is not None:
            params["pageToken"] = page_token
        res = await self._get("commentThreads", params, self._comment_page)
        # Disabled comments are an empty thread list, not an error
        if isinstance(res.error, ApiError) and res.error.is_comments_disabled:
            return Result.success(CommentPage())
        return res

    async def get_channel_details(self, channel_id: str) -> Result[Optional[ChannelSummary]]:
        return await self._get(
            "channels",
            {"part": "snippet,statistics", "id": channel_id},
            self._first(ChannelSummary.from_api),
        )
