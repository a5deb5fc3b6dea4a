from __future__ import annotations

import asyncio
from typing import Any, Callable, Coroutine, Generic, Optional, TypeVar

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, computed_field

from .player import PlayerError, PlayerState
from .schemas import ChannelSummary, CommentPage, CommentThread, VideoDetails, VideoSummary
from .youtube_client import YouTubeClient, build_embed_url

S = TypeVar("S", bound=BaseModel)


class ViewModel(Generic[S]):
    """Holds one immutable UI state and the tasks that update it.

    ``close()`` cancels every outstanding task; after it no state write
    happens, so late results from a torn-down screen are dropped.
    """

    def __init__(self, state: S):
        self._state = state
        self._tasks: set[asyncio.Task] = set()
        self._listeners: list[Callable[[S], None]] = []
        self._closed = False

    @property
    def state(self) -> S:
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, callback: Callable[[S], None]) -> Callable[[], None]:
        self._listeners.append(callback)
        return lambda: self._listeners.remove(callback)

    def _set_state(self, state: S) -> None:
        if self._closed:
            return
        self._state = state
        for cb in list(self._listeners):
            cb(state)

    def _update(self, **changes: Any) -> None:
        self._set_state(self._state.model_copy(update=changes))

    def _launch(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task:
        if self._closed:
            coro.close()
            raise RuntimeError(f"{type(self).__name__} is closed")
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    @staticmethod
    def _cancel(task: Optional[asyncio.Task]) -> None:
        if task is not None and not task.done():
            task.cancel()

    async def close(self):
        self._closed = True
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._listeners.clear()


class HomeUiState(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_loading: bool = False
    is_loading_more: bool = False
    trending_videos: list[VideoSummary] = Field(default_factory=list)
    search_results: list[VideoSummary] = Field(default_factory=list)
    search_query: str = ""
    error: Optional[str] = None
    trending_page_token: Optional[str] = None
    search_page_token: Optional[str] = None
    is_search_mode: bool = False

    @computed_field
    @property
    def next_page_token(self) -> Optional[str]:
        return self.search_page_token if self.is_search_mode else self.trending_page_token

    @computed_field
    @property
    def videos(self) -> list[VideoSummary]:
        return self.search_results if self.is_search_mode else self.trending_videos


class HomeViewModel(ViewModel[HomeUiState]):
    """Trending feed and search results for the home list."""

    def __init__(self, client: YouTubeClient):
        super().__init__(HomeUiState())
        self.client = client
        self._feed_task: Optional[asyncio.Task] = None
        self._more_task: Optional[asyncio.Task] = None

    def _launch_feed(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task:
        # A new feed replaces whatever list was loading before it
        self._cancel(self._feed_task)
        self._cancel(self._more_task)
        self._feed_task = self._launch(coro)
        return self._feed_task

    def load_trending(self) -> asyncio.Task:
        self._update(is_loading=True, is_loading_more=False, error=None, is_search_mode=False)
        return self._launch_feed(self._load_trending())

    async def _load_trending(self):
        res = await self.client.browse_trending()
        res.fold(
            lambda page: self._update(
                is_loading=False,
                trending_videos=page.items,
                trending_page_token=page.next_page_token,
            ),
            lambda err: self._update(is_loading=False, error=err.message or "Failed to load videos"),
        )

    def search(self, query: str) -> Optional[asyncio.Task]:
        if not query.strip():
            return self.clear_search()
        self._update(
            is_loading=True,
            is_loading_more=False,
            error=None,
            search_query=query,
            is_search_mode=True,
        )
        return self._launch_feed(self._search(query))

    async def _search(self, query: str):
        res = await self.client.search(query)
        res.fold(
            lambda page: self._update(
                is_loading=False,
                search_results=page.items,
                search_page_token=page.next_page_token,
            ),
            lambda err: self._update(is_loading=False, error=err.message or "Search failed"),
        )

    def load_more(self) -> Optional[asyncio.Task]:
        st = self.state
        token = st.next_page_token
        if token is None or st.is_loading or st.is_loading_more:
            return None
        self._update(is_loading_more=True)
        self._more_task = self._launch(self._load_more(st.is_search_mode, st.search_query, token))
        return self._more_task

    async def _load_more(self, search_mode: bool, query: str, token: str):
        if search_mode:
            res = await self.client.search(query, token)
        else:
            res = await self.client.browse_trending(token)
        if res.is_failure:
            self._update(is_loading_more=False, error=res.error.message)
            return
        page = res.value
        if search_mode:
            self._update(
                is_loading_more=False,
                search_results=[*self.state.search_results, *page.items],
                search_page_token=page.next_page_token,
            )
        else:
            self._update(
                is_loading_more=False,
                trending_videos=[*self.state.trending_videos, *page.items],
                trending_page_token=page.next_page_token,
            )

    def clear_search(self) -> Optional[asyncio.Task]:
        """Leave search mode; reloads trending if that list was never filled."""
        if not self.state.is_search_mode:
            self._update(search_query="", search_results=[], search_page_token=None)
            return None
        self._cancel(self._feed_task)
        self._cancel(self._more_task)
        self._update(
            search_query="",
            search_results=[],
            search_page_token=None,
            is_search_mode=False,
            is_loading=False,
            is_loading_more=False,
            error=None,
        )
        if not self.state.trending_videos:
            return self.load_trending()
        return None

    def clear_error(self) -> None:
        self._update(error=None)

    def retry(self) -> Optional[asyncio.Task]:
        self.clear_error()
        if self.state.is_search_mode and self.state.search_query:
            return self.search(self.state.search_query)
        return self.load_trending()


class VideoPlayerUiState(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_loading: bool = False
    video_id: Optional[str] = None
    video_details: Optional[VideoDetails] = None
    comments: list[CommentThread] = Field(default_factory=list)
    comments_next_page_token: Optional[str] = None
    is_loading_comments: bool = False
    channel_details: Optional[ChannelSummary] = None
    embed_url: Optional[str] = None
    video_duration: Optional[str] = None
    player_state: PlayerState = PlayerState.UNSTARTED
    player_error: Optional[PlayerError] = None
    error: Optional[str] = None


class VideoPlayerViewModel(ViewModel[VideoPlayerUiState]):
    """Player screen: embed URL, details, channel and comments for one video.

    Details, channel and comments are best-effort. Their failures are
    logged and leave the field empty; only a bad id or a player error
    sets ``error``.
    """

    def __init__(self, client: YouTubeClient):
        super().__init__(VideoPlayerUiState())
        self.client = client
        self._load_task: Optional[asyncio.Task] = None
        self._comments_task: Optional[asyncio.Task] = None

    def load_video(self, video_id: str, autoplay: bool = False) -> Optional[asyncio.Task]:
        self._cancel(self._load_task)
        self._cancel(self._comments_task)
        if not video_id or not video_id.strip():
            # Nothing of the previous video survives a bad id
            self._set_state(VideoPlayerUiState(error="Invalid video"))
            return None
        # Fresh state for the new video; the embed URL is ready before any request
        self._set_state(
            VideoPlayerUiState(
                video_id=video_id,
                embed_url=build_embed_url(video_id, autoplay=autoplay),
                is_loading=True,
                is_loading_comments=True,
            )
        )
        self._load_task = self._launch(self._load_video(video_id))
        return self._load_task

    async def _load_video(self, video_id: str):
        # Independent: either may finish first
        await asyncio.gather(self._load_details(video_id), self._load_comments(video_id))

    async def _load_details(self, video_id: str):
        res = await self.client.get_video_details(video_id)
        if res.is_failure:
            logger.info("details for {} unavailable: {}", video_id, res.error)
        details = res.get_or_none()
        self._update(
            is_loading=False,
            video_details=details,
            video_duration=details.duration if details else None,
        )
        if details and details.channel_id:
            await self._load_channel(details.channel_id)

    async def _load_channel(self, channel_id: str):
        res = await self.client.get_channel_details(channel_id)
        if res.is_failure:
            logger.info("channel {} unavailable: {}", channel_id, res.error)
        self._update(channel_details=res.get_or_none())

    async def _load_comments(self, video_id: str):
        res = await self.client.get_video_comments(video_id)
        if res.is_failure:
            logger.info("comments for {} unavailable: {}", video_id, res.error)
        page = res.get_or_default(CommentPage())
        self._update(
            is_loading_comments=False,
            comments=page.items,
            comments_next_page_token=page.next_page_token,
        )

    def load_more_comments(self) -> Optional[asyncio.Task]:
        st = self.state
        if st.video_id is None or st.comments_next_page_token is None or st.is_loading_comments:
            return None
        self._update(is_loading_comments=True)
        self._comments_task = self._launch(
            self._load_more_comments(st.video_id, st.comments_next_page_token)
        )
        return self._comments_task

    async def _load_more_comments(self, video_id: str, token: str):
        res = await self.client.get_video_comments(video_id, token)
        if res.is_failure:
            logger.info("more comments for {} unavailable: {}", video_id, res.error)
            self._update(is_loading_comments=False)
            return
        self._update(
            is_loading_comments=False,
            comments=[*self.state.comments, *res.value.items],
            comments_next_page_token=res.value.next_page_token,
        )

    def on_player_state(self, code: int) -> None:
        state = PlayerState.from_code(code)
        if state == PlayerState.PLAYING and self.state.player_error is not None:
            # Playback recovered; drop the banner the player error raised
            self._update(player_state=state, player_error=None, error=None)
        else:
            self._update(player_state=state)

    def on_player_error(self, code: int) -> None:
        err = PlayerError.from_code(code)
        logger.warning("player error {} for {}", err.name, self.state.video_id)
        self._update(player_error=err, error=err.description)
