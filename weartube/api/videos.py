from __future__ import annotations

from typing import Optional

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query, Request

from ..errors import ApiError, CatalogError, TransportError
from ..result import Result
from ..schemas import ChannelSummary, CommentPage, EmbedOut, VideoOut, VideoPage
from ..youtube_client import YouTubeClient, build_embed_url

router = APIRouter(prefix="/api", tags=["videos"])


def get_client(request: Request) -> YouTubeClient:
    client = getattr(request.app.state, "youtube", None)
    if client is None:
        raise HTTPException(status_code=503, detail="YouTube client not initialised.")
    return client


def _upstream_error(error: CatalogError) -> HTTPException:
    detail: dict = {"message": error.message}
    if isinstance(error, ApiError):
        detail["upstream_status"] = error.status_code
    if isinstance(error, TransportError) and isinstance(error.cause, httpx.TimeoutException):
        return HTTPException(status_code=504, detail=detail)
    return HTTPException(status_code=502, detail=detail)


def _unwrap(res: Result):
    if res.is_failure:
        raise _upstream_error(res.error)
    return res.value


@router.get("/videos/search", response_model=VideoPage)
async def search(
    q: str = Query(..., min_length=1),
    page_token: Optional[str] = Query(None, description="nextPageToken from a previous page"),
    client: YouTubeClient = Depends(get_client),
):
    return _unwrap(await client.search(q, page_token))


@router.get("/videos/trending", response_model=VideoPage)
async def trending(
    page_token: Optional[str] = Query(None),
    client: YouTubeClient = Depends(get_client),
):
    return _unwrap(await client.browse_trending(page_token))


@router.get("/videos/{video_id}", response_model=VideoOut)
async def video_details(
    video_id: str,
    autoplay: bool = Query(False),
    client: YouTubeClient = Depends(get_client),
):
    details = _unwrap(await client.get_video_details(video_id))
    if details is None:
        raise HTTPException(status_code=404, detail="Video not found.")
    return VideoOut(
        **details.model_dump(exclude={"duration", "view_count_text", "like_count_text"}),
        embed_url=build_embed_url(details.id, autoplay=autoplay),
    )


@router.get("/videos/{video_id}/comments", response_model=CommentPage)
async def video_comments(
    video_id: str,
    page_token: Optional[str] = Query(None),
    client: YouTubeClient = Depends(get_client),
):
    return _unwrap(await client.get_video_comments(video_id, page_token))


@router.get("/videos/{video_id}/embed", response_model=EmbedOut)
async def video_embed(video_id: str, autoplay: bool = Query(False)):
    return EmbedOut(video_id=video_id, embed_url=build_embed_url(video_id, autoplay=autoplay))


@router.get("/channels/{channel_id}", response_model=ChannelSummary)
async def channel_details(
    channel_id: str,
    client: YouTubeClient = Depends(get_client),
):
    channel = _unwrap(await client.get_channel_details(channel_id))
    if channel is None:
        raise HTTPException(status_code=404, detail="Channel not found.")
    return channel
