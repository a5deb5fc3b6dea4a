from __future__ import annotations

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from .api.videos import router as videos_router
from .config import get_settings
from .logging import setup_logging
from .youtube_client import YouTubeClient

app = FastAPI(title="WearTube Catalog", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    settings = get_settings()
    setup_logging(settings.log_level)
    if not settings.youtube_api_key:
        logger.warning("YOUTUBE_API_KEY is not set; upstream calls will be rejected")
    # One connection pool for the whole process
    app.state.http = httpx.AsyncClient(timeout=settings.request_timeout)
    app.state.youtube = YouTubeClient(settings, http=app.state.http)


@app.on_event("shutdown")
async def shutdown_event():
    http = getattr(app.state, "http", None)
    if http is not None:
        await http.aclose()


@app.get("/healthz")
async def healthz():
    return {"status": "ok"}


app.include_router(videos_router)
