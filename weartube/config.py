from __future__ import annotations

import os
from functools import lru_cache
from pydantic import BaseModel, Field
from dotenv import load_dotenv

# Load environment variables from a local .env if present
load_dotenv()

DEFAULT_TRENDING_QUERIES = (
    "music 2024,gaming highlights,tech review,tutorial,"
    "entertainment,sports highlights,movie trailer,funny moments"
)


def _csv(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


class Settings(BaseModel):
    youtube_api_key: str = os.getenv("YOUTUBE_API_KEY", "")
    youtube_base_url: str = os.getenv(
        "YOUTUBE_BASE_URL", "https://www.googleapis.com/youtube/v3"
    )
    request_timeout: float = float(os.getenv("REQUEST_TIMEOUT", "15"))
    search_max_results: int = int(os.getenv("SEARCH_MAX_RESULTS", "15"))
    trending_max_results: int = int(os.getenv("TRENDING_MAX_RESULTS", "20"))
    comments_max_results: int = int(os.getenv("COMMENTS_MAX_RESULTS", "15"))
    region_code: str = os.getenv("REGION_CODE", "US")
    safe_search: str = os.getenv("SAFE_SEARCH", "moderate")
    # At least one topic; trending picks from these
    trending_queries: list[str] = Field(
        default=_csv(os.getenv("TRENDING_QUERIES", DEFAULT_TRENDING_QUERIES))
        or _csv(DEFAULT_TRENDING_QUERIES),
        min_length=1,
    )
    trending_fallback_query: str = os.getenv(
        "TRENDING_FALLBACK_QUERY", "latest popular videos"
    )
    app_host: str = os.getenv("APP_HOST", "0.0.0.0")
    app_port: int = int(os.getenv("APP_PORT", "8000"))
    log_level: str = os.getenv("LOG_LEVEL", "info")


@lru_cache
def get_settings() -> Settings:
    return Settings()
