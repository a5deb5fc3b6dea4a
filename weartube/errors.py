from __future__ import annotations

from typing import Optional

import httpx


class CatalogError(Exception):
    """Base class for failures carried by a catalog ``Result``."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TransportError(CatalogError):
    """The request never produced an HTTP response (DNS, connect, timeout)."""

    def __init__(self, cause: httpx.RequestError):
        super().__init__(f"Request error: {type(cause).__name__}: {cause}")
        self.cause = cause


class ApiError(CatalogError):
    """The API answered with a non-2xx status or an unreadable body."""

    def __init__(self, status_code: int, message: str, reason: Optional[str] = None):
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.reason = reason
        self.detail = message

    @property
    def is_comments_disabled(self) -> bool:
        return self.status_code == 403 and self.reason == "commentsDisabled"

    @classmethod
    def from_response(cls, resp: httpx.Response) -> "ApiError":
        # Try to extract structured YouTube error message
        message = None
        reason = None
        try:
            err = resp.json().get("error", {})
            errors = err.get("errors") or [{}]
            reason = errors[0].get("reason")
            message = err.get("message") or reason
        except (ValueError, AttributeError, LookupError, TypeError):
            pass
        return cls(resp.status_code, str(message or resp.reason_phrase or "HTTP error"), reason)


class FallbackError(CatalogError):
    """Both the trending request and its fallback search failed."""

    def __init__(self, original: CatalogError | str, fallback: CatalogError):
        super().__init__(
            f"Both trending and fallback failed: {original}; fallback: {fallback}"
        )
        self.original = original
        self.fallback = fallback
