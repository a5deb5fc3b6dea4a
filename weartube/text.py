from __future__ import annotations

import html
import re
import unicodedata
from typing import Optional, Union

_DURATION_RE = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")
_BREAK_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]+>")
_NON_ASCII_RE = re.compile(r"[^\x00-\x7f]")
_WS_RE = re.compile(r"\s+")


def parse_duration(value: Optional[str]) -> str:
    """Format an ISO 8601 duration (``PT4M13S``) as ``4:13`` or ``1:02:03``.

    Anything that is not a ``PT[nH][nM][nS]`` string renders as ``0:00``.
    """
    match = _DURATION_RE.fullmatch(value or "")
    if not match:
        return "0:00"
    hours, minutes, seconds = (int(g or 0) for g in match.groups())
    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def sanitize_comment_text(text: Optional[str]) -> str:
    """Reduce a comment's ``textDisplay`` HTML to a single line of plain ASCII."""
    if not text:
        return ""
    out = _BREAK_RE.sub(" ", text)
    out = _TAG_RE.sub("", out)
    out = html.unescape(out)
    # Control and format characters (category C*), keeping whitespace for the collapse below
    out = "".join(
        ch for ch in out if ch.isspace() or not unicodedata.category(ch).startswith("C")
    )
    out = _NON_ASCII_RE.sub("", out)
    return _WS_RE.sub(" ", out).strip()


def format_count(value: Union[int, str, None], noun: str = "views") -> str:
    """Compact count for small screens: ``1500000`` -> ``1M views``."""
    if value is None:
        return ""
    try:
        count = int(value)
    except (TypeError, ValueError):
        return str(value)
    if count >= 1_000_000:
        return f"{count // 1_000_000}M {noun}"
    if count >= 1_000:
        return f"{count // 1_000}K {noun}"
    return f"{count} {noun}"
