"""Codes reported back by the embedded IFrame player.

See https://developers.google.com/youtube/iframe_api_reference#Events
"""

from __future__ import annotations

from enum import IntEnum


class PlayerState(IntEnum):
    UNSTARTED = -1
    ENDED = 0
    PLAYING = 1
    PAUSED = 2
    BUFFERING = 3
    VIDEO_CUED = 5

    @classmethod
    def from_code(cls, code: int) -> "PlayerState":
        try:
            return cls(code)
        except ValueError:
            return cls.UNSTARTED


class PlayerError(IntEnum):
    INVALID_PARAMETER = 2
    HTML5_ERROR = 5
    VIDEO_NOT_FOUND = 100
    NOT_ALLOWED_EMBEDDED = 101
    NOT_ALLOWED_EMBEDDED_ALT = 150
    UNKNOWN = -1

    @classmethod
    def from_code(cls, code: int) -> "PlayerError":
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN

    @property
    def description(self) -> str:
        return _ERROR_MESSAGES[self]


_ERROR_MESSAGES = {
    PlayerError.INVALID_PARAMETER: "Invalid video id",
    PlayerError.HTML5_ERROR: "This video can't be played here",
    PlayerError.VIDEO_NOT_FOUND: "Video not found or private",
    PlayerError.NOT_ALLOWED_EMBEDDED: "The owner doesn't allow playback outside YouTube",
    PlayerError.NOT_ALLOWED_EMBEDDED_ALT: "The owner doesn't allow playback outside YouTube",
    PlayerError.UNKNOWN: "Playback failed",
}
