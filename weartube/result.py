from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from .errors import CatalogError

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a catalog call: a value or a ``CatalogError``, never both.

    A successful result may still hold ``None`` (e.g. a deleted video), so
    check ``is_success`` rather than the value.
    """

    value: Optional[T] = None
    error: Optional[CatalogError] = None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: CatalogError) -> "Result[T]":
        return cls(error=error)

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def is_failure(self) -> bool:
        return self.error is not None

    def get_or_none(self) -> Optional[T]:
        return self.value if self.error is None else None

    def get_or_default(self, default: T) -> T:
        if self.error is not None or self.value is None:
            return default
        return self.value

    def fold(
        self,
        on_success: Callable[[Optional[T]], R],
        on_failure: Callable[[CatalogError], R],
    ) -> R:
        if self.error is not None:
            return on_failure(self.error)
        return on_success(self.value)
