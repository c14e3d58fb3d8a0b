"""Port for durable storage of the tag cache."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from rusbooru.domain.model import UnifiedTag


class CacheLoadError(RuntimeError):
    """Raised when a stored cache record cannot be decoded."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"Cannot load cache record {name!r}: {reason}")
        self.name = name
        self.reason = reason


@dataclass(slots=True)
class CacheSnapshot:
    """Both generations plus the moment the active one was last reset."""

    active: list[UnifiedTag] = field(default_factory=list["UnifiedTag"])
    stale: list[UnifiedTag] = field(default_factory=list["UnifiedTag"])
    rotation_timestamp: int = 0


class TagCacheStore(Protocol):
    def load(self, name: str) -> CacheSnapshot | None:
        """Return the stored snapshot, ``None`` if absent; raise ``CacheLoadError`` if corrupt."""
        ...

    def save(self, name: str, snapshot: CacheSnapshot) -> None: ...


__all__ = ["CacheLoadError", "CacheSnapshot", "TagCacheStore"]
