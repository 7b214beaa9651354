"""Entity-keyed store of generated tables of contents."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .toc import TableOfContents


class TocCache:
    """Maps ``type:id`` entity keys to the table of contents covering them.

    One cache belongs to one generator. Its lifetime is whatever the owner
    chooses (a request, a CLI run); call clear() between logically
    independent generations. The cache is not thread-safe.
    """

    def __init__(self) -> None:
        self._entries: dict[str, TableOfContents] = {}

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> TableOfContents | None:
        """Return the cached table of contents for a key, if any."""
        return self._entries.get(key)

    def set(self, key: str, toc: TableOfContents) -> None:
        """Store a table of contents under a key, replacing any previous entry."""
        self._entries[key] = toc

    def keys(self) -> list[str]:
        """Cached keys in insertion order."""
        return list(self._entries)

    def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()
