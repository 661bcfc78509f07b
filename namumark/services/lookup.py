#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Content lookup
==============
The renderer's only view of page storage: "find stored content by exact
title", used for existence checks (pages, ``file:`` and ``category:``
titles) and for transclusion.  Storage itself lives outside this package;
anything with ``find`` and ``count`` will do.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import Mapping, Optional, Protocol


# -----------------------------------------------------------------------------

class ContentLookup(Protocol):

    def find(self, title: str) -> Optional[str]:
        """Return the stored content of *title*, or None if it does not exist."""
        ...

    def count(self) -> int:
        """Number of stored documents."""
        ...


# -----------------------------------------------------------------------------

class MemoryLookup:
    """Dictionary-backed lookup; titles are matched exactly."""

    def __init__(self, pages: Mapping[str, str] | None = None) -> None:
        self._pages: dict[str, str] = dict(pages or {})

    def find(self, title: str) -> Optional[str]:
        return self._pages.get(title)

    def count(self) -> int:
        return len(self._pages)


# -----------------------------------------------------------------------------

_shared_lookup: MemoryLookup | None = None


def get_lookup() -> ContentLookup:
    """Process-wide lookup used by the HTTP layer (a FastAPI dependency)."""
    global _shared_lookup
    if _shared_lookup is None:
        _shared_lookup = MemoryLookup()
    return _shared_lookup


# -----------------------------------------------------------------------------
