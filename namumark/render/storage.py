#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Placeholder store
=================
Protected fragments for the render passes.

A pass that has finished with a piece of markup swaps it for a token so that
later passes cannot match it again:

  - render placeholder : ``<render_{ns}_{n}>inner</render_{ns}_{n}>``,
                         resolves to ``open + inner + close``, reverts to the
                         markup it replaced.
  - slash placeholder  : ``<slash_{ns}_{n}>``, a backslash-escaped
                         character; resolves to the character, reverts to
                         ``\\`` + character.

The buffer is HTML-escaped before any pass runs, so a literal ``<`` can only
come from a pass.  ``ns`` is a random tag per store; every top-level parse
and every sub-render owns its own store, so merged tables never collide.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import re
import secrets
from dataclasses import dataclass
from typing import Literal, Union


log = logging.getLogger(__name__)

Scope = Literal["all", "render", "slash"]

_NAME = r"[0-9a-f]+_[0-9]+"

_RESOLVE_RE: dict[str, re.Pattern] = {
    "all":    re.compile(rf"<(/?(?:render|slash)_{_NAME})>"),
    "render": re.compile(rf"<(/?render_{_NAME})>"),
    "slash":  re.compile(rf"<(slash_{_NAME})>"),
}

_SLASH = rf"<(slash_{_NAME})>"
_PAIR = rf"<(render_{_NAME})>(?:(?!</?render_{_NAME}>).)*</\1>"
# same pair, numbered after the slash group
_PAIR_AFTER_SLASH = rf"<(render_{_NAME})>(?:(?!</?render_{_NAME}>).)*</\2>"

_REVERT_RE: dict[str, re.Pattern] = {
    "all":    re.compile(rf"{_SLASH}|{_PAIR_AFTER_SLASH}", re.DOTALL),
    "render": re.compile(_PAIR, re.DOTALL),
    "slash":  re.compile(_SLASH),
}

_BR_MARKER_RE = re.compile(r"<(?:front|back)_br>")

ANY_TOKEN_RE = re.compile(rf"</?(?:render|slash)_{_NAME}>")


# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class RenderEntry:
    open: str
    close: str
    revert: str


@dataclass(frozen=True)
class SlashEntry:
    literal: str


Entry = Union[RenderEntry, SlashEntry]


# -----------------------------------------------------------------------------

class PlaceholderStore:

    def __init__(self, namespace: str | None = None) -> None:
        self.namespace = namespace or secrets.token_hex(4)
        self.counter = 0
        self._entries: dict[str, Entry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> dict[str, Entry]:
        return dict(self._entries)

    # ── creation ──────────────────────────────────────────────────────────

    def _next_name(self, kind: str) -> str:
        self.counter += 1
        return f"{kind}_{self.namespace}_{self.counter}"

    def store_render(self, open_html: str = "", close_html: str = "", revert: str = "") -> str:
        name = self._next_name("render")
        self._entries[name] = RenderEntry(open_html, close_html, revert)
        return name

    def store_slash(self, literal: str) -> str:
        name = self._next_name("slash")
        self._entries[name] = SlashEntry(literal)
        return name

    def wrap(self, open_html: str = "", close_html: str = "", revert: str = "", inner: str = "") -> str:
        """Store a render placeholder and return its token pair around *inner*."""
        name = self.store_render(open_html, close_html, revert)
        return f"<{name}>{inner}</{name}>"

    def slash_literal(self, name: str) -> str | None:
        entry = self._entries.get(name)
        if isinstance(entry, SlashEntry):
            return entry.literal
        return None

    def merge(self, other: "PlaceholderStore") -> None:
        """Adopt the entries of a sub-render's store (their names are already unique)."""
        self._entries.update(other._entries)

    # ── resolution ────────────────────────────────────────────────────────

    def _budget(self) -> int:
        return len(self._entries) * 3 + 1

    def _resolved(self, m: re.Match) -> str:
        name = m.group(1)
        closing = name.startswith("/")
        entry = self._entries.get(name.lstrip("/"))
        if entry is None:
            log.warning("Unknown placeholder token %s dropped", m.group(0))
            return ""
        if isinstance(entry, SlashEntry):
            return entry.literal
        return entry.close if closing else entry.open

    def resolve(self, text: str, scope: Scope = "all") -> str:
        """Replace every token of *scope* with its HTML until none remain."""
        pattern = _RESOLVE_RE[scope]
        budget = self._budget()
        while pattern.search(text):
            if budget < 0:
                log.error("Placeholder resolve did not converge (scope=%s)", scope)
                break
            text = pattern.sub(self._resolved, text)
            budget -= 1
        return text

    def _reverted(self, m: re.Match) -> str:
        name = next(g for g in m.groups() if g)
        entry = self._entries.get(name)
        if entry is None:
            log.warning("Unknown placeholder token %s dropped", name)
            return ""
        if isinstance(entry, SlashEntry):
            return "\\" + entry.literal
        return entry.revert

    def revert(self, text: str, scope: Scope = "all") -> str:
        """Turn tokens of *scope* back into the (escaped) markup they replaced."""
        pattern = _REVERT_RE[scope]
        budget = self._budget()
        while pattern.search(text):
            if budget < 0:
                log.error("Placeholder revert did not converge (scope=%s)", scope)
                break
            text = pattern.sub(self._reverted, text)
            budget -= 1
        return _BR_MARKER_RE.sub("", text)


# -----------------------------------------------------------------------------
