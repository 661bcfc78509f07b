#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Parse context
=============
Everything one parse accumulates besides the text buffer itself: the
placeholder store, the client script, backlinks, categories, footnotes, the
TOC and the id counters.  Every pass receives the context explicitly; a
sub-render gets a fresh context whose side data is folded back into its
parent when it returns.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from namumark.render.storage import Entry, PlaceholderStore
from namumark.schemas import RenderConfig
from namumark.services.lookup import ContentLookup, MemoryLookup


log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Side-data records
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Backlink:
    source: str
    target: str
    relation: str       # "" (plain), "no", "file", "cat", "include"
    detail: str = ""


@dataclass
class Footnote:
    name: str
    refs: list[int]
    body: str


@dataclass(frozen=True)
class TocEntry:
    path: str
    text: str


@dataclass(frozen=True)
class IncludeRecord:
    element_id: str
    title: str


@dataclass
class RenderData:
    backlinks: list[Backlink] = field(default_factory=list)
    backlink_map: dict[str, set[str]] = field(default_factory=dict)
    footnotes: dict[str, Footnote] = field(default_factory=dict)
    categories: list[str] = field(default_factory=list)
    placeholders: dict[str, Entry] = field(default_factory=dict)
    placeholder_count: int = 0
    link_count: int = 0
    includes: list[IncludeRecord] = field(default_factory=list)
    toc: list[TocEntry] = field(default_factory=list)


@dataclass
class RenderResult:
    html: str
    js: str
    data: RenderData


# -----------------------------------------------------------------------------
# Client script
# -----------------------------------------------------------------------------

class ScriptBuffer:
    """Ordered script fragments; a fragment with a *once* key is kept only once."""

    def __init__(self) -> None:
        self._items: list[tuple[str, Optional[str]]] = []
        self._once: set[str] = set()

    def add(self, code: str, once: str | None = None) -> None:
        if once is not None:
            if once in self._once:
                return
            self._once.add(once)
        self._items.append((code, once))

    def merge(self, other: "ScriptBuffer") -> None:
        for code, once in other._items:
            self.add(code, once)

    def render(self) -> str:
        return "".join(code if code.endswith("\n") else code + "\n" for code, _ in self._items)


# -----------------------------------------------------------------------------
# Parse context
# -----------------------------------------------------------------------------

class ParseContext:

    def __init__(
        self,
        doc_name: str = "",
        config: RenderConfig | None = None,
        lookup: ContentLookup | None = None,
        now: datetime | None = None,
        id_prefix: str = "",
        nested: bool = False,
        in_include: bool = False,
    ) -> None:
        self.doc_name = doc_name
        self.config = config or RenderConfig()
        self.lookup: ContentLookup = lookup if lookup is not None else MemoryLookup()
        self.now = now or datetime.now()
        self.id_prefix = id_prefix
        self.nested = nested
        self.in_include = in_include

        self.store = PlaceholderStore()
        self.script = ScriptBuffer()

        self.backlinks: list[Backlink] = []
        self.categories: list[str] = []
        self.category_links: list[str] = []
        self.footnotes: dict[str, Footnote] = {}
        self.all_footnotes: dict[str, Footnote] = {}
        self.footnote_count = 0
        self.toc: list[TocEntry] = []
        self.includes: list[IncludeRecord] = []
        self.link_count = 0
        self._counters: dict[str, int] = {}

    # ── helpers ───────────────────────────────────────────────────────────

    @property
    def dark_mode(self) -> bool:
        return self.config.dark_mode

    def next_id(self, kind: str) -> int:
        """Per-document running number for element ids of *kind* (0-based)."""
        n = self._counters.get(kind, 0)
        self._counters[kind] = n + 1
        return n

    def exists(self, title: str) -> bool:
        return self.lookup.find(title) is not None

    def add_backlink(self, target: str, relation: str = "", detail: str = "") -> None:
        link = Backlink(self.doc_name, target, relation, detail)
        if link not in self.backlinks:
            self.backlinks.append(link)

    def add_category(self, name: str, link_html: str) -> bool:
        """Record a category once; returns False if it was already known."""
        if name in self.categories:
            return False
        self.categories.append(name)
        self.category_links.append(link_html)
        return True

    def backlink_map(self) -> dict[str, set[str]]:
        result: dict[str, set[str]] = {}
        for link in self.backlinks:
            result.setdefault(link.target, set()).add(link.relation)
        return result

    # ── sub-render ────────────────────────────────────────────────────────

    def child(self, kind: str, include: bool = False) -> "ParseContext":
        n = self.next_id(f"sub_{kind}")
        return ParseContext(
            doc_name=self.doc_name,
            config=self.config,
            lookup=self.lookup,
            now=self.now,
            id_prefix=f"{self.id_prefix}{kind}_{n}_",
            nested=True,
            in_include=self.in_include or include,
        )

    def sub_render(self, body: str, kind: str, include: bool = False) -> str:
        """Render *body* as its own document and fold its side data into this one."""
        from namumark.render.pipeline import run_pipeline

        child = self.child(kind, include=include)
        log.debug("Sub-render %s (%d chars) under %r", child.id_prefix, len(body), self.doc_name)
        html = run_pipeline(child, body)
        self.merge(child)
        return html

    def merge(self, child: "ParseContext") -> None:
        for link in child.backlinks:
            if link not in self.backlinks:
                self.backlinks.append(link)
        for name, link_html in zip(child.categories, child.category_links):
            self.add_category(name, link_html)
        for name, note in child.all_footnotes.items():
            self._merge_footnote(name, note)
        self.store.merge(child.store)
        self.script.merge(child.script)
        self.includes.extend(child.includes)
        self.link_count += child.link_count

    def _merge_footnote(self, key: str, note: Footnote) -> None:
        known = self.all_footnotes.get(key)
        if known is None:
            self.all_footnotes[key] = Footnote(note.name, list(note.refs), note.body)
        else:
            known.refs.extend(note.refs)

    def flush_footnotes(self) -> list[Footnote]:
        """Move the pending registry into the document-wide map."""
        pending = list(self.footnotes.values())
        for note in pending:
            self._merge_footnote(f"{self.id_prefix}{note.name}", note)
        self.footnotes = {}
        return pending

    # ── result ────────────────────────────────────────────────────────────

    def result(self, html: str) -> RenderResult:
        data = RenderData(
            backlinks=list(self.backlinks),
            backlink_map=self.backlink_map(),
            footnotes=dict(self.all_footnotes),
            categories=list(self.categories),
            placeholders=self.store.entries,
            placeholder_count=self.store.counter,
            link_count=self.link_count,
            includes=list(self.includes),
            toc=list(self.toc),
        )
        return RenderResult(html=html, js=self.script.render(), data=data)


# -----------------------------------------------------------------------------
