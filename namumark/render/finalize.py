#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Finalize
========
Turns the buffer left by the passes into HTML: category bar, line breaks,
placeholder resolution, TOC placement and footnote tooltips.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import re

from namumark.render.context import ParseContext, TocEntry
from namumark.render.tools import strip_tags


_FRONT_BR_RE = re.compile(r"\n?<front_br>")
_BACK_BR_RE = re.compile(r"<back_br>\n?")
_ANCHOR_RE = re.compile(r"<a(?: [^<>]*)?>|</a>")
_HEADING_OPEN_RE = re.compile(r"<h[1-6] id=\"")
_FN_TARGET_RE = re.compile(r'<a fn_target="([^"]+)"')
_FN_TITLE_RE = re.compile(r'<footnote_title target="([^"]+)">(.*?)</footnote_title>', re.DOTALL)


# -----------------------------------------------------------------------------
# TOC
# -----------------------------------------------------------------------------

def build_toc(entries: list[TocEntry], id_prefix: str = "") -> str:
    """Nested-list TOC; the nesting depth is the number of dots in the path."""
    if not entries:
        return ""

    lines = [
        f'<div class="wiki_toc" id="{id_prefix}toc">',
        '<div class="wiki_toc_title">목차</div>',
        "<ul>",
    ]
    depth_stack: list[int] = []
    for entry in entries:
        depth = entry.path.count(".")
        while len(depth_stack) < depth:
            lines.append("<ul>")
            depth_stack.append(depth)
        while depth_stack and depth_stack[-1] > depth:
            lines.append("</ul>")
            depth_stack.pop()
        lines.append(
            f'<li><a href="#{id_prefix}s-{entry.path}">{entry.path}.</a> {entry.text}</li>'
        )
    while depth_stack:
        lines.append("</ul>")
        depth_stack.pop()
    lines.append("</ul></div>")
    return "".join(lines)


def _place_toc(ctx: ParseContext, text: str) -> str:
    toc_html = build_toc(ctx.toc, ctx.id_prefix) if ctx.config.toc_mode != "off" else ""
    explicit = "<toc_need_part>" in text
    no_auto = "<toc_no_auto>" in text
    text = text.replace("<toc_need_part>", toc_html).replace("<toc_no_auto>", "")

    if toc_html and not explicit and not no_auto and not ctx.nested and ctx.config.toc_mode == "normal":
        m = _HEADING_OPEN_RE.search(text)
        if m:
            text = text[:m.start()] + toc_html + text[m.start():]
    return text


# -----------------------------------------------------------------------------
# Fix-ups
# -----------------------------------------------------------------------------

def fix_nested_anchors(text: str) -> str:
    """Keep only the outermost of nested ``<a>`` elements."""
    depth = 0

    def _anchor(m: re.Match) -> str:
        nonlocal depth
        if m.group(0) == "</a>":
            if depth == 0:
                return ""
            depth -= 1
            return m.group(0) if depth == 0 else ""
        depth += 1
        return m.group(0) if depth == 1 else ""

    return _ANCHOR_RE.sub(_anchor, text)


def _footnote_titles(text: str) -> str:
    titles = {m.group(1): strip_tags(m.group(2)) for m in _FN_TITLE_RE.finditer(text)}
    text = _FN_TARGET_RE.sub(lambda m: f'<a title="{titles.get(m.group(1), "")}"', text)
    return _FN_TITLE_RE.sub(r'<span class="wiki_footnote_text">\2</span>', text)


def _category_bar(ctx: ParseContext, text: str) -> str:
    if ctx.nested or not ctx.category_links:
        return text
    bar = '<div class="wiki_category">분류 : ' + " | ".join(ctx.category_links) + "</div>"
    if ctx.config.category_position == "top":
        return bar + '<hr class="main_hr">' + text
    if "<footnote_category>" in text:
        return text.replace("<footnote_category>", "<hr>" + bar, 1)
    return text + "<hr>" + bar


# -----------------------------------------------------------------------------

def finalize(ctx: ParseContext, text: str) -> str:
    text = _category_bar(ctx, text)
    text = text.replace("<footnote_category>", "")

    text = _FRONT_BR_RE.sub("", text)
    text = _BACK_BR_RE.sub("", text)
    text = text.replace("\n", "<br>")

    text = ctx.store.resolve(text)
    text = fix_nested_anchors(text)

    ctx.toc = [TocEntry(e.path, strip_tags(ctx.store.resolve(e.text))) for e in ctx.toc]
    for note in ctx.all_footnotes.values():
        note.body = ctx.store.resolve(note.body)

    text = _place_toc(ctx, text)
    text = _footnote_titles(text)

    if ctx.config.font_size and not ctx.nested:
        text = f'<div class="wiki_body" style="font-size: {ctx.config.font_size}px;">{text}</div>'
    return text


# -----------------------------------------------------------------------------
