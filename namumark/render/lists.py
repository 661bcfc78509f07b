#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Quotes and lists
================
``> text`` lines become a blockquote whose body is rendered as a document.

`` * item`` lines become an unordered list; the number of leading spaces is
the depth.  ``1.``, ``a.``, ``A.``, ``i.`` and ``I.`` start ordered items
(at least two consecutive lines), ``1.#5`` restarts the count at 5.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import re

from namumark.render.context import ParseContext
from namumark.render.tools import unescape_html


_QUOTE_RE = re.compile(r"((?:\n&gt; ?[^\n]*)+)(?=\n)")
_QUOTE_LINE_RE = re.compile(r"\n&gt; ?([^\n]*)")

_UL_RE = re.compile(r"((?:\n *\* ?[^\n]*)+)(?=\n)")
_UL_LINE_RE = re.compile(r"\n( *)\* ?([^\n]*)")

_OL_ITEM = r"\n( *)(1|a|A|i|I)\.(?:#([0-9]+))?(?= |\n|$) ?([^\n]*)"
_OL_RE = re.compile(r"((?:\n *(?:1|a|A|i|I)\.(?:#[0-9]+)?(?= |\n|$) ?[^\n]*){2,})(?=\n)")
_OL_LINE_RE = re.compile(_OL_ITEM)

UL_GLYPHS = {1: "unset", 2: "circle", 3: "square"}
INDENT_PX = 20


# -----------------------------------------------------------------------------
# Numbering
# -----------------------------------------------------------------------------

def to_alpha(n: int, upper: bool = False) -> str:
    """Bijective base-26: 1 → a, 26 → z, 27 → aa."""
    out = ""
    while n > 0:
        n, rem = divmod(n - 1, 26)
        out = chr(ord("a") + rem) + out
    return out.upper() if upper else out


_ROMAN = (
    (1000, "m"), (900, "cm"), (500, "d"), (400, "cd"),
    (100, "c"), (90, "xc"), (50, "l"), (40, "xl"),
    (10, "x"), (9, "ix"), (5, "v"), (4, "iv"), (1, "i"),
)


def to_roman(n: int, upper: bool = False) -> str:
    out = ""
    for value, digits in _ROMAN:
        while n >= value:
            out += digits
            n -= value
    return out.upper() if upper else out


def number_label(kind: str, n: int) -> str:
    if kind in ("a", "A"):
        return to_alpha(n, upper=kind == "A")
    if kind in ("i", "I"):
        return to_roman(n, upper=kind == "I")
    return str(n)


class ListNumbering:
    """Per-type, per-depth counters for ordered list items.

    Going up a level drops the counters below it; switching the numbering
    type at some depth drops every other type's counters from that depth
    down.
    """

    def __init__(self, full_path: bool = False) -> None:
        self.full_path = full_path
        self.active: str | None = None
        self.counters: dict[str, list[int]] = {}

    def next(self, kind: str, depth: int, start: int | None = None) -> str:
        if kind != self.active:
            for other, stack in self.counters.items():
                if other != kind:
                    del stack[depth - 1:]
            self.active = kind

        stack = self.counters.setdefault(kind, [])
        del stack[depth:]
        while len(stack) < depth:
            stack.append(0)
        stack[depth - 1] = start if start is not None else stack[depth - 1] + 1

        if kind == "1" and self.full_path:
            return "-".join(str(n) for n in stack if n != 0)
        return number_label(kind, stack[depth - 1])


# -----------------------------------------------------------------------------
# Passes
# -----------------------------------------------------------------------------

def _depth(spaces: str) -> int:
    return max(1, len(spaces))


def manage_quote(ctx: ParseContext, text: str) -> str:

    def _quote(m: re.Match) -> str:
        body = "\n".join(line.group(1) for line in _QUOTE_LINE_RE.finditer(m.group(1)))
        source = unescape_html(ctx.store.revert(body))
        html = ctx.sub_render(source, "quote")
        token = ctx.store.wrap(f'<blockquote class="wiki_quote">{html}</blockquote>', "", m.group(1).lstrip("\n"))
        return f"\n<front_br>{token}<back_br>"

    return _QUOTE_RE.sub(_quote, text)


def manage_unordered(ctx: ParseContext, text: str) -> str:

    def _list(m: re.Match) -> str:
        out = [ctx.store.wrap('<ul class="wiki_ul">', "", "")]
        for line in _UL_LINE_RE.finditer(m.group(1)):
            depth = _depth(line.group(1))
            glyph = UL_GLYPHS.get(depth, "square")
            style = f"margin-left: {INDENT_PX * depth}px; list-style: {glyph};"
            out.append(ctx.store.wrap(f'<li style="{style}">', "", f"\n{line.group(1)}* "))
            out.append(line.group(2))
            out.append(ctx.store.wrap("</li>", "", ""))
        out.append(ctx.store.wrap("</ul>", "", ""))
        return "\n<front_br>" + "".join(out) + "<back_br>"

    return _UL_RE.sub(_list, text)


def manage_ordered(ctx: ParseContext, text: str) -> str:

    def _list(m: re.Match) -> str:
        numbering = ListNumbering(full_path=ctx.config.list_numbering == "full")
        out = [ctx.store.wrap('<ol class="wiki_ol">', "", "")]
        for line in _OL_LINE_RE.finditer(m.group(1)):
            spaces, kind, start, data = line.groups()
            depth = _depth(spaces)
            label = numbering.next(kind, depth, int(start) if start else None)
            style = f"margin-left: {INDENT_PX * depth}px; list-style: none;"
            revert = f"\n{spaces}{kind}." + (f"#{start}" if start else "") + " "
            out.append(ctx.store.wrap(
                f'<li style="{style}"><span class="wiki_ol_num">{label}.</span> ', "", revert
            ))
            out.append(data)
            out.append(ctx.store.wrap("</li>", "", ""))
        out.append(ctx.store.wrap("</ol>", "", ""))
        return "\n<front_br>" + "".join(out) + "<back_br>"

    return _OL_RE.sub(_list, text)


def manage_list(ctx: ParseContext, text: str) -> str:
    text = manage_quote(ctx, text)
    text = manage_unordered(ctx, text)
    return manage_ordered(ctx, text)


# -----------------------------------------------------------------------------
