#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Tables
======
A table is a run of lines starting with ``||`` (or ``|caption|`` in its place)
whose last line ends with ``||``.  Cells are separated by runs of ``||``;
a run of N pairs is a colspan hint of N.  Each cell may start with
``<param>`` groups:

  <-N>  <|N> <^|N> <v|N>   colspan / rowspan (with vertical alignment)
  <(> <:> <)>              horizontal alignment
  <nopad>                  no cell padding
  <#f00> <red> <#f00,#000> background (light,dark)
  <name=value>             table, row, column or cell styling (tablewidth, rowbgcolor, colcolor, bgcolor, ...)

Without an explicit alignment the framing spaces decide: `` x`` is right
aligned, `` x `` centered, ``x`` left.

Layout is computed on its own (:func:`layout_table`), so a rowspan pushing
the cells of later rows to the right can be checked without any HTML.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable

from namumark.render.context import ParseContext
from namumark.render.tools import css_safe, dark_split, escape_html, px_add


log = logging.getLogger(__name__)

_TABLE_START_RE = re.compile(r"\|\||\|[^|]+\|")
_CAPTION_RE = re.compile(r"\|([^|]+)\|")
_CELL_SPLIT_RE = re.compile(r"((?:\|\|)+)")
_PARAMS_RE = re.compile(r"(?:&lt;(?:(?!&lt;|&gt;).)+&gt;)*", re.DOTALL)
_PARAM_RE = re.compile(r"&lt;((?:(?!&lt;|&gt;).)+)&gt;")
_INDENT_RE = re.compile(r"\n +\|\|")

_SPAN_RE = re.compile(r"(-)([0-9]+)|(\^|v)?\|([0-9]+)")
_COLOR = r"(?:#[0-9a-fA-F]{3}|#[0-9a-fA-F]{6}|[a-zA-Z]+)"
_BARE_COLOR_RE = re.compile(rf"{_COLOR}(?:,{_COLOR})?")

ALIGN = {"(": "left", ":": "center", ")": "right"}
VALIGN = {"^": "top", "v": "bottom"}


# -----------------------------------------------------------------------------
# Layout
# -----------------------------------------------------------------------------

@dataclass
class CellParams:
    div: str = ""
    table: str = ""
    table_class: str = ""
    tr: str = ""
    td: str = ""
    col: str = ""
    colspan: int | None = None
    rowspan: int = 1
    align: str = ""
    nopad: bool = False
    literal: str = ""


@dataclass
class TableCell:
    row: int
    col: int
    colspan: int
    rowspan: int
    style: str
    nopad: bool
    data: str
    markup: str = ""


@dataclass
class TableLayout:
    caption: str = ""
    div_style: str = ""
    table_style: str = ""
    table_class: str = ""
    rows: list[list[TableCell]] = field(default_factory=list)
    row_styles: list[str] = field(default_factory=list)


def _styled(name: str, value: str, dark_mode: bool, params: CellParams) -> bool:
    """Apply one ``<name=value>`` parameter; False if the name is unknown."""
    color = dark_split(css_safe(value), dark_mode)
    size = px_add(css_safe(value))
    if name == "tablealign":
        if value == "right":
            params.div += "float:right;"
        elif value == "center":
            params.div += "margin:auto;"
            params.table += "margin:auto;"
    elif name == "tablewidth":
        params.div += f"width:{size};"
        params.table += "width:100%;"
    elif name == "tableheight":
        params.table += f"height:{size};"
    elif name == "tabletextalign":
        params.table += f"text-align:{css_safe(value)};"
    elif name in ("tablebgcolor", "tablecolor", "tablebordercolor"):
        prop = {"tablebgcolor": "background", "tablecolor": "color", "tablebordercolor": "border"}[name]
        params.table += f"{prop}:{'2px solid ' if prop == 'border' else ''}{color};"
    elif name == "tableclass":
        params.table_class = escape_html(value)
    elif name in ("rowbgcolor", "rowcolor"):
        params.tr += f"{'background' if name == 'rowbgcolor' else 'color'}:{color};"
    elif name in ("colbgcolor", "colcolor"):
        params.col += f"{'background' if name == 'colbgcolor' else 'color'}:{color};"
    elif name == "coltextalign":
        params.col += f"text-align:{css_safe(value)};"
    elif name in ("rowtextalign", "rowbordercolor"):
        params.tr += (f"text-align:{css_safe(value)};" if name == "rowtextalign" else f"border:2px solid {color};")
    elif name in ("width", "height"):
        params.td += f"{name}:{size};"
    elif name in ("bgcolor", "color"):
        params.td += f"{'background' if name == 'bgcolor' else 'color'}:{color};"
    elif name == "textalign":
        params.align = css_safe(value)
    else:
        return False
    return True


def parse_cell_params(run: str, params_text: str, body: str, dark_mode: bool = False) -> tuple[CellParams, str]:
    """Parse the ``<...>`` groups of one cell; returns the params and the cell body."""
    params = CellParams()
    for m in _PARAM_RE.finditer(params_text):
        raw = m.group(1)
        if "=" in raw:
            name, _, value = raw.partition("=")
            if _styled(name.replace(" ", "").lower(), value.strip(), dark_mode, params):
                continue
        elif raw.lower() == "nopad":
            params.nopad = True
            continue
        elif raw in ALIGN:
            params.align = ALIGN[raw]
            continue
        elif span := _SPAN_RE.fullmatch(raw):
            if span.group(1):
                params.colspan = int(span.group(2))
            else:
                params.rowspan = int(span.group(4))
                if span.group(3):
                    params.td += f"vertical-align:{VALIGN[span.group(3)]};"
            continue
        elif _BARE_COLOR_RE.fullmatch(raw):
            params.td += f"background:{dark_split(css_safe(raw), dark_mode)};"
            continue
        params.literal += m.group(0)

    body = body.lstrip("\n").rstrip("\n")
    if params.align:
        body = body[1:] if body.startswith(" ") else body
        body = body[:-1] if body.endswith(" ") else body
    elif body.startswith(" "):
        body = body[1:]
        if body.endswith(" "):
            body = body[:-1]
            params.align = "center"
        else:
            params.align = "right"
    elif body.endswith(" "):
        body = body[:-1]
    if params.align:
        params.td += f"text-align:{params.align};"

    if params.colspan is None:
        params.colspan = len(run) // 2
    return params, params.literal + body


def _cell_markup(layout: TableLayout, row: list[TableCell], run: str) -> str:
    if row:
        return run
    if layout.rows:
        return "\n" + run
    if layout.caption:
        return f"|{layout.caption}|" + run[2:]
    return run


def layout_table(text: str, dark_mode: bool = False) -> TableLayout:
    """Place every cell of one table source on the row/column grid."""
    layout = TableLayout()
    caption = _CAPTION_RE.match(text)
    if caption and not text.startswith("||"):
        layout.caption = caption.group(1)
        text = "||" + text[caption.end():]

    parts = _CELL_SPLIT_RE.split(text)
    col_styles: dict[int, str] = {}
    rowspan_left: dict[int, int] = {}
    blocked: set[int] = set()
    row: list[TableCell] = []
    row_style = ""
    col = 0
    row_break = False

    for run, content in zip(parts[1::2], parts[2::2]):
        params_text = _PARAMS_RE.match(content).group(0)
        body = content[len(params_text):]
        if not params_text and not body.strip("\n"):
            row_break = bool(row)
            continue

        if row_break:
            layout.rows.append(row)
            layout.row_styles.append(row_style)
            row, row_style, col = [], "", 0
            blocked = {c for c, left in rowspan_left.items() if left > 0}
            for c in blocked:
                rowspan_left[c] -= 1
            row_break = False

        params, data = parse_cell_params(run, params_text, body, dark_mode)
        layout.div_style += params.div
        layout.table_style += params.table
        layout.table_class = params.table_class or layout.table_class
        row_style += params.tr

        while col in blocked:
            col += 1
        if params.col:
            col_styles[col] = col_styles.get(col, "") + params.col
        if params.rowspan > 1:
            for c in range(col, col + params.colspan):
                rowspan_left[c] = params.rowspan - 1

        row.append(TableCell(
            row=len(layout.rows),
            col=col,
            colspan=params.colspan,
            rowspan=params.rowspan,
            style=col_styles.get(col, "") + params.td,
            nopad=params.nopad,
            data=data,
            markup=_cell_markup(layout, row, run) + params_text,
        ))
        col += params.colspan

    if row:
        layout.rows.append(row)
        layout.row_styles.append(row_style)
    return layout


# -----------------------------------------------------------------------------
# Output
# -----------------------------------------------------------------------------

def render_table(layout: TableLayout, tag: Callable[[str, str], str]) -> str:
    """Lay the table out as buffer text.

    Structural markup goes through *tag* (``tag(html, revert)`` → token) so
    that later passes only ever see the cell contents.
    """
    div_style = f' style="{layout.div_style}"' if layout.div_style else ""
    table_class = f" {layout.table_class}" if layout.table_class else ""
    table_style = f' style="{layout.table_style}"' if layout.table_style else ""
    caption = f"<caption>{layout.caption}</caption>" if layout.caption else ""

    out = []
    opening = f'<div class="table_safe"{div_style}><table class="wiki_table{table_class}"{table_style}>{caption}'
    for row, row_style in zip(layout.rows, layout.row_styles):
        opening += f'<tr style="{row_style}">' if row_style else "<tr>"
        for n, cell in enumerate(row):
            attrs = ""
            if cell.colspan > 1:
                attrs += f' colspan="{cell.colspan}"'
            if cell.rowspan > 1:
                attrs += f' rowspan="{cell.rowspan}"'
            if cell.nopad:
                attrs += ' class="wiki_table_nopad"'
            if cell.style:
                attrs += f' style="{cell.style}"'
            out.append(tag(f"{opening}<td{attrs}>", cell.markup))
            out.append(f"<back_br>\n{cell.data}\n<front_br>")
            opening = ""
            closing = "</td>" if n < len(row) - 1 else "</td></tr>"
            out.append(tag(closing, ""))
    out.append(tag(opening + "</table></div>", "||"))
    return "".join(out)


def _table_end(lines: list[str], start: int) -> int | None:
    """Index of the line closing the table that starts at *start*, if any."""
    last = None
    for j in range(start, len(lines)):
        if lines[j].endswith("||"):
            last = j
            if j + 1 >= len(lines) or not lines[j + 1].startswith("||"):
                return j
    return last


# -----------------------------------------------------------------------------
# Pass
# -----------------------------------------------------------------------------

def manage_table(ctx: ParseContext, text: str) -> str:
    text = _INDENT_RE.sub("\n||", text)
    lines = text.split("\n")

    def _tag(html: str, revert: str) -> str:
        return ctx.store.wrap(html, "", revert)

    out: list[str] = []
    i = 0
    while i < len(lines):
        if _TABLE_START_RE.match(lines[i]):
            end = _table_end(lines, i)
            if end is not None:
                source = "\n".join(lines[i:end + 1])
                layout = layout_table(source, ctx.dark_mode)
                log.debug("Table %d×%d in %r", len(layout.rows), max((len(r) for r in layout.rows), default=0), ctx.doc_name)
                out.append(f"<front_br>{render_table(layout, _tag)}<back_br>")
                i = end + 1
                continue
        out.append(lines[i])
        i += 1
    return "\n".join(out)


# -----------------------------------------------------------------------------
