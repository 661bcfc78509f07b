#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Headings and table of contents
==============================
``= Title =`` … ``====== Title ======``; ``=# Title #=`` starts folded.
The opening and closing runs must match, otherwise the line stays text.

Section numbers come from a six-level counter stack.  Leading levels that
are zero for every heading are dropped, so a document using only ``==``
is numbered 1, 2, 3 rather than 0.1, 0.2, 0.3.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import re

from namumark.render.context import ParseContext, TocEntry
from namumark.render.tools import js_string, url_pas


_HEADING_LINE_RE = re.compile(r"(={1,6})(?!=)(#?) ?(.+)")

FOLD_SCRIPT = (
    "function wikiHeadingFolding(id, toggle) {\n"
    "    var el = document.getElementById(id);\n"
    "    if (!el) { return; }\n"
    "    var open = el.style.display !== 'none';\n"
    "    el.style.display = open ? 'none' : 'block';\n"
    "    toggle.innerHTML = open ? '⊕' : '⊖';\n"
    "}\n"
)


# -----------------------------------------------------------------------------

def parse_heading(line: str) -> tuple[int, bool, str] | None:
    """``(level, folded, title)`` for a heading line, else None."""
    m = _HEADING_LINE_RE.fullmatch(line)
    if not m:
        return None
    run, folded, rest = m.group(1), m.group(2) == "#", m.group(3)
    closing = ("#" if folded else "") + run
    if not rest.endswith(closing):
        return None
    title = rest[:-len(closing)]
    if title.endswith("="):
        return None
    if title.endswith(" "):
        title = title[:-1]
    title = title.strip()
    if not title:
        return None
    return len(run), folded, title


def section_paths(levels: list[int]) -> list[str]:
    """Dotted section numbers for a sequence of heading levels."""
    stack = [0] * 6
    rows = []
    for level in levels:
        stack[level - 1] += 1
        for k in range(level, 6):
            stack[k] = 0
        rows.append(list(stack))

    skip = 0
    while skip < 5 and rows and all(row[skip] == 0 for row in rows):
        skip += 1
    return [re.sub(r"(\.0)+$", "", ".".join(str(n) for n in row[skip:])) for row in rows]


# -----------------------------------------------------------------------------

def manage_heading(ctx: ParseContext, text: str) -> str:
    lines = text.split("\n")
    found = []
    for i, line in enumerate(lines):
        parsed = parse_heading(line)
        if parsed:
            found.append((i, *parsed))
    if not found:
        return text

    p = ctx.id_prefix
    paths = section_paths([level for _, level, _, _ in found])
    for count, ((i, level, folded, title), path) in enumerate(zip(found, paths), start=1):
        ctx.toc.append(TocEntry(path, title))

        edit = ""
        if ctx.config.heading_edit_links and not ctx.nested:
            edit = (
                f'<a class="wiki_heading_edit" id="{p}edit_load_{count}" '
                f'href="{ctx.config.edit_section_path}{count}/{url_pas(ctx.doc_name)}">✎</a> '
            )
        section = f"{p}heading_{count}"
        fold = (
            f"<a class=\"wiki_heading_fold\" href=\"javascript:void(0);\" "
            f"onclick='wikiHeadingFolding({js_string(section)}, this);'>{'⊕' if folded else '⊖'}</a>"
        )
        ctx.script.add(FOLD_SCRIPT, once="heading_folding")

        open_html = (
            ("</div>" if count > 1 else "")
            + f'<h{level} id="{p}s-{path}"><a class="wiki_heading_num" href="#{p}toc">{path}.</a> '
        )
        close_html = (
            f' <span class="wiki_heading_tools">{edit}{fold}</span></h{level}>'
            f'<div id="{section}" class="wiki_heading_section" style="display: {"none" if folded else "block"};">'
        )
        token = ctx.store.wrap(open_html, close_html, lines[i], inner=title)
        lines[i] = f"<front_br>{token}<back_br>"

    text = "\n".join(lines)
    if "<footnote_category>" in text:
        return text.replace("<footnote_category>", "</div><footnote_category>", 1)
    return text + "</div>"


# -----------------------------------------------------------------------------
