#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Footnotes
=========
``[* body]`` is an anonymous note, ``[*name body]`` a named one; a later
``[*name]`` without a body refers back to it.  ``[각주]`` / ``[footnote]``
prints the notes collected so far, and whatever is left at the end of the
document is printed there.

Reference numbers count references only, in document order.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import re

from namumark.render.context import Footnote, ParseContext
from namumark.render.tools import js_string


log = logging.getLogger(__name__)

_FOOTNOTE_RE = re.compile(
    r"\[\*((?:(?!\[\*|\]| ).)+)?(?: ((?:(?!\[\*|\]).)+))?\]|\[(각주|footnote)\]",
    re.IGNORECASE,
)

SCRIPTS = {
    "expand": (
        "function wikiFootnoteExpand(id) {\n"
        "    var el = document.getElementById(id);\n"
        "    if (el) { el.style.display = el.style.display === 'none' ? 'inline' : 'none'; }\n"
        "}\n"
    ),
    "popup": (
        "function wikiFootnotePopup(id) {\n"
        "    var el = document.getElementById(id);\n"
        "    if (el) { window.alert(el.parentNode.innerText); }\n"
        "}\n"
    ),
}


# -----------------------------------------------------------------------------

def _reference(ctx: ParseContext, m: re.Match) -> str:
    ctx.footnote_count += 1
    n = ctx.footnote_count
    name, body = m.group(1), m.group(2)

    note = ctx.footnotes.get(name) if name else None
    if note is None:
        note = Footnote(name=name or str(n), refs=[n], body=body or "")
        ctx.footnotes[note.name] = note
    else:
        note.refs.append(n)

    p = ctx.id_prefix
    first = note.refs[0]
    label = f"({name} ({n}))" if name else f"({n})"
    mode = ctx.config.footnote_mode

    if mode == "expand":
        ctx.script.add(SCRIPTS["expand"], once="footnote_expand")
        target = f"{p}fnx_{n}"
        html = (
            f'<sup><a id="{p}rfn_{n}" href="javascript:void(0);" '
            f"onclick='wikiFootnoteExpand({js_string(target)});'>{label}</a></sup>"
            f'<span class="wiki_footnote_expand" id="{target}" style="display: none;">{note.body}</span>'
        )
    elif mode == "popup":
        ctx.script.add(SCRIPTS["popup"], once="footnote_popup")
        target = f"{p}fn_{first}"
        html = (
            f'<sup><a id="{p}rfn_{n}" href="javascript:void(0);" '
            f"onclick='wikiFootnotePopup({js_string(target)});'>{label}</a></sup>"
        )
    elif mode == "popover":
        html = (
            f'<sup class="wiki_popover"><a id="{p}rfn_{n}" href="#{p}fn_{first}">{label}</a>'
            f'<span class="wiki_popover_body">{note.body}</span></sup>'
        )
    else:
        html = f'<sup><a fn_target="{p}fn_{first}" id="{p}rfn_{n}" href="#{p}fn_{first}">{label}</a></sup>'

    return ctx.store.wrap(html, "", m.group(0))


def footnote_block(ctx: ParseContext, revert: str = "") -> str:
    """Print the pending notes and clear them; "" when there are none."""
    notes = ctx.flush_footnotes()
    if not notes:
        return ""

    p = ctx.id_prefix
    items = []
    for note in notes:
        first = note.refs[0]
        if len(note.refs) > 1:
            backrefs = " ".join(f'<sup><a href="#{p}rfn_{r}">({r})</a></sup>' for r in note.refs)
            head = f'<span id="{p}fn_{first}">({note.name})</span> {backrefs}'
        else:
            head = f'<a id="{p}fn_{first}" href="#{p}rfn_{first}">({note.name})</a>'
        items.append(f'{head} <footnote_title target="{p}fn_{first}">{note.body}</footnote_title>')

    html = '<div class="wiki_footnote">' + "<br>".join(items) + "</div>"
    return ctx.store.wrap(html, "", revert)


# -----------------------------------------------------------------------------

def manage_footnote(ctx: ParseContext, text: str) -> str:
    budget = len(_FOOTNOTE_RE.findall(text)) * 4
    while True:
        m = _FOOTNOTE_RE.search(text)
        if not m:
            break
        if budget < 0:
            log.error("Footnote pass did not converge in %r", ctx.doc_name)
            break
        budget -= 1

        if m.group(3):
            replacement = footnote_block(ctx, m.group(0))
        else:
            replacement = _reference(ctx, m)
        text = text[:m.start()] + replacement + text[m.end():]

    return text + "<footnote_category>" + footnote_block(ctx)


# -----------------------------------------------------------------------------
