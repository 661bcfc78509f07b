#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Render pipeline
===============
The source is escaped once, framed by line-break markers and run through
the passes below in order.  Each pass takes the context and the buffer and
returns the new buffer; markup a pass has handled is parked in the
context's placeholder store so later passes cannot touch it.

Order matters:

  remark → parameter defaults → backslash escapes → ``{{{ }}}`` blocks →
  include → math → tables → quotes and lists → macros → links →
  text styling → rules → footnotes → headings → finalize
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from typing import Callable

from namumark.render.blocks import manage_middle
from namumark.render.context import ParseContext
from namumark.render.finalize import finalize
from namumark.render.footnotes import manage_footnote
from namumark.render.formula import manage_math
from namumark.render.headings import manage_heading
from namumark.render.include import manage_include, manage_include_default
from namumark.render.links import manage_link
from namumark.render.lists import manage_list
from namumark.render.macros import manage_macro
from namumark.render.preprocess import manage_remark, manage_slash
from namumark.render.tables import manage_table
from namumark.render.text import manage_hr, manage_text
from namumark.render.tools import escape_html


log = logging.getLogger(__name__)

Pass = Callable[[ParseContext, str], str]

PASSES: tuple[Pass, ...] = (
    manage_remark,
    manage_include_default,
    manage_slash,
    manage_middle,
    manage_include,
    manage_math,
    manage_table,
    manage_list,
    manage_macro,
    manage_link,
    manage_text,
    manage_hr,
    manage_footnote,
    manage_heading,
)


# -----------------------------------------------------------------------------

def prepare(source: str) -> str:
    """Escaped buffer with the leading / trailing line-break markers."""
    return "<back_br>\n" + escape_html(source.replace("\r", "")) + "\n<front_br>"


def run_pipeline(ctx: ParseContext, source: str) -> str:
    """Render *source* within *ctx*; the side data is left on the context."""
    text = prepare(source)
    for manage in PASSES:
        text = manage(ctx, text)
    html = finalize(ctx, text)
    log.debug(
        "Rendered %r%s: %d placeholders, %d links",
        ctx.doc_name, f" ({ctx.id_prefix})" if ctx.id_prefix else "", len(ctx.store), ctx.link_count,
    )
    return html


# -----------------------------------------------------------------------------
