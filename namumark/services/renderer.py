#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Markup renderer
===============
Renders NamuMark page content to an HTML fragment, a client script and the
side data a wiki stores next to the page (backlinks, categories, footnotes,
TOC).

    result = render("== Title ==\\n[[Other page]]", doc_name="Home", lookup=pages)
    result.html, result.js, result.data.backlinks
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from namumark.render.context import ParseContext, RenderResult
from namumark.render.pipeline import run_pipeline
from namumark.schemas import RenderConfig
from namumark.services.lookup import ContentLookup


log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------

def render(
    content: str,
    doc_name: str = "",
    config: Optional[RenderConfig] = None,
    lookup: Optional[ContentLookup] = None,
    now: Optional[datetime] = None,
) -> RenderResult:
    """Render *content* as the document *doc_name*.

    *lookup* answers existence checks and supplies included pages; *now*
    fixes the clock for ``[date]``, ``age`` and ``dday``.
    """
    if not isinstance(content, str):
        raise TypeError(f"content must be str, not {type(content).__name__}")

    ctx = ParseContext(doc_name=doc_name, config=config, lookup=lookup, now=now)
    html = run_pipeline(ctx, content)
    log.info(
        "Rendered %r: %d chars → %d chars html, %d backlinks, %d categories",
        doc_name, len(content), len(html), len(ctx.backlinks), len(ctx.categories),
    )
    return ctx.result(html)


# -----------------------------------------------------------------------------

def render_html(content: str, doc_name: str = "", **kwargs) -> str:
    """Shortcut returning only the HTML fragment."""
    return render(content, doc_name, **kwargs).html


# -----------------------------------------------------------------------------

def extract_categories(content: str, doc_name: str = "", lookup: Optional[ContentLookup] = None) -> list[str]:
    """Category names the document declares, in order of first appearance."""
    return render(content, doc_name, lookup=lookup).data.categories


# -----------------------------------------------------------------------------
