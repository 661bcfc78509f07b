#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Render endpoints.

GET  /api/v1/render?content=...&doc_name=...   live preview for the editor
POST /api/v1/render                             full render with side data
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from namumark.core.config import get_settings
from namumark.render.context import RenderResult
from namumark.schemas import (
    BacklinkResponse, FootnoteResponse, RenderConfig, RenderRequest, RenderResponse, TocEntryResponse,
)
from namumark.services.lookup import ContentLookup, MemoryLookup, get_lookup
from namumark.services.renderer import render


log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------

router = APIRouter(prefix="/render", tags=["render"])


# -----------------------------------------------------------------------------

def _response(result: RenderResult) -> RenderResponse:
    data = result.data
    return RenderResponse(
        html=result.html,
        js=result.js,
        backlinks=[
            BacklinkResponse(source=b.source, target=b.target, relation=b.relation, detail=b.detail)
            for b in data.backlinks
        ],
        backlink_map={target: sorted(relations) for target, relations in data.backlink_map.items()},
        categories=data.categories,
        footnotes=[FootnoteResponse(name=f.name, refs=f.refs, body=f.body) for f in data.footnotes.values()],
        toc=[TocEntryResponse(path=t.path, text=t.text) for t in data.toc],
        link_count=data.link_count,
    )


def _check_length(content: str) -> None:
    limit = get_settings().max_content_length
    if len(content) > limit:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Content exceeds {limit} characters",
        )


# -----------------------------------------------------------------------------

@router.get("")
async def render_preview(
    content:  str = Query(default="", max_length=1_000_000),
    doc_name: str = Query(default=""),
    lookup:   ContentLookup = Depends(get_lookup),
):
    """Return rendered HTML and script for a snippet, as used by the live editor preview."""
    _check_length(content)
    result = render(content, doc_name, config=RenderConfig.from_settings(), lookup=lookup)
    return {"html": result.html, "js": result.js}


# -----------------------------------------------------------------------------

@router.post("", response_model=RenderResponse)
async def render_document(
    body:   RenderRequest,
    lookup: ContentLookup = Depends(get_lookup),
):
    """Render a document with per-request options; ``pages`` replaces the shared lookup."""
    _check_length(body.content)
    config = RenderConfig.from_settings(**body.options.model_dump())
    if body.pages is not None:
        lookup = MemoryLookup(body.pages)
    log.debug("Render request for %r with %d option overrides",
              body.doc_name, len(body.options.model_dump(exclude_none=True)))
    return _response(render(body.content, body.doc_name, config=config, lookup=lookup))


# -----------------------------------------------------------------------------
