#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""Tests for the HTTP API: health, preview and full render."""
# -----------------------------------------------------------------------------

from __future__ import annotations

import pytest


# =============================================================================
# System
# =============================================================================

@pytest.mark.asyncio
async def test_health(client):
    r = await client.get("/api/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert data["app"] == "NamuMark Renderer"
    assert "version" in data


@pytest.mark.asyncio
async def test_unknown_route_is_json_404(client):
    r = await client.get("/api/v1/nothing-here")
    assert r.status_code == 404
    assert r.json() == {"detail": "Not found"}


# =============================================================================
# Preview
# =============================================================================

@pytest.mark.asyncio
async def test_preview(client):
    r = await client.get("/api/v1/render", params={"content": "'''x'''"})
    assert r.status_code == 200
    assert r.json() == {"html": "<b>x</b>", "js": ""}


@pytest.mark.asyncio
async def test_preview_uses_shared_lookup(client):
    r = await client.get("/api/v1/render", params={"content": "[[Exists]] [[Missing]]"})
    html = r.json()["html"]
    assert '<a title="Exists" href="/w/Exists">Exists</a>' in html
    assert "wiki_not_exist_link" in html


@pytest.mark.asyncio
async def test_preview_script(client):
    r = await client.get("/api/v1/render", params={"content": "[math(x)]"})
    assert "katex.render" in r.json()["js"]


# =============================================================================
# Full render
# =============================================================================

@pytest.mark.asyncio
async def test_render_side_data(client):
    r = await client.post("/api/v1/render", json={
        "content": "== Top ==\n[[Exists]] [[Missing]][* note]\n[[분류:Known]]",
        "doc_name": "Home",
    })
    assert r.status_code == 200
    data = r.json()
    assert data["categories"] == ["Known"]
    assert data["link_count"] == 2
    assert data["backlink_map"]["Missing"] == ["", "no"]
    assert data["backlink_map"]["category:Known"] == ["cat"]
    assert {"source": "Home", "target": "Exists", "relation": "", "detail": ""} in data["backlinks"]
    assert data["toc"] == [{"path": "1", "text": "Top"}]
    assert data["footnotes"] == [{"name": "1", "refs": [1], "body": "note"}]


@pytest.mark.asyncio
async def test_render_options(client):
    r = await client.post("/api/v1/render", json={
        "content": "a'''b'''c",
        "options": {"bold_mode": "delete"},
    })
    assert r.json()["html"] == "ac"


@pytest.mark.asyncio
async def test_render_pages_override(client):
    r = await client.post("/api/v1/render", json={
        "content": "[include(Card, who=Ann)]",
        "pages": {"Card": "Hi @who@"},
    })
    data = r.json()
    assert "Hi Ann" in data["html"]
    assert data["backlink_map"] == {"Card": ["include"]}


@pytest.mark.asyncio
async def test_render_pages_override_hides_shared_pages(client):
    r = await client.post("/api/v1/render", json={"content": "[[Exists]]", "pages": {}})
    assert "wiki_not_exist_link" in r.json()["html"]


@pytest.mark.asyncio
async def test_render_rejects_unknown_option(client):
    r = await client.post("/api/v1/render", json={"content": "x", "options": {"sparkle": True}})
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_render_rejects_bad_option_value(client):
    r = await client.post("/api/v1/render", json={"content": "x", "options": {"toc_mode": "sideways"}})
    assert r.status_code == 422


# -----------------------------------------------------------------------------
