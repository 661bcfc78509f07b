#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pytest fixtures for the NamuMark renderer tests.
Page storage is an in-memory lookup, so no external services are needed.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from datetime import datetime

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from namumark.main import create_app
from namumark.render.context import RenderResult
from namumark.schemas import RenderConfig
from namumark.services.lookup import MemoryLookup, get_lookup
from namumark.services.renderer import render


# -----------------------------------------------------------------------------

FIXED_NOW = datetime(2024, 5, 10, 12, 0, 0)

PAGES = {
    "Exists":        "Existing page.",
    "Template":      "Hello @name=World@!",
    "Nested":        "outer [include(Template)] end",
    "file:pic.png":  "An image.",
    "category:Known": "",
}


# -----------------------------------------------------------------------------

@pytest.fixture
def pages() -> MemoryLookup:
    return MemoryLookup(PAGES)


@pytest_asyncio.fixture(scope="function")
async def client():
    """HTTP test client wired to a fresh in-memory lookup."""
    lookup = MemoryLookup(PAGES)

    app = create_app()
    app.dependency_overrides[get_lookup] = lambda: lookup

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# -----------------------------------------------------------------------------
# Helper functions for tests
# -----------------------------------------------------------------------------

def run(content: str, doc_name: str = "Test", **options) -> RenderResult:
    """Render against the fixture pages at a fixed time."""
    config = RenderConfig(**options)
    return render(content, doc_name, config=config, lookup=MemoryLookup(PAGES), now=FIXED_NOW)


def html_of(content: str, doc_name: str = "Test", **options) -> str:
    return run(content, doc_name, **options).html


# -----------------------------------------------------------------------------
