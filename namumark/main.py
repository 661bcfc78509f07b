#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
NamuMark Renderer: FastAPI application factory
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from namumark.core.config import get_settings
from namumark.routes import render


log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------

def create_app() -> FastAPI:
    settings = get_settings()

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Renders NamuMark wiki markup to HTML, client script and page side data.",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    # ── CORS ──────────────────────────────────────────────────────────────

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── API routers ───────────────────────────────────────────────────────

    prefix = "/api/v1"

    app.include_router(render.router, prefix=prefix)

    # ── Global exception handlers ─────────────────────────────────────────

    @app.exception_handler(404)
    async def not_found(request: Request, exc):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": "Not found"},
        )

    @app.exception_handler(500)
    async def server_error(request: Request, exc):
        log.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    # ── Health check ──────────────────────────────────────────────────────

    @app.get("/api/health", tags=["system"])
    async def health():
        return {"status": "ok", "version": settings.app_version, "app": settings.app_name}

    log.info("%s %s ready (%s)", settings.app_name, settings.app_version, settings.environment)
    return app


# -----------------------------------------------------------------------------

app = create_app()


# -----------------------------------------------------------------------------
