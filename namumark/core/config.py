#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Application configuration.

All values can be overridden via environment variables or a .env file.
The ``render_*`` values are the defaults used for any render option a
caller leaves unset.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from functools import lru_cache
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from namumark._version import __version__ as _pkg_version


# -----------------------------------------------------------------------------

class Settings(BaseSettings):

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Application ────────────────────────────────────────────────────────

    app_name: str = "NamuMark Renderer"
    app_version: str = _pkg_version
    debug: bool = False
    environment: Literal["development", "testing", "production"] = "development"

    # ── Wiki URL layout ────────────────────────────────────────────────────

    wiki_path: str = "/w/"
    image_path: str = "/image/"
    upload_path: str = "/upload"
    edit_section_path: str = "/edit_section/"

    # ── Render defaults ────────────────────────────────────────────────────

    render_bold_mode: Literal["normal", "plain", "delete"] = "normal"
    render_strike_mode: Literal["normal", "plain", "delete"] = "normal"
    render_category_position: Literal["bottom", "top"] = "bottom"
    render_footnote_mode: Literal["inline", "expand", "popup", "popover"] = "inline"
    render_toc_mode: Literal["normal", "manual", "off"] = "normal"
    render_image_mode: Literal["normal", "click"] = "normal"
    render_list_numbering: Literal["normal", "full"] = "normal"
    render_font_size: Optional[int] = None
    render_dark_mode: bool = False
    render_include_link: bool = False
    render_heading_edit_links: bool = True

    # ── API limits ─────────────────────────────────────────────────────────

    max_content_length: int = 1_000_000

    # ── CORS ───────────────────────────────────────────────────────────────

    cors_origins: list[str] = [
        "http://localhost:8000",
        "http://localhost:3000",
    ]

    @property
    def is_testing(self) -> bool:
        return self.environment == "testing"


# -----------------------------------------------------------------------------

@lru_cache
def get_settings() -> Settings:
    return Settings()


# -----------------------------------------------------------------------------
