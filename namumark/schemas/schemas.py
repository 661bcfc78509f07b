#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pydantic v2 schemas for the render options and the render API.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from namumark.core.config import Settings, get_settings


TextMode = Literal["normal", "plain", "delete"]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Render options
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class RenderConfig(BaseModel):
    """Per-reader presentation options.

    ``bold_mode`` / ``strike_mode``
        ``normal`` renders the tag, ``plain`` keeps the text without the tag,
        ``delete`` drops the text.
    ``category_position``
        Where the category bar goes: ``bottom`` (after the footnotes) or
        ``top`` (before the document, followed by a rule).
    ``footnote_mode``
        Reference markup: ``inline`` (title tooltip), ``expand`` (toggle the
        note in place), ``popup`` or ``popover``.
    ``toc_mode``
        ``normal`` auto-inserts the TOC before the first heading unless the
        document places it explicitly; ``manual`` only honours explicit
        markers; ``off`` never renders it.
    ``image_mode``
        ``click`` defers image loading until the reader clicks.
    ``list_numbering``
        ``full`` prints the whole ``1-2-3`` path for numeric ordered lists.
    """

    model_config = ConfigDict(extra="ignore")

    bold_mode: TextMode = "normal"
    strike_mode: TextMode = "normal"
    category_position: Literal["bottom", "top"] = "bottom"
    footnote_mode: Literal["inline", "expand", "popup", "popover"] = "inline"
    toc_mode: Literal["normal", "manual", "off"] = "normal"
    image_mode: Literal["normal", "click"] = "normal"
    list_numbering: Literal["normal", "full"] = "normal"
    font_size: Optional[int] = Field(default=None, ge=6, le=72)
    dark_mode: bool = False
    include_link: bool = False
    heading_edit_links: bool = True

    wiki_path: str = "/w/"
    image_path: str = "/image/"
    upload_path: str = "/upload"
    edit_section_path: str = "/edit_section/"

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **overrides) -> "RenderConfig":
        """Build a config from the environment defaults, then apply *overrides*."""
        settings = settings or get_settings()
        values = {
            "bold_mode":          settings.render_bold_mode,
            "strike_mode":        settings.render_strike_mode,
            "category_position":  settings.render_category_position,
            "footnote_mode":      settings.render_footnote_mode,
            "toc_mode":           settings.render_toc_mode,
            "image_mode":         settings.render_image_mode,
            "list_numbering":     settings.render_list_numbering,
            "font_size":          settings.render_font_size,
            "dark_mode":          settings.render_dark_mode,
            "include_link":       settings.render_include_link,
            "heading_edit_links": settings.render_heading_edit_links,
            "wiki_path":          settings.wiki_path,
            "image_path":         settings.image_path,
            "upload_path":        settings.upload_path,
            "edit_section_path":  settings.edit_section_path,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Render API
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class RenderOptions(BaseModel):
    """Caller overrides; anything left unset falls back to the settings."""

    model_config = ConfigDict(extra="forbid")

    bold_mode: Optional[TextMode] = None
    strike_mode: Optional[TextMode] = None
    category_position: Optional[Literal["bottom", "top"]] = None
    footnote_mode: Optional[Literal["inline", "expand", "popup", "popover"]] = None
    toc_mode: Optional[Literal["normal", "manual", "off"]] = None
    image_mode: Optional[Literal["normal", "click"]] = None
    list_numbering: Optional[Literal["normal", "full"]] = None
    font_size: Optional[int] = Field(default=None, ge=6, le=72)
    dark_mode: Optional[bool] = None
    include_link: Optional[bool] = None
    heading_edit_links: Optional[bool] = None


# -----------------------------------------------------------------------------

class RenderRequest(BaseModel):
    content: str = Field(default="", max_length=1_000_000)
    doc_name: str = Field(default="", max_length=256)
    options: RenderOptions = Field(default_factory=RenderOptions)
    # Optional title → content map consulted instead of the shared lookup.
    pages: Optional[dict[str, str]] = None


# -----------------------------------------------------------------------------

class BacklinkResponse(BaseModel):
    source: str
    target: str
    relation: str
    detail: str = ""


# -----------------------------------------------------------------------------

class FootnoteResponse(BaseModel):
    name: str
    refs: list[int]
    body: str


# -----------------------------------------------------------------------------

class TocEntryResponse(BaseModel):
    path: str
    text: str


# -----------------------------------------------------------------------------

class RenderResponse(BaseModel):
    html: str
    js: str
    backlinks: list[BacklinkResponse] = []
    backlink_map: dict[str, list[str]] = {}
    categories: list[str] = []
    footnotes: list[FootnoteResponse] = []
    toc: list[TocEntryResponse] = []
    link_count: int = 0
