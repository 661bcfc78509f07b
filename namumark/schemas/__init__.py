from namumark.schemas.schemas import (
    RenderConfig, RenderOptions,
    RenderRequest, RenderResponse,
    BacklinkResponse, FootnoteResponse, TocEntryResponse,
    TextMode,
)

__all__ = [
    "RenderConfig", "RenderOptions",
    "RenderRequest", "RenderResponse",
    "BacklinkResponse", "FootnoteResponse", "TocEntryResponse",
    "TextMode",
]
