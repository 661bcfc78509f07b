#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Small string helpers shared by the render passes.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import hashlib
import html
import json
import re
from urllib.parse import quote


# -----------------------------------------------------------------------------
# HTML escaping
# -----------------------------------------------------------------------------

_UNESCAPE_TABLE = (
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#x27;", "'"),
    ("&amp;", "&"),
)


def escape_html(text: str) -> str:
    """Escape the five HTML special characters (``& < > " '``)."""
    return html.escape(text, quote=True)


def unescape_html(text: str) -> str:
    """Inverse of :func:`escape_html`; touches only the five entities it emits."""
    for entity, char in _UNESCAPE_TABLE:
        text = text.replace(entity, char)
    return text


# -----------------------------------------------------------------------------
# URLs
# -----------------------------------------------------------------------------

def url_pas(data: str) -> str:
    """Percent-encode a page title for use inside a ``/w/<title>`` path."""
    data = re.sub(r"^\.", r"\\.", data)
    return quote(data, safe="-_.!~*'()")


def sha224_hex(data: str) -> str:
    return hashlib.sha224(data.encode("utf-8")).hexdigest()


# -----------------------------------------------------------------------------
# CSS / JS fragments
# -----------------------------------------------------------------------------

def css_safe(data: str) -> str:
    """Drop ``;`` so a value cannot terminate the declaration it lands in."""
    return data.replace(";", "")


def px_add(data: str) -> str:
    """Bare integers are pixel sizes."""
    if re.fullmatch(r"[0-9]+", data):
        return data + "px"
    return data


def dark_split(data: str, dark_mode: bool) -> str:
    """Pick the light or dark half of a ``light,dark`` value."""
    parts = data.split(",")
    if len(parts) == 1:
        return parts[0]
    return parts[1] if dark_mode else parts[0]


_TAG_RE = re.compile(r"<[^<>]*>")


def strip_tags(data: str) -> str:
    return _TAG_RE.sub("", data)


def js_string(data: str) -> str:
    """A JavaScript string literal that is also safe inside a ``<script>`` block."""
    return json.dumps(data, ensure_ascii=False).replace("</", "<\\/")


# -----------------------------------------------------------------------------
