#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Comments and backslash escapes, the first passes over the escaped buffer.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import re

from namumark.render.context import ParseContext


_REMARK_RE = re.compile(r"\n##[^\n]*")

# An escaped character is one of the entities produced by escaping, or any
# other single character.
_SLASH_RE = re.compile(r"\\(&lt;|&gt;|&#x27;|&quot;|&amp;|.)")


# -----------------------------------------------------------------------------

def manage_remark(ctx: ParseContext, text: str) -> str:
    """``## comment`` lines disappear together with their line break."""
    return _REMARK_RE.sub("\n<front_br>", text)


# -----------------------------------------------------------------------------

def manage_slash(ctx: ParseContext, text: str) -> str:
    def _protect(m: re.Match) -> str:
        return f"<{ctx.store.store_slash(m.group(1))}>"

    return _SLASH_RE.sub(_protect, text)


# -----------------------------------------------------------------------------
