#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
``[math(TeX)]`` becomes an empty span plus a KaTeX call in the client script.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import re

from namumark.render.context import ParseContext
from namumark.render.tools import escape_html, js_string, unescape_html


_MATH_RE = re.compile(r"\[math\(((?:(?!\[math\(|\)\]).)+)\)\]", re.IGNORECASE | re.DOTALL)


# -----------------------------------------------------------------------------

def manage_math(ctx: ParseContext, text: str) -> str:

    def _math(m: re.Match) -> str:
        tex = unescape_html(ctx.store.revert(m.group(1).replace("\n", "")))
        element_id = f"{ctx.id_prefix}math_{ctx.next_id('math')}"
        target = js_string(element_id)
        fallback = js_string(f"<span style='color: red;'>{escape_html(tex)}</span>")
        ctx.script.add(
            "try {\n"
            f"    katex.render({js_string(tex)}, document.getElementById({target}));\n"
            "} catch {\n"
            f"    if (document.getElementById({target})) {{\n"
            f"        document.getElementById({target}).innerHTML = {fallback};\n"
            "    }\n"
            "}\n"
        )
        return ctx.store.wrap(f'<span id="{element_id}" class="wiki_math"></span>', "", m.group(0))

    return _MATH_RE.sub(_math, text)


# -----------------------------------------------------------------------------
