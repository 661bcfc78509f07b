#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Inline text styling and horizontal rules.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import re

from namumark.render.context import ParseContext


_Q = "&#x27;"

# (pattern, open, close, mode option or None)
STYLES = (
    (re.compile(rf"{_Q}{_Q}{_Q}((?:(?!{_Q}{_Q}{_Q}).)+){_Q}{_Q}{_Q}"), "<b>", "</b>", "bold_mode"),
    (re.compile(rf"{_Q}{_Q}((?:(?!{_Q}{_Q}).)+){_Q}{_Q}"), "<i>", "</i>", None),
    (re.compile(r"__((?:(?!__).)+)__"), "<u>", "</u>", None),
    (re.compile(r"\^\^((?:(?!\^\^).)+)\^\^"), "<sup>", "</sup>", None),
    (re.compile(r",,((?:(?!,,).)+),,"), "<sub>", "</sub>", None),
    (re.compile(r"--(?!-)((?:(?!--).)+?)(?<!-)--"), "<s>", "</s>", "strike_mode"),
    (re.compile(r"~~((?:(?!~~).)+)~~"), "<s>", "</s>", "strike_mode"),
)

_HR_RE = re.compile(r"\n-{4,9}(?=\n)")


# -----------------------------------------------------------------------------

def manage_text(ctx: ParseContext, text: str) -> str:
    for pattern, open_html, close_html, option in STYLES:
        mode = getattr(ctx.config, option) if option else "normal"

        def _styled(m: re.Match) -> str:
            if mode == "delete":
                return ctx.store.wrap("", "", m.group(0))
            if mode == "plain":
                return ctx.store.wrap("", "", m.group(0), inner=m.group(1))
            return ctx.store.wrap(open_html, close_html, m.group(0), inner=m.group(1))

        text = pattern.sub(_styled, text)
    return text


def manage_hr(ctx: ParseContext, text: str) -> str:
    return _HR_RE.sub("\n<front_br><hr><back_br>", text)


# -----------------------------------------------------------------------------
