#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Transclusion
============
``[include(Title, key=value, ...)]`` renders another stored page in place.

Inside the included page ``@key@`` is replaced by the caller's value and
``@key=default@`` falls back to its default; an unmatched bare ``@key@``
becomes empty.  A parameter preceded by an odd number of backslashes is
escaped and stays as written.  Nested ``[include(...)]`` inside an included
page is dropped.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import re
from typing import Mapping

from namumark.render.context import IncludeRecord, ParseContext
from namumark.render.tools import escape_html, unescape_html, url_pas


log = logging.getLogger(__name__)

_INCLUDE_RE = re.compile(r"\[include\(((?:(?!\[include\(|\)\]|</div>).)+)\)\]", re.IGNORECASE)
_ARG_RE = re.compile(r"(?:^|,) *([^,]+)")
_PAIR_RE = re.compile(r"([^=]+?) *= *(.*)", re.DOTALL)

_PARAM_DEFAULT_RE = re.compile(r"(\\*)@([ㄱ-힣a-zA-Z]+)=((?:\\@|[^@\n])+)@")
_PARAM_BARE_RE = re.compile(r"(\\*)@([ㄱ-힣a-zA-Z]+)@")

_PREFIX_ALIASES = (
    (re.compile(r"^(분류|category):", re.IGNORECASE), ":분류:"),
    (re.compile(r"^(파일|file):", re.IGNORECASE), ":파일:"),
)


# -----------------------------------------------------------------------------
# Parameters
# -----------------------------------------------------------------------------

def substitute_params(text: str, values: Mapping[str, str]) -> str:
    """Fill ``@key@`` / ``@key=default@`` from *values*."""

    def _fill(m: re.Match, default: str) -> str:
        slashes = m.group(1)
        if len(slashes) % 2 == 1:
            return m.group(0)
        return slashes + values.get(m.group(2), default)

    text = _PARAM_DEFAULT_RE.sub(lambda m: _fill(m, m.group(3)), text)
    return _PARAM_BARE_RE.sub(lambda m: _fill(m, ""), text)


def manage_include_default(ctx: ParseContext, text: str) -> str:
    """A page viewed on its own shows its parameter defaults."""
    if ctx.in_include:
        return text
    return substitute_params(text, {})


# -----------------------------------------------------------------------------
# Include
# -----------------------------------------------------------------------------

def parse_include_args(ctx: ParseContext, args: str) -> tuple[str, dict[str, str]]:
    """Split ``Title, a=1, b=2`` into the title and the parameter values."""
    title = ""
    values: dict[str, str] = {}
    for m in _ARG_RE.finditer(args):
        arg = m.group(1)
        pair = _PAIR_RE.fullmatch(arg)
        if pair:
            value = unescape_html(ctx.store.resolve(pair.group(2).strip(), "slash"))
            for pattern, alias in _PREFIX_ALIASES:
                value = pattern.sub(alias, value, count=1)
            values[pair.group(1).strip()] = value
        elif not title:
            title = unescape_html(ctx.store.resolve(arg.strip(), "slash"))
    return title, values


def _include(ctx: ParseContext, m: re.Match) -> str:
    original = m.group(0)
    title, values = parse_include_args(ctx, m.group(1))
    href = ctx.config.wiki_path + url_pas(title)
    shown = escape_html(title)

    content = ctx.lookup.find(title)
    if content is None:
        ctx.add_backlink(title, "no")
        return ctx.store.wrap(
            f'<div><a class="wiki_not_exist_link" href="{href}">({shown})</a></div>', "", original
        )

    ctx.add_backlink(title, "include")
    body = substitute_params(content.replace("\r", ""), values).lstrip("\n")
    html = ctx.sub_render(body, "include", include=True)

    element_id = f"{ctx.id_prefix}include_{ctx.next_id('include')}"
    ctx.includes.append(IncludeRecord(element_id, title))

    link = ""
    if ctx.config.include_link:
        link = f'<div class="wiki_include_link"><a href="{href}">({shown})</a></div>'
    return ctx.store.wrap(f'{link}<div id="{element_id}" class="wiki_include">{html}</div>', "", original)


def manage_include(ctx: ParseContext, text: str) -> str:
    if ctx.in_include:
        return _INCLUDE_RE.sub("", text)

    budget = len(_INCLUDE_RE.findall(text)) * 10
    while True:
        m = _INCLUDE_RE.search(text)
        if not m:
            break
        if budget < 0:
            log.error("Include pass did not converge in %r", ctx.doc_name)
            break
        budget -= 1
        replacement = f"<front_br>{_include(ctx, m)}<back_br>"
        text = text[:m.start()] + replacement + text[m.end():]
    return text


# -----------------------------------------------------------------------------
