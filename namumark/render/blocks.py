#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Container blocks
================
``{{{ ... }}}`` in all its forms:

  {{{#!wiki style="..." dark-style="..."    styled block, body rendered as a document
  {{{#!html                                 client-rendered HTML
  {{{#!folding Label                        <details> disclosure, body rendered as a document
  {{{#!syntax python                        highlighted code block
  {{{+1 text}}} ... {{{-5 text}}}           font size
  {{{#red text}}} / {{{@#fff,#000 text}}}   text / background colour
  {{{literal text}}}                        shown verbatim

Blocks are matched innermost first: a body never contains another ``{{{``
or ``}}}``, so an enclosing block only matches once everything inside it has
been replaced by a placeholder.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import re

from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from namumark.render.context import ParseContext
from namumark.render.tools import css_safe, dark_split, escape_html, js_string, unescape_html


log = logging.getLogger(__name__)

_MIDDLE_RE = re.compile(
    r"\{\{\{([^{](?:(?!\{\{\{|\}\}\}).)*)?(?:\}|<(slash_[0-9a-f]+_[0-9]+)>)\}\}",
    re.DOTALL,
)
_TEMP_RE = re.compile(r"<temp_(slash_[0-9a-f]+_[0-9]+)>")
_FIRST_TOKEN_RE = re.compile(r"[^ \n]+")

FONT_SIZES = {
    "+5": 200, "+4": 180, "+3": 160, "+2": 140, "+1": 120,
    "-1": 90, "-2": 80, "-3": 70, "-4": 60, "-5": 50,
}

_COLOR = r"(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[a-zA-Z]+)"
_COLOR_TOKEN_RE = re.compile(rf"([@#])({_COLOR})(?:,\1({_COLOR}))?")
_HEX_RE = re.compile(r"[0-9a-fA-F]{3}|[0-9a-fA-F]{6}")

_WIKI_ATTR_RE = re.compile(
    r"(?<![\w-])(dark-style|style)=(?:&quot;((?:(?!&quot;).)*)&quot;|&#x27;((?:(?!&#x27;).)*)&#x27;)",
    re.IGNORECASE,
)

# Style payloads that break out of the block's box.
_STYLE_DENY_RE = re.compile(r"url\s*\(|position\s*:|expression\s*\(|javascript:", re.IGNORECASE)
_STYLE_HEAVY_RE = re.compile(r"(box-shadow|linear-gradient)\s*[:(]([^;]*)", re.IGNORECASE)
MAX_STYLE_LIST_ARGS = 8


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------

def scrub_style(style: str) -> str:
    """Return *style* unchanged, or "" if it carries a rejected construct."""
    if _STYLE_DENY_RE.search(style):
        log.warning("Rejected block style: %.80s", style)
        return ""
    for m in _STYLE_HEAVY_RE.finditer(style):
        if m.group(2).count(",") + 1 > MAX_STYLE_LIST_ARGS:
            log.warning("Rejected block style with oversized %s list", m.group(1))
            return ""
    return style


def syntax_language(name: str) -> str:
    """Canonical highlighter class for *name*, via the Pygments lexer registry."""
    name = name.strip()
    if not name:
        return "python"
    try:
        lexer = get_lexer_by_name(name)
    except ClassNotFound:
        return re.sub(r"[^\w+#-]", "", name) or "plaintext"
    return lexer.aliases[0] if lexer.aliases else name


def parse_color(token: str, dark_mode: bool) -> str:
    """``#red``, ``#f00``, ``#f00,#0ff`` (light,dark) … → a CSS colour; anything else is red."""
    m = _COLOR_TOKEN_RE.fullmatch(token)
    if not m:
        return "red"

    def _one(value: str) -> str:
        return "#" + value if _HEX_RE.fullmatch(value) else value

    value = _one(m.group(2))
    if m.group(3):
        value += "," + _one(m.group(3))
    return dark_split(css_safe(value), dark_mode)


def _undisguise(text: str) -> str:
    return _TEMP_RE.sub(r"<\1>", text)


def _strip_one_newline(text: str) -> str:
    if text.startswith("\n"):
        text = text[1:]
    if text.endswith("\n"):
        text = text[:-1]
    return text


def _block(token: str) -> str:
    """Block-level output swallows the line breaks around it."""
    return f"<front_br>{token}<back_br>"


# -----------------------------------------------------------------------------
# Kinds
# -----------------------------------------------------------------------------

def _wiki(ctx: ParseContext, body: str, original: str) -> str:
    head, _, rest = body.partition("\n")
    styles = {"style": "", "dark-style": ""}
    for m in _WIKI_ATTR_RE.finditer(head):
        styles[m.group(1).lower()] = unescape_html(m.group(2) if m.group(2) is not None else m.group(3))
    if not rest:
        rest = _WIKI_ATTR_RE.sub("", head[len("#!wiki"):]).strip()

    style = styles["dark-style"] if ctx.dark_mode and styles["dark-style"] else styles["style"]
    style = scrub_style(style)
    style_attr = f' style="{escape_html(style)}"' if style else ""

    source = unescape_html(ctx.store.revert(_undisguise(rest)))
    html = ctx.sub_render(_strip_one_newline(source), "wiki")
    return _block(ctx.store.wrap(f'<div class="wiki_block"{style_attr}>{html}</div>', "", original))


def _html(ctx: ParseContext, body: str, original: str) -> str:
    source = _strip_one_newline(ctx.store.revert(_undisguise(body[len("#!html"):].lstrip(" "))))
    element_id = f"{ctx.id_prefix}html_{ctx.next_id('html')}"
    ctx.script.add(f"wikiHtmlRender({js_string(element_id)});")
    return _block(ctx.store.wrap(f'<div class="wiki_html" id="{element_id}">{source}</div>', "", original))


def _folding(ctx: ParseContext, body: str, original: str) -> str:
    head, _, rest = body.partition("\n")
    label = head[len("#!folding"):].strip() or "More"
    source = unescape_html(ctx.store.revert(_undisguise(rest)))
    html = ctx.sub_render(_strip_one_newline(source), "folding")
    return _block(ctx.store.wrap(
        '<details class="wiki_folding"><summary>',
        f'</summary><div class="wiki_folding_body">{html}</div></details>',
        original,
        inner=label,
    ))


def _syntax(ctx: ParseContext, body: str, original: str) -> str:
    head, _, rest = body.partition("\n")
    lang = syntax_language(head[len("#!syntax"):])
    code = _strip_one_newline(ctx.store.revert(_undisguise(rest)))
    ctx.script.add("hljs.highlightAll();", once="syntax")
    return _block(ctx.store.wrap(
        f'<pre class="wiki_syntax"><code class="language-{escape_html(lang)}">{code}</code></pre>',
        "",
        original,
    ))


def _size(ctx: ParseContext, name: str, body: str, original: str) -> str:
    inner = re.sub(r"^[+-][1-5][ \n]?", "", body)
    return ctx.store.wrap(f'<span style="font-size:{FONT_SIZES[name]}%">', "</span>", original, inner=inner)


def _color(ctx: ParseContext, token: str, body: str, original: str) -> str:
    color = parse_color(token, ctx.dark_mode)
    inner = body[len(token):]
    if inner[:1] in (" ", "\n"):
        inner = inner[1:]
    prop = "background-color" if token.startswith("@") else "color"
    return ctx.store.wrap(f'<span style="{prop}:{color}">', "</span>", original, inner=inner)


def _literal(ctx: ParseContext, body: str, original: str) -> str:
    text = _strip_one_newline(ctx.store.revert(_undisguise(body)))
    if "\n" in text:
        return _block(ctx.store.wrap(f'<pre class="wiki_pre"><code>{text}</code></pre>', "", original))
    return ctx.store.wrap(f"<code>{text}</code>", "", original)


# -----------------------------------------------------------------------------
# Pass
# -----------------------------------------------------------------------------

def manage_middle(ctx: ParseContext, text: str) -> str:
    budget = len(_MIDDLE_RE.findall(text)) * 10
    while True:
        m = _MIDDLE_RE.search(text)
        if not m:
            break
        if budget < 0:
            log.error("Container pass did not converge in %r", ctx.doc_name)
            break
        budget -= 1

        original = m.group(0)
        body = m.group(1) or ""
        slash = m.group(2)

        head = _FIRST_TOKEN_RE.match(body)
        token = head.group(0) if head else ""
        name = token.lower()

        is_literal = not (
            name in ("#!wiki", "#!html", "#!folding", "#!syntax")
            or name in FONT_SIZES
            or re.match(r"[@#]\w", token)
        )

        # ``<slash>}}`` closes only when the escaped character is the brace
        # itself, and only for literal text; otherwise skip this closer.
        if slash and (ctx.store.slash_literal(slash) != "}" or not is_literal):
            text = text[:m.start(2)] + f"<temp_{slash}>" + text[m.end(2):]
            continue

        if name == "#!wiki":
            replacement = _wiki(ctx, body, original)
        elif name == "#!html":
            replacement = _html(ctx, body, original)
        elif name == "#!folding":
            replacement = _folding(ctx, body, original)
        elif name == "#!syntax":
            replacement = _syntax(ctx, body, original)
        elif name in FONT_SIZES:
            replacement = _size(ctx, name, body, original)
        elif not is_literal:
            replacement = _color(ctx, token, body, original)
        else:
            replacement = _literal(ctx, body + ("\\" if slash else ""), original)

        text = text[:m.start()] + replacement + text[m.end():]

    return _undisguise(text)


# -----------------------------------------------------------------------------
