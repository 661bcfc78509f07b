#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Links
=====
``[[target]]`` and ``[[target|display]]``.  The target decides the kind,
first match wins:

  파일:x / file:x        image (options after ``|``, joined by ``&``)
  분류:x / category:x    category membership, nothing rendered in place
  inter:wiki:x / 인터:    interwiki, dropped
  http(s)://...          external link
  anything else          internal page link

Internal targets understand ``../`` (parent page), a leading ``/``
(sub-page), ``:분류:`` / ``:파일:`` (link to the category or file page
instead of using it), ``사용자:`` and a ``#fragment``.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import re

from namumark.render.context import ParseContext
from namumark.render.tools import (
    css_safe, dark_split, escape_html, js_string, px_add, sha224_hex, unescape_html, url_pas,
)


log = logging.getLogger(__name__)

_LINK_RE = re.compile(
    r"\[\[((?:(?!\[\[|\]\]|\||<|>).|<slash_[0-9a-f]+_[0-9]+>)+)"
    r"(?:\|((?:(?!\[\[|\]\]|\|).)+))?\]\]"
)

_FILE_RE = re.compile(r"^(?:파일|file|외부|out):", re.IGNORECASE)
_OUT_RE = re.compile(r"^(?:외부|out):", re.IGNORECASE)
_CATEGORY_RE = re.compile(r"^(?:분류|category):", re.IGNORECASE)
_INTER_RE = re.compile(r"^(?:inter|인터):[^:]+:", re.IGNORECASE)
_EXTERNAL_RE = re.compile(r"^https?://", re.IGNORECASE)

_OPTION_RE = re.compile(r"(?:^|&amp;) *((?:(?!&amp;).)+)")
_PAIR_RE = re.compile(r"([^=]+?) *= *(.*)")

_INTERNAL_PREFIXES = (
    (re.compile(r"^:(?:분류|category):", re.IGNORECASE), "category:"),
    (re.compile(r"^:(?:파일|file):", re.IGNORECASE), "file:"),
    (re.compile(r"^사용자:"), "user:"),
)


def _plain(ctx: ParseContext, data: str) -> str:
    """Buffer text → plain title: escapes resolved, entities decoded."""
    return unescape_html(ctx.store.resolve(data, "slash"))


# -----------------------------------------------------------------------------
# Files
# -----------------------------------------------------------------------------

def parse_file_options(data: str) -> dict[str, str]:
    options: dict[str, str] = {}
    for m in _OPTION_RE.finditer(data):
        pair = _PAIR_RE.fullmatch(m.group(1).strip())
        if pair:
            options[pair.group(1).strip().lower()] = pair.group(2).strip()
    return options


def _file_style(options: dict[str, str], dark_mode: bool) -> str:
    style = ""
    for key in ("width", "height"):
        if key in options:
            style += f"{key}:{px_add(css_safe(options[key]))};"
    if options.get("align") in ("left", "right"):
        style += f"float:{options['align']};"
    if "bgcolor" in options:
        style += f"background:{dark_split(css_safe(options['bgcolor']), dark_mode)};"
    if "border-radius" in options:
        style += f"border-radius:{px_add(css_safe(options['border-radius']))};"
    if options.get("rendering") == "pixelated":
        style += "image-rendering:pixelated;"
    return style


def _file(ctx: ParseContext, main: str, sub: str | None, original: str) -> str:
    options = parse_file_options(sub or "")
    theme = options.get("theme")
    if theme in ("light", "dark") and (theme == "dark") != ctx.dark_mode:
        return ctx.store.wrap("", "", original)

    name = _plain(ctx, _FILE_RE.sub("", main, count=1))
    alt = escape_html(name)
    if _OUT_RE.match(main):
        src = href = escape_html(name)
        exists = True
    else:
        title = "file:" + name
        stem, dot, ext = name.rpartition(".")
        if not dot:
            stem, ext = name, "jpg"
        src = f"{ctx.config.image_path}{url_pas(sha224_hex(stem))}.{url_pas(ext)}"
        href = ctx.config.wiki_path + url_pas(title)
        exists = ctx.exists(title)
        ctx.add_backlink(title, "file")
        if not exists:
            ctx.add_backlink(title, "no")

    if not exists:
        return ctx.store.wrap(
            f'<a class="wiki_not_exist_link" title="{alt}" '
            f'href="{ctx.config.upload_path}?name={url_pas(name)}">{alt}</a>',
            "",
            original,
        )

    style = _file_style(options, ctx.dark_mode)
    if ctx.config.image_mode == "click":
        element_id = f"{ctx.id_prefix}image_{ctx.next_id('image')}"
        ctx.script.add(f"wikiImageClickLoad({js_string(element_id)});")
        image = (
            f'<span class="wiki_image_load" id="{element_id}" data-src="{src}" '
            f'style="{style}">[{alt}]</span>'
        )
    else:
        image = f'<img class="wiki_image" style="{style}" alt="{alt}" src="{src}" loading="lazy">'

    html = f'<a class="wiki_file_link" title="{alt}" href="{href}">{image}</a>'
    if options.get("align") == "center":
        html = f'<div style="text-align:center;">{html}</div>'
    return ctx.store.wrap(html, "", original)


# -----------------------------------------------------------------------------
# Categories
# -----------------------------------------------------------------------------

def _category(ctx: ParseContext, main: str) -> None:
    data = _CATEGORY_RE.sub("", main, count=1)
    blur = bool(re.search(r"#blur$", data, re.IGNORECASE))
    if blur:
        data = data[:-len("#blur")]
    name = _plain(ctx, data)
    if name in ctx.categories:
        return

    title = "category:" + name
    exists = ctx.exists(title)
    ctx.add_backlink(title, "cat")
    if not exists:
        ctx.add_backlink(title, "no")

    classes = "wiki_category_link"
    if blur:
        classes += " wiki_category_blur"
    if not exists:
        classes += " wiki_not_exist_link"
    shown = escape_html(name)
    ctx.add_category(
        name, f'<a class="{classes}" title="{shown}" href="{ctx.config.wiki_path}{url_pas(title)}">{shown}</a>'
    )


# -----------------------------------------------------------------------------
# Page links
# -----------------------------------------------------------------------------

def _external(ctx: ParseContext, main: str, sub: str | None, original: str) -> str:
    url = escape_html(_plain(ctx, main))
    open_html = f'<a class="wiki_link_out" target="_blank" rel="noopener noreferrer" title="{url}" href="{url}">'
    if sub is None:
        return ctx.store.wrap(open_html + url, "</a>", original)
    return ctx.store.wrap(open_html, "</a>", original, inner=sub)


def resolve_target(ctx: ParseContext, target: str) -> str:
    """Apply the relative and prefix forms of an internal link target."""
    if target == "../":
        return re.sub(r"/[^/]+$", "", ctx.doc_name)
    if target.startswith("/"):
        return ctx.doc_name + target
    for pattern, prefix in _INTERNAL_PREFIXES:
        if pattern.match(target):
            return pattern.sub(prefix, target, count=1)
    return target


def _internal(ctx: ParseContext, main: str, sub: str | None, original: str) -> str:
    target = resolve_target(ctx, main)

    fragment = ""
    # ``&#x27;`` is an escaped quote, not a fragment
    guarded = target.replace("&#x27;", "\0")
    m = re.search(r"#([^#]+)$", guarded)
    if m:
        fragment = _plain(ctx, m.group(1).replace("\0", "&#x27;"))
        target = guarded[:m.start()].replace("\0", "&#x27;")

    title = _plain(ctx, target)
    classes = []
    href = ""
    if title:
        href = ctx.config.wiki_path + url_pas(title)
        ctx.add_backlink(title, "", fragment)
        if not ctx.exists(title):
            ctx.add_backlink(title, "no")
            classes.append("wiki_not_exist_link")
        if title == ctx.doc_name and not ctx.in_include:
            classes.append("wiki_same_link")
    if fragment:
        href += "#" + url_pas(fragment)
    ctx.link_count += 1

    shown_title = escape_html(title + ("#" + fragment if fragment else ""))
    class_attr = f' class="{" ".join(classes)}"' if classes else ""
    open_html = f'<a{class_attr} title="{shown_title}" href="{href}">'
    if sub is None:
        return ctx.store.wrap(open_html + main, "</a>", original)
    return ctx.store.wrap(open_html, "</a>", original, inner=sub)


# -----------------------------------------------------------------------------
# Pass
# -----------------------------------------------------------------------------

def manage_link(ctx: ParseContext, text: str) -> str:
    budget = len(_LINK_RE.findall(text)) * 4
    while True:
        m = _LINK_RE.search(text)
        if not m:
            break
        if budget < 0:
            log.error("Link pass did not converge in %r", ctx.doc_name)
            break
        budget -= 1

        main, sub, original = m.group(1), m.group(2), m.group(0)
        start, end = m.start(), m.end()

        if _FILE_RE.match(main):
            replacement = _file(ctx, main, sub, original)
        elif _CATEGORY_RE.match(main):
            _category(ctx, main)
            replacement = ""
            # a category link alone on its line takes the line with it
            if text[start - 1:start] == "\n" and text[end:end + 1] == "\n":
                end += 1
        elif _INTER_RE.match(main):
            replacement = ""
        elif _EXTERNAL_RE.match(main):
            replacement = _external(ctx, main, sub, original)
        else:
            replacement = _internal(ctx, main, sub, original)

        text = text[:start] + replacement + text[end:]
    return text


# -----------------------------------------------------------------------------
