#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Macros
======
``[name(args)]`` and ``[name]``.  Names are matched case-insensitively;
an unknown macro is left exactly as written.

With arguments:
  youtube, nicovideo, navertv, kakaotv, vimeo   embedded video player
  ruby(base, ruby=text, color=c)                 ruby annotation
  anchor(name)                                   link target
  age(YYYY-MM-DD), dday(YYYY-MM-DD)              computed from the render time
  pagecount(...)                                 always "0"
  toc(...)                                       suppress the automatic TOC

Without:
  date / datetime, br, clearfix, toc / tableofcontents / 목차, pagecount
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from namumark.render.context import ParseContext
from namumark.render.tools import css_safe, escape_html, px_add


log = logging.getLogger(__name__)

_DOUBLE_RE = re.compile(r"\[([^\[(]+)\(([^()]+)\)\]")
_SINGLE_RE = re.compile(r"\[([^\[\]]+)\]")
_UNKNOWN_RE = re.compile(r"<macro>((?:(?!</macro>).)*)</macro>", re.DOTALL)
_ARG_RE = re.compile(r"(?:^|,) *([^,]+)")
_PAIR_RE = re.compile(r"([^=]+?) *= *(.*)", re.DOTALL)
_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


# -----------------------------------------------------------------------------
# Video embeds
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class EmbedProvider:
    url: str
    prefix: str
    width: str = "640px"
    height: str = "360px"


PROVIDERS = {
    "youtube":   EmbedProvider("https://www.youtube.com/embed/{code}",
                               r"^https?://(?:youtu\.be/|(?:www\.)?youtube\.com/watch\?v=)"),
    "nicovideo": EmbedProvider("https://embed.nicovideo.jp/watch/{code}",
                               r"^https?://(?:www\.)?nicovideo\.jp/watch/"),
    "navertv":   EmbedProvider("https://tv.naver.com/embed/{code}",
                               r"^https?://tv\.naver\.com/v/"),
    "kakaotv":   EmbedProvider("https://tv.kakao.com/embed/player/cliplink/{code}?service=kakao_tv",
                               r"^https?://tv\.kakao\.com/v/"),
    "vimeo":     EmbedProvider("https://player.vimeo.com/video/{code}",
                               r"^https?://(?:www\.)?vimeo\.com/"),
}

VIDEO_OPTIONS = ("width", "height", "start", "end", "time")


def _split_args(args: str) -> tuple[list[str], dict[str, str]]:
    bare: list[str] = []
    named: dict[str, str] = {}
    for m in _ARG_RE.finditer(args):
        arg = m.group(1).strip()
        pair = _PAIR_RE.fullmatch(arg)
        if pair and pair.group(1).lower() in VIDEO_OPTIONS + ("ruby", "color"):
            named[pair.group(1).lower()] = pair.group(2).strip()
        else:
            bare.append(arg)
    return bare, named


def video_embed(provider: str, args: str) -> str:
    embed = PROVIDERS[provider]
    bare, named = _split_args(args)
    code = re.sub(embed.prefix, "", bare[0]) if bare else ""

    width = px_add(css_safe(named.get("width", ""))) or embed.width
    height = px_add(css_safe(named.get("height", ""))) or embed.height

    query = []
    if provider == "youtube":
        query += [f"{key}={named[key]}" for key in ("start", "end") if key in named]
    elif provider == "nicovideo" and "time" in named:
        query.append(f"from={named['time']}")
    src = embed.url.format(code=code)
    if query:
        src += ("&amp;" if "?" in src else "?") + "&amp;".join(query)
    if provider == "vimeo" and "time" in named:
        src += f"#t={named['time']}s"

    return (
        f'<iframe class="wiki_video" style="width: {width}; height: {height};" '
        f'src="{src}" frameborder="0" allowfullscreen></iframe>'
    )


# -----------------------------------------------------------------------------
# Dates
# -----------------------------------------------------------------------------

def _parse_date(data: str) -> Optional[datetime]:
    data = data.strip()
    if not _DATE_RE.fullmatch(data):
        return None
    try:
        return datetime.strptime(data, "%Y-%m-%d")
    except ValueError:
        return None


def age(data: str, now: datetime) -> str:
    """Whole years since *data*; future or malformed dates are invalid."""
    born = _parse_date(data)
    if born is None or born > now:
        return "invalid date"
    return str(int((now - born).total_seconds() // (365 * 24 * 60 * 60)))


def dday(data: str, now: datetime) -> str:
    """Days since *data*: ``+N`` after, ``-N`` before, and ``-0`` on the day itself."""
    target = _parse_date(data)
    if target is None:
        return "invalid date"
    days = math.floor((now - target).total_seconds() / (24 * 60 * 60))
    if days > 0:
        return f"+{days}"
    if days == 0:
        return "-0"
    return str(days)


# -----------------------------------------------------------------------------
# Pass
# -----------------------------------------------------------------------------

def _double(ctx: ParseContext, m: re.Match) -> str:
    name = m.group(1).strip().lower()
    args = m.group(2)
    original = m.group(0)

    if name in PROVIDERS:
        return ctx.store.wrap(video_embed(name, args), "", original)

    if name == "ruby":
        bare, named = _split_args(args)
        base = ctx.store.revert(bare[0] if bare else "", "render")
        ruby = ctx.store.revert(named.get("ruby", ""), "render")
        color = css_safe(named.get("color", ""))
        rt_style = f' style="color: {color};"' if color else ""
        return ctx.store.wrap(
            f"<ruby>{base}<rp>(</rp><rt{rt_style}>{ruby}</rt><rp>)</rp></ruby>", "", original
        )

    if name == "anchor":
        anchor = escape_html(ctx.store.revert(args.strip(), "render"))
        return ctx.store.wrap(f'<span id="{anchor}"></span>', "", original)

    if name == "age":
        return ctx.store.wrap(age(args, ctx.now), "", original)
    if name == "dday":
        return ctx.store.wrap(dday(args, ctx.now), "", original)
    if name == "pagecount":
        return ctx.store.wrap("0", "", original)
    if name == "toc":
        return "<toc_no_auto>"

    return f"<macro>{m.group(1)}({args})</macro>"


def _single(ctx: ParseContext, m: re.Match) -> str:
    name = m.group(1).strip().lower()
    original = m.group(0)

    if name in ("date", "datetime"):
        return ctx.store.wrap(ctx.now.strftime("%Y-%m-%d %H:%M:%S"), "", original)
    if name == "br":
        return ctx.store.wrap("<br>", "", original)
    if name == "clearfix":
        return ctx.store.wrap('<div style="clear:both"></div>', "", original)
    if name in ("toc", "tableofcontents", "목차"):
        return "<toc_need_part>"
    if name == "pagecount":
        return ctx.store.wrap(str(ctx.lookup.count()), "", original)

    return f"<macro>{m.group(1)}</macro>"


def manage_macro(ctx: ParseContext, text: str) -> str:
    text = _DOUBLE_RE.sub(lambda m: _double(ctx, m), text)
    text = _SINGLE_RE.sub(lambda m: _single(ctx, m), text)
    return _UNKNOWN_RE.sub(r"[\1]", text)


# -----------------------------------------------------------------------------
