#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""Tests for inline styling, rules, math and the finishing touches."""
# -----------------------------------------------------------------------------

from __future__ import annotations

import pytest

from namumark.render.finalize import fix_nested_anchors
from namumark.services.renderer import extract_categories, render, render_html
from tests.conftest import html_of, run


# ── Inline styles ────────────────────────────────────────────────────────────

@pytest.mark.parametrize("source, expected", [
    ("'''b'''",  "<b>b</b>"),
    ("''i''",    "<i>i</i>"),
    ("__u__",    "<u>u</u>"),
    ("^^up^^",   "<sup>up</sup>"),
    (",,down,,", "<sub>down</sub>"),
    ("--gone--", "<s>gone</s>"),
    ("~~gone~~", "<s>gone</s>"),
])
def test_inline_styles(source, expected):
    assert html_of(source) == expected


def test_bold_mode_plain_and_delete():
    assert html_of("a'''b'''c", bold_mode="plain") == "abc"
    assert html_of("a'''b'''c", bold_mode="delete") == "ac"


def test_strike_mode_delete():
    assert html_of("a~~b~~c", strike_mode="delete") == "ac"


def test_escaped_markup_is_literal():
    assert html_of("\\~~x~~") == "~~x~~"


# ── Rules and line breaks ────────────────────────────────────────────────────

def test_horizontal_rule():
    assert html_of("a\n----\nb") == "a<hr>b"


def test_too_many_dashes_is_not_a_rule():
    assert "<hr>" not in html_of("a\n----------\nb")


def test_newlines_become_br():
    assert html_of("a\nb") == "a<br>b"


# ── Math ─────────────────────────────────────────────────────────────────────

def test_math_span_and_script():
    result = run("[math(x^2)]")
    assert result.html == '<span id="math_0" class="wiki_math"></span>'
    assert 'katex.render("x^2", document.getElementById("math_0"));' in result.js


def test_math_ids_count_up():
    result = run("[math(a)] [math(b)]")
    assert 'id="math_1"' in result.html


# ── Finalize ─────────────────────────────────────────────────────────────────

def test_font_size_wrapper():
    html = html_of("x", font_size=16)
    assert html == '<div class="wiki_body" style="font-size: 16px;">x</div>'


def test_nested_anchors_keep_outermost():
    html = '<a href="/a">x <a href="/b">y</a> z</a>'
    assert fix_nested_anchors(html) == '<a href="/a">x y z</a>'


def test_no_tokens_left_in_output():
    html = html_of("'''a''' [[Exists]] {{{#red c}}} [* n] || x ||")
    assert "<render_" not in html
    assert "<slash_" not in html
    assert "<front_br>" not in html


# ── Renderer helpers ─────────────────────────────────────────────────────────

def test_render_html_shortcut():
    assert render_html("'''x'''") == "<b>x</b>"


def test_extract_categories():
    assert extract_categories("[[분류:A]]\n[[분류:B]]\n[[분류:A]]") == ["A", "B"]


def test_render_rejects_non_text():
    with pytest.raises(TypeError):
        render(b"bytes")


def test_empty_document():
    result = render("")
    assert result.html == ""
    assert result.data.backlinks == []


# -----------------------------------------------------------------------------
