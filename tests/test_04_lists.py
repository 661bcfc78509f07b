#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""Tests for quotes, unordered lists and the ordered-list numbering engine."""
# -----------------------------------------------------------------------------

from __future__ import annotations

from namumark.render.lists import ListNumbering, number_label, to_alpha, to_roman
from tests.conftest import html_of


# =============================================================================
# Numbering helpers
# =============================================================================

def test_to_alpha_is_bijective_base_26():
    assert to_alpha(1) == "a"
    assert to_alpha(26) == "z"
    assert to_alpha(27) == "aa"
    assert to_alpha(28, upper=True) == "AB"


def test_to_roman():
    assert to_roman(4) == "iv"
    assert to_roman(9) == "ix"
    assert to_roman(1994, upper=True) == "MCMXCIV"


def test_number_label_by_kind():
    assert number_label("1", 3) == "3"
    assert number_label("a", 3) == "c"
    assert number_label("I", 3) == "III"


def test_counters_advance_and_reset_deeper_levels():
    numbering = ListNumbering()
    assert numbering.next("1", 1) == "1"
    assert numbering.next("1", 2) == "1"
    assert numbering.next("1", 2) == "2"
    assert numbering.next("1", 1) == "2"
    assert numbering.next("1", 2) == "1"


def test_explicit_start():
    numbering = ListNumbering()
    assert numbering.next("1", 1, start=5) == "5"
    assert numbering.next("1", 1) == "6"


def test_type_switch_restarts_other_types():
    numbering = ListNumbering()
    numbering.next("1", 1)
    numbering.next("1", 1)
    assert numbering.next("a", 1) == "a"
    assert numbering.next("1", 1) == "1"


def test_nested_type_keeps_outer_counter():
    numbering = ListNumbering()
    assert numbering.next("1", 1) == "1"
    assert numbering.next("a", 2) == "a"
    assert numbering.next("1", 1) == "2"


def test_full_path_numbering():
    numbering = ListNumbering(full_path=True)
    assert numbering.next("1", 1) == "1"
    assert numbering.next("1", 2) == "1-1"
    assert numbering.next("1", 2) == "1-2"
    assert numbering.next("1", 1) == "2"


# =============================================================================
# Rendering
# =============================================================================

def test_ordered_list_numbers_one_two_three():
    html = html_of("1. a\n1. b\n1. c")
    assert '<span class="wiki_ol_num">1.</span> a' in html
    assert '<span class="wiki_ol_num">2.</span> b' in html
    assert '<span class="wiki_ol_num">3.</span> c' in html
    assert html.startswith('<ol class="wiki_ol">')


def test_ordered_list_roman():
    html = html_of("I. x\nI. y")
    assert '<span class="wiki_ol_num">I.</span> x' in html
    assert '<span class="wiki_ol_num">II.</span> y' in html


def test_ordered_list_alpha():
    html = html_of("a. x\na. y")
    assert '<span class="wiki_ol_num">b.</span> y' in html


def test_ordered_list_full_path_option():
    html = html_of("1. a\n  1. b\n  1. c\n1. d", list_numbering="full")
    assert '<span class="wiki_ol_num">1-2.</span> c' in html
    assert '<span class="wiki_ol_num">2.</span> d' in html


def test_single_numbered_line_is_text():
    assert html_of("1. alone") == "1. alone"


def test_unordered_list():
    html = html_of(" * a\n * b")
    assert html == (
        '<ul class="wiki_ul">'
        '<li style="margin-left: 20px; list-style: unset;">a</li>'
        '<li style="margin-left: 20px; list-style: unset;">b</li>'
        "</ul>"
    )


def test_unordered_list_depth_glyphs():
    html = html_of(" * a\n  * b\n   * c")
    assert "margin-left: 40px; list-style: circle;" in html
    assert "margin-left: 60px; list-style: square;" in html


def test_list_items_keep_inline_markup():
    assert "<b>x</b>" in html_of(" * '''x'''")


def test_quote_renders_body_as_document():
    assert html_of("> '''q'''") == '<blockquote class="wiki_quote"><b>q</b></blockquote>'


def test_quote_lines_join():
    html = html_of("> one\n> two")
    assert html == '<blockquote class="wiki_quote">one<br>two</blockquote>'


def test_nested_quote():
    html = html_of("> > inner")
    assert html.count("<blockquote") == 2


# -----------------------------------------------------------------------------
