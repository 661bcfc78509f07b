#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""Tests for = headings =, section numbering and the table of contents."""
# -----------------------------------------------------------------------------

from __future__ import annotations

import pytest

from namumark.render.context import TocEntry
from namumark.render.finalize import build_toc
from namumark.render.headings import parse_heading, section_paths
from tests.conftest import html_of, run


# ── Heading lines ────────────────────────────────────────────────────────────

def test_parse_heading():
    assert parse_heading("== Title ==") == (2, False, "Title")
    assert parse_heading("=# Folded #=") == (1, True, "Folded")
    assert parse_heading("====== Six ======") == (6, False, "Six")


@pytest.mark.parametrize("line", ["== A =", "= A ==", "==  ==", "plain text", "== A == tail"])
def test_not_a_heading(line):
    assert parse_heading(line) is None


def test_mismatched_heading_stays_text():
    assert html_of("== A =") == "== A ="


# ── Section numbers ──────────────────────────────────────────────────────────

def test_section_paths_drop_unused_top_levels():
    assert section_paths([2, 2, 2]) == ["1", "2", "3"]
    assert section_paths([3, 3]) == ["1", "2"]


def test_section_paths_nest():
    assert section_paths([1, 2, 2, 1]) == ["1", "1.1", "1.2", "2"]
    assert section_paths([2, 3, 2]) == ["1", "1.1", "2"]


def test_rendered_paths_and_toc_data():
    result = run("== A ==\n=== B ===\n== C ==")
    assert [entry.path for entry in result.data.toc] == ["1", "1.1", "2"]
    assert [entry.text for entry in result.data.toc] == ["A", "B", "C"]
    assert '<h2 id="s-1">' in result.html
    assert '<h3 id="s-1.1">' in result.html


def test_toc_text_is_plain():
    result = run("== '''Bold''' title ==")
    assert result.data.toc == [TocEntry("1", "Bold title")]


# ── Heading markup ───────────────────────────────────────────────────────────

def test_heading_opens_a_section():
    html = html_of("== A ==\nbody")
    assert '<a class="wiki_heading_num" href="#toc">1.</a> A' in html
    assert '<div id="heading_1" class="wiki_heading_section" style="display: block;">body</div>' in html


def test_sections_close_before_the_next_heading():
    html = html_of("== A ==\none\n== B ==\ntwo")
    assert 'style="display: block;">one</div><h2 id="s-2">' in html
    assert html.endswith("two</div>")


def test_folded_heading_section_hidden():
    result = run("==# A #==\nhidden")
    assert 'style="display: none;">hidden</div>' in result.html
    assert ">⊕</a>" in result.html
    assert result.js.count("function wikiHeadingFolding") == 1


def test_edit_link():
    html = html_of("== A ==", doc_name="Test")
    assert 'href="/edit_section/1/Test">✎</a>' in html


def test_edit_links_can_be_disabled():
    assert "wiki_heading_edit" not in html_of("== A ==", heading_edit_links=False)


def test_footnotes_follow_the_last_section():
    html = html_of("== A ==\nx[* note]")
    assert html.index("</div><div class=\"wiki_footnote\">") > html.index('id="heading_1"')


# ── Table of contents ────────────────────────────────────────────────────────

def test_auto_toc_before_first_heading():
    html = html_of("intro\n== A ==\n== B ==")
    assert html.startswith("intro")
    assert html.index('<div class="wiki_toc" id="toc">') < html.index('<h2 id="s-1">')


def test_toc_lists_entries():
    html = html_of("== A ==\n=== B ===")
    assert '<li><a href="#s-1">1.</a> A</li>' in html
    assert '<ul><li><a href="#s-1.1">1.1.</a> B</li></ul>' in html


def test_toc_off():
    assert "wiki_toc" not in html_of("== A ==", toc_mode="off")


def test_toc_manual_needs_marker():
    assert "wiki_toc" not in html_of("== A ==", toc_mode="manual")
    assert "wiki_toc" in html_of("[목차]\n== A ==", toc_mode="manual")


def test_build_toc_empty():
    assert build_toc([]) == ""


def test_no_toc_without_headings():
    assert "wiki_toc" not in html_of("[toc]\ntext")


# -----------------------------------------------------------------------------
