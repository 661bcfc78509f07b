#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""Tests for [include(...)] and the side data of nested renders."""
# -----------------------------------------------------------------------------

from __future__ import annotations

from namumark.render.context import Backlink, IncludeRecord, ParseContext
from namumark.render.include import parse_include_args, substitute_params
from namumark.services.lookup import MemoryLookup
from namumark.services.renderer import render
from tests.conftest import FIXED_NOW, html_of, run


# =============================================================================
# Parameters
# =============================================================================

def test_substitute_value_and_default():
    assert substitute_params("Hi @name=World@!", {"name": "Bob"}) == "Hi Bob!"
    assert substitute_params("Hi @name=World@!", {}) == "Hi World!"


def test_bare_parameter_without_value_is_empty():
    assert substitute_params("[@who@]", {}) == "[]"


def test_escaped_parameter_is_kept():
    assert substitute_params("\\@name@", {"name": "x"}) == "\\@name@"
    assert substitute_params("\\\\@name@", {"name": "x"}) == "\\\\x"


def test_parse_include_args():
    ctx = ParseContext()
    title, values = parse_include_args(ctx, "Template, name=Bob, cat=분류:Foo")
    assert title == "Template"
    assert values == {"name": "Bob", "cat": ":분류:Foo"}


def test_page_viewed_directly_shows_defaults():
    assert html_of("Hello @name=World@!", doc_name="Template") == "Hello World!"


def test_escaped_parameter_renders_literally():
    assert html_of("\\@name@") == "@name@"


# =============================================================================
# Include
# =============================================================================

def test_include_with_parameter():
    html = html_of("[include(Template, name=Bob)]")
    assert html == '<div id="include_0" class="wiki_include">Hello Bob!</div>'


def test_include_with_default():
    assert "Hello World!" in html_of("[include(Template)]")


def test_include_records_side_data():
    result = run("[include(Template)]")
    assert Backlink("Test", "Template", "include") in result.data.backlinks
    assert result.data.includes == [IncludeRecord("include_0", "Template")]


def test_include_ids_count_up():
    html = html_of("[include(Template)]\n[include(Exists)]")
    assert 'id="include_0"' in html
    assert 'id="include_1"' in html


def test_missing_include():
    result = run("[include(Nope)]")
    assert result.html == '<div><a class="wiki_not_exist_link" href="/w/Nope">(Nope)</a></div>'
    assert Backlink("Test", "Nope", "no") in result.data.backlinks


def test_nested_include_is_dropped():
    html = html_of("[include(Nested)]")
    assert "outer  end" in html
    assert "Hello" not in html


def test_include_link_option():
    html = html_of("[include(Template)]", include_link=True)
    assert '<div class="wiki_include_link"><a href="/w/Template">(Template)</a></div>' in html


def test_included_links_and_categories_reach_the_parent():
    lookup = MemoryLookup({"Linker": "[[Exists]]\n[[분류:Known]]", "Exists": "", "category:Known": ""})
    result = render("[include(Linker)]", "Host", lookup=lookup, now=FIXED_NOW)
    assert Backlink("Host", "Exists", "") in result.data.backlinks
    assert result.data.categories == ["Known"]
    assert result.data.link_count == 1
    assert result.html.count('class="wiki_category"') == 1


def test_included_ids_are_prefixed():
    lookup = MemoryLookup({"Formula": "[math(x)]"})
    result = render("[include(Formula)]", "Host", lookup=lookup, now=FIXED_NOW)
    assert 'id="include_0_math_0"' in result.html
    assert 'document.getElementById("include_0_math_0")' in result.js


# =============================================================================
# Wiki blocks
# =============================================================================

def test_wiki_block_side_data_is_merged():
    result = run("{{{#!wiki\n[[Exists]] [[분류:Known]]\n}}}")
    assert result.data.link_count == 1
    assert result.data.categories == ["Known"]


def test_wiki_block_headings_do_not_open_sections_in_parent():
    result = run("{{{#!wiki\n== Inner ==\n}}}")
    assert "wiki_heading_edit" not in result.html
    assert "wiki_toc" not in result.html


# -----------------------------------------------------------------------------
