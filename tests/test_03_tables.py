#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""Tests for || table || syntax: layout and rendering."""
# -----------------------------------------------------------------------------

from __future__ import annotations

from namumark.render.tables import layout_table, parse_cell_params
from namumark.render.tools import escape_html
from tests.conftest import html_of


def _layout(source: str, dark_mode: bool = False):
    return layout_table(escape_html(source), dark_mode)


# =============================================================================
# Layout
# =============================================================================

def test_single_row_two_cells():
    layout = _layout("|| a || b ||")
    assert len(layout.rows) == 1
    assert [cell.data for cell in layout.rows[0]] == ["a", "b"]
    assert [cell.col for cell in layout.rows[0]] == [0, 1]


def test_rows_split_on_line_end():
    layout = _layout("|| a || b ||\n|| c || d ||")
    assert len(layout.rows) == 2
    assert [cell.data for cell in layout.rows[1]] == ["c", "d"]


def test_pipe_run_is_colspan_hint():
    layout = _layout("|| a || b ||\n|||| wide ||")
    assert layout.rows[0][0].colspan == 1
    assert layout.rows[1][0].colspan == 2


def test_explicit_colspan_overrides_hint():
    layout = _layout("||<-3> wide ||")
    assert layout.rows[0][0].colspan == 3


def test_rowspan_pushes_next_row_right():
    layout = _layout("||<|2> a || b || c ||\n|| d || e ||\n|| f || g || h ||")
    assert layout.rows[0][0].rowspan == 2
    assert [cell.col for cell in layout.rows[1]] == [1, 2]
    assert [cell.col for cell in layout.rows[2]] == [0, 1, 2]


def test_colspan_advances_column():
    layout = _layout("||<-2> a || b ||")
    assert [cell.col for cell in layout.rows[0]] == [0, 2]


def test_caption():
    layout = _layout("|Title| a || b ||")
    assert layout.caption == "Title"
    assert [cell.data for cell in layout.rows[0]] == ["a", "b"]


def test_multiline_cell():
    layout = _layout("|| first\nsecond || b ||")
    assert layout.rows[0][0].data == "first\nsecond"


# =============================================================================
# Cell parameters
# =============================================================================

def test_auto_alignment_from_spaces():
    assert "text-align:center;" in parse_cell_params("||", "", " x ")[0].td
    assert "text-align:right;" in parse_cell_params("||", "", " x")[0].td
    assert "text-align" not in parse_cell_params("||", "", "x ")[0].td


def test_explicit_alignment_wins():
    params, data = parse_cell_params("||", "&lt;(&gt;", " x ")
    assert "text-align:left;" in params.td
    assert data == "x"


def test_bare_colour_is_background():
    params, _ = parse_cell_params("||", "&lt;#f00&gt;", "x")
    assert "background:#f00;" in params.td


def test_named_parameters():
    params, _ = parse_cell_params("||", "&lt;bgcolor=red&gt;&lt;width=100&gt;&lt;rowcolor=blue&gt;", "x")
    assert "background:red;" in params.td
    assert "width:100px;" in params.td
    assert "color:blue;" in params.tr


def test_column_colour_applies_to_later_rows():
    layout = _layout("||<colbgcolor=red> a || b ||\n|| c || d ||")
    assert "background:red;" in layout.rows[1][0].style
    assert "background:red;" not in layout.rows[1][1].style


def test_unknown_parameter_is_kept_as_text():
    params, data = parse_cell_params("||", "&lt;foo=bar&gt;", "x")
    assert data == "&lt;foo=bar&gt;x"


def test_table_width_styles_wrapper():
    layout = _layout("||<tablewidth=300> a ||")
    assert "width:300px;" in layout.div_style


def test_table_height_styles_table():
    layout = _layout("||<tableheight=200> a ||")
    assert "height:200px;" in layout.table_style
    assert layout.rows[0][0].data == "a"


def test_table_text_align_styles_table():
    layout = _layout("||<tabletextalign=center> a ||")
    assert "text-align:center;" in layout.table_style
    assert "&lt;" not in html_of("||<tabletextalign=center> a ||")


# =============================================================================
# Rendering
# =============================================================================

def test_table_html():
    html = html_of("|| a || b ||")
    assert html == (
        '<div class="table_safe"><table class="wiki_table"><tr>'
        '<td style="text-align:center;">a</td>'
        '<td style="text-align:center;">b</td>'
        "</tr></table></div>"
    )


def test_table_cells_keep_inline_markup():
    html = html_of("||'''bold''' || [[Exists]] ||")
    assert "<td><b>bold</b></td>" in html
    assert 'href="/w/Exists"' in html


def test_table_rowspan_attribute():
    html = html_of("||<|2> a || b ||\n|| c ||")
    assert 'rowspan="2"' in html


def test_table_between_paragraphs():
    html = html_of("before\n|| a ||\nafter")
    assert html.startswith("before")
    assert html.endswith("after")
    assert "<table" in html


def test_unterminated_table_is_text():
    assert "<table" not in html_of("|| a")


# -----------------------------------------------------------------------------
