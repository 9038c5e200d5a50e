# tests/test_compose.py

from datetime import date

from lucal.core.types import RenderedBlock
from lucal.render.annotate import COLOR_END, STATUS_COLORS
from lucal.render.compose import LEGEND_TEXT, build_block, build_blocks, color_legend, compose
from lucal.render.grid import build_month_grid
from lucal.render.width import string_width, strip_ansi

from conftest import synthetic_weeks


def block(*lines):
    return RenderedBlock(lines=tuple(lines), width=max(map(string_width, lines)), height=len(lines))


def test_compose_empty():
    assert compose([]) == ""


def test_compose_single_block():
    assert compose([block("a", "b")]) == "a\nb"


def test_compose_inserts_one_blank_line():
    assert compose([block("a", "b"), block("c")]) == "a\nb\n\nc"
    assert compose([block("a"), block("b"), block("c")]).split("\n") == ["a", "", "b", "", "c"]


def test_build_block_plain(november_2025):
    grid = build_month_grid(november_2025, "2025 年 11 月")
    b = build_block(grid, color=False)
    assert b.lines[0] == "2025 年 11 月"
    assert b.lines[1] == ""
    assert b.lines[2:] == grid.lines
    assert b.height == len(b.lines)
    assert b.width == 7 * grid.column_width
    assert "\x1b" not in "\n".join(b.lines)


def test_build_block_colored(november_2025):
    grid = build_month_grid(november_2025, "2025 年 11 月")
    b = build_block(grid, color=True)
    assert strip_ansi(b.lines[0]) == "2025 年 11 月"
    assert b.lines[0] != "2025 年 11 月"
    assert tuple(strip_ansi(line) for line in b.lines[2:]) == grid.lines
    assert b.width == 7 * grid.column_width
    num = grid.numerals[18]
    assert STATUS_COLORS["today"] + "18" + COLOR_END in b.lines[2 + num.line]


def test_build_blocks_for_a_year():
    from lucal.core.types import MonthView

    views = [
        MonthView(year=2025, month=m, title=f"2025 年 {m} 月", weeks=tuple(synthetic_weeks(2025, m)))
        for m in range(1, 13)
    ]
    blocks = build_blocks(views, color=False)
    assert len(blocks) == 12
    doc = compose(blocks)
    assert doc.split("\n")[0] == "2025 年 1 月"
    assert doc.count("\n\n2025 年 ") == 11


def test_legend():
    assert color_legend(color=False) == LEGEND_TEXT
    assert strip_ansi(color_legend(color=True)) == LEGEND_TEXT


def test_end_to_end_with_fixed_clock():
    """November 2025, no holiday data, clock at 2025-11-18."""
    weeks = synthetic_weeks(2025, 11, today=date(2025, 11, 18))
    doc = compose([build_block(build_month_grid(weeks, "2025 年 11 月"))])
    lines = doc.split("\n")
    assert strip_ansi(lines[0]) == "2025 年 11 月"
    numeral_rows = [l for l in lines[4:] if strip_ansi(l).strip()[:1].isdigit()]
    assert len(numeral_rows) in (5, 6)
    assert STATUS_COLORS["today"] + "18" + COLOR_END in doc
    assert doc.count(STATUS_COLORS["today"]) == 2
