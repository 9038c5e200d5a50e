# tests/test_annotate.py

import re

from lucal.core.types import HighlightDirective
from lucal.render.annotate import (
    COLOR_END,
    STATUS_COLORS,
    annotate,
    build_directives,
    find_token,
    resolve_status,
)
from lucal.render.grid import build_month_grid
from lucal.render.width import string_width, strip_ansi

from conftest import synthetic_weeks

TODAY = STATUS_COLORS["today"]
HOLIDAY = STATUS_COLORS["holiday"]
WORKDAY = STATUS_COLORS["workday"]


def spans(line, color):
    return re.findall(re.escape(color) + r"(.*?)" + re.escape(COLOR_END), line)


def test_single_digit_never_matches_inside_two_digits():
    out = annotate([" 1  11 "], [HighlightDirective(day=1, label="  ", status="today")])
    assert out == [" " + TODAY + "1" + COLOR_END + "  11 "]
    assert len(spans(out[0], TODAY)) == 1


def test_two_digit_day_found_by_search():
    out = annotate([" 1  11 "], [HighlightDirective(day=11, label="  ", status="holiday")])
    assert out == [" 1  " + HOLIDAY + "11" + COLOR_END + " "]


def test_find_token_bounds():
    assert find_token(" 1  11 ", "1") == (1, 2)
    assert find_token("11 1", "1") == (3, 4)
    assert find_token("│1│", "1") == (1, 2)
    assert find_token("21 12", "1") is None
    assert find_token(" 1 1", "1", [(1, 2, "")]) == (3, 4)


def test_label_on_following_line_by_search():
    lines = [" 1    2  ", " 初一  初二 "]
    directives = [HighlightDirective(day=2, label="初二", status="workday")]
    out = annotate(lines, directives)
    assert spans(out[0], WORKDAY) == ["2"]
    assert spans(out[1], WORKDAY) == ["初二"]


def test_identical_labels_are_each_wrapped_once():
    lines = [" 1    2  ", "          "]
    directives = [
        HighlightDirective(day=1, label="  ", status="today"),
        HighlightDirective(day=2, label="  ", status="holiday"),
    ]
    out = annotate(lines, directives)
    assert len(spans(out[1], TODAY)) == 1
    assert len(spans(out[1], HOLIDAY)) == 1
    assert strip_ansi(out[1]) == lines[1]


def test_color_disabled_is_identity(november_2025):
    grid = build_month_grid(november_2025, "t")
    lines = list(grid.lines)
    assert annotate(lines, build_directives(grid), color=False) == lines


def test_inputs_are_not_mutated():
    lines = [" 1  11 "]
    annotate(lines, [HighlightDirective(day=1, label="  ", status="today")])
    assert lines == [" 1  11 "]


def test_precedence(holiday, workday, november_2025):
    from dataclasses import replace

    day = november_2025[3][2]  # 2025-11-18
    assert day.day_of_month == 18 and day.is_today
    assert resolve_status(day) == "today"
    assert resolve_status(replace(day, holiday=holiday)) == "holiday"
    assert resolve_status(replace(day, holiday=workday)) == "workday"
    assert resolve_status(replace(day, is_today=False)) is None


def test_today_that_is_a_holiday_uses_holiday_color(holiday):
    from datetime import date

    weeks = synthetic_weeks(2025, 10, today=date(2025, 10, 1), holidays={1: holiday})
    grid = build_month_grid(weeks, "t")
    directives = build_directives(grid)
    assert [(d.day, d.status) for d in directives] == [(1, "holiday")]
    out = annotate(grid.lines, directives)
    text = "\n".join(out)
    assert TODAY not in text
    assert spans(text, HOLIDAY) == ["1", "十月"]


def test_positions_from_grid_keep_alignment(holiday, workday):
    from datetime import date

    weeks = synthetic_weeks(
        2025, 10,
        today=date(2025, 10, 18),
        holidays={1: holiday, 2: holiday, 11: workday},
    )
    grid = build_month_grid(weeks, "t")
    out = annotate(grid.lines, build_directives(grid))
    for before, after in zip(grid.lines, out):
        assert strip_ansi(after) == before
        assert string_width(after) == string_width(before)

    num = grid.numerals[11]
    assert spans(out[num.line], WORKDAY) == ["11"]
    assert spans(out[num.line + 1], WORKDAY) == ["十一"]
    # day 1 is colored once, and not inside 11
    assert spans("\n".join(out), HOLIDAY).count("1") == 1
    assert spans(out[grid.numerals[18].line], TODAY) == ["18"]
