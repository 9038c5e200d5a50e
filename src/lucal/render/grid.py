from __future__ import annotations

from typing import Dict, List, Sequence

from ..core.errors import GridShapeError
from ..core.types import CellSpan, Day, MonthGrid, WeekRow
from .width import pad_right, string_width

WEEKDAYS = ("日", "一", "二", "三", "四", "五", "六")  # Sunday first

CELL_PADDING = 1
MIN_CONTENT_WIDTH = 4
BLANK_LABEL = "  "


def numeral_text(day: Day) -> str:
    if not day.in_month:
        return ""
    return f"{day.day_of_month:2d}"


def label_text(day: Day) -> str:
    if not day.in_month:
        return ""
    return day.secondary_label or BLANK_LABEL


def column_width(weeks: Sequence[WeekRow]) -> int:
    w = MIN_CONTENT_WIDTH
    for wk in weeks:
        for day in wk:
            w = max(w, string_width(numeral_text(day)), string_width(label_text(day)))
    return w + 2 * CELL_PADDING


def cell(content: str, width: int) -> str:
    pad = " " * CELL_PADDING
    return pad + pad_right(content, width - 2 * CELL_PADDING) + pad


def _check_weeks(weeks: Sequence[WeekRow]) -> None:
    for i, wk in enumerate(weeks):
        if len(wk) != len(WEEKDAYS):
            raise GridShapeError(f"week {i} has {len(wk)} days, expected {len(WEEKDAYS)}")


def build_month_grid(weeks: Sequence[WeekRow], title: str) -> MonthGrid:
    """Lay out one month as fixed-width text cells.

    Row order is: weekday header, blank, then numeral and label rows for each
    week with a blank row between weeks. The content offset of every in-month
    numeral and label is recorded so the annotator can style cells without
    searching the text.
    """
    _check_weeks(weeks)
    w = column_width(weeks)

    rows: List[tuple] = []
    numerals: Dict[int, CellSpan] = {}
    labels: Dict[int, CellSpan] = {}

    def blank_row() -> tuple:
        return tuple(cell("", w) for _ in WEEKDAYS)

    def content_row(texts: List[str], days: WeekRow, spans: Dict[int, CellSpan]) -> tuple:
        line = len(rows)
        cells = []
        offset = 0
        for text, day in zip(texts, days):
            c = cell(text, w)
            if day.in_month:
                token = text.lstrip(" ") or text
                start = offset + CELL_PADDING + (len(text) - len(token))
                spans[day.day_of_month] = CellSpan(line=line, start=start, text=token)
            cells.append(c)
            offset += len(c)
        return tuple(cells)

    rows.append(tuple(cell(name, w) for name in WEEKDAYS))
    rows.append(blank_row())
    for i, wk in enumerate(weeks):
        rows.append(content_row([numeral_text(d) for d in wk], wk, numerals))
        rows.append(content_row([label_text(d) for d in wk], wk, labels))
        if i != len(weeks) - 1:
            rows.append(blank_row())

    return MonthGrid(
        title=title,
        column_width=w,
        weeks=tuple(tuple(wk) for wk in weeks),
        rows=tuple(rows),
        numerals=numerals,
        labels=labels,
    )
