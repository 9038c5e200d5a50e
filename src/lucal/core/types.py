from __future__ import annotations
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Dict, Literal, Optional, Tuple

HolidayStatus = Literal["none", "holiday", "workday"]
HighlightStatus = Literal["today", "holiday", "workday"]
ViewMode = Literal["month", "year"]

FIRST_LUNAR_DAY = "初一"

@dataclass(frozen=True)
class HolidayInfo:
    is_holiday: bool  # False marks a compensatory workday (调休)
    name: str

@dataclass(frozen=True)
class Day:
    date: date
    in_month: bool
    lunar_day: str = ""
    lunar_month: str = ""
    solar_term: str = ""
    is_today: bool = False
    holiday: Optional[HolidayInfo] = None
    has_lunar_data: bool = False

    @property
    def day_of_month(self) -> int:
        return self.date.day

    @property
    def secondary_label(self) -> str:
        """Label shown under the day number.

        Solar terms win, then the lunar month name on the first day of a
        lunar month, then the lunar day.
        """
        if self.solar_term:
            return self.solar_term
        if self.lunar_day == FIRST_LUNAR_DAY and self.lunar_month:
            return self.lunar_month
        return self.lunar_day

    @property
    def holiday_status(self) -> HolidayStatus:
        if self.holiday is None:
            return "none"
        return "holiday" if self.holiday.is_holiday else "workday"

WeekRow = Tuple[Day, ...]

@dataclass(frozen=True)
class MonthView:
    year: int
    month: int
    title: str
    weeks: Tuple[WeekRow, ...]

@dataclass(frozen=True)
class CellSpan:
    line: int   # index into MonthGrid.lines
    start: int  # string offset of the content within that line
    text: str

    @property
    def end(self) -> int:
        return self.start + len(self.text)

@dataclass(frozen=True)
class MonthGrid:
    title: str
    column_width: int
    weeks: Tuple[WeekRow, ...]
    rows: Tuple[Tuple[str, ...], ...]
    numerals: Dict[int, CellSpan] = field(default_factory=dict)
    labels: Dict[int, CellSpan] = field(default_factory=dict)

    @property
    def lines(self) -> Tuple[str, ...]:
        return tuple("".join(r) for r in self.rows)

@dataclass(frozen=True)
class HighlightDirective:
    day: int
    label: str
    status: HighlightStatus
    numeral_at: Optional[CellSpan] = None
    label_at: Optional[CellSpan] = None

@dataclass(frozen=True)
class RenderedBlock:
    lines: Tuple[str, ...]
    width: int
    height: int

@dataclass(frozen=True)
class Request:
    year: int
    month: int
    mode: ViewMode = "month"

    def normalize(self) -> "Request":
        """Roll months outside 1..12 into the neighbouring years."""
        y, m = self.year, self.month
        while m > 12:
            m -= 12
            y += 1
        while m < 1:
            m += 12
            y -= 1
        return replace(self, year=y, month=m)

    def next_month(self) -> "Request":
        return replace(self, month=self.month + 1).normalize()

    def previous_month(self) -> "Request":
        return replace(self, month=self.month - 1).normalize()

    def next_year(self) -> "Request":
        return replace(self, year=self.year + 1)

    def previous_year(self) -> "Request":
        return replace(self, year=self.year - 1)
