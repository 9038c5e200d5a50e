from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Callable, List, Optional, Union

from lunar_python import Solar

from .core.errors import InvalidMonthError, YearOutOfRangeError
from .core.types import Day, MonthView, Request, WeekRow
from .holidays import HolidayTable, holiday_for_date

log = logging.getLogger("lucal.service")

MIN_SUPPORTED_YEAR = 1900
MAX_SUPPORTED_YEAR = 3000

Clock = Callable[[], Union[date, datetime]]


def _as_date(d: Union[date, datetime]) -> date:
    return d.date() if isinstance(d, datetime) else d


def _sunday_on_or_before(d: date) -> date:
    # date.weekday(): Monday=0 .. Sunday=6
    return d - timedelta(days=(d.weekday() + 1) % 7)


def _first_of_next_month(year: int, month: int) -> date:
    return date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)


def check_year(year: int) -> None:
    if year < MIN_SUPPORTED_YEAR or year > MAX_SUPPORTED_YEAR:
        raise YearOutOfRangeError(
            f"year must be between {MIN_SUPPORTED_YEAR} and {MAX_SUPPORTED_YEAR}"
        )


class CalendarService:
    """Month and year views with lunar labels, solar terms and holidays."""

    def __init__(self, *, now: Optional[Clock] = None, holidays: Optional[HolidayTable] = None):
        self._now: Clock = now or date.today
        self._holidays = holidays

    @property
    def has_holiday_data(self) -> bool:
        return bool(self._holidays)

    def month(self, year: int, month: int) -> MonthView:
        check_year(year)
        if month < 1 or month > 12:
            raise InvalidMonthError("month must be between 1 and 12")

        first = date(year, month, 1)
        end = _first_of_next_month(year, month)
        today = _as_date(self._now())

        weeks: List[WeekRow] = []
        cursor = _sunday_on_or_before(first)
        while True:
            week = []
            for _ in range(7):
                week.append(self.build_day(cursor, month, today))
                cursor += timedelta(days=1)
            weeks.append(tuple(week))
            # cursor always lands on a Sunday here
            if cursor >= end:
                break
        log.debug("built %d weeks for %d-%02d", len(weeks), year, month)

        return MonthView(
            year=year,
            month=month,
            title=f"{year} 年 {month} 月",
            weeks=tuple(weeks),
        )

    def year(self, year: int) -> List[MonthView]:
        check_year(year)
        return [self.month(year, m) for m in range(1, 13)]

    def views(self, req: Request) -> List[MonthView]:
        req = req.normalize()
        if req.mode == "year":
            return self.year(req.year)
        return [self.month(req.year, req.month)]

    def build_day(self, d: date, current_month: int, today: date) -> Day:
        in_month = d.month == current_month
        is_today = d == today
        holiday = holiday_for_date(self._holidays, d.year, d.month, d.day)

        if d.year < MIN_SUPPORTED_YEAR or d.year > MAX_SUPPORTED_YEAR:
            return Day(date=d, in_month=in_month, is_today=is_today, holiday=holiday)

        lunar = Solar.fromYmd(d.year, d.month, d.day).getLunar()
        return Day(
            date=d,
            in_month=in_month,
            lunar_day=lunar.getDayInChinese(),
            lunar_month=lunar.getMonthInChinese() + "月",
            solar_term=lunar.getJieQi(),
            is_today=is_today,
            holiday=holiday,
            has_lunar_data=True,
        )
