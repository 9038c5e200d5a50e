# tests/conftest.py

from datetime import date, timedelta

import pytest

from lucal.core.types import Day, HolidayInfo

LUNAR_DAYS = ["初一", "初二", "初三", "初四", "初五", "初六", "初七", "初八", "初九", "初十",
              "十一", "十二", "十三", "十四", "十五", "十六", "十七", "十八", "十九", "二十",
              "廿一", "廿二", "廿三", "廿四", "廿五", "廿六", "廿七", "廿八", "廿九", "三十"]


def synthetic_weeks(year, month, *, today=None, holidays=None, terms=None, lunar=True):
    """Sunday-first weeks with made-up lunar labels (day n -> LUNAR_DAYS[n-1])."""
    holidays = holidays or {}
    terms = terms or {}
    first = date(year, month, 1)
    end = date(year + (month == 12), month % 12 + 1, 1)
    cursor = first - timedelta(days=(first.weekday() + 1) % 7)
    weeks = []
    while cursor < end:
        wk = []
        for _ in range(7):
            in_month = cursor.month == month
            wk.append(Day(
                date=cursor,
                in_month=in_month,
                lunar_day=LUNAR_DAYS[(cursor.day - 1) % 30] if lunar else "",
                lunar_month="十月" if lunar else "",
                solar_term=terms.get(cursor.day, "") if in_month else "",
                is_today=cursor == today,
                holiday=holidays.get(cursor.day) if in_month else None,
                has_lunar_data=lunar,
            ))
            cursor += timedelta(days=1)
        weeks.append(tuple(wk))
    return weeks


@pytest.fixture
def november_2025():
    return synthetic_weeks(2025, 11, today=date(2025, 11, 18))


@pytest.fixture
def holiday():
    return HolidayInfo(is_holiday=True, name="国庆节")


@pytest.fixture
def workday():
    return HolidayInfo(is_holiday=False, name="国庆节")
