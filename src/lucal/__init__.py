"""lucal public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

from .core.errors import (
    LucalError,
    YearOutOfRangeError,
    InvalidMonthError,
    HolidayDataError,
    GridShapeError,
)
from .core.types import (
    Day,
    HolidayInfo,
    HighlightDirective,
    MonthGrid,
    MonthView,
    RenderedBlock,
    Request,
)
from .render.width import string_width, pad_right, strip_ansi
from .render.grid import build_month_grid
from .render.annotate import annotate, build_directives, resolve_status
from .render.compose import build_block, build_blocks, compose
from .service import CalendarService, MIN_SUPPORTED_YEAR, MAX_SUPPORTED_YEAR
from .plain import PlainOptions, render, run_plain

__all__ = [
    "LucalError",
    "YearOutOfRangeError",
    "InvalidMonthError",
    "HolidayDataError",
    "GridShapeError",
    "Day",
    "HolidayInfo",
    "HighlightDirective",
    "MonthGrid",
    "MonthView",
    "RenderedBlock",
    "Request",
    "string_width",
    "pad_right",
    "strip_ansi",
    "build_month_grid",
    "annotate",
    "build_directives",
    "resolve_status",
    "build_block",
    "build_blocks",
    "compose",
    "CalendarService",
    "MIN_SUPPORTED_YEAR",
    "MAX_SUPPORTED_YEAR",
    "PlainOptions",
    "render",
    "run_plain",
]
