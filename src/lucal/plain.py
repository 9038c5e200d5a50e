from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Optional, TextIO

from .core.types import Request
from .render.compose import build_blocks, color_legend, compose
from .service import CalendarService

STALE_CACHE_HINT = "尚未下载节假日数据或节假日数据超过 6 个月未更新，运行  lucal -u 获取最新数据"


@dataclass
class PlainOptions:
    request: Request
    service: CalendarService = field(default_factory=CalendarService)
    writer: Optional[TextIO] = None
    color: bool = True
    holiday_cache_valid: bool = False


def render(service: CalendarService, req: Request, *, color: bool = True) -> str:
    return compose(build_blocks(service.views(req), color=color))


def run_plain(opts: PlainOptions) -> None:
    """Render the requested month or year once and write it out."""
    out = opts.writer or sys.stdout
    doc = render(opts.service, opts.request, color=opts.color)
    if not doc:
        return
    print(doc, file=out)

    if opts.service.has_holiday_data:
        print("\n" + color_legend(color=opts.color), file=out)

    if not opts.holiday_cache_valid:
        print("\n" + STALE_CACHE_HINT, file=out)
