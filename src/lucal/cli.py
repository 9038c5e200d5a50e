from __future__ import annotations

import argparse
from datetime import date
import logging
import sys
from typing import Callable, List, Optional

import colorama

from .core.errors import HolidayDataError, LucalError, RequestError
from .core.types import Request
from . import holidays as hol
from .plain import PlainOptions, run_plain
from .service import CalendarService

log = logging.getLogger("lucal.cli")

USAGE_EXAMPLES = """\
  无参数      展示当前月份
  -y          展示当前年份
  9           展示当年9月份
  1983        展示1983年
  2012 12     展示2012年12月
  -y 9        展示公元9年的全年
"""


def _parse_number(value: str, field: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise RequestError(f"无法将 {value!r} 解析为 {field}") from None


def parse_request(show_year: bool, args: List[str], *, today: Optional[date] = None) -> Request:
    """Turn the positional arguments into a month or year request."""
    today = today or date.today()
    year, month = today.year, today.month

    if len(args) == 1:
        if show_year:
            year = _parse_number(args[0], "year")
        else:
            val = _parse_number(args[0], "month/year")
            if 1 <= val <= 12:
                month = val
            else:
                year = val
                show_year = True
    elif len(args) == 2:
        if show_year:
            raise RequestError("使用 -y 时最多只需要指定一个年份参数")
        year = _parse_number(args[0], "year")
        month = _parse_number(args[1], "month")
        if month < 1 or month > 12:
            raise RequestError(f"月份需要在 1-12 之间 (收到 {month})")
    elif len(args) > 2:
        raise RequestError("参数过多，请参考 --help")

    return Request(year=year, month=month, mode="year" if show_year else "month").normalize()


def _print_progress(done: int, total: int) -> None:
    if total > 0:
        pct = min(done / total, 1.0)
        bar = "█" * int(pct * 50) + "░" * (50 - int(pct * 50))
        msg = f"[{bar}] {hol.format_bytes(done)} / {hol.format_bytes(total)}  {pct * 100:.1f}%"
    else:
        msg = hol.format_bytes(done)
    print("\r" + msg, end="", file=sys.stderr, flush=True)


def cmd_update(progress: Optional[Callable[[int, int], None]] = _print_progress) -> int:
    print("正在下载节假日数据...", file=sys.stderr)
    try:
        res = hol.download_holidays(progress=progress)
    except HolidayDataError as e:
        print(f"\n下载失败: {e}", file=sys.stderr)
        print("您可以手动下载节假日数据文件：", file=sys.stderr)
        print(f"1. 访问: {hol.HOLIDAYS_URL}", file=sys.stderr)
        print(f"2. 下载文件并保存到: {hol.cache_path()}", file=sys.stderr)
        return 1

    print()
    print("下载成功!")
    print(f"文件大小: {hol.format_bytes(res.size)}")
    print(f"更新时间: {res.modified:%Y-%m-%d %H:%M:%S}")
    print(f"保存位置: {res.path}")
    if res.years is not None:
        print(f"数据年份范围: {res.years.min_year} 年 - {res.years.max_year} 年")
        print(f"总共包含 {res.years.count} 年的数据")
    return 0


def load_holidays(path: Optional[str]) -> tuple:
    """Returns (holiday table or None, cache_valid)."""
    if path:
        try:
            return hol.load_from_file(path), True
        except HolidayDataError as e:
            print(f"警告: 无法加载节假日文件 {path}: {e}", file=sys.stderr)
            return None, False

    cache = hol.cache_path()
    if not hol.is_cache_valid(cache):
        return None, False
    try:
        return hol.load_from_cache(), True
    except HolidayDataError as e:
        log.warning("holiday cache unreadable: %s", e)
        return None, False


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="lucal",
        description="Chinese lunar calendar for the terminal.",
        epilog=USAGE_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("args", nargs="*", metavar="year/month", help="[year] [month]")
    p.add_argument("-y", dest="year_view", action="store_true", help="显示全年日历")
    p.add_argument("-u", "--update-holidays", action="store_true", help="下载最新的节假日数据")
    p.add_argument("--holidays-file", default="", help="指定节假日数据文件路径（用于调试）")
    p.add_argument("-N", "--no-color", action="store_true", help="禁用所有颜色输出")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    return p


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    colorama.just_fix_windows_console()

    if args.update_holidays:
        return cmd_update()

    data, cache_valid = load_holidays(args.holidays_file)
    try:
        req = parse_request(args.year_view, args.args)
        run_plain(PlainOptions(
            request=req,
            service=CalendarService(holidays=data),
            color=not args.no_color,
            holiday_cache_valid=cache_valid,
        ))
    except LucalError as e:
        print("错误:", e, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
