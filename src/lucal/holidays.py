"""Holiday data: JSON file format, user cache and download.

The data file is a list of per-year objects::

    [{"year": "2025", "holiday": {"01-01": {"holiday": true, "name": "元旦", ...}}}]

Entries with ``holiday: false`` are compensatory workdays (调休).
"""
from __future__ import annotations

import json
import logging
import os
import time
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

import requests

from .core.errors import HolidayDataError
from .core.types import HolidayInfo

log = logging.getLogger("lucal.holidays")

HOLIDAYS_URL = "https://raw.githubusercontent.com/lululau/lucal/main/holidays.json"
CACHE_MAX_AGE = timedelta(days=180)
CHUNK_SIZE = 8192

PathLike = Union[str, "os.PathLike[str]"]
HolidayTable = Dict[str, Dict[str, "HolidayEntry"]]
ProgressFn = Callable[[int, int], None]


@dataclass(frozen=True)
class HolidayEntry:
    holiday: bool
    name: str = ""
    wage: int = 0
    date: str = ""
    after: Optional[bool] = None
    target: str = ""
    rest: Optional[int] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "HolidayEntry":
        flag = raw.get("holiday")
        if isinstance(flag, bool):
            holiday = flag
        elif isinstance(flag, str):
            # some upstream files carry the holiday name here instead of a bool
            holiday = flag != ""
        else:
            holiday = False
        return cls(
            holiday=holiday,
            name=str(raw.get("name", "")),
            wage=int(raw.get("wage") or 0),
            date=str(raw.get("date", "")),
            after=raw.get("after"),
            target=str(raw.get("target") or ""),
            rest=raw.get("rest"),
        )


@dataclass(frozen=True)
class YearInfo:
    min_year: int
    max_year: int
    count: int


@dataclass(frozen=True)
class DownloadResult:
    path: Path
    size: int
    modified: datetime
    years: Optional[YearInfo]


def parse_holidays(payload: Any) -> HolidayTable:
    if not isinstance(payload, list):
        raise HolidayDataError("holiday data must be a list of year records")
    out: HolidayTable = {}
    for rec in payload:
        if not isinstance(rec, dict) or "year" not in rec:
            raise HolidayDataError(f"malformed year record: {rec!r}")
        year = str(rec["year"])
        days = rec.get("holiday") or {}
        if not isinstance(days, dict):
            raise HolidayDataError(f"holiday days for {year} must be an object")
        entries: Dict[str, HolidayEntry] = {}
        for k, v in days.items():
            if not isinstance(v, dict):
                raise HolidayDataError(f"malformed entry {k!r} in {year}")
            try:
                entries[k] = HolidayEntry.from_dict(v)
            except (TypeError, ValueError) as e:
                raise HolidayDataError(f"malformed entry {k!r} in {year}: {e}") from e
        out[year] = entries
    return out


def load_from_file(path: PathLike) -> HolidayTable:
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise HolidayDataError(f"failed to read holidays file: {e}") from e
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise HolidayDataError(f"failed to parse holidays JSON: {e}") from e
    data = parse_holidays(payload)
    log.debug("loaded %d holiday years from %s", len(data), p)
    return data


def cache_path() -> Path:
    base = os.environ.get("XDG_CACHE_HOME") or str(Path.home() / ".cache")
    return Path(base) / "lucal" / "holidays.json"


def load_from_cache() -> HolidayTable:
    return load_from_file(cache_path())


def is_cache_valid(path: PathLike, *, now: Optional[float] = None) -> bool:
    """True when the file exists and was modified within the last 180 days."""
    try:
        mtime = Path(path).stat().st_mtime
    except OSError as e:
        log.debug("cannot stat holiday cache %s: %s", path, e)
        return False
    now = time.time() if now is None else now
    return now - mtime < CACHE_MAX_AGE.total_seconds()


def holiday_for_date(data: Optional[HolidayTable], year: int, month: int, day: int) -> Optional[HolidayInfo]:
    if not data:
        return None
    entry = data.get(str(year), {}).get(f"{month:02d}-{day:02d}")
    if entry is None:
        return None
    return HolidayInfo(is_holiday=entry.holiday, name=entry.name)


def year_info(data: HolidayTable) -> Optional[YearInfo]:
    years = []
    for y in data:
        try:
            years.append(int(y))
        except ValueError:
            log.warning("ignoring non-numeric holiday year %r", y)
    if not years:
        return None
    return YearInfo(min_year=min(years), max_year=max(years), count=len(years))


def format_bytes(n: int) -> str:
    unit = 1024
    if n < unit:
        return f"{n} B"
    value = float(n)
    for suffix in ("KB", "MB", "GB", "TB"):
        value /= unit
        if value < unit:
            return f"{value:.1f} {suffix}"
    return f"{value:.1f} PB"


def download_holidays(
    dest: Optional[PathLike] = None,
    *,
    url: str = HOLIDAYS_URL,
    progress: Optional[ProgressFn] = None,
    session: Optional[requests.Session] = None,
    timeout: float = 30.0,
) -> DownloadResult:
    """Fetch the holiday file into the cache (or ``dest``).

    ``progress(downloaded, total)`` is called after every chunk; ``total`` is 0
    when the server sends no Content-Length. The file is written next to its
    destination and renamed into place, so a failed download never leaves a
    truncated cache behind.
    """
    target = Path(dest) if dest is not None else cache_path()
    http = session or requests.Session()
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise HolidayDataError(f"failed to create directory: {e}") from e

    tmp = target.with_name(target.name + ".part")
    log.debug("downloading %s -> %s", url, target)
    try:
        with http.get(url, stream=True, timeout=timeout) as resp:
            resp.raise_for_status()
            total = int(resp.headers.get("Content-Length") or 0)
            done = 0
            with open(tmp, "wb") as fh:
                for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                    if not chunk:
                        continue
                    fh.write(chunk)
                    done += len(chunk)
                    if progress is not None:
                        progress(done, total)
        os.replace(tmp, target)
    except requests.RequestException as e:
        tmp.unlink(missing_ok=True)
        raise HolidayDataError(f"failed to download holidays: {e}") from e
    except OSError as e:
        tmp.unlink(missing_ok=True)
        raise HolidayDataError(f"failed to write file: {e}") from e

    st = target.stat()
    try:
        years = year_info(load_from_file(target))
    except HolidayDataError as e:
        log.warning("downloaded file is not valid holiday data: %s", e)
        years = None
    return DownloadResult(
        path=target,
        size=st.st_size,
        modified=datetime.fromtimestamp(st.st_mtime),
        years=years,
    )
