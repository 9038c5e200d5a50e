from __future__ import annotations

import re
from typing import Dict, List, Optional, Sequence, Set, Tuple

from colorama import Style

from ..core.types import CellSpan, Day, HighlightDirective, HighlightStatus, MonthGrid
from .grid import BLANK_LABEL


def truecolor(r: int, g: int, b: int) -> str:
    return f"\x1b[38;2;{r};{g};{b}m"


STATUS_COLORS: Dict[str, str] = {
    "holiday": truecolor(59, 130, 246),   # blue
    "workday": truecolor(249, 115, 22),   # orange
    "today": truecolor(52, 211, 153),     # green
}
COLOR_END = Style.RESET_ALL

# Characters that may sit on either side of a token in the rendered grid.
SEPARATORS = r"\s│"

Insertion = Tuple[int, int, str]  # (start, end, color)


def resolve_status(day: Day) -> Optional[HighlightStatus]:
    """Single highlight for a day: holiday data first, then today."""
    if day.holiday is not None:
        return "holiday" if day.holiday.is_holiday else "workday"
    if day.is_today:
        return "today"
    return None


def build_directives(grid: MonthGrid) -> List[HighlightDirective]:
    out: List[HighlightDirective] = []
    seen: Set[int] = set()
    for wk in grid.weeks:
        for day in wk:
            if not day.in_month or day.day_of_month in seen:
                continue
            status = resolve_status(day)
            if status is None:
                continue
            seen.add(day.day_of_month)
            out.append(HighlightDirective(
                day=day.day_of_month,
                label=day.secondary_label or BLANK_LABEL,
                status=status,
                numeral_at=grid.numerals.get(day.day_of_month),
                label_at=grid.labels.get(day.day_of_month),
            ))
    return out


def _token_re(token: str) -> re.Pattern:
    return re.compile(rf"(?<![^{SEPARATORS}]){re.escape(token)}(?![^{SEPARATORS}])")


def _overlaps(taken: List[Insertion], start: int, end: int) -> bool:
    return any(start < e and s < end for s, e, _ in taken)


def find_token(line: str, token: str, taken: Sequence[Insertion] = ()) -> Optional[Tuple[int, int]]:
    """First occurrence of ``token`` bounded by separators or the line edges.

    Occurrences overlapping an already claimed range are skipped.
    """
    for m in _token_re(token).finditer(line):
        if not _overlaps(list(taken), m.start(), m.end()):
            return m.start(), m.end()
    return None


def _locate_numeral(
    lines: Sequence[str],
    d: HighlightDirective,
    claims: Dict[int, List[Insertion]],
) -> Optional[CellSpan]:
    if d.numeral_at is not None:
        return d.numeral_at
    token = str(d.day)
    for i, line in enumerate(lines):
        hit = find_token(line, token, claims.get(i, ()))
        if hit is not None:
            return CellSpan(line=i, start=hit[0], text=token)
    return None


def _locate_label(
    lines: Sequence[str],
    d: HighlightDirective,
    numeral: CellSpan,
    claims: Dict[int, List[Insertion]],
) -> Optional[CellSpan]:
    if d.label_at is not None:
        return d.label_at
    i = numeral.line + 1
    if i >= len(lines):
        return None
    hit = find_token(lines[i], d.label, claims.get(i, ()))
    if hit is None:
        return None
    return CellSpan(line=i, start=hit[0], text=d.label)


def _apply(line: str, insertions: List[Insertion]) -> str:
    # right to left so earlier offsets stay valid
    for start, end, color in sorted(insertions, reverse=True):
        line = line[:start] + color + line[start:end] + COLOR_END + line[end:]
    return line


def annotate(
    lines: Sequence[str],
    directives: Sequence[HighlightDirective],
    *,
    color: bool = True,
) -> List[str]:
    """Wrap each directive's numeral and label in its status color.

    Directives carrying positions from the grid builder are styled in place.
    Directives without positions are found by searching for separator-bounded
    tokens, longest day numbers first, so day 1 never lands inside "11".
    With ``color=False`` the lines are returned unchanged.
    """
    if not color:
        return list(lines)

    claims: Dict[int, List[Insertion]] = {}
    done_labels: Set[Tuple[int, str]] = set()

    for d in sorted(directives, key=lambda x: x.day, reverse=True):
        start_color = STATUS_COLORS[d.status]
        numeral = _locate_numeral(lines, d, claims)
        if numeral is None:
            continue
        claims.setdefault(numeral.line, []).append((numeral.start, numeral.end, start_color))

        key = (d.day, d.label)
        if key in done_labels:
            continue
        label = _locate_label(lines, d, numeral, claims)
        if label is None:
            continue
        claims.setdefault(label.line, []).append((label.start, label.end, start_color))
        done_labels.add(key)

    out = list(lines)
    for i, insertions in claims.items():
        out[i] = _apply(out[i], insertions)
    return out
