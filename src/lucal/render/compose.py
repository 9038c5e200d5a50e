from __future__ import annotations

from typing import List, Sequence

from colorama import Style

from ..core.types import MonthGrid, MonthView, RenderedBlock
from .annotate import COLOR_END, annotate, build_directives, truecolor
from .grid import build_month_grid
from .width import string_width

TITLE_STYLE = Style.BRIGHT + truecolor(254, 194, 96)
HEADER_STYLE = Style.BRIGHT + truecolor(165, 180, 252)
LEGEND_STYLE = truecolor(107, 114, 128)

LEGEND_TEXT = "\n蓝色=节假日  橙色=调休日"


def styled(text: str, style: str, *, color: bool = True) -> str:
    if not color or not text:
        return text
    return style + text + COLOR_END


def build_block(grid: MonthGrid, *, color: bool = True) -> RenderedBlock:
    body = annotate(grid.lines, build_directives(grid), color=color)
    if body:
        body[0] = styled(body[0], HEADER_STYLE, color=color)
    lines = [styled(grid.title, TITLE_STYLE, color=color), ""] + body
    width = max((string_width(line) for line in lines), default=0)
    return RenderedBlock(lines=tuple(lines), width=width, height=len(lines))


def build_blocks(views: Sequence[MonthView], *, color: bool = True) -> List[RenderedBlock]:
    return [build_block(build_month_grid(v.weeks, v.title), color=color) for v in views]


def compose(blocks: Sequence[RenderedBlock]) -> str:
    """Stack blocks top to bottom with one blank line between neighbours."""
    lines: List[str] = []
    for i, block in enumerate(blocks):
        if i:
            lines.append("")
        lines.extend(block.lines)
    return "\n".join(lines)


def color_legend(*, color: bool = True) -> str:
    return styled(LEGEND_TEXT, LEGEND_STYLE, color=color)
