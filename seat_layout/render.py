from __future__ import annotations

from typing import Optional

from .layout import LayoutConfig, SeatCell
from .seat_types import SeatTypeKey
from .validation import DuplicateAnalysis, analyze_duplicates


def _cell(cell: SeatCell, width: int, duplicate: bool) -> str:
    if cell.type == SeatTypeKey.walkway:
        return ".".center(width)
    if not cell.is_seat:
        return " " * width
    t = cell.label + ("*" if duplicate else "")
    if len(t) > width:
        t = t[: max(0, width - 1)] + "…"
    return t.center(width)


def render_ascii(
    config: LayoutConfig, *, cell_width: int = 5, duplicates: Optional[DuplicateAnalysis] = None
) -> str:
    """Text preview of the grid; duplicated labels carry a trailing ``*``."""
    cell_width = max(3, int(cell_width))
    duplicates = duplicates or analyze_duplicates(config.grid)

    gutter = max([len(cell.row_label) for _, _, cell in config.iter_cells()] + [1]) + 2
    header = " " * gutter + " ".join(str(c + 1).center(cell_width) for c in range(config.columns))
    lines = [header]
    for r, cells in enumerate(config.grid):
        name = next((cell.row_label for cell in cells if cell.row_label), "")
        row_cells = " ".join(_cell(cell, cell_width, duplicates.is_duplicate(r, c)) for c, cell in enumerate(cells))
        lines.append(name.ljust(gutter) + row_cells)
    return "\n".join(line.rstrip() for line in lines)
