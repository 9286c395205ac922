from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterator, Optional

from .seat_types import NON_SEAT_TYPES, SeatTypeKey


class LayoutError(Exception):
    pass


class NumberingScheme(str, Enum):
    alphabetic = "alphabetic"  # A12
    numeric = "numeric"  # 1-12


class RowNaming(str, Enum):
    alphabetic = "alphabetic"
    numeric = "numeric"
    custom = "custom"


@dataclass(frozen=True)
class SeatCell:
    """
    One grid position. ``row_label`` and ``label`` are derived by the
    numbering pass; ``custom_label`` is the only operator-entered text.
    """

    column: int
    type: SeatTypeKey = SeatTypeKey.normal
    row_label: str = ""
    label: str = ""
    custom_label: str = ""
    price: float = 0
    is_accessible: bool = False

    @property
    def is_seat(self) -> bool:
        return self.type not in NON_SEAT_TYPES

    @property
    def has_override(self) -> bool:
        return bool(self.custom_label.strip())

    def cleared(self) -> "SeatCell":
        return replace(self, row_label="", label="", custom_label="")


Grid = tuple[tuple[SeatCell, ...], ...]


@dataclass(frozen=True)
class LayoutConfig:
    rows: int
    columns: int
    numbering_scheme: NumberingScheme = NumberingScheme.alphabetic
    row_naming: RowNaming = RowNaming.alphabetic
    custom_row_names: tuple[str, ...] = ()
    # Empty means "not yet initialized".
    grid: Grid = field(default=())

    @property
    def initialized(self) -> bool:
        return len(self.grid) > 0

    def cell(self, row: int, col: int) -> Optional[SeatCell]:
        if not (0 <= row < len(self.grid)):
            return None
        cells = self.grid[row]
        if not (0 <= col < len(cells)):
            return None
        return cells[col]

    def iter_cells(self) -> Iterator[tuple[int, int, SeatCell]]:
        for r, cells in enumerate(self.grid):
            for c, cell in enumerate(cells):
                yield r, c, cell

    def with_grid(self, grid: Grid) -> "LayoutConfig":
        return replace(self, grid=grid)


def replace_cell(grid: Grid, row: int, col: int, cell: SeatCell) -> Grid:
    cells = grid[row]
    new_row = cells[:col] + (cell,) + cells[col + 1 :]
    return grid[:row] + (new_row,) + grid[row + 1 :]


def replace_row(grid: Grid, row: int, cells: tuple[SeatCell, ...]) -> Grid:
    return grid[:row] + (tuple(cells),) + grid[row + 1 :]
