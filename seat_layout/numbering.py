from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from loguru import logger

from .layout import Grid, LayoutConfig, NumberingScheme, RowNaming, SeatCell, replace_row
from .seat_types import is_seat_type


def alphabetic_row_name(index: int) -> str:
    # A..Z, then AA, AB, ... (spreadsheet style) once past 26 rows.
    name = ""
    n = index + 1
    while n > 0:
        n, rem = divmod(n - 1, 26)
        name = chr(65 + rem) + name
    return name


def row_has_seats(grid: Grid, row_index: int) -> bool:
    if not (0 <= row_index < len(grid)):
        return False
    return any(is_seat_type(cell.type) for cell in grid[row_index])


def actual_row_count(grid: Grid) -> int:
    return sum(1 for r in range(len(grid)) if row_has_seats(grid, r))


def actual_row_index(grid_row_index: int, grid: Grid) -> int:
    """Number of seat-bearing rows strictly above ``grid_row_index``."""
    return sum(1 for r in range(min(grid_row_index, len(grid))) if row_has_seats(grid, r))


def _row_name_for(actual_index: int, row_naming: RowNaming, custom_row_names: Sequence[str]) -> str:
    if row_naming == RowNaming.numeric:
        return str(actual_index + 1)
    if row_naming == RowNaming.custom:
        if actual_index < len(custom_row_names):
            name = (custom_row_names[actual_index] or "").strip()
            if name:
                return name
    return alphabetic_row_name(actual_index)


def row_label(
    grid_row_index: int,
    grid: Grid,
    row_naming: RowNaming,
    custom_row_names: Sequence[str] = (),
) -> str:
    if not row_has_seats(grid, grid_row_index):
        return ""
    return _row_name_for(actual_row_index(grid_row_index, grid), row_naming, custom_row_names)


def seat_position(grid_row_index: int, column_index: int, grid: Grid) -> int:
    """1-based ordinal of the seat within its row, 0 if the cell is not a seat."""
    if not (0 <= grid_row_index < len(grid)):
        return 0
    cells = grid[grid_row_index]
    if not (0 <= column_index < len(cells)) or not is_seat_type(cells[column_index].type):
        return 0
    return sum(1 for cell in cells[: column_index + 1] if is_seat_type(cell.type))


def _format_label(
    row_name: str, actual_index: int, position: int, numbering_scheme: NumberingScheme
) -> str:
    if numbering_scheme == NumberingScheme.numeric:
        return f"{actual_index + 1}-{position}"
    return f"{row_name}{position}"


def seat_label(
    grid_row_index: int,
    column_index: int,
    grid: Grid,
    numbering_scheme: NumberingScheme,
    row_naming: RowNaming,
    custom_row_names: Sequence[str] = (),
) -> str:
    position = seat_position(grid_row_index, column_index, grid)
    if position == 0:
        return ""
    name = row_label(grid_row_index, grid, row_naming, custom_row_names)
    if not name:
        return ""
    return _format_label(name, actual_row_index(grid_row_index, grid), position, numbering_scheme)


def effective_label(cell: SeatCell, computed: str) -> str:
    return cell.custom_label.strip() if cell.has_override else computed


def _relabelled_row(
    cells: tuple[SeatCell, ...],
    actual_index: int,
    numbering_scheme: NumberingScheme,
    row_naming: RowNaming,
    custom_row_names: Sequence[str],
) -> tuple[SeatCell, ...]:
    has_seats = any(cell.is_seat for cell in cells)
    name = _row_name_for(actual_index, row_naming, custom_row_names) if has_seats else ""
    out: list[SeatCell] = []
    position = 0
    for col, cell in enumerate(cells):
        if not cell.is_seat:
            out.append(
                replace(cell, column=col + 1, row_label="", label="", custom_label="", price=0, is_accessible=False)
            )
            continue
        position += 1
        computed = _format_label(name, actual_index, position, numbering_scheme)
        out.append(replace(cell, column=col + 1, row_label=name, label=effective_label(cell, computed)))
    return tuple(out)


def relabel_row(config: LayoutConfig, row_index: int) -> LayoutConfig:
    """
    Recompute every cell of one row. Seat ordinals shift whenever any cell in
    the row changes type, so the whole row is always redone.
    """
    grid = config.grid
    if not (0 <= row_index < len(grid)):
        return config
    cells = _relabelled_row(
        grid[row_index],
        actual_row_index(row_index, grid),
        config.numbering_scheme,
        config.row_naming,
        config.custom_row_names,
    )
    return config.with_grid(replace_row(grid, row_index, cells))


def relabel_grid(config: LayoutConfig) -> LayoutConfig:
    rows: list[tuple[SeatCell, ...]] = []
    actual = 0
    for cells in config.grid:
        rows.append(
            _relabelled_row(cells, actual, config.numbering_scheme, config.row_naming, config.custom_row_names)
        )
        if any(cell.is_seat for cell in cells):
            actual += 1
    logger.debug("relabelled {} rows ({} with seats)", len(rows), actual)
    return config.with_grid(tuple(rows))
