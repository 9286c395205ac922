from __future__ import annotations

from .layout import Grid, SeatCell
from .numbering import alphabetic_row_name
from .seat_types import DEFAULT_TYPE, lookup


def default_cell(row_index: int, column_index: int) -> SeatCell:
    """
    A ``normal`` seat labelled with the default naming (alphabetic rows,
    alphabetic scheme). Also used to patch holes in partial persisted grids.
    """
    row_name = alphabetic_row_name(row_index)
    return SeatCell(
        column=column_index + 1,
        type=DEFAULT_TYPE,
        row_label=row_name,
        label=f"{row_name}{column_index + 1}",
        custom_label="",
        price=lookup(DEFAULT_TYPE).price,
        is_accessible=False,
    )


def create_grid(rows: int, columns: int) -> Grid:
    return tuple(tuple(default_cell(r, c) for c in range(columns)) for r in range(rows))
