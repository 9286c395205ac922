from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Optional, Sequence, Union

from loguru import logger

from .config import DEFAULT_LIMITS, GridLimits
from .factory import create_grid
from .layout import LayoutConfig, NumberingScheme, RowNaming, SeatCell, replace_cell, replace_row
from .numbering import relabel_grid, relabel_row, row_has_seats
from .seat_types import ACCESSIBLE_TYPE, DEFAULT_TYPE, NON_SEAT_TYPES, SeatTypeKey, lookup
from .validation import analyze_duplicates, validate_label_edit


class EditFailure(str, Enum):
    invalid_type = "InvalidType"
    not_a_seat = "NotASeat"
    duplicate_label = "DuplicateLabel"
    blank_label = "BlankLabel"
    out_of_bounds = "OutOfBounds"
    no_such_cell = "NoSuchCell"
    no_such_row = "NoSuchRow"


class LabelPolicy(str, Enum):
    strict = "strict"  # refuse labels already in use
    design = "design"  # accept and let the duplicate analysis flag them


@dataclass(frozen=True)
class EditResult:
    config: LayoutConfig
    ok: bool = True
    failure: Optional[EditFailure] = None
    warnings: tuple[EditFailure, ...] = ()


def _refuse(config: LayoutConfig, failure: EditFailure, message: str, *args) -> EditResult:
    logger.debug("edit refused ({}): " + message, failure.value, *args)
    return EditResult(config=config, ok=False, failure=failure)


def ensure_grid(config: LayoutConfig, limits: GridLimits = DEFAULT_LIMITS) -> LayoutConfig:
    """Build a grid for a config that has none yet."""
    if config.initialized:
        return config
    rows, columns = limits.clamp(config.rows, config.columns)
    logger.debug("initializing empty layout as {}x{}", rows, columns)
    return relabel_grid(replace(config, rows=rows, columns=columns, grid=create_grid(rows, columns)))


def _cell_of_type(cell: SeatCell, key: SeatTypeKey) -> SeatCell:
    seat_type = lookup(key)
    if key in NON_SEAT_TYPES:
        return replace(cell.cleared(), type=key, price=0, is_accessible=False)
    return replace(
        cell.cleared(),
        type=key,
        price=seat_type.price,
        is_accessible=seat_type.is_accessible or key == ACCESSIBLE_TYPE,
    )


def paint_cell(
    config: LayoutConfig,
    row: int,
    col: int,
    new_type: Union[SeatTypeKey, str],
    limits: GridLimits = DEFAULT_LIMITS,
) -> EditResult:
    original = config
    config = ensure_grid(config, limits)
    cell = config.cell(row, col)
    if cell is None:
        return _refuse(original, EditFailure.no_such_cell, "no cell at ({}, {})", row, col)

    warnings: tuple[EditFailure, ...] = ()
    key = SeatTypeKey.parse(new_type)
    if key is None:
        logger.debug("unknown seat type {!r}, using {}", new_type, DEFAULT_TYPE.value)
        key = DEFAULT_TYPE
        warnings = (EditFailure.invalid_type,)

    if cell.type == key:
        return EditResult(config=config, warnings=warnings)

    had_seats = row_has_seats(config.grid, row)
    painted = config.with_grid(replace_cell(config.grid, row, col, _cell_of_type(cell, key)))
    if row_has_seats(painted.grid, row) != had_seats:
        # Every later row's actual index moved.
        painted = relabel_grid(painted)
    else:
        painted = relabel_row(painted, row)
    logger.debug("painted ({}, {}) {} -> {}", row, col, cell.type.value, key.value)
    return EditResult(config=painted, warnings=warnings)


def set_custom_label(
    config: LayoutConfig,
    row: int,
    col: int,
    proposed_label: Optional[str],
    policy: LabelPolicy = LabelPolicy.design,
) -> EditResult:
    cell = config.cell(row, col)
    if cell is None:
        return _refuse(config, EditFailure.no_such_cell, "no cell at ({}, {})", row, col)
    if not cell.is_seat:
        return _refuse(config, EditFailure.not_a_seat, "({}, {}) is {}", row, col, cell.type.value)

    proposed = (proposed_label or "").strip()
    if not proposed:
        if not cell.has_override:
            return _refuse(config, EditFailure.blank_label, "blank label for ({}, {})", row, col)
        cleared = config.with_grid(replace_cell(config.grid, row, col, replace(cell, custom_label="")))
        logger.debug("cleared custom label at ({}, {})", row, col)
        return EditResult(config=relabel_row(cleared, row))

    warnings: tuple[EditFailure, ...] = ()
    counts = analyze_duplicates(config.grid).seat_number_counts
    if not validate_label_edit(proposed, row, col, config.grid, counts):
        if policy == LabelPolicy.strict:
            return _refuse(config, EditFailure.duplicate_label, "label {!r} already in use", proposed)
        warnings = (EditFailure.duplicate_label,)

    updated = replace(cell, custom_label=proposed, label=proposed)
    logger.debug("custom label ({}, {}) -> {!r}", row, col, proposed)
    return EditResult(config=config.with_grid(replace_cell(config.grid, row, col, updated)), warnings=warnings)


def _toggled_row(cells: Sequence[SeatCell]) -> tuple[SeatCell, ...]:
    all_non_seat = all(not cell.is_seat for cell in cells)
    target = DEFAULT_TYPE if all_non_seat else SeatTypeKey.walkway
    return tuple(_cell_of_type(cell, target) for cell in cells)


def toggle_row_walkway(config: LayoutConfig, row: int, limits: GridLimits = DEFAULT_LIMITS) -> EditResult:
    """
    Turn a row into a walkway, or back into ``normal`` seats if every cell in
    it is already a non-seat.
    """
    return toggle_rows_walkway(config, [row], limits)


def toggle_rows_walkway(
    config: LayoutConfig, rows: Iterable[int], limits: GridLimits = DEFAULT_LIMITS
) -> EditResult:
    original = config
    config = ensure_grid(config, limits)
    targets = sorted(set(int(r) for r in rows))
    missing = [r for r in targets if not (0 <= r < len(config.grid))]
    if missing:
        return _refuse(original, EditFailure.no_such_row, "rows out of range: {}", missing)
    if not targets:
        return EditResult(config=config)

    grid = config.grid
    for r in targets:
        grid = replace_row(grid, r, _toggled_row(grid[r]))
    logger.debug("toggled walkway on rows {}", targets)
    return EditResult(config=relabel_grid(config.with_grid(grid)))


def resize_grid(
    config: LayoutConfig, rows: int, columns: int, limits: GridLimits = DEFAULT_LIMITS
) -> EditResult:
    """Discard the current grid and start a fresh one of the clamped size."""
    new_rows, new_columns = limits.clamp(rows, columns)
    warnings: tuple[EditFailure, ...] = ()
    if (new_rows, new_columns) != (int(rows), int(columns)):
        logger.debug("resize {}x{} clamped to {}x{}", rows, columns, new_rows, new_columns)
        warnings = (EditFailure.out_of_bounds,)
    resized = replace(config, rows=new_rows, columns=new_columns, grid=create_grid(new_rows, new_columns))
    return EditResult(config=relabel_grid(resized), warnings=warnings)


def change_naming(
    config: LayoutConfig,
    numbering_scheme: Union[NumberingScheme, str, None] = None,
    row_naming: Union[RowNaming, str, None] = None,
    custom_row_names: Optional[Sequence[str]] = None,
    limits: GridLimits = DEFAULT_LIMITS,
) -> EditResult:
    try:
        scheme = NumberingScheme(numbering_scheme) if numbering_scheme is not None else config.numbering_scheme
        naming = RowNaming(row_naming) if row_naming is not None else config.row_naming
    except ValueError:
        return _refuse(
            config, EditFailure.invalid_type, "unknown naming {!r}/{!r}", numbering_scheme, row_naming
        )
    names = tuple(str(n or "") for n in custom_row_names) if custom_row_names is not None else config.custom_row_names

    renamed = replace(
        ensure_grid(config, limits), numbering_scheme=scheme, row_naming=naming, custom_row_names=names
    )
    logger.debug("naming changed to scheme={} rows={}", scheme.value, naming.value)
    return EditResult(config=relabel_grid(renamed))
