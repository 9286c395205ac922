from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from loguru import logger

from .config import DEFAULT_LIMITS, GridLimits
from .factory import create_grid, default_cell
from .layout import Grid, LayoutConfig, LayoutError, NumberingScheme, RowNaming, SeatCell
from .numbering import relabel_grid, row_has_seats
from .seat_types import ACCESSIBLE_TYPE, DEFAULT_TYPE, NON_SEAT_TYPES, SeatTypeKey, lookup, registry_dict
from .validation import analyze


@dataclass(frozen=True)
class SeatRecord:
    seat_number: str
    row: str
    column: int
    seat_type: SeatTypeKey
    price: float
    is_accessible: bool


def _as_int(value: Any) -> Optional[int]:
    try:
        return int(value)
    except OverflowError:
        # +/-inf; the grid limits clamp it.
        return sys.maxsize if float(value) > 0 else -sys.maxsize
    except (TypeError, ValueError):
        return None


def _as_price(value: Any) -> Optional[float]:
    try:
        price = float(value)
    except (TypeError, ValueError):
        return None
    return price if price >= 0 else None


def _parse_cell(raw: Any, row: int, col: int) -> SeatCell:
    if not isinstance(raw, Mapping):
        logger.debug("patching missing cell ({}, {})", row, col)
        return default_cell(row, col)

    key = SeatTypeKey.parse(raw.get("type"))
    if key is None:
        logger.debug("unknown seat type {!r} at ({}, {}), using {}", raw.get("type"), row, col, DEFAULT_TYPE.value)
        key = DEFAULT_TYPE
    if key in NON_SEAT_TYPES:
        return SeatCell(column=col + 1, type=key)

    seat_type = lookup(key)
    price = _as_price(raw.get("price"))
    return SeatCell(
        column=col + 1,
        type=key,
        custom_label=str(raw.get("custom_number") or "").strip(),
        price=seat_type.price if price is None else price,
        is_accessible=bool(raw.get("is_accessible")) or key == ACCESSIBLE_TYPE,
    )


def _parse_grid(raw: Any, rows: int, columns: int) -> Grid:
    if not isinstance(raw, list) or not raw:
        logger.debug("layout has no grid, building {}x{}", rows, columns)
        return create_grid(rows, columns)
    out: list[tuple[SeatCell, ...]] = []
    for r in range(rows):
        cells = raw[r] if r < len(raw) and isinstance(raw[r], list) else []
        out.append(tuple(_parse_cell(cells[c] if c < len(cells) else None, r, c) for c in range(columns)))
    return tuple(out)


def hydrate(data: Any, limits: GridLimits = DEFAULT_LIMITS) -> LayoutConfig:
    """
    Build a consistent LayoutConfig from a persisted layout blob. Anything
    repairable is repaired: missing grids are built, ragged rows padded or cut,
    unknown seat types become ``normal``, and all labels are recomputed.
    """
    if not isinstance(data, Mapping):
        raise LayoutError(f"layout must be a JSON object, got {type(data).__name__}")

    raw_grid = data.get("layout")
    rows = _as_int(data.get("rows"))
    columns = _as_int(data.get("columns"))
    if rows is None and isinstance(raw_grid, list) and raw_grid:
        rows = len(raw_grid)
    if columns is None and isinstance(raw_grid, list) and raw_grid:
        columns = max((len(r) for r in raw_grid if isinstance(r, list)), default=0)
    if rows is None or columns is None:
        raise LayoutError("layout needs rows and columns, or a grid to infer them from")
    rows, columns = limits.clamp(rows, columns)

    try:
        scheme = NumberingScheme(data.get("numbering_scheme") or NumberingScheme.alphabetic)
    except ValueError:
        logger.debug("unknown numbering scheme {!r}", data.get("numbering_scheme"))
        scheme = NumberingScheme.alphabetic
    try:
        naming = RowNaming(data.get("row_naming") or RowNaming.alphabetic)
    except ValueError:
        logger.debug("unknown row naming {!r}", data.get("row_naming"))
        naming = RowNaming.alphabetic

    raw_names = data.get("custom_row_names")
    names = tuple(str(n or "") for n in raw_names) if isinstance(raw_names, list) else ()

    config = LayoutConfig(
        rows=rows,
        columns=columns,
        numbering_scheme=scheme,
        row_naming=naming,
        custom_row_names=names,
        grid=_parse_grid(raw_grid, rows, columns),
    )
    return relabel_grid(config)


def _cell_payload(cell: SeatCell) -> dict:
    return {
        "row": cell.row_label,
        "column": cell.column,
        "type": cell.type.value,
        "number": cell.label,
        "price": cell.price,
        "is_accessible": cell.is_accessible,
        "custom_number": cell.custom_label,
    }


def to_payload(config: LayoutConfig) -> dict:
    grid = config.grid
    walkway_cols = [
        c for c in range(config.columns) if grid and all(c < len(cells) and not cells[c].is_seat for cells in grid)
    ]
    return {
        "rows": config.rows,
        "columns": config.columns,
        "numbering_scheme": config.numbering_scheme.value,
        "row_naming": config.row_naming.value,
        "custom_row_names": list(config.custom_row_names),
        "seat_types": registry_dict(),
        "layout": [[_cell_payload(cell) for cell in cells] for cells in grid],
        "walkway_rows": [r for r in range(len(grid)) if not row_has_seats(grid, r)],
        "walkway_cols": walkway_cols,
        "accessible_seats": [cell.label for _, _, cell in config.iter_cells() if cell.is_seat and cell.is_accessible],
    }


def seat_rows(config: LayoutConfig) -> list[SeatRecord]:
    return [
        SeatRecord(
            seat_number=cell.label,
            row=cell.row_label,
            column=cell.column,
            seat_type=cell.type,
            price=cell.price,
            is_accessible=cell.is_accessible,
        )
        for _, _, cell in config.iter_cells()
        if cell.is_seat
    ]


def save_payload(config: LayoutConfig) -> dict:
    """The values a save collaborator persists; refuses invalid layouts."""
    result = analyze(config)
    if not result.valid:
        raise LayoutError("layout is not valid: " + "; ".join(result.issues))
    return {
        "layout": to_payload(config),
        "total_seats": result.statistics.total_seats,
        "accessible_seats_count": result.statistics.accessible_seats,
    }
