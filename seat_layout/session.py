from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Union

from .config import DEFAULT_LIMITS, GridLimits
from .editor import (
    EditFailure,
    EditResult,
    LabelPolicy,
    paint_cell,
    resize_grid,
    set_custom_label,
    toggle_row_walkway,
    toggle_rows_walkway,
)
from .layout import LayoutConfig
from .numbering import row_has_seats
from .seat_types import DEFAULT_TYPE, SeatTypeKey


@dataclass(frozen=True)
class EditSession:
    """
    Designer UI state that sits next to the layout: the paint tool, the rows
    picked for bulk actions, and the cell whose label is being edited.
    """

    selected_tool: SeatTypeKey = DEFAULT_TYPE
    selected_rows: frozenset[int] = frozenset()
    editing_cell: Optional[tuple[int, int]] = None


def select_tool(session: EditSession, tool: Union[SeatTypeKey, str]) -> EditSession:
    key = SeatTypeKey.parse(tool)
    return replace(session, selected_tool=key if key is not None else DEFAULT_TYPE)


def toggle_row_selection(session: EditSession, row: int) -> EditSession:
    rows = set(session.selected_rows)
    rows.symmetric_difference_update({row})
    return replace(session, selected_rows=frozenset(rows))


def clear_row_selection(session: EditSession) -> EditSession:
    return replace(session, selected_rows=frozenset())


def begin_label_edit(session: EditSession, config: LayoutConfig, row: int, col: int) -> EditSession:
    cell = config.cell(row, col)
    if cell is None or not cell.is_seat:
        return session
    return replace(session, editing_cell=(row, col))


def cancel_label_edit(session: EditSession) -> EditSession:
    return replace(session, editing_cell=None)


def paint_with_tool(
    session: EditSession, config: LayoutConfig, row: int, col: int, limits: GridLimits = DEFAULT_LIMITS
) -> EditResult:
    return paint_cell(config, row, col, session.selected_tool, limits)


def commit_label_edit(
    session: EditSession,
    config: LayoutConfig,
    proposed_label: Optional[str],
    policy: LabelPolicy = LabelPolicy.design,
) -> tuple[EditSession, EditResult]:
    if session.editing_cell is None:
        return session, EditResult(config=config, ok=False, failure=EditFailure.no_such_cell)
    row, col = session.editing_cell
    result = set_custom_label(config, row, col, proposed_label, policy)
    if result.ok:
        session = cancel_label_edit(session)
    return session, result


def toggle_row(
    session: EditSession, config: LayoutConfig, row: int, limits: GridLimits = DEFAULT_LIMITS
) -> tuple[EditSession, EditResult]:
    result = toggle_row_walkway(config, row, limits)
    if not result.ok:
        return session, result
    rows = set(session.selected_rows)
    if row_has_seats(result.config.grid, row):
        rows.discard(row)
    else:
        rows.add(row)
    return replace(session, selected_rows=frozenset(rows)), result


def toggle_selected_rows(
    session: EditSession, config: LayoutConfig, limits: GridLimits = DEFAULT_LIMITS
) -> tuple[EditSession, EditResult]:
    result = toggle_rows_walkway(config, session.selected_rows, limits)
    if not result.ok:
        return session, result
    return clear_row_selection(session), result


def resize(
    session: EditSession, config: LayoutConfig, rows: int, columns: int, limits: GridLimits = DEFAULT_LIMITS
) -> tuple[EditSession, EditResult]:
    result = resize_grid(config, rows, columns, limits)
    return replace(session, selected_rows=frozenset(), editing_cell=None), result
