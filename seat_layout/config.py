from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .layout import LayoutError


@dataclass(frozen=True)
class GridLimits:
    min_rows: int = 1
    max_rows: int = 20
    min_columns: int = 1
    max_columns: int = 30

    def clamp_rows(self, rows: int) -> int:
        return max(self.min_rows, min(self.max_rows, int(rows)))

    def clamp_columns(self, columns: int) -> int:
        return max(self.min_columns, min(self.max_columns, int(columns)))

    def clamp(self, rows: int, columns: int) -> tuple[int, int]:
        return self.clamp_rows(rows), self.clamp_columns(columns)


DEFAULT_LIMITS = GridLimits()


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise LayoutError(f"{name} must be an integer, got {raw!r}") from e


def load_grid_limits(env: Optional[Mapping[str, str]] = None) -> GridLimits:
    """
    Read grid bounds from SEAT_LAYOUT_{MIN,MAX}_{ROWS,COLUMNS}.
    Unset variables keep the defaults; minimums never go below 1.
    """
    env = os.environ if env is None else env
    min_rows = max(1, _env_int(env, "SEAT_LAYOUT_MIN_ROWS", DEFAULT_LIMITS.min_rows))
    max_rows = _env_int(env, "SEAT_LAYOUT_MAX_ROWS", DEFAULT_LIMITS.max_rows)
    min_columns = max(1, _env_int(env, "SEAT_LAYOUT_MIN_COLUMNS", DEFAULT_LIMITS.min_columns))
    max_columns = _env_int(env, "SEAT_LAYOUT_MAX_COLUMNS", DEFAULT_LIMITS.max_columns)

    if min_rows > max_rows:
        raise LayoutError(f"row limits are inverted: min={min_rows}, max={max_rows}")
    if min_columns > max_columns:
        raise LayoutError(f"column limits are inverted: min={min_columns}, max={max_columns}")
    return GridLimits(min_rows=min_rows, max_rows=max_rows, min_columns=min_columns, max_columns=max_columns)
