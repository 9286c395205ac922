from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from .config import DEFAULT_LIMITS, GridLimits
from .editor import resize_grid
from .layout import LayoutConfig, LayoutError
from .payload import hydrate, to_payload


def load_layout(path: str | Path, limits: GridLimits = DEFAULT_LIMITS) -> LayoutConfig:
    p = Path(path)
    if not p.exists():
        raise LayoutError(f"layout file not found: {p}")

    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise LayoutError(f"failed to read layout JSON: {e}") from e

    return hydrate(data, limits)


def save_layout(config: LayoutConfig, path: str | Path) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(to_payload(config), indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


def maybe_init_layout(
    path: str | Path,
    *,
    rows: Optional[int] = None,
    columns: Optional[int] = None,
    overwrite: bool = False,
    limits: GridLimits = DEFAULT_LIMITS,
) -> LayoutConfig:
    p = Path(path)
    if p.exists() and not overwrite:
        return load_layout(p, limits)

    if rows is None or columns is None:
        raise LayoutError("rows and columns are required to initialize a new layout")

    config = resize_grid(LayoutConfig(rows=rows, columns=columns), rows, columns, limits).config
    save_layout(config, p)
    return config
