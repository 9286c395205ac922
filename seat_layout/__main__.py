from __future__ import annotations

import argparse
import csv
from pathlib import Path

from .config import load_grid_limits
from .editor import (
    EditResult,
    LabelPolicy,
    change_naming,
    paint_cell,
    resize_grid,
    set_custom_label,
    toggle_rows_walkway,
)
from .layout import LayoutError, NumberingScheme, RowNaming
from .log import configure_logging
from .payload import seat_rows
from .render import render_ascii
from .seat_types import SeatTypeKey
from .storage import load_layout, maybe_init_layout, save_layout
from .validation import analyze


DEFAULT_FILE = "seat_layout.json"


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--file",
        default=DEFAULT_FILE,
        help=f"Path to layout JSON file (default: {DEFAULT_FILE})",
    )


def _finish(args: argparse.Namespace, result: EditResult, done: str) -> int:
    for w in result.warnings:
        print(f"Warning: {w.value}")
    if not result.ok:
        print(f"Refused: {result.failure.value if result.failure else 'unknown'}")
        return 1
    save_layout(result.config, args.file)
    print(done)
    return 0


def cmd_init(args: argparse.Namespace) -> int:
    config = maybe_init_layout(
        args.file, rows=args.rows, columns=args.columns, overwrite=args.overwrite, limits=args.limits
    )
    print(f"Initialized layout at {args.file} ({config.rows} rows x {config.columns} columns)")
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    config = load_layout(args.file, args.limits)
    print(render_ascii(config, cell_width=args.width))
    return 0


def cmd_paint(args: argparse.Namespace) -> int:
    config = load_layout(args.file, args.limits)
    result = paint_cell(config, args.row, args.col, args.type, args.limits)
    return _finish(args, result, f"Painted R{args.row}C{args.col} as {args.type}")


def cmd_label(args: argparse.Namespace) -> int:
    config = load_layout(args.file, args.limits)
    result = set_custom_label(config, args.row, args.col, args.label, LabelPolicy(args.policy))
    cell = result.config.cell(args.row, args.col)
    return _finish(args, result, f"R{args.row}C{args.col} is now {cell.label if cell else ''!r}")


def cmd_toggle_row(args: argparse.Namespace) -> int:
    config = load_layout(args.file, args.limits)
    result = toggle_rows_walkway(config, args.row, args.limits)
    return _finish(args, result, f"Toggled walkway on rows {', '.join(str(r) for r in args.row)}")


def cmd_resize(args: argparse.Namespace) -> int:
    config = load_layout(args.file, args.limits)
    result = resize_grid(config, args.rows, args.columns, args.limits)
    return _finish(args, result, f"Resized to {result.config.rows} rows x {result.config.columns} columns")


def cmd_naming(args: argparse.Namespace) -> int:
    config = load_layout(args.file, args.limits)
    names = args.custom_row_names.split(",") if args.custom_row_names is not None else None
    result = change_naming(config, args.scheme, args.row_naming, names, args.limits)
    return _finish(
        args,
        result,
        f"Naming: scheme={result.config.numbering_scheme.value} rows={result.config.row_naming.value}",
    )


def cmd_validate(args: argparse.Namespace) -> int:
    config = load_layout(args.file, args.limits)
    result = analyze(config)
    stats = result.statistics
    print(f"Seats: {stats.total_seats} (accessible {stats.accessible_seats}) in {stats.actual_row_count} rows")
    if result.valid:
        print("Layout is valid")
        return 0
    for issue in result.issues:
        print(f"Invalid: {issue}")
    return 1


def cmd_export_csv(args: argparse.Namespace) -> int:
    config = load_layout(args.file, args.limits)
    out = Path(args.output)
    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open("w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(["seat_number", "row", "column", "seat_type", "price", "is_accessible"])
        for s in seat_rows(config):
            w.writerow([s.seat_number, s.row, s.column, s.seat_type.value, s.price, s.is_accessible])
    print(f"Exported seats to {out}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="seat_layout", description="Cinema screen seat layout designer (CLI).")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_init = sub.add_parser("init", help="Create a new layout JSON file")
    _add_common_args(p_init)
    p_init.add_argument("--rows", type=int, required=True)
    p_init.add_argument("--columns", type=int, required=True)
    p_init.add_argument("--overwrite", action="store_true", help="Overwrite existing layout file")
    p_init.set_defaults(func=cmd_init)

    p_show = sub.add_parser("show", help="Print the current layout")
    _add_common_args(p_show)
    p_show.add_argument("--width", type=int, default=5, help="Cell width for display")
    p_show.set_defaults(func=cmd_show)

    p_paint = sub.add_parser("paint", help="Change the seat type of one cell")
    _add_common_args(p_paint)
    p_paint.add_argument("--row", type=int, required=True)
    p_paint.add_argument("--col", type=int, required=True)
    p_paint.add_argument("--type", required=True, help=f"One of: {', '.join(k.value for k in SeatTypeKey)}")
    p_paint.set_defaults(func=cmd_paint)

    p_label = sub.add_parser("label", help="Set or clear (empty --label) a custom seat label")
    _add_common_args(p_label)
    p_label.add_argument("--row", type=int, required=True)
    p_label.add_argument("--col", type=int, required=True)
    p_label.add_argument("--label", default="")
    p_label.add_argument("--policy", choices=[p.value for p in LabelPolicy], default=LabelPolicy.design.value)
    p_label.set_defaults(func=cmd_label)

    p_toggle = sub.add_parser("toggle-row", help="Toggle rows between walkway and normal seats")
    _add_common_args(p_toggle)
    p_toggle.add_argument("--row", type=int, action="append", required=True)
    p_toggle.set_defaults(func=cmd_toggle_row)

    p_resize = sub.add_parser("resize", help="Rebuild the grid at a new size (discards seat edits)")
    _add_common_args(p_resize)
    p_resize.add_argument("--rows", type=int, required=True)
    p_resize.add_argument("--columns", type=int, required=True)
    p_resize.set_defaults(func=cmd_resize)

    p_naming = sub.add_parser("naming", help="Change the numbering scheme and row naming")
    _add_common_args(p_naming)
    p_naming.add_argument("--scheme", choices=[s.value for s in NumberingScheme])
    p_naming.add_argument("--row-naming", choices=[n.value for n in RowNaming])
    p_naming.add_argument("--custom-row-names", help="Comma separated, in order of rows with seats")
    p_naming.set_defaults(func=cmd_naming)

    p_validate = sub.add_parser("validate", help="Report statistics and validation issues")
    _add_common_args(p_validate)
    p_validate.set_defaults(func=cmd_validate)

    p_export = sub.add_parser("export-csv", help="Export seats to a CSV file")
    _add_common_args(p_export)
    p_export.add_argument("--output", required=True)
    p_export.set_defaults(func=cmd_export_csv)

    return p


def main() -> int:
    configure_logging()
    p = build_parser()
    args = p.parse_args()
    try:
        args.limits = load_grid_limits()
        return int(args.func(args))
    except LayoutError as e:
        print(f"Error: {e}")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
