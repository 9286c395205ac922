from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from loguru import logger

from .layout import Grid, LayoutConfig, RowNaming
from .numbering import actual_row_count
from .seat_types import ACCESSIBLE_TYPE


@dataclass(frozen=True)
class DuplicateAnalysis:
    seat_number_counts: dict[str, int] = field(default_factory=dict)
    duplicate_positions: frozenset[tuple[int, int]] = frozenset()
    # In order of first appearance, scanning rows then columns.
    duplicate_labels: tuple[str, ...] = ()

    def is_duplicate(self, row: int, col: int) -> bool:
        return (row, col) in self.duplicate_positions

    def to_dict(self) -> dict:
        return {
            "duplicate_labels": list(self.duplicate_labels),
            "seat_number_counts": dict(self.seat_number_counts),
            "duplicate_positions": [list(p) for p in sorted(self.duplicate_positions)],
        }


@dataclass(frozen=True)
class LayoutStatistics:
    total_seats: int = 0
    accessible_seats: int = 0
    actual_row_count: int = 0

    def to_dict(self) -> dict:
        return {
            "total_seats": self.total_seats,
            "accessible_seats": self.accessible_seats,
            "actual_row_count": self.actual_row_count,
        }


def analyze_duplicates(grid: Grid) -> DuplicateAnalysis:
    counts: dict[str, int] = {}
    positions: dict[str, list[tuple[int, int]]] = {}
    for r, cells in enumerate(grid):
        for c, cell in enumerate(cells):
            label = cell.label.strip()
            if not cell.is_seat or not label:
                continue
            counts[label] = counts.get(label, 0) + 1
            positions.setdefault(label, []).append((r, c))

    duplicates = tuple(label for label, n in counts.items() if n > 1)
    dup_positions = frozenset(p for label in duplicates for p in positions[label])
    if duplicates:
        logger.debug("duplicate seat labels: {}", ", ".join(duplicates))
    return DuplicateAnalysis(
        seat_number_counts=counts,
        duplicate_positions=dup_positions,
        duplicate_labels=duplicates,
    )


def compute_statistics(grid: Grid) -> LayoutStatistics:
    total = 0
    accessible = 0
    for cells in grid:
        for cell in cells:
            if not cell.is_seat:
                continue
            total += 1
            if cell.is_accessible or cell.type == ACCESSIBLE_TYPE:
                accessible += 1
    return LayoutStatistics(total_seats=total, accessible_seats=accessible, actual_row_count=actual_row_count(grid))


def validation_issues(
    config: LayoutConfig, analysis: DuplicateAnalysis, statistics: LayoutStatistics
) -> list[str]:
    issues: list[str] = []
    if statistics.total_seats <= 0:
        issues.append("layout has no seats")
    if statistics.actual_row_count <= 0:
        issues.append("layout has no rows with seats")
    if config.row_naming == RowNaming.custom:
        names = config.custom_row_names
        missing = [
            i + 1
            for i in range(statistics.actual_row_count)
            if i >= len(names) or not (names[i] or "").strip()
        ]
        if missing:
            issues.append(
                f"custom row names missing for {len(missing)} of {statistics.actual_row_count} rows "
                f"(rows {', '.join(str(i) for i in missing[:10])})"
            )
    if analysis.duplicate_labels:
        issues.append(f"duplicate seat labels: {', '.join(analysis.duplicate_labels)}")
    return issues


def is_valid(config: LayoutConfig, analysis: DuplicateAnalysis, statistics: LayoutStatistics) -> bool:
    return not validation_issues(config, analysis, statistics)


def validate_label_edit(
    proposed_label: str,
    row: int,
    col: int,
    grid: Grid,
    seat_number_counts: Mapping[str, int],
) -> bool:
    """
    Local check for a manually entered seat label: non-blank, and either a
    no-op or not already in use. The grid-wide duplicate analysis stays the
    authority on validity.
    """
    proposed = (proposed_label or "").strip()
    if not proposed:
        return False
    current = grid[row][col] if 0 <= row < len(grid) and 0 <= col < len(grid[row]) else None
    if current is not None and proposed == current.label:
        return True
    return proposed not in seat_number_counts


@dataclass(frozen=True)
class LayoutAnalysis:
    statistics: LayoutStatistics
    duplicates: DuplicateAnalysis
    issues: tuple[str, ...]

    @property
    def valid(self) -> bool:
        return not self.issues

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "issues": list(self.issues),
            "statistics": self.statistics.to_dict(),
            "duplicates": self.duplicates.to_dict(),
        }


def analyze(config: LayoutConfig) -> LayoutAnalysis:
    duplicates = analyze_duplicates(config.grid)
    statistics = compute_statistics(config.grid)
    return LayoutAnalysis(
        statistics=statistics,
        duplicates=duplicates,
        issues=tuple(validation_issues(config, duplicates, statistics)),
    )
