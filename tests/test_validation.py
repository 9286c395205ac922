import unittest

from seat_layout.editor import change_naming, paint_cell, resize_grid, set_custom_label, toggle_rows_walkway
from seat_layout.layout import LayoutConfig, SeatCell
from seat_layout.seat_types import SeatTypeKey
from seat_layout.validation import (
    analyze,
    analyze_duplicates,
    compute_statistics,
    is_valid,
    validate_label_edit,
    validation_issues,
)


def fresh(rows=8, columns=12) -> LayoutConfig:
    return resize_grid(LayoutConfig(rows=rows, columns=columns), rows, columns).config


class TestDuplicates(unittest.TestCase):
    def test_fresh_grid_has_no_duplicates(self):
        a = analyze_duplicates(fresh().grid)
        self.assertEqual(a.duplicate_labels, ())
        self.assertEqual(len(a.seat_number_counts), 96)
        self.assertEqual(a.duplicate_positions, frozenset())

    def test_scenario_duplicate_custom_labels(self):
        config = fresh()
        config = set_custom_label(config, 0, 0, "Z9").config
        config = set_custom_label(config, 5, 5, "Z9").config
        a = analyze_duplicates(config.grid)
        self.assertEqual(a.duplicate_labels, ("Z9",))
        self.assertEqual(a.seat_number_counts["Z9"], 2)
        self.assertIn((0, 0), a.duplicate_positions)
        self.assertIn((5, 5), a.duplicate_positions)
        self.assertTrue(a.is_duplicate(5, 5))

        stats = compute_statistics(config.grid)
        self.assertFalse(is_valid(config, a, stats))
        self.assertEqual(len(validation_issues(config, a, stats)), 1)

    def test_reported_counts_match_grid(self):
        config = fresh(4, 4)
        for pos in ((0, 0), (1, 1), (2, 2)):
            config = set_custom_label(config, *pos, "X").config
        config = set_custom_label(config, 3, 3, "A2").config
        a = analyze_duplicates(config.grid)
        for label in a.duplicate_labels:
            cells = [(r, c) for r, c, cell in config.iter_cells() if cell.label == label]
            self.assertEqual(len(cells), a.seat_number_counts[label])
            for p in cells:
                self.assertIn(p, a.duplicate_positions)
        self.assertEqual(set(a.duplicate_labels), {"X", "A2"})

    def test_non_seat_cells_are_ignored(self):
        grid = (
            (
                SeatCell(column=1, type=SeatTypeKey.normal, label="A1"),
                SeatCell(column=2, type=SeatTypeKey.walkway, label="A1"),
            ),
        )
        self.assertEqual(analyze_duplicates(grid).duplicate_labels, ())


class TestStatistics(unittest.TestCase):
    def test_counts(self):
        config = fresh(3, 4)
        config = paint_cell(config, 0, 0, "disabled_access").config
        config = paint_cell(config, 0, 1, "walkway").config
        config = toggle_rows_walkway(config, [2]).config
        stats = compute_statistics(config.grid)
        self.assertEqual(stats.total_seats, 7)
        self.assertEqual(stats.accessible_seats, 1)
        self.assertEqual(stats.actual_row_count, 2)

    def test_empty_grid(self):
        stats = compute_statistics(())
        self.assertEqual((stats.total_seats, stats.accessible_seats, stats.actual_row_count), (0, 0, 0))


class TestValidity(unittest.TestCase):
    def test_fresh_grid_is_valid(self):
        self.assertTrue(analyze(fresh()).valid)

    def test_all_walkway_is_invalid(self):
        config = toggle_rows_walkway(fresh(2, 2), [0, 1]).config
        result = analyze(config)
        self.assertFalse(result.valid)
        self.assertIn("layout has no seats", result.issues)

    def test_uninitialized_layout_is_invalid(self):
        self.assertFalse(analyze(LayoutConfig(rows=2, columns=2)).valid)

    def test_scenario_incomplete_custom_row_names(self):
        config = change_naming(fresh(), row_naming="custom", custom_row_names=["VIP"]).config
        result = analyze(config)
        self.assertEqual(result.statistics.actual_row_count, 8)
        self.assertFalse(result.valid)
        self.assertEqual(result.duplicates.duplicate_labels, ())

    def test_complete_custom_row_names(self):
        names = ["VIP", "Gold", "Silver"]
        config = change_naming(fresh(3, 2), row_naming="custom", custom_row_names=names).config
        self.assertTrue(analyze(config).valid)

    def test_blank_custom_row_name_is_invalid(self):
        config = change_naming(fresh(3, 2), row_naming="custom", custom_row_names=["VIP", " ", "Gold"]).config
        self.assertFalse(analyze(config).valid)

    def test_custom_row_names_follow_actual_rows(self):
        config = change_naming(fresh(3, 2), row_naming="custom", custom_row_names=["VIP", "Gold"]).config
        self.assertFalse(analyze(config).valid)
        config = toggle_rows_walkway(config, [1]).config
        self.assertTrue(analyze(config).valid)
        self.assertEqual(config.cell(2, 0).row_label, "Gold")


class TestLabelEditCheck(unittest.TestCase):
    def setUp(self):
        self.config = fresh(2, 3)
        self.counts = analyze_duplicates(self.config.grid).seat_number_counts

    def test_blank_rejected(self):
        self.assertFalse(validate_label_edit("  ", 0, 0, self.config.grid, self.counts))

    def test_same_label_accepted(self):
        self.assertTrue(validate_label_edit("A1", 0, 0, self.config.grid, self.counts))

    def test_existing_label_rejected(self):
        self.assertFalse(validate_label_edit("B2", 0, 0, self.config.grid, self.counts))

    def test_new_label_accepted(self):
        self.assertTrue(validate_label_edit("VIP-1", 0, 0, self.config.grid, self.counts))


if __name__ == "__main__":
    unittest.main()
