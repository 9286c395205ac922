import unittest

from seat_layout.config import DEFAULT_LIMITS, GridLimits, load_grid_limits
from seat_layout.layout import LayoutError


class TestGridLimits(unittest.TestCase):
    def test_defaults(self):
        self.assertEqual(load_grid_limits({}), DEFAULT_LIMITS)
        self.assertEqual((DEFAULT_LIMITS.max_rows, DEFAULT_LIMITS.max_columns), (20, 30))

    def test_env_override(self):
        limits = load_grid_limits({"SEAT_LAYOUT_MAX_ROWS": "40", "SEAT_LAYOUT_MIN_COLUMNS": "0"})
        self.assertEqual(limits.max_rows, 40)
        self.assertEqual(limits.min_columns, 1)

    def test_bad_values(self):
        with self.assertRaises(LayoutError):
            load_grid_limits({"SEAT_LAYOUT_MAX_ROWS": "lots"})
        with self.assertRaises(LayoutError):
            load_grid_limits({"SEAT_LAYOUT_MIN_ROWS": "10", "SEAT_LAYOUT_MAX_ROWS": "5"})

    def test_clamp(self):
        limits = GridLimits(min_rows=2, max_rows=4, min_columns=3, max_columns=5)
        self.assertEqual(limits.clamp(1, 9), (2, 5))
        self.assertEqual(limits.clamp(3, 4), (3, 4))


if __name__ == "__main__":
    unittest.main()
