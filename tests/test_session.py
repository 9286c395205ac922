import unittest

from seat_layout.editor import EditFailure, resize_grid
from seat_layout.layout import LayoutConfig
from seat_layout.seat_types import SeatTypeKey
from seat_layout.session import (
    EditSession,
    begin_label_edit,
    cancel_label_edit,
    clear_row_selection,
    commit_label_edit,
    paint_with_tool,
    resize,
    select_tool,
    toggle_row,
    toggle_row_selection,
    toggle_selected_rows,
)


def fresh(rows=4, columns=4) -> LayoutConfig:
    return resize_grid(LayoutConfig(rows=rows, columns=columns), rows, columns).config


class TestEditSession(unittest.TestCase):
    def test_tool_selection(self):
        s = select_tool(EditSession(), "recliner")
        self.assertEqual(s.selected_tool, SeatTypeKey.recliner)
        self.assertEqual(select_tool(s, "bogus").selected_tool, SeatTypeKey.normal)

    def test_paint_with_tool(self):
        s = select_tool(EditSession(), SeatTypeKey.couple)
        config = paint_with_tool(s, fresh(), 0, 0).config
        self.assertEqual(config.cell(0, 0).type, SeatTypeKey.couple)
        self.assertEqual(config.cell(0, 0).price, 300)

    def test_row_selection(self):
        s = toggle_row_selection(EditSession(), 2)
        s = toggle_row_selection(s, 3)
        self.assertEqual(s.selected_rows, frozenset({2, 3}))
        s = toggle_row_selection(s, 2)
        self.assertEqual(s.selected_rows, frozenset({3}))
        self.assertEqual(clear_row_selection(s).selected_rows, frozenset())

    def test_label_edit_only_on_seats(self):
        config = fresh()
        s = begin_label_edit(EditSession(), config, 1, 1)
        self.assertEqual(s.editing_cell, (1, 1))
        self.assertEqual(cancel_label_edit(s).editing_cell, None)

        _, result = toggle_row(EditSession(), config, 0)
        self.assertIsNone(begin_label_edit(EditSession(), result.config, 0, 0).editing_cell)

    def test_commit_label_edit(self):
        config = fresh()
        s = begin_label_edit(EditSession(), config, 1, 1)
        s2, result = commit_label_edit(s, config, "")
        self.assertFalse(result.ok)
        self.assertEqual(s2.editing_cell, (1, 1))

        s3, result = commit_label_edit(s, config, "VIP")
        self.assertTrue(result.ok)
        self.assertIsNone(s3.editing_cell)
        self.assertEqual(result.config.cell(1, 1).label, "VIP")

    def test_commit_without_editing_cell(self):
        _, result = commit_label_edit(EditSession(), fresh(), "VIP")
        self.assertFalse(result.ok)
        self.assertEqual(result.failure, EditFailure.no_such_cell)

    def test_toggle_row_tracks_selection(self):
        config = fresh()
        s, result = toggle_row(EditSession(), config, 1)
        self.assertIn(1, s.selected_rows)
        s, result = toggle_row(s, result.config, 1)
        self.assertNotIn(1, s.selected_rows)

    def test_toggle_selected_rows(self):
        s = toggle_row_selection(toggle_row_selection(EditSession(), 0), 2)
        s, result = toggle_selected_rows(s, fresh())
        self.assertTrue(result.ok)
        self.assertEqual(s.selected_rows, frozenset())
        self.assertEqual([result.config.cell(r, 0).row_label for r in range(4)], ["", "A", "", "B"])

    def test_resize_resets_session(self):
        s = toggle_row_selection(EditSession(editing_cell=(0, 0)), 1)
        s, result = resize(s, fresh(), 2, 2)
        self.assertEqual(s.selected_rows, frozenset())
        self.assertIsNone(s.editing_cell)
        self.assertEqual((result.config.rows, result.config.columns), (2, 2))


if __name__ == "__main__":
    unittest.main()
