import tempfile
import unittest
from pathlib import Path

from seat_layout.editor import paint_cell, resize_grid, set_custom_label
from seat_layout.layout import LayoutConfig, LayoutError
from seat_layout.render import render_ascii
from seat_layout.storage import load_layout, maybe_init_layout, save_layout


class TestStorage(unittest.TestCase):
    def setUp(self):
        self._tmpdir = tempfile.TemporaryDirectory()
        self.path = Path(self._tmpdir.name) / "screens" / "layout.json"

    def tearDown(self):
        self._tmpdir.cleanup()

    def test_save_and_load(self):
        config = resize_grid(LayoutConfig(rows=3, columns=3), 3, 3).config
        config = paint_cell(config, 1, 1, "walkway").config
        save_layout(config, self.path)
        self.assertEqual(load_layout(self.path), config)

    def test_missing_file(self):
        with self.assertRaises(LayoutError):
            load_layout(self.path)

    def test_bad_json(self):
        self.path.parent.mkdir(parents=True)
        self.path.write_text("{not json", encoding="utf-8")
        with self.assertRaises(LayoutError):
            load_layout(self.path)

    def test_maybe_init(self):
        with self.assertRaises(LayoutError):
            maybe_init_layout(self.path)
        created = maybe_init_layout(self.path, rows=2, columns=5)
        self.assertEqual(created.cell(1, 4).label, "B5")
        # Existing file wins unless overwrite is set.
        self.assertEqual(maybe_init_layout(self.path, rows=9, columns=9), created)
        self.assertEqual(maybe_init_layout(self.path, rows=4, columns=4, overwrite=True).rows, 4)


class TestRender(unittest.TestCase):
    def test_render_marks_walkways_and_duplicates(self):
        config = resize_grid(LayoutConfig(rows=2, columns=3), 2, 3).config
        config = paint_cell(config, 0, 1, "walkway").config
        config = paint_cell(config, 0, 2, "empty").config
        config = set_custom_label(config, 1, 0, "A1").config
        lines = render_ascii(config).splitlines()
        self.assertEqual(len(lines), 3)
        self.assertTrue(lines[1].startswith("A"))
        self.assertIn("A1*", lines[1])
        self.assertIn(".", lines[1])
        self.assertIn("A1*", lines[2])
        self.assertIn("B2", lines[2])


if __name__ == "__main__":
    unittest.main()
