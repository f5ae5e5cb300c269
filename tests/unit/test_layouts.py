"""
Unit tests for layout templates and the geometry resolver
"""

import unittest

from paneshift.layouts import (
    ALL_LAYOUTS, LAYOUTS_BY_COUNT, MIN_ROWS, create_template, get_layout,
    get_layouts_for_count, minimum_window_size, resolve_layout, validate_template,
    with_min_bottom,
)
from paneshift.models import LayoutTemplate, PaneLayout, Rect

WINDOW_SIZES = [(40, 12), (80, 24), (120, 40), (200, 60)]


def _template(name, *panes):
    return LayoutTemplate(name, tuple(PaneLayout(*pane) for pane in panes))


class TestResolveLayout(unittest.TestCase):
    """Test resolve_layout"""

    def test_single_pane_fills_window(self):
        rects = resolve_layout(_template("full", (0, 0, 1, 1)), 80, 24)
        self.assertEqual(rects, [Rect(0, 0, 80, 24)])

    def test_horizontal_split_accounts_for_separator(self):
        template = _template("hsplit", (0, 0, 0.5, 1), (0.5, 0, 0.5, 1))
        left, right = resolve_layout(template, 80, 24)

        # floor(0.5 * 79) for the left pane, the right pane takes the rest
        self.assertEqual(left, Rect(0, 0, 39, 24))
        self.assertEqual(right, Rect(40, 0, 40, 24))

    def test_vertical_split_accounts_for_separator(self):
        template = _template("vsplit", (0, 0, 1, 0.5), (0, 0.5, 1, 0.5))
        top, bottom = resolve_layout(template, 80, 24)

        self.assertEqual(top, Rect(0, 0, 80, 11))
        self.assertEqual(bottom, Rect(0, 12, 80, 12))

    def test_reserved_rows_leave_one_separator(self):
        template = _template("main-with-bottom", (0, 0, 1, -6), (0, -6, 1, 6))
        main, strip = resolve_layout(template, 80, 24)

        self.assertEqual(main, Rect(0, 0, 80, 17))  # 24 - 6 - 1 separator
        self.assertEqual(strip, Rect(0, 18, 80, 6))
        self.assertEqual(strip.y - main.bottom, 1)

    def test_negative_fraction_height(self):
        template = _template("fraction", (0, 0, 1, -0.3), (0, 0.5, 1, 0.5))
        top, _ = resolve_layout(template, 80, 24)
        self.assertEqual(top.height, 6)  # floor(0.3 * 23)

    def test_absolute_rows(self):
        template = _template("absolute", (0, 0, 1, 0.5), (0, 5, 1, 4))
        _, second = resolve_layout(template, 80, 24)
        self.assertEqual(second.y, 5)
        self.assertEqual(second.height, 4)

    def test_four_pane_grid(self):
        template = _template(
            "grid",
            (0, 0, 0.5, 0.5), (0, 0.5, 0.5, 0.5),
            (0.5, 0, 0.5, 0.5), (0.5, 0.5, 0.5, 0.5),
        )
        rects = resolve_layout(template, 80, 24)
        self.assertEqual(rects, [
            Rect(0, 0, 39, 11),
            Rect(0, 12, 39, 12),
            Rect(40, 0, 40, 11),
            Rect(40, 12, 40, 12),
        ])

    def test_three_panes_with_bottom_strip(self):
        rects = resolve_layout(get_layout("left + right with bottom"), 80, 24)
        self.assertEqual(rects, [
            Rect(0, 0, 39, 24),
            Rect(40, 0, 40, 17),
            Rect(40, 18, 40, 6),
        ])

    def test_window_sizes(self):
        template = _template("full", (0, 0, 1, 1))
        self.assertEqual(resolve_layout(template, 40, 12), [Rect(0, 0, 40, 12)])
        self.assertEqual(resolve_layout(template, 200, 50), [Rect(0, 0, 200, 50)])

    def test_empty_template(self):
        self.assertEqual(resolve_layout(LayoutTemplate("empty", ()), 80, 24), [])

    def test_thirds_absorb_remainder(self):
        template = _template("thirds", (0, 0, 1 / 3, 1), (1 / 3, 0, 1 / 3, 1), (2 / 3, 0, 1 / 3, 1))
        rects = resolve_layout(template, 80, 24)
        self.assertEqual(rects[-1].right, 80)
        self.assertTrue(all(rect.width > 0 for rect in rects))

    def test_edges_meet_next_column_and_row(self):
        template = _template(
            "uneven",
            (0, 0, 0.33, 1), (0.33, 0, 0.33, 0.4), (0.33, 0.4, 0.33, 0.6), (0.66, 0, 0.34, 1),
        )
        left, top, bottom, right = resolve_layout(template, 80, 24)
        self.assertEqual(left, Rect(0, 0, 25, 24))
        self.assertEqual(top, Rect(26, 0, 26, 9))
        self.assertEqual(bottom, Rect(26, 10, 26, 14))
        self.assertEqual(right, Rect(53, 0, 27, 24))

    def test_deterministic(self):
        for template in ALL_LAYOUTS:
            with self.subTest(layout=template.name):
                self.assertEqual(resolve_layout(template, 97, 31), resolve_layout(template, 97, 31))


class TestCatalogGeometry(unittest.TestCase):
    """Every built-in template tiles the window"""

    def test_all_layouts_positive_and_in_bounds(self):
        for width, height in WINDOW_SIZES:
            for template in ALL_LAYOUTS:
                with self.subTest(layout=template.name, size=f"{width}x{height}"):
                    rects = resolve_layout(template, width, height)
                    self.assertEqual(len(rects), template.pane_count)
                    for rect in rects:
                        self.assertGreater(rect.width, 0)
                        self.assertGreater(rect.height, 0)
                        self.assertGreaterEqual(rect.x, 0)
                        self.assertGreaterEqual(rect.y, 0)
                        self.assertLessEqual(rect.right, width)
                        self.assertLessEqual(rect.bottom, height)

    def test_all_layouts_separated_by_one_cell(self):
        for width, height in WINDOW_SIZES:
            for template in ALL_LAYOUTS:
                rects = resolve_layout(template, width, height)
                columns = {}
                for rect in rects:
                    columns.setdefault(rect.x, []).append(rect)
                xs = sorted(columns)
                with self.subTest(layout=template.name, size=f"{width}x{height}"):
                    for left_x, right_x in zip(xs, xs[1:]):
                        self.assertEqual(right_x - columns[left_x][0].right, 1)
                    self.assertEqual(columns[xs[-1]][0].right, width)
                    for column in columns.values():
                        column.sort(key=lambda rect: rect.y)
                        self.assertEqual(column[0].y, 0)
                        self.assertEqual(column[-1].bottom, height)
                        for upper, lower in zip(column, column[1:]):
                            self.assertEqual(lower.y - upper.bottom, 1)

    def test_minimum_window_size(self):
        self.assertEqual(minimum_window_size(get_layout("full")), (1, 1))
        self.assertEqual(minimum_window_size(get_layout("50/50")), (3, 1))
        self.assertEqual(minimum_window_size(get_layout("left + right stacked")), (3, 3))
        self.assertEqual(minimum_window_size(get_layout("left + right with bottom")), (3, MIN_ROWS + 2))

    def test_all_layouts_resolve_at_minimum_size(self):
        for template in ALL_LAYOUTS:
            width, height = minimum_window_size(template)
            with self.subTest(layout=template.name):
                for rect in resolve_layout(template, width, height):
                    self.assertGreater(rect.width, 0)
                    self.assertGreater(rect.height, 0)
                    self.assertLessEqual(rect.right, width)
                    self.assertLessEqual(rect.bottom, height)

    def test_all_layouts_validate(self):
        for template in ALL_LAYOUTS:
            with self.subTest(layout=template.name):
                validate_template(template)
                validate_template(template, 203, 57)

    def test_validate_rejects_gap_and_overlap(self):
        top_wide = _template("top wide", (0, 0, 1, 0.5), (0, 0.5, 0.5, 0.5), (0.5, 0.5, 0.5, 0.5))
        with self.assertRaisesRegex(ValueError, "does not tile"):
            validate_template(top_wide)

        twins = _template("twins", (0, 0, 1, 1), (0, 0, 1, 1))
        with self.assertRaisesRegex(ValueError, "overlap"):
            validate_template(twins)

        short = _template("short", (0, 0, 1, 0.5))
        with self.assertRaisesRegex(ValueError, "does not tile|single pane"):
            validate_template(short)


class TestLayoutCatalog(unittest.TestCase):
    """Test the built-in catalog and factory"""

    def test_counts(self):
        self.assertEqual(sorted(LAYOUTS_BY_COUNT), [1, 2, 3, 4])
        for count, templates in LAYOUTS_BY_COUNT.items():
            for template in templates:
                self.assertEqual(template.pane_count, count)

    def test_all_layouts_ordered_by_count(self):
        counts = [template.pane_count for template in ALL_LAYOUTS]
        self.assertEqual(counts, sorted(counts))
        self.assertEqual(len(ALL_LAYOUTS), 10)

    def test_get_layouts_for_count(self):
        self.assertEqual(len(get_layouts_for_count(3)), 4)
        self.assertIsNone(get_layouts_for_count(0))
        self.assertIsNone(get_layouts_for_count(5))

    def test_get_layout(self):
        self.assertEqual(get_layout("both stacked").pane_count, 4)
        self.assertIsNone(get_layout("nope"))

    def test_with_min_bottom(self):
        main, strip = with_min_bottom(0.5, 0.5)
        self.assertEqual(main, PaneLayout(0.5, 0, 0.5, -MIN_ROWS))
        self.assertEqual(strip, PaneLayout(0.5, -MIN_ROWS, 0.5, MIN_ROWS))

    def test_create_template_from_name(self):
        self.assertIs(create_template("full"), get_layout("full"))
        with self.assertRaises(ValueError):
            create_template("missing")

    def test_create_template_from_dict(self):
        template = create_template({
            "name": "wide left",
            "panes": [
                {"x": 0, "y": 0, "width": 0.7, "height": 1},
                {"x": 0.7, "y": 0, "width": 0.3, "height": 1},
            ],
        })
        self.assertEqual(template.name, "wide left")
        self.assertEqual(template.panes[1], PaneLayout(0.7, 0, 0.3, 1))
        self.assertIsInstance(template.panes, tuple)

    def test_create_template_rejects_bad_dicts(self):
        bad_specs = [
            {"panes": [{"x": 0, "y": 0, "width": 1, "height": 1}]},
            {"name": "no panes", "panes": []},
            {"name": "text", "panes": [{"x": "0", "y": 0, "width": 1, "height": 1}]},
            {"name": "bool", "panes": [{"x": 0, "y": 0, "width": True, "height": 1}]},
            {"name": "zero width", "panes": [{"x": 0, "y": 0, "width": 0, "height": 1}]},
            {"name": "zero height", "panes": [{"x": 0, "y": 0, "width": 1, "height": 0}]},
            {"name": "not a mapping", "panes": [[0, 0, 1, 1]]},
        ]
        for layout_spec in bad_specs:
            with self.subTest(layout_spec=layout_spec):
                with self.assertRaises(ValueError):
                    create_template(layout_spec)

    def test_create_template_passthrough_and_type_error(self):
        template = get_layout("50/50")
        self.assertIs(create_template(template), template)
        with self.assertRaises(TypeError):
            create_template(42)


if __name__ == '__main__':
    unittest.main()
