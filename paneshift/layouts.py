"""
Layout Templates

Built-in pane layouts for one to four panes and the resolver that turns a
normalized template into absolute terminal cells.
"""

import math
from typing import Dict, List, Optional, Tuple, Union

from .layout_codec import build_layout_tree, check_layout_tree
from .models import LayoutTemplate, Pane, PaneLayout, Rect

# Absolute height in rows of the short bottom strips (watchers, logs)
MIN_ROWS = 6

# Largest window dimension tried by minimum_window_size
MAX_WINDOW_CELLS = 1000

# Tolerance for "edge reaches 1.0" with fractions like 1/3 + 2/3
_EDGE_EPSILON = 1e-9

SUPPORTED_PANE_COUNTS = (1, 2, 3, 4)


def with_min_bottom(x: float, width: float, rows: int = MIN_ROWS) -> Tuple[PaneLayout, PaneLayout]:
    """Main pane plus a fixed-height strip at the bottom of one column"""
    return (
        PaneLayout(x=x, y=0, width=width, height=-rows),  # fill what the strip leaves
        PaneLayout(x=x, y=-rows, width=width, height=rows),  # rows anchored to the bottom
    )


LAYOUTS_BY_COUNT: Dict[int, List[LayoutTemplate]] = {
    1: [
        LayoutTemplate("full", (PaneLayout(0, 0, 1, 1),)),
    ],
    2: [
        LayoutTemplate("50/50", (
            PaneLayout(0, 0, 0.5, 1),
            PaneLayout(0.5, 0, 0.5, 1),
        )),
    ],
    3: [
        LayoutTemplate("left + right with bottom", (
            PaneLayout(0, 0, 0.5, 1),
            *with_min_bottom(0.5, 0.5),
        )),
        LayoutTemplate("left with bottom + right", (
            *with_min_bottom(0, 0.5),
            PaneLayout(0.5, 0, 0.5, 1),
        )),
        LayoutTemplate("left + right stacked", (
            PaneLayout(0, 0, 0.5, 1),
            PaneLayout(0.5, 0, 0.5, 0.5),
            PaneLayout(0.5, 0.5, 0.5, 0.5),
        )),
        LayoutTemplate("left stacked + right", (
            PaneLayout(0, 0, 0.5, 0.5),
            PaneLayout(0, 0.5, 0.5, 0.5),
            PaneLayout(0.5, 0, 0.5, 1),
        )),
    ],
    4: [
        LayoutTemplate("both with bottom", (
            *with_min_bottom(0, 0.5),
            *with_min_bottom(0.5, 0.5),
        )),
        LayoutTemplate("left min + right stacked", (
            *with_min_bottom(0, 0.5),
            PaneLayout(0.5, 0, 0.5, 0.5),
            PaneLayout(0.5, 0.5, 0.5, 0.5),
        )),
        LayoutTemplate("left stacked + right min", (
            PaneLayout(0, 0, 0.5, 0.5),
            PaneLayout(0, 0.5, 0.5, 0.5),
            *with_min_bottom(0.5, 0.5),
        )),
        LayoutTemplate("both stacked", (
            PaneLayout(0, 0, 0.5, 0.5),
            PaneLayout(0, 0.5, 0.5, 0.5),
            PaneLayout(0.5, 0, 0.5, 0.5),
            PaneLayout(0.5, 0.5, 0.5, 0.5),
        )),
    ],
}

ALL_LAYOUTS: List[LayoutTemplate] = [
    template
    for count in sorted(LAYOUTS_BY_COUNT)
    for template in LAYOUTS_BY_COUNT[count]
]


def get_layouts_for_count(count: int) -> Optional[List[LayoutTemplate]]:
    """Built-in templates for a pane count, or None if the count is unsupported"""
    layouts = LAYOUTS_BY_COUNT.get(count)
    return list(layouts) if layouts else None


def get_layout(name: str) -> Optional[LayoutTemplate]:
    """Look up a built-in template by name"""
    for template in ALL_LAYOUTS:
        if template.name == name:
            return template
    return None


def create_template(layout_spec: Union[str, Dict, LayoutTemplate]) -> LayoutTemplate:
    """Factory function to create layout templates

    Args:
        layout_spec: Built-in template name, template dict or LayoutTemplate

    Returns:
        LayoutTemplate object
    """
    if isinstance(layout_spec, LayoutTemplate):
        return layout_spec

    if isinstance(layout_spec, str):
        template = get_layout(layout_spec)
        if template is None:
            raise ValueError(f"Unknown layout: {layout_spec}")
        return template

    if isinstance(layout_spec, dict):
        name = layout_spec.get("name")
        if not name or not isinstance(name, str):
            raise ValueError("Layout must have a non-empty 'name'")

        panes_data = layout_spec.get("panes")
        if not isinstance(panes_data, list) or not panes_data:
            raise ValueError(f"Layout '{name}' must have a non-empty 'panes' list")

        panes = []
        for i, pane_data in enumerate(panes_data):
            if not isinstance(pane_data, dict):
                raise ValueError(f"Layout '{name}' pane {i}: expected a mapping, got {pane_data!r}")
            values = {}
            for key in ("x", "y", "width", "height"):
                value = pane_data.get(key)
                # bool is an int subclass but never a coordinate
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise ValueError(f"Layout '{name}' pane {i}: '{key}' must be a number, got {value!r}")
                values[key] = value
            if values["width"] <= 0:
                raise ValueError(f"Layout '{name}' pane {i}: width must be positive")
            if values["height"] == 0:
                raise ValueError(f"Layout '{name}' pane {i}: height must not be zero")
            panes.append(PaneLayout(**values))

        return LayoutTemplate(name=name, panes=tuple(panes))

    raise TypeError(f"Invalid layout specification type: {type(layout_spec)}")


def resolve_layout(template: LayoutTemplate, window_width: int, window_height: int) -> List[Rect]:
    """Convert a layout template to absolute coordinates for a window size.

    Accounts for the one-cell separators between panes. Widths and heights
    are floored and the last pane on each axis absorbs the remainder, so the
    same template at the same size always resolves identically.

    Returns:
        One Rect per template pane, in template order.
    """
    panes = template.panes
    if not panes:
        return []

    x_positions = sorted({pane.x for pane in panes})
    usable_width = window_width - (len(x_positions) - 1)
    column_xs = [math.floor(x_pos * usable_width) + i for i, x_pos in enumerate(x_positions)]

    rows_by_column: Dict[float, List[float]] = {}
    for pane in panes:
        rows = rows_by_column.setdefault(pane.x, [])
        if pane.y not in rows:
            rows.append(pane.y)

    rects = []
    for pane in panes:
        x = column_xs[x_positions.index(pane.x)]

        next_column = _position_at(pane.x + pane.width, x_positions)
        if pane.x + pane.width >= 1 - _EDGE_EPSILON:
            width = window_width - x
        elif next_column is not None:
            # Stop one separator short of the next column
            width = column_xs[next_column] - x - 1
        else:
            width = math.floor(pane.width * usable_width)

        column_rows = sorted(rows_by_column[pane.x])
        usable_height = window_height - (len(column_rows) - 1)
        # Bottom-anchored panes sit outside the top-down row sequence
        top_rows = [row for row in column_rows if row >= 0]

        def row_top(row: float) -> int:
            return math.floor(row * usable_height) + top_rows.index(row)

        if pane.y < 0:
            y = window_height - int(abs(pane.y))
        elif pane.y <= 1:
            y = row_top(pane.y)
        else:
            y = int(pane.y)

        if -1 < pane.height < 0:
            height = math.floor(abs(pane.height) * usable_height)
        elif pane.height < 0:
            reserved_rows = int(abs(pane.height))
            height = window_height - reserved_rows - 1
        elif pane.height <= 1:
            next_row = _position_at(pane.y + pane.height, [row for row in top_rows if row <= 1])
            if 0 <= pane.y <= 1 and pane.y + pane.height >= 1 - _EDGE_EPSILON:
                height = window_height - y
            elif 0 <= pane.y <= 1 and next_row is not None:
                height = row_top(top_rows[next_row]) - y - 1
            else:
                height = math.floor(pane.height * usable_height)
        else:
            height = int(pane.height)

        rects.append(Rect(x=x, y=y, width=width, height=height))

    return rects


def _position_at(edge: float, positions: List[float]) -> Optional[int]:
    """Index of the position that starts where an edge ends, or None"""
    for i, position in enumerate(positions):
        if abs(position - edge) < _EDGE_EPSILON:
            return i
    return None


def _fits(rects: List[Rect], window_width: int, window_height: int) -> bool:
    return all(
        rect.width >= 1 and rect.height >= 1
        and rect.x >= 0 and rect.y >= 0
        and rect.right <= window_width and rect.bottom <= window_height
        for rect in rects
    )


def minimum_window_size(template: LayoutTemplate) -> Tuple[int, int]:
    """Smallest (width, height) at which every pane gets at least one cell

    Raises:
        ValueError: If the template does not fit any window up to MAX_WINDOW_CELLS
    """
    if not template.panes:
        return (0, 0)

    min_width = next(
        (w for w in range(1, MAX_WINDOW_CELLS + 1)
         if _fits(resolve_layout(template, w, MAX_WINDOW_CELLS), w, MAX_WINDOW_CELLS)),
        None,
    )
    if min_width is None:
        raise ValueError(f"Layout '{template.name}' does not fit any window width")

    min_height = next(
        (h for h in range(1, MAX_WINDOW_CELLS + 1)
         if _fits(resolve_layout(template, min_width, h), min_width, h)),
        None,
    )
    if min_height is None:
        raise ValueError(f"Layout '{template.name}' does not fit any window height")

    return (min_width, min_height)


def _overlaps(a: Rect, b: Rect) -> bool:
    return a.x < b.right and b.x < a.right and a.y < b.bottom and b.y < a.bottom


def validate_template(template: LayoutTemplate, window_width: int = 80, window_height: int = 24) -> None:
    """Check that a template tiles the window and can be sent to tmux.

    The template is resolved at its minimum size and at the given reference
    size (grown to the minimum where needed). At each size every pane must
    get at least one cell inside the window, no two panes may overlap, and
    the resulting layout tree must tile the window exactly.

    Raises:
        ValueError: If the template cannot be used
    """
    min_width, min_height = minimum_window_size(template)
    sizes = [(min_width, min_height), (max(window_width, min_width), max(window_height, min_height))]

    for width, height in sizes:
        rects = resolve_layout(template, width, height)
        if not _fits(rects, width, height):
            raise ValueError(f"Layout '{template.name}': a pane is empty or outside a {width}x{height} window")
        for i, rect in enumerate(rects):
            for j in range(i + 1, len(rects)):
                if _overlaps(rect, rects[j]):
                    raise ValueError(f"Layout '{template.name}': panes {i} and {j} overlap at {width}x{height}")

        panes = [Pane.from_rect(i, rect) for i, rect in enumerate(rects)]
        tree = build_layout_tree(panes, 0, 0, width, height)
        if tree.is_leaf and (tree.x, tree.y, tree.width, tree.height) != (0, 0, width, height):
            raise ValueError(f"Layout '{template.name}': a single pane must fill the window")
        try:
            check_layout_tree(tree)
        except ValueError as e:
            raise ValueError(f"Layout '{template.name}' does not tile a {width}x{height} window: {e}") from None
