"""
tmux layout string generator.

Layout string format:
    checksum,WxH,x,y,pane_number           - single pane
    checksum,WxH,x,y{child,child,...}      - horizontal split (side by side)
    checksum,WxH,x,y[child,child,...]      - vertical split (stacked)

tmux recomputes the checksum on select-layout and rejects the string on any
mismatch, so the checksum must match its algorithm bit for bit.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from .exceptions import EmptyLayoutError
from .models import Pane, PaneId

_PANE_NUMBER_RE = re.compile(r"(\d+)$")


class SplitDirection(Enum):
    """Direction of a layout split"""
    HORIZONTAL = "horizontal"  # Children side by side ({})
    VERTICAL = "vertical"      # Children stacked ([])


@dataclass
class LayoutNode:
    """Cell of a tmux layout tree: a leaf pane or a split with children"""
    x: int
    y: int
    width: int
    height: int
    pane_id: Optional[PaneId] = None
    split: Optional[SplitDirection] = None
    children: List["LayoutNode"] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        return self.pane_id is not None


def rotate_right_16(value: int) -> int:
    """Rotate a 16-bit value right by one bit"""
    value &= 0xFFFF
    return (value >> 1) | ((value & 1) << 15)


def layout_checksum(layout: str) -> str:
    """tmux layout checksum of a serialized tree, as four lowercase hex digits"""
    csum = 0
    for char in layout:
        csum = (rotate_right_16(csum) + ord(char)) & 0xFFFF
    return f"{csum:04x}"


def pane_number(pane_id: PaneId) -> str:
    """Numeric part of a pane id ("%12" -> "12")"""
    if isinstance(pane_id, int):
        return str(pane_id)
    match = _PANE_NUMBER_RE.search(str(pane_id))
    if not match:
        raise ValueError(f"Pane ID {pane_id!r} has no numeric suffix")
    return match.group(1)


def _group_by(panes: Sequence[Pane], attr: str):
    groups = {}
    for pane in panes:
        groups.setdefault(getattr(pane, attr), []).append(pane)
    return [groups[key] for key in sorted(groups)]


def build_layout_tree(panes: Sequence[Pane], x: int, y: int, width: int, height: int) -> LayoutNode:
    """Build a layout node tree from a flat list of panes.

    Tries a horizontal split (distinct x positions) before a vertical one
    (distinct y positions). This may not be the tree tmux itself would build
    for irregular, non grid-aligned arrangements.
    """
    if not panes:
        raise EmptyLayoutError()

    if len(panes) == 1:
        pane = panes[0]
        return LayoutNode(x=pane.x, y=pane.y, width=pane.width, height=pane.height, pane_id=pane.id)

    columns = _group_by(panes, "x")
    if len(columns) > 1:
        children = []
        for column in columns:
            col_x = column[0].x
            col_width = max(p.x + p.width for p in column) - col_x
            children.append(build_layout_tree(column, col_x, y, col_width, height))
        return LayoutNode(x=x, y=y, width=width, height=height,
                          split=SplitDirection.HORIZONTAL, children=children)

    rows = _group_by(panes, "y")
    if len(rows) > 1:
        children = []
        for row in rows:
            row_y = row[0].y
            row_height = max(p.y + p.height for p in row) - row_y
            children.append(build_layout_tree(row, x, row_y, width, row_height))
        return LayoutNode(x=x, y=y, width=width, height=height,
                          split=SplitDirection.VERTICAL, children=children)

    ids = ", ".join(repr(p.id) for p in panes)
    raise ValueError(f"Panes {ids} share the same position")


def serialize_layout_node(node: LayoutNode) -> str:
    """Serialize a layout tree to tmux format (without checksum)"""
    base = f"{node.width}x{node.height},{node.x},{node.y}"

    if node.is_leaf:
        return f"{base},{pane_number(node.pane_id)}"

    if node.children:
        child_str = ",".join(serialize_layout_node(child) for child in node.children)
        if node.split == SplitDirection.HORIZONTAL:
            return f"{base}{{{child_str}}}"
        return f"{base}[{child_str}]"

    raise ValueError("Invalid node: no pane and no children")


def check_layout_tree(node: LayoutNode) -> None:
    """Check that every split exactly tiles its cell.

    Children of a horizontal split must span the full height and sit side
    by side with one separator column between them; vertical splits the
    same way with rows.

    Raises:
        ValueError: If a split's children do not tile it
    """
    if node.is_leaf:
        return

    if node.split == SplitDirection.HORIZONTAL:
        position, extent = node.x, node.width
        for child in node.children:
            if child.y != node.y or child.height != node.height:
                raise ValueError(f"Column at x={child.x} does not span the full height of its cell")
            if child.x != position:
                raise ValueError(f"Column at x={child.x} does not start at x={position}")
            position += child.width + 1
    else:
        position, extent = node.y, node.height
        for child in node.children:
            if child.x != node.x or child.width != node.width:
                raise ValueError(f"Row at y={child.y} does not span the full width of its cell")
            if child.y != position:
                raise ValueError(f"Row at y={child.y} does not start at y={position}")
            position += child.height + 1

    start = node.x if node.split == SplitDirection.HORIZONTAL else node.y
    if position - 1 != start + extent:
        raise ValueError(f"Split at {node.x},{node.y} covers {position - 1 - start} cells, expected {extent}")

    for child in node.children:
        check_layout_tree(child)


def iter_leaves(node: LayoutNode):
    """Leaf nodes in depth-first order"""
    if node.is_leaf:
        yield node
        return
    for child in node.children:
        yield from iter_leaves(child)


def layout_leaf_order(panes: Sequence[Pane]) -> List[PaneId]:
    """Pane ids in the order tmux assigns panes to layout cells"""
    if not panes:
        return []
    tree = build_layout_tree(panes, 0, 0, 0, 0)
    return [leaf.pane_id for leaf in iter_leaves(tree)]


def generate_layout_string(panes: Sequence[Pane], window_width: int, window_height: int) -> str:
    """Generate a complete tmux layout string with checksum

    Raises:
        EmptyLayoutError: If panes is empty
    """
    tree = build_layout_tree(panes, 0, 0, window_width, window_height)
    layout = serialize_layout_node(tree)
    return f"{layout_checksum(layout)},{layout}"
