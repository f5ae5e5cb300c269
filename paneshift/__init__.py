"""paneshift: rearrange tmux panes into layouts while keeping them running"""

from .exceptions import (
    DuplicatePaneIdError,
    EmptyLayoutError,
    LengthMismatchError,
    PaneshiftError,
    ReconcileError,
    SwapPlanError,
    TmuxError,
    UnknownPaneIdError,
)
from .layout_codec import generate_layout_string, layout_checksum
from .layouts import ALL_LAYOUTS, get_layouts_for_count, resolve_layout
from .models import LayoutTemplate, MatchResult, Pane, PaneLayout, PaneMatch, Rect, SwapCommand, WindowSnapshot
from .pane_matcher import match_panes_to_slots
from .reconciler import LayoutReconciler
from .swap_planner import compute_swaps

__version__ = "1.0.0"

__all__ = [
    "ALL_LAYOUTS",
    "DuplicatePaneIdError",
    "EmptyLayoutError",
    "LayoutReconciler",
    "LayoutTemplate",
    "LengthMismatchError",
    "MatchResult",
    "Pane",
    "PaneLayout",
    "PaneMatch",
    "PaneshiftError",
    "Rect",
    "ReconcileError",
    "SwapCommand",
    "SwapPlanError",
    "TmuxError",
    "UnknownPaneIdError",
    "WindowSnapshot",
    "compute_swaps",
    "generate_layout_string",
    "get_layouts_for_count",
    "layout_checksum",
    "match_panes_to_slots",
    "resolve_layout",
]
