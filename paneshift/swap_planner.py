"""
Swap Planner

Computes the pairwise swaps that reorder the panes of a window. Uses a
selection sort, so N panes never need more than N-1 swaps.
"""

from typing import List, Sequence

from .exceptions import DuplicatePaneIdError, LengthMismatchError, UnknownPaneIdError
from .models import PaneId, SwapCommand


def _check_unique(order: Sequence[PaneId], which: str) -> None:
    seen = set()
    for pane_id in order:
        if pane_id in seen:
            raise DuplicatePaneIdError(which, pane_id)
        seen.add(pane_id)


def compute_swaps(current_order: Sequence[PaneId], desired_order: Sequence[PaneId]) -> List[SwapCommand]:
    """Compute the sequence of swaps needed to reorder panes.

    Args:
        current_order: Pane ids in current index order, e.g. ["%0", "%2", "%1"]
        desired_order: Pane ids in desired index order, e.g. ["%1", "%2", "%0"]

    Returns:
        Swap commands which, applied in order to current_order, yield desired_order

    Raises:
        LengthMismatchError: If the orders differ in length
        DuplicatePaneIdError: If either order repeats a pane id
        UnknownPaneIdError: If desired_order names a pane missing from current_order
    """
    if len(current_order) != len(desired_order):
        raise LengthMismatchError(len(current_order), len(desired_order))

    _check_unique(current_order, "current")
    _check_unique(desired_order, "desired")

    working = list(current_order)
    swaps: List[SwapCommand] = []

    for target_index, pane_id in enumerate(desired_order):
        try:
            current_index = working.index(pane_id)
        except ValueError:
            raise UnknownPaneIdError(pane_id) from None

        if current_index != target_index:
            swaps.append(SwapCommand(from_index=current_index, to_index=target_index))
            working[target_index], working[current_index] = working[current_index], working[target_index]

    return swaps


def apply_swaps(order: Sequence[PaneId], swaps: Sequence[SwapCommand]) -> List[PaneId]:
    """Return a copy of order with the swaps applied left to right"""
    result = list(order)
    for swap in swaps:
        result[swap.from_index], result[swap.to_index] = result[swap.to_index], result[swap.from_index]
    return result
