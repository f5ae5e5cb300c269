"""
Exception types raised by paneshift.

Contract violations from callers of the planning engine are raised
immediately; tmux failures are reported by the adapter layer.
"""


class PaneshiftError(Exception):
    """Base class for all paneshift errors"""


class SwapPlanError(PaneshiftError, ValueError):
    """Invalid input to the swap planner"""


class LengthMismatchError(SwapPlanError):
    """Current and desired orders have different lengths"""

    def __init__(self, current_length: int, desired_length: int):
        self.current_length = current_length
        self.desired_length = desired_length
        super().__init__(
            f"Order arrays must have same length: "
            f"current={current_length}, desired={desired_length}"
        )


class DuplicatePaneIdError(SwapPlanError):
    """An order contains the same pane id more than once"""

    def __init__(self, which: str, pane_id):
        self.which = which
        self.pane_id = pane_id
        super().__init__(f"{which.capitalize()} order contains duplicate pane ID {pane_id!r}")


class UnknownPaneIdError(SwapPlanError):
    """The desired order references a pane that is not in the current order"""

    def __init__(self, pane_id):
        self.pane_id = pane_id
        super().__init__(f"Pane ID {pane_id!r} from desired order not found in current order")


class EmptyLayoutError(PaneshiftError, ValueError):
    """A layout string cannot be built without panes"""

    def __init__(self):
        super().__init__("No panes provided")


class ReconcileError(PaneshiftError):
    """The window state does not fit the plan being computed"""


class TmuxError(PaneshiftError):
    """tmux returned output that could not be understood"""
