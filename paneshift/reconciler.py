"""
Layout Reconciler

Plans how to turn the panes of a window into a layout template with as
little disruption as possible. Planning happens in two phases because
tmux assigns ids to new panes only when they are created:

1. adjustments: match live panes to the new slots, kill the panes left
   over and split one new pane per unmatched slot
2. arrangement: on the refreshed window, swap panes into layout order and
   apply the layout string

The caller runs each phase's commands in order and re-queries the window
between the two phases.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Union

from .exceptions import ReconcileError
from .layout_codec import generate_layout_string, layout_leaf_order, pane_number
from .layouts import resolve_layout
from .models import LayoutTemplate, MatchResult, Pane, PaneId, Rect, SwapCommand, WindowSnapshot
from .pane_matcher import match_panes_to_slots
from .swap_planner import compute_swaps


def _pane_target(target: Optional[str], index: int) -> str:
    # ":" alone means the current window; a bare session name needs one too
    if not target:
        target = ":"
    elif ":" not in target and not target.startswith("@"):
        target += ":"
    return f"{target}.{index}"


@dataclass(frozen=True)
class CreatePane:
    """Split the active pane to create one new pane"""
    start_directory: Optional[str] = None

    def to_tmux_args(self, target: Optional[str] = None, pane_indices: Sequence[int] = ()) -> List[str]:
        args = ["split-window"]
        if target:
            args += ["-t", target]
        if self.start_directory:
            args += ["-c", self.start_directory]
        return args


@dataclass(frozen=True)
class DestroyPane:
    """Kill a pane by id"""
    pane_id: PaneId

    def to_tmux_args(self, target: Optional[str] = None, pane_indices: Sequence[int] = ()) -> List[str]:
        return ["kill-pane", "-t", str(self.pane_id)]


@dataclass(frozen=True)
class SwapPanes:
    """Exchange the panes at two positions of the window"""
    from_index: int
    to_index: int

    def to_tmux_args(self, target: Optional[str] = None, pane_indices: Sequence[int] = ()) -> List[str]:
        # Positions map to tmux pane indices (pane-base-index may not be 0)
        source = pane_indices[self.from_index] if pane_indices else self.from_index
        destination = pane_indices[self.to_index] if pane_indices else self.to_index
        return ["swap-pane", "-s", _pane_target(target, source), "-t", _pane_target(target, destination)]


@dataclass(frozen=True)
class ApplyLayout:
    """Apply a serialized layout string to the window"""
    layout: str

    def to_tmux_args(self, target: Optional[str] = None, pane_indices: Sequence[int] = ()) -> List[str]:
        args = ["select-layout"]
        if target:
            args += ["-t", target]
        return args + [self.layout]


Command = Union[CreatePane, DestroyPane, SwapPanes, ApplyLayout]


@dataclass
class AdjustmentPlan:
    """First phase: bring the pane count in line with the template"""
    template: LayoutTemplate
    slots: List[Rect]
    match: MatchResult
    commands: List[Command] = field(default_factory=list)

    @property
    def creates(self) -> int:
        return sum(1 for command in self.commands if isinstance(command, CreatePane))

    @property
    def destroys(self) -> List[PaneId]:
        return [command.pane_id for command in self.commands if isinstance(command, DestroyPane)]


@dataclass
class ArrangementPlan:
    """Second phase: reorder panes and apply the final geometry"""
    placed_panes: List[Pane]
    current_order: List[PaneId]
    desired_order: List[PaneId]
    swaps: List[SwapCommand]
    layout_string: str
    commands: List[Command] = field(default_factory=list)


@dataclass
class ReconcilePlan:
    """Both phases of a dry run"""
    adjustment: AdjustmentPlan
    arrangement: ArrangementPlan
    predicted_snapshot: WindowSnapshot

    @property
    def commands(self) -> List[Command]:
        return self.adjustment.commands + self.arrangement.commands


class LayoutReconciler:
    """Computes the commands that move a window into a layout template"""

    def __init__(self, start_directory: Optional[str] = None):
        self.start_directory = start_directory
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def plan_adjustments(self, snapshot: WindowSnapshot, template: LayoutTemplate) -> AdjustmentPlan:
        """Match live panes to the template's slots and plan kills and splits"""
        slots = resolve_layout(template, snapshot.width, snapshot.height)
        match = match_panes_to_slots(snapshot.panes, slots)

        commands: List[Command] = [DestroyPane(pane_id) for pane_id in match.unmatched_panes]
        commands += [CreatePane(self.start_directory) for _ in match.unmatched_slots]

        self.logger.debug(
            f"Layout '{template.name}': {len(match.matches)} panes kept, "
            f"{len(match.unmatched_panes)} to kill, {len(match.unmatched_slots)} to create"
        )
        return AdjustmentPlan(template=template, slots=slots, match=match, commands=commands)

    def assign_slots(self, snapshot: WindowSnapshot, slots: Sequence[Rect],
                     match: Optional[MatchResult] = None) -> Dict[int, PaneId]:
        """Bind every slot to a pane of the (adjusted) window

        Panes matched in the adjustment phase keep their slot. Slots left
        over go to the remaining panes, the new ones, in index order.
        """
        if len(snapshot.panes) != len(slots):
            raise ReconcileError(
                f"Window has {len(snapshot.panes)} panes but the layout has {len(slots)} slots; "
                f"create and destroy panes before arranging"
            )

        if match is None:
            match = match_panes_to_slots(snapshot.panes, slots)

        live_ids = set(snapshot.pane_ids)
        assignment: Dict[int, PaneId] = {
            m.slot_index: m.pane_id for m in match.matches if m.pane_id in live_ids
        }

        assigned = set(assignment.values())
        spare_panes = [pane_id for pane_id in snapshot.pane_ids if pane_id not in assigned]
        open_slots = [i for i in range(len(slots)) if i not in assignment]
        for slot_index, pane_id in zip(open_slots, spare_panes):
            assignment[slot_index] = pane_id

        return assignment

    def plan_arrangement(self, snapshot: WindowSnapshot, template: LayoutTemplate,
                         adjustment: Optional[AdjustmentPlan] = None) -> ArrangementPlan:
        """Plan the swaps and the final select-layout for an adjusted window

        Raises:
            ReconcileError: If the window's pane count differs from the template's
        """
        slots = resolve_layout(template, snapshot.width, snapshot.height)
        assignment = self.assign_slots(snapshot, slots, adjustment.match if adjustment else None)

        placed = [Pane.from_rect(assignment[i], slot) for i, slot in enumerate(slots)]
        current_order = snapshot.pane_ids
        desired_order = layout_leaf_order(placed)
        swaps = compute_swaps(current_order, desired_order)
        layout_string = generate_layout_string(placed, snapshot.width, snapshot.height)

        commands: List[Command] = [SwapPanes(s.from_index, s.to_index) for s in swaps]
        commands.append(ApplyLayout(layout_string))

        self.logger.debug(f"Layout '{template.name}': {len(swaps)} swaps, layout {layout_string}")
        return ArrangementPlan(
            placed_panes=placed,
            current_order=current_order,
            desired_order=desired_order,
            swaps=swaps,
            layout_string=layout_string,
            commands=commands,
        )

    def predict_snapshot(self, snapshot: WindowSnapshot, adjustment: AdjustmentPlan) -> WindowSnapshot:
        """Window state expected after the adjustment commands run.

        Killed panes disappear and new panes are appended with the next
        free ids. tmux may place them elsewhere, so real runs re-query.
        """
        destroyed = set(adjustment.destroys)
        survivors = [pane for pane in snapshot.panes if pane.id not in destroyed]
        new_ids = next_pane_ids(snapshot.pane_ids, adjustment.creates)
        panes = survivors + [Pane(pane_id, 0, 0, 0, 0) for pane_id in new_ids]

        base_index = min(snapshot.pane_indices) if snapshot.pane_indices else 0
        return WindowSnapshot(
            width=snapshot.width,
            height=snapshot.height,
            panes=tuple(panes),
            pane_indices=tuple(range(base_index, base_index + len(panes))),
        )

    def plan(self, snapshot: WindowSnapshot, template: LayoutTemplate) -> ReconcilePlan:
        """Dry run of both phases against a predicted adjusted window"""
        adjustment = self.plan_adjustments(snapshot, template)
        predicted = self.predict_snapshot(snapshot, adjustment)
        arrangement = self.plan_arrangement(predicted, template, adjustment)
        return ReconcilePlan(adjustment=adjustment, arrangement=arrangement, predicted_snapshot=predicted)


def next_pane_ids(existing: Sequence[PaneId], count: int) -> List[PaneId]:
    """Ids tmux would most likely hand out to the next new panes"""
    numbers = [int(pane_number(pane_id)) for pane_id in existing]
    start = max(numbers, default=-1) + 1
    if existing and all(isinstance(pane_id, int) for pane_id in existing):
        return list(range(start, start + count))
    return [f"%{n}" for n in range(start, start + count)]
