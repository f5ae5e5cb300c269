"""
Pane Matcher

Matches existing panes to layout slots by position so that running panes
keep their place when the layout changes.

Overlap area is the primary metric, with center-point distance as a
fallback when a pane overlaps no slot (e.g. switching from a horizontal to
a vertical split). Matching is greedy over the sorted score list: not an
optimal assignment, but pane counts are bounded at four so the difference
never matters in practice.
"""

import math
from typing import List, Sequence

from .models import MatchResult, Pane, PaneMatch, Slot

# Bonus for the topmost slots. When a pane spans what becomes two stacked
# slots, it keeps the upper one and the new pane appears below it.
TOP_BIAS_BONUS = 0.2


def calculate_overlap(pane: Pane, slot: Slot) -> int:
    """Overlap area between a pane and a slot, 0 if they do not overlap"""
    x_overlap = max(0, min(pane.x + pane.width, slot.x + slot.width) - max(pane.x, slot.x))
    y_overlap = max(0, min(pane.y + pane.height, slot.y + slot.height) - max(pane.y, slot.y))
    return x_overlap * y_overlap


def center_distance(pane: Pane, slot: Slot) -> float:
    """Euclidean distance between the centers of a pane and a slot"""
    dx = (pane.x + pane.width / 2) - (slot.x + slot.width / 2)
    dy = (pane.y + pane.height / 2) - (slot.y + slot.height / 2)
    return math.sqrt(dx * dx + dy * dy)


def top_bias(slot: Slot, max_y: int) -> float:
    """Multiplier in [1.0, 1.0 + TOP_BIAS_BONUS], largest for slots at the top"""
    if max_y <= 0:
        return 1.0
    return 1.0 + TOP_BIAS_BONUS * (1 - slot.y / max_y)


def calculate_match_score(pane: Pane, slot: Slot, bias: float = 1.0) -> float:
    """Score for placing a pane in a slot; higher is better.

    Overlapping pairs score their (biased) overlap area and are always
    positive. Other pairs score their negated distance, shifted below zero,
    so any overlap beats any non-overlap.
    """
    overlap = calculate_overlap(pane, slot)
    if overlap > 0:
        return overlap * bias
    return -(center_distance(pane, slot) + 1) / bias


def match_panes_to_slots(panes: Sequence[Pane], slots: Sequence[Slot]) -> MatchResult:
    """Match panes to slots using the greedy algorithm.

    Returns:
        MatchResult with min(len(panes), len(slots)) matches, the slots that
        need new panes, and the panes left over.
    """
    max_y = max((slot.y for slot in slots), default=0)

    candidates: List[PaneMatch] = []
    for slot_index, slot in enumerate(slots):
        bias = top_bias(slot, max_y)
        for pane in panes:
            candidates.append(PaneMatch(pane.id, slot_index, calculate_match_score(pane, slot, bias)))

    # Stable sort: ties keep slot order, then pane order
    candidates.sort(key=lambda candidate: candidate.score, reverse=True)

    target = min(len(panes), len(slots))
    matches: List[PaneMatch] = []
    matched_panes = set()
    matched_slots = set()
    for candidate in candidates:
        if len(matches) >= target:
            break
        if candidate.pane_id in matched_panes or candidate.slot_index in matched_slots:
            continue
        matches.append(candidate)
        matched_panes.add(candidate.pane_id)
        matched_slots.add(candidate.slot_index)

    return MatchResult(
        matches=matches,
        unmatched_slots=[i for i in range(len(slots)) if i not in matched_slots],
        unmatched_panes=[pane.id for pane in panes if pane.id not in matched_panes],
    )
