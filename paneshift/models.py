"""
Data types shared by the layout engine and the tmux adapter
"""

from dataclasses import dataclass, field
from typing import List, Tuple, Union

PaneId = Union[str, int]


@dataclass(frozen=True)
class PaneLayout:
    """One pane of a layout template in normalized (0-1) coordinates.

    Sentinels:
        height == -N (N >= 1): reserve N rows at the bottom, fill the rest
        -1 < height < 0: ordinary fraction of abs(height)
        height > 1: absolute row count
        y < 0: top edge sits abs(y) rows above the bottom of the window
        y > 1: absolute row
    """
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class LayoutTemplate:
    """Named description of how N panes tile a window"""
    name: str
    panes: Tuple[PaneLayout, ...]

    def __post_init__(self):
        # Accept lists from config files but store an immutable tuple
        object.__setattr__(self, "panes", tuple(self.panes))

    @property
    def pane_count(self) -> int:
        return len(self.panes)


@dataclass(frozen=True)
class Rect:
    """Rectangle in absolute terminal cells"""
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)


# A slot is a resolved rect; its position in the resolved list is its index
Slot = Rect


@dataclass(frozen=True)
class Pane:
    """A live pane: opaque identity plus last-known geometry"""
    id: PaneId
    x: int
    y: int
    width: int
    height: int

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)

    @classmethod
    def from_rect(cls, pane_id: PaneId, rect: Rect) -> "Pane":
        return cls(pane_id, rect.x, rect.y, rect.width, rect.height)


@dataclass(frozen=True)
class PaneMatch:
    pane_id: PaneId
    slot_index: int
    score: float


@dataclass(frozen=True)
class MatchResult:
    """Outcome of matching live panes to layout slots"""
    matches: List[PaneMatch] = field(default_factory=list)
    unmatched_slots: List[int] = field(default_factory=list)  # need new panes
    unmatched_panes: List[PaneId] = field(default_factory=list)  # will be killed

    def slot_for(self, pane_id: PaneId):
        """Slot index assigned to a pane, or None"""
        for match in self.matches:
            if match.pane_id == pane_id:
                return match.slot_index
        return None

    def pane_for(self, slot_index: int):
        """Pane id assigned to a slot, or None"""
        for match in self.matches:
            if match.slot_index == slot_index:
                return match.pane_id
        return None


@dataclass(frozen=True)
class SwapCommand:
    """Exchange the panes at two position indices"""
    from_index: int
    to_index: int


@dataclass(frozen=True)
class WindowSnapshot:
    """State of a tmux window as reported by list-panes.

    ``panes`` are in pane-index order and ``pane_indices`` holds the tmux
    index of each position (they differ when pane-base-index is set).
    """
    width: int
    height: int
    panes: Tuple[Pane, ...] = ()
    pane_indices: Tuple[int, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "panes", tuple(self.panes))
        if not self.pane_indices:
            object.__setattr__(self, "pane_indices", tuple(range(len(self.panes))))
        else:
            object.__setattr__(self, "pane_indices", tuple(self.pane_indices))

    @property
    def pane_ids(self) -> List[PaneId]:
        return [pane.id for pane in self.panes]
