from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Tuple

Point = Tuple[float, float]
Edge = Tuple[Point, Point]


class Status(Enum):
    IDLE = "Idle"
    RUNNING = "Running"
    PAUSED = "Paused"
    FOUND = "Found"
    EXHAUSTED = "Exhausted"
    CANCELED = "Canceled"

    @property
    def is_terminal(self) -> bool:
        return self in (Status.FOUND, Status.EXHAUSTED, Status.CANCELED)


@dataclass(frozen=True)
class StepResult:
    """Outcome of one strategy step: RUNNING, FOUND or EXHAUSTED plus what changed."""

    status: Status
    newly_visited: Tuple = ()
    new_frontier: FrozenSet = frozenset()
    found_path: Optional[Tuple] = None


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of a session handed to the renderer after each tick."""

    status: Status
    visited: Tuple = ()
    frontier: FrozenSet = frozenset()
    tree: Tuple[Edge, ...] = ()
    path: Tuple = ()
    explored_count: int = 0
    steps: int = 0
    stats: dict = field(default_factory=dict, compare=False)
