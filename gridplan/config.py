import math
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .common import clamp

DEFAULT_GRID_SIZE = 25
DEFAULT_START = (2, 12)
DEFAULT_GOAL = (22, 12)

# Speed slider range exposed by the interactive front end.
SPEED_MIN = 5
SPEED_MAX = 100
DEFAULT_SPEED = 70


@dataclass
class RRTParams:
    max_iterations: int = 1500
    step_length: float = 2.0
    goal_bias: float = 0.1
    rng_seed: Optional[int] = None

    def __post_init__(self):
        if int(self.max_iterations) <= 0:
            raise ValueError("max_iterations must be > 0")
        if not math.isfinite(self.step_length) or self.step_length <= 0.0:
            raise ValueError("step_length must be finite and > 0")
        if not 0.0 <= self.goal_bias <= 1.0:
            raise ValueError("goal_bias must lie in [0, 1]")
        self.max_iterations = int(self.max_iterations)


@dataclass
class PlannerConfig:
    """
    Run configuration for the planning engine.
    width/height: grid size in cells.
    start/goal: default marker cells restored by reset().
    tick_delay_ms: real-time gap between external ticks; never read by the search itself.
    """

    width: int = DEFAULT_GRID_SIZE
    height: int = DEFAULT_GRID_SIZE
    start: Tuple[int, int] = DEFAULT_START
    goal: Tuple[int, int] = DEFAULT_GOAL
    rrt: RRTParams = field(default_factory=RRTParams)
    tick_delay_ms: float = 30.0

    def __post_init__(self):
        if int(self.width) <= 0 or int(self.height) <= 0:
            raise ValueError("Grid dimensions must be > 0")
        if self.tick_delay_ms < 0:
            raise ValueError("tick_delay_ms must be >= 0")
        self.start = (int(self.start[0]), int(self.start[1]))
        self.goal = (int(self.goal[0]), int(self.goal[1]))


def tick_delay_from_speed(speed: float) -> float:
    """Map the UI speed slider to a tick delay in milliseconds (faster slider, shorter delay)."""
    return 105.0 - clamp(speed, SPEED_MIN, SPEED_MAX)
