import logging
import time
from dataclasses import dataclass, field
from typing import Optional, Union

from .common import path_cost
from .config import PlannerConfig
from .map_utils import GridMap
from .results import Snapshot, Status, StepResult
from .rrt import RRTState
from .strategies import Algorithm, SessionState, explored_count, initialize, step

logger = logging.getLogger(__name__)


@dataclass
class PlannerSession:
    algorithm: Algorithm
    state: SessionState
    status: Status = Status.RUNNING
    steps: int = 0
    started_at: float = field(default_factory=time.time)
    finished_at: Optional[float] = None

    @property
    def elapsed(self) -> float:
        end = self.finished_at if self.finished_at is not None else time.time()
        return end - self.started_at


class RunController:
    """
    Drives one planning session at a time, one strategy step per tick.

    The controller never sleeps or polls: an external driver calls
    `advance_one_step()` at its own pace. Pause, resume and cancel only
    change the session status, so they take effect at the next tick.
    Any accepted grid edit discards the current session.
    """

    def __init__(
        self,
        grid: Optional[GridMap] = None,
        config: Optional[PlannerConfig] = None,
        algorithm: Union[Algorithm, str] = Algorithm.ASTAR,
    ):
        self.config = config if config is not None else PlannerConfig()
        self.grid = grid if grid is not None else GridMap.from_config(self.config)
        self.algorithm = Algorithm.parse(algorithm)
        self.session: Optional[PlannerSession] = None
        self.grid.add_listener(self._on_grid_edit)

    @property
    def status(self) -> Status:
        return self.session.status if self.session is not None else Status.IDLE

    def _on_grid_edit(self, grid: GridMap) -> None:
        self._discard("grid edited")

    def _discard(self, reason: str) -> None:
        if self.session is not None:
            logger.debug("Discarding %s session (%s): %s", self.session.algorithm.value, self.session.status.value, reason)
            self.session = None

    def select(self, algorithm: Union[Algorithm, str]) -> None:
        """Switch algorithm; the current session is dropped."""
        self.algorithm = Algorithm.parse(algorithm)
        self._discard("algorithm changed")

    def start(self, algorithm: Optional[Union[Algorithm, str]] = None) -> Snapshot:
        if algorithm is not None:
            self.algorithm = Algorithm.parse(algorithm)
        self._discard("restarted")
        state = initialize(self.algorithm, self.grid, rrt_params=self.config.rrt)
        self.session = PlannerSession(self.algorithm, state)
        logger.info(
            "Starting %s from %s to %s on %dx%d grid",
            self.algorithm.value,
            self.grid.start,
            self.grid.goal,
            self.grid.width,
            self.grid.height,
        )
        return self.snapshot()

    def advance_one_step(self) -> Optional[StepResult]:
        """Advance the running session by one step; None when there is nothing to advance."""
        session = self.session
        if session is None or session.status is not Status.RUNNING:
            return None
        result = step(session.state)
        session.steps += 1
        if result.status in (Status.FOUND, Status.EXHAUSTED):
            session.status = result.status
            session.finished_at = time.time()
            logger.info(
                "%s finished: %s after %d steps, explored=%d, path=%d",
                session.algorithm.value,
                result.status.value,
                session.steps,
                explored_count(session.state),
                len(session.state.path),
            )
        return result

    def pause(self) -> bool:
        if self.status is not Status.RUNNING:
            return False
        self.session.status = Status.PAUSED
        return True

    def resume(self) -> bool:
        if self.status is not Status.PAUSED:
            return False
        self.session.status = Status.RUNNING
        return True

    def toggle_pause(self) -> bool:
        return self.pause() or self.resume()

    def cancel(self) -> bool:
        """Stop stepping for good; partial progress stays visible in snapshots."""
        if self.session is None or self.status.is_terminal:
            return False
        self.session.status = Status.CANCELED
        self.session.finished_at = time.time()
        logger.info("%s canceled after %d steps", self.session.algorithm.value, self.session.steps)
        return True

    def clear(self) -> None:
        """Drop the session and its path but keep the grid."""
        self._discard("cleared")

    def reset(self) -> None:
        """Restore the default obstacle layout and markers."""
        self.grid.reset(self.config)
        self._discard("reset")

    def run(self, max_steps: Optional[int] = None) -> Snapshot:
        """Step until the session leaves RUNNING or `max_steps` ticks have been spent."""
        if self.session is None:
            self.start()
        ticks = 0
        while self.status is Status.RUNNING and (max_steps is None or ticks < max_steps):
            self.advance_one_step()
            ticks += 1
        return self.snapshot()

    def snapshot(self) -> Snapshot:
        session = self.session
        if session is None:
            return Snapshot(Status.IDLE)
        state = session.state
        path = tuple(state.path) if session.status is Status.FOUND else ()
        if isinstance(state, RRTState):
            visited = tuple(node.point for node in state.nodes)
            frontier = frozenset()
            tree = tuple(state.tree_edges)
        else:
            visited = tuple(state.visited)
            frontier = frozenset(state.frontier)
            tree = ()
        stats = {
            "algorithm": session.algorithm.value,
            "path_length": len(path),
            "path_cost": path_cost(path),
            "elapsed": session.elapsed,
        }
        return Snapshot(
            status=session.status,
            visited=visited,
            frontier=frontier,
            tree=tree,
            path=path,
            explored_count=explored_count(state),
            steps=session.steps,
            stats=stats,
        )
