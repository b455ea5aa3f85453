"""
Centralized planner labels used across examples.
Keep plot legends, console output, and CSVs aligned by importing these names
instead of hard-coding strings in each script.
"""

from gridplan import Algorithm

ASTAR_NAME = "A*"
DIJKSTRA_NAME = "Dijkstra"
RRT_NAME = "RRT"

# Stable ordering for legends/exports.
FORMAL_PLANNER_ORDER = [ASTAR_NAME, DIJKSTRA_NAME, RRT_NAME]

ALGORITHM_TO_LABEL = {
    Algorithm.ASTAR: ASTAR_NAME,
    Algorithm.DIJKSTRA: DIJKSTRA_NAME,
    Algorithm.RRT: RRT_NAME,
}

# Colors follow the web visualizer palette.
LAYER_COLORS = {
    "empty": "#0f0f19",
    "obstacle": "#1a1a2e",
    "start": "#00ff88",
    "goal": "#ff00a0",
    "visited": "#00f0ff4d",
    "frontier": "#00f0ff99",
    "path": "#00f0ff",
    "tree": "#00f0ff66",
}

STATUS_TEXT = {
    "Idle": "Ready",
    "Running": "Searching...",
    "Paused": "Paused",
    "Found": "Path Found!",
    "Exhausted": "No Path Found",
    "Canceled": "Canceled",
}


def formal_planner_name(algorithm) -> str:
    """Return the display label for an Algorithm or algorithm name string."""
    if algorithm is None:
        return ""
    return ALGORITHM_TO_LABEL.get(Algorithm.parse(algorithm), str(algorithm))
