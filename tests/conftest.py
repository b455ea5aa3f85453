import sys
from pathlib import Path

import numpy as np
import pytest


# Pytest 8 defaults to `--import-mode=importlib`, which does not prepend the
# repository root to `sys.path`. Add it so `import gridplan` works without an
# editable install.
REPO_ROOT = Path(__file__).resolve().parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from gridplan import GridMap  # noqa: E402


@pytest.fixture
def empty_grid():
    return GridMap.empty(25, 25, (2, 12), (22, 12))


@pytest.fixture
def walled_grid():
    grid = GridMap(np.zeros((25, 25), dtype=np.uint8), (2, 12), (22, 12))
    grid.data[:, 12] = 1
    return grid
