from typing import Tuple


class CoordinateOutOfBounds(ValueError):
    """A cell outside the grid was passed to a query; this is a caller bug."""

    def __init__(self, cell: Tuple[int, int], shape: Tuple[int, int]):
        self.cell = tuple(cell)
        self.shape = tuple(shape)
        h, w = self.shape
        super().__init__(f"Cell {self.cell} is outside the {w}x{h} grid.")
