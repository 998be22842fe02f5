# maze_grid.py
"""
Binary cell grid shared by the generator, the solver and movement checks.

Cells are stored row-major (``cells[y][x]``) but every function here and in
the other maze modules addresses a cell as ``(x, y)``, i.e. (column, row).
"""
from typing import List, NamedTuple

# Cell codes
WALL = 1
PATH = 0

# up, down, left, right
DIRECTIONS = [(0, -1), (0, 1), (-1, 0), (1, 0)]


class InvalidDimensions(ValueError):
    def __init__(self, width, height, reason):
        self.width = width
        self.height = height
        super().__init__(f"invalid maze dimensions {width}x{height}: {reason}")


class Position(NamedTuple):
    x: int
    y: int


def check_dimensions(width, height):
    for value in (width, height):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidDimensions(width, height, "width and height must be integers")
    if width <= 0 or height <= 0:
        raise InvalidDimensions(width, height, "width and height must be positive")
    if width % 2 == 0 or height % 2 == 0:
        raise InvalidDimensions(width, height, "width and height must be odd")
    if width < 3 or height < 3:
        raise InvalidDimensions(width, height, "grid is too small to hold a passage")


class Grid:
    def __init__(self, width: int, height: int):
        check_dimensions(width, height)
        self.width = width
        self.height = height
        self.cells = [[WALL for _ in range(width)] for _ in range(height)]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def in_interior(self, x: int, y: int) -> bool:
        return 0 < x < self.width - 1 and 0 < y < self.height - 1

    def is_path(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and self.cells[y][x] == PATH

    def is_wall(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and self.cells[y][x] == WALL

    def carve(self, x: int, y: int):
        self.cells[y][x] = PATH

    def path_cells(self) -> List[Position]:
        """Interior passage cells in row-major order."""
        return [
            Position(x, y)
            for y in range(1, self.height - 1)
            for x in range(1, self.width - 1)
            if self.cells[y][x] == PATH
        ]

    def to_list(self) -> List[List[int]]:
        return [row[:] for row in self.cells]

    @classmethod
    def from_list(cls, rows) -> "Grid":
        """
        Build a grid from nested lists of cell codes.
        Anything that is not WALL counts as a passage, so marker codes for
        start/end cells sent by a client are accepted.
        """
        if not rows or not rows[0]:
            raise InvalidDimensions(0, 0, "maze data is empty")
        height = len(rows)
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise InvalidDimensions(width, height, "rows must all have the same length")
        grid = cls(width, height)
        for y, row in enumerate(rows):
            for x, cell in enumerate(row):
                if cell != WALL:
                    grid.carve(x, y)
        return grid

    def __repr__(self):
        return f"Grid({self.width}x{self.height})"


def is_passable(grid: Grid, x: int, y: int) -> bool:
    """Bounds-checked query; anything outside the grid is not passable."""
    return grid.is_path(x, y)
