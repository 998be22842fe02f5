# maze_gen.py
"""
Maze generation: recursive backtracker carving plus dead-end branch injection.
"""
import logging
import random
from typing import Optional

from maze_grid import DIRECTIONS, Grid

logger = logging.getLogger(__name__)

# carving moves two cells at a time so passages stay on the odd lattice
CARVE_STEPS = [(0, -2), (0, 2), (-2, 0), (2, 0)]

DEFAULT_BRANCH_MAX_LENGTH = 3


def _shuffled(items, rng):
    items = list(items)
    rng.shuffle(items)
    return items


def carve_passages(grid: Grid, rng: random.Random, start=(1, 1)) -> Grid:
    """
    Randomized depth-first backtracker over the odd-coordinate lattice.
    Each stack frame keeps the directions it has not tried yet, so the
    result is the same as the recursive form without its depth limit.
    """
    visited = [[False for _ in range(grid.width)] for _ in range(grid.height)]

    start_x, start_y = start
    visited[start_y][start_x] = True
    grid.carve(start_x, start_y)
    stack = [((start_x, start_y), iter(_shuffled(CARVE_STEPS, rng)))]

    while stack:
        (x, y), steps = stack[-1]
        for dx, dy in steps:
            nx, ny = x + dx, y + dy
            if grid.in_interior(nx, ny) and not visited[ny][nx]:
                # carve wall between
                grid.carve(x + dx // 2, y + dy // 2)
                visited[ny][nx] = True
                grid.carve(nx, ny)
                stack.append(((nx, ny), iter(_shuffled(CARVE_STEPS, rng))))
                break
        else:
            stack.pop()
    return grid


def _touches_other_path(grid: Grid, x, y, came_from) -> bool:
    for dx, dy in DIRECTIONS:
        nx, ny = x + dx, y + dy
        if (nx, ny) != came_from and grid.is_path(nx, ny):
            return True
    return False


def _dig_spur(grid: Grid, anchor, direction, length) -> int:
    cx, cy = anchor
    dx, dy = direction
    carved = 0
    for _ in range(length):
        nx, ny = cx + dx, cy + dy
        if not grid.in_interior(nx, ny) or not grid.is_wall(nx, ny):
            break
        # a spur must never touch another passage or it would open a loop
        if _touches_other_path(grid, nx, ny, (cx, cy)):
            break
        grid.carve(nx, ny)
        cx, cy = nx, ny
        carved += 1
    return carved


def add_branches(grid: Grid, branches: int, branch_max_length: int, rng: random.Random) -> Grid:
    """
    Add up to `branches` straight dead-end spurs of 1..branch_max_length cells.
    Spurs only grow into walls that have no other passage next to them,
    so the maze keeps exactly one route between any two cells.
    """
    if branches <= 0 or branch_max_length < 1:
        return grid

    carved = 0
    for _ in range(branches):
        cells = grid.path_cells()
        if not cells:
            break
        ax, ay = rng.choice(cells)

        direction = None
        for dx, dy in _shuffled(DIRECTIONS, rng):
            if grid.is_wall(ax + dx, ay + dy):
                direction = (dx, dy)
                break
        if direction is None:
            continue

        length = rng.randint(1, branch_max_length)
        carved += _dig_spur(grid, (ax, ay), direction, length)

    logger.debug("Injected %d spur cells from %d branch attempts", carved, branches)
    return grid


def generate(
    width: int,
    height: int,
    branches: int = 0,
    branch_max_length: int = DEFAULT_BRANCH_MAX_LENGTH,
    rng: Optional[random.Random] = None,
    seed=None,
) -> Grid:
    """
    Generate a maze on an odd-sized grid.
    Start is (1,1), end is (width-2, height-2); both are always passages
    and every border cell is a wall.
    """
    if rng is None:
        rng = random.Random(seed)
    grid = Grid(width, height)

    carve_passages(grid, rng, start=(1, 1))

    # set start & end
    grid.carve(1, 1)
    grid.carve(width - 2, height - 2)

    if branches > 0:
        add_branches(grid, branches, branch_max_length, rng)

    logger.info("Generated %dx%d maze with %d branches (max length %d)",
                width, height, max(branches, 0), branch_max_length)
    return grid


def generate_perfect_maze(size: int, **kwargs) -> Grid:
    """Square maze of `size` x `size`."""
    return generate(size, size, **kwargs)
