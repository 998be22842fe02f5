# maze_solver.py
"""
Breadth-first shortest path over the passage cells of a Grid.

Neighbours are always expanded in the order up, down, left, right, so ties
between equally short routes resolve the same way on every run.
"""
import logging
from collections import deque
from typing import List, NamedTuple

from maze_grid import DIRECTIONS, Grid, Position

logger = logging.getLogger(__name__)


class SearchResult(NamedTuple):
    path: List[Position]
    explored: int
    visited_steps: List[Position]


def search(grid: Grid, start, end) -> SearchResult:
    """
    Run BFS from `start` to `end` and report the path together with how many
    cells were expanded and in which order.
    The path runs start->end inclusive, or is empty when there is no route
    (including when either endpoint is not a passage).
    """
    start = Position(*start)
    end = Position(*end)
    if not grid.is_path(*start) or not grid.is_path(*end):
        logger.debug("No search: endpoint %s or %s is not a passage", start, end)
        return SearchResult([], 0, [])

    visited = [[False for _ in range(grid.width)] for _ in range(grid.height)]
    came_from = [[None for _ in range(grid.width)] for _ in range(grid.height)]

    q = deque([start])
    visited[start.y][start.x] = True
    visited_steps = []
    explored = 0
    while q:
        cur = q.popleft()
        explored += 1
        visited_steps.append(cur)
        if cur == end:
            break
        for dx, dy in DIRECTIONS:
            nx, ny = cur.x + dx, cur.y + dy
            if grid.in_interior(nx, ny) and grid.is_path(nx, ny) and not visited[ny][nx]:
                # mark on discovery so the first parent found is kept
                came_from[ny][nx] = cur
                visited[ny][nx] = True
                q.append(Position(nx, ny))

    if not visited[end.y][end.x]:
        return SearchResult([], explored, visited_steps)

    # reconstruct path
    path = []
    cur = end
    while cur is not None:
        path.append(cur)
        cur = came_from[cur.y][cur.x]
    path.reverse()
    logger.debug("Solved %s -> %s in %d steps (%d explored)", start, end, len(path) - 1, explored)
    return SearchResult(path, explored, visited_steps)


def solve(grid: Grid, start, end) -> List[Position]:
    return search(grid, start, end).path
