"""Generation invariants: border walls, open endpoints, tree shape, spur rules."""

import random
from collections import deque

import pytest

import maze_gen
from maze_gen import CARVE_STEPS, add_branches, carve_passages, generate, generate_perfect_maze
from maze_grid import DIRECTIONS, PATH, Grid, InvalidDimensions

SIZES = [(5, 5), (7, 5), (11, 11), (15, 21), (31, 31)]


def _all_path_cells(grid):
    return {
        (x, y)
        for y in range(grid.height)
        for x in range(grid.width)
        if grid.cells[y][x] == PATH
    }


def _edge_count(grid, cells):
    # count each adjacent pair once by only looking right and down
    return sum(
        ((x + 1, y) in cells) + ((x, y + 1) in cells)
        for x, y in cells
    )


def _reachable(grid, start):
    seen = {start}
    q = deque([start])
    while q:
        x, y = q.popleft()
        for dx, dy in DIRECTIONS:
            nxt = (x + dx, y + dy)
            if nxt not in seen and grid.is_path(*nxt):
                seen.add(nxt)
                q.append(nxt)
    return seen


def _assert_tree(grid):
    cells = _all_path_cells(grid)
    assert _reachable(grid, (1, 1)) == cells
    assert _edge_count(grid, cells) == len(cells) - 1


def _recursive_carve(grid, rng, x, y, visited):
    visited[y][x] = True
    grid.carve(x, y)
    steps = list(CARVE_STEPS)
    rng.shuffle(steps)
    for dx, dy in steps:
        nx, ny = x + dx, y + dy
        if 0 < nx < grid.width - 1 and 0 < ny < grid.height - 1 and not visited[ny][nx]:
            grid.carve(x + dx // 2, y + dy // 2)
            _recursive_carve(grid, rng, nx, ny, visited)


@pytest.mark.parametrize("width,height", SIZES)
@pytest.mark.parametrize("branches", [0, 25])
def test_border_cells_are_walls(width, height, branches):
    for seed in range(5):
        grid = generate(width, height, branches=branches, branch_max_length=4, seed=seed)
        for x in range(width):
            assert grid.is_wall(x, 0)
            assert grid.is_wall(x, height - 1)
        for y in range(height):
            assert grid.is_wall(0, y)
            assert grid.is_wall(width - 1, y)


@pytest.mark.parametrize("width,height", SIZES)
def test_start_and_end_are_open(width, height):
    grid = generate(width, height, branches=10, seed=1)
    assert grid.is_path(1, 1)
    assert grid.is_path(width - 2, height - 2)


@pytest.mark.parametrize("width,height", SIZES)
def test_unbranched_maze_is_a_spanning_tree(width, height):
    for seed in range(5):
        grid = generate(width, height, seed=seed)
        _assert_tree(grid)
        # every odd lattice cell is reached
        for y in range(1, height - 1, 2):
            for x in range(1, width - 1, 2):
                assert grid.is_path(x, y)


@pytest.mark.parametrize("width,height", SIZES)
def test_branches_keep_the_maze_a_tree(width, height):
    for seed in range(5):
        grid = generate(width, height, branches=40, branch_max_length=5, seed=seed)
        _assert_tree(grid)


def test_branches_add_cells():
    plain = generate(31, 31, seed=11)
    branched = generate(31, 31, branches=40, branch_max_length=5, seed=11)
    assert _all_path_cells(plain) < _all_path_cells(branched)


def test_each_spur_cell_has_one_path_neighbour_when_carved():
    rng = random.Random(5)
    grid = Grid(21, 21)
    carve_passages(grid, rng)

    original_carve = grid.carve
    added = []

    def checking_carve(x, y):
        neighbours = [(x + dx, y + dy) for dx, dy in DIRECTIONS if grid.is_path(x + dx, y + dy)]
        assert len(neighbours) == 1
        added.append((x, y))
        original_carve(x, y)

    grid.carve = checking_carve
    add_branches(grid, 50, 4, rng)
    assert added


def test_spurs_are_straight_and_bounded():
    rng = random.Random(2)
    grid = Grid(21, 21)
    carve_passages(grid, rng)
    before = _all_path_cells(grid)
    add_branches(grid, 1, 3, rng)
    new_cells = _all_path_cells(grid) - before
    assert len(new_cells) <= 3
    if len(new_cells) > 1:
        xs = {x for x, _ in new_cells}
        ys = {y for _, y in new_cells}
        assert len(xs) == 1 or len(ys) == 1


@pytest.mark.parametrize("branches,branch_max_length", [(0, 3), (-4, 3), (10, 0), (10, -1)])
def test_invalid_branch_settings_skip_branching(branches, branch_max_length):
    plain = generate(21, 21, seed=8)
    other = generate(21, 21, branches=branches, branch_max_length=branch_max_length, seed=8)
    assert other.cells == plain.cells


def test_add_branches_stops_without_path_cells():
    grid = Grid(9, 9)
    add_branches(grid, 5, 3, random.Random(0))
    assert grid.path_cells() == []


def test_seed_makes_generation_repeatable():
    a = generate(25, 25, branches=20, branch_max_length=4, seed=1234)
    b = generate(25, 25, branches=20, branch_max_length=4, seed=1234)
    assert a.cells == b.cells


def test_injected_rng_is_used():
    a = generate(25, 25, branches=5, rng=random.Random(99))
    b = generate(25, 25, branches=5, rng=random.Random(99))
    assert a.cells == b.cells


def test_iterative_carve_matches_recursive_backtracker():
    for seed in range(10):
        iterative = Grid(21, 15)
        carve_passages(iterative, random.Random(seed))

        recursive = Grid(21, 15)
        visited = [[False] * 21 for _ in range(15)]
        _recursive_carve(recursive, random.Random(seed), 1, 1, visited)

        assert iterative.cells == recursive.cells


def test_large_maze_does_not_hit_recursion_limit():
    grid = generate(401, 401, seed=3)
    assert grid.is_path(399, 399)


def test_five_by_five_has_single_tree_shape_class():
    for seed in range(20):
        grid = generate(5, 5, seed=seed)
        cells = _all_path_cells(grid)
        # four lattice cells joined by three carved walls
        assert len(cells) == 7
        assert {(1, 1), (3, 1), (1, 3), (3, 3)} <= cells
        assert (2, 2) not in cells
        _assert_tree(grid)


def test_generate_perfect_maze_is_square():
    grid = generate_perfect_maze(11, seed=0)
    assert (grid.width, grid.height) == (11, 11)


@pytest.mark.parametrize("width,height", [(4, 5), (5, 8), (0, 5), (5, -3), (1, 1), (2.5, 5)])
def test_bad_dimensions_raise(width, height):
    with pytest.raises(InvalidDimensions):
        generate(width, height)


def test_generation_logs(caplog):
    with caplog.at_level("DEBUG", logger=maze_gen.__name__):
        generate(11, 11, branches=3, seed=0)
    assert "Generated 11x11 maze" in caplog.text
