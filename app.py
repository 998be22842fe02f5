# app.py
"""
Maze backend (Flask).
Endpoints:
  GET  /api/difficulties   -> { easy: {...}, medium: {...}, hard: {...} }
  POST /api/generate_maze  -> { size | width/height | difficulty, branches, branch_max_length, seed }
                             returns { maze: [[1=wall/0=path]], width, height, size, start, end }
  POST /api/solve_maze     -> { maze: [...], start?: [x,y], end?: [x,y] } returns
                             { explored: int, path: [[x,y]..], time: ms, visited_steps: [[x,y]..] }
  POST /api/move           -> { maze: [...], position: [x,y], direction | key } returns
                             { position: [x,y], moved: bool, won: bool }
With a difficulty, the preset supplies size and branch settings; explicit
size, width, height, branches or branch_max_length fields override it.
Coordinates are always [x, y] (column, row); maze rows are indexed maze[y][x].
Run locally:
  python3 -m venv venv
  source venv/bin/activate
  pip install -r requirements.txt
  python app.py
"""
from flask import Flask, request, jsonify
from flask_cors import CORS
import logging
import time

import maze_config
from maze_config import DIFFICULTY_PRESETS, get_preset
from maze_game import Direction, key_to_direction, step
from maze_gen import DEFAULT_BRANCH_MAX_LENGTH, generate
from maze_grid import Grid, InvalidDimensions, is_passable
from maze_solver import search

logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app)


class PayloadError(ValueError):
    pass


def _json_payload():
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise PayloadError("request body must be a JSON object")
    return payload


def _int_field(payload, name, default=None):
    if name not in payload:
        return default
    value = payload[name]
    if value is None or isinstance(value, bool):
        raise PayloadError(f"'{name}' must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise PayloadError(f"'{name}' must be an integer") from None


def _position_field(payload, name, default=None):
    value = payload.get(name)
    if value is None:
        return default
    try:
        x, y = value
        return int(x), int(y)
    except (TypeError, ValueError):
        raise PayloadError(f"'{name}' must be an [x, y] pair") from None


def _grid_field(payload):
    maze = payload.get("maze")
    if not maze:
        raise PayloadError("maze data required")
    if not isinstance(maze, list) or not all(isinstance(row, list) for row in maze):
        raise PayloadError("maze must be a list of rows")
    return Grid.from_list(maze)


def _clamp_size(value):
    return max(maze_config.MIN_SIZE, min(value, maze_config.MAX_SIZE))


@app.errorhandler(PayloadError)
@app.errorhandler(InvalidDimensions)
def handle_bad_payload(err):
    logger.warning("Rejected request to %s: %s", request.path, err)
    return jsonify({"error": str(err)}), 400


# --- Flask API routes --- #
@app.route("/api/difficulties", methods=["GET"])
def api_difficulties():
    return jsonify({d.value: preset.to_dict() for d, preset in DIFFICULTY_PRESETS.items()})


@app.route("/api/generate_maze", methods=["POST"])
def api_generate_maze():
    payload = _json_payload()

    difficulty = payload.get("difficulty")
    if difficulty is not None:
        try:
            preset = get_preset(difficulty)
        except ValueError as e:
            raise PayloadError(str(e)) from None
        size = _int_field(payload, "size", preset.size)
        branches, branch_max_length = preset.branches, preset.branch_max_length
    else:
        size = _int_field(payload, "size", 21)
        branches = 0
        branch_max_length = DEFAULT_BRANCH_MAX_LENGTH

    width = _clamp_size(_int_field(payload, "width", size))
    height = _clamp_size(_int_field(payload, "height", size))
    branches = _int_field(payload, "branches", branches)
    branch_max_length = _int_field(payload, "branch_max_length", branch_max_length)
    seed = _int_field(payload, "seed")

    grid = generate(width, height, branches=branches, branch_max_length=branch_max_length, seed=seed)
    return jsonify({
        "maze": grid.to_list(),
        "width": width,
        "height": height,
        "size": width if width == height else None,
        "start": [1, 1],
        "end": [width - 2, height - 2],
    })


@app.route("/api/solve_maze", methods=["POST"])
def api_solve_maze():
    payload = _json_payload()
    algorithm = (payload.get("algorithm") or "bfs").lower()
    if algorithm != "bfs":
        raise PayloadError(f"unsupported algorithm: {algorithm}")

    grid = _grid_field(payload)
    start = _position_field(payload, "start", (1, 1))
    end = _position_field(payload, "end", (grid.width - 2, grid.height - 2))
    for name, (x, y) in (("start", start), ("end", end)):
        if not grid.in_bounds(x, y):
            raise PayloadError(f"'{name}' is outside the maze")

    start_time = time.time()
    result = search(grid, start, end)
    time_ms = int((time.time() - start_time) * 1000)
    if not result.path:
        logger.info("No route from %s to %s in %dx%d maze", start, end, grid.width, grid.height)
    return jsonify({
        "explored": result.explored,
        "path": [list(p) for p in result.path],
        "time": time_ms,
        "visited_steps": [list(p) for p in result.visited_steps],
    })


@app.route("/api/move", methods=["POST"])
def api_move():
    payload = _json_payload()
    grid = _grid_field(payload)
    position = _position_field(payload, "position", (1, 1))

    if "direction" in payload:
        try:
            direction = Direction[str(payload["direction"]).upper()]
        except KeyError:
            raise PayloadError(f"unknown direction: {payload['direction']}") from None
    else:
        direction = key_to_direction(str(payload.get("key", "")))
        if direction is None:
            raise PayloadError("a 'direction' or a movement 'key' is required")

    target = step(position, direction)
    moved = is_passable(grid, *target)
    if moved:
        position = target
    return jsonify({
        "position": list(position),
        "moved": moved,
        "won": tuple(position) == (grid.width - 2, grid.height - 2),
    })


if __name__ == "__main__":
    logging.basicConfig(
        level=maze_config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app.run(host=maze_config.HOST, port=maze_config.PORT, debug=maze_config.DEBUG)
