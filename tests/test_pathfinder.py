import pytest

from tilepath.pathfinder import Pathfinder, PathfinderError
from tilepath.tilemap import TileMap
from tilepath.types import Algorithm, TileInfo

GRASS = (0, 0)
WALL = (1, 0)
TILES = {
    GRASS: TileInfo("grass", 1, True),
    WALL: TileInfo("wall", 0, False),
}


def make_finder(width, height, walls=(), algorithm=Algorithm.ASTAR, diagonal=False):
    tilemap = TileMap(name="Level")
    for x in range(width):
        for y in range(height):
            tilemap.set_cell((x, y), WALL if (x, y) in walls else GRASS)
    finder = Pathfinder(tilemap, (width, height), algorithm, diagonal=diagonal)
    finder.tile_data = dict(TILES)
    return finder


def adjacent(a, b):
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1


def test_astar_line():
    finder = make_finder(5, 1)
    paths = finder.find_paths([(0, 0)], [(4, 0)])
    assert paths == [[(4, 0), (3, 0), (2, 0), (1, 0), (0, 0)]]


def test_dijkstra_line():
    finder = make_finder(5, 1, algorithm=Algorithm.DIJKSTRA)
    paths = finder.find_paths([(0, 0)], [(4, 0)])
    assert paths == [[(4, 0), (3, 0), (2, 0), (1, 0), (0, 0)]]


def test_dynamic_programming_line_runs_forward():
    finder = make_finder(5, 1, algorithm=Algorithm.DYNAMIC_PROG)
    paths = finder.find_paths([(0, 0)], [(4, 0)])
    assert paths == [[(0, 0), (1, 0), (2, 0), (3, 0), (4, 0)]]


def test_dynamic_programming_many_to_one():
    finder = make_finder(5, 1, algorithm=Algorithm.DYNAMIC_PROG)
    paths = finder.find_paths([(0, 0), (2, 0)], [(4, 0)])
    assert len(paths) == 2
    assert [p[0] for p in paths] == [(0, 0), (2, 0)]
    assert all(p[-1] == (4, 0) for p in paths)


def test_diagonal_step_taken():
    finder = make_finder(2, 2, diagonal=True)
    assert finder.find_paths([(0, 0)], [(1, 1)]) == [[(1, 1), (0, 0)]]


def test_blocked_end_gives_empty_path():
    finder = make_finder(3, 1, walls={(1, 0)})
    assert finder.find_paths([(0, 0)], [(2, 0)]) == [[]]


def test_blocked_end_dynamic_programming():
    finder = make_finder(3, 1, walls={(1, 0)}, algorithm=Algorithm.DYNAMIC_PROG)
    assert finder.find_paths([(0, 0)], [(2, 0)]) == [[]]


def test_many_to_one_paths_are_connected():
    finder = make_finder(4, 3)
    paths = finder.find_paths([(0, 0), (0, 2)], [(3, 1)])
    assert len(paths) == 2
    for path, start in zip(paths, [(0, 0), (0, 2)]):
        assert path[0] == (3, 1)
        assert path[-1] == start
        assert all(adjacent(a, b) for a, b in zip(path, path[1:]))


def test_one_to_many_dijkstra():
    finder = make_finder(5, 1, algorithm=Algorithm.DIJKSTRA)
    paths = finder.find_paths([(0, 0)], [(2, 0), (4, 0)])
    assert paths == [[(2, 0), (1, 0), (0, 0)], [(4, 0), (3, 0), (2, 0), (1, 0), (0, 0)]]


def test_many_to_many_mismatch_raises():
    finder = make_finder(5, 1)
    with pytest.raises(PathfinderError):
        finder.find_paths([(0, 0), (1, 0)], [(4, 0), (3, 0), (2, 0)])


def test_no_tile_data_raises():
    finder = make_finder(3, 1)
    finder.tile_data = {}
    with pytest.raises(PathfinderError):
        finder.find_paths([(0, 0)], [(2, 0)])


def test_start_out_of_bounds_raises():
    finder = make_finder(3, 1)
    with pytest.raises(PathfinderError):
        finder.find_paths([(3, 0)], [(0, 0)])


def test_empty_request_returns_no_paths():
    finder = make_finder(3, 1)
    assert finder.find_paths([], []) == []


def test_debug_prints_kind(capsys):
    finder = make_finder(3, 1)
    finder.find_paths([(0, 0)], [(2, 0)], debug=True)
    assert "one to one path" in capsys.readouterr().out


def test_preprocess_sets_neighbors():
    finder = make_finder(3, 1, walls={(2, 0)})
    finder.initialize_map()
    finder.preprocess()
    assert finder.grid[(0, 0)].neighbors == [(1, 0)]
    assert finder.grid[(1, 0)].neighbors == [(0, 0)]
    assert finder.grid[(2, 0)].reachable is False


def test_code_round_trip():
    finder = make_finder(3, 2)
    finder.initialize_map()
    finder.preprocess()
    records = finder.save_to_code()
    other = Pathfinder(TileMap(name="Level"))
    other.load_from_code(records)
    assert other.map_size == (3, 2)
    assert other.save_to_code() == records


def test_file_round_trip(tmp_path):
    finder = make_finder(3, 2)
    finder.initialize_map()
    finder.preprocess()
    path = finder.save_to_file(tmp_path, "level")
    assert path == tmp_path / "level.cfg"
    other = Pathfinder(TileMap(name="Level"))
    other.load_from_file(path)
    assert other.save_to_code() == finder.save_to_code()


def test_save_empty_grid_raises(tmp_path):
    finder = make_finder(3, 1)
    with pytest.raises(ValueError):
        finder.save_to_file(tmp_path, "empty")


def test_load_tileset_cfg(tmp_path):
    cfg = tmp_path / "tiles.cfg"
    cfg.write_text(
        "[tileset_data]\n\ncount=1\n\n"
        '[0,0]\n\ntile_name="grass"\ntile_cost=1\nreachable_state=true\n',
        encoding="utf-8",
    )
    finder = Pathfinder(TileMap())
    finder.load_tileset_cfg(cfg)
    assert finder.tile_data == {(0, 0): TileInfo("grass", 1, True)}