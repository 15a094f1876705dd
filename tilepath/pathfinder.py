"""Path search over a tile map with A*, Dijkstra or dynamic programming."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Any

from .grid import NavGrid
from .heuristics import heuristic as _heuristic  # noqa: F401  (kept for API parity)
from .storage import (
    grid_from_records,
    grid_to_records,
    load_records,
    load_tileset,
    save_records,
    section_for_shape,
)
from .tilemap import TileMap
from .types import (
    MAX_PATH_LENGTH,
    UNVISITED_LABEL,
    Algorithm,
    Coord,
    Heuristic,
    TileInfo,
)

_DP_MAX_STEPS = 1000


class PathfinderError(ValueError):
    """Raised when a path request cannot be served."""


def _coord(value: Any) -> Coord:
    x, y = value
    return int(x), int(y)


class Pathfinder:
    """Finds paths between cells of a tile map."""

    def __init__(
        self,
        tilemap: TileMap,
        map_size: Coord = (0, 0),
        algorithm: Algorithm | int = Algorithm.ASTAR,
        heuristic: Heuristic | int = Heuristic.EUCLID,
        diagonal: bool = False,
        weight: float = 1,
    ) -> None:
        self.tilemap = tilemap
        self.map_size: Coord = _coord(map_size)
        self.algorithm = Algorithm(algorithm)
        self.heuristic = Heuristic(heuristic)
        self.diagonal = bool(diagonal)
        self.weight = int(weight)
        self.tile_data: dict[Coord, TileInfo] = {}
        self.grid = NavGrid((0, 0))
        self.open_list: list[Coord] = []
        self.closed_list: list[Coord] = []
        self._last_shape = tilemap.shape
        self._dp_prev_used = False
        self._dp_end: Coord | None = None

    # Map set-up

    def initialize_map(self) -> None:
        """Replace the grid with fresh nodes of the current map size."""
        self.grid = NavGrid(self.map_size)

    def preprocess(self) -> None:
        """Read costs, reachability and neighbours of every cell from the tile map."""
        self._dp_prev_used = False
        if self.map_size == (0, 0):
            return
        if self.grid.size[0] != self.map_size[0]:
            self.initialize_map()
        self.grid.preprocess(self.tilemap, self.tile_data, self.diagonal)

    # Path requests

    def find_paths(
        self,
        starts: Sequence[Coord],
        ends: Sequence[Coord],
        debug: bool = False,
    ) -> list[list[Coord]]:
        """Find one path per start/end pairing.

        One start and one end give one path; many starts and one end, or one
        start and many ends, give one path each; many starts and as many ends
        are paired in order. Raises PathfinderError when no tile data is
        loaded, a start lies outside the map, or the paired lists differ in
        length.
        """
        if not self.tile_data:
            raise PathfinderError("no data for tile types loaded")
        starts = [_coord(s) for s in starts]
        ends = [_coord(e) for e in ends]
        size_x, size_y = self.map_size
        for x, y in starts:
            if x < 0 or y < 0 or x >= size_x or y >= size_y:
                raise PathfinderError(f"start position {(x, y)} is out of bounds")

        current_shape = self.tilemap.shape
        grid_x, grid_y = self.grid.size
        if grid_x < 1 or grid_y < 1:
            self._last_shape = current_shape
            self.initialize_map()
            self.preprocess()
        if current_shape != self._last_shape:
            self.preprocess()
        self._last_shape = current_shape

        search: Callable[[Coord, Coord], list[Coord]] = {
            Algorithm.ASTAR: self.astar,
            Algorithm.DIJKSTRA: self.dijkstra,
            Algorithm.DYNAMIC_PROG: self.dynamic_programming,
        }[self.algorithm]

        if len(starts) == 1 and len(ends) == 1:
            kind, pairs = "one to one path", [(starts[0], ends[0])]
        elif len(starts) > 1 and len(ends) == 1:
            kind, pairs = "many to one paths", [(s, ends[0]) for s in starts]
        elif len(starts) == 1 and len(ends) > 1:
            kind, pairs = "one to many paths", [(starts[0], e) for e in ends]
        elif len(starts) > 1 and len(ends) > 1:
            kind = "many to many paths"
            if len(starts) != len(ends):
                raise PathfinderError("Start and End point arrays are not the same size")
            pairs = list(zip(starts, ends))
        else:
            return []

        if debug:
            print(kind)
        return [search(start, end) for start, end in pairs]

    # Algorithms

    def _max_iterations(self) -> int:
        return max(self.map_size) * 1000

    def _trace_back(self, current: Coord, start: Coord) -> list[Coord]:
        path = [current]
        while current != start:
            current = self.grid[current].parent
            path.append(current)
            if len(path) >= MAX_PATH_LENGTH:
                break
        return path

    def _label(self, node: Coord, end: Coord, diagonal: bool, overwrite: bool,
               algorithm: Algorithm) -> float:
        return self.grid.label(
            node, end, diagonal, overwrite, algorithm, self.heuristic, self.weight
        )

    def _begin_search(self, start: Coord) -> None:
        self._dp_prev_used = False
        size_x, size_y = self.grid.size
        if size_x > 0 and size_y > 0:
            self.grid.reset_search()
        self.open_list = [start]
        self.closed_list = []

    def astar(self, start: Coord, end: Coord) -> list[Coord]:
        """A* search; the path runs from ``end`` back to ``start``, or is empty."""
        start, end = _coord(start), _coord(end)
        self._begin_search(start)
        grid = self.grid
        self._label(start, end, False, True, Algorithm.ASTAR)

        current: Coord | None = None
        iteration = 1
        while True:
            minimums = grid.find_minimum_label(self.open_list)
            if not minimums:
                break
            chosen = end if end in minimums else minimums[-1]
            current = self.open_list.pop(self.open_list.index(chosen))
            reached = current == end
            self.closed_list.append(current)

            for index, neighbor in enumerate(grid[current].neighbors):
                diagonal = index > 3
                f_n = self._label(neighbor, end, diagonal, False, Algorithm.ASTAR)
                node = grid[neighbor]
                if abs(node.label - UNVISITED_LABEL) < 1e-9:
                    self.open_list.append(neighbor)
                if f_n < node.label:
                    self._label(neighbor, end, diagonal, True, Algorithm.ASTAR)
                    node.label = f_n
                    node.parent = current

            if reached:
                break
            if not self.open_list:
                return []
            if iteration > self._max_iterations():
                break
            iteration += 1

        if current is None:
            return []
        if end in self.closed_list:
            current = end
        return self._trace_back(current, start)

    def dijkstra(self, start: Coord, end: Coord) -> list[Coord]:
        """Dijkstra search; the path runs from ``end`` back to ``start``, or is empty."""
        start, end = _coord(start), _coord(end)
        self._begin_search(start)
        grid = self.grid
        grid[start].label = self._label(start, end, False, True, Algorithm.DIJKSTRA)

        current: Coord | None = None
        iteration = 1
        while True:
            minimums = grid.find_minimum_label(self.open_list)
            if not minimums:
                break
            chosen = end if end in minimums else minimums[0]
            current = self.open_list.pop(self.open_list.index(chosen))
            reached = current == end
            self.closed_list.append(current)

            for index, neighbor in enumerate(grid[current].neighbors):
                diagonal = index >= 4
                node = grid[neighbor]
                if abs(node.label - UNVISITED_LABEL) < 1e-9:
                    self.open_list.append(neighbor)
                f_n = self._label(neighbor, end, diagonal, False, Algorithm.DIJKSTRA)
                if f_n < node.label:
                    node.distance_to = f_n
                    node.label = f_n
                    node.parent = current

            if reached:
                break
            if not self.open_list:
                return []
            if iteration > self._max_iterations():
                break
            iteration += 1

        if current is None:
            return []
        if end in self.closed_list:
            current = end
        return self._trace_back(current, start)

    def _build_cost_field(self, end: Coord) -> None:
        grid = self.grid
        sweeps = max(self.map_size) * 10
        for _ in range(sweeps):
            updated = False
            for node in grid.nodes():
                coords = node.coordinates
                if coords == end:
                    node.label = 0
                    continue
                unset = node.parent == coords
                for n in node.neighbors:
                    other = grid[n]
                    if unset and n == end:
                        node.label = other.cost
                        node.parent = n
                        updated = True
                        break
                    if other.parent != n:
                        new_label = other.label + other.cost
                        if new_label < node.label:
                            node.label = new_label
                            node.parent = n
                            updated = True
            if not updated:
                break

    def dynamic_programming(self, start: Coord, end: Coord) -> list[Coord]:
        """Follow a cost field towards ``end``; the path runs from ``start`` to ``end``.

        The cost field is kept between calls that share the same end. Returns
        an empty list when the path loops or ``start`` equals ``end``.
        """
        start, end = _coord(start), _coord(end)
        if not self._dp_prev_used or self._dp_end != end:
            self.initialize_map()
            self.preprocess()
            self._build_cost_field(end)
            self._dp_end = end
        self._dp_prev_used = True

        path: list[Coord] = []
        current = start
        new = start
        previous: Coord | None = None
        steps = 0
        while current != end and steps < _DP_MAX_STEPS:
            current = new
            path.append(current)
            new = self.grid[current].parent
            if new == end:
                path.append(new)
                break
            if new == current or new == previous:
                return []
            previous = current
            steps += 1
        return path

    # Saving and loading

    def save_to_code(self) -> list[list[dict[str, Any]]]:
        """The grid as nested lists of plain records."""
        return grid_to_records(self.grid)

    def save_to_file(self, directory: str | Path, file_name: str) -> Path:
        """Write the grid to ``directory/file_name.cfg`` and return that path.

        Raises ValueError when the grid is empty.
        """
        path = Path(directory) / f"{file_name}.cfg"
        save_records(
            self.save_to_code(),
            path,
            section_for_shape(self.tilemap.shape),
            self.tilemap.name,
        )
        return path

    def load_from_code(self, data: Sequence[Sequence[Mapping[str, Any]]]) -> None:
        """Replace the grid with one rebuilt from records."""
        columns = grid_from_records(data)
        if columns and columns[0]:
            self.map_size = (len(columns), len(columns[0]))
        self.initialize_map()
        if columns and columns[0]:
            self.grid.columns = columns

    def load_from_file(self, path: str | Path) -> None:
        """Replace the grid with the one stored for this map in a file."""
        records = load_records(
            path, section_for_shape(self.tilemap.shape), self.tilemap.name
        )
        self.load_from_code(records)

    def load_tileset_cfg(self, path: str | Path) -> None:
        """Replace the tile data with the variants described in a tileset file."""
        self.tile_data = load_tileset(path)