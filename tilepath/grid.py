"""The search grid: per-cell node data, preprocessing and label bookkeeping."""

from __future__ import annotations

import math
import struct
from collections.abc import Iterable, Iterator, Mapping

from .heuristics import heuristic as _heuristic
from .tilemap import EMPTY_CELL, TileMap
from .types import Algorithm, Coord, Heuristic, NodeData, TileInfo

# Labels at or above this value are never picked as a minimum.
_LABEL_CEILING = 1.7e10
_TIE_TOLERANCE = 1e-10
_SQRT2 = math.sqrt(2)


def _single(value: float) -> float:
    """Round a value to single precision, the precision labels are compared at."""
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _coord(value) -> Coord:
    x, y = value
    return int(x), int(y)


class NavGrid:
    """A rectangle of nodes indexed by (x, y) map coordinates."""

    def __init__(self, size: Coord) -> None:
        size_x, size_y = _coord(size)
        self.columns: list[list[NodeData]] = []
        if size_x > 0 and size_y > 0:
            self.columns = [
                [NodeData(coordinates=(x, y), parent=(x, y)) for y in range(size_y)]
                for x in range(size_x)
            ]

    @property
    def size(self) -> Coord:
        """Number of columns and rows."""
        if not self.columns:
            return 0, 0
        return len(self.columns), len(self.columns[0])

    def __contains__(self, coords) -> bool:
        x, y = _coord(coords)
        size_x, size_y = self.size
        return 0 <= x < size_x and 0 <= y < size_y

    def __getitem__(self, coords) -> NodeData:
        if coords not in self:
            raise IndexError(f"{tuple(coords)} lies outside a grid of size {self.size}")
        x, y = _coord(coords)
        return self.columns[x][y]

    def __iter__(self) -> Iterator[list[NodeData]]:
        return iter(self.columns)

    def nodes(self) -> Iterator[NodeData]:
        """Every node, column by column."""
        for column in self.columns:
            yield from column

    def reset_search(self) -> None:
        """Clear labels, distances and parents ahead of a new search."""
        for node in self.nodes():
            node.reset_search()

    def preprocess(
        self,
        tilemap: TileMap,
        tile_data: Mapping[Coord, TileInfo],
        diagonal: bool = False,
    ) -> None:
        """Fill in cost, reachability and neighbours of every node from a tile map.

        Empty cells are unreachable and cost nothing. Raises KeyError for a
        painted tile that ``tile_data`` does not describe.
        """
        for node in self.nodes():
            atlas = tilemap.cell_atlas_coords(node.coordinates)
            if atlas == EMPTY_CELL:
                node.cost = 0
                node.reachable = False
                continue
            try:
                info = tile_data[atlas]
            except KeyError:
                raise KeyError(f"no tile data for atlas coordinates {atlas}") from None
            node.cost = info.cost
            node.reachable = info.reachable

        directions = tilemap.neighbor_order(diagonal)
        for node in self.nodes():
            node.neighbors = []
            if not node.reachable:
                continue
            for direction in directions:
                neighbor = tilemap.neighbor_cell(node.coordinates, direction)
                if neighbor in self and self[neighbor].reachable:
                    node.neighbors.append(neighbor)

    def label(
        self,
        node: Coord,
        end: Coord,
        diagonal: bool = False,
        overwrite: bool = False,
        algorithm: Algorithm | int = Algorithm.ASTAR,
        heuristic: Heuristic | int = Heuristic.EUCLID,
        weight: float = 1,
    ) -> float:
        """Label of ``node`` on the way to ``end``, measured through its parent.

        With ``overwrite`` the node's distance and label are stored and 0.0 is
        returned; otherwise the label for ``algorithm`` is returned. Raises
        ValueError for an algorithm that does not use labels.
        """
        data = self[node]
        coords = data.coordinates
        cost = float(data.cost) + (_SQRT2 if diagonal else 0.0)
        parent = _coord(data.parent)
        parent_distance = 0.0 if parent == coords else self[parent].distance_to
        end_x, end_y = _coord(end)
        h = _heuristic(heuristic, coords[0] - end_x, coords[1] - end_y, weight)
        distance = parent_distance + cost

        if overwrite:
            data.distance_to = distance
            data.label = distance + h
            return 0.0

        algorithm = Algorithm(algorithm)
        if algorithm is Algorithm.ASTAR:
            return distance + h
        if algorithm is Algorithm.DIJKSTRA:
            return distance
        raise ValueError(f"{algorithm.name} does not use node labels")

    def find_minimum_label(self, open_list: Iterable[Coord]) -> list[Coord]:
        """Nodes of ``open_list`` that share the smallest label, in list order."""
        entries = [(coords, _single(self[coords].label)) for coords in open_list]
        minimum = min((label for _, label in entries), default=_LABEL_CEILING)
        minimum = min(minimum, _single(_LABEL_CEILING))
        return [coords for coords, label in entries if label - minimum < _TIE_TOLERANCE]