"""Core value types shared by the pathfinding modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

Coord = tuple[int, int]

# Label given to every node before any search touches it.
INITIAL_LABEL = 1e10
# Label given to every node when a new search starts; marks "not yet seen".
UNVISITED_LABEL = 1e5
# Longest path that is traced back before giving up.
MAX_PATH_LENGTH = 10000


class Algorithm(IntEnum):
    """Pathfinding algorithm selection."""

    ASTAR = 0
    DIJKSTRA = 1
    DYNAMIC_PROG = 2


class Heuristic(IntEnum):
    """Distance estimate used by the label calculation."""

    EUCLID = 0
    EUCLID_POW = 1
    EUCLID_WGHT = 2
    EUCLID_EXP = 3
    MANHATAN = 4
    CHEBYSHEV = 5
    OCTILE = 6


class TileShape(IntEnum):
    """Shape of the cells of a tile map."""

    SQUARE = 0
    ISOMETRIC = 1
    HALF_OFFSET_SQUARE = 2
    HEXAGON = 3


class OffsetAxis(IntEnum):
    """Axis along which alternate rows or columns are shifted."""

    HORIZONTAL = 0
    VERTICAL = 1


class CellNeighbor(IntEnum):
    """Direction of a neighbouring cell, across a side or a corner."""

    RIGHT_SIDE = 0
    RIGHT_CORNER = 1
    BOTTOM_RIGHT_SIDE = 2
    BOTTOM_RIGHT_CORNER = 3
    BOTTOM_SIDE = 4
    BOTTOM_CORNER = 5
    BOTTOM_LEFT_SIDE = 6
    BOTTOM_LEFT_CORNER = 7
    LEFT_SIDE = 8
    LEFT_CORNER = 9
    TOP_LEFT_SIDE = 10
    TOP_LEFT_CORNER = 11
    TOP_SIDE = 12
    TOP_CORNER = 13
    TOP_RIGHT_SIDE = 14
    TOP_RIGHT_CORNER = 15


@dataclass(frozen=True)
class TileInfo:
    """Movement properties of one tile variant."""

    name: str
    cost: int
    reachable: bool


@dataclass
class NodeData:
    """Search state of a single map cell."""

    coordinates: Coord = (0, 0)
    parent: Coord = (0, 0)
    neighbors: list[Coord] = field(default_factory=list)
    cost: float = 0.0
    distance_to: float = 0.0
    label: float = INITIAL_LABEL
    reachable: bool = False

    def reset_search(self) -> None:
        """Clear the per-search state, keeping cost, reachability and neighbours."""
        self.distance_to = 0.0
        self.label = UNVISITED_LABEL
        self.parent = self.coordinates