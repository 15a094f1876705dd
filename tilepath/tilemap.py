"""A tile map layer: painted cells and neighbour lookup for each cell shape."""

from __future__ import annotations

from .types import CellNeighbor, Coord, OffsetAxis, TileShape

EMPTY_CELL: Coord = (-1, -1)

_SQUARE_OFFSETS: dict[CellNeighbor, Coord] = {
    CellNeighbor.RIGHT_SIDE: (1, 0),
    CellNeighbor.BOTTOM_RIGHT_CORNER: (1, 1),
    CellNeighbor.BOTTOM_SIDE: (0, 1),
    CellNeighbor.BOTTOM_LEFT_CORNER: (-1, 1),
    CellNeighbor.LEFT_SIDE: (-1, 0),
    CellNeighbor.TOP_LEFT_CORNER: (-1, -1),
    CellNeighbor.TOP_SIDE: (0, -1),
    CellNeighbor.TOP_RIGHT_CORNER: (1, -1),
}

_SQUARE_ORDER = (
    CellNeighbor.RIGHT_SIDE,
    CellNeighbor.BOTTOM_SIDE,
    CellNeighbor.LEFT_SIDE,
    CellNeighbor.TOP_SIDE,
)
_SQUARE_DIAGONALS = (
    CellNeighbor.BOTTOM_RIGHT_CORNER,
    CellNeighbor.BOTTOM_LEFT_CORNER,
    CellNeighbor.TOP_LEFT_CORNER,
    CellNeighbor.TOP_RIGHT_CORNER,
)
_ISO_ORDER = (
    CellNeighbor.BOTTOM_RIGHT_SIDE,
    CellNeighbor.BOTTOM_LEFT_SIDE,
    CellNeighbor.TOP_LEFT_SIDE,
    CellNeighbor.TOP_RIGHT_SIDE,
)
_ISO_DIAGONALS = (
    CellNeighbor.RIGHT_CORNER,
    CellNeighbor.BOTTOM_CORNER,
    CellNeighbor.LEFT_CORNER,
    CellNeighbor.TOP_CORNER,
)
_HEX_HORIZONTAL_ORDER = (
    CellNeighbor.RIGHT_SIDE,
    CellNeighbor.BOTTOM_RIGHT_SIDE,
    CellNeighbor.BOTTOM_LEFT_SIDE,
    CellNeighbor.LEFT_SIDE,
    CellNeighbor.TOP_LEFT_SIDE,
    CellNeighbor.TOP_RIGHT_SIDE,
)
_HEX_VERTICAL_ORDER = (
    CellNeighbor.TOP_SIDE,
    CellNeighbor.TOP_RIGHT_SIDE,
    CellNeighbor.BOTTOM_RIGHT_SIDE,
    CellNeighbor.BOTTOM_SIDE,
    CellNeighbor.BOTTOM_LEFT_SIDE,
    CellNeighbor.TOP_LEFT_SIDE,
)


def _horizontal_offsets(odd: bool, iso: bool) -> dict[CellNeighbor, Coord]:
    """Offsets for stacked layouts whose rows are shifted horizontally."""
    shift = 1 if odd else 0
    right = CellNeighbor.RIGHT_CORNER if iso else CellNeighbor.RIGHT_SIDE
    left = CellNeighbor.LEFT_CORNER if iso else CellNeighbor.LEFT_SIDE
    return {
        right: (1, 0),
        CellNeighbor.BOTTOM_RIGHT_SIDE: (shift, 1),
        CellNeighbor.BOTTOM_CORNER: (0, 2),
        CellNeighbor.BOTTOM_LEFT_SIDE: (shift - 1, 1),
        left: (-1, 0),
        CellNeighbor.TOP_LEFT_SIDE: (shift - 1, -1),
        CellNeighbor.TOP_CORNER: (0, -2),
        CellNeighbor.TOP_RIGHT_SIDE: (shift, -1),
    }


def _vertical_offsets(odd: bool, iso: bool) -> dict[CellNeighbor, Coord]:
    """Offsets for stacked layouts whose columns are shifted vertically."""
    shift = 1 if odd else 0
    bottom = CellNeighbor.BOTTOM_CORNER if iso else CellNeighbor.BOTTOM_SIDE
    top = CellNeighbor.TOP_CORNER if iso else CellNeighbor.TOP_SIDE
    return {
        bottom: (0, 1),
        CellNeighbor.BOTTOM_RIGHT_SIDE: (1, shift),
        CellNeighbor.RIGHT_CORNER: (2, 0),
        CellNeighbor.TOP_RIGHT_SIDE: (1, shift - 1),
        top: (0, -1),
        CellNeighbor.TOP_LEFT_SIDE: (-1, shift - 1),
        CellNeighbor.LEFT_CORNER: (-2, 0),
        CellNeighbor.BOTTOM_LEFT_SIDE: (-1, shift),
    }


def _coord(value) -> Coord:
    x, y = value
    return int(x), int(y)


class TileMap:
    """Cells painted with atlas tiles on a grid of a given cell shape."""

    def __init__(
        self,
        shape: TileShape | int = TileShape.SQUARE,
        offset_axis: OffsetAxis | int = OffsetAxis.HORIZONTAL,
        name: str = "TileMap",
    ) -> None:
        self.shape = TileShape(shape)
        self.offset_axis = OffsetAxis(offset_axis)
        self.name = name
        self._cells: dict[Coord, Coord] = {}

    def set_cell(self, coords: Coord, atlas_coords: Coord = EMPTY_CELL) -> None:
        """Paint a cell with the tile at the given atlas coordinates.

        Painting with (-1, -1) clears the cell.
        """
        atlas = _coord(atlas_coords)
        if atlas == EMPTY_CELL:
            self.erase_cell(coords)
        else:
            self._cells[_coord(coords)] = atlas

    def erase_cell(self, coords: Coord) -> None:
        """Clear a cell; clearing an empty cell does nothing."""
        self._cells.pop(_coord(coords), None)

    def cell_atlas_coords(self, coords: Coord) -> Coord:
        """Atlas coordinates of the tile in a cell, or (-1, -1) if it is empty."""
        return self._cells.get(_coord(coords), EMPTY_CELL)

    def neighbor_cell(self, coords: Coord, neighbor: CellNeighbor | int) -> Coord:
        """Coordinates of the cell next to ``coords`` in the given direction.

        Raises ValueError for a direction this cell shape does not have.
        """
        x, y = _coord(coords)
        neighbor = CellNeighbor(neighbor)
        if self.shape is TileShape.SQUARE:
            offsets = _SQUARE_OFFSETS
        else:
            iso = self.shape is TileShape.ISOMETRIC
            if self.offset_axis is OffsetAxis.HORIZONTAL:
                offsets = _horizontal_offsets(y % 2 != 0, iso)
            else:
                offsets = _vertical_offsets(x % 2 != 0, iso)
        try:
            dx, dy = offsets[neighbor]
        except KeyError:
            raise ValueError(
                f"{neighbor.name} is not a neighbour of a {self.shape.name} cell"
            ) from None
        return x + dx, y + dy

    def neighbor_order(self, diagonal: bool = False) -> list[CellNeighbor]:
        """Directions searched from each cell, sides first, then corners.

        Half-offset square maps have no search directions.
        """
        if self.shape is TileShape.SQUARE:
            return list(_SQUARE_ORDER + (_SQUARE_DIAGONALS if diagonal else ()))
        if self.shape is TileShape.ISOMETRIC:
            return list(_ISO_ORDER + (_ISO_DIAGONALS if diagonal else ()))
        if self.shape is TileShape.HEXAGON:
            if self.offset_axis is OffsetAxis.HORIZONTAL:
                return list(_HEX_HORIZONTAL_ORDER)
            return list(_HEX_VERTICAL_ORDER)
        return []