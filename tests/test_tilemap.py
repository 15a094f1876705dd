import pytest

from tilepath.tilemap import TileMap
from tilepath.types import CellNeighbor, OffsetAxis, TileShape

OPPOSITE = {
    CellNeighbor.RIGHT_SIDE: CellNeighbor.LEFT_SIDE,
    CellNeighbor.LEFT_SIDE: CellNeighbor.RIGHT_SIDE,
    CellNeighbor.TOP_SIDE: CellNeighbor.BOTTOM_SIDE,
    CellNeighbor.BOTTOM_SIDE: CellNeighbor.TOP_SIDE,
    CellNeighbor.BOTTOM_RIGHT_SIDE: CellNeighbor.TOP_LEFT_SIDE,
    CellNeighbor.TOP_LEFT_SIDE: CellNeighbor.BOTTOM_RIGHT_SIDE,
    CellNeighbor.BOTTOM_LEFT_SIDE: CellNeighbor.TOP_RIGHT_SIDE,
    CellNeighbor.TOP_RIGHT_SIDE: CellNeighbor.BOTTOM_LEFT_SIDE,
    CellNeighbor.BOTTOM_RIGHT_CORNER: CellNeighbor.TOP_LEFT_CORNER,
    CellNeighbor.TOP_LEFT_CORNER: CellNeighbor.BOTTOM_RIGHT_CORNER,
    CellNeighbor.BOTTOM_LEFT_CORNER: CellNeighbor.TOP_RIGHT_CORNER,
    CellNeighbor.TOP_RIGHT_CORNER: CellNeighbor.BOTTOM_LEFT_CORNER,
    CellNeighbor.RIGHT_CORNER: CellNeighbor.LEFT_CORNER,
    CellNeighbor.LEFT_CORNER: CellNeighbor.RIGHT_CORNER,
    CellNeighbor.TOP_CORNER: CellNeighbor.BOTTOM_CORNER,
    CellNeighbor.BOTTOM_CORNER: CellNeighbor.TOP_CORNER,
}


def test_empty_cell_reports_minus_one():
    tilemap = TileMap()
    assert tilemap.cell_atlas_coords((3, 4)) == (-1, -1)


def test_set_and_erase_cell():
    tilemap = TileMap()
    tilemap.set_cell((1, 2), (2, 0))
    tilemap.set_cell((0, 0), (1, 0))
    assert tilemap.cell_atlas_coords((1, 2)) == (2, 0)
    tilemap.erase_cell((1, 2))
    tilemap.erase_cell((9, 9))
    assert tilemap.cell_atlas_coords((1, 2)) == (-1, -1)
    assert tilemap.cell_atlas_coords((0, 0)) == (1, 0)


def test_painting_with_empty_atlas_clears():
    tilemap = TileMap()
    tilemap.set_cell((1, 1), (1, 0))
    tilemap.set_cell((1, 1), (-1, -1))
    assert tilemap.cell_atlas_coords((1, 1)) == (-1, -1)


def test_square_right_side():
    assert TileMap().neighbor_cell((2, 5), CellNeighbor.RIGHT_SIDE) == (3, 5)


def test_square_neighbours_without_diagonal():
    tilemap = TileMap()
    order = tilemap.neighbor_order(False)
    cells = [tilemap.neighbor_cell((5, 5), n) for n in order]
    assert len(set(cells)) == len(order) == 4
    assert all(abs(x - 5) + abs(y - 5) == 1 for x, y in cells)


def test_square_neighbours_with_diagonal():
    tilemap = TileMap()
    order = tilemap.neighbor_order(True)
    cells = [tilemap.neighbor_cell((5, 5), n) for n in order]
    assert len(set(cells)) == len(order) == 8
    assert all(max(abs(x - 5), abs(y - 5)) == 1 for x, y in cells)
    assert order[:4] == tilemap.neighbor_order(False)


def test_square_rejects_iso_corner():
    with pytest.raises(ValueError):
        TileMap().neighbor_cell((0, 0), CellNeighbor.RIGHT_CORNER)


def test_iso_rejects_square_side():
    tilemap = TileMap(TileShape.ISOMETRIC)
    with pytest.raises(ValueError):
        tilemap.neighbor_cell((0, 0), CellNeighbor.RIGHT_SIDE)


def test_hex_horizontal_odd_row_shift():
    tilemap = TileMap(TileShape.HEXAGON, OffsetAxis.HORIZONTAL)
    assert tilemap.neighbor_cell((2, 1), CellNeighbor.BOTTOM_RIGHT_SIDE) == (3, 2)
    assert tilemap.neighbor_cell((2, 2), CellNeighbor.BOTTOM_RIGHT_SIDE) == (2, 3)


@pytest.mark.parametrize(
    "shape,axis,diagonal",
    [
        (TileShape.SQUARE, OffsetAxis.HORIZONTAL, True),
        (TileShape.ISOMETRIC, OffsetAxis.HORIZONTAL, True),
        (TileShape.ISOMETRIC, OffsetAxis.VERTICAL, True),
        (TileShape.HEXAGON, OffsetAxis.HORIZONTAL, False),
        (TileShape.HEXAGON, OffsetAxis.VERTICAL, False),
    ],
)
@pytest.mark.parametrize("origin", [(4, 4), (4, 5), (5, 4), (5, 5)])
def test_opposite_neighbour_returns_to_origin(shape, axis, diagonal, origin):
    tilemap = TileMap(shape, axis)
    for direction in tilemap.neighbor_order(diagonal):
        cell = tilemap.neighbor_cell(origin, direction)
        assert cell != origin
        assert tilemap.neighbor_cell(cell, OPPOSITE[direction]) == origin


@pytest.mark.parametrize("axis", [OffsetAxis.HORIZONTAL, OffsetAxis.VERTICAL])
@pytest.mark.parametrize("origin", [(2, 2), (3, 3), (2, 3)])
def test_hex_has_six_distinct_neighbours(axis, origin):
    tilemap = TileMap(TileShape.HEXAGON, axis)
    order = tilemap.neighbor_order(True)
    cells = {tilemap.neighbor_cell(origin, n) for n in order}
    assert len(order) == 6
    assert len(cells) == 6


def test_half_offset_square_has_no_search_directions():
    tilemap = TileMap(TileShape.HALF_OFFSET_SQUARE)
    assert len(tilemap.neighbor_order(True)) == 0


def test_shape_accepts_plain_integers():
    tilemap = TileMap(3, 1, name="layer")
    assert tilemap.shape is TileShape.HEXAGON
    assert tilemap.offset_axis is OffsetAxis.VERTICAL
    assert tilemap.name == "layer"