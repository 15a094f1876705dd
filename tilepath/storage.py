"""Conversion of search grids to plain records, and their configuration files."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

from .config import ConfigError, ConfigFile
from .types import Coord, NodeData, TileInfo, TileShape

TILESET_SECTION = "tileset_data"

_SECTIONS = {
    TileShape.SQUARE: "square",
    TileShape.ISOMETRIC: "iso",
    TileShape.HEXAGON: "hex",
}


def section_for_shape(shape: TileShape | int) -> str:
    """Configuration section under which maps of the given cell shape are kept.

    Shapes without a section of their own map to the unnamed section "".
    """
    return _SECTIONS.get(TileShape(shape), "")


def _coord(value: Any) -> Coord:
    x, y = value
    return int(x), int(y)


def grid_to_records(grid: Iterable[Iterable[NodeData]]) -> list[list[dict[str, Any]]]:
    """Turn columns of nodes into nested lists of plain dictionaries."""
    records: list[list[dict[str, Any]]] = []
    for x, column in enumerate(grid):
        records.append(
            [
                {
                    "coordinates": (x, y),
                    "parent": _coord(node.parent),
                    "neighbors": [_coord(n) for n in node.neighbors],
                    "cost": float(node.cost),
                    "distance_to": float(node.distance_to),
                    "state": bool(node.reachable),
                    "label": float(node.label),
                }
                for y, node in enumerate(column)
            ]
        )
    return records


def grid_from_records(records: Iterable[Iterable[dict[str, Any]]]) -> list[list[NodeData]]:
    """Rebuild columns of nodes from records made by :func:`grid_to_records`.

    Raises ValueError if the columns differ in length and KeyError if a record
    lacks a field.
    """
    columns = [
        [
            NodeData(
                coordinates=_coord(record["coordinates"]),
                parent=_coord(record["parent"]),
                neighbors=[_coord(n) for n in record["neighbors"]],
                cost=float(record["cost"]),
                distance_to=float(record["distance_to"]),
                label=float(record["label"]),
                reachable=bool(record["state"]),
            )
            for record in column
        ]
        for column in records
    ]
    if len({len(column) for column in columns}) > 1:
        raise ValueError("columns of the grid differ in length")
    return columns


def save_records(
    records: list[list[dict[str, Any]]], path: str | Path, section: str, name: str
) -> None:
    """Write records to a configuration file under ``section`` and ``name``.

    Raises ValueError when there is nothing to save.
    """
    if not records or not any(records):
        raise ValueError("no data to save")
    config = ConfigFile()
    config.set_value(section, name, records)
    config.save(path)


def load_records(path: str | Path, section: str, name: str) -> list[list[dict[str, Any]]]:
    """Read records stored under ``section`` and ``name`` of a configuration file.

    Raises KeyError if they are missing and ConfigError if they are not a list.
    """
    config = ConfigFile()
    config.load(path)
    data = config.get_value(section, name)
    if not isinstance(data, list):
        raise ConfigError(f"value {name!r} in section {section!r} is not a list")
    return data


def _tile_key(section: str) -> Coord:
    parts = section.split(",")
    if len(parts) < 2:
        raise ConfigError(f"tile section {section!r} is not of the form 'x,y'")
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        raise ConfigError(f"tile section {section!r} is not of the form 'x,y'") from None


def load_tileset(path: str | Path) -> dict[Coord, TileInfo]:
    """Read tile variants from a tileset file, keyed by atlas coordinates.

    Every section except ``tileset_data`` names the atlas coordinates "x,y"
    of one tile and holds its name, cost and reachability.
    """
    config = ConfigFile()
    config.load(path)
    tiles: dict[Coord, TileInfo] = {}
    for section in config.sections():
        if section == TILESET_SECTION:
            continue
        tiles[_tile_key(section)] = TileInfo(
            name=str(config.get_value(section, "tile_name", "")),
            cost=int(config.get_value(section, "tile_cost", 0)),
            reachable=bool(config.get_value(section, "reachable_state", False)),
        )
    return tiles