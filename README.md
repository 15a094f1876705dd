# tilepath

Pathfinding on 2D tile maps. You describe a tile map cell by cell with atlas
coordinates. A tileset configuration gives each atlas tile a movement cost and
says whether units can stand on it. From these, `tilepath` builds a navigation
grid and searches it with A*, Dijkstra or a dynamic-programming sweep.

Square, isometric and hexagonal layouts are supported. Hex maps can be offset
horizontally or vertically. Square and isometric maps can also allow diagonal
moves. Half-offset square maps have no search directions, so no cell on them
has neighbours.

## Installation

```
pip install tilepath
```

It needs Python 3.10 or later and has no runtime dependencies.

## Tileset configuration

Each section names one atlas tile as `x,y`. The one exception is a section
called `tileset_data`, which is skipped. Missing keys default to an empty name,
a cost of 0 and unreachable. A section name that is not of the form `x,y`
raises `tilepath.config.ConfigError`.

```
[tileset_data]

[0,0]
tile_name="wall"
tile_cost=0
reachable_state=false

[1,0]
tile_name="grass"
tile_cost=1
reachable_state=true

[2,0]
tile_name="swamp"
tile_cost=5
reachable_state=true
```

## Usage

```python
from tilepath.pathfinder import Pathfinder
from tilepath.tilemap import TileMap
from tilepath.types import Algorithm, Heuristic, TileShape, OffsetAxis

tilemap = TileMap(TileShape.SQUARE, OffsetAxis.HORIZONTAL, "level_1")
for x in range(5):
    for y in range(5):
        tilemap.set_cell((x, y), (1, 0))
tilemap.set_cell((2, 1), (0, 0))  # a wall

finder = Pathfinder(
    tilemap,
    map_size=(5, 5),
    algorithm=Algorithm.ASTAR,
    heuristic=Heuristic.EUCLID,
    diagonal=False,
    weight=1,
)
finder.load_tileset_cfg("tileset.cfg")

paths = finder.find_paths([(0, 0)], [(4, 4)], debug=False)
```

`find_paths` returns a list with one path for each start and end pair. A path
is a list of `(x, y)` tuples. A* and Dijkstra return the path from the end back
to the start. Dynamic programming returns it from the start to the end. The
starts and ends are paired in one of four ways:

* one start and one end;
* many starts and one end;
* one start and many ends;
* many starts and as many ends, paired in order.

With `debug=True` the kind of pairing is printed.

`find_paths` raises `PathfinderError` in three cases:

* no tile data has been loaded;
* a start lies outside the map;
* there are many starts and many ends, and their counts differ.

If either list is empty, the result is an empty list. An empty path means no
route was found. A painted cell whose atlas tile is missing from the tile data
raises `KeyError` during preprocessing. Empty cells are unreachable.

The first search builds the grid if it is still empty. It preprocesses the
grid again whenever the tile map's shape has changed since the last call. You
can also call `initialize_map()` and `preprocess()` yourself, for example after
repainting cells.

### Algorithms

* `Algorithm.ASTAR`: best-first search on accumulated cost plus the heuristic.
* `Algorithm.DIJKSTRA`: the same search on accumulated cost alone.
* `Algorithm.DYNAMIC_PROG`: relaxes the whole grid toward one end cell, then
  follows the result from the start. The cost field is reused by later calls
  with the same end, until `preprocess()`, `astar()` or `dijkstra()` runs. A
  path that loops back on itself, or a start that equals the end, gives an
  empty path.

Each search can also be called directly as `finder.astar(start, end)`,
`finder.dijkstra(start, end)` or `finder.dynamic_programming(start, end)`.
After an A* or Dijkstra search, `finder.open_list` and `finder.closed_list`
hold the nodes that were left open and the ones that were closed.

### Heuristics

The `Heuristic` choices are:

* `EUCLID`
* `EUCLID_POW`: the distance raised to `weight`
* `EUCLID_WGHT`: the distance times `weight`
* `EUCLID_EXP`: `h * e^h`
* `MANHATAN`
* `CHEBYSHEV`
* `OCTILE`

`Pathfinder` stores `weight` as an integer. The heuristics can also be called
on their own:

```python
from tilepath.heuristics import heuristic
from tilepath.types import Heuristic

heuristic(Heuristic.MANHATAN, 3, 4, 1)   # 7.0
```

## Saving and loading the preprocessed grid

```python
records = finder.save_to_code()      # nested lists of plain dictionaries
finder.load_from_code(records)

finder.save_to_file("maps", "level_1")   # writes maps/level_1.cfg, returns the path
finder.load_from_file("maps/level_1.cfg")
```

The grid is stored in a section named after the tile shape: `square`, `iso` or
`hex`. The key inside that section is the tile map's name. Saving an empty grid
raises `ValueError`. If the file has no grid for this map, loading raises
`KeyError`.

The lower-level helpers live in two modules:

* `tilepath.storage` has `grid_to_records`, `grid_from_records`,
  `save_records`, `load_records`, `load_tileset` and `section_for_shape`.
* `tilepath.config` has `ConfigFile`, a reader and writer for sectioned
  `key=value` files. Its values can be numbers, strings, booleans, `Vector2i`
  and `Vector2` pairs, arrays and dictionaries.

## What it does not do

`tilepath` is a library only. It has no command-line tool, and it draws
nothing. `TileMap` is an in-memory model of painted cells and their neighbours,
not a renderer or an editor.