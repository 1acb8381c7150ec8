"""
Data model for world structures.

Defines the core data structures of the editor:
- CellWall: Solidity of one cell face (None, Solid, door gap, window gap)
- CellSpecial: The single special object occupying a cell
- Side: The four side walls of a cell (Top, Bottom, Left, Right)
- Cell: The atomic editable unit (walls, floor, ceiling, doors, windows, special)
- ChunkCoord: Integer chunk-grid position (x, y, z)
- Chunk: A GRID_SIZE x GRID_SIZE grid of cells at a chunk coordinate
- WorldStructure: Coordinate-unique collection of chunks

All values are immutable. Edits derive new values (see updates.py) and leave
the originals untouched, so a previous WorldStructure stays valid for undo.

Cell grids are indexed [row][column] where the row follows Z and the column
follows X inside the chunk.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from ..constants import GRID_SIZE, NO_WORLD_STRUCTURE


class WorldStructureError(Exception):
    """Base class for errors raised by world structure operations."""


class DuplicateChunkError(WorldStructureError):
    """Raised when a chunk would be inserted at an occupied coordinate."""

    def __init__(self, coord: 'ChunkCoord'):
        self.coord = coord
        super().__init__(f"A chunk already exists at {coord}")


class ChunkNotFoundError(WorldStructureError):
    """Raised when an operation addresses a coordinate with no chunk."""

    def __init__(self, coord: 'ChunkCoord'):
        self.coord = coord
        super().__init__(f"No chunk at {coord}")


class OriginChunkError(WorldStructureError):
    """Raised when a structure does not have exactly one origin chunk."""

    def __init__(self, name: str, count: int):
        self.name = name
        self.count = count
        super().__init__(
            f"Expected exactly one origin chunk for '{name}', found {count}"
        )


class CellWall(Enum):
    """State of a wall-like face (side wall, floor or ceiling)."""
    NONE = "None"
    SOLID = "Solid"
    SOLID_WITH_DOOR_GAP = "SolidWithDoorGap"
    SOLID_WITH_WINDOW_GAP = "SolidWithWindowGap"

    def __str__(self) -> str:
        return self.value


class CellSpecial(Enum):
    """Special object placed in a cell. At most one per cell."""
    NONE = "None"
    CHAIR = "Chair"
    TREASURE_CHEST = "TreasureChest"
    STAIRCASE = "Staircase"
    STAIRS = "Stairs"

    def __str__(self) -> str:
        return self.value


class Side(Enum):
    """Side wall of a cell."""
    TOP = "Top"
    BOTTOM = "Bottom"
    LEFT = "Left"
    RIGHT = "Right"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Cell:
    """A single cell of a chunk.

    Door and window flags are independent of the wall state on the same side:
    a door may be flagged on a side whose wall is NONE.
    """
    wall_top: CellWall = CellWall.NONE
    wall_bottom: CellWall = CellWall.NONE
    wall_left: CellWall = CellWall.NONE
    wall_right: CellWall = CellWall.NONE
    floor: CellWall = CellWall.NONE
    ceiling: CellWall = CellWall.NONE
    door_top: bool = False
    door_bottom: bool = False
    door_left: bool = False
    door_right: bool = False
    window_top: bool = False
    window_bottom: bool = False
    window_left: bool = False
    window_right: bool = False
    special: CellSpecial = CellSpecial.NONE

    def wall(self, side: Side) -> CellWall:
        return SIDE_FIELDS[side].wall(self)

    def door(self, side: Side) -> bool:
        return SIDE_FIELDS[side].door(self)

    def window(self, side: Side) -> bool:
        return SIDE_FIELDS[side].window(self)

    def with_wall(self, side: Side, state: CellWall) -> 'Cell':
        return SIDE_FIELDS[side].with_wall(self, state)

    def with_door(self, side: Side, flag: bool) -> 'Cell':
        return SIDE_FIELDS[side].with_door(self, flag)

    def with_window(self, side: Side, flag: bool) -> 'Cell':
        return SIDE_FIELDS[side].with_window(self, flag)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the persisted cell shape (enums as tag names)."""
        return {
            'wall_top': self.wall_top.value,
            'wall_bottom': self.wall_bottom.value,
            'wall_left': self.wall_left.value,
            'wall_right': self.wall_right.value,
            'floor': self.floor.value,
            'ceiling': self.ceiling.value,
            'door_top': self.door_top,
            'door_bottom': self.door_bottom,
            'door_left': self.door_left,
            'door_right': self.door_right,
            'window_top': self.window_top,
            'window_bottom': self.window_bottom,
            'window_left': self.window_left,
            'window_right': self.window_right,
            'special': self.special.value,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'Cell':
        """Create from a dictionary that already passed schema validation."""
        return Cell(
            wall_top=CellWall(data['wall_top']),
            wall_bottom=CellWall(data['wall_bottom']),
            wall_left=CellWall(data['wall_left']),
            wall_right=CellWall(data['wall_right']),
            floor=CellWall(data['floor']),
            ceiling=CellWall(data['ceiling']),
            door_top=data['door_top'],
            door_bottom=data['door_bottom'],
            door_left=data['door_left'],
            door_right=data['door_right'],
            window_top=data['window_top'],
            window_bottom=data['window_bottom'],
            window_left=data['window_left'],
            window_right=data['window_right'],
            special=CellSpecial(data['special']),
        )


@dataclass(frozen=True)
class SideFields:
    """Accessor/mutator pairs for the wall, door and window of one side."""
    wall: Callable[[Cell], CellWall]
    with_wall: Callable[[Cell, CellWall], Cell]
    door: Callable[[Cell], bool]
    with_door: Callable[[Cell, bool], Cell]
    window: Callable[[Cell], bool]
    with_window: Callable[[Cell, bool], Cell]


SIDE_FIELDS: Dict[Side, SideFields] = {
    Side.TOP: SideFields(
        wall=lambda c: c.wall_top,
        with_wall=lambda c, v: replace(c, wall_top=v),
        door=lambda c: c.door_top,
        with_door=lambda c, v: replace(c, door_top=v),
        window=lambda c: c.window_top,
        with_window=lambda c, v: replace(c, window_top=v),
    ),
    Side.BOTTOM: SideFields(
        wall=lambda c: c.wall_bottom,
        with_wall=lambda c, v: replace(c, wall_bottom=v),
        door=lambda c: c.door_bottom,
        with_door=lambda c, v: replace(c, door_bottom=v),
        window=lambda c: c.window_bottom,
        with_window=lambda c, v: replace(c, window_bottom=v),
    ),
    Side.LEFT: SideFields(
        wall=lambda c: c.wall_left,
        with_wall=lambda c, v: replace(c, wall_left=v),
        door=lambda c: c.door_left,
        with_door=lambda c, v: replace(c, door_left=v),
        window=lambda c: c.window_left,
        with_window=lambda c, v: replace(c, window_left=v),
    ),
    Side.RIGHT: SideFields(
        wall=lambda c: c.wall_right,
        with_wall=lambda c, v: replace(c, wall_right=v),
        door=lambda c: c.door_right,
        with_door=lambda c, v: replace(c, door_right=v),
        window=lambda c: c.window_right,
        with_window=lambda c, v: replace(c, window_right=v),
    ),
}


def new_cell() -> Cell:
    """Create a default cell: no walls, no doors or windows, no special."""
    return Cell()


@dataclass(frozen=True)
class ChunkCoord:
    """Chunk-grid coordinate (one unit = one chunk)."""
    x: int
    y: int
    z: int

    def offset(self, dx: int = 0, dy: int = 0, dz: int = 0) -> 'ChunkCoord':
        return ChunkCoord(self.x + dx, self.y + dy, self.z + dz)

    def __str__(self) -> str:
        return f"({self.x}, {self.y}, {self.z})"


CellGrid = Tuple[Tuple[Cell, ...], ...]


def _default_grid() -> CellGrid:
    return tuple(tuple(new_cell() for _ in range(GRID_SIZE)) for _ in range(GRID_SIZE))


@dataclass(frozen=True)
class Chunk:
    """A grid of cells anchored at an integer chunk coordinate.

    ``world_structure`` names the structure this chunk is the origin chunk of,
    or NO_WORLD_STRUCTURE. It is a label only and is never used for lookup
    or ownership.
    """
    x: int
    y: int
    z: int
    cells: CellGrid = field(default_factory=_default_grid)
    world_structure: str = NO_WORLD_STRUCTURE

    @property
    def coord(self) -> ChunkCoord:
        return ChunkCoord(self.x, self.y, self.z)

    @property
    def is_well_formed(self) -> bool:
        """True when the cell grid is exactly GRID_SIZE x GRID_SIZE."""
        return len(self.cells) == GRID_SIZE and all(
            len(row) == GRID_SIZE for row in self.cells
        )

    @property
    def is_origin(self) -> bool:
        return self.world_structure != NO_WORLD_STRUCTURE

    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def iter_cells(self) -> Iterator[Tuple[int, int, Cell]]:
        """Yield (row, col, cell) for every cell in row-major order."""
        for row_index, row in enumerate(self.cells):
            for col_index, cell in enumerate(row):
                yield row_index, col_index, cell

    def map_cells(self, transform: Callable[[Cell], Cell]) -> 'Chunk':
        """Return a copy with ``transform`` applied to every cell."""
        cells = tuple(tuple(transform(c) for c in row) for row in self.cells)
        return replace(self, cells=cells)

    def with_cell(self, row: int, col: int,
                  transform: Callable[[Cell], Cell]) -> 'Chunk':
        """Return a copy where only the cell at (row, col) is transformed.

        Rows other than ``row`` are shared with this chunk.
        """
        if not (0 <= row < len(self.cells) and 0 <= col < len(self.cells[row])):
            raise IndexError(f"Cell ({row}, {col}) is outside chunk {self.coord}")
        cells = tuple(
            tuple(transform(c) if ci == col else c for ci, c in enumerate(r))
            if ri == row else r
            for ri, r in enumerate(self.cells)
        )
        return replace(self, cells=cells)

    def with_world_structure(self, name: str) -> 'Chunk':
        if name == self.world_structure:
            return self
        return replace(self, world_structure=name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'x': self.x,
            'y': self.y,
            'z': self.z,
            'cells': [[c.to_dict() for c in row] for row in self.cells],
            'world_structure': self.world_structure,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'Chunk':
        """Create from a validated dictionary. The grid shape is kept as-is."""
        return Chunk(
            x=int(data['x']),
            y=int(data['y']),
            z=int(data['z']),
            cells=tuple(
                tuple(Cell.from_dict(c) for c in row) for row in data['cells']
            ),
            world_structure=data['world_structure'],
        )


def new_chunk(x: int, y: int, z: int) -> Chunk:
    """Create a chunk with a default-filled GRID_SIZE x GRID_SIZE grid."""
    return Chunk(x=x, y=y, z=z)


@dataclass(frozen=True)
class WorldStructure:
    """Flat collection of chunks, each uniquely addressed by coordinate.

    Uniqueness is maintained by the insertion operations, not by an index.
    Lookups scan the collection.
    """
    chunks: Tuple[Chunk, ...] = ()

    def __len__(self) -> int:
        return len(self.chunks)

    def __iter__(self) -> Iterator[Chunk]:
        return iter(self.chunks)

    @property
    def is_empty(self) -> bool:
        return not self.chunks

    def chunk_at(self, coord: ChunkCoord) -> Optional[Chunk]:
        """Get the chunk at the given coordinate, if any."""
        for chunk in self.chunks:
            if chunk.x == coord.x and chunk.y == coord.y and chunk.z == coord.z:
                return chunk
        return None

    def has_chunk_at(self, coord: ChunkCoord) -> bool:
        return self.chunk_at(coord) is not None

    def coordinates(self) -> List[ChunkCoord]:
        return [chunk.coord for chunk in self.chunks]

    def duplicate_coordinates(self) -> List[ChunkCoord]:
        """Coordinates claimed by more than one chunk, in first-seen order."""
        seen = set()
        duplicates: List[ChunkCoord] = []
        for coord in self.coordinates():
            if coord in seen and coord not in duplicates:
                duplicates.append(coord)
            seen.add(coord)
        return duplicates

    def origin_chunks(self, name: Optional[str] = None) -> List[Chunk]:
        """Chunks labelled as origin chunk (of ``name``, or of any structure)."""
        if name is None:
            return [c for c in self.chunks if c.is_origin]
        return [c for c in self.chunks if c.world_structure == name]

    def with_chunks(self, chunks) -> 'WorldStructure':
        return replace(self, chunks=tuple(chunks))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the persisted document shape."""
        return {'chunks': [chunk.to_dict() for chunk in self.chunks]}

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'WorldStructure':
        return WorldStructure(
            chunks=tuple(Chunk.from_dict(c) for c in data.get('chunks', []))
        )


def new_world_structure() -> WorldStructure:
    """Create an empty world structure."""
    return WorldStructure()


def find_origin_chunk(structure: WorldStructure, name: str) -> Chunk:
    """Return the single origin chunk of ``name``.

    Raises:
        OriginChunkError: If zero or several chunks claim ``name``.
    """
    matches = structure.origin_chunks(name)
    if len(matches) != 1:
        raise OriginChunkError(name, len(matches))
    return matches[0]
