"""
Layer layout for the chunk grid.

Turns the flat, coordinate-addressed chunk collection into the square window
shown for one horizontal layer (one Y value):
- compute_radius(): half-width of the square XZ window
- compute_y_range() / layer_choices(): layers offered by the layer selector
- lay_out_layer(): matrix of Chunk or EmptySlot placeholders

Window orientation: row index is ``z + radius`` and column index is
``x + radius``, so X grows left to right and the top row is ``z = -radius``.

Also provides the insertion operations used by the layout (extend the Y
range, fill an EmptySlot, add a neighbour at the window edge). Like the
updates in updates.py they return a new WorldStructure.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Tuple, Union

from .data_model import (
    Chunk, ChunkCoord, DuplicateChunkError, Side, WorldStructure, new_chunk,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmptySlot:
    """Placeholder for a window position with no chunk. Never persisted."""
    x: int
    z: int

    def coord(self, y: int) -> ChunkCoord:
        return ChunkCoord(self.x, y, self.z)


LayerSlot = Union[Chunk, EmptySlot]

# Chunk-grid step for a neighbour on each side of the window
# (the top of the window is -Z, the left is -X)
NEIGHBOUR_OFFSETS: Dict[Side, Tuple[int, int]] = {
    Side.TOP: (0, -1),
    Side.BOTTOM: (0, 1),
    Side.LEFT: (-1, 0),
    Side.RIGHT: (1, 0),
}


def compute_radius(structure: WorldStructure) -> int:
    """Largest absolute X or Z over all chunks, 0 for an empty structure."""
    radius = 0
    for chunk in structure.chunks:
        radius = max(radius, abs(chunk.x), abs(chunk.z))
    return radius


def compute_y_range(structure: WorldStructure) -> Tuple[int, int]:
    """Lowest and highest Y present, ``(0, 0)`` for an empty structure."""
    if structure.is_empty:
        return (0, 0)
    ys = [chunk.y for chunk in structure.chunks]
    return (min(ys), max(ys))


def layer_choices(structure: WorldStructure) -> List[int]:
    """Every layer in the Y range, including layers with no chunks."""
    min_y, max_y = compute_y_range(structure)
    return list(range(min_y, max_y + 1))


def slot_index(radius: int, x: int, z: int) -> Tuple[int, int]:
    """Window (row, column) of the chunk-grid position (x, z)."""
    return (z + radius, x + radius)


def lay_out_layer(structure: WorldStructure, y: int,
                  radius: int) -> List[List[LayerSlot]]:
    """Build the square window of layer ``y``.

    Returns ``2 * radius + 1`` rows (Z from -radius to radius), each holding
    ``2 * radius + 1`` slots (X from -radius to radius). A slot is the chunk
    at ``(x, y, z)`` or an EmptySlot when there is none.
    """
    layer: Dict[Tuple[int, int], Chunk] = {}
    for chunk in structure.chunks:
        if chunk.y == y:
            layer.setdefault((chunk.x, chunk.z), chunk)

    rows: List[List[LayerSlot]] = []
    for z in range(-radius, radius + 1):
        row: List[LayerSlot] = []
        for x in range(-radius, radius + 1):
            chunk = layer.get((x, z))
            row.append(chunk if chunk is not None else EmptySlot(x, z))
        rows.append(row)
    return rows


# ---------------------------------------------------------------
# Insertions
# ---------------------------------------------------------------

def add_chunk(structure: WorldStructure, chunk: Chunk,
              prepend: bool = False) -> WorldStructure:
    """Insert ``chunk`` into the structure.

    Raises:
        DuplicateChunkError: If a chunk already occupies the coordinate.
    """
    if structure.has_chunk_at(chunk.coord):
        raise DuplicateChunkError(chunk.coord)
    logger.debug("Adding chunk at %s", chunk.coord)
    if prepend:
        return structure.with_chunks((chunk,) + structure.chunks)
    return structure.with_chunks(structure.chunks + (chunk,))


def add_chunk_at(structure: WorldStructure, coord: ChunkCoord) -> WorldStructure:
    """Insert a fresh chunk at ``coord`` (the action of an EmptySlot)."""
    return add_chunk(structure, new_chunk(coord.x, coord.y, coord.z))


def extend_down(structure: WorldStructure) -> WorldStructure:
    """Add a fresh chunk at ``(0, min_y - 1, 0)``."""
    min_y, _ = compute_y_range(structure)
    return add_chunk(structure, new_chunk(0, min_y - 1, 0), prepend=True)


def extend_up(structure: WorldStructure) -> WorldStructure:
    """Add a fresh chunk at ``(0, max_y + 1, 0)``."""
    _, max_y = compute_y_range(structure)
    return add_chunk(structure, new_chunk(0, max_y + 1, 0))


def neighbour_coord(coord: ChunkCoord, side: Side) -> ChunkCoord:
    dx, dz = NEIGHBOUR_OFFSETS[side]
    return coord.offset(dx=dx, dz=dz)


def add_neighbour(structure: WorldStructure, coord: ChunkCoord,
                  side: Side) -> WorldStructure:
    """Add a fresh chunk next to ``coord`` on the given window side.

    Chunks added towards -X or -Z go to the front of the collection, the
    others to the back.
    """
    target = neighbour_coord(coord, side)
    prepend = side in (Side.TOP, Side.LEFT)
    return add_chunk(structure, new_chunk(target.x, target.y, target.z),
                     prepend=prepend)
