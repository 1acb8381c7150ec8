"""
Immutable update protocol for world structures.

Every edit is expressed as a pure function ``WorldStructure -> WorldStructure``:
- update_chunks(): apply a cell transform to every cell of the selected chunks
- update_cell(): the degenerate case addressing one cell of one chunk
- remove_chunks(): deletions, expressed as a filter
- set_origin_chunk(): whole-structure relabelling in a single pass

Chunks that are not selected are carried over as the same objects. Every
select/filter is a full scan of the chunk collection.

Selectors and cell transforms are small factories so the UI can compose
gestures from them, e.g. ``update_chunks(ws, in_column(2, y=0), set_floor(SOLID))``.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Optional

from ..constants import NO_WORLD_STRUCTURE
from .data_model import (
    Cell, CellSpecial, CellWall, Chunk, ChunkCoord, ChunkNotFoundError, Side,
    WorldStructure,
)

logger = logging.getLogger(__name__)

ChunkPredicate = Callable[[Chunk], bool]
CellTransform = Callable[[Cell], Cell]


# ---------------------------------------------------------------
# Chunk selectors
# ---------------------------------------------------------------

def at(coord: ChunkCoord) -> ChunkPredicate:
    """Select the chunk at an exact coordinate."""
    return lambda ch: ch.x == coord.x and ch.y == coord.y and ch.z == coord.z


def in_column(x: int, y: Optional[int] = None) -> ChunkPredicate:
    """Select every chunk with the given X (optionally only on layer ``y``)."""
    if y is None:
        return lambda ch: ch.x == x
    return lambda ch: ch.x == x and ch.y == y


def in_row(z: int, y: Optional[int] = None) -> ChunkPredicate:
    """Select every chunk with the given Z (optionally only on layer ``y``)."""
    if y is None:
        return lambda ch: ch.z == z
    return lambda ch: ch.z == z and ch.y == y


def everything(chunk: Chunk) -> bool:
    return True


# ---------------------------------------------------------------
# Cell transforms
# ---------------------------------------------------------------

def identity(cell: Cell) -> Cell:
    return cell


def set_wall(side: Side, state: CellWall) -> CellTransform:
    return lambda c: c.with_wall(side, state)


def fill_walls(state: CellWall) -> CellTransform:
    """Set all four side walls to ``state``."""
    return lambda c: replace(
        c, wall_top=state, wall_bottom=state, wall_left=state, wall_right=state,
    )


def toggle_door(side: Side) -> CellTransform:
    """Flip the door flag on ``side``. The wall state is left untouched."""
    return lambda c: c.with_door(side, not c.door(side))


def toggle_window(side: Side) -> CellTransform:
    """Flip the window flag on ``side``. The wall state is left untouched."""
    return lambda c: c.with_window(side, not c.window(side))


def set_floor(state: CellWall) -> CellTransform:
    return lambda c: replace(c, floor=state)


def set_ceiling(state: CellWall) -> CellTransform:
    return lambda c: replace(c, ceiling=state)


def toggle_floor() -> CellTransform:
    """Switch the floor between SOLID and NONE."""
    return lambda c: replace(
        c, floor=CellWall.NONE if c.floor == CellWall.SOLID else CellWall.SOLID
    )


def toggle_ceiling() -> CellTransform:
    """Switch the ceiling between SOLID and NONE."""
    return lambda c: replace(
        c, ceiling=CellWall.NONE if c.ceiling == CellWall.SOLID else CellWall.SOLID
    )


def set_special(special: CellSpecial) -> CellTransform:
    """Place ``special`` in the cell, replacing any previous special."""
    return lambda c: replace(c, special=special)


# ---------------------------------------------------------------
# Structure updates
# ---------------------------------------------------------------

def update_chunks(structure: WorldStructure, select: ChunkPredicate,
                  transform: CellTransform) -> WorldStructure:
    """Apply ``transform`` to every cell of every chunk chosen by ``select``."""
    return structure.with_chunks(
        chunk.map_cells(transform) if select(chunk) else chunk
        for chunk in structure.chunks
    )


def update_cell(structure: WorldStructure, coord: ChunkCoord, row: int, col: int,
                transform: CellTransform) -> WorldStructure:
    """Apply ``transform`` to a single cell of the chunk at ``coord``."""
    select = at(coord)
    return structure.with_chunks(
        chunk.with_cell(row, col, transform) if select(chunk) else chunk
        for chunk in structure.chunks
    )


def fill_chunk(structure: WorldStructure, coord: ChunkCoord,
               transform: CellTransform) -> WorldStructure:
    """Apply ``transform`` to every cell of the chunk at ``coord``."""
    return update_chunks(structure, at(coord), transform)


def fill_column(structure: WorldStructure, x: int, transform: CellTransform,
                y: Optional[int] = None) -> WorldStructure:
    return update_chunks(structure, in_column(x, y), transform)


def fill_row(structure: WorldStructure, z: int, transform: CellTransform,
             y: Optional[int] = None) -> WorldStructure:
    return update_chunks(structure, in_row(z, y), transform)


def replace_chunk(structure: WorldStructure, new_chunk: Chunk) -> WorldStructure:
    """Replace the chunk sharing ``new_chunk``'s coordinate.

    The structure is returned unchanged when no chunk has that coordinate.
    """
    select = at(new_chunk.coord)
    return structure.with_chunks(
        new_chunk if select(chunk) else chunk for chunk in structure.chunks
    )


# ---------------------------------------------------------------
# Deletions
# ---------------------------------------------------------------

def remove_chunks(structure: WorldStructure, predicate: ChunkPredicate) -> WorldStructure:
    """Keep every chunk for which ``predicate`` is false."""
    return structure.with_chunks(
        chunk for chunk in structure.chunks if not predicate(chunk)
    )


def delete_chunk(structure: WorldStructure, coord: ChunkCoord) -> WorldStructure:
    return remove_chunks(structure, at(coord))


def clear_column(structure: WorldStructure, x: int,
                 y: Optional[int] = None) -> WorldStructure:
    """Delete every chunk with the given X (on every layer unless ``y`` is set)."""
    return remove_chunks(structure, in_column(x, y))


def clear_row(structure: WorldStructure, z: int,
              y: Optional[int] = None) -> WorldStructure:
    """Delete every chunk with the given Z (on every layer unless ``y`` is set)."""
    return remove_chunks(structure, in_row(z, y))


# ---------------------------------------------------------------
# Origin chunk
# ---------------------------------------------------------------

def set_origin_chunk(structure: WorldStructure, coord: ChunkCoord,
                     name: str) -> WorldStructure:
    """Make the chunk at ``coord`` the single origin chunk named ``name``.

    Touches every chunk: the match is labelled ``name`` and every other
    chunk is relabelled NO_WORLD_STRUCTURE in the same pass. Chunks whose
    label does not change are carried over as the same objects.

    Raises:
        ChunkNotFoundError: If there is no chunk at ``coord``.
    """
    select = at(coord)
    if not any(select(chunk) for chunk in structure.chunks):
        raise ChunkNotFoundError(coord)
    logger.debug("Origin chunk of '%s' set to %s", name, coord)
    return structure.with_chunks(
        chunk.with_world_structure(name if select(chunk) else NO_WORLD_STRUCTURE)
        for chunk in structure.chunks
    )


def rename_origin(structure: WorldStructure, old_name: str,
                  new_name: str) -> WorldStructure:
    """Relabel the origin chunk(s) of ``old_name`` as ``new_name``."""
    return structure.with_chunks(
        chunk.with_world_structure(new_name) if chunk.world_structure == old_name else chunk
        for chunk in structure.chunks
    )
