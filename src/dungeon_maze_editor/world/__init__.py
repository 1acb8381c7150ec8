"""
World structure model and editing engine.

Provides the immutable chunk/cell data model, the layer layout used by the
grid canvas, the update protocol every edit goes through, and the undo
history.
"""

from .data_model import (
    CellWall,
    CellSpecial,
    Side,
    Cell,
    ChunkCoord,
    Chunk,
    WorldStructure,
    WorldStructureError,
    DuplicateChunkError,
    ChunkNotFoundError,
    OriginChunkError,
    new_cell,
    new_chunk,
    new_world_structure,
    find_origin_chunk,
)
from .grid_layout import (
    EmptySlot,
    compute_radius,
    compute_y_range,
    layer_choices,
    lay_out_layer,
)
from .history import Edit, EditHistory

__all__ = [
    'CellWall',
    'CellSpecial',
    'Side',
    'Cell',
    'ChunkCoord',
    'Chunk',
    'WorldStructure',
    'WorldStructureError',
    'DuplicateChunkError',
    'ChunkNotFoundError',
    'OriginChunkError',
    'new_cell',
    'new_chunk',
    'new_world_structure',
    'find_origin_chunk',
    'EmptySlot',
    'compute_radius',
    'compute_y_range',
    'layer_choices',
    'lay_out_layer',
    'Edit',
    'EditHistory',
]
