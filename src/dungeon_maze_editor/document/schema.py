"""JSON schema of persisted world structure documents."""

from ..world.data_model import CellSpecial, CellWall

CELL_WALL_NAMES = [w.value for w in CellWall]
CELL_SPECIAL_NAMES = [s.value for s in CellSpecial]

_WALL = {"type": "string", "enum": CELL_WALL_NAMES}
_FLAG = {"type": "boolean"}

CELL_SCHEMA = {
    "type": "object",
    "properties": {
        "wall_top": _WALL,
        "wall_bottom": _WALL,
        "wall_left": _WALL,
        "wall_right": _WALL,
        "floor": _WALL,
        "ceiling": _WALL,
        "door_top": _FLAG,
        "door_bottom": _FLAG,
        "door_left": _FLAG,
        "door_right": _FLAG,
        "window_top": _FLAG,
        "window_bottom": _FLAG,
        "window_left": _FLAG,
        "window_right": _FLAG,
        "special": {"type": "string", "enum": CELL_SPECIAL_NAMES},
    },
    "required": [
        "wall_top", "wall_bottom", "wall_left", "wall_right",
        "floor", "ceiling",
        "door_top", "door_bottom", "door_left", "door_right",
        "window_top", "window_bottom", "window_left", "window_right",
        "special",
    ],
}

CHUNK_SCHEMA = {
    "type": "object",
    "properties": {
        "x": {"type": "integer"},
        "y": {"type": "integer"},
        "z": {"type": "integer"},
        "cells": {
            "type": "array",
            "items": {"type": "array", "items": CELL_SCHEMA},
        },
        "world_structure": {"type": "string"},
    },
    "required": ["x", "y", "z", "cells", "world_structure"],
}

WORLD_STRUCTURE_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "chunks": {"type": "array", "items": CHUNK_SCHEMA},
    },
    "required": ["chunks"],
}
