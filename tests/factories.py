"""Builders for persisted documents used across the tests."""

import json

from dungeon_maze_editor.world.data_model import new_cell


def cell_dict(**overrides):
    """Persisted form of a default cell with some fields overridden."""
    data = new_cell().to_dict()
    data.update(overrides)
    return data


def chunk_dict(x=0, y=0, z=0, rows=4, cols=4, world_structure="None", cell=None):
    """Persisted chunk with a rows x cols grid of identical cells."""
    cell = cell if cell is not None else cell_dict()
    return {
        "x": x,
        "y": y,
        "z": z,
        "cells": [[dict(cell) for _ in range(cols)] for _ in range(rows)],
        "world_structure": world_structure,
    }


def document_text(*chunks):
    return json.dumps({"chunks": list(chunks)})
