import os
import sys

import pytest

# Ensure src/ importable when the package is not installed
SRC_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from dungeon_maze_editor.world.data_model import (  # noqa: E402
    CellWall, WorldStructure, new_chunk,
)
from dungeon_maze_editor.world import updates  # noqa: E402


@pytest.fixture
def empty_structure():
    return WorldStructure()


@pytest.fixture
def small_structure():
    """Five chunks over three layers, with the origin chunk of "tower" at (0, 0, 0)."""
    origin = new_chunk(0, 0, 0).with_world_structure("tower")
    return WorldStructure(chunks=(
        origin,
        new_chunk(1, 0, 0),
        new_chunk(-2, 0, 1),
        new_chunk(0, 1, 0),
        new_chunk(0, -1, 3),
    ))


@pytest.fixture
def walled_chunk():
    """Chunk whose every cell has solid side walls and a solid floor."""
    chunk = new_chunk(0, 0, 0)
    chunk = chunk.map_cells(updates.fill_walls(CellWall.SOLID))
    return chunk.map_cells(updates.set_floor(CellWall.SOLID))
