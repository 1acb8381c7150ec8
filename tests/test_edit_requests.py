"""Tests for the requests behind the column and row heading menus."""

import pytest

from dungeon_maze_editor.ui.edit_requests import heading_requests
from dungeon_maze_editor.world.data_model import CellWall, ChunkCoord, WorldStructure, new_chunk


@pytest.fixture
def stacked_structure():
    """Chunks at X = 0 on three layers, plus one at X = 1 and one at Z = 2."""
    return WorldStructure(chunks=(
        new_chunk(0, -1, 0), new_chunk(0, 0, 0), new_chunk(0, 2, 0),
        new_chunk(1, 0, 0), new_chunk(1, 1, 2),
    ))


def _run(structure, label, axis, value):
    requests = dict(heading_requests(axis, value))
    request = requests[label]
    return request.operation(structure, *request.args)


def test_heading_menu_entries():
    labels = [text for text, _ in heading_requests('x', 0)]
    assert labels == ["Clear", "All Ceilings", "Clear Ceilings", "All Floors", "Clear Floors"]


def test_clear_column_removes_it_on_every_layer(stacked_structure):
    cleared = _run(stacked_structure, "Clear", 'x', 0)
    assert cleared.coordinates() == [ChunkCoord(1, 0, 0), ChunkCoord(1, 1, 2)]


def test_clear_row_removes_it_on_every_layer(stacked_structure):
    cleared = _run(stacked_structure, "Clear", 'z', 0)
    assert cleared.coordinates() == [ChunkCoord(1, 1, 2)]


def test_fill_column_reaches_every_layer(stacked_structure):
    filled = _run(stacked_structure, "All Floors", 'x', 0)
    floors = {c.coord: c.cell(0, 0).floor for c in filled.chunks}
    assert floors == {
        ChunkCoord(0, -1, 0): CellWall.SOLID,
        ChunkCoord(0, 0, 0): CellWall.SOLID,
        ChunkCoord(0, 2, 0): CellWall.SOLID,
        ChunkCoord(1, 0, 0): CellWall.NONE,
        ChunkCoord(1, 1, 2): CellWall.NONE,
    }


def test_fill_row_ceilings_then_clear(stacked_structure):
    filled = _run(stacked_structure, "All Ceilings", 'z', 2)
    assert filled.chunk_at(ChunkCoord(1, 1, 2)).cell(3, 3).ceiling == CellWall.SOLID
    cleared = _run(filled, "Clear Ceilings", 'z', 2)
    assert cleared == stacked_structure


def test_description_names_the_heading():
    _, request = heading_requests('z', -3)[0]
    assert request.description == "Clear (Z: -3, all layers)"
