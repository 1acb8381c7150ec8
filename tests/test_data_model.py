"""Tests for the world structure data model."""

import dataclasses

import pytest

from dungeon_maze_editor.constants import GRID_SIZE, NO_WORLD_STRUCTURE
from dungeon_maze_editor.world.data_model import (
    Cell, CellSpecial, CellWall, Chunk, ChunkCoord, OriginChunkError, Side,
    WorldStructure, find_origin_chunk, new_cell, new_chunk, new_world_structure,
)


def test_new_cell_defaults():
    cell = new_cell()
    for side in Side:
        assert cell.wall(side) == CellWall.NONE
        assert cell.door(side) is False
        assert cell.window(side) is False
    assert cell.floor == CellWall.NONE
    assert cell.ceiling == CellWall.NONE
    assert cell.special == CellSpecial.NONE


def test_new_chunk_shape_and_label():
    chunk = new_chunk(3, -1, 2)
    assert (chunk.x, chunk.y, chunk.z) == (3, -1, 2)
    assert len(chunk.cells) == GRID_SIZE
    assert all(len(row) == GRID_SIZE for row in chunk.cells)
    assert all(cell == new_cell() for _, _, cell in chunk.iter_cells())
    assert chunk.world_structure == NO_WORLD_STRUCTURE
    assert chunk.is_well_formed
    assert not chunk.is_origin


def test_new_world_structure_is_empty():
    structure = new_world_structure()
    assert structure.is_empty
    assert len(structure) == 0


def test_values_are_immutable():
    cell = new_cell()
    with pytest.raises(dataclasses.FrozenInstanceError):
        cell.floor = CellWall.SOLID
    chunk = new_chunk(0, 0, 0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        chunk.x = 1


def test_side_accessors_address_their_own_fields():
    cell = new_cell().with_wall(Side.LEFT, CellWall.SOLID_WITH_DOOR_GAP)
    assert cell.wall_left == CellWall.SOLID_WITH_DOOR_GAP
    assert cell.wall_right == CellWall.NONE

    cell = cell.with_door(Side.BOTTOM, True).with_window(Side.RIGHT, True)
    assert cell.door_bottom and cell.window_right
    assert not cell.door_top and not cell.window_left


def test_door_flag_is_independent_of_wall_state():
    cell = new_cell().with_door(Side.TOP, True)
    assert cell.door_top is True
    assert cell.wall_top == CellWall.NONE


def test_cell_dict_uses_tag_names():
    cell = Cell(wall_top=CellWall.SOLID_WITH_WINDOW_GAP, special=CellSpecial.TREASURE_CHEST,
                door_left=True)
    data = cell.to_dict()
    assert data['wall_top'] == "SolidWithWindowGap"
    assert data['special'] == "TreasureChest"
    assert data['door_left'] is True
    assert len(data) == 15
    assert Cell.from_dict(data) == cell


def test_chunk_with_cell_changes_only_that_cell():
    chunk = new_chunk(0, 0, 0)
    changed = chunk.with_cell(1, 2, lambda c: dataclasses.replace(c, special=CellSpecial.CHAIR))
    assert changed.cell(1, 2).special == CellSpecial.CHAIR
    for row, col, cell in changed.iter_cells():
        if (row, col) != (1, 2):
            assert cell == chunk.cell(row, col)
    # Untouched rows are shared
    assert changed.cells[0] is chunk.cells[0]
    assert chunk.cell(1, 2).special == CellSpecial.NONE


def test_chunk_with_cell_out_of_range():
    with pytest.raises(IndexError):
        new_chunk(0, 0, 0).with_cell(GRID_SIZE, 0, lambda c: c)


def test_with_world_structure_returns_same_chunk_when_unchanged():
    chunk = new_chunk(0, 0, 0)
    assert chunk.with_world_structure(NO_WORLD_STRUCTURE) is chunk
    labelled = chunk.with_world_structure("crypt")
    assert labelled.world_structure == "crypt"
    assert labelled.is_origin


def test_chunk_from_dict_keeps_grid_shape():
    data = new_chunk(1, 2, 3).to_dict()
    data['cells'] = data['cells'][:2]
    chunk = Chunk.from_dict(data)
    assert chunk.coord == ChunkCoord(1, 2, 3)
    assert len(chunk.cells) == 2
    assert not chunk.is_well_formed


def test_chunk_at_and_coordinates(small_structure):
    assert small_structure.chunk_at(ChunkCoord(-2, 0, 1)) is small_structure.chunks[2]
    assert small_structure.chunk_at(ChunkCoord(-2, 1, 1)) is None
    assert small_structure.has_chunk_at(ChunkCoord(0, 1, 0))
    assert small_structure.coordinates()[0] == ChunkCoord(0, 0, 0)


def test_duplicate_coordinates():
    structure = WorldStructure(chunks=(
        new_chunk(0, 0, 0), new_chunk(1, 0, 0), new_chunk(0, 0, 0), new_chunk(0, 0, 0),
    ))
    assert structure.duplicate_coordinates() == [ChunkCoord(0, 0, 0)]


def test_structure_round_trips_through_dict(small_structure):
    assert WorldStructure.from_dict(small_structure.to_dict()) == small_structure


def test_find_origin_chunk(small_structure):
    assert find_origin_chunk(small_structure, "tower").coord == ChunkCoord(0, 0, 0)


def test_find_origin_chunk_requires_exactly_one(small_structure):
    with pytest.raises(OriginChunkError) as exc:
        find_origin_chunk(small_structure, "crypt")
    assert exc.value.count == 0

    doubled = small_structure.with_chunks(
        c.with_world_structure("tower") for c in small_structure.chunks
    )
    with pytest.raises(OriginChunkError) as exc:
        find_origin_chunk(doubled, "tower")
    assert exc.value.count == len(small_structure)
