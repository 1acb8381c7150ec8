"""Tests for the immutable update protocol."""

import pytest

from dungeon_maze_editor.constants import NO_WORLD_STRUCTURE
from dungeon_maze_editor.world.data_model import (
    CellSpecial, CellWall, ChunkCoord, ChunkNotFoundError, Side, WorldStructure,
    find_origin_chunk, new_cell, new_chunk,
)
from dungeon_maze_editor.world import updates


def test_update_chunks_leaves_unselected_chunks_untouched(small_structure):
    selected = ChunkCoord(1, 0, 0)
    updated = updates.update_chunks(small_structure, updates.at(selected),
                                    updates.set_floor(CellWall.SOLID))
    for before, after in zip(small_structure.chunks, updated.chunks):
        if before.coord == selected:
            assert all(c.floor == CellWall.SOLID for _, _, c in after.iter_cells())
        else:
            assert after is before


def test_update_does_not_mutate_the_input(small_structure):
    snapshot = small_structure.to_dict()
    updates.update_chunks(small_structure, updates.everything,
                          updates.fill_walls(CellWall.SOLID))
    assert small_structure.to_dict() == snapshot


def test_update_cell_touches_a_single_cell(small_structure):
    coord = ChunkCoord(0, 0, 0)
    updated = updates.update_cell(small_structure, coord, 2, 3,
                                  updates.set_special(CellSpecial.STAIRS))
    chunk = updated.chunk_at(coord)
    assert chunk.cell(2, 3).special == CellSpecial.STAIRS
    changed = [(r, c) for r, c, cell in chunk.iter_cells() if cell != new_cell()]
    assert changed == [(2, 3)]
    assert updated.chunks[1:] == small_structure.chunks[1:]


def test_toggle_door_keeps_wall_state():
    cell = updates.set_wall(Side.TOP, CellWall.SOLID)(new_cell())
    toggled = updates.toggle_door(Side.TOP)(cell)
    assert toggled.door_top is True
    assert toggled.wall_top == CellWall.SOLID
    assert updates.toggle_door(Side.TOP)(toggled) == cell

    bare = updates.toggle_door(Side.TOP)(new_cell())
    assert bare.door_top is True
    assert bare.wall_top == CellWall.NONE


def test_toggle_window():
    cell = updates.toggle_window(Side.LEFT)(new_cell())
    assert cell.window_left and not cell.window_right


def test_floor_and_ceiling_toggles():
    cell = updates.toggle_floor()(new_cell())
    assert cell.floor == CellWall.SOLID
    assert updates.toggle_floor()(cell).floor == CellWall.NONE

    # Any non-solid state toggles to solid
    gapped = updates.set_ceiling(CellWall.SOLID_WITH_DOOR_GAP)(new_cell())
    assert updates.toggle_ceiling()(gapped).ceiling == CellWall.SOLID


def test_set_special_replaces_previous_special():
    cell = updates.set_special(CellSpecial.CHAIR)(new_cell())
    cell = updates.set_special(CellSpecial.TREASURE_CHEST)(cell)
    assert cell.special == CellSpecial.TREASURE_CHEST


def test_fill_walls_sets_all_four_sides(walled_chunk):
    for _, _, cell in walled_chunk.iter_cells():
        assert all(cell.wall(side) == CellWall.SOLID for side in Side)
        assert cell.ceiling == CellWall.NONE


def test_fill_chunk(small_structure):
    coord = ChunkCoord(-2, 0, 1)
    updated = updates.fill_chunk(small_structure, coord, updates.set_special(CellSpecial.CHAIR))
    assert all(c.special == CellSpecial.CHAIR for _, _, c in updated.chunk_at(coord).iter_cells())


def test_fill_column_across_layers_or_one_layer():
    structure = WorldStructure(chunks=(
        new_chunk(0, 0, 0), new_chunk(0, 1, 2), new_chunk(1, 0, 0),
    ))
    everywhere = updates.fill_column(structure, 0, updates.set_ceiling(CellWall.SOLID))
    assert [c.cell(0, 0).ceiling for c in everywhere.chunks] == [
        CellWall.SOLID, CellWall.SOLID, CellWall.NONE,
    ]
    one_layer = updates.fill_column(structure, 0, updates.set_ceiling(CellWall.SOLID), y=1)
    assert [c.cell(0, 0).ceiling for c in one_layer.chunks] == [
        CellWall.NONE, CellWall.SOLID, CellWall.NONE,
    ]


def test_fill_row():
    structure = WorldStructure(chunks=(new_chunk(0, 0, 1), new_chunk(3, 0, 1), new_chunk(0, 0, 0)))
    updated = updates.fill_row(structure, 1, updates.set_floor(CellWall.SOLID))
    assert [c.cell(3, 3).floor for c in updated.chunks] == [
        CellWall.SOLID, CellWall.SOLID, CellWall.NONE,
    ]


def test_replace_chunk(small_structure):
    replacement = new_chunk(1, 0, 0).map_cells(updates.set_floor(CellWall.SOLID))
    updated = updates.replace_chunk(small_structure, replacement)
    assert updated.chunks[1] is replacement
    assert len(updated) == len(small_structure)

    missing = new_chunk(9, 9, 9)
    assert updates.replace_chunk(small_structure, missing) == small_structure


def test_delete_chunk(small_structure):
    updated = updates.delete_chunk(small_structure, ChunkCoord(1, 0, 0))
    assert not updated.has_chunk_at(ChunkCoord(1, 0, 0))
    assert len(updated) == len(small_structure) - 1


def test_clear_column_and_row():
    structure = WorldStructure(chunks=(
        new_chunk(0, 0, 0), new_chunk(0, 1, 1), new_chunk(1, 0, 1),
    ))
    assert updates.clear_column(structure, 0).coordinates() == [ChunkCoord(1, 0, 1)]
    assert updates.clear_column(structure, 0, y=1).coordinates() == [
        ChunkCoord(0, 0, 0), ChunkCoord(1, 0, 1),
    ]
    assert updates.clear_row(structure, 1).coordinates() == [ChunkCoord(0, 0, 0)]


def test_set_origin_chunk_is_unique(small_structure):
    coord = ChunkCoord(-2, 0, 1)
    updated = updates.set_origin_chunk(small_structure, coord, "tower")
    assert find_origin_chunk(updated, "tower").coord == coord
    others = [c for c in updated.chunks if c.coord != coord]
    assert all(c.world_structure == NO_WORLD_STRUCTURE for c in others)


def test_set_origin_clears_labels_of_other_structures():
    structure = WorldStructure(chunks=(
        new_chunk(0, 0, 0).with_world_structure("crypt"), new_chunk(1, 0, 0),
    ))
    updated = updates.set_origin_chunk(structure, ChunkCoord(1, 0, 0), "tower")
    assert updated.origin_chunks() == [updated.chunks[1]]


def test_set_origin_chunk_on_missing_coordinate(small_structure):
    with pytest.raises(ChunkNotFoundError):
        updates.set_origin_chunk(small_structure, ChunkCoord(7, 7, 7), "tower")


def test_rename_origin():
    structure = WorldStructure(chunks=(
        new_chunk(0, 0, 0).with_world_structure("tower"), new_chunk(1, 0, 0),
    ))
    renamed = updates.rename_origin(structure, "tower", "keep")
    assert renamed.origin_chunks() == [renamed.chunks[0]]
    assert renamed.chunks[0].world_structure == "keep"
    assert renamed.chunks[1] is structure.chunks[1]
