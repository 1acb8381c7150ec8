"""Tests for the layer layout and the insertion operations."""

import pytest

from dungeon_maze_editor.world.data_model import (
    Chunk, ChunkCoord, DuplicateChunkError, Side, WorldStructure, new_chunk,
)
from dungeon_maze_editor.world.grid_layout import (
    EmptySlot, add_chunk, add_chunk_at, add_neighbour, compute_radius,
    compute_y_range, extend_down, extend_up, lay_out_layer, layer_choices,
    neighbour_coord, slot_index,
)


def _structure(*coords):
    return WorldStructure(chunks=tuple(new_chunk(*c) for c in coords))


def test_empty_structure_has_single_empty_slot(empty_structure):
    radius = compute_radius(empty_structure)
    assert radius == 0
    assert lay_out_layer(empty_structure, 0, radius) == [[EmptySlot(0, 0)]]


def test_single_chunk_window():
    structure = _structure((2, 0, -1))
    radius = compute_radius(structure)
    assert radius == 2

    window = lay_out_layer(structure, 0, radius)
    assert len(window) == 5
    assert all(len(row) == 5 for row in window)

    chunk = window[1][4]
    assert isinstance(chunk, Chunk)
    assert chunk.coord == ChunkCoord(2, 0, -1)
    assert slot_index(radius, 2, -1) == (1, 4)

    others = [slot for row in window for slot in row if slot is not chunk]
    assert len(others) == 24
    assert all(isinstance(slot, EmptySlot) for slot in others)


def test_window_orientation():
    structure = _structure((0, 0, 0))
    window = lay_out_layer(structure, 0, 2)
    assert window[0][0] == EmptySlot(-2, -2)
    assert window[0][4] == EmptySlot(2, -2)
    assert window[4][0] == EmptySlot(-2, 2)
    assert window[2][2].coord == ChunkCoord(0, 0, 0)


def test_radius_is_minimal(small_structure):
    radius = compute_radius(small_structure)
    for chunk in small_structure.chunks:
        assert abs(chunk.x) <= radius and abs(chunk.z) <= radius
    assert any(max(abs(c.x), abs(c.z)) == radius for c in small_structure.chunks)


def test_radius_never_shrinks_when_adding(small_structure):
    before = compute_radius(small_structure)
    for coord in [ChunkCoord(0, 0, 1), ChunkCoord(5, 2, 0), ChunkCoord(-1, -1, -7)]:
        grown = add_chunk_at(small_structure, coord)
        assert compute_radius(grown) >= before


def test_layout_only_shows_the_requested_layer(small_structure):
    radius = compute_radius(small_structure)
    window = lay_out_layer(small_structure, 1, radius)
    chunks = [slot for row in window for slot in row if isinstance(slot, Chunk)]
    assert [c.coord for c in chunks] == [ChunkCoord(0, 1, 0)]


def test_sparse_layer_renders_all_empty():
    structure = _structure((0, -2, 0), (1, 2, 0))
    assert layer_choices(structure) == [-2, -1, 0, 1, 2]
    window = lay_out_layer(structure, -1, compute_radius(structure))
    assert all(isinstance(slot, EmptySlot) for row in window for slot in row)


def test_y_range():
    assert compute_y_range(WorldStructure()) == (0, 0)
    assert compute_y_range(_structure((0, 3, 0), (0, 5, 0))) == (3, 5)
    assert compute_y_range(_structure((0, -4, 0), (0, -1, 0))) == (-4, -1)
    assert layer_choices(WorldStructure()) == [0]


def test_add_chunk_rejects_occupied_coordinate(small_structure):
    with pytest.raises(DuplicateChunkError) as exc:
        add_chunk(small_structure, new_chunk(1, 0, 0))
    assert exc.value.coord == ChunkCoord(1, 0, 0)


def test_add_chunk_at_appends(small_structure):
    grown = add_chunk_at(small_structure, ChunkCoord(3, 0, 3))
    assert grown.chunks[:-1] == small_structure.chunks
    assert grown.chunks[-1] == new_chunk(3, 0, 3)


def test_extend_down_prepends_below_lowest_layer(small_structure):
    grown = extend_down(small_structure)
    assert grown.chunks[0].coord == ChunkCoord(0, -2, 0)
    assert grown.chunks[1:] == small_structure.chunks


def test_extend_up_appends_above_highest_layer(small_structure):
    grown = extend_up(small_structure)
    assert grown.chunks[-1].coord == ChunkCoord(0, 2, 0)


def test_extend_empty_structure(empty_structure):
    assert extend_up(empty_structure).coordinates() == [ChunkCoord(0, 1, 0)]
    assert extend_down(empty_structure).coordinates() == [ChunkCoord(0, -1, 0)]


def test_neighbour_coordinates():
    origin = ChunkCoord(1, 0, 1)
    assert neighbour_coord(origin, Side.TOP) == ChunkCoord(1, 0, 0)
    assert neighbour_coord(origin, Side.BOTTOM) == ChunkCoord(1, 0, 2)
    assert neighbour_coord(origin, Side.LEFT) == ChunkCoord(0, 0, 1)
    assert neighbour_coord(origin, Side.RIGHT) == ChunkCoord(2, 0, 1)


def test_add_neighbour_insertion_order():
    structure = _structure((0, 0, 0))
    top = add_neighbour(structure, ChunkCoord(0, 0, 0), Side.TOP)
    assert top.chunks[0].coord == ChunkCoord(0, 0, -1)
    left = add_neighbour(structure, ChunkCoord(0, 0, 0), Side.LEFT)
    assert left.chunks[0].coord == ChunkCoord(-1, 0, 0)
    right = add_neighbour(structure, ChunkCoord(0, 0, 0), Side.RIGHT)
    assert right.chunks[-1].coord == ChunkCoord(1, 0, 0)
    bottom = add_neighbour(structure, ChunkCoord(0, 0, 0), Side.BOTTOM)
    assert bottom.chunks[-1].coord == ChunkCoord(0, 0, 1)


def test_add_neighbour_grows_the_window():
    structure = _structure((1, 0, 0))
    grown = add_neighbour(structure, ChunkCoord(1, 0, 0), Side.RIGHT)
    assert compute_radius(grown) == 2


def test_add_neighbour_into_occupied_slot():
    structure = _structure((0, 0, 0), (1, 0, 0))
    with pytest.raises(DuplicateChunkError):
        add_neighbour(structure, ChunkCoord(0, 0, 0), Side.RIGHT)
