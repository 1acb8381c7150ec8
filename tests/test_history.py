"""Tests for the undo/redo history."""

from dungeon_maze_editor.world.data_model import WorldStructure, new_chunk
from dungeon_maze_editor.world.history import EditHistory


def _states(count):
    return [WorldStructure(chunks=tuple(new_chunk(i, 0, 0) for i in range(n)))
            for n in range(count)]


def test_empty_history():
    history = EditHistory()
    assert not history.can_undo
    assert not history.can_redo
    assert history.undo() is None
    assert history.redo() is None
    assert history.undo_description is None


def test_undo_then_redo():
    s0, s1, s2 = _states(3)
    history = EditHistory()
    history.record(s0, s1, "Add chunk (0, 0, 0)")
    history.record(s1, s2, "Add chunk (1, 0, 0)")
    assert history.undo_description == "Add chunk (1, 0, 0)"

    edit = history.undo()
    assert edit.before is s1
    assert history.redo_description == "Add chunk (1, 0, 0)"
    assert history.undo().before is s0
    assert not history.can_undo

    assert history.redo().after is s1
    assert history.redo().after is s2
    assert not history.can_redo


def test_record_clears_redo():
    s0, s1, s2 = _states(3)
    history = EditHistory()
    history.record(s0, s1, "first")
    history.undo()
    assert history.can_redo
    history.record(s0, s2, "second")
    assert not history.can_redo
    assert history.undo_count == 1


def test_depth_is_bounded():
    states = _states(6)
    history = EditHistory(max_undo_depth=3)
    for before, after in zip(states, states[1:]):
        history.record(before, after, f"{len(after)}")
    assert history.undo_count == 3
    assert [history.undo().description for _ in range(3)] == ["5", "4", "3"]
    assert history.undo() is None


def test_clear():
    s0, s1 = _states(2)
    history = EditHistory()
    history.record(s0, s1, "edit")
    history.undo()
    history.clear()
    assert history.undo_count == 0 and history.redo_count == 0
