"""Tests for viewport pan and zoom state."""

import pytest

from dungeon_maze_editor.constants import MAX_ZOOM, MIN_ZOOM
from dungeon_maze_editor.ui.viewport import ViewportState


def test_press_without_modifier_is_not_a_pan():
    view = ViewportState()
    assert view.begin_drag(10, 10) is False
    view.drag_to(50, 50)
    assert view.offset == (0.0, 0.0)


def test_drag_pans_by_pointer_travel():
    view = ViewportState()
    view.set_modifier(True)
    assert view.begin_drag(10, 20)
    view.drag_to(40, 5)
    assert view.offset == (30.0, -15.0)
    view.end_drag()

    # A second drag continues from the current offset
    view.begin_drag(0, 0)
    view.drag_to(5, 5)
    assert view.offset == (35.0, -10.0)


def test_releasing_modifier_ends_pan():
    view = ViewportState()
    view.set_modifier(True)
    view.begin_drag(0, 0)
    view.set_modifier(False)
    assert not view.dragging
    assert not view.is_panning
    view.drag_to(100, 100)
    assert view.offset == (0.0, 0.0)


def test_wheel_ignored_outside_viewport():
    view = ViewportState()
    assert view.wheel(120) is False
    assert view.scale == 1.0


def test_wheel_zooms_in_steps():
    view = ViewportState()
    view.enter()
    view.wheel(120)
    view.wheel(120)
    assert view.scale == pytest.approx(1.2)
    view.wheel(-120)
    assert view.scale == pytest.approx(1.1)
    view.leave()
    assert view.wheel(-120) is False


def test_zoom_is_clamped():
    view = ViewportState(scale=MIN_ZOOM, active=True)
    view.wheel(-120)
    assert view.scale == MIN_ZOOM
    view = ViewportState(scale=MAX_ZOOM, active=True)
    view.wheel(120)
    assert view.scale == MAX_ZOOM


def test_reset_keeps_zoom():
    view = ViewportState(top=12.0, left=-4.0, scale=2.5)
    view.reset()
    assert view.offset == (0.0, 0.0)
    assert view.scale == 2.5
