"""
Pan and zoom state of the chunk grid viewport.

Kept free of Qt so the canvas only forwards events:
- Drag mode is on while the drag modifier (Shift) is held. The canvas dims
  the grid in drag mode and a mouse drag then pans instead of editing.
- Zoom follows the wheel only while the pointer is inside the viewport.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from ..constants import MAX_ZOOM, MIN_ZOOM, ZOOM_STEP


@dataclass
class ViewportState:
    """Pan offset, drag mode and zoom scale of one viewport."""
    top: float = 0.0
    left: float = 0.0
    scale: float = 1.0
    dragging: bool = False
    active: bool = False
    _grab: Optional[Tuple[float, float, float, float]] = None

    @property
    def offset(self) -> Tuple[float, float]:
        return (self.left, self.top)

    @property
    def is_panning(self) -> bool:
        """True between begin_drag() and end_drag()."""
        return self._grab is not None

    # ---------------------------------------------------------------
    # Panning
    # ---------------------------------------------------------------

    def set_modifier(self, held: bool):
        """Track the drag modifier. Releasing it ends any pan in progress."""
        self.dragging = held
        if not held:
            self.end_drag()

    def begin_drag(self, x: float, y: float) -> bool:
        """
        Start panning at pointer position (x, y).

        Returns:
            False when the drag modifier is not held (the press is not a pan).
        """
        if not self.dragging:
            return False
        self._grab = (x, y, self.left, self.top)
        return True

    def drag_to(self, x: float, y: float):
        """Move the pan offset by the pointer travel since begin_drag()."""
        if self._grab is None:
            return
        start_x, start_y, left, top = self._grab
        self.left = left + (x - start_x)
        self.top = top + (y - start_y)

    def end_drag(self):
        self._grab = None

    # ---------------------------------------------------------------
    # Zoom
    # ---------------------------------------------------------------

    def enter(self):
        self.active = True

    def leave(self):
        self.active = False

    def wheel(self, delta: float) -> bool:
        """
        Apply one wheel step. Positive ``delta`` (wheel away from the user)
        zooms in, negative zooms out.

        Returns:
            True if the event was consumed, i.e. the pointer is inside the
            viewport. The scale stays within [MIN_ZOOM, MAX_ZOOM].
        """
        if not self.active:
            return False
        if delta > 0:
            self.scale = round(min(self.scale + ZOOM_STEP, MAX_ZOOM), 2)
        elif delta < 0:
            self.scale = round(max(self.scale - ZOOM_STEP, MIN_ZOOM), 2)
        return True

    def reset(self):
        """Restore pan offset (0, 0). Zoom is left as is."""
        self.top = 0.0
        self.left = 0.0
        self.end_drag()
