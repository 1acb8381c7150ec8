"""
Undo/redo history for the editor.

World structures are immutable, so an edit is fully described by the value
before and after it. The history keeps those snapshot pairs outside the data
model:
- Edit: one recorded (before, after) pair with a description
- EditHistory: bounded undo stack plus redo stack
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional

from ..constants import MAX_UNDO_DEPTH
from .data_model import WorldStructure


@dataclass(frozen=True)
class Edit:
    """A single recorded edit."""
    description: str
    before: WorldStructure
    after: WorldStructure


class EditHistory:
    """
    Bounded undo/redo of recorded edits.

    Usage:
        history = EditHistory()
        history.record(old, new, "Delete chunk (0, 0, 0)")
        edit = history.undo()   # edit.before is the state to restore
        edit = history.redo()   # edit.after is the state to restore
    """

    def __init__(self, max_undo_depth: int = MAX_UNDO_DEPTH):
        # Oldest edits fall off the left end once the depth is reached
        self._done: Deque[Edit] = deque(maxlen=max_undo_depth)
        self._undone: List[Edit] = []

    def record(self, before: WorldStructure, after: WorldStructure,
               description: str) -> Edit:
        """Record an edit. Anything that could be redone is forgotten."""
        edit = Edit(description=description, before=before, after=after)
        self._done.append(edit)
        self._undone.clear()
        return edit

    def undo(self) -> Optional[Edit]:
        """Step back one edit; restore ``edit.before``. None if nothing to undo."""
        if not self._done:
            return None
        edit = self._done.pop()
        self._undone.append(edit)
        return edit

    def redo(self) -> Optional[Edit]:
        """Step forward one edit; restore ``edit.after``. None if nothing to redo."""
        if not self._undone:
            return None
        edit = self._undone.pop()
        self._done.append(edit)
        return edit

    @property
    def can_undo(self) -> bool:
        return bool(self._done)

    @property
    def can_redo(self) -> bool:
        return bool(self._undone)

    @property
    def undo_description(self) -> Optional[str]:
        return self._done[-1].description if self._done else None

    @property
    def redo_description(self) -> Optional[str]:
        return self._undone[-1].description if self._undone else None

    @property
    def undo_count(self) -> int:
        return len(self._done)

    @property
    def redo_count(self) -> int:
        return len(self._undone)

    def clear(self):
        self._done.clear()
        self._undone.clear()
