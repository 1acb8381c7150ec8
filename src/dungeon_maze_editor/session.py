"""
Editing session: the single owner of the world structure being edited.

The session holds the current WorldStructure value, the document name (which
is also the name written into the origin chunk), the selected layer and the
undo history. Every edit goes through apply(), which runs a pure
``structure -> structure`` operation and installs the result only when it
succeeds.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Optional, Union

from .constants import DEFAULT_DOCUMENT_NAME, NO_WORLD_STRUCTURE
from .document import (
    DocumentError, DuplicatePolicy, LoadResult, OversizePolicy,
    document_file_name, load_document, save_document,
)
from .world.data_model import (
    Cell, ChunkCoord, WorldStructure, WorldStructureError, new_world_structure,
)
from .world.grid_layout import (
    LayerSlot, compute_radius, lay_out_layer, layer_choices,
)
from .world.history import EditHistory
from .world.updates import rename_origin, set_origin_chunk, update_cell

logger = logging.getLogger(__name__)

Operation = Callable[..., WorldStructure]


class EditorSession:
    """State of one editing session."""

    def __init__(self, name: str = DEFAULT_DOCUMENT_NAME,
                 structure: Optional[WorldStructure] = None,
                 history: Optional[EditHistory] = None,
                 oversize: OversizePolicy = OversizePolicy.KEEP,
                 duplicates: DuplicatePolicy = DuplicatePolicy.REJECT):
        self._name = name
        self._structure = structure if structure is not None else new_world_structure()
        self._history = history if history is not None else EditHistory()
        self._layer = 0
        self._file_path: Optional[Path] = None
        self._oversize = oversize
        self._duplicates = duplicates
        self.last_error: Optional[str] = None
        self.last_load: Optional[LoadResult] = None
        self._clamp_layer()

    # ---------------------------------------------------------------
    # State
    # ---------------------------------------------------------------

    @property
    def structure(self) -> WorldStructure:
        return self._structure

    @property
    def name(self) -> str:
        return self._name

    @property
    def layer(self) -> int:
        return self._layer

    @property
    def history(self) -> EditHistory:
        return self._history

    @property
    def file_path(self) -> Optional[Path]:
        return self._file_path

    @property
    def file_name(self) -> str:
        return document_file_name(self._name)

    def set_layer(self, y: int):
        """Select the visible layer, clamped into the available range."""
        self._layer = y
        self._clamp_layer()

    def _clamp_layer(self):
        choices = layer_choices(self._structure)
        self._layer = min(max(self._layer, choices[0]), choices[-1])

    def visible_window(self) -> List[List[LayerSlot]]:
        """Layout of the selected layer."""
        radius = compute_radius(self._structure)
        return lay_out_layer(self._structure, self._layer, radius)

    # ---------------------------------------------------------------
    # Editing
    # ---------------------------------------------------------------

    def apply(self, operation: Operation, *args, description: str = "") -> bool:
        """
        Run ``operation(structure, *args)`` and install the result.

        Returns:
            True if the structure changed. Failed operations leave the
            session untouched and set ``last_error``.
        """
        before = self._structure
        try:
            after = operation(before, *args)
        except WorldStructureError as e:
            logger.warning("Edit refused: %s", e)
            self.last_error = str(e)
            return False

        self.last_error = None
        if after == before:
            return False

        self._structure = after
        self._history.record(before, after, description or operation.__name__)
        self._clamp_layer()
        logger.debug("Applied edit: %s", description or operation.__name__)
        return True

    def set_origin(self, coord: ChunkCoord) -> bool:
        """Make the chunk at ``coord`` the origin chunk of this structure."""
        return self.apply(set_origin_chunk, coord, self._name,
                          description=f"Set origin chunk {coord}")

    def set_cell(self, coord: ChunkCoord, row: int, col: int, cell: Cell) -> bool:
        """Replace one cell of the chunk at ``coord`` with ``cell``."""
        return self.apply(update_cell, coord, row, col, lambda _old: cell,
                          description=f"Edit cell ({row}, {col}) of chunk {coord}")

    def undo(self) -> Optional[str]:
        """
        Undo the last edit.

        Returns:
            Description of the undone edit, or None if nothing to undo.
        """
        edit = self._history.undo()
        if edit is None:
            return None
        self._structure = edit.before
        self._clamp_layer()
        return edit.description

    def redo(self) -> Optional[str]:
        """
        Redo the last undone edit.

        Returns:
            Description of the redone edit, or None if nothing to redo.
        """
        edit = self._history.redo()
        if edit is None:
            return None
        self._structure = edit.after
        self._clamp_layer()
        return edit.description

    # ---------------------------------------------------------------
    # Documents
    # ---------------------------------------------------------------

    def new(self, name: str = DEFAULT_DOCUMENT_NAME):
        """Start over with an empty structure."""
        self._name = name
        self._structure = new_world_structure()
        self._file_path = None
        self._history.clear()
        self._layer = 0
        self.last_error = None

    def load_text(self, text: str, name: str) -> Optional[LoadResult]:
        """
        Load a document from text and install it.

        Returns:
            The LoadResult, or None if the document was rejected (the session
            is left unchanged and ``last_error`` describes the failure).
        """
        try:
            result = load_document(text, name=name, oversize=self._oversize,
                                   duplicates=self._duplicates)
        except DocumentError as e:
            logger.warning("Rejected document '%s': %s", name, e)
            logger.debug("%s", e.result.report())
            self.last_error = str(e)
            return None

        self._name = name
        self._structure = result.structure
        self._history.clear()
        self._clamp_layer()
        self.last_error = None
        self.last_load = result
        return result

    def load_file(self, path: Union[str, Path, None]) -> Optional[LoadResult]:
        """
        Load a document file. An empty ``path`` (no file chosen) is a no-op.

        Returns:
            The LoadResult, or None if nothing was loaded.
        """
        if not path:
            return None

        path = Path(path)
        try:
            text = path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read %s: %s", path, e)
            self.last_error = str(e)
            return None

        result = self.load_text(text, name=path.stem)
        if result is not None:
            self._file_path = path
            logger.info("Opened %s", path)
        return result

    def save_file(self, path: Union[str, Path, None] = None) -> Path:
        """
        Save the structure. Without ``path`` the file is named after the
        document, next to the file it was loaded from.

        Saving under another file name renames the document, and the origin
        chunk is relabelled with the new name before writing. The relabel is
        recorded as an edit.

        Raises:
            OSError: If the file cannot be written
        """
        if path is None:
            directory = self._file_path.parent if self._file_path else Path.cwd()
            path = directory / self.file_name
        path = Path(path)

        new_name = path.stem
        renamed = new_name != self._name
        structure = self._structure
        if renamed and self._name != NO_WORLD_STRUCTURE:
            structure = rename_origin(structure, self._name, new_name)

        saved = save_document(structure, path)
        if structure != self._structure:
            self._history.record(self._structure, structure,
                                 f"Rename '{self._name}' to '{new_name}'")
            self._structure = structure
        self._file_path = saved
        self._name = new_name
        return saved
