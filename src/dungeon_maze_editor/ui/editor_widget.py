"""
World-structure editor widget.

Combines the layer selector, the Y-extension buttons and the grid canvas
around one EditorSession. Every edit the canvas requests is applied through
the session, then the canvas is rebuilt from the new structure.
"""

import logging
from pathlib import Path
from typing import Optional

from PyQt5.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QComboBox,
    QFileDialog, QMessageBox,
)
from PyQt5.QtCore import pyqtSignal

from ..session import EditorSession
from ..world.data_model import Cell, ChunkCoord
from ..world.grid_layout import compute_y_range, extend_down, extend_up, layer_choices
from .edit_requests import EditRequest
from .grid_canvas import GridCanvas
from . import style_constants as sc

logger = logging.getLogger(__name__)

FILE_FILTER = "JSON Files (*.json);;All Files (*)"


class WorldStructureEditorWidget(QWidget):
    """Editor for one world structure document."""

    file_saved = pyqtSignal(str)   # Emitted with file path after save
    file_loaded = pyqtSignal(str)  # Emitted with file path after load
    # can_undo, can_redo, undo description, redo description
    undo_state_changed = pyqtSignal(bool, bool, str, str)
    # message, severity ("success", "warning", "error" or "info")
    status_message = pyqtSignal(str, str)

    def __init__(self, session: Optional[EditorSession] = None, parent=None):
        super().__init__(parent)
        self._session = session if session is not None else EditorSession()
        self.last_directory = ""

        self._setup_ui()
        self._connect_signals()
        self.refresh()

    @property
    def session(self) -> EditorSession:
        return self._session

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)
        layout.setSpacing(6)

        top_row = QHBoxLayout()
        top_row.addWidget(QLabel("Chunk Y:"))
        self._layer_combo = QComboBox()
        self._layer_combo.setMaximumWidth(100)
        self._layer_combo.setToolTip("Layer shown in the grid")
        top_row.addWidget(self._layer_combo)

        self._reset_view_btn = QPushButton("Reset View")
        self._reset_view_btn.setToolTip("Move the grid back to its initial position")
        top_row.addWidget(self._reset_view_btn)
        top_row.addStretch()
        layout.addLayout(top_row)

        extend_row = QHBoxLayout()
        self._extend_down_btn = QPushButton()
        self._extend_up_btn = QPushButton()
        extend_row.addWidget(self._extend_down_btn)
        extend_row.addWidget(self._extend_up_btn)
        extend_row.addStretch()
        layout.addLayout(extend_row)

        self._canvas = GridCanvas(self)
        layout.addWidget(self._canvas, stretch=1)

        self._status_label = QLabel("Shift-drag to pan, scroll to zoom, right-click to edit")
        self._status_label.setStyleSheet(
            f"QLabel {{ font-size: {sc.FONT_SIZE_SM}; color: {sc.TEXT_SECONDARY}; }}"
        )
        layout.addWidget(self._status_label)

    def _connect_signals(self):
        self._layer_combo.activated.connect(self._on_layer_selected)
        self._reset_view_btn.clicked.connect(self.reset_view)
        self._extend_down_btn.clicked.connect(self._on_extend_down)
        self._extend_up_btn.clicked.connect(self._on_extend_up)

        self._canvas.edit_requested.connect(self._on_edit_requested)
        self._canvas.cell_changed.connect(self._on_cell_changed)
        self._canvas.origin_requested.connect(self._on_origin_requested)

    # ---------------------------------------------------------------
    # Refresh
    # ---------------------------------------------------------------

    def refresh(self):
        """Rebuild selector, buttons and canvas from the session."""
        structure = self._session.structure

        self._layer_combo.blockSignals(True)
        self._layer_combo.clear()
        for y in layer_choices(structure):
            self._layer_combo.addItem(str(y), y)
        self._layer_combo.setCurrentIndex(self._layer_combo.findData(self._session.layer))
        self._layer_combo.blockSignals(False)

        min_y, max_y = compute_y_range(structure)
        self._extend_down_btn.setText(
            f"Extend -Y to {min_y - 1} (create a new chunk at (0, {min_y - 1}, 0))")
        self._extend_up_btn.setText(
            f"Extend +Y to {max_y + 1} (create a new chunk at (0, {max_y + 1}, 0))")

        self._canvas.set_window(self._session.visible_window(), self._session.layer)
        self._update_undo_redo_state()

    def _update_undo_redo_state(self):
        history = self._session.history
        self.undo_state_changed.emit(
            history.can_undo, history.can_redo,
            history.undo_description or "", history.redo_description or "",
        )

    def _show_status(self, message: str, severity: str = "info"):
        colors = {
            "success": sc.SUCCESS_COLOR,
            "warning": sc.WARNING_COLOR,
            "error": sc.DANGER_COLOR,
        }
        color = colors.get(severity, sc.TEXT_SECONDARY)
        self._status_label.setStyleSheet(
            f"QLabel {{ font-size: {sc.FONT_SIZE_SM}; color: {color}; }}"
        )
        self._status_label.setText(message)
        self.status_message.emit(message, severity)

    # ---------------------------------------------------------------
    # Edits
    # ---------------------------------------------------------------

    def _on_edit_requested(self, request: EditRequest):
        if self._session.apply(request.operation, *request.args,
                               description=request.description):
            self._show_status(request.description)
            self.refresh()
        elif self._session.last_error:
            self._show_status(self._session.last_error, "warning")

    def _on_cell_changed(self, coord: ChunkCoord, row: int, col: int, cell: Cell):
        if self._session.set_cell(coord, row, col, cell):
            self.refresh()

    def _on_origin_requested(self, coord: ChunkCoord):
        if self._session.set_origin(coord):
            self._show_status(f"Origin chunk of '{self._session.name}' is now {coord}")
            self.refresh()

    def _on_layer_selected(self, index: int):
        y = self._layer_combo.itemData(index)
        if y is None:
            return
        self._session.set_layer(int(y))
        self.refresh()

    def _on_extend_down(self):
        min_y, _ = compute_y_range(self._session.structure)
        self._on_edit_requested(EditRequest(extend_down, (), f"Extend -Y to {min_y - 1}"))

    def _on_extend_up(self):
        _, max_y = compute_y_range(self._session.structure)
        self._on_edit_requested(EditRequest(extend_up, (), f"Extend +Y to {max_y + 1}"))

    def undo(self):
        description = self._session.undo()
        if description:
            self._show_status(f"Undo: {description}")
            self.refresh()

    def redo(self):
        description = self._session.redo()
        if description:
            self._show_status(f"Redo: {description}")
            self.refresh()

    def reset_view(self):
        self._canvas.reset_view()

    # ---------------------------------------------------------------
    # Documents
    # ---------------------------------------------------------------

    def _confirm_discard(self, title: str, question: str) -> bool:
        if self._session.structure.is_empty or not self._session.history.can_undo:
            return True
        reply = QMessageBox.question(
            self, title, question,
            QMessageBox.Yes | QMessageBox.No,
            QMessageBox.No
        )
        return reply == QMessageBox.Yes

    def new_document(self):
        """Start an empty structure (public API for menu)."""
        if not self._confirm_discard(
                "New World Structure",
                "Clear current world structure? Unsaved changes will be lost."):
            return
        self._session.new()
        self._canvas.reset_view()
        self.refresh()
        self._show_status("New world structure created")

    def open_document(self):
        """Ask for a file and load it (public API for menu)."""
        if not self._confirm_discard(
                "Load World Structure",
                "Replace current world structure? Unsaved changes will be lost."):
            return
        file_path, _ = QFileDialog.getOpenFileName(
            self, "Load World Structure", self.last_directory, FILE_FILTER
        )
        # No file chosen is not an error
        if file_path:
            self.load_file(file_path)

    def load_file(self, file_path: str) -> bool:
        """Load a world structure from a specific file path.

        A rejected document leaves the current structure untouched and is
        reported in the status line.

        Returns:
            True if load succeeded, False otherwise.
        """
        result = self._session.load_file(file_path)
        if result is None:
            self._show_status(
                f"Could not load {Path(file_path).name}: {self._session.last_error}",
                "error",
            )
            return False

        self.last_directory = str(Path(file_path).parent)
        self.refresh()
        warnings = result.report.warnings
        if warnings:
            self._show_status(
                f"Loaded {Path(file_path).name} with {len(warnings)} warning(s): "
                f"{warnings[0].message}",
                "warning",
            )
        else:
            self._show_status(f"Loaded: {Path(file_path).name}", "success")
        self.file_loaded.emit(file_path)
        return True

    def save_document(self, save_as: bool = False):
        """Save to the current file, asking for a path first when needed."""
        file_path = self._session.file_path
        if save_as or file_path is None:
            directory = Path(self.last_directory) if self.last_directory else Path.cwd()
            default = str(directory / self._session.file_name)
            chosen, _ = QFileDialog.getSaveFileName(
                self, "Save World Structure", default, FILE_FILTER
            )
            if not chosen:
                return
            file_path = Path(chosen)

        try:
            saved = self._session.save_file(file_path)
        except OSError as e:
            logger.error("Save failed: %s", e)
            QMessageBox.critical(self, "Save Failed", str(e))
            return

        self.last_directory = str(saved.parent)
        self._show_status(f"Saved: {saved.name}", "success")
        self.file_saved.emit(str(saved))
