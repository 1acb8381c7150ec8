"""
Main application window for the dungeon maze world-structure editor.

Hosts the editor widget and provides the File, Edit and View menus, the
status bar and persisted preferences (window geometry, last directory,
recent documents).
"""

from pathlib import Path
from typing import Callable, List, Optional

from PyQt5.QtWidgets import QMainWindow, QMenu, QAction, QMessageBox
from PyQt5.QtCore import QSettings

from ..session import EditorSession
from .editor_widget import WorldStructureEditorWidget
from . import style_constants as sc

# severity -> (text color, message prefix, timeout in ms)
STATUS_STYLES = {
    "success": (sc.SUCCESS_COLOR, "✓ ", 3000),
    "warning": (sc.WARNING_COLOR, "⚠ ", 5000),
    "error": (sc.DANGER_COLOR, "✗ ", 5000),
    "info": (sc.TEXT_SECONDARY, "", 3000),
}

KEY_GEOMETRY = "window/geometry"
KEY_STATE = "window/state"
KEY_RECENT = "documents/recent"
KEY_LAST_DIRECTORY = "documents/last_directory"


class MainWindow(QMainWindow):
    """Top-level window around one WorldStructureEditorWidget."""

    SETTINGS_ORG = "DungeonMaze"
    SETTINGS_APP = "WorldStructureEditor"
    MAX_RECENT_FILES = 5

    def __init__(self, session: Optional[EditorSession] = None):
        super().__init__()

        self._settings = QSettings(self.SETTINGS_ORG, self.SETTINGS_APP)
        self._recent: List[str] = []

        self.editor = WorldStructureEditorWidget(session, self)
        self.setCentralWidget(self.editor)

        self._load_settings()
        self._build_menus()
        self._wire_editor()
        self._restore_geometry()

        self._refresh_title()
        self.statusBar().setStyleSheet(
            f"QStatusBar {{ font-size: {sc.FONT_SIZE_SM}; color: {sc.TEXT_SECONDARY}; }}"
        )
        self.statusBar().showMessage("Ready")

    # ---------------------------------------------------------------
    # Menus
    # ---------------------------------------------------------------

    def _add_action(self, menu: QMenu, text: str, slot: Callable,
                    shortcut: Optional[str] = None, tip: Optional[str] = None) -> QAction:
        action = QAction(text, self)
        if shortcut:
            action.setShortcut(shortcut)
        if tip:
            action.setToolTip(tip)
        action.triggered.connect(slot)
        menu.addAction(action)
        return action

    def _build_menus(self):
        bar = self.menuBar()

        document_menu = bar.addMenu("&File")
        self._add_action(document_menu, "&New", self.editor.new_document, "Ctrl+N",
                         "Start an empty world structure")
        self._add_action(document_menu, "&Load From File...", self.editor.open_document,
                         "Ctrl+O", "Open a world structure document")
        self._add_action(document_menu, "&Save", lambda: self.editor.save_document(),
                         "Ctrl+S", "Save as <name>.json")
        self._add_action(document_menu, "Save &As...",
                         lambda: self.editor.save_document(save_as=True), "Ctrl+Shift+S")
        document_menu.addSeparator()
        self._recent_menu = document_menu.addMenu("Recent Documents")
        self._rebuild_recent_menu()
        document_menu.addSeparator()
        self._add_action(document_menu, "E&xit", self.close, "Ctrl+Q")

        history_menu = bar.addMenu("&Edit")
        self._undo_action = self._add_action(history_menu, "&Undo", self.editor.undo, "Ctrl+Z")
        self._redo_action = self._add_action(history_menu, "&Redo", self.editor.redo,
                                             "Ctrl+Shift+Z")
        self._undo_action.setEnabled(False)
        self._redo_action.setEnabled(False)

        view_menu = bar.addMenu("&View")
        self._add_action(view_menu, "&Reset View", self.editor.reset_view, "Ctrl+0",
                         "Move the grid back to its initial position")

    # ---------------------------------------------------------------
    # Recent documents
    # ---------------------------------------------------------------

    def _rebuild_recent_menu(self):
        self._recent = [p for p in self._recent if Path(p).is_file()]
        self._recent_menu.clear()

        if not self._recent:
            placeholder = self._recent_menu.addAction("(none)")
            placeholder.setEnabled(False)
            return

        for number, path in enumerate(self._recent, start=1):
            action = self._add_action(self._recent_menu, f"&{number}. {Path(path).name}",
                                      lambda _=False, p=path: self._open_recent(p))
            action.setToolTip(path)
        self._recent_menu.addSeparator()
        self._add_action(self._recent_menu, "Clear Recent Documents", self._forget_recent)

    def _open_recent(self, path: str):
        if Path(path).is_file():
            self.editor.load_file(path)
            return
        QMessageBox.warning(self, "Document Missing", f"{path}\nno longer exists.")
        self._rebuild_recent_menu()

    def _forget_recent(self):
        self._recent = []
        self._rebuild_recent_menu()
        self.statusBar().showMessage("Recent documents cleared", 3000)

    def _remember(self, path: str):
        path = str(Path(path).resolve())
        self._recent = [path] + [p for p in self._recent if p != path]
        del self._recent[self.MAX_RECENT_FILES:]
        self._rebuild_recent_menu()
        self._refresh_title()

    # ---------------------------------------------------------------
    # Editor signals
    # ---------------------------------------------------------------

    def _wire_editor(self):
        self.editor.undo_state_changed.connect(self._on_history_changed)
        self.editor.status_message.connect(self._show_status)
        self.editor.file_loaded.connect(self._remember)
        self.editor.file_saved.connect(self._remember)

    def _on_history_changed(self, can_undo: bool, can_redo: bool,
                            undo_text: str, redo_text: str):
        for action, enabled, label, text in (
                (self._undo_action, can_undo, "&Undo", undo_text),
                (self._redo_action, can_redo, "&Redo", redo_text)):
            action.setEnabled(enabled)
            action.setText(f"{label} {text}" if text else label)
        self._refresh_title()

    def _show_status(self, message: str, severity: str):
        color, prefix, timeout = STATUS_STYLES.get(severity, STATUS_STYLES["info"])
        self.statusBar().setStyleSheet(
            f"QStatusBar {{ font-size: {sc.FONT_SIZE_SM}; color: {color}; }}"
        )
        self.statusBar().showMessage(prefix + message, timeout)

    def _refresh_title(self):
        self.setWindowTitle(f"{self.editor.session.file_name} - World Structure Editor")

    # ---------------------------------------------------------------
    # Settings persistence
    # ---------------------------------------------------------------

    def closeEvent(self, event):
        self._save_settings()
        super().closeEvent(event)

    def _load_settings(self):
        recent = self._settings.value(KEY_RECENT, [])
        # QSettings hands back a bare string for single-element lists
        if isinstance(recent, str):
            recent = [recent] if recent else []
        self._recent = list(recent or [])[:self.MAX_RECENT_FILES]
        self.editor.last_directory = self._settings.value(KEY_LAST_DIRECTORY, "", type=str)

    def _save_settings(self):
        self._settings.setValue(KEY_GEOMETRY, self.saveGeometry())
        self._settings.setValue(KEY_STATE, self.saveState())
        self._settings.setValue(KEY_RECENT, self._recent)
        self._settings.setValue(KEY_LAST_DIRECTORY, self.editor.last_directory)

    def _restore_geometry(self):
        geometry = self._settings.value(KEY_GEOMETRY)
        if geometry:
            self.restoreGeometry(geometry)
        else:
            self.resize(1280, 900)
        state = self._settings.value(KEY_STATE)
        if state:
            self.restoreState(state)
