#!/usr/bin/env python3
"""
Dungeon Maze World-Structure Editor - Main Application Entry Point

Initializes logging and the Qt application and opens the main window.

Usage:
    python main.py [document.json]

The log level is read from the DUNGEON_MAZE_EDITOR_LOG environment variable
(DEBUG, INFO, WARNING, ...; default INFO).
"""

import logging
import os
import sys
from pathlib import Path

# Set Qt environment variables before importing Qt modules.
# These help with macOS rendering compatibility.
os.environ['QT_MAC_WANTS_LAYER'] = '1'

from PyQt5.QtWidgets import QApplication

LOG_ENV_VAR = "DUNGEON_MAZE_EDITOR_LOG"


def configure_logging():
    """Configure the root logger from the environment."""
    level_name = os.environ.get(LOG_ENV_VAR, "INFO").upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def main():
    """Main application entry point."""
    # Ensure package imports work when executed from a checkout
    src_root = Path(__file__).resolve().parent / "src"
    if src_root.is_dir() and str(src_root) not in sys.path:
        sys.path.insert(0, str(src_root))

    configure_logging()
    logger = logging.getLogger("dungeon_maze_editor")

    app = QApplication(sys.argv)
    app.setApplicationName("World Structure Editor")
    app.setApplicationDisplayName("World Structure Editor")
    app.setOrganizationName("DungeonMaze")
    app.setStyle("Fusion")

    from dungeon_maze_editor.ui.main_window import MainWindow
    window = MainWindow()
    window.show()

    # Optional document to open on startup
    args = app.arguments()[1:]
    if args:
        window.editor.load_file(args[0])

    logger.info("World Structure Editor started")
    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
