"""
PyQt5 user interface of the world-structure editor.

viewport.py and edit_requests.py have no Qt dependency. Import the widgets
from their modules (main_window, editor_widget, grid_canvas) so that
importing this package does not load Qt.
"""
