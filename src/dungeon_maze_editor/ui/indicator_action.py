"""
Menu action showing an on/off indicator without Qt's checkable mechanism.

Checkable QActions crash PyQt5 on macOS (QAccessible) when their state
changes. The editor rebuilds its context menus on every open, so an action
only has to show the state of a cell field at the time the menu was built.

Usage:
    action = IndicatorAction("Door Top", cell.door_top, menu)
    action.triggered.connect(on_toggle_door)
"""

from PyQt5.QtWidgets import QAction, QWidget
from PyQt5.QtCore import Qt, QRectF
from PyQt5.QtGui import QIcon, QPixmap, QPainter, QColor, QPen

from . import style_constants as sc

_ICON_CACHE = {}


def indicator_icon(on: bool, size: int = 14) -> QIcon:
    """Square swatch: filled with an inner dot when on, outlined when off."""
    key = (on, size)
    if key in _ICON_CACHE:
        return _ICON_CACHE[key]

    pixmap = QPixmap(size, size)
    pixmap.fill(Qt.transparent)
    painter = QPainter(pixmap)
    painter.setRenderHint(QPainter.Antialiasing)

    box = QRectF(1.5, 1.5, size - 3, size - 3)
    painter.setPen(QPen(QColor(sc.INDICATOR_BORDER), 1))
    painter.setBrush(QColor(sc.SUCCESS_COLOR) if on else Qt.NoBrush)
    painter.drawRoundedRect(box, 3, 3)
    if on:
        painter.setPen(Qt.NoPen)
        painter.setBrush(QColor("white"))
        dot = size * 0.3
        painter.drawEllipse(QRectF((size - dot) / 2, (size - dot) / 2, dot, dot))
    painter.end()

    icon = QIcon(pixmap)
    _ICON_CACHE[key] = icon
    return icon


class IndicatorAction(QAction):
    """QAction whose icon shows a fixed on/off state."""

    def __init__(self, text: str, on: bool, parent: QWidget = None):
        super().__init__(text, parent)
        self.on = on
        self.setIcon(indicator_icon(on))
