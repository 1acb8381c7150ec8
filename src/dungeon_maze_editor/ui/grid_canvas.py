"""
QGraphicsView-based chunk grid for the world-structure editor.

Provides:
- The square window of one layer (chunks, "add chunk" placeholders,
  column/row headings and edge "+" buttons)
- Shift-drag panning and wheel zoom through ViewportState
- Context menus for cells, walls, chunks, columns and rows

The canvas never changes the world structure itself. Edits are emitted as
signals and applied by the owning widget.
"""

from typing import Callable, List, Optional

from PyQt5.QtWidgets import QGraphicsView, QGraphicsScene, QGraphicsRectItem, QMenu, QAction
from PyQt5.QtCore import Qt, QRectF, QPointF, pyqtSignal
from PyQt5.QtGui import (
    QPainter, QColor, QBrush, QWheelEvent, QMouseEvent, QKeyEvent,
)

from ..constants import CHUNK_PIXELS
from ..world.data_model import Cell, CellSpecial, CellWall, Chunk, ChunkCoord, Side
from ..world.grid_layout import EmptySlot, LayerSlot, add_chunk_at, add_neighbour
from ..world import updates
from .edit_requests import EditRequest, heading_requests
from .chunk_item import ChunkHit, ChunkItem, EmptySlotItem, HeadingItem, PlusItem
from .indicator_action import IndicatorAction
from .viewport import ViewportState
from . import style_constants as sc

# Heading band and "+" button size as fractions of a chunk edge
HEADING_FRACTION = 0.16
PLUS_FRACTION = 0.2
EDGE_PADDING = 4.0

# Floors and ceilings offer only these states in menus
FLOOR_STATES = (CellWall.NONE, CellWall.SOLID)


class GridCanvas(QGraphicsView):
    """Grid of the chunks on one layer of a world structure."""

    # Signals
    cell_changed = pyqtSignal(object, int, int, object)  # coord, row, col, new Cell
    edit_requested = pyqtSignal(object)  # EditRequest
    origin_requested = pyqtSignal(object)  # ChunkCoord of the new origin chunk

    def __init__(self, parent=None):
        super().__init__(parent)

        self._scene = QGraphicsScene(self)
        self.setScene(self._scene)

        self._viewport = ViewportState()
        self._window: List[List[LayerSlot]] = [[EmptySlot(0, 0)]]
        self._layer = 0
        self._root: Optional[QGraphicsRectItem] = None

        self._chunk_size = CHUNK_PIXELS
        self._background_color = QColor(sc.CANVAS_BACKGROUND)

        self._setup_view()
        self._rebuild_items()

    def _setup_view(self):
        """Configure view settings."""
        self.setRenderHints(QPainter.Antialiasing | QPainter.TextAntialiasing)
        self.setViewportUpdateMode(QGraphicsView.FullViewportUpdate)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        self.setDragMode(QGraphicsView.NoDrag)
        self.setMouseTracking(True)
        # Keyboard focus is needed to see the Shift key
        self.setFocusPolicy(Qt.StrongFocus)
        self.setBackgroundBrush(QBrush(self._background_color))

    @property
    def viewport_state(self) -> ViewportState:
        return self._viewport

    # ---------------------------------------------------------------
    # Layer window
    # ---------------------------------------------------------------

    def set_window(self, window: List[List[LayerSlot]], layer: int):
        """Show the layout of ``layer`` (rows of Chunk or EmptySlot)."""
        self._window = window
        self._layer = layer
        self._rebuild_items()

    def _margin(self) -> float:
        heading = self._chunk_size * HEADING_FRACTION
        plus = self._chunk_size * PLUS_FRACTION
        return heading + plus + EDGE_PADDING * 2

    def _rebuild_items(self):
        """Rebuild all items from the current window."""
        self._scene.clear()

        size = self._chunk_size
        count = len(self._window)
        margin = self._margin()
        heading = size * HEADING_FRACTION
        plus = size * PLUS_FRACTION
        extent = margin * 2 + count * size

        self._root = QGraphicsRectItem(0, 0, extent, extent)
        self._root.setPen(Qt.NoPen)
        self._root.setBrush(Qt.NoBrush)
        self._scene.addItem(self._root)

        for row_index, row in enumerate(self._window):
            for col_index, slot in enumerate(row):
                x = margin + col_index * size
                y = margin + row_index * size
                if isinstance(slot, Chunk):
                    item = ChunkItem(slot, size)
                else:
                    item = EmptySlotItem(slot, self._layer, size)
                item.setParentItem(self._root)
                item.setPos(x, y)

        # Column headings above and below, row headings left and right
        edge = margin + count * size
        first_row = self._window[0]
        for col_index, slot in enumerate(first_row):
            x = margin + col_index * size
            for y in (margin - heading, edge):
                HeadingItem('x', slot.x, QRectF(x, y, size, heading)).setParentItem(self._root)
        for row_index, row in enumerate(self._window):
            y = margin + row_index * size
            for x in (margin - heading, edge):
                HeadingItem('z', row[0].z, QRectF(x, y, heading, size)).setParentItem(self._root)

        # "+" buttons beyond the headings
        near = margin - heading - EDGE_PADDING - plus / 2
        far = edge + heading + EDGE_PADDING + plus / 2
        for col_index, slot in enumerate(first_row):
            cx = margin + (col_index + 0.5) * size
            top = ChunkCoord(slot.x, self._layer, slot.z)
            last = self._window[-1][col_index]
            bottom = ChunkCoord(last.x, self._layer, last.z)
            PlusItem(top, Side.TOP, QPointF(cx, near), plus).setParentItem(self._root)
            PlusItem(bottom, Side.BOTTOM, QPointF(cx, far), plus).setParentItem(self._root)
        for row_index, row in enumerate(self._window):
            cy = margin + (row_index + 0.5) * size
            left = ChunkCoord(row[0].x, self._layer, row[0].z)
            right = ChunkCoord(row[-1].x, self._layer, row[-1].z)
            PlusItem(left, Side.LEFT, QPointF(near, cy), plus).setParentItem(self._root)
            PlusItem(right, Side.RIGHT, QPointF(far, cy), plus).setParentItem(self._root)

        self._apply_viewport()

    def _apply_viewport(self):
        """Move and scale the layer window to the viewport state."""
        if self._root is not None:
            self._root.setPos(self._viewport.left, self._viewport.top)
            self._root.setScale(self._viewport.scale)
        self.viewport().update()

    def reset_view(self):
        """Move the window back to its initial position."""
        self._viewport.reset()
        self._apply_viewport()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.setSceneRect(QRectF(self.viewport().rect()))

    # ---------------------------------------------------------------
    # Drawing
    # ---------------------------------------------------------------

    def drawForeground(self, painter: QPainter, rect: QRectF):
        """Dim the grid while the drag modifier is held."""
        super().drawForeground(painter, rect)
        if self._viewport.dragging:
            veil = QColor(255, 255, 255, sc.DRAG_OVERLAY_ALPHA)
            painter.fillRect(rect, veil)

    # ---------------------------------------------------------------
    # Mouse and keyboard events
    # ---------------------------------------------------------------

    def _sync_modifier(self, modifiers):
        held = bool(modifiers & Qt.ShiftModifier)
        if held != self._viewport.dragging:
            self._viewport.set_modifier(held)
            self.setCursor(Qt.OpenHandCursor if held else Qt.ArrowCursor)
            self.viewport().update()

    def keyPressEvent(self, event: QKeyEvent):
        if event.key() == Qt.Key_Shift:
            self._sync_modifier(Qt.ShiftModifier)
            event.accept()
            return
        super().keyPressEvent(event)

    def keyReleaseEvent(self, event: QKeyEvent):
        if event.key() == Qt.Key_Shift:
            self._sync_modifier(Qt.NoModifier)
            event.accept()
            return
        super().keyReleaseEvent(event)

    def mousePressEvent(self, event: QMouseEvent):
        """Pan with Shift+Left, otherwise click placeholders and "+" buttons."""
        self._sync_modifier(event.modifiers())

        if event.button() == Qt.LeftButton:
            if self._viewport.begin_drag(event.pos().x(), event.pos().y()):
                self.setCursor(Qt.ClosedHandCursor)
                event.accept()
                return

            item = self.itemAt(event.pos())
            if isinstance(item, EmptySlotItem):
                coord = item.coord
                self.edit_requested.emit(EditRequest(
                    add_chunk_at, (coord,), f"Add chunk {coord}"))
                event.accept()
                return
            if isinstance(item, PlusItem):
                self.edit_requested.emit(EditRequest(
                    add_neighbour, (item.coord, item.side),
                    f"Add chunk {item.side.value.lower()} of {item.coord}"))
                event.accept()
                return

        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent):
        if self._viewport.is_panning:
            self._viewport.drag_to(event.pos().x(), event.pos().y())
            self._apply_viewport()
            event.accept()
            return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent):
        if self._viewport.is_panning and event.button() == Qt.LeftButton:
            self._viewport.end_drag()
            self.setCursor(Qt.OpenHandCursor if self._viewport.dragging else Qt.ArrowCursor)
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def enterEvent(self, event):
        self._viewport.enter()
        self.setFocus()
        super().enterEvent(event)

    def leaveEvent(self, event):
        self._viewport.leave()
        super().leaveEvent(event)

    def wheelEvent(self, event: QWheelEvent):
        """Zoom by one step per wheel event while the pointer is inside."""
        if self._viewport.wheel(event.angleDelta().y()):
            self._apply_viewport()
            event.accept()
            return
        super().wheelEvent(event)

    # ---------------------------------------------------------------
    # Context menus
    # ---------------------------------------------------------------

    def contextMenuEvent(self, event):
        """Show the menu for whatever lies under the pointer."""
        if self._viewport.dragging:
            event.accept()
            return

        item = self.itemAt(event.pos())
        menu = None
        if isinstance(item, ChunkItem):
            hit = item.hit_test(item.mapFromScene(self.mapToScene(event.pos())))
            if hit is not None:
                menu = self._chunk_hit_menu(item.chunk, hit)
        elif isinstance(item, HeadingItem):
            menu = self._heading_menu(item)

        if menu is None:
            super().contextMenuEvent(event)
            return
        menu.exec_(event.globalPos())
        event.accept()

    def _action(self, menu: QMenu, text: str, slot: Callable,
                checked: Optional[bool] = None) -> QAction:
        if checked is None:
            action = QAction(text, menu)
        else:
            action = IndicatorAction(text, checked, menu)
        action.triggered.connect(slot)
        menu.addAction(action)
        return action

    def _chunk_hit_menu(self, chunk: Chunk, hit: ChunkHit) -> QMenu:
        if hit.origin_marker:
            return self._chunk_menu(chunk)
        cell = chunk.cell(hit.row, hit.col)
        if hit.side is None:
            return self._cell_menu(chunk.coord, hit.row, hit.col, cell)
        return self._wall_menu(chunk.coord, hit.row, hit.col, cell, hit.side)

    def _change_cell(self, coord: ChunkCoord, row: int, col: int,
                     cell: Cell, transform: Callable[[Cell], Cell]):
        self.cell_changed.emit(coord, row, col, transform(cell))

    def _cell_menu(self, coord: ChunkCoord, row: int, col: int, cell: Cell) -> QMenu:
        """Ceiling and floor toggles plus the Special submenu."""
        menu = QMenu(self)
        change = lambda t: (lambda: self._change_cell(coord, row, col, cell, t))

        self._action(menu, "Ceiling", change(updates.toggle_ceiling()),
                     checked=cell.ceiling == CellWall.SOLID)
        self._action(menu, "Floor", change(updates.toggle_floor()),
                     checked=cell.floor == CellWall.SOLID)

        special_menu = menu.addMenu("Special")
        for special in CellSpecial:
            self._action(special_menu, special.value, change(updates.set_special(special)),
                         checked=cell.special == special)
        return menu

    def _wall_menu(self, coord: ChunkCoord, row: int, col: int, cell: Cell,
                   side: Side) -> QMenu:
        """Wall state submenu and door/window toggles of one side."""
        menu = QMenu(self)
        change = lambda t: (lambda: self._change_cell(coord, row, col, cell, t))

        wall_menu = menu.addMenu(f"Wall {side.value}")
        for state in CellWall:
            self._action(wall_menu, state.value, change(updates.set_wall(side, state)),
                         checked=cell.wall(side) == state)
        self._action(menu, f"Door {side.value}", change(updates.toggle_door(side)),
                     checked=cell.door(side))
        self._action(menu, f"Window {side.value}", change(updates.toggle_window(side)),
                     checked=cell.window(side))
        return menu

    def _chunk_menu(self, chunk: Chunk) -> QMenu:
        """Origin, delete and whole-chunk fills."""
        menu = QMenu(self)
        coord = chunk.coord
        request = lambda op, args, text: (
            lambda: self.edit_requested.emit(EditRequest(op, args, text))
        )
        fill = lambda transform, text: request(
            updates.fill_chunk, (coord, transform), f"{text} in chunk {coord}"
        )

        self._action(menu, "Set As Origin Chunk", lambda: self.origin_requested.emit(coord))
        self._action(menu, "Delete Chunk",
                     request(updates.delete_chunk, (coord,), f"Delete chunk {coord}"))

        walls = menu.addMenu("Fill Walls")
        for state in CellWall:
            self._action(walls, state.value,
                         fill(updates.fill_walls(state), f"Fill walls {state.value}"))
        specials = menu.addMenu("Fill Special")
        for special in CellSpecial:
            self._action(specials, special.value,
                         fill(updates.set_special(special), f"Fill special {special.value}"))
        ceilings = menu.addMenu("Fill Ceilings")
        for state in FLOOR_STATES:
            self._action(ceilings, state.value,
                         fill(updates.set_ceiling(state), f"Fill ceilings {state.value}"))
        floors = menu.addMenu("Fill Floors")
        for state in FLOOR_STATES:
            self._action(floors, state.value,
                         fill(updates.set_floor(state), f"Fill floors {state.value}"))
        return menu

    def _heading_menu(self, heading: HeadingItem) -> QMenu:
        """Clear and floor/ceiling fills for a column (X) or row (Z) on every layer."""
        menu = QMenu(self)
        for text, request in heading_requests(heading.axis, heading.value):
            self._action(menu, text, lambda _=False, r=request: self.edit_requested.emit(r))
        return menu
