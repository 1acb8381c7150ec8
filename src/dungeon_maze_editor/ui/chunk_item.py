"""
QGraphicsItems for the chunk grid.

- ChunkItem: a chunk drawn as its cell grid (floor/ceiling fill, walls,
  doors, windows, specials) with the origin marker in the top-right corner
- EmptySlotItem: "add chunk" placeholder for a window position with no chunk
- HeadingItem: X or Z label along the window edge (column/row actions)
- PlusItem: button adding a chunk beyond the window edge

Items only draw and report what lies under the pointer. Edits are issued by
the canvas.
"""

from dataclasses import dataclass
from typing import Optional

from PyQt5.QtWidgets import (
    QGraphicsItem, QGraphicsRectItem, QGraphicsEllipseItem,
    QStyleOptionGraphicsItem, QWidget,
)
from PyQt5.QtCore import Qt, QRectF, QPointF
from PyQt5.QtGui import QPainter, QColor, QPen, QBrush, QFont

from ..constants import CHUNK_PIXELS, GRID_SIZE, WALL_HIT_FRACTION
from ..world.data_model import Cell, CellSpecial, CellWall, Chunk, ChunkCoord, Side
from ..world.grid_layout import EmptySlot
from . import style_constants as sc

# Origin marker size as a fraction of the chunk edge
MARKER_FRACTION = 0.06

SPECIAL_LABELS = {
    CellSpecial.CHAIR: "Ch",
    CellSpecial.TREASURE_CHEST: "TC",
    CellSpecial.STAIRCASE: "SC",
    CellSpecial.STAIRS: "St",
}

# (start, end) fractions along the side left solid around a gap
WALL_GAPS = {
    CellWall.SOLID_WITH_DOOR_GAP: (0.3, 0.7),
    CellWall.SOLID_WITH_WINDOW_GAP: (0.4, 0.6),
}


@dataclass(frozen=True)
class ChunkHit:
    """What lies under the pointer inside a ChunkItem.

    ``row``/``col`` are None for the origin marker. ``side`` is set when the
    pointer is on the wall strip of a cell and None for the cell interior.
    """
    origin_marker: bool
    row: Optional[int] = None
    col: Optional[int] = None
    side: Optional[Side] = None


def _side_rect(rect: QRectF, side: Side, thickness: float,
               start: float = 0.0, end: float = 1.0) -> QRectF:
    """Strip of ``rect`` along ``side`` between two fractions of its length."""
    if side == Side.TOP:
        return QRectF(rect.left() + rect.width() * start, rect.top(),
                      rect.width() * (end - start), thickness)
    if side == Side.BOTTOM:
        return QRectF(rect.left() + rect.width() * start, rect.bottom() - thickness,
                      rect.width() * (end - start), thickness)
    if side == Side.LEFT:
        return QRectF(rect.left(), rect.top() + rect.height() * start,
                      thickness, rect.height() * (end - start))
    return QRectF(rect.right() - thickness, rect.top() + rect.height() * start,
                  thickness, rect.height() * (end - start))


class ChunkItem(QGraphicsItem):
    """Graphics item drawing one chunk of the visible layer."""

    def __init__(self, chunk: Chunk, size: float = CHUNK_PIXELS):
        super().__init__()
        self._chunk = chunk
        self._size = size
        self.setAcceptHoverEvents(True)
        self._hover: Optional[ChunkHit] = None

    @property
    def chunk(self) -> Chunk:
        return self._chunk

    @property
    def coord(self) -> ChunkCoord:
        return self._chunk.coord

    def _cells_per_side(self) -> int:
        # Oversized grids kept by the loader are drawn smaller, never clipped
        widest = max((len(row) for row in self._chunk.cells), default=0)
        return max(GRID_SIZE, len(self._chunk.cells), widest)

    def _cell_size(self) -> float:
        return self._size / self._cells_per_side()

    def _cell_rect(self, row: int, col: int) -> QRectF:
        size = self._cell_size()
        return QRectF(col * size, row * size, size, size)

    def boundingRect(self) -> QRectF:
        return QRectF(0, 0, self._size, self._size)

    # ---------------------------------------------------------------
    # Hit testing
    # ---------------------------------------------------------------

    def hit_test(self, pos: QPointF) -> Optional[ChunkHit]:
        """Locate ``pos`` (item coordinates) on the chunk."""
        x, y = pos.x(), pos.y()
        if not (0 <= x < self._size and 0 <= y < self._size):
            return None

        marker = self._size * MARKER_FRACTION
        if x >= self._size - marker and y <= marker:
            return ChunkHit(origin_marker=True)

        size = self._cell_size()
        row, col = int(y // size), int(x // size)
        if row >= len(self._chunk.cells) or col >= len(self._chunk.cells[row]):
            return None

        fx = (x - col * size) / size
        fy = (y - row * size) / size
        side = None
        if fy < WALL_HIT_FRACTION:
            side = Side.TOP
        elif fy > 1.0 - WALL_HIT_FRACTION:
            side = Side.BOTTOM
        elif fx < WALL_HIT_FRACTION:
            side = Side.LEFT
        elif fx > 1.0 - WALL_HIT_FRACTION:
            side = Side.RIGHT
        return ChunkHit(origin_marker=False, row=row, col=col, side=side)

    def hoverMoveEvent(self, event):
        hit = self.hit_test(event.pos())
        if hit != self._hover:
            self._hover = hit
            self.update()
        super().hoverMoveEvent(event)

    def hoverLeaveEvent(self, event):
        self._hover = None
        self.update()
        super().hoverLeaveEvent(event)

    # ---------------------------------------------------------------
    # Painting
    # ---------------------------------------------------------------

    def paint(self, painter: QPainter, option: QStyleOptionGraphicsItem,
              widget: QWidget = None):
        for row, col, cell in self._chunk.iter_cells():
            self._paint_cell(painter, self._cell_rect(row, col), cell)

        if self._hover is not None and not self._hover.origin_marker:
            self._paint_hover(painter)

        painter.setBrush(Qt.NoBrush)
        painter.setPen(QPen(QColor(sc.CHUNK_BORDER), 2))
        painter.drawRect(self.boundingRect())

        # Origin marker: quarter disc in the top-right corner
        radius = self._size * MARKER_FRACTION
        color = sc.ORIGIN_MARKER if self._chunk.is_origin else sc.PLAIN_MARKER
        painter.setPen(Qt.NoPen)
        painter.setBrush(QBrush(QColor(color)))
        painter.drawPie(QRectF(self._size - radius, -radius, radius * 2, radius * 2),
                        180 * 16, 90 * 16)

    def _paint_cell(self, painter: QPainter, rect: QRectF, cell: Cell):
        ceiling = cell.ceiling == CellWall.SOLID
        floor = cell.floor == CellWall.SOLID

        painter.setPen(Qt.NoPen)
        if ceiling:
            painter.setBrush(QBrush(QColor(sc.CELL_CEILING)))
        elif floor:
            painter.setBrush(QBrush(QColor(sc.CELL_FLOOR)))
        else:
            painter.setBrush(QBrush(QColor(sc.CELL_OPEN)))
        painter.drawRect(rect)
        if ceiling and floor:
            painter.setBrush(QBrush(QColor(sc.CELL_FLOOR), Qt.BDiagPattern))
            painter.drawRect(rect)

        painter.setBrush(Qt.NoBrush)
        painter.setPen(QPen(QColor(sc.CELL_BORDER), 1))
        painter.drawRect(rect)

        label = SPECIAL_LABELS.get(cell.special)
        if label:
            box = QRectF(rect.center().x() - rect.width() * 0.15,
                         rect.center().y() - rect.height() * 0.125,
                         rect.width() * 0.3, rect.height() * 0.25)
            fill = sc.TREASURE_FILL if cell.special == CellSpecial.TREASURE_CHEST else sc.SPECIAL_FILL
            painter.setBrush(QBrush(QColor(fill)))
            painter.setPen(QPen(QColor(sc.WALL_COLOR), 1))
            painter.drawRect(box)
            font = QFont()
            font.setPointSizeF(max(6.0, rect.height() * 0.12))
            painter.setFont(font)
            painter.drawText(box, Qt.AlignCenter, label)

        thickness = rect.width() * WALL_HIT_FRACTION
        painter.setPen(Qt.NoPen)
        for side in Side:
            self._paint_side(painter, rect, cell, side, thickness)

    def _paint_side(self, painter: QPainter, rect: QRectF, cell: Cell,
                    side: Side, thickness: float):
        wall = cell.wall(side)
        if wall != CellWall.NONE:
            painter.setBrush(QBrush(QColor(sc.WALL_COLOR)))
            gap = WALL_GAPS.get(wall)
            if gap is None:
                painter.drawRect(_side_rect(rect, side, thickness))
            else:
                painter.drawRect(_side_rect(rect, side, thickness, 0.0, gap[0]))
                painter.drawRect(_side_rect(rect, side, thickness, gap[1], 1.0))

        if cell.window(side):
            painter.setBrush(QBrush(QColor(sc.WINDOW_COLOR)))
            painter.drawRect(_side_rect(rect, side, thickness * 0.6, 0.35, 0.65))
        if cell.door(side):
            painter.setBrush(QBrush(QColor(sc.DOOR_COLOR)))
            painter.drawRect(_side_rect(rect, side, thickness, 0.35, 0.65))

    def _paint_hover(self, painter: QPainter):
        rect = self._cell_rect(self._hover.row, self._hover.col)
        if self._hover.side is not None:
            rect = _side_rect(rect, self._hover.side, rect.width() * WALL_HIT_FRACTION)
        highlight = QColor("#cbd5e1")
        highlight.setAlpha(180)
        painter.setPen(Qt.NoPen)
        painter.setBrush(QBrush(highlight))
        painter.drawRect(rect)


class EmptySlotItem(QGraphicsRectItem):
    """Placeholder drawn where the layer has no chunk. Click to add one."""

    def __init__(self, slot: EmptySlot, y: int, size: float = CHUNK_PIXELS):
        super().__init__(0, 0, size, size)
        self._slot = slot
        self._y = y
        self.setBrush(QBrush(QColor(sc.EMPTY_SLOT_FILL)))
        self.setPen(QPen(QColor(sc.CHUNK_BORDER), 2))
        self.setCursor(Qt.PointingHandCursor)

    @property
    def coord(self) -> ChunkCoord:
        return self._slot.coord(self._y)

    def paint(self, painter: QPainter, option: QStyleOptionGraphicsItem,
              widget: QWidget = None):
        super().paint(painter, option, widget)
        font = QFont()
        font.setPointSizeF(14)
        painter.setFont(font)
        painter.setPen(QPen(QColor(sc.EMPTY_SLOT_TEXT)))
        painter.drawText(self.rect(), Qt.AlignCenter, f"add chunk: {self.coord}")


class HeadingItem(QGraphicsRectItem):
    """Column (X) or row (Z) heading along the window edge."""

    def __init__(self, axis: str, value: int, rect: QRectF):
        super().__init__(rect)
        self.axis = axis
        self.value = value
        self.setBrush(QBrush(QColor(sc.HEADING_FILL)))
        self.setPen(Qt.NoPen)

    @property
    def label(self) -> str:
        return f"{self.axis.upper()}: {self.value}"

    def paint(self, painter: QPainter, option: QStyleOptionGraphicsItem,
              widget: QWidget = None):
        super().paint(painter, option, widget)
        font = QFont()
        font.setPointSizeF(14)
        font.setBold(True)
        painter.setFont(font)
        painter.setPen(QPen(QColor(sc.HEADING_TEXT)))
        painter.drawText(self.rect(), Qt.AlignCenter, self.label)


class PlusItem(QGraphicsEllipseItem):
    """Button adding a chunk next to ``coord`` on ``side``."""

    def __init__(self, coord: ChunkCoord, side: Side, center: QPointF, diameter: float):
        super().__init__(center.x() - diameter / 2, center.y() - diameter / 2,
                         diameter, diameter)
        self.coord = coord
        self.side = side
        self.setBrush(QBrush(QColor(sc.PLUS_BUTTON_FILL)))
        self.setPen(QPen(QColor(sc.CHUNK_BORDER), 1))
        self.setCursor(Qt.PointingHandCursor)
        self.setToolTip(f"Add chunk {side.value.lower()} of {coord}")

    def paint(self, painter: QPainter, option: QStyleOptionGraphicsItem,
              widget: QWidget = None):
        super().paint(painter, option, widget)
        rect = self.rect()
        arm = rect.width() * 0.25
        center = rect.center()
        painter.setPen(QPen(QColor(sc.WALL_COLOR), 3))
        painter.drawLine(QPointF(center.x() - arm, center.y()), QPointF(center.x() + arm, center.y()))
        painter.drawLine(QPointF(center.x(), center.y() - arm), QPointF(center.x(), center.y() + arm))
