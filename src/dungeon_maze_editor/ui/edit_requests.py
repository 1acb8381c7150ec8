"""
Edit requests emitted by the grid canvas.

A request names a pure structure operation and its arguments. The editor
widget runs it through EditorSession.apply(). Kept free of Qt so the
requests behind each menu can be checked without a display.
"""

from dataclasses import dataclass
from typing import Callable, List, Tuple

from ..world.data_model import CellWall
from ..world import updates


@dataclass(frozen=True)
class EditRequest:
    """A structure operation to run as ``operation(structure, *args)``."""
    operation: Callable
    args: Tuple
    description: str


def heading_requests(axis: str, value: int) -> List[Tuple[str, EditRequest]]:
    """Menu entries of a column (``axis == 'x'``) or row (``'z'``) heading.

    Every entry acts on all chunks with that X (or Z), on every layer.
    """
    if axis == 'x':
        clear_op, fill_op = updates.clear_column, updates.fill_column
    else:
        clear_op, fill_op = updates.clear_row, updates.fill_row
    where = f"{axis.upper()}: {value}, all layers"

    def fill(transform, text):
        return text, EditRequest(fill_op, (value, transform), f"{text} ({where})")

    return [
        ("Clear", EditRequest(clear_op, (value,), f"Clear ({where})")),
        fill(updates.set_ceiling(CellWall.SOLID), "All Ceilings"),
        fill(updates.set_ceiling(CellWall.NONE), "Clear Ceilings"),
        fill(updates.set_floor(CellWall.SOLID), "All Floors"),
        fill(updates.set_floor(CellWall.NONE), "Clear Floors"),
    ]
