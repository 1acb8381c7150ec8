"""
Centralized style constants for the world-structure editor UI.

Colors are hex strings so both stylesheets and QColor() can use them.
"""

# =============================================================================
# STATUS COLORS
# =============================================================================

SUCCESS_COLOR = "#4caf50"
WARNING_COLOR = "#FF9800"
DANGER_COLOR = "#f44336"

TEXT_SECONDARY = "#c0c0c0"

INDICATOR_BORDER = "#666666"     # Menu on/off swatch outline

# =============================================================================
# GRID CANVAS
# =============================================================================

CANVAS_BACKGROUND = "#c084fc"     # Purple backdrop around the layer window
CHUNK_BORDER = "#6b7280"
CELL_BORDER = "#9ca3af"

EMPTY_SLOT_FILL = "#cbd5e1"
EMPTY_SLOT_TEXT = "#1e293b"

HEADING_FILL = "#e9d5ff"
HEADING_TEXT = "#1e1b4b"

PLUS_BUTTON_FILL = "#e2e8f0"

# Cell fill by floor/ceiling state
CELL_OPEN = "#ffffff"
CELL_CEILING = "#3b82f6"          # Blue
CELL_FLOOR = "#ef4444"            # Red

WALL_COLOR = "#111827"
DOOR_COLOR = "#92400e"
WINDOW_COLOR = "#38bdf8"
SPECIAL_FILL = "#f8fafc"
TREASURE_FILL = "#b45309"

# Origin marker in the top-right corner of a chunk
ORIGIN_MARKER = "#4ade80"         # Green - origin chunk
PLAIN_MARKER = "#60a5fa"          # Blue - any other chunk

# White veil drawn over the grid while the drag modifier is held
DRAG_OVERLAY_ALPHA = 77

# =============================================================================
# TYPOGRAPHY
# =============================================================================

FONT_SIZE_SM = "11px"
