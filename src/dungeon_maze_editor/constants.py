"""
Shared constants for the world-structure editor.

Grid dimensions, document formatting and viewport tuning values live here
so the model, the document layer and the UI agree on them.
"""

# =============================================================================
# WORLD STRUCTURE GRID
# =============================================================================

# Cells per chunk side (chunks are GRID_SIZE x GRID_SIZE cells)
GRID_SIZE = 4

# Label carried by chunks that are not the origin chunk of any structure
NO_WORLD_STRUCTURE = "None"

# =============================================================================
# DOCUMENTS
# =============================================================================

DOCUMENT_INDENT = 4
DOCUMENT_SUFFIX = ".json"
DEFAULT_DOCUMENT_NAME = "untitled"

# =============================================================================
# VIEWPORT
# =============================================================================

ZOOM_STEP = 0.1
MIN_ZOOM = 0.1
MAX_ZOOM = 5.0

# Edge length of one chunk on screen at zoom 1.0
CHUNK_PIXELS = 400.0

# Fraction of a cell edge that belongs to a wall hit zone
WALL_HIT_FRACTION = 0.1

# =============================================================================
# HISTORY
# =============================================================================

MAX_UNDO_DEPTH = 100
