"""
TILEWFC DEFINITIONS
===================
Central constants and type definitions for the entire project.

This file is the SINGLE SOURCE OF TRUTH for:
- Tile alphabet (tile IDs)
- Directions and grid offsets
- Character mappings for text samples

Import from here instead of duplicating constants across modules.
"""

from typing import Dict, Tuple
from enum import IntEnum

# ==========================================
# TILE ALPHABET
# ==========================================
# Ordinals double as sort order for rule listings

class Tile(IntEnum):
    """Distinguishable cell values."""
    SEA = 0
    COAST = 1
    LAND = 2


# ==========================================
# DIRECTIONS
# ==========================================

class Direction(IntEnum):
    """Compass directions from a cell towards its neighbor."""
    UP = 0
    DOWN = 1
    RIGHT = 2
    LEFT = 3


# (row delta, col delta)
DIRECTION_OFFSETS: Dict[Direction, Tuple[int, int]] = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.RIGHT: (0, 1),
    Direction.LEFT: (0, -1),
}

# Informational only. Rules are never mirrored through this table.
OPPOSITE_DIRECTION: Dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.RIGHT: Direction.LEFT,
    Direction.LEFT: Direction.RIGHT,
}

# ==========================================
# CHARACTER MAPPINGS
# ==========================================

CHAR_TO_TILE: Dict[str, Tile] = {
    's': Tile.SEA,
    'c': Tile.COAST,
    'l': Tile.LAND,
}

TILE_TO_CHAR: Dict[Tile, str] = {v: k for k, v in CHAR_TO_TILE.items()}

# Compass letters: n(orth), s(outh), e(ast), w(est)
CHAR_TO_DIRECTION: Dict[str, Direction] = {
    'n': Direction.UP,
    's': Direction.DOWN,
    'e': Direction.RIGHT,
    'w': Direction.LEFT,
}

DIRECTION_TO_CHAR: Dict[Direction, str] = {v: k for k, v in CHAR_TO_DIRECTION.items()}

# Reverse lookup for debugging
ID_TO_NAME: Dict[int, str] = {int(t): t.name for t in Tile}
