"""Core definitions: tile alphabet, directions and character mappings."""

from .definitions import (
    Tile,
    Direction,
    DIRECTION_OFFSETS,
    OPPOSITE_DIRECTION,
    CHAR_TO_TILE,
    TILE_TO_CHAR,
    CHAR_TO_DIRECTION,
    DIRECTION_TO_CHAR,
    ID_TO_NAME,
)

__all__ = [
    'Tile',
    'Direction',
    'DIRECTION_OFFSETS',
    'OPPOSITE_DIRECTION',
    'CHAR_TO_TILE',
    'TILE_TO_CHAR',
    'CHAR_TO_DIRECTION',
    'DIRECTION_TO_CHAR',
    'ID_TO_NAME',
]
