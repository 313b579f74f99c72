"""
Sample Loader
=============

Turns a literal text sample into a grid of tiles.

Format:
    One row per line, one character per cell. Blank lines are dropped,
    whitespace inside a line is ignored and characters are matched
    case-insensitively:

        sscss
        sclcc
        sclcs
        clllc

Anything outside CHAR_TO_TILE is rejected here, so the rule learner only
ever sees well-formed grids.
"""

import logging
from pathlib import Path
from typing import List, Union

from tilewfc.core.definitions import (
    Tile,
    Direction,
    CHAR_TO_TILE,
    CHAR_TO_DIRECTION,
)

logger = logging.getLogger(__name__)


DEFAULT_SAMPLE = """
sscss
sclcc
sclcs
clllc
"""


class SampleFormatError(ValueError):
    """Raised when a text sample cannot be turned into a tile grid."""


def parse_tile(char: str) -> Tile:
    """Convert a single sample character to a Tile."""
    try:
        return CHAR_TO_TILE[char.lower()]
    except KeyError:
        raise SampleFormatError(f"Invalid tile character {char!r}") from None


def parse_direction(token: str) -> Direction:
    """Convert a compass letter (n/s/e/w) to a Direction."""
    try:
        return CHAR_TO_DIRECTION[token.strip().lower()]
    except KeyError:
        raise SampleFormatError(f"Invalid direction {token!r}") from None


def parse_sample(text: str) -> List[List[Tile]]:
    """
    Parse a text sample into a rectangular tile grid.

    Args:
        text: Sample text, one row per line

    Returns:
        List of rows, each a list of Tile values

    Raises:
        SampleFormatError: On unknown characters, ragged rows or an empty sample
    """
    grid: List[List[Tile]] = []

    for line_no, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue

        row = []
        for col_no, char in enumerate(line, start=1):
            if char.isspace():
                continue
            if char.lower() not in CHAR_TO_TILE:
                raise SampleFormatError(
                    f"Invalid tile character {char!r} at line {line_no}, column {col_no}"
                )
            row.append(CHAR_TO_TILE[char.lower()])

        if grid and len(row) != len(grid[0]):
            raise SampleFormatError(
                f"Row at line {line_no} has {len(row)} cells, expected {len(grid[0])}"
            )
        grid.append(row)

    if not grid:
        raise SampleFormatError("Sample contains no cells")

    logger.debug(f"Parsed sample: {len(grid)} rows x {len(grid[0])} cols")
    return grid


def load_sample(path: Union[str, Path]) -> List[List[Tile]]:
    """Read and parse a sample file."""
    path = Path(path)
    logger.info(f"Loading sample from {path}")
    return parse_sample(path.read_text(encoding='utf-8'))
