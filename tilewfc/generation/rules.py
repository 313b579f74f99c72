"""
Adjacency Rule Learning
=======================

Derives local constraints from a fully-specified sample grid.

For every cell, one rule is emitted towards each in-bounds neighbor:

    (tile, neighbor, direction)  =  "tile was seen with neighbor in direction"

Rules are purely empirical. Observing (SEA, COAST, RIGHT) says nothing about
(COAST, SEA, LEFT) unless the sample shows that adjacency from the other side
as well. There is no wraparound at the edges.

Tile frequencies across the sample become the collapse weights.

Usage:
    context = RuleContext.from_sample(parse_sample(DEFAULT_SAMPLE))
    context.index.allowed(Direction.RIGHT, Tile.SEA)
    # frozenset({<Tile.SEA: 0>, <Tile.COAST: 1>})
"""

import logging
from collections import Counter, defaultdict
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, FrozenSet, List, Mapping, Sequence, Tuple

import numpy as np

from tilewfc.core.definitions import Tile, Direction, ID_TO_NAME

logger = logging.getLogger(__name__)


# ============================================================================
# DATA CLASSES
# ============================================================================

@dataclass(frozen=True, order=True)
class AdjacencyRule:
    """A cell of `tile` was observed with `neighbor` immediately in `direction`."""
    tile: Tile
    neighbor: Tile
    direction: Direction

    def __repr__(self) -> str:
        return f"AdjacencyRule({self.tile.name}, {self.neighbor.name}, {self.direction.name})"


TileGrid = Sequence[Sequence[Tile]]


def _as_tile_rows(grid) -> List[List[Tile]]:
    """Normalize a list of rows or a 2-D array of ordinals into Tile rows."""
    if isinstance(grid, np.ndarray):
        if grid.ndim != 2:
            raise ValueError(f"Sample grid must be 2-D, got shape {grid.shape}")
        grid = grid.tolist()

    rows = [[Tile(int(cell)) for cell in row] for row in grid]

    if not rows or not rows[0]:
        raise ValueError("Sample grid must have at least one row and one column")

    width = len(rows[0])
    for i, row in enumerate(rows):
        if len(row) != width:
            raise ValueError(f"Sample grid is not rectangular: row {i} has {len(row)} cells, expected {width}")

    return rows


# ============================================================================
# RULE LEARNER
# ============================================================================

def infer_rules(grid: TileGrid) -> List[AdjacencyRule]:
    """
    Collect every adjacency observed in the sample.

    Args:
        grid: Rectangular grid of tiles (list of rows or (H, W) ordinal array)

    Returns:
        Deduplicated rules sorted by (tile, neighbor, direction)
    """
    rows = _as_tile_rows(grid)
    H, W = len(rows), len(rows[0])

    rules = set()
    for r in range(H):
        for c in range(W):
            tile = rows[r][c]

            # East
            if c < W - 1:
                rules.add(AdjacencyRule(tile, rows[r][c + 1], Direction.RIGHT))

            # West
            if c > 0:
                rules.add(AdjacencyRule(tile, rows[r][c - 1], Direction.LEFT))

            # North
            if r > 0:
                rules.add(AdjacencyRule(tile, rows[r - 1][c], Direction.UP))

            # South
            if r < H - 1:
                rules.add(AdjacencyRule(tile, rows[r + 1][c], Direction.DOWN))

    return sorted(rules)


def infer_weights(grid: TileGrid) -> Dict[Tile, int]:
    """Count occurrences of each tile in the sample."""
    rows = _as_tile_rows(grid)
    counter = Counter(tile for row in rows for tile in row)
    return {tile: counter[tile] for tile in sorted(counter)}


# ============================================================================
# RULE INDEX
# ============================================================================

class RuleIndex:
    """
    Lookup from (direction, tile) to the neighbor tiles permitted there.

    A key that was never observed maps to the empty set: nothing is
    permitted. Built once; read-only afterwards.
    """

    _EMPTY: FrozenSet[Tile] = frozenset()

    def __init__(self, rules: Sequence[AdjacencyRule]):
        grouped: Dict[Tuple[Direction, Tile], set] = defaultdict(set)
        for rule in rules:
            grouped[(rule.direction, rule.tile)].add(rule.neighbor)

        self._table: Dict[Tuple[Direction, Tile], FrozenSet[Tile]] = {
            key: frozenset(neighbors) for key, neighbors in grouped.items()
        }

    def allowed(self, direction: Direction, tile: Tile) -> FrozenSet[Tile]:
        """Neighbors permitted in `direction` of a cell holding `tile`."""
        return self._table.get((direction, tile), self._EMPTY)

    def __contains__(self, key: Tuple[Direction, Tile]) -> bool:
        return key in self._table

    def __len__(self) -> int:
        return len(self._table)

    def as_dict(self) -> Dict[Tuple[Direction, Tile], FrozenSet[Tile]]:
        return dict(self._table)

    def __repr__(self) -> str:
        return f"RuleIndex({len(self._table)} keys)"


# ============================================================================
# RULE CONTEXT
# ============================================================================

@dataclass(frozen=True, eq=False)
class RuleContext:
    """
    Everything the solver reads: learned rules, their index and tile weights.

    Immutable, so one context can back any number of solves. Weights are held
    behind a read-only mapping; contexts compare and hash by identity.
    """
    rules: Tuple[AdjacencyRule, ...]
    weights: Mapping[Tile, int]
    index: RuleIndex

    def __post_init__(self):
        object.__setattr__(self, "weights", MappingProxyType(dict(self.weights)))
        object.__setattr__(self, "rules", tuple(self.rules))
        for tile, weight in self.weights.items():
            if weight <= 0:
                raise ValueError(f"Tile {tile.name} has non-positive weight {weight}")
        for rule in self.rules:
            for tile in (rule.tile, rule.neighbor):
                if tile not in self.weights:
                    raise ValueError(f"Tile {tile.name} appears in {rule!r} but has no weight")

    @property
    def alphabet(self) -> Tuple[Tile, ...]:
        """Tiles that can be collapsed into, in ordinal order."""
        return tuple(sorted(self.weights))

    @classmethod
    def from_rules(cls, rules: Sequence[AdjacencyRule], weights: Mapping[Tile, int]) -> 'RuleContext':
        return cls(rules=tuple(rules), weights=dict(weights), index=RuleIndex(rules))

    @classmethod
    def from_sample(cls, grid: TileGrid) -> 'RuleContext':
        """Run the learner over a sample grid and index the result."""
        rules = infer_rules(grid)
        weights = infer_weights(grid)

        logger.info(
            f"Learned {len(rules)} adjacency rules over {len(weights)} tiles "
            f"({', '.join(f'{ID_TO_NAME[int(t)]}={w}' for t, w in weights.items())})"
        )
        return cls.from_rules(rules, weights)
