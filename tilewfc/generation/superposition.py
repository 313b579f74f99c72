"""
Superposition Model
===================

Per-cell candidate sets, their entropy scores and weighted collapse.

A superposition is an ordered tuple of candidate tiles. Order only matters
for the weighted walk in collapse_superposition().

Entropy:
    size 1  -> 0 (resolved; the selection scan skips it)
    size >1 -> log(sum of candidate weights) / log(alphabet size)

The entropy grid is a cache of the superposition grid and is recomputed
cell-by-cell whenever a superposition changes.
"""

import math
from typing import Dict, List, Sequence, Tuple

import numpy as np

from tilewfc.core.definitions import Tile

Superposition = Tuple[Tile, ...]
SuperpositionGrid = List[List[Superposition]]


class EmptySuperpositionError(ValueError):
    """A core function was handed a superposition with no candidates."""


def init_superposition_grid(width: int, height: int, alphabet: Sequence[Tile]) -> SuperpositionGrid:
    """
    Create a height x width grid where every cell holds the full alphabet.

    Raises:
        ValueError: If either dimension is not a positive integer
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
    if not alphabet:
        raise ValueError("Alphabet must contain at least one tile")

    full = tuple(alphabet)
    return [[full for _ in range(width)] for _ in range(height)]


def superposition_weight(weights: Dict[Tile, int], sp: Superposition) -> int:
    """Total observed frequency of the candidates."""
    if not sp:
        raise EmptySuperpositionError("Superposition is empty")
    return sum(weights[t] for t in sp)


def calculate_entropy(weights: Dict[Tile, int], sp: Superposition, alphabet_size: int) -> float:
    """Frequency-weighted uncertainty of one cell. 0 means resolved."""
    if not sp:
        raise EmptySuperpositionError("Superposition is empty")
    if len(sp) == 1:
        return 0.0

    return math.log(superposition_weight(weights, sp)) / math.log(alphabet_size)


def build_entropy_grid(weights: Dict[Tile, int], grid: SuperpositionGrid, alphabet_size: int) -> np.ndarray:
    """(H, W) float array of entropies shadowing `grid`."""
    entropy = np.zeros((len(grid), len(grid[0])), dtype=np.float64)
    for r, row in enumerate(grid):
        for c, sp in enumerate(row):
            entropy[r, c] = calculate_entropy(weights, sp, alphabet_size)
    return entropy


def find_lowest_entropy(entropy: np.ndarray) -> Tuple[int, int]:
    """
    Locate the unresolved cell with the smallest entropy.

    Zero entries are resolved and skipped. Ties go to the first cell in
    row-major order.

    Returns:
        (row, col), or (-1, -1) if every cell is resolved
    """
    candidates = np.where(entropy == 0, np.inf, entropy)
    flat_idx = int(np.argmin(candidates))

    if not np.isfinite(candidates.flat[flat_idx]):
        return (-1, -1)

    row, col = np.unravel_index(flat_idx, entropy.shape)
    return (int(row), int(col))


def collapse_superposition(
    weights: Dict[Tile, int],
    sp: Superposition,
    rng: np.random.Generator,
) -> Superposition:
    """
    Pick one candidate at random, biased by weight.

    Draws r uniformly from [0, total] (inclusive), then walks the candidates
    in order subtracting each weight until r <= 0. A singleton is returned
    as-is without touching the generator.

    Raises:
        EmptySuperpositionError: If `sp` is empty
        RuntimeError: If the walk never selects a candidate
    """
    if not sp:
        raise EmptySuperpositionError("Superposition is empty")
    if len(sp) == 1:
        return sp

    total = superposition_weight(weights, sp)
    r = int(rng.integers(0, total, endpoint=True))

    for tile in sp:
        r -= weights[tile]
        if r <= 0:
            return (tile,)

    raise RuntimeError(f"Could not collapse {[t.name for t in sp]} (total weight {total})")
