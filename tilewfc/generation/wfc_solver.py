"""
Even Simpler Tiled Model Solver
===============================

Fills a blank grid one cell at a time from learned adjacency rules.

Algorithm:
    1. Initialize entropy grid from the superposition grid
    2. Repeat:
       a. Select lowest entropy cell (row-major tie-break)
       b. If none left -> RESOLVED
       c. Weighted collapse of that cell, zero its entropy
       d. Propagate to the 4-neighborhood
          (empty neighbor -> CONTRADICTED, no backtracking)

Propagation modes (WFCConfig.propagation):
    "local"   Single hop. Only the four neighbors of the collapsed cell are
              filtered, and resolved neighbors are left untouched. A cell that
              becomes a singleton through filtering has entropy 0, so it is
              never selected and never propagates itself.
    "cascade" FIFO queue. Every cell that becomes a singleton, however it got
              there, propagates in turn. Resolved neighbors are still checked
              against the permitted set, so a clash is reported instead of
              kept.

Usage:
    context = RuleContext.from_sample(parse_sample(DEFAULT_SAMPLE))
    solver = WFCSolver(width=32, height=10, context=context)
    result = solver.generate(seed=42)
    if result.success:
        print(render_tiles(result.to_tiles()))
    else:
        print(result.contradiction)

Research:
- Gumin (2016) "Wave Function Collapse"
- Karth & Smith (2017) "WaveFunctionCollapse is Constraint Solving"
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, List, Optional, Tuple

import numpy as np

from tilewfc.core.definitions import Tile, Direction, DIRECTION_OFFSETS
from tilewfc.generation.rules import RuleContext
from tilewfc.generation.superposition import (
    Superposition,
    SuperpositionGrid,
    init_superposition_grid,
    calculate_entropy,
    build_entropy_grid,
    find_lowest_entropy,
    collapse_superposition,
)

logger = logging.getLogger(__name__)

# Neighbor visiting order during propagation
PROPAGATION_ORDER = (Direction.LEFT, Direction.RIGHT, Direction.UP, Direction.DOWN)


# ============================================================================
# CONFIG & RESULTS
# ============================================================================

@dataclass
class WFCConfig:
    """Configuration for the solver."""
    propagation: str = "local"  # "local" or "cascade"
    log_interval: int = 100  # Debug progress every N collapses

    def __post_init__(self):
        if self.propagation not in ("local", "cascade"):
            raise ValueError(f"Unknown propagation mode {self.propagation!r}")


class SolveStatus(Enum):
    """Terminal state of a solve."""
    RESOLVED = "resolved"
    CONTRADICTED = "contradicted"


@dataclass
class ContradictionReport:
    """Where and why a neighbor ran out of candidates."""
    position: Tuple[int, int]  # (row, col) of the emptied cell
    source: Tuple[int, int]  # (row, col) of the propagating cell
    direction: Direction  # from source towards position
    tile: Tile  # value held by the source
    superpositions: SuperpositionGrid = field(default_factory=list, repr=False)

    def __str__(self) -> str:
        return (
            f"Contradiction at {self.position}: no candidates left {self.direction.name} "
            f"of {self.tile.name} at {self.source}"
        )


class ContradictionError(Exception):
    """Propagation emptied a superposition."""

    def __init__(self, report: ContradictionReport):
        super().__init__(str(report))
        self.report = report


@dataclass
class SolveResult:
    """Outcome of WFCSolver.generate()."""
    status: SolveStatus
    grid: Optional[np.ndarray] = None  # (H, W) tile ordinals, RESOLVED only
    contradiction: Optional[ContradictionReport] = None
    collapse_history: List[Tuple[int, int, Tile]] = field(default_factory=list)
    iterations: int = 0
    seed: Optional[int] = None

    @property
    def success(self) -> bool:
        return self.status == SolveStatus.RESOLVED

    def to_tiles(self) -> List[List[Tile]]:
        """Resolved grid as rows of Tile values."""
        if self.grid is None:
            raise ValueError(f"No grid available: solve ended {self.status.value}")
        return [[Tile(int(v)) for v in row] for row in self.grid]


# ============================================================================
# SOLVER
# ============================================================================

class WFCSolver:
    """
    Wave Function Collapse over a rectangular tile grid.

    Owns its superposition and entropy grids for the duration of a solve;
    the RuleContext is only read.

    Args:
        width: Target grid width
        height: Target grid height
        context: Learned rules, index and weights
        config: Solver configuration
        initial: Optional pre-seeded superposition grid (height x width)
    """

    def __init__(
        self,
        width: int,
        height: int,
        context: RuleContext,
        config: Optional[WFCConfig] = None,
        initial: Optional[SuperpositionGrid] = None,
    ):
        self.context = context
        self.config = config or WFCConfig()
        self.alphabet = context.alphabet

        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")

        if initial is None:
            initial = init_superposition_grid(width, height, self.alphabet)
        elif len(initial) != height or any(len(row) != width for row in initial):
            raise ValueError(f"Initial superposition grid does not match {width}x{height}")

        self.width = width
        self.height = height
        self._initial = [[tuple(sp) for sp in row] for row in initial]

        self.superposition: SuperpositionGrid = []
        self.entropy: np.ndarray = np.zeros((height, width), dtype=np.float64)
        self.collapse_history: List[Tuple[int, int, Tile]] = []
        self.rng = np.random.default_rng()
        self.reset()

        logger.debug(f"Initialized WFC solver: {width}x{height}, {len(self.alphabet)} tiles, {self.config.propagation} propagation")

    def reset(self):
        """Restore the initial superposition grid and its entropy cache."""
        self.superposition = [list(row) for row in self._initial]
        self.entropy = build_entropy_grid(self.context.weights, self.superposition, len(self.alphabet))
        self.collapse_history = []

    def generate(self, seed: Optional[int] = None) -> SolveResult:
        """
        Run the solve loop until every cell is resolved or a contradiction occurs.

        Args:
            seed: Random seed for reproducibility

        Returns:
            SolveResult with the resolved grid or a contradiction report
        """
        self.reset()
        self.rng = np.random.default_rng(seed)
        iterations = 0

        logger.info(f"Starting WFC solve {self.width}x{self.height} (seed={seed})")

        try:
            if self.config.propagation == "cascade":
                self._propagate_seeded_cells()

            while True:
                row, col = find_lowest_entropy(self.entropy)
                if row == -1:
                    break

                iterations += 1
                self.collapse_cell(row, col)
                self.propagate(row, col)

                if iterations % self.config.log_interval == 0:
                    logger.debug(f"Iteration {iterations}: {self.count_resolved()}/{self.width * self.height} cells resolved")

        except ContradictionError as e:
            logger.warning(f"WFC solve aborted after {iterations} collapses: {e}")
            return SolveResult(
                status=SolveStatus.CONTRADICTED,
                contradiction=e.report,
                collapse_history=list(self.collapse_history),
                iterations=iterations,
                seed=seed,
            )

        grid = np.array([[int(sp[0]) for sp in row] for row in self.superposition], dtype=int)
        logger.info(f"WFC solve complete: {iterations} collapses")

        return SolveResult(
            status=SolveStatus.RESOLVED,
            grid=grid,
            collapse_history=list(self.collapse_history),
            iterations=iterations,
            seed=seed,
        )

    def collapse_cell(self, row: int, col: int) -> Tile:
        """Collapse one cell by weighted choice and zero its entropy."""
        sp = collapse_superposition(self.context.weights, self.superposition[row][col], self.rng)
        self.superposition[row][col] = sp
        self.entropy[row, col] = 0.0
        self.collapse_history.append((row, col, sp[0]))
        return sp[0]

    def propagate(self, row: int, col: int):
        """
        Narrow the neighbors of a resolved cell.

        Raises:
            ContradictionError: If a neighbor is left without candidates
        """
        if self.config.propagation == "cascade":
            self._propagate_cascade(deque([(row, col)]))
        else:
            self._propagate_from(row, col)

    def _neighbors(self, row: int, col: int):
        for direction in PROPAGATION_ORDER:
            dr, dc = DIRECTION_OFFSETS[direction]
            nr, nc = row + dr, col + dc
            if 0 <= nr < self.height and 0 <= nc < self.width:
                yield nr, nc, direction

    def _filter_neighbor(self, row: int, col: int, nr: int, nc: int, direction: Direction, tile: Tile) -> Superposition:
        """Intersect a neighbor with what `tile` permits in `direction`."""
        permitted = self.context.index.allowed(direction, tile)
        filtered = tuple(t for t in self.superposition[nr][nc] if t in permitted)

        if not filtered:
            raise ContradictionError(ContradictionReport(
                position=(nr, nc),
                source=(row, col),
                direction=direction,
                tile=tile,
                superpositions=self.superposition_snapshot(),
            ))

        self.superposition[nr][nc] = filtered
        self.entropy[nr, nc] = calculate_entropy(self.context.weights, filtered, len(self.alphabet))
        return filtered

    def _propagate_from(self, row: int, col: int):
        sp = self.superposition[row][col]
        if len(sp) != 1:
            return

        tile = sp[0]
        for nr, nc, direction in self._neighbors(row, col):
            # Resolved cells are never re-opened
            if len(self.superposition[nr][nc]) == 1:
                continue
            self._filter_neighbor(row, col, nr, nc, direction, tile)

    def _propagate_cascade(self, queue: Deque[Tuple[int, int]]):
        while queue:
            row, col = queue.popleft()
            sp = self.superposition[row][col]
            if len(sp) != 1:
                continue
            tile = sp[0]

            for nr, nc, direction in self._neighbors(row, col):
                before = len(self.superposition[nr][nc])
                after = self._filter_neighbor(row, col, nr, nc, direction, tile)
                if before > 1 and len(after) == 1:
                    queue.append((nr, nc))

    def _propagate_seeded_cells(self):
        seeded = deque(
            (r, c)
            for r in range(self.height)
            for c in range(self.width)
            if len(self.superposition[r][c]) == 1
        )
        if seeded:
            logger.debug(f"Propagating {len(seeded)} pre-resolved cells")
            self._propagate_cascade(seeded)

    def count_resolved(self) -> int:
        return sum(1 for row in self.superposition for sp in row if len(sp) == 1)

    def superposition_snapshot(self) -> SuperpositionGrid:
        """Copy of the current superposition grid for renderers."""
        return [list(row) for row in self.superposition]
