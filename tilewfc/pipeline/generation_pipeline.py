"""
Generation Pipeline with Retry Logic
====================================

Learns rules from a sample once, then restarts whole solves with fresh seeds
until one resolves.

The solver never backtracks, so a contradiction only means that particular
sequence of random choices failed. Retrying with another seed is the only
recovery.
"""

import time
import logging
from enum import Enum
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from tilewfc.generation.rules import RuleContext, TileGrid
from tilewfc.generation.wfc_solver import (
    WFCConfig,
    WFCSolver,
    SolveResult,
    ContradictionReport,
)

logger = logging.getLogger(__name__)


class GenerationStatus(Enum):
    """Status of a pipeline run."""
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class PipelineConfig:
    """Configuration for pipeline execution."""
    max_retries: int = 5
    base_seed: Optional[int] = None  # None = fresh entropy per attempt
    solver: WFCConfig = field(default_factory=WFCConfig)

    def __post_init__(self):
        if self.max_retries < 1:
            raise ValueError(f"max_retries must be at least 1, got {self.max_retries}")


@dataclass
class GenerationResult:
    """Result of a pipeline run."""
    status: GenerationStatus
    result: SolveResult  # Last solve attempted
    attempts: int = 1
    failures: List[ContradictionReport] = field(default_factory=list)
    elapsed: float = 0.0

    @property
    def success(self) -> bool:
        return self.status == GenerationStatus.SUCCESS


class GenerationPipeline:
    """
    Sample in, tile map out.

    Args:
        sample_grid: Fully-specified sample to learn rules from
        config: Retry and solver configuration
    """

    def __init__(self, sample_grid: TileGrid, config: Optional[PipelineConfig] = None):
        self.config = config or PipelineConfig()
        self.context = RuleContext.from_sample(sample_grid)

    def _seed_for(self, attempt: int) -> int:
        if self.config.base_seed is None:
            return int(np.random.SeedSequence().generate_state(1)[0])
        return self.config.base_seed + attempt - 1

    def generate(self, width: int, height: int) -> GenerationResult:
        """
        Solve a width x height map, retrying on contradiction.

        Returns:
            GenerationResult; `result` holds the resolved grid on success or
            the last contradiction on failure
        """
        failures: List[ContradictionReport] = []
        start_time = time.time()
        solver = WFCSolver(width, height, self.context, config=self.config.solver)

        for attempt in range(1, self.config.max_retries + 1):
            seed = self._seed_for(attempt)
            logger.info(f"[generate] Attempt {attempt}/{self.config.max_retries} (seed={seed})")

            result = solver.generate(seed=seed)

            if result.success:
                elapsed = time.time() - start_time
                logger.info(f"[generate] ✓ Success in {elapsed:.2f}s after {attempt} attempt(s)")
                return GenerationResult(
                    status=GenerationStatus.SUCCESS,
                    result=result,
                    attempts=attempt,
                    failures=failures,
                    elapsed=elapsed,
                )

            failures.append(result.contradiction)
            logger.warning(f"[generate] ✗ Attempt {attempt} failed: {result.contradiction}")

        logger.error(f"[generate] Failed after {self.config.max_retries} attempts")
        return GenerationResult(
            status=GenerationStatus.FAILED,
            result=result,
            attempts=self.config.max_retries,
            failures=failures,
            elapsed=time.time() - start_time,
        )
