"""
Example: Watching the Solver Step by Step
=========================================

Drives WFCSolver by hand instead of calling generate(), printing the
superposition grid after each collapse. Numbers are candidate counts,
letters are resolved tiles.

Usage:
    python examples/step_through_demo.py
"""

import sys
import logging
from pathlib import Path

# Setup Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import numpy as np

from tilewfc.data.sample_loader import DEFAULT_SAMPLE, parse_sample
from tilewfc.generation.rules import RuleContext
from tilewfc.generation.superposition import find_lowest_entropy
from tilewfc.generation.wfc_solver import WFCSolver, ContradictionError
from tilewfc.visualization.text_renderer import render_rules, render_superpositions

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)


def main(width: int = 8, height: int = 4, seed: int = 3):
    context = RuleContext.from_sample(parse_sample(DEFAULT_SAMPLE))

    print("Learned rules:")
    print(render_rules(context.rules, color=True))

    solver = WFCSolver(width, height, context)
    solver.rng = np.random.default_rng(seed)

    step = 0
    while True:
        row, col = find_lowest_entropy(solver.entropy)
        if row == -1:
            break

        step += 1
        tile = solver.collapse_cell(row, col)
        try:
            solver.propagate(row, col)
        except ContradictionError as e:
            print(f"\nStep {step}: {e}")
            print(render_superpositions(e.report.superpositions, color=True))
            return

        print(f"\nStep {step}: ({row}, {col}) -> {tile.name}")
        print(render_superpositions(solver.superposition_snapshot(), color=True))

    print(f"\nResolved in {step} steps.")


if __name__ == "__main__":
    main()
