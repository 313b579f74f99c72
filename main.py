"""
TILEWFC - Main Entry Point
==========================
Sample -> Learn Rules -> Collapse -> Render

Usage:
    # Built-in sample, 32x10 map
    python main.py

    # Own sample, reproducible
    python main.py --sample coast.txt --width 40 --height 12 --seed 7

    # Show learned rules, propagate every singleton
    python main.py --show-rules --cascade

    # Plain output to a file
    python main.py --no-color --output map.txt
"""

import argparse
import sys
import logging
from pathlib import Path
from typing import List, Optional

import colorama

from tilewfc.data.sample_loader import (
    DEFAULT_SAMPLE,
    SampleFormatError,
    load_sample,
    parse_sample,
)
from tilewfc.generation.wfc_solver import WFCConfig
from tilewfc.pipeline.generation_pipeline import GenerationPipeline, PipelineConfig
from tilewfc.visualization.text_renderer import (
    render_rules,
    render_superpositions,
    render_tiles,
)

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='TileWFC - generate a tile map from a small sample'
    )

    parser.add_argument(
        '--sample', '-s', type=str,
        help='Path to a sample file (default: built-in coast sample)'
    )
    parser.add_argument(
        '--width', '-W', type=int, default=32,
        help='Output width in tiles (default: 32)'
    )
    parser.add_argument(
        '--height', '-H', type=int, default=10,
        help='Output height in tiles (default: 10)'
    )
    parser.add_argument(
        '--seed', type=int,
        help='Base random seed (attempt n uses seed + n - 1)'
    )
    parser.add_argument(
        '--retries', '-r', type=int, default=5,
        help='Maximum solve attempts (default: 5)'
    )
    parser.add_argument(
        '--cascade', action='store_true',
        help='Propagate from every cell that becomes resolved, not just collapsed ones'
    )
    parser.add_argument(
        '--no-color', action='store_true',
        help='Plain characters instead of ANSI colors'
    )
    parser.add_argument(
        '--show-rules', action='store_true',
        help='Print the learned adjacency rules'
    )
    parser.add_argument(
        '--output', '-o', type=str,
        help='Write the generated map (plain characters) to this file'
    )
    parser.add_argument(
        '--verbose', '-v', action='store_true',
        help='Debug logging'
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.width <= 0 or args.height <= 0:
        parser.error("--width and --height must be positive")
    if args.retries < 1:
        parser.error("--retries must be at least 1")

    setup_logging(args.verbose)
    color = not args.no_color
    if color:
        colorama.just_fix_windows_console()

    try:
        sample = load_sample(args.sample) if args.sample else parse_sample(DEFAULT_SAMPLE)
    except (SampleFormatError, OSError) as e:
        logger.error(f"Could not read sample: {e}")
        return 2

    config = PipelineConfig(
        max_retries=args.retries,
        base_seed=args.seed,
        solver=WFCConfig(propagation='cascade' if args.cascade else 'local'),
    )
    pipeline = GenerationPipeline(sample, config)

    print("=== Sample ===")
    print(render_tiles(sample, color))

    if args.show_rules:
        print("\n=== Learned Rules ===")
        print(render_rules(pipeline.context.rules, color))

    outcome = pipeline.generate(args.width, args.height)

    if not outcome.success:
        report = outcome.result.contradiction
        print(f"\nNo map after {outcome.attempts} attempt(s). Last failure: {report}")
        print(render_superpositions(report.superpositions, color))
        return 1

    print(f"\n=== New Map (seed={outcome.result.seed}) ===")
    print(render_tiles(outcome.result.grid, color))

    if args.output:
        Path(args.output).write_text(render_tiles(outcome.result.grid) + '\n', encoding='utf-8')
        logger.info(f"Map written to {args.output}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
