"""
TileWFC - Tile Maps by Example
==============================

Learns adjacency constraints from a small sample map and fills a larger
blank grid with a wave-function-collapse style solver.

Submodules:
- core: Tile alphabet, directions and character mappings
- data: Text sample parsing
- generation: Rule learning, superposition model and the solver
- pipeline: Learn-once / solve-with-retries orchestration
- visualization: Plain and colorized text rendering

Flow:
    sample text -> parse_sample -> RuleContext.from_sample
                -> WFCSolver.generate -> SolveResult
"""

__version__ = "1.0.0"

__all__ = ['core', 'data', 'generation', 'pipeline', 'visualization']
