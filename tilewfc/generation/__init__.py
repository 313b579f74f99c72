"""Rule learning, superposition model and the WFC solver."""

from .rules import (
    AdjacencyRule,
    RuleIndex,
    RuleContext,
    infer_rules,
    infer_weights,
)
from .superposition import (
    Superposition,
    SuperpositionGrid,
    EmptySuperpositionError,
    init_superposition_grid,
    superposition_weight,
    calculate_entropy,
    build_entropy_grid,
    find_lowest_entropy,
    collapse_superposition,
)
from .wfc_solver import (
    WFCConfig,
    WFCSolver,
    SolveStatus,
    SolveResult,
    ContradictionReport,
    ContradictionError,
)

__all__ = [
    'AdjacencyRule',
    'RuleIndex',
    'RuleContext',
    'infer_rules',
    'infer_weights',
    'Superposition',
    'SuperpositionGrid',
    'EmptySuperpositionError',
    'init_superposition_grid',
    'superposition_weight',
    'calculate_entropy',
    'build_entropy_grid',
    'find_lowest_entropy',
    'collapse_superposition',
    'WFCConfig',
    'WFCSolver',
    'SolveStatus',
    'SolveResult',
    'ContradictionReport',
    'ContradictionError',
]
