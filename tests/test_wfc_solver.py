"""
Tests for the WFC solver
========================

Covers:
1. Basic solves and result types
2. Contradiction reporting
3. Local (single-hop) propagation, including resolved-by-filtering cells
4. Cascade propagation and rule consistency of outputs
5. Reproducibility

Run: pytest tests/test_wfc_solver.py -v
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from tilewfc.core.definitions import Tile, Direction, DIRECTION_OFFSETS
from tilewfc.data.sample_loader import DEFAULT_SAMPLE, parse_sample
from tilewfc.generation.rules import AdjacencyRule, RuleContext
from tilewfc.generation.wfc_solver import (
    WFCConfig,
    WFCSolver,
    SolveStatus,
    ContradictionError,
)

S, C, L = Tile.SEA, Tile.COAST, Tile.LAND


@pytest.fixture
def coast_context():
    return RuleContext.from_sample(parse_sample(DEFAULT_SAMPLE))


@pytest.fixture
def one_sided_context():
    """Sample "sl": SEA may have LAND to its right, LAND nothing to its right."""
    return RuleContext.from_sample(parse_sample("sl"))


def assert_consistent(grid, rules):
    """Every adjacent pair in `grid` is a learned rule in both directions."""
    rule_set = set(rules)
    height, width = grid.shape
    for r in range(height):
        for c in range(width):
            for direction, (dr, dc) in DIRECTION_OFFSETS.items():
                nr, nc = r + dr, c + dc
                if 0 <= nr < height and 0 <= nc < width:
                    rule = AdjacencyRule(Tile(int(grid[r, c])), Tile(int(grid[nr, nc])), direction)
                    assert rule in rule_set, f"{rule!r} at ({r}, {c}) was never observed"


class TestBasicSolve:

    def test_single_cell_collapses_once(self, coast_context):
        result = WFCSolver(1, 1, coast_context).generate(seed=0)

        assert result.status == SolveStatus.RESOLVED
        assert result.success
        assert result.iterations == 1
        assert len(result.collapse_history) == 1
        assert result.grid.shape == (1, 1)
        assert Tile(int(result.grid[0, 0])) in coast_context.alphabet

    def test_grid_shape_and_values(self, coast_context):
        for seed in range(20):
            result = WFCSolver(6, 4, coast_context).generate(seed=seed)
            if result.success:
                assert result.grid.shape == (4, 6)
                assert set(np.unique(result.grid)) <= {int(t) for t in coast_context.alphabet}
                assert len(result.to_tiles()) == 4
                return
        pytest.fail("No seed in 0..19 resolved a 6x4 map")

    def test_single_tile_alphabet_needs_no_collapse(self):
        context = RuleContext.from_sample([[C, C], [C, C]])
        result = WFCSolver(5, 3, context).generate(seed=1)

        assert result.success
        assert result.iterations == 0
        assert np.all(result.grid == int(C))

    def test_to_tiles_without_grid(self, one_sided_context):
        for seed in range(30):
            result = WFCSolver(3, 1, one_sided_context).generate(seed=seed)
            if not result.success:
                with pytest.raises(ValueError):
                    result.to_tiles()
                return
        pytest.fail("Expected at least one contradiction")

    def test_initial_grid_must_match_dimensions(self, coast_context):
        with pytest.raises(ValueError):
            WFCSolver(2, 2, coast_context, initial=[[(S,), (C,)]])

    def test_unknown_propagation_mode(self):
        with pytest.raises(ValueError):
            WFCConfig(propagation="recursive")


class TestContradiction:

    @pytest.fixture
    def sea_only_context(self):
        rules = [
            AdjacencyRule(S, S, Direction.RIGHT),
            AdjacencyRule(S, S, Direction.LEFT),
        ]
        return RuleContext.from_rules(rules, {S: 1, L: 1})

    def test_missing_index_entry_empties_neighbor(self, sea_only_context):
        """No (RIGHT, LAND) entry means nothing may sit right of LAND."""
        solver = WFCSolver(2, 1, sea_only_context, initial=[[(L,), (S, L)]])

        with pytest.raises(ContradictionError) as exc_info:
            solver.propagate(0, 0)

        report = exc_info.value.report
        assert report.direction == Direction.RIGHT
        assert report.tile == L
        assert report.position == (0, 1)
        assert report.source == (0, 0)
        assert report.superpositions[0][1] == (S, L)
        assert "RIGHT" in str(report) and "LAND" in str(report)

    def test_contradiction_is_a_result_not_an_exception(self, sea_only_context):
        config = WFCConfig(propagation="cascade")
        solver = WFCSolver(2, 1, sea_only_context, config=config, initial=[[(L,), (S, L)]])

        result = solver.generate(seed=0)

        assert result.status == SolveStatus.CONTRADICTED
        assert result.grid is None
        assert result.contradiction.direction == Direction.RIGHT
        assert result.contradiction.tile == L

    def test_contradiction_reports_collapse_that_caused_it(self, one_sided_context):
        outcomes = set()
        for seed in range(30):
            result = WFCSolver(3, 1, one_sided_context).generate(seed=seed)
            outcomes.add(result.status)
            if not result.success:
                # First collapse picked LAND, which permits nothing to its right
                assert result.collapse_history == [(0, 0, L)]
                assert result.contradiction.position == (0, 1)
                assert result.contradiction.source == (0, 0)
                assert result.contradiction.direction == Direction.RIGHT
                assert result.contradiction.tile == L

        assert outcomes == {SolveStatus.RESOLVED, SolveStatus.CONTRADICTED}


class TestLocalPropagation:
    """Single-hop propagation with its resolved-by-filtering gap."""

    def test_filtered_singleton_never_propagates(self, one_sided_context):
        resolved = 0
        for seed in range(30):
            result = WFCSolver(3, 1, one_sided_context).generate(seed=seed)
            if not result.success:
                continue
            resolved += 1

            # (0, 1) became LAND through filtering and was never selected
            assert [(r, c) for r, c, _ in result.collapse_history] == [(0, 0), (0, 2)]
            assert result.grid[0, 0] == S
            assert result.grid[0, 1] == L
            # ...so (0, 2) was chosen without regard to its LAND neighbor
            assert result.grid[0, 2] in (S, L)

        assert resolved > 0

    def test_resolved_neighbors_left_untouched(self, coast_context):
        solver = WFCSolver(3, 1, coast_context, initial=[[(S,), (L,), (S, C, L)]])
        solver.propagate(0, 0)

        # LAND right of SEA was never observed, yet the resolved cell stays
        assert solver.superposition[0][1] == (L,)

    def test_neighbor_entropy_updated(self, coast_context):
        solver = WFCSolver(3, 3, coast_context)
        solver.superposition[1][1] = (L,)
        solver.entropy[1, 1] = 0.0
        solver.propagate(1, 1)

        # Below LAND only LAND was observed
        assert solver.superposition[2][1] == (L,)
        assert solver.entropy[2, 1] == 0.0
        # Left of LAND: COAST or LAND
        assert set(solver.superposition[1][0]) == {C, L}
        assert solver.entropy[1, 0] > 0
        # Diagonals untouched
        assert solver.superposition[0][0] == (S, C, L)


class TestCascadePropagation:
    """Every newly resolved cell propagates in turn."""

    def test_filtered_singleton_propagates(self, one_sided_context):
        config = WFCConfig(propagation="cascade")
        for seed in range(20):
            result = WFCSolver(3, 1, one_sided_context, config=config).generate(seed=seed)

            assert result.status == SolveStatus.CONTRADICTED
            assert result.contradiction.direction == Direction.RIGHT
            assert result.contradiction.tile == L

    def test_outputs_respect_learned_rules(self, coast_context):
        config = WFCConfig(propagation="cascade")
        resolved = 0
        for seed in range(50):
            result = WFCSolver(4, 4, coast_context, config=config).generate(seed=seed)
            if result.success:
                resolved += 1
                assert_consistent(result.grid, coast_context.rules)

        assert resolved > 0

    def test_unresolved_source_leaves_neighbors_alone(self, coast_context):
        """Only a resolved cell narrows its neighbors, as in local mode."""
        for mode in ("local", "cascade"):
            solver = WFCSolver(3, 1, coast_context, config=WFCConfig(propagation=mode))
            solver.propagate(0, 1)

            assert solver.superposition[0] == [(S, C, L)] * 3, mode
            assert np.all(solver.entropy > 0), mode

    def test_cascade_runs_down_a_column(self, coast_context):
        solver = WFCSolver(1, 4, coast_context, config=WFCConfig(propagation="cascade"))
        solver.superposition[0][0] = (L,)
        solver.propagate(0, 0)

        assert [solver.superposition[r][0] for r in range(4)] == [(L,)] * 4
        assert np.all(solver.entropy == 0.0)


class TestReproducibility:

    def test_same_seed_same_map(self, coast_context):
        first = WFCSolver(8, 5, coast_context).generate(seed=123)
        second = WFCSolver(8, 5, coast_context).generate(seed=123)

        assert first.status == second.status
        assert first.collapse_history == second.collapse_history
        if first.success:
            np.testing.assert_array_equal(first.grid, second.grid)

    def test_generate_resets_state(self, coast_context):
        solver = WFCSolver(8, 5, coast_context)
        first = solver.generate(seed=99)
        second = solver.generate(seed=99)

        assert first.collapse_history == second.collapse_history

    def test_snapshot_is_detached(self, coast_context):
        solver = WFCSolver(2, 2, coast_context)
        snapshot = solver.superposition_snapshot()
        snapshot[0][0] = (S,)

        assert solver.superposition[0][0] == coast_context.alphabet
