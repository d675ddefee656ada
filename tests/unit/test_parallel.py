"""Unit tests for selection rules and their parallel execution."""

import pandas as pd
import pytest

from regulon_pruner.core.assignment import (
    AssignmentParams,
    ColumnConfig,
    RegulatoryTable,
    RegulonAssignmentEngine,
    Strategy,
    select_edges,
    threshold_edges,
    top_k_per_group,
)
from regulon_pruner.core.assignment.parallel import partition_edges, select_edges_parallel
from regulon_pruner.core.assignment.strategies import rank_order
from tests.fixtures import create_regulatory_table


@pytest.fixture
def prepared():
    """Larger prepared table for partition tests."""
    return RegulatoryTable.from_dataframe(create_regulatory_table(n_tfs=12, n_genes=60, seed=7))


class TestRules:
    """Tests for the pure selection functions."""

    def test_threshold_edges_strict(self):
        df = pd.DataFrame({"Gain": [0.1, 0.2, 0.3]})
        assert list(threshold_edges(df, "Gain", 0.2).index) == [2]

    def test_rank_order_ties(self):
        df = pd.DataFrame({"Gain": [0.2, 0.5, 0.2, 0.5]})
        assert list(rank_order(df, "Gain")) == [1, 3, 0, 2]

    def test_top_k_per_group_keeps_row_order(self):
        df = pd.DataFrame({
            "tf": ["A", "A", "B", "A"],
            "Gain": [0.1, 0.3, 0.4, 0.2],
        })
        kept = top_k_per_group(df, "tf", "Gain", 2)
        assert list(kept.index) == [1, 2, 3]

    def test_top_k_per_group_empty(self):
        df = pd.DataFrame({"tf": [], "Gain": []})
        assert top_k_per_group(df, "tf", "Gain", 3).empty


class TestPartitionEdges:
    """Tests for partitioning."""

    @pytest.mark.parametrize("strategy,group_col", [
        (Strategy.TOP_TFS_PER_TARGET, "gene"),
        (Strategy.TOP_TARGETS_PER_TF, "tf"),
    ])
    def test_groups_not_split(self, prepared, strategy, group_col):
        """Each group lives in exactly one partition."""
        parts = partition_edges(prepared.edges, strategy, ColumnConfig(), 4)
        assert len(parts) == 4
        seen = {}
        for i, part in enumerate(parts):
            for key in part[group_col].unique():
                assert key not in seen
                seen[key] = i
        assert sum(len(p) for p in parts) == len(prepared)

    def test_row_ranges_for_threshold(self, prepared):
        parts = partition_edges(prepared.edges, Strategy.GLOBAL_THRESHOLD, ColumnConfig(), 3)
        assert len(parts) == 3
        assert pd.concat(parts).index.equals(prepared.edges.index)

    def test_more_partitions_than_rows(self, example_table):
        table = RegulatoryTable.from_dataframe(example_table)
        parts = partition_edges(table.edges, Strategy.GLOBAL_THRESHOLD, ColumnConfig(), 10)
        assert len(parts) == 3


class TestParallelSelection:
    """Parallel selection must equal sequential selection."""

    @pytest.mark.parametrize("strategy", ["A", "B", "C"])
    def test_matches_sequential(self, prepared, strategy):
        params = AssignmentParams(strategy=strategy, n_tfs=3, n_genes=7, reg_thresh=0.02)
        parsed = params.validate()
        sequential = select_edges(prepared.edges, parsed, params, ColumnConfig())
        parallel = select_edges_parallel(
            prepared.edges, parsed, params, ColumnConfig(), n_jobs=3, backend="threading"
        )
        pd.testing.assert_frame_equal(parallel, sequential)

    def test_engine_n_jobs(self, prepared):
        """Engine with n_jobs > 1 produces the same RegulonSet."""
        seq = RegulonAssignmentEngine(AssignmentParams(strategy="A", n_tfs=2)).run(prepared)
        par = RegulonAssignmentEngine(
            AssignmentParams(strategy="A", n_tfs=2, n_jobs=4), backend="threading"
        ).run(prepared)
        assert seq.edge_pairs() == par.edge_pairs()
        assert list(seq) == list(par)

    def test_nothing_passes(self, prepared):
        params = AssignmentParams(strategy="B", reg_thresh=100.0)
        kept = select_edges_parallel(
            prepared.edges, params.validate(), params, ColumnConfig(), n_jobs=2, backend="threading"
        )
        assert kept.empty
