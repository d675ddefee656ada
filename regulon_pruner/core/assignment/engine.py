"""
Regulon assignment engine.

This module provides:
- RegulonAssignmentEngine: validates inputs and prunes a regulatory table
- assign_regulons: functional entry point around the engine
"""

from __future__ import annotations

import logging
import time
from typing import Optional, Union

import pandas as pd

from .config import AssignmentParams, ColumnConfig, Strategy
from .parallel import select_edges_parallel
from .regulon import RegulonSet
from .strategies import select_edges
from .table import RegulatoryTable
from .validation import EmptyInputError

TableLike = Union[pd.DataFrame, RegulatoryTable]


class RegulonAssignmentEngine:
    """Engine for pruning scored TF -> target tables into regulons.

    Validation runs in a fixed order before any filtering: empty input,
    strategy token, numeric parameters, then the table schema. A failure
    raises and produces no RegulonSet.

    Parameters
    ----------
    params : AssignmentParams, optional
        Strategy and thresholds. If None, uses defaults.
    columns : ColumnConfig, optional
        Column names of the regulatory table. If None, uses defaults.
    logger : logging.Logger, optional
        Logger instance
    backend : str
        joblib backend used when ``params.n_jobs > 1``

    Example
    -------
    >>> from regulon_pruner.core.assignment import RegulonAssignmentEngine, AssignmentParams
    >>> engine = RegulonAssignmentEngine(AssignmentParams(strategy="A", n_tfs=2, reg_thresh=0.1))
    >>> result = engine.run(tf_net)
    >>> result["TF1"].targets
    ('G1',)
    """

    def __init__(
        self,
        params: Optional[AssignmentParams] = None,
        columns: Optional[ColumnConfig] = None,
        logger: Optional[logging.Logger] = None,
        backend: str = "loky",
    ):
        self.params = params or AssignmentParams()
        self.columns = columns or ColumnConfig()
        self.logger = logger or logging.getLogger(__name__)
        self.backend = backend

    def prepare(self, table: TableLike) -> RegulatoryTable:
        """Validate the table and return a RegulatoryTable.

        A RegulatoryTable passed in is checked again, since it may have been
        constructed directly around an arbitrary DataFrame.

        Raises
        ------
        EmptyInputError
            If the table has no rows
        InvalidTableError
            If the table violates its schema
        """
        if isinstance(table, RegulatoryTable):
            return RegulatoryTable.from_dataframe(table.edges, table.columns, logger=self.logger)
        return RegulatoryTable.from_dataframe(table, self.columns, logger=self.logger)

    def run(self, table: TableLike) -> RegulonSet:
        """Prune a regulatory table into regulons.

        Parameters
        ----------
        table : pd.DataFrame or RegulatoryTable
            Scored edges. Not modified.

        Returns
        -------
        RegulonSet
            Retained edges grouped by regulator

        Raises
        ------
        EmptyInputError
            If the table has no rows
        UnsupportedStrategyError
            If the strategy token is unknown
        InvalidParameterError
            If a threshold or cap is invalid
        InvalidTableError
            If the table violates its schema
        """
        if table is None or len(table) == 0:
            raise EmptyInputError(
                "Regulatory table has no edges",
                expected="at least one (regulator, target, score) row",
                found="0 rows",
            )
        strategy = self.params.validate()
        prepared = self.prepare(table)
        columns = prepared.columns

        self.logger.info("=" * 70)
        self.logger.info("[REGULONS] Assigning regulons with strategy %s", strategy.value)
        self.logger.info("=" * 70)
        self.logger.info(
            "Input: %d edges, %d regulators, %d targets",
            len(prepared),
            len(prepared.regulators),
            len(prepared.targets),
        )
        self.logger.info(
            "Params: reg_thresh=%s, n_tfs=%s, n_genes=%s, n_jobs=%s",
            self.params.reg_thresh,
            self.params.n_tfs,
            self.params.n_genes,
            self.params.n_jobs,
        )

        start = time.time()
        if int(self.params.n_jobs) > 1:
            kept = select_edges_parallel(
                prepared.edges,
                strategy,
                self.params,
                columns,
                n_jobs=int(self.params.n_jobs),
                backend=self.backend,
            )
        else:
            kept = select_edges(prepared.edges, strategy, self.params, columns)

        result = RegulonSet.from_edges(
            kept.copy(),
            params=self._resolved_params(strategy),
            columns=columns,
            n_input_edges=len(prepared),
        )

        n_below = int((prepared.scores <= float(self.params.reg_thresh)).sum())
        self.logger.info(
            "Retained %d/%d edges (%d at/below threshold) across %d regulons in %.2fs",
            result.n_edges,
            len(prepared),
            n_below,
            len(result),
            time.time() - start,
        )
        if len(result) == 0:
            self.logger.warning(
                "No edges scored above reg_thresh=%s; all regulons are empty",
                self.params.reg_thresh,
            )
        return result

    def _resolved_params(self, strategy: Strategy) -> AssignmentParams:
        """Copy of the params with the strategy token canonicalized."""
        return AssignmentParams(
            strategy=strategy.value,
            reg_thresh=float(self.params.reg_thresh),
            n_tfs=int(self.params.n_tfs),
            n_genes=int(self.params.n_genes),
            n_jobs=int(self.params.n_jobs),
        )


def assign_regulons(
    table: TableLike,
    params: Optional[AssignmentParams] = None,
    columns: Optional[ColumnConfig] = None,
    logger: Optional[logging.Logger] = None,
) -> RegulonSet:
    """Prune a regulatory table into regulons.

    Parameters
    ----------
    table : pd.DataFrame or RegulatoryTable
        Scored edges
    params : AssignmentParams, optional
        Strategy and thresholds
    columns : ColumnConfig, optional
        Column names of the table
    logger : logging.Logger, optional
        Logger instance

    Returns
    -------
    RegulonSet

    Examples
    --------
    >>> tf_net = pd.DataFrame({
    ...     "tf": ["TF1", "TF2", "TF3"],
    ...     "gene": ["G1", "G1", "G1"],
    ...     "Gain": [0.9, 0.5, 0.05],
    ...     "sign": ["+", "+", "+"],
    ... })
    >>> result = assign_regulons(tf_net, AssignmentParams("A", reg_thresh=0.1, n_tfs=2))
    >>> result.by_target()["G1"]
    ('TF1', 'TF2')
    """
    engine = RegulonAssignmentEngine(params=params, columns=columns, logger=logger)
    return engine.run(table)
