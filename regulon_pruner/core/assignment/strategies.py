"""
Selection rules for regulon assignment.

Rules are applied in order:
1. Threshold: keep edges scoring strictly above reg_thresh
2. Rank cap (strategies A and B only): within each group keep the top-k
   edges by descending score, earlier rows winning ties

All functions return a new DataFrame in input row order and never modify
their input.
"""

from __future__ import annotations

import numpy as np
import pandas as pd

from .config import AssignmentParams, ColumnConfig, Strategy


def threshold_edges(edges: pd.DataFrame, score_col: str, reg_thresh: float) -> pd.DataFrame:
    """Keep edges with score strictly greater than reg_thresh.

    Parameters
    ----------
    edges : pd.DataFrame
        Scored edges
    score_col : str
        Score column name
    reg_thresh : float
        Exclusive lower bound on the score

    Returns
    -------
    pd.DataFrame
        Surviving edges, input order preserved
    """
    mask = edges[score_col].to_numpy(dtype=float) > float(reg_thresh)
    return edges.loc[mask]


def rank_order(edges: pd.DataFrame, score_col: str) -> np.ndarray:
    """Positional order by descending score, ties by ascending row index.

    The row index of a prepared table is its input position, so ties go to
    the edge that appeared first.
    """
    scores = edges[score_col].to_numpy(dtype=float)
    rows = edges.index.to_numpy()
    # np.lexsort sorts by the last key first
    return np.lexsort((rows, -scores))


def top_k_per_group(
    edges: pd.DataFrame,
    group_col: str,
    score_col: str,
    k: int,
) -> pd.DataFrame:
    """Keep the k highest-scoring edges within each group.

    Groups with fewer than k edges keep all of them.

    Parameters
    ----------
    edges : pd.DataFrame
        Scored edges (already thresholded)
    group_col : str
        Column to group by (target for strategy A, regulator for B)
    score_col : str
        Score column name
    k : int
        Maximum edges per group

    Returns
    -------
    pd.DataFrame
        Retained edges in input row order
    """
    if edges.empty:
        return edges
    ranked = edges.iloc[rank_order(edges, score_col)]
    kept = ranked.groupby(group_col, sort=False).head(k)
    return kept.sort_index()


def select_edges(
    edges: pd.DataFrame,
    strategy: Strategy,
    params: AssignmentParams,
    columns: ColumnConfig,
) -> pd.DataFrame:
    """Apply one strategy to a prepared edge table.

    Parameters
    ----------
    edges : pd.DataFrame
        Edges of a RegulatoryTable (or a partition of one)
    strategy : Strategy
        Parsed strategy
    params : AssignmentParams
        Validated parameters
    columns : ColumnConfig
        Column names

    Returns
    -------
    pd.DataFrame
        Retained edges in input row order
    """
    passed = threshold_edges(edges, columns.score, params.reg_thresh)

    group_col = strategy.group_column(columns)
    if group_col is None:
        return passed
    return top_k_per_group(passed, group_col, columns.score, params.cap_for(strategy))
