"""
Regulatory table preparation.

This module provides:
- Sign normalization ("+"/"-") from a sign column or TF-target correlation
- Schema checks (required columns, finite numeric scores, unique pairs)
- RegulatoryTable: a validated, read-only view of the scored edges
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import numpy as np
import pandas as pd

from .config import ColumnConfig
from .validation import EmptyInputError, InvalidTableError, missing_columns_error

logger = logging.getLogger(__name__)

POSITIVE = "+"
NEGATIVE = "-"

_SIGN_ALIASES = {
    "+": POSITIVE,
    "positive": POSITIVE,
    "pos": POSITIVE,
    "activating": POSITIVE,
    "1": POSITIVE,
    "1.0": POSITIVE,
    "-": NEGATIVE,
    "negative": NEGATIVE,
    "neg": NEGATIVE,
    "repressing": NEGATIVE,
    "-1": NEGATIVE,
    "-1.0": NEGATIVE,
}


def normalize_sign(value: Any) -> Optional[str]:
    """Map a sign token to "+" or "-".

    Parameters
    ----------
    value : Any
        Sign token (e.g., "+", "negative", 1, -1)

    Returns
    -------
    Optional[str]
        "+" or "-", or None if the token is not recognized

    Examples
    --------
    >>> normalize_sign("positive")
    '+'
    >>> normalize_sign(-1)
    '-'
    >>> normalize_sign("maybe") is None
    True
    """
    if value is None:
        return None
    return _SIGN_ALIASES.get(str(value).strip().lower())


def signs_from_correlation(correlation: pd.Series) -> pd.Series:
    """Derive edge signs from TF-target correlation (>= 0 is activating)."""
    values = pd.to_numeric(correlation, errors="coerce")
    if values.isna().any():
        n_bad = int(values.isna().sum())
        raise InvalidTableError(
            f"Correlation column has {n_bad} non-numeric values; cannot derive edge signs",
            expected="numeric correlation",
            found=f"{n_bad} NaN/non-numeric",
        )
    return pd.Series(
        np.where(values.to_numpy() >= 0, POSITIVE, NEGATIVE),
        index=correlation.index,
    )


@dataclass(frozen=True)
class RegulatoryTable:
    """Validated table of scored TF -> target edges.

    Rows keep their input order (positions 0..n-1 in the index), which is
    what ties are broken on. The wrapped DataFrame is a private copy and is
    never modified after construction.

    Attributes
    ----------
    edges : pd.DataFrame
        Scored edges with a normalized sign column
    columns : ColumnConfig
        Column names for regulator/target/score/sign/correlation
    """

    edges: pd.DataFrame
    columns: ColumnConfig

    @classmethod
    def from_dataframe(
        cls,
        df: pd.DataFrame,
        columns: Optional[ColumnConfig] = None,
        logger: Optional[logging.Logger] = None,
    ) -> "RegulatoryTable":
        """Validate a DataFrame of edges and wrap it.

        Parameters
        ----------
        df : pd.DataFrame
            Regulatory table; one row per (regulator, target) pair
        columns : ColumnConfig, optional
            Column names. Defaults to ColumnConfig().
        logger : logging.Logger, optional
            Logger for sign derivation notices

        Returns
        -------
        RegulatoryTable
            Validated table backed by a copy of ``df``

        Raises
        ------
        EmptyInputError
            If ``df`` has no rows
        InvalidTableError
            If required columns are missing, scores are not finite numbers,
            a (regulator, target) pair repeats, or a sign is unrecognized
        """
        _logger = logger or logging.getLogger(__name__)
        columns = columns or ColumnConfig()

        if df is None or len(df) == 0:
            raise EmptyInputError(
                "Regulatory table has no edges",
                expected="at least one (regulator, target, score) row",
                found="0 rows",
            )

        missing = [c for c in columns.required if c not in df.columns]
        if missing:
            raise missing_columns_error(missing, df.columns)

        edges = df.copy()
        edges.index = pd.RangeIndex(len(edges))

        scores = pd.to_numeric(edges[columns.score], errors="coerce")
        bad = ~np.isfinite(scores.to_numpy(dtype=float))
        if bad.any():
            examples = edges.loc[bad, columns.score].head(3).tolist()
            raise InvalidTableError(
                f"Score column '{columns.score}' has {int(bad.sum())} non-finite or non-numeric values",
                expected="finite real scores",
                found=examples,
            )
        edges[columns.score] = scores.astype(float)

        for col in (columns.regulator, columns.target):
            if edges[col].isna().any():
                raise InvalidTableError(
                    f"Column '{col}' has missing identifiers",
                    expected="non-null identifiers",
                    found=f"{int(edges[col].isna().sum())} missing",
                )
            edges[col] = edges[col].astype(str)

        dup = edges.duplicated(subset=[columns.regulator, columns.target], keep="first")
        if dup.any():
            pairs = list(
                edges.loc[dup, [columns.regulator, columns.target]]
                .head(3)
                .itertuples(index=False, name=None)
            )
            raise InvalidTableError(
                f"{int(dup.sum())} duplicate (regulator, target) pairs",
                expected="each (regulator, target) pair at most once",
                found=pairs,
                suggestion="Aggregate repeated pairs upstream before assigning regulons.",
            )

        if columns.sign in edges.columns:
            signs = edges[columns.sign].map(normalize_sign)
            unknown = signs.isna()
            if unknown.any():
                raise InvalidTableError(
                    f"Sign column '{columns.sign}' has unrecognized values",
                    expected=["+", "-"],
                    found=sorted(set(edges.loc[unknown, columns.sign].astype(str)))[:5],
                )
            edges[columns.sign] = signs
        elif columns.correlation in edges.columns:
            _logger.info(
                "Deriving edge signs from correlation column '%s'", columns.correlation
            )
            edges[columns.sign] = signs_from_correlation(edges[columns.correlation])
        else:
            _logger.warning(
                "No '%s' or '%s' column; treating all %d edges as positive",
                columns.sign,
                columns.correlation,
                len(edges),
            )
            edges[columns.sign] = POSITIVE

        return cls(edges=edges, columns=columns)

    def __len__(self) -> int:
        return len(self.edges)

    @property
    def regulators(self) -> pd.Index:
        """Distinct regulators in first-appearance order."""
        return pd.Index(self.edges[self.columns.regulator].unique())

    @property
    def targets(self) -> pd.Index:
        """Distinct targets in first-appearance order."""
        return pd.Index(self.edges[self.columns.target].unique())

    @property
    def scores(self) -> pd.Series:
        return self.edges[self.columns.score]
