"""Regulon expression signatures.

Aggregates per-cell expression over the retained targets of each regulon,
optionally restricted to activating or repressing targets.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

import numpy as np
import pandas as pd

from ...io.tables import expression_frame
from ...utils.stats import robust_zscore_columns
from ..assignment.regulon import RegulonSet, TargetType
from ..assignment.table import NEGATIVE, POSITIVE
from .config import SignatureConfig


@dataclass
class SignatureResult:
    """Result from signature scoring.

    Attributes
    ----------
    scores : pd.DataFrame
        Cells x regulators signature values
    target_type : str
        Sign selector used
    n_targets_used : Dict[str, int]
        Regulator -> number of targets present in the matrix
    skipped : List[str]
        Regulators dropped for having fewer than min_targets targets
    """

    scores: pd.DataFrame
    target_type: str
    n_targets_used: Dict[str, int] = field(default_factory=dict)
    skipped: List[str] = field(default_factory=list)


class RegulonScorer:
    """Compute regulon expression signatures.

    Parameters
    ----------
    config : SignatureConfig, optional
        Signature configuration. If None, uses defaults.
    logger : logging.Logger, optional
        Logger instance

    Example
    -------
    >>> scorer = RegulonScorer(SignatureConfig(target_type="positive"))
    >>> result = scorer.score(adata, regulons)
    >>> result.scores.head()
    """

    def __init__(
        self,
        config: Optional[SignatureConfig] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.config = config or SignatureConfig()
        self.logger = logger or logging.getLogger(__name__)

    def select_targets(
        self,
        regulons: RegulonSet,
        target_type: Union[str, TargetType],
    ) -> Dict[str, List[str]]:
        """Regulator -> targets used for its signature.

        Applies the sign selector, the correlation threshold (when the edges
        carry a correlation column) and ``exclude_genes``.
        """
        target_type = TargetType.parse(target_type)
        columns = regulons.columns
        edges = regulons.edges
        if edges.empty:
            return {}

        mask = np.ones(len(edges), dtype=bool)
        if target_type is TargetType.POSITIVE:
            mask &= (edges[columns.sign] == POSITIVE).to_numpy()
        elif target_type is TargetType.NEGATIVE:
            mask &= (edges[columns.sign] == NEGATIVE).to_numpy()

        if target_type is not TargetType.BOTH and columns.correlation in edges.columns:
            cor = pd.to_numeric(edges[columns.correlation], errors="coerce").abs()
            mask &= (cor > float(self.config.cor_thresh)).to_numpy()

        if self.config.exclude_genes:
            excluded = set(self.config.exclude_genes)
            mask &= ~edges[columns.target].isin(excluded).to_numpy()

        selected = edges.loc[mask]
        targets: Dict[str, List[str]] = {}
        for regulator in regulons:
            targets[regulator] = []
        for regulator, group in selected.groupby(columns.regulator, sort=False):
            targets[str(regulator)] = list(group[columns.target].astype(str))
        return targets

    def score(
        self,
        expression: Any,
        regulons: RegulonSet,
        target_type: Optional[Union[str, TargetType]] = None,
    ) -> SignatureResult:
        """Score every regulon in every cell.

        Parameters
        ----------
        expression : pd.DataFrame or AnnData
            Cells x genes expression. Not modified.
        regulons : RegulonSet
            Assignment result
        target_type : str, optional
            Overrides ``config.target_type``

        Returns
        -------
        SignatureResult

        Raises
        ------
        InvalidParameterError
            If the configuration or target_type is invalid
        """
        config_type = self.config.validate()
        target_type = TargetType.parse(target_type) if target_type is not None else config_type

        matrix = expression_frame(expression, layer=self.config.layer)
        genes = set(matrix.columns)

        self.logger.info(
            "Scoring %d regulons (%s targets, method=%s) over %d cells",
            len(regulons),
            target_type.value,
            self.config.method,
            len(matrix),
        )

        selected = self.select_targets(regulons, target_type)
        present: Dict[str, List[str]] = {}
        skipped: List[str] = []
        for regulator, targets in selected.items():
            found = [g for g in targets if g in genes]
            n_missing = len(targets) - len(found)
            if n_missing:
                self.logger.debug(
                    "Regulon %s: %d/%d targets not in expression matrix",
                    regulator,
                    n_missing,
                    len(targets),
                )
            if len(found) < int(self.config.min_targets):
                skipped.append(regulator)
                continue
            present[regulator] = found

        if skipped:
            self.logger.info(
                "Skipped %d regulons with fewer than %d %s targets present",
                len(skipped),
                self.config.min_targets,
                target_type.value,
            )

        used_genes = list(dict.fromkeys(g for found in present.values() for g in found))
        values = matrix[used_genes].astype(float)
        if self.config.method == "zscore":
            values = robust_zscore_columns(values)

        scores = pd.DataFrame(
            {regulator: values[found].mean(axis=1) for regulator, found in present.items()},
            index=matrix.index,
            columns=list(present),
        )

        return SignatureResult(
            scores=scores,
            target_type=target_type.value,
            n_targets_used={r: len(found) for r, found in present.items()},
            skipped=skipped,
        )


def regulon_scores(
    expression: Any,
    regulons: RegulonSet,
    target_type: Union[str, TargetType] = "both",
    config: Optional[SignatureConfig] = None,
) -> pd.DataFrame:
    """Cells x regulators signature table (functional wrapper)."""
    scorer = RegulonScorer(config=config)
    return scorer.score(expression, regulons, target_type=target_type).scores
