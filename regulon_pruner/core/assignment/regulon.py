"""
Regulon result types.

This module provides:
- TargetType: positive/negative/both selector over edge signs
- Regulon: retained targets of one regulator
- RegulonSet: the full output of one assignment call
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

import pandas as pd

from .config import AssignmentParams, ColumnConfig
from .table import NEGATIVE, POSITIVE
from .validation import InvalidParameterError


class TargetType(Enum):
    """Which targets of a regulon to use, by edge sign."""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    BOTH = "both"

    @classmethod
    def parse(cls, value: Union[str, "TargetType"]) -> "TargetType":
        """Resolve a selector string, raising InvalidParameterError if unknown."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if member.value == key:
                    return member
        raise InvalidParameterError(
            "target_type",
            f"Unknown target_type: {value!r}",
            expected=[m.value for m in cls],
            found=repr(value),
        )


@dataclass(frozen=True)
class Regulon:
    """Targets retained for one regulator.

    Attributes
    ----------
    regulator : str
        Regulator (TF) identifier
    targets : Tuple[str, ...]
        Retained targets in input row order
    positive_targets : Tuple[str, ...]
        Subset of targets on activating edges
    negative_targets : Tuple[str, ...]
        Subset of targets on repressing edges
    strategy : str
        Strategy token that produced this regulon
    params : Dict[str, Any]
        Parameters that produced this regulon
    """

    regulator: str
    targets: Tuple[str, ...]
    positive_targets: Tuple[str, ...] = ()
    negative_targets: Tuple[str, ...] = ()
    strategy: str = "A"
    params: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def __len__(self) -> int:
        return len(self.targets)

    def __contains__(self, target: object) -> bool:
        return target in self.targets

    def select(self, target_type: Union[str, TargetType] = TargetType.BOTH) -> Tuple[str, ...]:
        """Return the targets matching a sign selector."""
        target_type = TargetType.parse(target_type)
        if target_type is TargetType.POSITIVE:
            return self.positive_targets
        if target_type is TargetType.NEGATIVE:
            return self.negative_targets
        return self.targets


@dataclass
class RegulonSet:
    """Output of one regulon assignment call.

    Attributes
    ----------
    regulons : Dict[str, Regulon]
        Regulator -> Regulon, regulators in order of first retained edge
    edges : pd.DataFrame
        Retained edges (input columns, input row order)
    params : AssignmentParams
        Parameters used
    columns : ColumnConfig
        Column names of ``edges``
    n_input_edges : int
        Number of edges in the input table
    """

    regulons: Dict[str, Regulon]
    edges: pd.DataFrame
    params: AssignmentParams
    columns: ColumnConfig = field(default_factory=ColumnConfig)
    n_input_edges: int = 0

    @classmethod
    def from_edges(
        cls,
        edges: pd.DataFrame,
        params: AssignmentParams,
        columns: Optional[ColumnConfig] = None,
        n_input_edges: Optional[int] = None,
    ) -> "RegulonSet":
        """Group retained edges by regulator.

        Parameters
        ----------
        edges : pd.DataFrame
            Retained edges with a normalized sign column
        params : AssignmentParams
            Parameters that produced the edges
        columns : ColumnConfig, optional
            Column names. Defaults to ColumnConfig().
        n_input_edges : int, optional
            Size of the input table. Defaults to len(edges).

        Returns
        -------
        RegulonSet
        """
        columns = columns or ColumnConfig()
        param_dict = params.to_dict()
        strategy = str(param_dict["strategy"]).upper()

        regulons: Dict[str, Regulon] = {}
        if not edges.empty:
            for regulator, group in edges.groupby(columns.regulator, sort=False):
                targets = group[columns.target].astype(str)
                signs = group[columns.sign]
                regulons[str(regulator)] = Regulon(
                    regulator=str(regulator),
                    targets=tuple(targets),
                    positive_targets=tuple(targets[signs == POSITIVE]),
                    negative_targets=tuple(targets[signs == NEGATIVE]),
                    strategy=strategy,
                    params=param_dict,
                )

        return cls(
            regulons=regulons,
            edges=edges,
            params=params,
            columns=columns,
            n_input_edges=len(edges) if n_input_edges is None else int(n_input_edges),
        )

    def __len__(self) -> int:
        return len(self.regulons)

    def __iter__(self) -> Iterator[str]:
        return iter(self.regulons)

    def __contains__(self, regulator: object) -> bool:
        return regulator in self.regulons

    def __getitem__(self, regulator: str) -> Regulon:
        return self.regulons[regulator]

    @property
    def n_edges(self) -> int:
        """Number of retained edges."""
        return len(self.edges)

    def edge_pairs(self) -> List[Tuple[str, str]]:
        """Retained (regulator, target) pairs in input row order."""
        return list(
            self.edges[[self.columns.regulator, self.columns.target]].itertuples(
                index=False, name=None
            )
        )

    def to_mapping(
        self,
        target_type: Union[str, TargetType] = TargetType.BOTH,
    ) -> Dict[str, List[str]]:
        """Regulator -> target list, filtered by sign.

        Regulators with no targets of the requested sign are omitted.
        """
        target_type = TargetType.parse(target_type)
        mapping = {}
        for regulator, regulon in self.regulons.items():
            targets = regulon.select(target_type)
            if targets:
                mapping[regulator] = list(targets)
        return mapping

    def by_target(self) -> Dict[str, Tuple[str, ...]]:
        """Target -> regulators, targets in order of first retained edge."""
        if self.edges.empty:
            return {}
        return {
            str(target): tuple(group[self.columns.regulator].astype(str))
            for target, group in self.edges.groupby(self.columns.target, sort=False)
        }

    def summary(self) -> pd.DataFrame:
        """Per-regulator summary table.

        Returns
        -------
        pd.DataFrame
            Columns: regulator, n_targets, n_positive, n_negative,
            max_score, mean_score
        """
        columns = [
            "regulator",
            "n_targets",
            "n_positive",
            "n_negative",
            "max_score",
            "mean_score",
        ]
        if self.edges.empty:
            return pd.DataFrame(columns=columns)

        rows = []
        for regulator, group in self.edges.groupby(self.columns.regulator, sort=False):
            scores = group[self.columns.score]
            signs = group[self.columns.sign]
            rows.append(
                {
                    "regulator": str(regulator),
                    "n_targets": len(group),
                    "n_positive": int((signs == POSITIVE).sum()),
                    "n_negative": int((signs == NEGATIVE).sum()),
                    "max_score": float(scores.max()),
                    "mean_score": float(scores.mean()),
                }
            )
        return pd.DataFrame(rows, columns=columns)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "params": self.params.to_dict(),
            "n_input_edges": self.n_input_edges,
            "n_retained_edges": self.n_edges,
            "regulons": {
                regulator: {
                    "targets": list(regulon.targets),
                    "positive": list(regulon.positive_targets),
                    "negative": list(regulon.negative_targets),
                }
                for regulator, regulon in self.regulons.items()
            },
        }
