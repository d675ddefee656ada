"""Configuration classes for regulon assignment.

Parameters are enumerated explicitly and validated before any table is
touched; see ``AssignmentParams.validate``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from .validation import (
    UnsupportedStrategyError,
    require_finite_real,
    require_positive_int,
)


class Strategy(Enum):
    """Regulon selection strategies."""

    TOP_TFS_PER_TARGET = "A"  # at most n_tfs regulators per target gene
    TOP_TARGETS_PER_TF = "B"  # at most n_genes targets per regulator
    GLOBAL_THRESHOLD = "C"  # every edge above reg_thresh

    @classmethod
    def parse(cls, token: Union[str, "Strategy"]) -> "Strategy":
        """Resolve a strategy token (case-insensitive) to a Strategy.

        Raises
        ------
        UnsupportedStrategyError
            If the token is not one of A, B, C.
        """
        if isinstance(token, cls):
            return token
        if isinstance(token, str):
            key = token.strip().upper()
            for member in cls:
                if member.value == key or member.name == key:
                    return member
        raise UnsupportedStrategyError(
            f"Unsupported regulon strategy: {token!r}",
            expected=[m.value for m in cls],
            found=repr(token),
            suggestion="Use 'A' (top TFs per gene), 'B' (top genes per TF) or 'C' (threshold only).",
        )

    def group_column(self, columns: "ColumnConfig") -> Optional[str]:
        """Column whose groups are ranked and capped (None for strategy C)."""
        if self is Strategy.TOP_TFS_PER_TARGET:
            return columns.target
        if self is Strategy.TOP_TARGETS_PER_TF:
            return columns.regulator
        return None


@dataclass
class AssignmentParams:
    """Parameters for one regulon assignment call.

    Attributes
    ----------
    strategy : str
        Selection strategy token: "A", "B" or "C"
    reg_thresh : float
        Edges must score strictly above this value
    n_tfs : int
        Strategy A cap: regulators kept per target gene
    n_genes : int
        Strategy B cap: target genes kept per regulator
    n_jobs : int
        Worker count for grouped ranking (1 = in-process)
    """

    strategy: str = "A"
    reg_thresh: float = 0.01
    n_tfs: int = 10
    n_genes: int = 50
    n_jobs: int = 1

    def validate(self) -> Strategy:
        """Check every field and return the parsed strategy.

        Raises
        ------
        UnsupportedStrategyError
            If ``strategy`` is unknown.
        InvalidParameterError
            If a numeric field is out of range.
        """
        strategy = Strategy.parse(self.strategy)
        require_finite_real("reg_thresh", self.reg_thresh)
        require_positive_int("n_tfs", self.n_tfs)
        require_positive_int("n_genes", self.n_genes)
        require_positive_int("n_jobs", self.n_jobs)
        return strategy

    def cap_for(self, strategy: Strategy) -> int:
        """Per-group cap under ``strategy`` (0 for strategy C)."""
        if strategy is Strategy.TOP_TFS_PER_TARGET:
            return int(self.n_tfs)
        if strategy is Strategy.TOP_TARGETS_PER_TF:
            return int(self.n_genes)
        return 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        strategy = self.strategy.value if isinstance(self.strategy, Strategy) else self.strategy
        return {
            "strategy": strategy,
            "reg_thresh": self.reg_thresh,
            "n_tfs": self.n_tfs,
            "n_genes": self.n_genes,
            "n_jobs": self.n_jobs,
        }


@dataclass
class ColumnConfig:
    """Column names of the regulatory table.

    Attributes
    ----------
    regulator : str
        Column with regulator (TF) identifiers
    target : str
        Column with target gene identifiers
    score : str
        Column with the regulatory score (higher = stronger)
    sign : str
        Column with edge sign ("+"/"-"); optional in the input
    correlation : str
        Column with TF-target correlation; used to derive sign when the
        sign column is absent
    """

    regulator: str = "tf"
    target: str = "gene"
    score: str = "Gain"
    sign: str = "sign"
    correlation: str = "Cor"

    @property
    def required(self) -> List[str]:
        """Columns every regulatory table must carry."""
        return [self.regulator, self.target, self.score]

    @property
    def identifiers(self) -> List[str]:
        """Columns holding regulator and target identifiers."""
        return [self.regulator, self.target]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "regulator": self.regulator,
            "target": self.target,
            "score": self.score,
            "sign": self.sign,
            "correlation": self.correlation,
        }
