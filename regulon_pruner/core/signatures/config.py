"""Configuration for regulon expression signatures."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..assignment.regulon import TargetType
from ..assignment.validation import (
    InvalidParameterError,
    require_finite_real,
    require_positive_int,
)

SIGNATURE_METHODS = ("mean", "zscore")


@dataclass
class SignatureConfig:
    """Configuration for regulon expression signatures.

    Attributes
    ----------
    target_type : str
        Which targets to aggregate: positive, negative or both
    cor_thresh : float
        Targets with |correlation| at or below this are left out of the
        positive/negative signatures (only when edges carry correlation)
    method : str
        "mean" of raw expression, or "zscore" (robust per-gene z-score, then mean)
    min_targets : int
        Regulons with fewer targets present in the matrix are skipped
    layer : str, optional
        AnnData layer to read expression from (None = X)
    exclude_genes : List[str]
        Genes never used in any signature
    """

    target_type: str = "both"
    cor_thresh: float = 0.05
    method: str = "mean"
    min_targets: int = 1
    layer: Optional[str] = None
    exclude_genes: List[str] = field(default_factory=list)

    def validate(self) -> TargetType:
        """Check every field and return the parsed target type."""
        target_type = TargetType.parse(self.target_type)
        cor_thresh = require_finite_real("cor_thresh", self.cor_thresh)
        if cor_thresh < 0:
            raise InvalidParameterError(
                "cor_thresh",
                "cor_thresh must be non-negative",
                expected=">= 0",
                found=repr(self.cor_thresh),
            )
        if self.method not in SIGNATURE_METHODS:
            raise InvalidParameterError(
                "method",
                f"Unknown signature method: {self.method!r}",
                expected=list(SIGNATURE_METHODS),
                found=repr(self.method),
            )
        require_positive_int("min_targets", self.min_targets)
        return target_type

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "target_type": self.target_type,
            "cor_thresh": self.cor_thresh,
            "method": self.method,
            "min_targets": self.min_targets,
            "layer": self.layer,
            "exclude_genes": list(self.exclude_genes),
        }
