"""Regulon expression signatures.

Per-cell aggregation of expression over the targets of each regulon,
split by edge sign (positive, negative or both).
"""

from .config import SIGNATURE_METHODS, SignatureConfig
from .engine import RegulonScorer, SignatureResult, regulon_scores

__all__ = [
    "SIGNATURE_METHODS",
    "SignatureConfig",
    "RegulonScorer",
    "SignatureResult",
    "regulon_scores",
]
