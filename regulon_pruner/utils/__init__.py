"""Utility functions for regulon-pruner.

Provides statistical helpers used across modules.
"""

from .stats import robust_scale, robust_zscore_columns

__all__ = [
    "robust_scale",
    "robust_zscore_columns",
]
