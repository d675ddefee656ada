"""Centralized run configuration for regulon-pruner.

Example
-------
>>> from regulon_pruner.config import RegulonConfig
>>> config = RegulonConfig.from_yaml("regulons.yaml")
>>> config.assignment.strategy
'A'
"""

from .regulon import RegulonConfig

__all__ = [
    "RegulonConfig",
]
