"""Regulon assignment: pruning scored TF -> target tables into regulons.

Strategies
----------
- A: top ``n_tfs`` regulators per target gene above ``reg_thresh``
- B: top ``n_genes`` target genes per regulator above ``reg_thresh``
- C: every edge above ``reg_thresh``

Example Usage
-------------
>>> from regulon_pruner.core.assignment import assign_regulons, AssignmentParams
>>> result = assign_regulons(tf_net, AssignmentParams(strategy="B", n_genes=50))
>>> result.to_mapping("positive")
"""

from .config import AssignmentParams, ColumnConfig, Strategy
from .engine import RegulonAssignmentEngine, assign_regulons
from .export import load_regulon_edges, write_regulon_outputs
from .regulon import Regulon, RegulonSet, TargetType
from .strategies import select_edges, threshold_edges, top_k_per_group
from .table import RegulatoryTable, normalize_sign, signs_from_correlation
from .validation import (
    EmptyInputError,
    InvalidParameterError,
    InvalidTableError,
    RegulonError,
    UnsupportedStrategyError,
)

__all__ = [
    # Config
    "AssignmentParams",
    "ColumnConfig",
    "Strategy",
    # Engine
    "RegulonAssignmentEngine",
    "assign_regulons",
    # Results
    "Regulon",
    "RegulonSet",
    "TargetType",
    # Table
    "RegulatoryTable",
    "normalize_sign",
    "signs_from_correlation",
    # Rules
    "select_edges",
    "threshold_edges",
    "top_k_per_group",
    # Export
    "load_regulon_edges",
    "write_regulon_outputs",
    # Errors
    "RegulonError",
    "EmptyInputError",
    "InvalidParameterError",
    "InvalidTableError",
    "UnsupportedStrategyError",
]
