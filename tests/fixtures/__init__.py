"""Test fixtures for regulon-pruner.

Provides mock data generators and test utilities.
"""

from .mock_tables import (
    create_regulatory_table,
    create_example_table,
    create_expression_matrix,
    create_mock_adata,
)

__all__ = [
    "create_regulatory_table",
    "create_example_table",
    "create_expression_matrix",
    "create_mock_adata",
]
