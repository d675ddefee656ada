"""I/O utilities for regulon-pruner.

Provides run logging, table I/O, and expression loading utilities.
"""

from .logging import record_run, start_run_log
from .tables import (
    ensure_output_dir,
    expression_frame,
    load_expression,
    load_regulatory_table,
    read_edge_table,
    write_dataframe,
)

__all__ = [
    # Run logs
    "record_run",
    "start_run_log",
    # Tables
    "ensure_output_dir",
    "expression_frame",
    "load_expression",
    "load_regulatory_table",
    "read_edge_table",
    "write_dataframe",
]
