"""Command-line interface for regulon-pruner.

Example Usage
-------------
    regulon-pruner --help
    regulon-pruner assign --input tf_net.csv --out regulons/ --strategy B --n-genes 50
    regulon-pruner score --expression data.h5ad --edges regulons/regulon_edges.csv --out scores/
    regulon-pruner summarize --edges regulons/regulon_edges.csv
"""

from .main import cli, main

__all__ = [
    "cli",
    "main",
]
