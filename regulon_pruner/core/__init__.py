"""Core computational modules for regulon-pruner.

This package contains the analysis engines:
- assignment: Pruning scored TF -> target tables into regulons
- signatures: Per-cell regulon expression signatures
"""
