"""regulon-pruner: TF regulon assignment for single-cell gene regulatory networks.

This package provides tools for:
- Pruning scored TF -> target tables (e.g. gradient-boosting importance)
  into sparse regulons with three selection strategies
- Splitting regulons into activating and repressing targets
- Scoring regulon expression signatures per cell

Example usage:
    >>> from regulon_pruner.core.assignment import assign_regulons, AssignmentParams
    >>> from regulon_pruner.core.signatures import RegulonScorer
    >>>
    >>> # Keep the top 10 TFs per target gene
    >>> regulons = assign_regulons(tf_net, AssignmentParams(strategy="A", n_tfs=10))
    >>>
    >>> # Score positive regulon signatures
    >>> scores = RegulonScorer().score(adata, regulons, target_type="positive").scores
"""

__version__ = "0.1.0"
