"""Mock regulatory tables and expression matrices for testing.

Provides functions to create small TF -> target tables and expression
matrices without requiring a real network inference run.
"""

from typing import List, Optional

import numpy as np
import pandas as pd


def create_regulatory_table(
    n_tfs: int = 8,
    n_genes: int = 30,
    density: float = 0.6,
    seed: int = 42,
    include_sign: bool = False,
    include_cor: bool = True,
) -> pd.DataFrame:
    """Create a mock TF -> target table like a gradient-boosting importance run.

    Parameters
    ----------
    n_tfs : int
        Number of regulators
    n_genes : int
        Number of target genes
    density : float
        Fraction of (TF, gene) pairs present
    seed : int
        Random seed for reproducibility
    include_sign : bool
        Add a "sign" column derived from the correlation
    include_cor : bool
        Add a "Cor" column

    Returns
    -------
    pd.DataFrame
        Columns: tf, gene, Gain, Cover, Frequency[, Cor][, sign]
    """
    rng = np.random.default_rng(seed)

    rows = []
    for t in range(n_tfs):
        for g in range(n_genes):
            if rng.random() < density:
                rows.append((f"TF{t}", f"Gene{g}"))
    # Shuffle so that row order is not grouped by TF
    order = rng.permutation(len(rows))
    rows = [rows[i] for i in order]

    n = len(rows)
    df = pd.DataFrame(rows, columns=["tf", "gene"])
    df["Gain"] = rng.exponential(scale=0.05, size=n)
    df["Cover"] = rng.uniform(0, 1, size=n)
    df["Frequency"] = rng.uniform(0, 1, size=n)
    cor = rng.uniform(-0.6, 0.6, size=n)
    if include_cor:
        df["Cor"] = cor
    if include_sign:
        df["sign"] = np.where(cor >= 0, "+", "-")
    return df


def create_example_table() -> pd.DataFrame:
    """Three TFs competing for one target gene."""
    return pd.DataFrame({
        "tf": ["TF1", "TF2", "TF3"],
        "gene": ["G1", "G1", "G1"],
        "Gain": [0.9, 0.5, 0.05],
        "sign": ["+", "+", "+"],
    })


def create_expression_matrix(
    genes: List[str],
    n_cells: int = 50,
    seed: int = 42,
    cell_prefix: str = "cell_",
) -> pd.DataFrame:
    """Create a cells x genes log-normal expression matrix."""
    rng = np.random.default_rng(seed)
    X = rng.lognormal(mean=0, sigma=1, size=(n_cells, len(genes)))
    return pd.DataFrame(
        X,
        index=[f"{cell_prefix}{i}" for i in range(n_cells)],
        columns=list(genes),
    )


def create_mock_adata(
    genes: List[str],
    n_cells: int = 50,
    seed: int = 42,
    sparse_x: bool = True,
    layer: Optional[str] = "counts",
) -> "AnnData":
    """Create a mock AnnData with the given genes.

    The optional layer holds twice the values of X.
    """
    import anndata as ad
    from scipy import sparse

    df = create_expression_matrix(genes, n_cells=n_cells, seed=seed)
    X = df.to_numpy()
    adata = ad.AnnData(
        X=sparse.csr_matrix(X) if sparse_x else X,
        obs=pd.DataFrame(index=df.index),
        var=pd.DataFrame(index=df.columns),
    )
    if layer:
        adata.layers[layer] = X * 2
    return adata
