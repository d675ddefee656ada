"""Table I/O utilities for regulon-pruner.

Provides loaders for regulatory tables and expression matrices, and a
writer that creates parent directories.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional, Sequence, Union

import pandas as pd
from scipy import sparse

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

_TAB_SUFFIXES = {".tsv", ".txt", ".tab"}


def ensure_output_dir(path: PathLike) -> Path:
    """Create the directory at path if it does not exist and return it.

    Parameters
    ----------
    path : PathLike
        Directory path to create.

    Returns
    -------
    Path
        The created/existing directory path.
    """
    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def _separator_for(path: Path) -> str:
    """Pick the delimiter from the file suffix (handles .gz)."""
    suffixes = [s.lower() for s in path.suffixes]
    if suffixes and suffixes[-1] == ".gz":
        suffixes = suffixes[:-1]
    if suffixes and suffixes[-1] in _TAB_SUFFIXES:
        return "\t"
    return ","


def read_edge_table(path: Path, id_columns: Sequence[str]) -> pd.DataFrame:
    """Read a delimited edge table, keeping identifier columns verbatim.

    Identifiers such as "NA", "0010" or "1.10" are gene names, so the
    ``id_columns`` are read as strings with only empty cells treated as
    missing. Other columns keep the pandas defaults.
    """
    sep = _separator_for(path)
    df = pd.read_csv(path, sep=sep)
    ids = [c for c in id_columns if c in df.columns]
    if ids:
        raw = pd.read_csv(
            path,
            sep=sep,
            usecols=ids,
            dtype=str,
            keep_default_na=False,
            na_values=[""],
        )
        for col in ids:
            df[col] = raw[col]
    return df


def load_regulatory_table(
    path: PathLike,
    id_columns: Sequence[str] = ("tf", "gene"),
) -> pd.DataFrame:
    """Read a TF -> target table produced by an upstream model.

    Parameters
    ----------
    path : PathLike
        CSV (``.csv``) or tab-separated (``.tsv``, ``.txt``, ``.tab``) file,
        optionally gzipped.
    id_columns : Sequence[str]
        Regulator and target columns, read as strings.

    Returns
    -------
    pd.DataFrame
        Raw table in file row order. Schema checks happen in
        ``RegulatoryTable.from_dataframe``.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    """
    table_path = Path(path)
    if not table_path.exists():
        raise FileNotFoundError(f"Regulatory table not found: {table_path}")
    df = read_edge_table(table_path, id_columns)
    logger.info("Loaded %d edges from %s", len(df), table_path)
    return df


def load_expression(path: PathLike, layer: Optional[str] = None) -> Any:
    """Read an expression matrix for signature scoring.

    Parameters
    ----------
    path : PathLike
        ``.h5ad`` file (read with anndata) or a cells x genes CSV/TSV whose
        first column holds cell identifiers.
    layer : str, optional
        Layer the scorer will read from an ``.h5ad``; a warning is logged
        when it is missing.

    Returns
    -------
    AnnData or pd.DataFrame

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    """
    expr_path = Path(path)
    if not expr_path.exists():
        raise FileNotFoundError(f"Expression matrix not found: {expr_path}")

    if expr_path.suffix.lower() == ".h5ad":
        import anndata as ad

        adata = ad.read_h5ad(expr_path)
        logger.info("Loaded AnnData: %d cells, %d genes", adata.n_obs, adata.n_vars)
        if layer and layer not in adata.layers:
            logger.warning("Layer '%s' not found in %s; scorer will use X", layer, expr_path)
        return adata

    df = pd.read_csv(expr_path, sep=_separator_for(expr_path), index_col=0)
    df.index = df.index.astype(str)
    df.columns = df.columns.astype(str)
    logger.info("Loaded expression table: %d cells, %d genes", *df.shape)
    return df


def expression_frame(expression: Any, layer: Optional[str] = None) -> pd.DataFrame:
    """Return a dense cells x genes DataFrame from a DataFrame or AnnData.

    Parameters
    ----------
    expression : pd.DataFrame or AnnData
        Expression values
    layer : str, optional
        AnnData layer to use. Falls back to X if absent.

    Returns
    -------
    pd.DataFrame
    """
    if isinstance(expression, pd.DataFrame):
        return expression

    if layer and layer in expression.layers:
        matrix = expression.layers[layer]
    else:
        matrix = expression.X
    if sparse.issparse(matrix):
        matrix = matrix.toarray()
    return pd.DataFrame(
        matrix,
        index=expression.obs_names.astype(str),
        columns=expression.var_names.astype(str),
    )


def write_dataframe(df: pd.DataFrame, path: PathLike, *, index: bool = False) -> Path:
    """Write DataFrame to path ensuring the parent directory exists.

    Parameters
    ----------
    df : pd.DataFrame
        DataFrame to write.
    path : PathLike
        Output path.
    index : bool
        Whether to write row index (default: False).

    Returns
    -------
    Path
        The output path.
    """
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output_path, index=index, sep=_separator_for(output_path))
    return output_path
