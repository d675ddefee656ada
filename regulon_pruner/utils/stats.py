"""Statistical utilities for regulon-pruner.

Provides the per-gene robust standardization used by regulon signatures.
"""

from __future__ import annotations

import warnings

import numpy as np
import pandas as pd

# MAD * 1.4826 estimates the standard deviation of normal data
MAD_SCALE = 1.4826
# Mean absolute deviation * sqrt(pi / 2) does the same; used when MAD is 0
MEANAD_SCALE = 1.253314


def robust_scale(values: np.ndarray, center: np.ndarray) -> np.ndarray:
    """Per-column spread estimate for a cells x genes array.

    Uses the scaled MAD. For columns where more than half of the cells sit
    at the median (typical of sparse counts) the MAD is 0, and the scaled
    mean absolute deviation is used instead. Columns with no spread at all
    get NaN.

    Parameters
    ----------
    values : np.ndarray
        2-D array, cells x genes
    center : np.ndarray
        Per-column medians

    Returns
    -------
    np.ndarray
        One positive scale per column, NaN where the column is constant
    """
    deviation = np.abs(values - center)
    with warnings.catch_warnings():
        # All-NaN columns yield NaN scales
        warnings.simplefilter("ignore", category=RuntimeWarning)
        scale = MAD_SCALE * np.nanmedian(deviation, axis=0)
        zero_mad = scale == 0
        if zero_mad.any():
            scale[zero_mad] = MEANAD_SCALE * np.nanmean(deviation[:, zero_mad], axis=0)
    scale[~(scale > 0)] = np.nan
    return scale


def robust_zscore_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Robust z-score of every column of a cells x genes frame.

    Each gene is centered on its median and divided by ``robust_scale``.
    Constant genes score 0 in every cell; non-finite inputs stay NaN.

    Parameters
    ----------
    df : pd.DataFrame
        Cells x genes expression

    Returns
    -------
    pd.DataFrame
        Same shape, index and columns as ``df``
    """
    values = df.to_numpy(dtype=float)
    if values.size == 0:
        return pd.DataFrame(values, index=df.index, columns=df.columns)

    values = np.where(np.isfinite(values), values, np.nan)
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", category=RuntimeWarning)
        center = np.nanmedian(values, axis=0)
    scale = robust_scale(values, center)

    constant = np.isnan(scale)
    z = (values - center) / np.where(constant, 1.0, scale)
    z[:, constant] = np.where(np.isnan(values[:, constant]), np.nan, 0.0)
    return pd.DataFrame(z, index=df.index, columns=df.columns)
