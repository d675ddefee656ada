"""Unit tests for statistical utilities."""

import numpy as np
import pandas as pd
import pytest

from regulon_pruner.utils import robust_scale, robust_zscore_columns
from regulon_pruner.utils.stats import MAD_SCALE, MEANAD_SCALE


class TestRobustZscoreColumns:
    """Tests for per-gene robust z-scores."""

    def test_mad_scaling(self):
        df = pd.DataFrame({"G1": [1.0, 2.0, 3.0, 4.0, 100.0]})
        z = robust_zscore_columns(df)
        assert z.loc[2, "G1"] == 0.0
        assert z.loc[3, "G1"] == pytest.approx(1.0 / MAD_SCALE)

    def test_zero_mad_falls_back_to_mean_deviation(self):
        """Mostly-zero genes still get a spread instead of all-zero scores."""
        df = pd.DataFrame({"G1": [0.0, 0.0, 0.0, 0.0, 5.0]})
        z = robust_zscore_columns(df)
        assert z.loc[4, "G1"] == pytest.approx(5.0 / MEANAD_SCALE)
        assert (z.loc[:3, "G1"] == 0).all()

    def test_constant_column_is_zero(self):
        df = pd.DataFrame({"G1": [1.0, 1.0, np.nan, 1.0], "G2": [0.0, 1.0, 2.0, 3.0]})
        z = robust_zscore_columns(df)
        assert z["G1"].tolist()[:2] == [0.0, 0.0]
        assert np.isnan(z.loc[2, "G1"])
        assert z.loc[3, "G1"] == 0.0

    def test_keeps_labels(self, expression):
        z = robust_zscore_columns(expression)
        assert z.shape == expression.shape
        assert list(z.index) == list(expression.index)
        assert list(z.columns) == list(expression.columns)

    def test_empty_frame(self):
        z = robust_zscore_columns(pd.DataFrame(index=["c1", "c2"]))
        assert z.shape == (2, 0)


class TestRobustScale:
    """Tests for the spread estimate."""

    def test_constant_is_nan(self):
        values = np.array([[2.0, 0.0], [2.0, 1.0], [2.0, 0.0]])
        scale = robust_scale(values, np.median(values, axis=0))
        assert np.isnan(scale[0])
        assert scale[1] == pytest.approx(MEANAD_SCALE / 3)
