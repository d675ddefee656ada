"""Pytest configuration and shared fixtures for regulon-pruner tests."""

import sys
from pathlib import Path

import pytest
import pandas as pd

# Add package to path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from tests.fixtures import (
    create_regulatory_table,
    create_example_table,
    create_expression_matrix,
)


# ============================================================================
# Regulatory Table Fixtures
# ============================================================================


@pytest.fixture
def example_table() -> pd.DataFrame:
    """TF1/TF2/TF3 -> G1 with scores 0.9, 0.5, 0.05."""
    return create_example_table()


@pytest.fixture
def tf_net() -> pd.DataFrame:
    """Random TF network with Gain and Cor columns."""
    return create_regulatory_table()


@pytest.fixture
def signed_tf_net() -> pd.DataFrame:
    """Random TF network with an explicit sign column."""
    return create_regulatory_table(include_sign=True)


@pytest.fixture
def small_signed_net() -> pd.DataFrame:
    """Hand-written network with mixed signs and correlations."""
    return pd.DataFrame({
        "tf": ["TF1", "TF1", "TF1", "TF2", "TF2", "TF3"],
        "gene": ["G1", "G2", "G3", "G1", "G4", "G5"],
        "Gain": [0.5, 0.4, 0.3, 0.2, 0.1, 0.005],
        "Cor": [0.3, -0.4, 0.01, -0.2, 0.5, 0.9],
        "sign": ["+", "-", "+", "-", "+", "+"],
    })


# ============================================================================
# Expression Fixtures
# ============================================================================


@pytest.fixture
def expression() -> pd.DataFrame:
    """Expression for genes G1..G6 over 40 cells."""
    return create_expression_matrix([f"G{i}" for i in range(1, 7)], n_cells=40)


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def tmp_output_dir(tmp_path: Path) -> Path:
    """Create a temporary output directory for tests."""
    output_dir = tmp_path / "output"
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir


@pytest.fixture
def sample_run_config(tmp_path) -> Path:
    """Create sample run configuration file."""
    import yaml

    config = {
        "regulons": {
            "assignment": {
                "strategy": "B",
                "reg_thresh": 0.02,
                "n_genes": 5,
            },
            "columns": {
                "score": "Gain",
            },
            "signatures": {
                "target_type": "positive",
                "method": "zscore",
            },
        },
    }

    path = tmp_path / "regulons.yaml"
    with open(path, "w") as f:
        yaml.dump(config, f)

    return path
