"""Run configuration for regulon-pruner.

A single YAML file can carry the assignment parameters, the column names of
the regulatory table and the signature settings:

.. code-block:: yaml

    regulons:
      assignment:
        strategy: B
        reg_thresh: 0.01
        n_genes: 50
      columns:
        score: importance
      signatures:
        target_type: positive
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from ..core.assignment.config import AssignmentParams, ColumnConfig
from ..core.signatures.config import SignatureConfig


@dataclass
class RegulonConfig:
    """Master configuration for regulon assignment and scoring.

    Attributes
    ----------
    assignment : AssignmentParams
        Strategy, threshold and caps
    columns : ColumnConfig
        Regulatory table column names
    signatures : SignatureConfig
        Expression signature settings
    """

    assignment: AssignmentParams = field(default_factory=AssignmentParams)
    columns: ColumnConfig = field(default_factory=ColumnConfig)
    signatures: SignatureConfig = field(default_factory=SignatureConfig)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "RegulonConfig":
        """Load configuration from YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        # Handle nested regulons section
        if "regulons" in data:
            data = data["regulons"] or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RegulonConfig":
        """Build configuration from a plain dictionary."""
        return cls(
            assignment=AssignmentParams(**(data.get("assignment") or {})),
            columns=ColumnConfig(**(data.get("columns") or {})),
            signatures=SignatureConfig(**(data.get("signatures") or {})),
        )

    @classmethod
    def default(cls) -> "RegulonConfig":
        """Create default configuration."""
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "assignment": self.assignment.to_dict(),
            "columns": self.columns.to_dict(),
            "signatures": self.signatures.to_dict(),
        }
