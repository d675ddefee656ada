"""
Export utilities for regulon assignment.

This module provides:
- write_regulon_outputs: edges CSV, regulon JSON, summary CSV, params YAML
- load_regulon_edges: rebuild a RegulonSet from an exported edges CSV
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Optional, Union

import yaml

from ...io.tables import ensure_output_dir, read_edge_table, write_dataframe
from .config import AssignmentParams, ColumnConfig
from .regulon import RegulonSet
from .table import RegulatoryTable

PathLike = Union[str, Path]

EDGES_FILENAME = "regulon_edges.csv"
REGULONS_FILENAME = "regulons.json"
SUMMARY_FILENAME = "regulon_summary.csv"
PARAMS_FILENAME = "assignment_params.yaml"


def write_regulon_outputs(
    result: RegulonSet,
    output_dir: PathLike,
    logger: Optional[logging.Logger] = None,
) -> Dict[str, Path]:
    """Write a RegulonSet to an output directory.

    Parameters
    ----------
    result : RegulonSet
        Assignment result
    output_dir : PathLike
        Destination directory (created if missing)
    logger : logging.Logger, optional
        Logger instance

    Returns
    -------
    Dict[str, Path]
        Mapping of output kind -> written path
    """
    _logger = logger or logging.getLogger(__name__)
    out_dir = ensure_output_dir(output_dir)

    paths: Dict[str, Path] = {}
    paths["edges"] = write_dataframe(result.edges, out_dir / EDGES_FILENAME)
    paths["summary"] = write_dataframe(result.summary(), out_dir / SUMMARY_FILENAME)

    regulons_path = out_dir / REGULONS_FILENAME
    with open(regulons_path, "w", encoding="utf-8") as f:
        json.dump(result.to_dict(), f, indent=2)
    paths["regulons"] = regulons_path

    params_path = out_dir / PARAMS_FILENAME
    with open(params_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(
            {"assignment": result.params.to_dict(), "columns": result.columns.to_dict()},
            f,
            sort_keys=False,
        )
    paths["params"] = params_path

    for kind, path in paths.items():
        _logger.info("Wrote %s: %s", kind, path)
    return paths


def load_regulon_edges(
    path: PathLike,
    columns: Optional[ColumnConfig] = None,
    params: Optional[AssignmentParams] = None,
) -> RegulonSet:
    """Rebuild a RegulonSet from an exported edges CSV.

    When ``params`` is None and an ``assignment_params.yaml`` sits next to
    the edges file, parameters and column names are read from it.

    Parameters
    ----------
    path : PathLike
        Path to regulon_edges.csv
    columns : ColumnConfig, optional
        Column names; overrides the sidecar YAML
    params : AssignmentParams, optional
        Parameters recorded on the result

    Returns
    -------
    RegulonSet

    Raises
    ------
    FileNotFoundError
        If the edges file does not exist
    """
    edges_path = Path(path)
    if not edges_path.exists():
        raise FileNotFoundError(f"Regulon edges not found: {edges_path}")

    sidecar = edges_path.parent / PARAMS_FILENAME
    if sidecar.exists() and (params is None or columns is None):
        with open(sidecar) as f:
            data = yaml.safe_load(f) or {}
        if params is None:
            params = AssignmentParams(**data.get("assignment", {}))
        if columns is None:
            columns = ColumnConfig(**data.get("columns", {}))

    params = params or AssignmentParams()
    columns = columns or ColumnConfig()

    df = read_edge_table(edges_path, columns.identifiers)
    if df.empty:
        return RegulonSet.from_edges(df, params=params, columns=columns, n_input_edges=0)
    table = RegulatoryTable.from_dataframe(df, columns)
    return RegulonSet.from_edges(table.edges, params=params, columns=columns)
