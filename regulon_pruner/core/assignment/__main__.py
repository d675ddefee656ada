"""Regulon assignment: prune a scored TF -> target table into regulons.

Strategies:
A. Top n_tfs regulators per target gene scoring above reg_thresh
B. Top n_genes target genes per regulator scoring above reg_thresh
C. Every edge scoring above reg_thresh

Usage Examples:
    # Dry-run: show per-regulator counts without writing outputs
    python -m regulon_pruner.core.assignment \\
        --input output/tf_net.csv \\
        --strategy A --n-tfs 10 \\
        --dry-run

    # Assign and export
    python -m regulon_pruner.core.assignment \\
        --input output/tf_net.csv \\
        --strategy B --n-genes 50 --reg-thresh 0.01 \\
        --out output/regulons
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import pandas as pd

from ...io.tables import load_regulatory_table
from .config import AssignmentParams, ColumnConfig
from .engine import RegulonAssignmentEngine
from .export import write_regulon_outputs
from .validation import RegulonError


def setup_logger(
    name: str,
    log_path: Optional[Path] = None,
    level: int = logging.INFO,
) -> logging.Logger:
    """Setup logger with console and optional file handlers."""
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def print_regulon_plan(summary: pd.DataFrame, logger: logging.Logger, top: int = 25) -> None:
    """Print per-regulator target counts to the logger."""
    if summary.empty:
        logger.info("No regulons retained.")
        return

    ordered = summary.sort_values("n_targets", ascending=False, kind="mergesort")
    logger.info("=" * 70)
    logger.info("REGULONS: %d regulators, %d edges", len(ordered), int(ordered["n_targets"].sum()))
    logger.info("=" * 70)
    for _, row in ordered.head(top).iterrows():
        logger.info(
            "  %-20s %5d targets (+%d / -%d), max score %.4g",
            row["regulator"],
            row["n_targets"],
            row["n_positive"],
            row["n_negative"],
            row["max_score"],
        )
    if len(ordered) > top:
        logger.info("  ... %d more regulators", len(ordered) - top)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Prune a scored TF -> target table into regulons",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--input", required=True, type=Path, help="Regulatory table (CSV/TSV)")
    parser.add_argument("--out", type=Path, default=None, help="Output directory")
    parser.add_argument("--strategy", default="A", help="A, B or C")
    parser.add_argument("--reg-thresh", type=float, default=0.01)
    parser.add_argument("--n-tfs", type=int, default=10)
    parser.add_argument("--n-genes", type=int, default=50)
    parser.add_argument("--n-jobs", type=int, default=1)
    parser.add_argument("--tf-col", default="tf", help="Regulator column")
    parser.add_argument("--gene-col", default="gene", help="Target column")
    parser.add_argument("--score-col", default="Gain", help="Score column")
    parser.add_argument("--dry-run", action="store_true", help="Do not write outputs")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    log_path = args.out / "logs" / "assign.log" if args.out and not args.dry_run else None
    logger = setup_logger("regulon_pruner.assignment", log_path)

    params = AssignmentParams(
        strategy=args.strategy,
        reg_thresh=args.reg_thresh,
        n_tfs=args.n_tfs,
        n_genes=args.n_genes,
        n_jobs=args.n_jobs,
    )
    columns = ColumnConfig(regulator=args.tf_col, target=args.gene_col, score=args.score_col)

    try:
        table = load_regulatory_table(args.input, columns.identifiers)
        result = RegulonAssignmentEngine(params, columns, logger=logger).run(table)
    except (FileNotFoundError, RegulonError) as exc:
        logger.error("%s", exc)
        return 1

    print_regulon_plan(result.summary(), logger)

    if args.dry_run or args.out is None:
        logger.info("Dry run: no outputs written")
        return 0

    write_regulon_outputs(result, args.out, logger=logger)
    return 0


if __name__ == "__main__":
    sys.exit(main())
