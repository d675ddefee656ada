"""Command-line interface for regulon-pruner.

Provides CLI commands for regulon assignment and signature scoring.
"""

import logging
from pathlib import Path
from typing import Optional

import click

from regulon_pruner import __version__


def setup_logging(verbose: bool = False, debug: bool = False) -> logging.Logger:
    """Setup logging for CLI commands."""
    level = logging.DEBUG if debug else (logging.INFO if verbose else logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    return logging.getLogger("regulon_pruner")


@click.group()
@click.version_option(version=__version__, prog_name="regulon-pruner")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, debug: bool) -> None:
    """regulon-pruner: TF regulon assignment and scoring.

    Prunes a scored TF -> target table into regulons and scores regulon
    expression signatures.

    Examples:

        # Keep the top 10 TFs per target gene
        regulon-pruner assign --input tf_net.csv --out regulons/ --strategy A --n-tfs 10

        # Score positive regulon signatures
        regulon-pruner score --expression data.h5ad --edges regulons/regulon_edges.csv --out scores/
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["logger"] = setup_logging(verbose, debug)


@cli.command()
@click.option("--input", "-i", "input_path", required=True, type=click.Path(exists=True),
              help="Regulatory table (CSV/TSV) with tf, gene, Gain columns")
@click.option("--out", "-o", "output_path", required=True, type=click.Path(),
              help="Output directory")
@click.option("--config", "-c", type=click.Path(exists=True),
              help="Run configuration file (YAML)")
@click.option("--strategy", "-s", type=click.Choice(["A", "B", "C"], case_sensitive=False),
              default=None, help="A: top TFs per gene, B: top genes per TF, C: threshold only")
@click.option("--reg-thresh", type=float, default=None, help="Keep edges scoring above this")
@click.option("--n-tfs", type=int, default=None, help="Strategy A: TFs kept per target gene")
@click.option("--n-genes", type=int, default=None, help="Strategy B: genes kept per TF")
@click.option("--n-jobs", type=int, default=None, help="Parallel workers")
@click.pass_context
def assign(
    ctx: click.Context,
    input_path: str,
    output_path: str,
    config: Optional[str],
    strategy: Optional[str],
    reg_thresh: Optional[float],
    n_tfs: Optional[int],
    n_genes: Optional[int],
    n_jobs: Optional[int],
) -> None:
    """Assign regulons from a scored TF -> target table.

    Command-line options override values from --config.
    """
    logger = ctx.obj["logger"]
    logger.info(f"Assigning regulons from: {input_path}")

    from regulon_pruner.config import RegulonConfig
    from regulon_pruner.core.assignment import (
        RegulonAssignmentEngine,
        RegulonError,
        write_regulon_outputs,
    )
    from regulon_pruner.io import load_regulatory_table, record_run, start_run_log

    cfg = RegulonConfig.from_yaml(Path(config)) if config else RegulonConfig()
    params = cfg.assignment
    if strategy is not None:
        params.strategy = strategy.upper()
    if reg_thresh is not None:
        params.reg_thresh = reg_thresh
    if n_tfs is not None:
        params.n_tfs = n_tfs
    if n_genes is not None:
        params.n_genes = n_genes
    if n_jobs is not None:
        params.n_jobs = n_jobs

    out_dir = Path(output_path)
    run_logger, log_path = start_run_log("assign", out_dir)
    run = {"input": input_path, "config": cfg.to_dict(), "log": log_path}

    try:
        table = load_regulatory_table(input_path, cfg.columns.identifiers)
        engine = RegulonAssignmentEngine(params=params, columns=cfg.columns, logger=run_logger)
        result = engine.run(table)
    except RegulonError as exc:
        run_logger.error("%s", exc)
        record_run(out_dir, "assign", status="failed", error=exc.error_code, **run)
        raise click.ClickException(str(exc)) from exc

    paths = write_regulon_outputs(result, out_dir, logger=run_logger)
    record_run(
        out_dir,
        "assign",
        status="ok",
        n_input_edges=result.n_input_edges,
        n_retained_edges=result.n_edges,
        n_regulons=len(result),
        **run,
    )

    click.echo(
        f"Assigned {len(result)} regulons "
        f"({result.n_edges}/{result.n_input_edges} edges, strategy {params.strategy})"
    )
    click.echo(f"Output saved to: {paths['edges'].parent}")


@cli.command()
@click.option("--expression", "-e", "expression_path", required=True,
              type=click.Path(exists=True), help="Expression matrix (.h5ad or cells x genes CSV)")
@click.option("--edges", required=True, type=click.Path(exists=True),
              help="regulon_edges.csv written by `assign`")
@click.option("--out", "-o", "output_path", required=True, type=click.Path(),
              help="Output directory")
@click.option("--config", "-c", type=click.Path(exists=True),
              help="Run configuration file (YAML)")
@click.option("--target-type", type=click.Choice(["positive", "negative", "both"]),
              default=None, help="Which regulon targets to aggregate")
@click.option("--method", type=click.Choice(["mean", "zscore"]), default=None,
              help="Aggregation method")
@click.option("--layer", default=None, help="AnnData layer to use")
@click.option("--cor-thresh", type=float, default=None,
              help="Minimum |correlation| for positive/negative targets")
@click.pass_context
def score(
    ctx: click.Context,
    expression_path: str,
    edges: str,
    output_path: str,
    config: Optional[str],
    target_type: Optional[str],
    method: Optional[str],
    layer: Optional[str],
    cor_thresh: Optional[float],
) -> None:
    """Score regulon expression signatures per cell."""
    logger = ctx.obj["logger"]
    logger.info(f"Scoring regulon signatures on: {expression_path}")

    from regulon_pruner.config import RegulonConfig
    from regulon_pruner.core.assignment import RegulonError, load_regulon_edges
    from regulon_pruner.core.signatures import RegulonScorer
    from regulon_pruner.io import load_expression, record_run, start_run_log, write_dataframe

    cfg = RegulonConfig.from_yaml(Path(config)) if config else RegulonConfig()
    sig = cfg.signatures
    if target_type is not None:
        sig.target_type = target_type
    if method is not None:
        sig.method = method
    if layer is not None:
        sig.layer = layer
    if cor_thresh is not None:
        sig.cor_thresh = cor_thresh

    out_dir = Path(output_path)
    run_logger, log_path = start_run_log("score", out_dir)
    run = {
        "expression": expression_path,
        "edges": edges,
        "signatures": sig.to_dict(),
        "log": log_path,
    }

    try:
        regulons = load_regulon_edges(edges, columns=cfg.columns if config else None)
        expression = load_expression(expression_path, layer=sig.layer)
        result = RegulonScorer(sig, logger=run_logger).score(expression, regulons)
    except RegulonError as exc:
        run_logger.error("%s", exc)
        record_run(out_dir, "score", status="failed", error=exc.error_code, **run)
        raise click.ClickException(str(exc)) from exc

    out_path = out_dir / f"regulon_scores_{result.target_type}.csv"
    write_dataframe(result.scores, out_path, index=True)
    record_run(
        out_dir,
        "score",
        status="ok",
        n_cells=int(result.scores.shape[0]),
        n_regulons=int(result.scores.shape[1]),
        skipped=result.skipped,
        **run,
    )

    click.echo(
        f"Scored {result.scores.shape[1]} regulons over {result.scores.shape[0]} cells "
        f"({len(result.skipped)} skipped)"
    )
    click.echo(f"Output saved to: {out_path}")


@cli.command()
@click.option("--edges", required=True, type=click.Path(exists=True),
              help="regulon_edges.csv written by `assign`")
@click.option("--top", type=int, default=20, help="Number of regulators to show")
@click.pass_context
def summarize(ctx: click.Context, edges: str, top: int) -> None:
    """Print per-regulator target counts."""
    from regulon_pruner.core.assignment import RegulonError, load_regulon_edges

    try:
        regulons = load_regulon_edges(edges)
    except RegulonError as exc:
        raise click.ClickException(str(exc)) from exc
    summary = regulons.summary()
    if summary.empty:
        click.echo("No regulons.")
        return

    summary = summary.sort_values("n_targets", ascending=False, kind="mergesort")
    click.echo(f"{len(regulons)} regulons, {regulons.n_edges} edges")
    click.echo("-" * 60)
    click.echo(f"{'regulator':<20}{'targets':>10}{'positive':>10}{'negative':>10}")
    for _, row in summary.head(top).iterrows():
        click.echo(
            f"{row['regulator']:<20}{row['n_targets']:>10}"
            f"{row['n_positive']:>10}{row['n_negative']:>10}"
        )


def main() -> None:
    """Main entry point for CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
