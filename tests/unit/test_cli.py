"""Unit tests for the command-line interfaces."""

import json

import pandas as pd
import pytest
import yaml
from click.testing import CliRunner

from regulon_pruner.cli import cli
from regulon_pruner.core.assignment import RegulonError
from regulon_pruner.core.assignment.__main__ import main as assignment_main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def table_path(tmp_path, small_signed_net):
    path = tmp_path / "tf_net.csv"
    small_signed_net.to_csv(path, index=False)
    return path


class TestAssignCommand:
    """Tests for `regulon-pruner assign`."""

    def test_assign_writes_outputs(self, runner, table_path, tmp_path):
        out = tmp_path / "out"
        result = runner.invoke(
            cli,
            ["assign", "-i", str(table_path), "-o", str(out), "--strategy", "A",
             "--n-tfs", "1", "--reg-thresh", "0.01"],
        )
        assert result.exit_code == 0, result.output
        assert "Assigned 2 regulons" in result.output
        assert (out / "regulon_edges.csv").exists()
        data = json.loads((out / "regulons.json").read_text())
        assert data["regulons"]["TF1"]["targets"] == ["G1", "G2", "G3"]
        assert data["regulons"]["TF2"]["targets"] == ["G4"]
        assert list((out / "logs").glob("assign_*.log"))
        with open(out / "logs" / "runs.yaml") as f:
            record = next(r for r in yaml.safe_load_all(f) if r)
        assert record["command"] == "assign"
        assert record["status"] == "ok"
        assert record["n_retained_edges"] == 4

    def test_config_then_override(self, runner, table_path, sample_run_config, tmp_path):
        out = tmp_path / "out"
        result = runner.invoke(
            cli,
            ["assign", "-i", str(table_path), "-o", str(out), "-c", str(sample_run_config),
             "--n-genes", "1"],
        )
        assert result.exit_code == 0, result.output
        edges = pd.read_csv(out / "regulon_edges.csv")
        assert list(zip(edges["tf"], edges["gene"])) == [("TF1", "G1"), ("TF2", "G1")]

    def test_library_error_is_reported(self, runner, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text("tf,gene,Gain\n")
        result = runner.invoke(cli, ["assign", "-i", str(path), "-o", str(tmp_path / "out")])
        assert result.exit_code == 1
        assert "E001_EMPTY_INPUT" in result.output
        with open(tmp_path / "out" / "logs" / "runs.yaml") as f:
            record = next(r for r in yaml.safe_load_all(f) if r)
        assert record["status"] == "failed"
        assert record["error"] == "E001_EMPTY_INPUT"

    def test_invalid_strategy_in_config(self, runner, table_path, tmp_path):
        config = tmp_path / "bad.yaml"
        config.write_text("assignment:\n  strategy: Z\n")
        result = runner.invoke(
            cli, ["assign", "-i", str(table_path), "-o", str(tmp_path / "out"), "-c", str(config)]
        )
        assert result.exit_code == 1
        assert "Unsupported regulon strategy" in result.output

    def test_invalid_cap(self, runner, table_path, tmp_path):
        result = runner.invoke(
            cli, ["assign", "-i", str(table_path), "-o", str(tmp_path / "out"), "--n-tfs", "0"]
        )
        assert result.exit_code == 1
        assert "n_tfs" in result.output


class TestScoreAndSummarize:
    """Tests for `score` and `summarize`."""

    @pytest.fixture
    def edges_path(self, runner, table_path, tmp_path):
        out = tmp_path / "regulons"
        result = runner.invoke(
            cli, ["assign", "-i", str(table_path), "-o", str(out), "--strategy", "C"]
        )
        assert result.exit_code == 0, result.output
        return out / "regulon_edges.csv"

    def test_score_csv(self, runner, edges_path, expression, tmp_path):
        expr_path = tmp_path / "expr.csv"
        expression.to_csv(expr_path)
        out = tmp_path / "scores"
        result = runner.invoke(
            cli,
            ["score", "-e", str(expr_path), "--edges", str(edges_path), "-o", str(out),
             "--target-type", "negative"],
        )
        assert result.exit_code == 0, result.output
        scores = pd.read_csv(out / "regulon_scores_negative.csv", index_col=0)
        assert list(scores.columns) == ["TF1", "TF2"]
        assert len(scores) == len(expression)

    @pytest.fixture
    def duplicate_edges_path(self, tmp_path):
        path = tmp_path / "bad" / "regulon_edges.csv"
        path.parent.mkdir()
        path.write_text("tf,gene,Gain,sign\nTF1,G1,0.5,+\nTF1,G1,0.4,+\n")
        return path

    def test_score_reports_invalid_edges(self, runner, duplicate_edges_path, expression, tmp_path):
        expr_path = tmp_path / "expr.csv"
        expression.to_csv(expr_path)
        result = runner.invoke(
            cli,
            ["score", "-e", str(expr_path), "--edges", str(duplicate_edges_path),
             "-o", str(tmp_path / "scores")],
        )
        assert result.exit_code == 1
        assert "E004_INVALID_TABLE" in result.output
        assert not isinstance(result.exception, RegulonError)

    def test_summarize_reports_invalid_edges(self, runner, duplicate_edges_path):
        result = runner.invoke(cli, ["summarize", "--edges", str(duplicate_edges_path)])
        assert result.exit_code == 1
        assert "duplicate" in result.output

    def test_summarize(self, runner, edges_path):
        result = runner.invoke(cli, ["summarize", "--edges", str(edges_path)])
        assert result.exit_code == 0, result.output
        assert "2 regulons, 5 edges" in result.output
        assert "TF1" in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "regulon-pruner" in result.output


class TestAssignmentModuleMain:
    """Tests for `python -m regulon_pruner.core.assignment`."""

    def test_dry_run(self, table_path, tmp_path):
        out = tmp_path / "out"
        code = assignment_main(["--input", str(table_path), "--out", str(out), "--dry-run"])
        assert code == 0
        assert not (out / "regulon_edges.csv").exists()

    def test_writes_outputs(self, table_path, tmp_path):
        out = tmp_path / "out"
        code = assignment_main([
            "--input", str(table_path), "--out", str(out),
            "--strategy", "B", "--n-genes", "1",
        ])
        assert code == 0
        edges = pd.read_csv(out / "regulon_edges.csv")
        assert list(edges["tf"]) == ["TF1", "TF2"]

    def test_error_returns_nonzero(self, tmp_path):
        assert assignment_main(["--input", str(tmp_path / "missing.csv")]) == 1

    def test_bad_strategy(self, table_path):
        assert assignment_main(["--input", str(table_path), "--strategy", "X"]) == 1
