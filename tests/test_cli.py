"""Tests for the command-line interface."""

import yaml
from typer.testing import CliRunner

from channel_mix.cli import app

runner = CliRunner()


class TestCli:
    def test_optimize_defaults(self):
        result = runner.invoke(app, ["optimize", "--budget", "50000"])

        assert result.exit_code == 0
        assert "Metasearch" in result.stdout
        assert "Blended ROAS" in result.stdout

    def test_optimize_with_objective(self):
        result = runner.invoke(app, ["optimize", "--budget", "50000", "--objective", "awareness"])

        assert result.exit_code == 0
        assert "Objective: awareness" in result.stdout

    def test_defaults_then_optimize_plan(self, tmp_path):
        plan = tmp_path / "plan.yaml"
        result = runner.invoke(app, ["defaults", "--output", str(plan)])
        assert result.exit_code == 0
        assert len(yaml.safe_load(plan.read_text())["channels"]) == 9

        out = tmp_path / "out" / "allocation.csv"
        result = runner.invoke(app, ["optimize", "--plan", str(plan), "--output", str(out)])
        assert result.exit_code == 0
        assert out.read_text().startswith("Channel,Spend,Revenue,ROAS")

    def test_optimize_json_output(self, tmp_path):
        out = tmp_path / "result.json"
        result = runner.invoke(app, ["optimize", "--budget", "20000", "--output", str(out)])

        assert result.exit_code == 0
        assert out.exists()
        assert out.with_suffix(".csv").exists()

    def test_missing_plan(self, tmp_path):
        result = runner.invoke(app, ["optimize", "--plan", str(tmp_path / "missing.yaml")])
        assert result.exit_code == 1

    def test_frontier(self, tmp_path):
        out = tmp_path / "frontier.csv"
        result = runner.invoke(
            app,
            ["frontier", "--min-budget", "10000", "--max-budget", "30000", "-n", "3", "-o", str(out)],
        )
        assert result.exit_code == 0
        assert out.exists()

    def test_curves(self):
        result = runner.invoke(app, ["curves", "--max-spend", "100000", "-n", "5"])
        assert result.exit_code == 0
        assert "paid_social" in result.stdout
