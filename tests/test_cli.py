"""CLI smoke tests."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from payoffsage.cli import main


@pytest.fixture
def runner(monkeypatch):
    monkeypatch.setenv("PAYOFFSAGE_DEV_MODE", "false")
    return CliRunner()


def test_project_prints_baseline(runner, debts_csv):
    result = runner.invoke(main, ["project", str(debts_csv)])

    assert result.exit_code == 0, result.output
    assert "Strategy: snowball" in result.output
    assert "Base Payoff Time: 12 months" in result.output
    assert "Scenario Payoff Time" not in result.output
    assert "Loan: 12" in result.output


def test_project_with_scenario_and_export(runner, debts_csv, tmp_path):
    export_dir = tmp_path / "out"

    result = runner.invoke(
        main,
        [
            "project",
            str(debts_csv),
            "--strategy",
            "avalanche",
            "--extra",
            "100",
            "--snowflake",
            "1:200",
            "--export-dir",
            str(export_dir),
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Scenario Payoff Time: 5 months" in result.output
    assert "Months Saved: 7" in result.output
    assert (export_dir / "amortization.csv").exists()
    assert (export_dir / "history.csv").exists()


def test_project_respects_configured_cap(runner, tmp_path, monkeypatch):
    monkeypatch.setenv("PAYOFFSAGE_MAX_MONTHS", "24")
    path = tmp_path / "payday.csv"
    path.write_text("Debt Name,Balance,APR,Minimum Payment\nPayday,10000,24,50\n", encoding="utf-8")

    result = runner.invoke(main, ["project", str(path)])

    assert result.exit_code == 0, result.output
    assert "Base Payoff Time: 24 months" in result.output
    assert "Payday: N/A" in result.output
    assert "Warning" in result.output


@pytest.mark.parametrize(
    "args",
    [
        ["--snowflake", "500"],
        ["--snowflake", "x:500"],
        ["--snowflake", "0:500"],
        ["--target", "Nope"],
    ],
)
def test_project_rejects_bad_options(runner, debts_csv, args):
    result = runner.invoke(main, ["project", str(debts_csv), *args])

    assert result.exit_code == 2


def test_project_without_debts_fails(runner, tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("Debt Name,Balance,APR,Minimum Payment\n", encoding="utf-8")

    result = runner.invoke(main, ["project", str(path)])

    assert result.exit_code == 1
    assert "No debts found" in result.output


def test_project_prints_debt_to_income(runner, debts_csv):
    result = runner.invoke(main, ["project", str(debts_csv), "--income", "2000", "--bills", "300"])

    assert result.exit_code == 0, result.output
    assert "Total Debt: $1,200.00" in result.output
    assert "Debt-to-Income: 20.00% (Optimal)" in result.output
