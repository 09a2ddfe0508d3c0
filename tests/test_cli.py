"""End-to-end tests for the payoffsage command line."""

from __future__ import annotations

import csv

import pytest
from click.testing import CliRunner

from payoffsage.cli import main


@pytest.fixture
def run(tmp_path):
    runner = CliRunner()
    data_dir = tmp_path / "cli-data"

    def _run(*args):
        return runner.invoke(main, ["--data-dir", str(data_dir), *args])

    return _run


def _add_card(run, *, name="Visa", balance="5000", rate="18.99", minimum="150"):
    result = run("debts", "add", "--name", name, "--balance", balance, "--rate", rate,
                 "--minimum", minimum)
    assert result.exit_code == 0, result.output
    return result


def test_add_and_list_debts(run):
    result = _add_card(run)
    assert "Added debt 1: Visa" in result.output

    listed = run("debts", "list")
    assert listed.exit_code == 0
    assert "[1] Visa (Credit Card) $5,000.00 at 18.99% APR" in listed.output
    assert "Total debt: $5,000.00" in listed.output


def test_list_without_debts(run):
    result = run("debts", "list")
    assert result.exit_code == 0
    assert "No debts tracked." in result.output


def test_add_rejects_invalid_form(run):
    result = run("debts", "add", "--name", "X", "--balance", "0", "--rate", "5", "--minimum", "10")
    assert result.exit_code == 1
    assert "Debt name must be at least 2 characters" in result.output
    assert "Balance must be greater than 0" in result.output


def test_plan_with_extra_payment(run):
    _add_card(run)

    result = run("plan", "--strategy", "avalanche", "--extra", "200")

    assert result.exit_code == 0, result.output
    assert "Debt Avalanche strategy" in result.output
    assert "1. Visa: $5,000.00 at 18.99% APR -> 17 months, $950.00 interest" in result.output
    assert "Debt-free in: 1 years 5 months" in result.output
    assert "Interest saved: $1,250.00" in result.output
    assert "Time saved: 2 years 7 months" in result.output


def test_plan_uses_saved_preferences(run):
    _add_card(run)
    _add_card(run, name="Loan", balance="1200", rate="0", minimum="100")

    saved = run("plan", "--strategy", "snowball", "--extra", "100", "--save")
    assert saved.exit_code == 0, saved.output

    result = run("plan")
    assert result.exit_code == 0, result.output
    assert "Debt Snowball strategy" in result.output
    assert "Extra monthly payment: $100.00" in result.output
    assert "1. Loan" in result.output


def test_plan_reports_non_convergent_debt(run):
    _add_card(run, name="Stuck", balance="5000", rate="24", minimum="90")

    result = run("plan", "--extra", "0")

    assert result.exit_code == 1
    assert "Payment too low to ever pay off 'Stuck'" in result.output


def test_plan_rejects_negative_extra(run):
    result = run("plan", "--extra=-10")
    assert result.exit_code == 2
    assert "Extra payment cannot be negative" in result.output


def test_plan_rejects_infinite_extra(run):
    result = run("plan", "--extra", "inf")
    assert result.exit_code == 2


def test_extra_payment_clears_debt_minimum_cannot(run):
    _add_card(run, name="Stuck", balance="5000", rate="24", minimum="90")

    result = run("plan", "--extra", "50")

    assert result.exit_code == 0, result.output
    # 140/month against 100 of monthly interest
    assert "1. Stuck: $5,000.00 at 24.0% APR -> 64 months" in result.output
    assert "Debt-free in: 5 years 4 months" in result.output
    assert "Savings comparison unavailable" in result.output
    assert "Interest saved" not in result.output


def test_export_plan_skips_baseline(run, tmp_path):
    _add_card(run, name="Stuck", balance="5000", rate="24", minimum="90")

    plan_path = tmp_path / "plan.csv"
    result = run("export", str(plan_path), "--extra", "50")

    assert result.exit_code == 0, result.output
    with plan_path.open(newline="", encoding="utf-8") as fh:
        rows = list(csv.DictReader(fh))
    assert rows[0]["monthly_payment"] == "140.00"
    assert rows[0]["months_to_payoff"] == "64"


def test_plan_reset_forgets_saved_preferences(run):
    _add_card(run)
    assert run("plan", "--strategy", "snowball", "--extra", "100", "--save").exit_code == 0

    result = run("plan", "--reset")

    assert result.exit_code == 0, result.output
    assert "Stored preferences cleared." in result.output
    assert "Debt Avalanche strategy" in result.output
    assert "Extra monthly payment: $0.00" in result.output


def test_saving_extra_only_keeps_configured_strategy(run, monkeypatch):
    monkeypatch.setenv("PAYOFFSAGE_DEFAULT_STRATEGY", "snowball")
    _add_card(run)

    assert run("plan", "--extra", "100", "--save").exit_code == 0
    result = run("plan")

    assert "Debt Snowball strategy" in result.output
    assert "Extra monthly payment: $100.00" in result.output


def test_update_and_remove(run):
    _add_card(run)

    updated = run("debts", "update", "1", "--balance", "4000")
    assert updated.exit_code == 0, updated.output

    listed = run("debts", "list")
    assert "$4,000.00" in listed.output

    removed = run("debts", "remove", "1")
    assert removed.exit_code == 0
    assert "No debts tracked." in run("debts", "list").output

    missing = run("debts", "remove", "1")
    assert missing.exit_code == 1
    assert "Debt 1 not found" in missing.output


def test_export_and_import(run, tmp_path):
    _add_card(run)

    plan_path = tmp_path / "plan.csv"
    exported = run("export", str(plan_path), "--extra", "0")
    assert exported.exit_code == 0, exported.output
    with plan_path.open(newline="", encoding="utf-8") as fh:
        rows = list(csv.DictReader(fh))
    assert rows[0]["months_to_payoff"] == "48"

    debts_path = tmp_path / "debts.csv"
    assert run("export-debts", str(debts_path)).exit_code == 0

    imported = run("import", str(debts_path))
    assert imported.exit_code == 0, imported.output
    assert "Imported 1 debts (0 rows skipped)" in imported.output
    assert "[2] Visa" in run("debts", "list").output
