"""Tests for the gstprep command line."""

import csv
from pathlib import Path

import pytest

from gstprep.cli.main import cli


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "cli.db")


@pytest.fixture
def invoke(cli_runner, db_path):
    """Run a CLI command against a throwaway database."""

    def _invoke(*args, **kwargs):
        return cli_runner.invoke(cli, ["--db-path", db_path, *args], **kwargs)

    return _invoke


@pytest.fixture
def profile(invoke):
    result = invoke("profile", "create", "Alice")
    assert result.exit_code == 0, result.output
    return "Alice"


def test_help_does_not_need_database(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "process" in result.output


def test_banks(invoke):
    result = invoke("banks")
    assert result.exit_code == 0
    for bank in ("ASB", "BNZ", "Westpac", "Kiwibank", "ANZ"):
        assert bank in result.output


def test_profile_create_duplicate(invoke, profile):
    result = invoke("profile", "create", profile)
    assert result.exit_code == 1
    assert "already exists" in result.output


def test_profile_client_and_list(invoke, profile):
    result = invoke("profile", "client", "Acme", "--agent", profile, "--company", "Acme Ltd", "--ird", "123")
    assert result.exit_code == 0, result.output

    result = invoke("profile", "list")
    assert "Acme (ID: 2) - Acme Ltd [IRD 123] (client of Alice)" in result.output

    result = invoke("profile", "list", "--agent", profile)
    assert "Acme" in result.output
    assert "Alice (ID" not in result.output


def test_unknown_profile(invoke):
    result = invoke("accounts", "list", "--profile", "Nobody")
    assert result.exit_code == 1
    assert "Profile 'Nobody' not found" in result.output


def test_accounts_list_ordered_by_code(invoke, profile):
    result = invoke("accounts", "list", "--profile", profile)
    assert result.exit_code == 0
    assert result.output.index("Sales") < result.output.index("Uncategorized")
    assert "Motor Vehicle Expenses" in result.output
    assert "25%" in result.output


def test_accounts_add_edit_delete(invoke, profile):
    result = invoke("accounts", "add", "Subscriptions", "--profile", profile, "--ratio", "0.5", "--code", "489")
    assert result.exit_code == 0, result.output
    assert "50% claimable" in result.output

    result = invoke("accounts", "edit", "Subscriptions", "--profile", profile, "--ratio", "1")
    assert result.exit_code == 0, result.output
    assert "code 489, 100% claimable" in result.output

    result = invoke("accounts", "delete", "Subscriptions", "--profile", profile)
    assert result.exit_code == 0, result.output

    result = invoke("accounts", "list", "--profile", profile)
    assert "Subscriptions" not in result.output


def test_accounts_edit_requires_a_change(invoke, profile):
    result = invoke("accounts", "edit", "Power", "--profile", profile)
    assert result.exit_code == 1
    assert "Nothing to change" in result.output


def test_accounts_delete_core(invoke, profile):
    result = invoke("accounts", "delete", "Sales", "--profile", profile)
    assert result.exit_code == 1
    assert "cannot be deleted" in result.output


def test_accounts_bad_ratio(invoke, profile):
    result = invoke("accounts", "add", "Odd", "--profile", profile, "--ratio", "3")
    assert result.exit_code == 1
    assert "between 0 and 1" in result.output


def test_accounts_reset(invoke, profile):
    invoke("accounts", "add", "Subscriptions", "--profile", profile, "--ratio", "1")
    result = invoke("accounts", "reset", "--profile", profile, "--yes")
    assert result.exit_code == 0, result.output
    assert "18 categories" in result.output


def test_mapping_commands(invoke, profile):
    result = invoke("mapping", "list", "--profile", profile)
    assert "No payee mappings" in result.output

    result = invoke("mapping", "set", "bp", "Motor Vehicle Expenses", "--profile", profile)
    assert result.exit_code == 0, result.output

    result = invoke("mapping", "list", "--profile", profile)
    assert "BP  ->  Motor Vehicle Expenses" in result.output

    result = invoke("mapping", "set", "bp", "Nope", "--profile", profile)
    assert result.exit_code == 1

    result = invoke("mapping", "remove", "BP", "--profile", profile)
    assert result.exit_code == 0, result.output
    result = invoke("mapping", "remove", "BP", "--profile", profile)
    assert result.exit_code == 1


def test_process_prints_return(invoke, profile, fixtures_dir):
    result = invoke("process", str(fixtures_dir / "anz_simple.csv"), "--bank", "anz", "--profile", profile)

    assert result.exit_code == 0, result.output
    assert "Imported 2 transactions from 1 of 1 files" in result.output
    assert "Sales & Income" in result.output
    assert "Purchases & Expenses" in result.output
    assert "GST to Pay" in result.output
    assert "$28.13" in result.output


def test_process_set_learns_mapping(invoke, profile, fixtures_dir):
    result = invoke(
        "process",
        str(fixtures_dir / "anz_simple.csv"),
        "--bank",
        "ANZ",
        "--profile",
        profile,
        "--set",
        "anz_simple.csv-0=Travel - National",
    )
    assert result.exit_code == 0, result.output
    assert "anz_simple.csv-0: BP -> Travel - National" in result.output

    result = invoke("mapping", "list", "--profile", profile)
    assert "BP  ->  Travel - National" in result.output


def test_process_bad_assignment(invoke, profile, fixtures_dir):
    result = invoke(
        "process", str(fixtures_dir / "anz_simple.csv"), "--bank", "ANZ", "--profile", profile, "--set", "oops"
    )
    assert result.exit_code == 2
    assert "Expected ID=CATEGORY" in result.output


def test_process_writes_exports(invoke, profile, fixtures_dir, tmp_path):
    report = tmp_path / "report.csv"
    result = invoke(
        "process",
        str(fixtures_dir / "anz_simple.csv"),
        "--bank",
        "ANZ",
        "--profile",
        profile,
        "--report",
        str(report),
        "--journal",
        str(tmp_path),
    )
    assert result.exit_code == 0, result.output

    with report.open(newline="") as f:
        rows = list(csv.DictReader(f))
    assert [r["Payee"] for r in rows] == ["Customer X", "BP"]

    journals = list(Path(tmp_path).glob("alice_journal_*.csv"))
    assert len(journals) == 1
    with journals[0].open(newline="") as f:
        journal = list(csv.DictReader(f))
    assert journal[-1] == {"Account": "Total", "Code": "", "Debit": "200.00", "Credit": "200.00"}
    assert {"Account": "Drawings", "Code": "501", "Debit": "187.50", "Credit": ""} in journal


def test_process_reports_bad_files_and_continues(invoke, profile, fixtures_dir):
    result = invoke(
        "process",
        str(fixtures_dir / "anz_simple.csv"),
        str(fixtures_dir / "not_a_statement.csv"),
        str(fixtures_dir / "notes.txt"),
        "--bank",
        "ANZ",
        "--profile",
        profile,
    )
    assert result.exit_code == 0, result.output
    assert "Could not find a valid transaction header row in not_a_statement.csv" in result.output
    assert "Unsupported file type: notes.txt" in result.output
    assert "Imported 2 transactions from 1 of 3 files" in result.output


def test_process_no_transactions(invoke, profile, fixtures_dir):
    result = invoke(
        "process", str(fixtures_dir / "not_a_statement.csv"), "--bank", "ANZ", "--profile", profile
    )
    assert result.exit_code == 1
    assert "No transactions found" in result.output


def test_process_unknown_bank(invoke, profile, fixtures_dir):
    result = invoke("process", str(fixtures_dir / "anz_simple.csv"), "--bank", "Monzo", "--profile", profile)
    assert result.exit_code == 1
    assert "Unknown bank 'Monzo'" in result.output


def test_history(invoke, profile, fixtures_dir):
    result = invoke("history", "--profile", profile)
    assert "No uploads found." in result.output

    invoke("process", str(fixtures_dir / "westpac_statement.csv"), "--bank", "Westpac", "--profile", profile)

    result = invoke("history", "--profile", profile, "--since", "yesterday", "--until", "tomorrow")
    assert result.exit_code == 0, result.output
    assert "Westpac" in result.output
    assert "2 transactions" in result.output
    assert "westpac_statement.csv" in result.output


def test_history_invalid_date(invoke, profile):
    result = invoke("history", "--profile", profile, "--since", "someday soon")
    assert result.exit_code == 1
    assert "Invalid start date" in result.output
