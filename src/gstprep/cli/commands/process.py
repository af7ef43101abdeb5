"""Process command: import statements and prepare the GST return."""

from datetime import datetime
from pathlib import Path

import click
from gstprep.cli.error_handling import handle_domain_error
from gstprep.cli.profile_resolution import resolve_profile_or_exit
from gstprep.domain.bank_formats import get_bank_format, list_bank_names
from gstprep.domain.entities import GstReturn, SummaryTable
from gstprep.domain.errors import DomainError
from gstprep.domain.export import (
    JOURNAL_COLUMNS,
    TRANSACTION_REPORT_COLUMNS,
    journal_filename,
    journal_rows,
    report_filename,
    transaction_report_rows,
    write_csv,
)
from gstprep.domain.profile import ProfileService
from gstprep.domain.session import WorkingSession
from gstprep.utils.amount_parser import format_currency, format_ratio


def parse_assignment(value: str) -> tuple[str, str]:
    """Split an ``ID=CATEGORY`` option value."""
    tx_id, sep, category = value.partition("=")
    if not sep or not tx_id.strip() or not category.strip():
        raise click.BadParameter(f"Expected ID=CATEGORY, got '{value}'", param_hint="--set")
    return tx_id.strip(), category.strip()


def print_transactions(title: str, transactions) -> None:
    if not transactions:
        return
    click.echo(f"\n{title}:")
    click.echo(
        f"  {'ID':<24} {'Date':<10} {'Payee':<24} {'Category':<24} {'Amount':>12} {'GST':>10}"
    )
    for txn in transactions:
        click.echo(
            f"  {txn.id[:24]:<24} {txn.date:<10} {txn.payee[:24]:<24} {txn.category[:24]:<24} "
            f"{format_currency(abs(txn.amount)):>12} {format_currency(txn.gst_amount):>10}"
        )


def print_summary_table(table: SummaryTable) -> None:
    click.echo(f"\n{table.title}:")
    if not table.rows:
        click.echo("  (none)")
        return
    click.echo(
        f"  {'Code':<6} {'Category':<28} {'Total':>12} {'Ratio':>6} {'Actual':>12} {'GST':>10}"
    )
    for row in table.rows:
        click.echo(
            f"  {row.code or '-':<6} {row.category_name[:28]:<28} "
            f"{format_currency(row.total_amount):>12} {format_ratio(row.gst_ratio):>6} "
            f"{format_currency(row.actual_amount):>12} {format_currency(row.gst_amount):>10}"
        )
    click.echo(
        f"  {'':<6} {'Total':<28} {format_currency(table.total):>12} {'':>6} "
        f"{format_currency(table.actual):>12} {format_currency(table.gst):>10}"
    )


def print_gst_return(gst_return: GstReturn) -> None:
    click.echo("\nGST Return:")
    lines = [
        ("Total sales and income", gst_return.total_sales),
        ("Zero-rated supplies", gst_return.zero_rated_sales),
        ("Net GST sales", gst_return.net_gst_sales),
        ("GST collected on sales", gst_return.gst_collected),
        ("Total purchases and expenses", gst_return.adjusted_purchases),
        ("GST credit on purchases", gst_return.gst_paid),
    ]
    for label, value in lines:
        click.echo(f"  {label:<32} {format_currency(value):>14}")
    click.echo(f"  {gst_return.label:<32} {format_currency(gst_return.amount_due):>14}")


def resolve_output(path: str, default_name: str) -> Path:
    """Use ``default_name`` inside ``path`` when it is a directory."""
    target = Path(path)
    if target.is_dir():
        return target / default_name
    return target


@click.command("process")
@click.argument("files", nargs=-1, required=True, type=click.Path(dir_okay=False))
@click.option(
    "--bank",
    required=True,
    help=f"Bank the files were exported from ({', '.join(list_bank_names())})",
)
@click.option("--profile", "profile_name", required=True, help="Profile name")
@click.option(
    "--set",
    "assignments",
    multiple=True,
    help="Recategorize a transaction, e.g. --set 'jan.csv-3=Entertainment'. Repeatable.",
)
@click.option("--report", type=click.Path(), help="Write the transaction report CSV to this file or directory")
@click.option("--journal", type=click.Path(), help="Write the journal CSV to this file or directory")
@click.pass_context
def process_files(ctx, files, bank: str, profile_name: str, assignments, report: str, journal: str):
    """Import bank CSV FILES and prepare the GST return."""
    db = ctx.obj["db"]
    profile = resolve_profile_or_exit(ctx, profile_name)
    parsed_assignments = [parse_assignment(a) for a in assignments]

    try:
        bank = get_bank_format(bank).bank_name
        session = WorkingSession(db, profile.id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    result = session.load_paths(files, bank)
    for error in result.errors:
        click.echo(f"Error: {error.message}", err=True)

    if not session.transactions:
        click.echo("No transactions found in the uploaded files.", err=True)
        ctx.exit(1)

    click.echo(
        f"\nImported {len(result.transactions)} transactions from "
        f"{len(files) - len(result.errors)} of {len(files)} files"
    )

    try:
        for tx_id, category in parsed_assignments:
            updated = session.update_category(tx_id, category)
            click.echo(f"  {updated.id}: {updated.payee} -> {updated.category}")
    except DomainError as e:
        handle_domain_error(ctx, e)

    costed = session.costed()
    income, expenses = session.summary_service.split_by_direction(costed)
    print_transactions("Income", income)
    print_transactions("Expenses", expenses)

    summary = session.summary()
    print_summary_table(summary.sales)
    print_summary_table(summary.expenses)
    print_gst_return(session.gst_return())

    now = datetime.now()
    client_name = ProfileService(db).display_name(profile)

    if report:
        target = resolve_output(report, report_filename(client_name, now))
        with target.open("w", newline="", encoding="utf-8") as f:
            write_csv(transaction_report_rows(costed), TRANSACTION_REPORT_COLUMNS, f)
        click.echo(f"\nWrote transaction report to {target}")

    if journal:
        target = resolve_output(journal, journal_filename(client_name, now))
        with target.open("w", newline="", encoding="utf-8") as f:
            write_csv(journal_rows(session.journal()), JOURNAL_COLUMNS, f)
        click.echo(f"Wrote journal to {target}")

    try:
        session.record_upload([Path(f).name for f in files], bank, result)
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register process command with main CLI."""
    cli.add_command(process_files)
