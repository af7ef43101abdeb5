"""Tabular exports: transaction report and journal."""

import csv
import re
from datetime import datetime
from typing import IO, Iterable, Mapping, Sequence

from gstprep.domain.entities import CostedTransaction, Journal
from gstprep.utils.amount_parser import format_amount, format_ratio
from gstprep.utils.natural_sort import code_sort_key

TRANSACTION_REPORT_COLUMNS = (
    "Date",
    "Payee",
    "Category",
    "Code",
    "Amount",
    "GST Ratio",
    "GST Amount",
)

JOURNAL_COLUMNS = ("Account", "Code", "Debit", "Credit")


def transaction_report_rows(transactions: Sequence[CostedTransaction]) -> list[dict[str, str]]:
    """One row per transaction, ordered by account code with uncoded rows last.

    The sort is stable, so transactions sharing a code keep their order.
    """
    ordered = sorted(transactions, key=lambda t: code_sort_key(t.code))
    return [
        {
            "Date": txn.date,
            "Payee": txn.payee,
            "Category": txn.category,
            "Code": txn.code or "",
            "Amount": format_amount(txn.amount),
            "GST Ratio": format_ratio(txn.gst_ratio),
            "GST Amount": format_amount(txn.gst_amount),
        }
        for txn in ordered
    ]


def journal_rows(journal: Journal) -> list[dict[str, str]]:
    """Journal lines with blank cells for the unused side, plus a Total row."""
    rows = [
        {
            "Account": entry.account,
            "Code": entry.code,
            "Debit": format_amount(entry.debit) if entry.debit > 0 else "",
            "Credit": format_amount(entry.credit) if entry.credit > 0 else "",
        }
        for entry in journal.all_entries
    ]
    rows.append(
        {
            "Account": "Total",
            "Code": "",
            "Debit": format_amount(journal.total_debit),
            "Credit": format_amount(journal.total_credit),
        }
    )
    return rows


def write_csv(
    rows: Iterable[Mapping[str, str]], columns: Sequence[str], stream: IO[str]
) -> None:
    """Write rows as comma-separated values, quoting only where needed."""
    writer = csv.DictWriter(stream, fieldnames=list(columns), lineterminator="\r\n")
    writer.writeheader()
    for row in rows:
        writer.writerow(row)


def safe_client_name(client_name: str) -> str:
    """Lower-cased name with anything but letters and digits replaced by "_"."""
    return re.sub(r"[^a-z0-9]", "_", client_name, flags=re.IGNORECASE).lower()


def report_filename(client_name: str, when: datetime) -> str:
    """File name for the transaction report, e.g. ``acme_gst_report_2024-03-31_09-05.csv``."""
    return f"{safe_client_name(client_name)}_gst_report_{when:%Y-%m-%d_%H-%M}.csv"


def journal_filename(client_name: str, when: datetime) -> str:
    """File name for the journal export, e.g. ``acme_journal_20240331.csv``."""
    return f"{safe_client_name(client_name)}_journal_{when:%Y%m%d}.csv"
