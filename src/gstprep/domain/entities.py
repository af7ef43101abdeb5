"""Domain model entities for gstprep.

These are pure data classes representing the GST pipeline, independent of
the database schema. Everything except account categories, payee mappings,
profiles and upload records is rebuilt for every working session.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class BankFormat:
    """Column aliases used to read one bank's CSV export."""

    bank_name: str
    description_fields: tuple[str, ...]
    amount_field: str


@dataclass(frozen=True)
class Transaction:
    """Normalized bank transaction.

    ``amount`` is signed: positive for income/sales, negative for expenses.
    It is never zero. ``category`` is None until classification.
    """

    id: str
    date: str
    payee: str
    description: str
    amount: Decimal
    category: Optional[str] = None

    def with_category(self, category: str) -> "Transaction":
        """Return a copy assigned to ``category``."""
        return replace(self, category=category)


@dataclass(frozen=True)
class AccountCategory:
    """Chart of accounts entry with its GST claim ratio."""

    id: str
    name: str
    ratio: Decimal
    code: str = ""
    is_deletable: bool = True


@dataclass(frozen=True)
class CostedTransaction:
    """Transaction with GST figures derived from the account table."""

    id: str
    date: str
    payee: str
    description: str
    amount: Decimal
    category: str
    gst_ratio: Decimal
    gst_amount: Decimal
    code: str

    @property
    def is_income(self) -> bool:
        """True for money received; amounts are never zero."""
        return self.amount > 0


@dataclass(frozen=True)
class CategorySummary:
    """One row of the Sales or Expenses summary table."""

    category_name: str
    code: str
    total_amount: Decimal
    gst_ratio: Decimal
    actual_amount: Decimal
    gst_amount: Decimal
    signed_total: Decimal


@dataclass(frozen=True)
class SummaryTable:
    """Sales or Expenses table with running totals."""

    title: str
    rows: tuple[CategorySummary, ...] = ()
    total: Decimal = Decimal("0")
    actual: Decimal = Decimal("0")
    gst: Decimal = Decimal("0")


@dataclass(frozen=True)
class SummaryReport:
    """Both summary tables for a batch of costed transactions."""

    sales: SummaryTable
    expenses: SummaryTable


@dataclass(frozen=True)
class GstReturn:
    """GST return figures derived from the full transaction set."""

    total_sales: Decimal
    zero_rated_sales: Decimal
    net_gst_sales: Decimal
    gst_collected: Decimal
    adjusted_purchases: Decimal
    gst_paid: Decimal
    gst_difference: Decimal

    @property
    def is_payable(self) -> bool:
        return self.gst_difference >= 0

    @property
    def label(self) -> str:
        return "GST to Pay" if self.is_payable else "GST to Refund"

    @property
    def amount_due(self) -> Decimal:
        return abs(self.gst_difference)


@dataclass(frozen=True)
class JournalEntry:
    """Debit or credit line of the journal export."""

    account: str
    code: str
    debit: Decimal = Decimal("0")
    credit: Decimal = Decimal("0")


@dataclass(frozen=True)
class Journal:
    """Balanced double-entry journal."""

    entries: tuple[JournalEntry, ...]
    drawings: Optional[JournalEntry]
    total_debit: Decimal
    total_credit: Decimal

    @property
    def all_entries(self) -> tuple[JournalEntry, ...]:
        """Category entries followed by the balancing entry, if any."""
        if self.drawings is None:
            return self.entries
        return self.entries + (self.drawings,)


@dataclass(frozen=True)
class UploadedFile:
    """Decoded upload handed over by the upload collaborator."""

    name: str
    content: str
    bank: str


@dataclass(frozen=True)
class FileError:
    """Failure to read one file of a batch."""

    file_name: str
    message: str


@dataclass(frozen=True)
class ImportResult:
    """Transactions from every readable file plus per-file failures."""

    transactions: tuple[Transaction, ...] = ()
    errors: tuple[FileError, ...] = ()


@dataclass(frozen=True)
class Profile:
    """A user, or a client managed by an agent profile."""

    id: int
    name: str
    agent_id: Optional[int]
    company_name: Optional[str]
    ird_number: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class UploadRecord:
    """History entry for a processed batch."""

    id: int
    profile_id: int
    uploaded_at: datetime
    file_names: tuple[str, ...]
    bank: str
    total_transactions: int
