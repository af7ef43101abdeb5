"""Supported bank export layouts."""

from gstprep.domain.entities import BankFormat
from gstprep.domain.errors import ValidationError, unknown_bank

# Generic aliases shared by every bank
DATE_FIELDS = ("Date", "Transaction Date")
AMOUNT_FIELD = "Amount"
MEMO_FIELDS = ("Memo", "Particulars", "Details")

BANK_FORMATS: dict[str, BankFormat] = {
    "ASB": BankFormat(
        bank_name="ASB",
        description_fields=("Payee", "Memo"),
        amount_field="Amount",
    ),
    "BNZ": BankFormat(
        bank_name="BNZ",
        description_fields=("Code",),
        amount_field="Amount",
    ),
    "Westpac": BankFormat(
        bank_name="Westpac",
        description_fields=("Other Party",),
        amount_field="Amount",
    ),
    "Kiwibank": BankFormat(
        bank_name="Kiwibank",
        description_fields=("Description", "Particulars", "Other Party"),
        amount_field="Amount",
    ),
    "ANZ": BankFormat(
        bank_name="ANZ",
        description_fields=("Details", "Description", "Particulars"),
        amount_field="Amount",
    ),
}


def list_bank_names() -> list[str]:
    """Return supported bank names in registry order."""
    return list(BANK_FORMATS)


def get_bank_format(bank_name: str) -> BankFormat:
    """Look up a bank format by name, ignoring case.

    Raises:
        ValidationError: If the bank is not supported
    """
    if bank_name in BANK_FORMATS:
        return BANK_FORMATS[bank_name]
    wanted = (bank_name or "").strip().casefold()
    for name, fmt in BANK_FORMATS.items():
        if name.casefold() == wanted:
            return fmt
    raise ValidationError(unknown_bank(bank_name, BANK_FORMATS))
