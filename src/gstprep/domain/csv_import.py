"""CSV import domain service.

Turns bank CSV exports into normalized transactions. Banks prepend account
summary lines before the real table, so the header row is searched for
instead of assumed to be the first line.
"""

import csv
import io
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, Mapping, Optional, Sequence

from gstprep.domain.bank_formats import (
    AMOUNT_FIELD,
    DATE_FIELDS,
    MEMO_FIELDS,
    get_bank_format,
)
from gstprep.domain.entities import (
    BankFormat,
    FileError,
    ImportResult,
    Transaction,
    UploadedFile,
)
from gstprep.domain.errors import (
    DomainError,
    FormatError,
    header_not_found,
    unsupported_file_type,
)
from gstprep.logging_setup import get_logger
from gstprep.utils.amount_parser import parse_amount
from gstprep.utils.date_parser import normalize_date

_logger = get_logger("gstprep.csv_import")

HEADER_DATE_ALIASES = ("date", "transaction date")

# Tried after the bank's own description columns
FALLBACK_PAYEE_FIELDS = ("Payee",)

SUPPORTED_EXTENSIONS = (".csv",)

MAX_DECODE_WORKERS = 8


def get_field_value(row: Mapping[str, str], fields: Iterable[str]) -> str:
    """Return the first non-empty value among ``fields``, or ``""``."""
    for field in fields:
        value = row.get(field)
        if value is not None and value != "":
            return value
    return ""


def find_header_row(rows: Sequence[Sequence[str]], bank_format: BankFormat) -> Optional[int]:
    """Locate the transaction header row.

    A header row has a date column and either an amount column or one of
    the bank's description columns. Matching ignores case and surrounding
    whitespace.

    Args:
        rows: Raw CSV rows
        bank_format: Format of the selected bank

    Returns:
        Index of the first qualifying row, or None when no row qualifies
    """
    amount_aliases = {AMOUNT_FIELD.lower(), bank_format.amount_field.lower()}
    description_aliases = {f.lower() for f in bank_format.description_fields}

    for index, row in enumerate(rows):
        cells = {str(cell or "").strip().lower() for cell in row}
        has_date = any(alias in cells for alias in HEADER_DATE_ALIASES)
        has_amount = bool(cells & amount_aliases)
        has_description = bool(cells & description_aliases)
        if has_date and (has_amount or has_description):
            return index
    return None


def build_row_map(header: Sequence[str], row: Sequence[str]) -> dict[str, str]:
    """Map header names to stripped cell values, skipping blank headers."""
    values: dict[str, str] = {}
    for index, name in enumerate(header):
        if not name or index >= len(row):
            continue
        values[name] = (row[index] or "").strip()
    return values


def normalize_row(
    values: Mapping[str, str], bank_format: BankFormat, transaction_id: str
) -> Optional[Transaction]:
    """Build a transaction from one mapped row.

    Returns None when the amount is missing, unreadable or zero. An
    unreadable date falls back to today.
    """
    amount_str = get_field_value(values, (bank_format.amount_field, AMOUNT_FIELD))
    try:
        amount = parse_amount(amount_str)
    except ValueError:
        return None
    if amount == 0:
        return None

    return Transaction(
        id=transaction_id,
        date=normalize_date(get_field_value(values, DATE_FIELDS)),
        payee=get_field_value(
            values, bank_format.description_fields + FALLBACK_PAYEE_FIELDS
        ),
        description=get_field_value(values, MEMO_FIELDS),
        amount=amount,
    )


def normalize_rows(
    header: Sequence[str],
    data_rows: Sequence[Sequence[str]],
    bank_format: BankFormat,
    file_name: str,
) -> list[Transaction]:
    """Convert the rows below the header into transactions.

    Ids are ``"<file name>-<row index>"`` where the index counts data rows
    from zero, dropped rows included.
    """
    header = [str(h or "").strip() for h in header]
    transactions = []
    for index, row in enumerate(data_rows):
        txn = normalize_row(build_row_map(header, row), bank_format, f"{file_name}-{index}")
        if txn is None:
            _logger.debug("Dropped row %d of %s: no usable amount", index, file_name)
            continue
        transactions.append(txn)
    return transactions


def dedupe_transactions(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Drop transactions whose id was already seen, keeping the first."""
    seen: set[str] = set()
    unique = []
    for txn in transactions:
        if txn.id in seen:
            continue
        seen.add(txn.id)
        unique.append(txn)
    return unique


class CSVImportService:
    """Service for reading batches of bank CSV exports."""

    def __init__(self, max_workers: int = MAX_DECODE_WORKERS):
        """Initialize CSV import service.

        Args:
            max_workers: Upper bound on files decoded at the same time
        """
        self.max_workers = max_workers

    def read_rows(self, content: str) -> list[list[str]]:
        """Split decoded file content into raw rows, skipping empty lines."""
        reader = csv.reader(io.StringIO(content))
        return [row for row in reader if row]

    def parse_file(self, upload: UploadedFile) -> list[Transaction]:
        """Parse one uploaded file.

        Args:
            upload: Decoded file with its selected bank

        Returns:
            Transactions from the file, zero amounts excluded

        Raises:
            FormatError: If the file is not a CSV or has no header row
            ValidationError: If the bank is not supported
        """
        if not upload.name.lower().endswith(SUPPORTED_EXTENSIONS):
            raise FormatError(unsupported_file_type(upload.name), upload.name)

        bank_format = get_bank_format(upload.bank)
        rows = self.read_rows(upload.content)

        header_index = find_header_row(rows, bank_format)
        if header_index is None:
            raise FormatError(
                header_not_found(upload.name, bank_format.amount_field), upload.name
            )

        return normalize_rows(
            rows[header_index], rows[header_index + 1 :], bank_format, upload.name
        )

    def _decode(self, upload: UploadedFile) -> tuple[list[Transaction], Optional[FileError]]:
        _logger.info("Reading %s (%s)", upload.name, upload.bank)
        try:
            transactions = self.parse_file(upload)
        except (DomainError, csv.Error) as e:
            _logger.warning("Skipping %s: %s", upload.name, e)
            return [], FileError(file_name=upload.name, message=str(e))
        _logger.info("Read %d transactions from %s", len(transactions), upload.name)
        return transactions, None

    def import_files(self, uploads: Sequence[UploadedFile]) -> ImportResult:
        """Read a batch of files.

        Files are decoded concurrently and the batch is assembled only once
        every file has finished. A failing file is reported in the result and
        does not affect the others. Transactions keep the input file order;
        duplicate ids keep their first occurrence.

        Args:
            uploads: Decoded files

        Returns:
            ImportResult with transactions and per-file errors
        """
        if not uploads:
            return ImportResult()

        workers = max(1, min(self.max_workers, len(uploads)))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            outcomes = list(pool.map(self._decode, uploads))

        transactions: list[Transaction] = []
        errors: list[FileError] = []
        for file_transactions, error in outcomes:
            transactions.extend(file_transactions)
            if error is not None:
                errors.append(error)

        return ImportResult(
            transactions=tuple(dedupe_transactions(transactions)),
            errors=tuple(errors),
        )

    def import_paths(self, paths: Sequence[str], bank: str) -> ImportResult:
        """Read files from disk and import them as one batch.

        Files that cannot be read are reported like any other file failure.

        Args:
            paths: CSV file paths
            bank: Bank name applied to every file

        Returns:
            ImportResult with transactions and per-file errors
        """
        uploads = []
        read_errors = []
        for path in paths:
            file_path = Path(path)
            try:
                content = file_path.read_text(encoding="utf-8-sig")
            except (OSError, UnicodeDecodeError) as e:
                _logger.warning("Could not read %s: %s", file_path.name, e)
                read_errors.append(
                    FileError(file_name=file_path.name, message=f"Error reading file {file_path.name}: {e}")
                )
                continue
            uploads.append(UploadedFile(name=file_path.name, content=content, bank=bank))

        result = self.import_files(uploads)
        return ImportResult(
            transactions=result.transactions,
            errors=tuple(read_errors) + result.errors,
        )


def append_transactions(
    existing: Sequence[Transaction], new: Sequence[Transaction]
) -> list[Transaction]:
    """Add a new batch to the session list, first occurrence of an id wins."""
    return dedupe_transactions(list(existing) + list(new))
