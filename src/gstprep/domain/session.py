"""Working session: one profile's transactions between upload and export.

Transactions live only in memory. The account table and payee mapping are
loaded from the database when the session starts, and every change to them
is written back straight away. When a write fails the in-memory state is put
back the way it was before the error is raised.
"""

from typing import Iterable, Optional, Sequence

from gstprep.database.base import Database
from gstprep.domain.account_table import AccountTable, AccountTableService
from gstprep.domain.classifier import classify_transactions, learn_from_correction
from gstprep.domain.csv_import import CSVImportService, append_transactions
from gstprep.domain.entities import (
    CostedTransaction,
    GstReturn,
    ImportResult,
    Journal,
    SummaryReport,
    Transaction,
    UploadedFile,
)
from gstprep.domain.errors import NotFoundError, StateError, category_not_found, transaction_not_found
from gstprep.domain.gst import cost_transactions
from gstprep.domain.journal import JournalService
from gstprep.domain.payee_mapping import PayeeMappingService
from gstprep.domain.summary import SummaryService
from gstprep.logging_setup import get_logger

_logger = get_logger("gstprep.session")


class WorkingSession:
    """Transactions of one profile plus its carried state."""

    def __init__(self, db: Database, profile_id: int, import_service: Optional[CSVImportService] = None):
        """Start a session for a profile.

        Args:
            db: Database instance
            profile_id: Profile whose account table and mapping are used
            import_service: Optional CSV import service

        Raises:
            NotFoundError: If the profile doesn't exist
        """
        self.db = db
        self.profile_id = profile_id
        self.account_table_service = AccountTableService(db)
        self.mapping_service = PayeeMappingService(db)
        self.import_service = import_service or CSVImportService()
        self.summary_service = SummaryService()
        self.journal_service = JournalService(self.summary_service)

        self.account_table = self.account_table_service.get_table(profile_id)
        self.mapping = self.mapping_service.get_mapping(profile_id)
        self.transactions: list[Transaction] = []

    # Loading
    def add_import(self, result: ImportResult) -> ImportResult:
        """Classify an import result and add it to the session."""
        classified = classify_transactions(result.transactions, self.mapping)
        self.transactions = append_transactions(self.transactions, classified)
        return result

    def load_files(self, uploads: Sequence[UploadedFile]) -> ImportResult:
        """Import decoded files into the session."""
        return self.add_import(self.import_service.import_files(uploads))

    def load_paths(self, paths: Sequence[str], bank: str) -> ImportResult:
        """Import files from disk into the session."""
        return self.add_import(self.import_service.import_paths(paths, bank))

    def record_upload(self, file_names: Sequence[str], bank: str, result: ImportResult) -> int:
        """Add a processed batch to the profile's upload history."""
        return self.db.add_upload_record(
            self.profile_id,
            file_names=list(file_names),
            bank=bank,
            total_transactions=len(result.transactions),
        )

    def clear(self) -> None:
        """Drop all transactions and start a new task."""
        self.transactions = []

    # Derived views
    def costed(self) -> list[CostedTransaction]:
        return cost_transactions(self.transactions, self.account_table)

    def summary(self) -> SummaryReport:
        return self.summary_service.build_summary(self.costed())

    def gst_return(self) -> GstReturn:
        return self.summary_service.build_gst_return(self.costed())

    def journal(self) -> Journal:
        return self.journal_service.build_journal(self.costed())

    # Edits
    def get_transaction(self, transaction_id: str) -> Transaction:
        for txn in self.transactions:
            if txn.id == transaction_id:
                return txn
        raise NotFoundError(transaction_not_found(transaction_id))

    def delete_transaction(self, transaction_id: str) -> None:
        """Remove one transaction from the session."""
        self.get_transaction(transaction_id)
        self.transactions = [t for t in self.transactions if t.id != transaction_id]

    def update_category(self, transaction_id: str, category: str) -> Transaction:
        """Recategorize one transaction and learn its payee.

        Raises:
            NotFoundError: If the transaction or category doesn't exist
            StateError: If the mapping could not be saved; nothing changes
        """
        return self.bulk_update_category([transaction_id], category)[0]

    def bulk_update_category(
        self, transaction_ids: Iterable[str], category: str
    ) -> list[Transaction]:
        """Recategorize several transactions and learn their payees.

        The transactions are updated first and the learned mapping is then
        saved. If saving fails both are restored.

        Raises:
            NotFoundError: If a transaction or the category doesn't exist
            StateError: If the mapping could not be saved; nothing changes
        """
        if category not in self.account_table:
            raise NotFoundError(category_not_found(category))

        ids = list(dict.fromkeys(transaction_ids))
        originals = [self.get_transaction(tx_id) for tx_id in ids]

        previous_transactions = self.transactions
        previous_mapping = self.mapping

        mapping = self.mapping
        for original in originals:
            mapping = learn_from_correction(mapping, original, category)

        wanted = set(ids)
        self.transactions = [
            t.with_category(category) if t.id in wanted else t for t in self.transactions
        ]
        self.mapping = mapping

        if mapping is not previous_mapping:
            try:
                self.mapping = self.mapping_service.save_mapping(self.profile_id, mapping)
            except StateError:
                _logger.error("Reverting category change for %d transactions", len(ids))
                self.transactions = previous_transactions
                self.mapping = previous_mapping
                raise

        return [self.get_transaction(tx_id) for tx_id in ids]

    def save_account_table(self, table: AccountTable) -> AccountTable:
        """Make ``table`` the active account table and store it.

        Raises:
            StateError: If the table could not be stored; the previous table stays active
        """
        previous = self.account_table
        self.account_table = table.ensure_uncategorized()
        try:
            self.account_table = self.account_table_service.save_table(
                self.profile_id, self.account_table
            )
        except StateError:
            _logger.error("Reverting account table for profile %s", self.profile_id)
            self.account_table = previous
            raise
        return self.account_table
