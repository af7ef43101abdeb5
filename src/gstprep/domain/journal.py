"""Double-entry journal builder."""

from decimal import Decimal
from typing import Optional, Sequence

from gstprep.domain.entities import CategorySummary, CostedTransaction, Journal, JournalEntry
from gstprep.domain.gst import ZERO, exclusive_amount
from gstprep.domain.summary import SummaryService
from gstprep.logging_setup import get_logger
from gstprep.utils.natural_sort import code_sort_key

_logger = get_logger("gstprep.journal")

DRAWINGS_ACCOUNT = "Drawings"
DRAWINGS_CODE = "501"

# Differences up to a cent are left unbalanced
BALANCE_TOLERANCE = Decimal("0.01")


def entry_sort_key(entry: JournalEntry) -> tuple:
    """Credits before debits, then by account code."""
    return (0 if entry.credit > 0 else 1,) + code_sort_key(entry.code, entry.account)


def entry_for_summary(summary: CategorySummary) -> JournalEntry:
    """Journal line carrying the GST-exclusive value of one category.

    Income categories are credited, expense categories debited.
    """
    value = exclusive_amount(summary.signed_total, summary.gst_ratio)
    if summary.signed_total > 0:
        return JournalEntry(account=summary.category_name, code=summary.code, credit=value)
    return JournalEntry(account=summary.category_name, code=summary.code, debit=value)


def balancing_entry(total_debit: Decimal, total_credit: Decimal) -> Optional[JournalEntry]:
    """Drawings line closing the gap between credits and debits, or None."""
    difference = total_credit - total_debit
    if abs(difference) <= BALANCE_TOLERANCE:
        return None
    if difference > 0:
        return JournalEntry(account=DRAWINGS_ACCOUNT, code=DRAWINGS_CODE, debit=difference)
    return JournalEntry(account=DRAWINGS_ACCOUNT, code=DRAWINGS_CODE, credit=-difference)


class JournalService:
    """Service for building the journal export."""

    def __init__(self, summary_service: Optional[SummaryService] = None):
        self.summary_service = summary_service or SummaryService()

    def build_from_summaries(self, summaries: Sequence[CategorySummary]) -> Journal:
        """Build a balanced journal from category summaries.

        Different categories strip GST at different ratios, so the category
        lines rarely balance on their own; a Drawings line makes up the
        difference and is placed after the sorted category lines.

        Args:
            summaries: One summary per category

        Returns:
            Journal whose total debit equals its total credit
        """
        entries = [entry_for_summary(s) for s in summaries]
        total_debit = sum((e.debit for e in entries), ZERO)
        total_credit = sum((e.credit for e in entries), ZERO)

        drawings = balancing_entry(total_debit, total_credit)
        if drawings is not None:
            _logger.debug(
                "Balancing journal with Drawings debit=%s credit=%s",
                drawings.debit,
                drawings.credit,
            )
            total_debit += drawings.debit
            total_credit += drawings.credit

        return Journal(
            entries=tuple(sorted(entries, key=entry_sort_key)),
            drawings=drawings,
            total_debit=total_debit,
            total_credit=total_credit,
        )

    def build_journal(self, transactions: Sequence[CostedTransaction]) -> Journal:
        """Build a balanced journal from costed transactions."""
        return self.build_from_summaries(self.summary_service.category_summaries(transactions))
