"""Summary and GST return domain service."""

from typing import Sequence

from gstprep.domain.classifier import TRANSFERS, ZERO_RATED_SALES
from gstprep.domain.entities import (
    CategorySummary,
    CostedTransaction,
    GstReturn,
    SummaryReport,
    SummaryTable,
)
from gstprep.domain.gst import ZERO, claimable_amount, summary_gst
from gstprep.utils.natural_sort import code_sort_key

SALES_TITLE = "Sales & Income"
EXPENSES_TITLE = "Purchases & Expenses"


def summary_sort_key(row: CategorySummary) -> tuple:
    return code_sort_key(row.code, row.category_name)


def transaction_sort_key(txn: CostedTransaction) -> tuple:
    """Default transaction list order: code, then category, then payee."""
    return code_sort_key(txn.code, txn.category) + (txn.payee.casefold(),)


class SummaryService:
    """Service for building category summaries and the GST return."""

    def group_by_category(
        self, transactions: Sequence[CostedTransaction]
    ) -> dict[str, dict]:
        """Sum signed amounts per category.

        Code and ratio come from the first transaction seen for the category;
        every transaction of a category was costed against the same table.
        """
        groups: dict[str, dict] = {}
        for txn in transactions:
            group = groups.get(txn.category)
            if group is None:
                group = {"total": ZERO, "code": txn.code, "ratio": txn.gst_ratio}
                groups[txn.category] = group
            group["total"] += txn.amount
        return groups

    def summarize_category(self, name: str, group: dict) -> CategorySummary:
        """Build one summary row from a category group."""
        total_amount = abs(group["total"])
        actual = claimable_amount(total_amount, group["ratio"])
        return CategorySummary(
            category_name=name,
            code=group["code"],
            total_amount=total_amount,
            gst_ratio=group["ratio"],
            actual_amount=actual,
            gst_amount=summary_gst(actual),
            signed_total=group["total"],
        )

    def category_summaries(
        self, transactions: Sequence[CostedTransaction]
    ) -> list[CategorySummary]:
        """One summary row per category, in first-seen order."""
        return [
            self.summarize_category(name, group)
            for name, group in self.group_by_category(transactions).items()
        ]

    def build_table(self, title: str, rows: Sequence[CategorySummary]) -> SummaryTable:
        """Sort rows by account code and total them."""
        ordered = tuple(sorted(rows, key=summary_sort_key))
        return SummaryTable(
            title=title,
            rows=ordered,
            total=sum((r.total_amount for r in ordered), ZERO),
            actual=sum((r.actual_amount for r in ordered), ZERO),
            gst=sum((r.gst_amount for r in ordered), ZERO),
        )

    def build_summary(self, transactions: Sequence[CostedTransaction]) -> SummaryReport:
        """Build the Sales and Expenses tables.

        A category lands in Sales when its summed amount is positive and in
        Expenses otherwise.

        Args:
            transactions: Costed transactions

        Returns:
            SummaryReport with both tables
        """
        sales = []
        expenses = []
        for row in self.category_summaries(transactions):
            if row.signed_total > 0:
                sales.append(row)
            else:
                expenses.append(row)
        return SummaryReport(
            sales=self.build_table(SALES_TITLE, sales),
            expenses=self.build_table(EXPENSES_TITLE, expenses),
        )

    def build_gst_return(self, transactions: Sequence[CostedTransaction]) -> GstReturn:
        """Derive the GST return from individual transactions.

        Works from the transactions rather than the category summaries so
        that nothing is rounded twice.

        Args:
            transactions: Costed transactions

        Returns:
            GstReturn
        """
        total_sales = ZERO
        zero_rated_sales = ZERO
        gst_collected = ZERO
        adjusted_purchases = ZERO
        gst_paid = ZERO

        for txn in transactions:
            if txn.is_income:
                if txn.category != TRANSFERS:
                    total_sales += txn.amount
                if txn.category == ZERO_RATED_SALES:
                    zero_rated_sales += txn.amount
                gst_collected += txn.gst_amount
            else:
                adjusted_purchases += abs(txn.amount) * txn.gst_ratio
                gst_paid += txn.gst_amount

        return GstReturn(
            total_sales=total_sales,
            zero_rated_sales=zero_rated_sales,
            net_gst_sales=total_sales - zero_rated_sales,
            gst_collected=gst_collected,
            adjusted_purchases=adjusted_purchases,
            gst_paid=gst_paid,
            gst_difference=gst_collected - gst_paid,
        )

    def split_by_direction(
        self, transactions: Sequence[CostedTransaction]
    ) -> tuple[list[CostedTransaction], list[CostedTransaction]]:
        """Split into (income, expenses), each in default list order."""
        income = sorted((t for t in transactions if t.is_income), key=transaction_sort_key)
        expenses = sorted((t for t in transactions if not t.is_income), key=transaction_sort_key)
        return income, expenses

