"""Tests for the journal builder."""

from decimal import Decimal

import pytest

from gstprep.domain.entities import CategorySummary
from gstprep.domain.gst import cost_transactions
from gstprep.domain.journal import (
    DRAWINGS_ACCOUNT,
    DRAWINGS_CODE,
    JournalService,
    balancing_entry,
    entry_for_summary,
)


def _summary(name, code, signed_total, ratio):
    signed_total = Decimal(signed_total)
    ratio = Decimal(ratio)
    actual = abs(signed_total) * ratio
    return CategorySummary(
        category_name=name,
        code=code,
        total_amount=abs(signed_total),
        gst_ratio=ratio,
        actual_amount=actual,
        gst_amount=actual * 3 / 23,
        signed_total=signed_total,
    )


@pytest.fixture
def journal_service():
    return JournalService()


def test_income_is_credited_exclusive_of_gst():
    entry = entry_for_summary(_summary("Sales", "200", "230", "1.0"))
    assert entry.credit == Decimal("200")
    assert entry.debit == 0


def test_expense_is_debited_exclusive_of_gst():
    entry = entry_for_summary(_summary("Motor Vehicle Expenses", "410", "-57.50", "0.25"))
    assert entry.debit == Decimal("12.5")
    assert entry.credit == 0


def test_zero_ratio_carries_full_amount():
    entry = entry_for_summary(_summary("Travel - International", "470", "-900", "0"))
    assert entry.debit == Decimal("900")


def test_balancing_entry_debits_drawings_when_credits_exceed():
    entry = balancing_entry(Decimal("12.5"), Decimal("200"))
    assert entry.account == DRAWINGS_ACCOUNT
    assert entry.code == DRAWINGS_CODE == "501"
    assert entry.debit == Decimal("187.5")


def test_balancing_entry_credits_drawings_when_debits_exceed():
    entry = balancing_entry(Decimal("100"), Decimal("40"))
    assert entry.credit == Decimal("60")
    assert entry.debit == 0


def test_no_balancing_entry_within_a_cent():
    assert balancing_entry(Decimal("100"), Decimal("100.01")) is None
    assert balancing_entry(Decimal("100"), Decimal("100")) is None


def test_journal_balances(journal_service, make_transaction, default_table):
    costed = cost_transactions(
        [
            make_transaction(-57.50, payee="BP", category="Motor Vehicle Expenses", id="a-0"),
            make_transaction(230, payee="Customer X", category="Sales", id="a-1"),
        ],
        default_table,
    )
    journal = journal_service.build_journal(costed)

    assert [(e.account, e.credit, e.debit) for e in journal.entries] == [
        ("Sales", Decimal("200"), 0),
        ("Motor Vehicle Expenses", 0, Decimal("12.5")),
    ]
    assert journal.drawings.debit == Decimal("187.5")
    assert journal.total_debit == journal.total_credit == Decimal("200")
    assert journal.all_entries[-1] is journal.drawings


def test_credits_listed_before_debits_then_by_code(journal_service):
    summaries = [
        _summary("Power", "384", "-115", "1.0"),
        _summary("Sales - Zero Rated", "205", "100", "0"),
        _summary("Purchases", "210", "-230", "1.0"),
        _summary("Sales", "200", "460", "1.0"),
    ]
    journal = journal_service.build_from_summaries(summaries)

    assert [e.account for e in journal.entries] == ["Sales", "Sales - Zero Rated", "Purchases", "Power"]


def test_balanced_journal_has_no_drawings(journal_service):
    journal = journal_service.build_from_summaries(
        [_summary("Sales", "200", "230", "1.0"), _summary("Purchases", "210", "-230", "1.0")]
    )
    assert journal.drawings is None
    assert journal.all_entries == journal.entries
    assert journal.total_debit == journal.total_credit


def test_empty_journal(journal_service):
    journal = journal_service.build_journal([])
    assert journal.entries == ()
    assert journal.drawings is None
    assert journal.total_debit == journal.total_credit == 0
