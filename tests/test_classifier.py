"""Tests for the rule-based classifier and payee learning."""

import pytest

from gstprep.domain.classifier import (
    CLASSIFICATION_RULES,
    EMPTY_MAPPING,
    ClassificationRule,
    classify,
    classify_transactions,
    learn_category,
    learn_from_correction,
)


def test_mapping_takes_precedence_over_keywords(make_transaction):
    txn = make_transaction(-57.50, payee="BP")
    assert classify(txn, {"BP": "Old Category"}) == "Old Category"


def test_mapping_lookup_is_case_insensitive_on_payee(make_transaction):
    txn = make_transaction(-20, payee="Joe's Cafe")
    assert classify(txn, {"JOE'S CAFE": "Staff Expenses"}) == "Staff Expenses"


def test_empty_mapping_value_is_ignored(make_transaction):
    txn = make_transaction(-57.50, payee="BP")
    assert classify(txn, {"BP": ""}) == "Motor Vehicle Expenses"


def test_income_defaults_to_sales(make_transaction):
    assert classify(make_transaction(230, payee="Customer X")) == "Sales"


def test_income_with_expense_keyword_is_still_sales(make_transaction):
    assert classify(make_transaction(50, payee="Countdown refund")) == "Sales"


@pytest.mark.parametrize("text", ["EXPORT ORDER", "gst-free supply", "Zero-Rated"])
def test_zero_rated_income(make_transaction, text):
    assert classify(make_transaction(100, payee="Client", description=text)) == "Sales - Zero Rated"


@pytest.mark.parametrize(
    "payee, expected",
    [
        ("COUNTDOWN AUCKLAND", "Purchases"),
        ("Uber Eats", "Entertainment"),
        ("Z Energy Grey Lynn", "Motor Vehicle Expenses"),
        ("Automatic Payment", "Transfers"),
        ("Oddments Limited", "Uncategorized"),
    ],
)
def test_expense_keywords(make_transaction, payee, expected):
    assert classify(make_transaction(-10, payee=payee)) == expected


def test_keywords_match_description(make_transaction):
    txn = make_transaction(-10, payee="", description="Spark monthly plan")
    assert classify(txn) == "Purchases"


def test_rule_order_decides_ties(make_transaction):
    """A text matching two rules gets the earlier rule's category."""
    txn = make_transaction(-10, payee="Spark cafe")
    assert classify(txn) == "Purchases"


def test_zero_rated_keywords_do_not_apply_to_expenses(make_transaction):
    assert classify(make_transaction(-10, payee="Export freight")) == "Uncategorized"


def test_custom_rules(make_transaction):
    rules = (ClassificationRule("Insurance", ("AMI", "TOWER")),)
    assert classify(make_transaction(-10, payee="Tower Insurance"), EMPTY_MAPPING, rules) == "Insurance"


def test_rules_are_ordered():
    assert [r.category for r in CLASSIFICATION_RULES] == [
        "Sales - Zero Rated",
        "Purchases",
        "Entertainment",
        "Motor Vehicle Expenses",
        "Transfers",
    ]


def test_classify_transactions_ignores_existing_category(make_transaction):
    txn = make_transaction(230, payee="Customer X", category="Uncategorized")
    assert classify_transactions([txn])[0].category == "Sales"


def test_learn_category_returns_new_read_only_mapping():
    mapping = {"SPARK": "Mobile Phone"}
    learned = learn_category(mapping, "bp", "Motor Vehicle Expenses")

    assert learned == {"SPARK": "Mobile Phone", "BP": "Motor Vehicle Expenses"}
    assert mapping == {"SPARK": "Mobile Phone"}
    with pytest.raises(TypeError):
        learned["X"] = "Y"


def test_learn_from_correction_only_when_category_changes(make_transaction):
    txn = make_transaction(-57.50, payee="BP", category="Motor Vehicle Expenses")

    assert learn_from_correction(EMPTY_MAPPING, txn, "Motor Vehicle Expenses") is EMPTY_MAPPING
    assert learn_from_correction(EMPTY_MAPPING, txn, "Travel - National") == {"BP": "Travel - National"}
