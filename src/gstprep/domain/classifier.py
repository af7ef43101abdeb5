"""Rule-based transaction classifier.

Classification order:

1. The payee mapping learned from the user's own corrections.
2. Income: zero-rated sales keywords, otherwise "Sales".
3. Expenses: the keyword rules below, first match in declared order.
4. "Uncategorized".

Keywords match as plain substrings of the upper-cased payee and
description, so the order of ``CLASSIFICATION_RULES`` decides ties.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Sequence

from gstprep.domain.entities import Transaction
from gstprep.logging_setup import get_logger

_logger = get_logger("gstprep.classifier")

SALES = "Sales"
ZERO_RATED_SALES = "Sales - Zero Rated"
TRANSFERS = "Transfers"
UNCATEGORIZED = "Uncategorized"

PayeeMapping = Mapping[str, str]

EMPTY_MAPPING: PayeeMapping = MappingProxyType({})


@dataclass(frozen=True)
class ClassificationRule:
    """Category assigned when any keyword occurs in the transaction text."""

    category: str
    keywords: tuple[str, ...]

    def matches(self, text: str) -> bool:
        return any(keyword in text for keyword in self.keywords)


CLASSIFICATION_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(ZERO_RATED_SALES, ("EXPORT", "GST-FREE", "ZERO-RATED")),
    ClassificationRule(
        "Purchases",
        (
            "COUNTDOWN",
            "PAKNSAVE",
            "NEW WORLD",
            "BUNNINGS",
            "MITRE 10",
            "WAREHOUSE STATIONERY",
            "SPARK",
            "VODAFONE",
            "2DEGREES",
        ),
    ),
    ClassificationRule(
        "Entertainment",
        ("RESTAURANT", "CAFE", "BAR", "UBER EATS", "DELIVEREASY", "MENULOG"),
    ),
    ClassificationRule(
        "Motor Vehicle Expenses",
        ("Z ENERGY", "BP", "MOBIL", "CALTEX", "GULL", "AA", "VTNZ", "CAR PARTS", "REPCO"),
    ),
    ClassificationRule(
        TRANSFERS,
        (
            "TRANSFER",
            "TFR",
            "INTERNET BANKING",
            "AUTOMATIC PAYMENT",
            "DIRECT DEBIT",
            "CREDIT CARD PAYMENT",
        ),
    ),
)


def normalize_payee(payee: str) -> str:
    """Key used for payee mappings."""
    return (payee or "").upper()


def freeze_mapping(mapping: Mapping[str, str]) -> PayeeMapping:
    """Return a read-only copy of ``mapping``."""
    return MappingProxyType(dict(mapping))


def _rule_for(category: str, rules: Sequence[ClassificationRule]) -> ClassificationRule:
    for rule in rules:
        if rule.category == category:
            return rule
    return ClassificationRule(category, ())


def classify(
    transaction: Transaction,
    mapping: PayeeMapping = EMPTY_MAPPING,
    rules: Sequence[ClassificationRule] = CLASSIFICATION_RULES,
) -> str:
    """Return the category for one transaction.

    Args:
        transaction: Transaction to classify (its current category is ignored)
        mapping: Learned payee mapping, keys upper-cased
        rules: Ordered keyword rules

    Returns:
        Category name
    """
    payee_key = normalize_payee(transaction.payee)
    learned = mapping.get(payee_key)
    if learned:
        return learned

    text = f"{transaction.payee or ''} {transaction.description or ''}".upper()

    if transaction.amount > 0:
        if _rule_for(ZERO_RATED_SALES, rules).matches(text):
            return ZERO_RATED_SALES
        return SALES

    for rule in rules:
        if rule.category == ZERO_RATED_SALES:
            continue
        if rule.matches(text):
            return rule.category

    return UNCATEGORIZED


def classify_transactions(
    transactions: Iterable[Transaction],
    mapping: PayeeMapping = EMPTY_MAPPING,
    rules: Sequence[ClassificationRule] = CLASSIFICATION_RULES,
) -> list[Transaction]:
    """Return copies of ``transactions`` with categories assigned."""
    return [txn.with_category(classify(txn, mapping, rules)) for txn in transactions]


def learn_category(mapping: PayeeMapping, payee: str, category: str) -> PayeeMapping:
    """Return a new mapping that sends ``payee`` to ``category``.

    The caller is responsible for persisting the result.
    """
    updated = dict(mapping)
    updated[normalize_payee(payee)] = category
    _logger.info("Learned payee mapping %r -> %r", normalize_payee(payee), category)
    return freeze_mapping(updated)


def learn_from_correction(
    mapping: PayeeMapping, original: Transaction, corrected_category: str
) -> PayeeMapping:
    """Learn from a manual edit, only when the category actually changed."""
    if original.category == corrected_category:
        return mapping
    return learn_category(mapping, original.payee, corrected_category)
