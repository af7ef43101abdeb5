"""GST arithmetic.

New Zealand GST is 15% and prices are quoted GST-inclusive, so the tax inside
an inclusive amount is exactly 3/23 of it. Amounts are multiplied before
dividing by 23 so that exact cases such as 115 -> 15 stay exact in Decimal.
"""

from decimal import Decimal
from typing import Iterable

from gstprep.domain.entities import CostedTransaction, Transaction

GST_NUMERATOR = Decimal(3)
GST_DENOMINATOR = Decimal(23)

ZERO = Decimal("0")


def gst_component(inclusive_amount: Decimal) -> Decimal:
    """Tax contained in a GST-inclusive amount."""
    return inclusive_amount * GST_NUMERATOR / GST_DENOMINATOR


def transaction_gst(amount: Decimal, ratio: Decimal) -> Decimal:
    """GST on one transaction: ``|amount| * 3/23 * ratio``.

    The ratio scales the full inclusive amount; sign is dropped.
    """
    return abs(amount) * Decimal(ratio) * GST_NUMERATOR / GST_DENOMINATOR


def claimable_amount(total: Decimal, ratio: Decimal) -> Decimal:
    """Business-use portion of a category total (the "actual amount")."""
    return abs(total) * Decimal(ratio)


def summary_gst(actual_amount: Decimal) -> Decimal:
    """GST on the claimable portion of a category total."""
    return gst_component(actual_amount)


def exclusive_amount(total: Decimal, ratio: Decimal) -> Decimal:
    """GST-exclusive value used for journal lines.

    A zero ratio carries the whole total with nothing stripped. Otherwise
    the claimable portion less the GST it contains.
    """
    if Decimal(ratio) == 0:
        return abs(total)
    actual = claimable_amount(total, ratio)
    return actual - summary_gst(actual)


def cost_transaction(transaction: Transaction, account_table) -> CostedTransaction:
    """Attach ratio, GST and code from the account table.

    A category missing from the table costs as ratio 0 with no code.
    """
    category = transaction.category or ""
    match = account_table.find(category)
    ratio = match.ratio if match is not None else ZERO
    code = match.code if match is not None else ""
    return CostedTransaction(
        id=transaction.id,
        date=transaction.date,
        payee=transaction.payee,
        description=transaction.description,
        amount=transaction.amount,
        category=category,
        gst_ratio=ratio,
        gst_amount=transaction_gst(transaction.amount, ratio),
        code=code,
    )


def cost_transactions(
    transactions: Iterable[Transaction], account_table
) -> list[CostedTransaction]:
    """Cost every transaction against ``account_table``."""
    return [cost_transaction(txn, account_table) for txn in transactions]
