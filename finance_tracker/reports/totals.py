"""
Transaction Totals

Sums a collection of transactions into income, expenses and debts, and the
net position. Expenses, daily purchases and bills all land in the same
outflow bucket; debts are kept apart.
"""

from decimal import Decimal
from typing import Iterable

from finance_tracker.models.transaction import Transaction, TransactionTotals, TransactionType


_EXPENSE_TYPES = frozenset({
    TransactionType.EXPENSE,
    TransactionType.DAILY_EXPENSE,
    TransactionType.BILL,
})


def sum_by_type(transactions: Iterable[Transaction]) -> TransactionTotals:
    """
    Aggregate transactions by bucket.

    The net total is updated after every transaction. Amounts are Decimals,
    so the result does not depend on input order. An empty input gives the
    zero record.
    """
    income = expenses = debts = total = Decimal("0")

    for transaction in transactions:
        if transaction.type is TransactionType.INCOME:
            income += transaction.amount
        elif transaction.type in _EXPENSE_TYPES:
            expenses += transaction.amount
        elif transaction.type is TransactionType.DEBT:
            debts += transaction.amount
        total = income - expenses - debts

    return TransactionTotals(income=income, expenses=expenses, debts=debts, total=total)
