"""
Transaction Filters

Narrows a transaction list by type, category and a free-text search over
description and category. Every criterion is optional; an empty filter
returns the input unchanged.
"""

from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field

from finance_tracker.models.transaction import Transaction, TransactionType


class TransactionFilter(BaseModel):
    """Criteria for listing transactions."""
    model_config = ConfigDict(str_strip_whitespace=True)

    type: Optional[TransactionType] = None
    category: Optional[str] = None
    search: Optional[str] = Field(
        default=None,
        max_length=200,
        description="Case-insensitive match on description or category"
    )

    def matches(self, transaction: Transaction) -> bool:
        if self.type is not None and transaction.type is not self.type:
            return False
        if self.category is not None and transaction.category != self.category:
            return False
        if self.search:
            needle = self.search.lower()
            return (
                needle in transaction.description.lower()
                or needle in transaction.category.lower()
            )
        return True


def filter_transactions(
    transactions: Iterable[Transaction],
    criteria: Optional[TransactionFilter] = None,
) -> list[Transaction]:
    """Transactions matching `criteria`, in input order."""
    if criteria is None:
        return list(transactions)
    return [t for t in transactions if criteria.matches(t)]
