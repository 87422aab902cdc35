"""
Category Models

Every transaction type has a built-in set of categories. Users can add their
own on top of them; custom categories are stored separately and marked with
`is_custom`.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from finance_tracker.models.transaction import TransactionType


class Category(BaseModel):
    """A category a transaction can be filed under."""
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(..., min_length=1, max_length=100)
    label: str = Field(..., min_length=1, max_length=100)
    type: TransactionType
    description: Optional[str] = Field(default=None, max_length=200)
    is_custom: bool = False


def _category(id: str, label: str, type: TransactionType, description: Optional[str] = None) -> Category:
    return Category(id=id, label=label, type=type, description=description)


DEFAULT_CATEGORIES: tuple[Category, ...] = (
    # Income
    _category("salary", "Salary", TransactionType.INCOME),
    _category("freelance", "Freelance", TransactionType.INCOME, "Self-employed work, projects"),
    _category("investments", "Investments", TransactionType.INCOME, "Yields, dividends"),
    _category("rental_income", "Rent received", TransactionType.INCOME, "Income from rentals"),
    _category("bonus", "Bonus", TransactionType.INCOME, "Profit sharing, awards"),
    _category("sales", "Sales", TransactionType.INCOME, "Sales of products or services"),
    _category("other_income", "Other income", TransactionType.INCOME, "Other sources of income"),

    # Daily purchases
    _category("supermarket", "Supermarket", TransactionType.DAILY_EXPENSE),
    _category("fuel", "Fuel", TransactionType.DAILY_EXPENSE),
    _category("transport", "Transport", TransactionType.DAILY_EXPENSE),
    _category("food", "Food", TransactionType.DAILY_EXPENSE, "Restaurants, snacks"),
    _category("pharmacy", "Pharmacy", TransactionType.DAILY_EXPENSE),
    _category("leisure_shopping", "Leisure shopping", TransactionType.DAILY_EXPENSE, "Clothes, electronics"),

    # Expenses
    _category("education", "Education", TransactionType.EXPENSE, "Courses, school supplies"),
    _category("health", "Health", TransactionType.EXPENSE, "Appointments, exams"),
    _category("leisure", "Leisure", TransactionType.EXPENSE, "Travel, entertainment"),
    _category("subscriptions", "Subscriptions", TransactionType.EXPENSE, "Streaming, software"),
    _category("fees", "Fees and fines", TransactionType.EXPENSE),
    _category("pension", "Alimony", TransactionType.EXPENSE),
    _category("rent", "Rent", TransactionType.EXPENSE),

    # Bills
    _category("electricity", "Electricity", TransactionType.BILL),
    _category("water", "Water", TransactionType.BILL),
    _category("internet", "Internet/TV/Phone", TransactionType.BILL),
    _category("condo", "Condominium fee", TransactionType.BILL),
    _category("credit_card", "Credit card", TransactionType.BILL),
    _category("insurance", "Insurance", TransactionType.BILL, "Health, car, home"),

    # Debts
    _category("bank_loans", "Bank loans", TransactionType.DEBT),
    _category("financing", "Financing", TransactionType.DEBT, "House, car"),
    _category("credit_installments", "Credit card installments", TransactionType.DEBT),
    _category("late_agreements", "Overdue debt agreements", TransactionType.DEBT),
    _category("debt_fees", "Debt interest or fines", TransactionType.DEBT),
)
