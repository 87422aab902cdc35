"""
Core Data Models for the Finance Tracker

These models define the strict schemas for every financial record:
1. Transactions and their installment schedules
2. Payment methods (a tagged union: pix or card)
3. Drafts coming from the input layer
4. Aggregated totals

DESIGN DECISION: A transaction's due date is never stored. It is computed on
read from (date, installments.total, installments.period), so it cannot
disagree with the schedule. The only stored schedule state besides those
inputs is the `current` pointer, which moves when an installment is paid.

Money is a Decimal with at most two decimal places.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Annotated, Literal, Optional, Union
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    model_validator,
)

from finance_tracker.scheduling import (
    DateLike,
    InstallmentPeriod,
    active_installment_number,
    coerce_period,
    final_due_date,
)


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


# =============================================================================
# ENUMS
# =============================================================================

class TransactionType(str, Enum):
    """
    Kind of financial record.

    Income is the only inflow. Income and daily purchases are always a single
    payment; expenses, bills and debts may be split into installments.
    """
    INCOME = "income"
    EXPENSE = "expense"
    DAILY_EXPENSE = "daily_expense"
    BILL = "bill"
    DEBT = "debt"

    @property
    def is_inflow(self) -> bool:
        return self is TransactionType.INCOME

    @property
    def tracks_due_date(self) -> bool:
        """Whether due dates and overdue installments apply to this type."""
        return self not in (TransactionType.INCOME, TransactionType.DAILY_EXPENSE)


# =============================================================================
# PAYMENT METHOD (tagged union)
# =============================================================================

class PixPayment(BaseModel):
    """Instant transfer to a pix key."""
    model_config = ConfigDict(str_strip_whitespace=True)

    method: Literal["pix"] = "pix"
    holder_name: str = Field(..., min_length=1, max_length=200, description="Payer name")
    bank: str = Field(..., min_length=1, max_length=100, description="Payer bank")
    pix_key: str = Field(..., min_length=1, max_length=140)
    pix_holder_name: str = Field(..., min_length=1, max_length=200, description="Key owner name")
    pix_bank: str = Field(..., min_length=1, max_length=100, description="Key owner bank")


class CardPayment(BaseModel):
    """Card payment."""
    model_config = ConfigDict(str_strip_whitespace=True)

    method: Literal["card"] = "card"
    holder_name: str = Field(..., min_length=1, max_length=200, description="Card holder name")
    bank: str = Field(..., min_length=1, max_length=100, description="Card issuer")
    recipient_holder_name: str = Field(..., min_length=1, max_length=200)


PaymentMethod = Annotated[Union[PixPayment, CardPayment], Field(discriminator="method")]


def payment_recipient(payment_method: Union[PixPayment, CardPayment]) -> str:
    """Name of whoever receives the money."""
    if isinstance(payment_method, PixPayment):
        return payment_method.pix_holder_name
    if isinstance(payment_method, CardPayment):
        return payment_method.recipient_holder_name
    raise TypeError(f"Unknown payment method: {type(payment_method).__name__}")


# =============================================================================
# INSTALLMENTS
# =============================================================================

class Installments(BaseModel):
    """
    Installment schedule of a transaction.

    `current` points at the first installment not yet paid. Installments
    numbered below it are paid. Once the last installment is paid the
    pointer stays on it and `paid_in_full` is set.
    """

    total: int = Field(default=1, ge=1, description="Number of installments")
    current: int = Field(default=1, ge=1, description="First unpaid installment")
    period: InstallmentPeriod = Field(default=InstallmentPeriod.MONTHLY)
    paid_in_full: bool = Field(default=False, description="Every installment is paid")

    @model_validator(mode='after')
    def validate_pointer(self) -> 'Installments':
        if self.current > self.total:
            raise ValueError(
                f"Current installment {self.current} exceeds total {self.total}"
            )
        if self.paid_in_full and self.current != self.total:
            raise ValueError(
                f"A schedule paid in full must point at its last installment, "
                f"got {self.current}/{self.total}"
            )
        return self

    @classmethod
    def for_schedule(
        cls,
        start_date: DateLike,
        total: int,
        period: Union[InstallmentPeriod, str],
        today: DateLike,
    ) -> 'Installments':
        """
        Schedule whose pointer sits on the installment active on `today`.

        This is the only place a pointer is derived. Creation goes through
        it, and so does any edit that changes the schedule.
        """
        return cls(
            total=total,
            current=active_installment_number(start_date, total, period, today),
            period=coerce_period(period),
        )


# =============================================================================
# TRANSACTION
# =============================================================================

def _check_single_payment(kind: TransactionType, total: int) -> None:
    if not kind.tracks_due_date and total != 1:
        raise ValueError(
            f"{kind.value} transactions are single-payment, got {total} installments"
        )


class Transaction(BaseModel):
    """
    A stored financial record.

    Replaced wholesale on edit; the installment pointer is the only field
    that changes on its own (when an installment is paid).
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    # Identity
    id: UUID = Field(
        default_factory=uuid4,
        description="Unique transaction ID"
    )

    type: TransactionType
    description: str = Field(
        ...,
        min_length=1,
        max_length=200,
    )
    category: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Category identifier"
    )
    amount: Annotated[
        Decimal,
        Field(ge=0, decimal_places=2, description="Amount per installment")
    ]
    date: dt.date = Field(
        ...,
        description="Date of the first payment"
    )
    installments: Installments = Field(default_factory=Installments)
    payment_method: Optional[PaymentMethod] = None

    # Timestamps
    created_at: dt.datetime = Field(default_factory=_utcnow)
    updated_at: dt.datetime = Field(default_factory=_utcnow)

    @computed_field  # type: ignore[misc]
    @property
    def due_date(self) -> dt.date:
        """Due date of the final installment."""
        return final_due_date(self.date, self.installments.total, self.installments.period)

    @property
    def is_installment_based(self) -> bool:
        return self.installments.total > 1

    @model_validator(mode='after')
    def validate_single_payment(self) -> 'Transaction':
        _check_single_payment(self.type, self.installments.total)
        return self


class TransactionDraft(BaseModel):
    """
    User input for creating or replacing a transaction.

    The installment pointer is not part of a draft: it is always derived.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    type: TransactionType
    description: str = Field(..., min_length=1, max_length=200)
    category: str = Field(..., min_length=1, max_length=100)
    amount: Annotated[Decimal, Field(ge=0, decimal_places=2)]
    date: dt.date
    total_installments: int = Field(default=1, ge=1)
    period: InstallmentPeriod = Field(default=InstallmentPeriod.MONTHLY)
    payment_method: Optional[PaymentMethod] = None

    @model_validator(mode='after')
    def validate_single_payment(self) -> 'TransactionDraft':
        _check_single_payment(self.type, self.total_installments)
        return self


# =============================================================================
# AGGREGATES
# =============================================================================

class TransactionTotals(BaseModel):
    """Income, outflow buckets and the net position of a set of transactions."""

    income: Decimal = Decimal("0")
    expenses: Decimal = Decimal("0")
    debts: Decimal = Decimal("0")
    total: Decimal = Decimal("0")
