"""
Installment Status Models

Output of the installment status engine. These are computed on demand for
display and are never persisted.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, computed_field


class InstallmentDescriptor(BaseModel):
    """Status of one installment relative to a reference day."""

    number: int = Field(..., ge=1, description="Installment number (1-indexed)")
    due_date: date
    is_paid: bool = Field(..., description="number < current pointer, or the schedule is paid in full")
    is_current: bool = Field(..., description="number == current pointer")
    is_overdue: bool = Field(
        ...,
        description="Due date passed and not paid yet"
    )
    days_overdue: Optional[int] = Field(
        default=None,
        ge=1,
        description="Whole days since the due date, only when overdue"
    )
    days_remaining: int = Field(
        ...,
        description="Days until the due date; negative once it has passed"
    )


class InstallmentStatusReport(BaseModel):
    """
    Per-installment classification of a schedule plus overdue summary.
    """

    reference_date: date = Field(..., description="The 'today' used for classification")
    installments: list[InstallmentDescriptor]
    overdue: list[InstallmentDescriptor] = Field(default_factory=list)
    max_days_overdue: int = Field(default=0, ge=0)
    oldest_overdue_date: Optional[date] = None
    paid_count: int = Field(..., ge=0)
    remaining_count: int = Field(..., ge=0)
    current_installment: InstallmentDescriptor
    paid_in_full: bool = False

    @computed_field  # type: ignore[misc]
    @property
    def has_overdue(self) -> bool:
        return len(self.overdue) > 0

    @computed_field  # type: ignore[misc]
    @property
    def next_due_date(self) -> Optional[date]:
        """Due date of the current installment; None once everything is paid."""
        if self.paid_in_full:
            return None
        return self.current_installment.due_date
