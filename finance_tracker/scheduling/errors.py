"""
Scheduling Errors

Every public function of the scheduling engine and the status reports raises
one of these when called with input outside its contract. Nothing is ever
clamped or guessed silently.
"""


class ContractViolationError(ValueError):
    """Input outside the documented contract of an engine function."""
    pass


class InvalidDateError(ContractViolationError):
    """A value could not be read as a calendar date."""
    pass


class InstallmentsExhaustedError(ContractViolationError):
    """The installment pointer is already on the final installment."""
    pass
