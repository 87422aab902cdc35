"""
Finance Tracker - Source Package

Personal finance tracker: income, expenses, bills, daily purchases and debts,
optionally split into monthly or yearly installments.

DESIGN PRINCIPLES:
1. Due dates are derived, never typed in
2. Fail early, fail visibly
3. No silent corrections
4. Every state transition is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Finance Tracker Team"
