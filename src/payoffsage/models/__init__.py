"""Domain models for debt payoff projections."""

from .debt import Debt, DebtValidationError, OneTimePayment
from .projection import AmortizationRow, DebtSchedule, HistoryEntry, PayoffResult

__all__ = [
    "AmortizationRow",
    "Debt",
    "DebtSchedule",
    "DebtValidationError",
    "HistoryEntry",
    "OneTimePayment",
    "PayoffResult",
]
