"""PayoffSage debt payoff projection package."""

from __future__ import annotations

from .config import BaseConfig
from .models import Debt, DebtValidationError, OneTimePayment, PayoffResult
from .services.debts import simulate_payoff
from .services.scenarios import ScenarioParameters, compare_scenarios

__all__ = [
    "BaseConfig",
    "Debt",
    "DebtValidationError",
    "OneTimePayment",
    "PayoffResult",
    "ScenarioParameters",
    "compare_scenarios",
    "simulate_payoff",
]
