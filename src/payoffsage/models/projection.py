"""Output structures produced by the payoff simulator."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Mapping


@dataclass(frozen=True, slots=True)
class AmortizationRow:
    """One month of payments for one debt."""

    month: int
    payment: Decimal
    interest: Decimal
    principal: Decimal
    balance_after: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "month": self.month,
            "payment": float(self.payment),
            "interest": float(self.interest),
            "principal": float(self.principal),
            "balanceAfter": float(self.balance_after),
        }


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """Balances at the end of a simulated month (month 0 is the starting point)."""

    month: int
    total_balance: Decimal
    balances: Mapping[str, Decimal] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "balances", MappingProxyType(dict(self.balances)))

    def to_dict(self) -> dict[str, Any]:
        return {
            "month": self.month,
            "totalBalance": float(self.total_balance),
            "perDebtBalance": {key: float(value) for key, value in self.balances.items()},
        }


@dataclass(frozen=True, slots=True)
class DebtSchedule:
    """Amortization rows for a single debt, in month order."""

    debt_id: str
    rows: tuple[AmortizationRow, ...] = ()

    @property
    def total_interest(self) -> Decimal:
        return sum((row.interest for row in self.rows), Decimal("0"))

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.debt_id, "rows": [row.to_dict() for row in self.rows]}


@dataclass(frozen=True, slots=True)
class PayoffResult:
    """Complete projection returned by ``simulate_payoff``.

    ``months`` is the month in which every balance reached zero, or the safety
    cap when ``truncated`` is set. ``payoff_month`` only contains debts that
    were actually paid off within the simulated window.
    """

    history: tuple[HistoryEntry, ...]
    months: int
    total_interest: Decimal
    amortization: tuple[DebtSchedule, ...]
    payoff_month: Mapping[str, int]
    truncated: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "payoff_month", MappingProxyType(dict(self.payoff_month)))

    @classmethod
    def empty(cls) -> "PayoffResult":
        return cls(history=(), months=0, total_interest=Decimal("0"), amortization=(), payoff_month={})

    def schedule_for(self, debt_id: str) -> DebtSchedule | None:
        for schedule in self.amortization:
            if schedule.debt_id == debt_id:
                return schedule
        return None

    def to_dict(self) -> dict[str, Any]:
        """Plain, JSON-ready representation for chart/table/report consumers."""

        return {
            "history": [entry.to_dict() for entry in self.history],
            "months": self.months,
            "totalInterest": float(self.total_interest),
            "amortization": [schedule.to_dict() for schedule in self.amortization],
            "payoffMonth": dict(self.payoff_month),
            "truncated": self.truncated,
        }
