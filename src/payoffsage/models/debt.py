"""Debt inputs consumed by the payoff simulator."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

CENT = Decimal("0.01")
ZERO = Decimal("0")
STRATEGIES = ("snowball", "avalanche")


class DebtValidationError(ValueError):
    """Raised when a debt record cannot be turned into a usable input."""


def to_decimal(value: object, *, field: str = "value") -> Decimal:
    """Coerce ints, floats and numeric strings into a finite Decimal.

    Blank values count as zero. Currency and percent decorations
    (``$``, ``,``, ``%``) are stripped from strings.
    """

    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise DebtValidationError(f"{field} must be numeric, got {value!r}")
    elif isinstance(value, (int, float)):
        # str() keeps 0.1 as 0.1 instead of its binary expansion
        result = Decimal(str(value))
    elif isinstance(value, str):
        cleaned = value.strip().replace("$", "").replace(",", "").replace("%", "")
        if not cleaned:
            return ZERO
        try:
            result = Decimal(cleaned)
        except InvalidOperation as exc:
            raise DebtValidationError(f"{field} must be numeric, got {value!r}") from exc
    else:
        raise DebtValidationError(f"{field} must be numeric, got {value!r}")

    if not result.is_finite():
        raise DebtValidationError(f"{field} must be finite, got {value!r}")
    return result


@dataclass(frozen=True, slots=True)
class Debt:
    """A single liability: balance, APR in percent, and fixed minimum payment."""

    id: str
    balance: Decimal
    apr: Decimal
    minimum_payment: Decimal

    def __post_init__(self) -> None:
        name = str(self.id).strip() if self.id is not None else ""
        if not name:
            raise DebtValidationError("debt id must be a non-empty string")
        object.__setattr__(self, "id", name)
        object.__setattr__(
            self, "balance", max(to_decimal(self.balance, field=f"{name}.balance"), ZERO)
        )
        object.__setattr__(self, "apr", to_decimal(self.apr, field=f"{name}.apr"))
        object.__setattr__(
            self,
            "minimum_payment",
            max(to_decimal(self.minimum_payment, field=f"{name}.minimum_payment"), ZERO),
        )


@dataclass(frozen=True, slots=True)
class OneTimePayment:
    """A snowflake payment added to the pool in a specific month."""

    month: int
    amount: Decimal

    def __post_init__(self) -> None:
        if self.month is None or (isinstance(self.month, str) and not self.month.strip()):
            raise DebtValidationError("one-time payment month is required")
        month = to_decimal(self.month, field="one-time payment month")
        if month != month.to_integral_value():
            raise DebtValidationError(f"one-time payment month must be a whole number, got {self.month!r}")
        object.__setattr__(self, "month", int(month))
        object.__setattr__(self, "amount", to_decimal(self.amount, field="one-time payment amount"))
