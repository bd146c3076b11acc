"""Baseline vs what-if payoff comparisons."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterable, Mapping, Sequence

from ..logging_config import get_logger
from ..models.debt import ZERO, Debt, DebtValidationError, OneTimePayment, to_decimal
from ..models.projection import PayoffResult
from .debts import MAX_SIMULATION_MONTHS, TARGET_BY_STRATEGY, simulate_payoff

logger = get_logger("services.scenarios")


def _is_blank(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


@dataclass(frozen=True, slots=True)
class ScenarioParameters:
    """What-if inputs layered on top of the baseline plan."""

    extra_monthly_payment: Decimal = ZERO
    one_time_payments: tuple[OneTimePayment, ...] = ()
    target_debt_id: str = TARGET_BY_STRATEGY

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "extra_monthly_payment", to_decimal(self.extra_monthly_payment, field="extra monthly payment")
        )
        object.__setattr__(self, "one_time_payments", tuple(self.one_time_payments))
        object.__setattr__(self, "target_debt_id", self.target_debt_id or TARGET_BY_STRATEGY)

    @property
    def is_active(self) -> bool:
        return (
            self.extra_monthly_payment > 0
            or bool(self.one_time_payments)
            or self.target_debt_id != TARGET_BY_STRATEGY
        )

    def with_payment(self, payment: OneTimePayment) -> "ScenarioParameters":
        return ScenarioParameters(
            extra_monthly_payment=self.extra_monthly_payment,
            one_time_payments=self.one_time_payments + (payment,),
            target_debt_id=self.target_debt_id,
        )

    def to_mapping(self) -> dict[str, Any]:
        """Serialize to the plain dict stored between sessions."""

        return {
            "extraMonthlyPayment": float(self.extra_monthly_payment),
            "oneTimePayments": [
                {"month": p.month, "amount": float(p.amount)} for p in self.one_time_payments
            ],
            "targetDebt": self.target_debt_id,
        }

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "ScenarioParameters":
        """Restore parameters saved by ``to_mapping``; blanks fall back to defaults."""

        if not data:
            return cls()
        payments: list[OneTimePayment] = []
        for index, item in enumerate(data.get("oneTimePayments") or (), start=1):
            month = item.get("month") if isinstance(item, Mapping) else None
            amount = item.get("amount") if isinstance(item, Mapping) else None
            if _is_blank(month) or _is_blank(amount):
                logger.warning("Skipping stored one-time payment %s: month or amount missing", index)
                continue
            try:
                payments.append(OneTimePayment(month=month, amount=amount))
            except DebtValidationError as exc:
                logger.warning("Skipping stored one-time payment %s: %s", index, exc)
        return cls(
            extra_monthly_payment=data.get("extraMonthlyPayment") or ZERO,
            one_time_payments=tuple(payments),
            target_debt_id=data.get("targetDebt") or TARGET_BY_STRATEGY,
        )


@dataclass(frozen=True, slots=True)
class ScenarioComparison:
    """Two independent projections and the difference between them."""

    baseline: PayoffResult
    scenario: PayoffResult
    parameters: ScenarioParameters = field(default_factory=ScenarioParameters)

    @property
    def months_saved(self) -> int:
        return self.baseline.months - self.scenario.months

    @property
    def interest_saved(self) -> Decimal:
        return self.baseline.total_interest - self.scenario.total_interest


def run_scenario(
    debts: Sequence[Debt],
    strategy: str,
    params: ScenarioParameters,
    *,
    max_months: int = MAX_SIMULATION_MONTHS,
) -> PayoffResult:
    return simulate_payoff(
        debts,
        strategy,
        params.extra_monthly_payment,
        params.one_time_payments,
        params.target_debt_id,
        max_months=max_months,
    )


def compare_scenarios(
    debts: Iterable[Debt],
    strategy: str,
    params: ScenarioParameters | None = None,
    *,
    max_months: int = MAX_SIMULATION_MONTHS,
) -> ScenarioComparison:
    """Project the plain strategy plan and the what-if plan side by side."""

    debt_list = list(debts)
    params = params or ScenarioParameters()
    baseline = simulate_payoff(debt_list, strategy, max_months=max_months)
    scenario = run_scenario(debt_list, strategy, params, max_months=max_months)
    comparison = ScenarioComparison(baseline=baseline, scenario=scenario, parameters=params)
    logger.debug(
        "Compared scenario against baseline",
        extra={
            "strategy": strategy,
            "months_saved": comparison.months_saved,
            "interest_saved": str(comparison.interest_saved),
        },
    )
    return comparison


def snowflake_impact(
    debts: Iterable[Debt],
    strategy: str,
    params: ScenarioParameters,
    payment: OneTimePayment,
    *,
    max_months: int = MAX_SIMULATION_MONTHS,
) -> ScenarioComparison:
    """Preview adding ``payment`` to the scenario, measured against the baseline."""

    if payment.month <= 0 or payment.amount <= 0:
        raise ValueError("one-time payment needs a positive month and amount")
    return compare_scenarios(debts, strategy, params.with_payment(payment), max_months=max_months)


def combined_history(
    baseline: PayoffResult,
    scenario: PayoffResult,
    *,
    include_scenario: bool = True,
) -> list[dict[str, Any]]:
    """Merge two history series month by month for charting.

    The longer series sets the length; months past the end of the shorter
    series carry ``None``.
    """

    debt_ids = [schedule.debt_id for schedule in baseline.amortization] or [
        schedule.debt_id for schedule in scenario.amortization
    ]
    length = max(len(baseline.history), len(scenario.history))
    combined: list[dict[str, Any]] = []
    for index in range(length):
        base = baseline.history[index] if index < len(baseline.history) else None
        what_if = scenario.history[index] if index < len(scenario.history) else None
        entry: dict[str, Any] = {
            "month": index,
            "Base Total": float(base.total_balance) if base else None,
        }
        if include_scenario:
            entry["Scenario Total"] = float(what_if.total_balance) if what_if else None
        for debt_id in debt_ids:
            entry[f"{debt_id} (Base)"] = float(base.balances[debt_id]) if base else None
            if include_scenario:
                entry[f"{debt_id} (Scenario)"] = float(what_if.balances[debt_id]) if what_if else None
        combined.append(entry)
    return combined
