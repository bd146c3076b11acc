"""Report helpers built on top of payoff projections."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Mapping

from ..models.debt import CENT, ZERO, Debt, to_decimal
from ..models.projection import PayoffResult
from .scenarios import ScenarioComparison


def add_months(start: date, months: int) -> date:
    """Return ``start`` shifted by ``months``, clamping the day to the month's length."""

    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def payoff_dates(result: PayoffResult, *, start: date | None = None) -> dict[str, date]:
    """Map each paid-off debt to the calendar date of its payoff month."""

    start = start or date.today()
    return {debt_id: add_months(start, month) for debt_id, month in result.payoff_month.items()}


def _money(value) -> str:
    return f"${float(value):,.2f}"


def summary_rows(comparison: ScenarioComparison) -> list[tuple[str, str]]:
    """Label/value pairs for the exported payoff summary."""

    baseline = comparison.baseline
    rows = [
        ("Base Payoff Time", f"{baseline.months} months"),
        ("Base Total Interest", _money(baseline.total_interest)),
    ]
    if comparison.parameters.is_active:
        rows.extend(
            [
                ("Scenario Payoff Time", f"{comparison.scenario.months} months"),
                ("Scenario Total Interest", _money(comparison.scenario.total_interest)),
                ("Months Saved", str(comparison.months_saved)),
                ("Interest Saved", _money(comparison.interest_saved)),
            ]
        )
    if baseline.truncated or comparison.scenario.truncated:
        rows.append(("Warning", "Payments do not cover interest; projection was cut off"))
    return rows


# Paychecks per month for non-monthly income.
INCOME_FREQUENCY_FACTORS = {
    "weekly": Decimal("4.33"),
    "bi-weekly": Decimal("2.167"),
}

# Upper bound (inclusive, percent) of each debt-to-income band.
DTI_BANDS = (
    (Decimal("36"), "Optimal"),
    (Decimal("42"), "Manageable"),
    (Decimal("49"), "Cause for concern"),
)


def normalize_monthly_income(amount: object, frequency: str | None = None) -> Decimal:
    """Convert an income amount to its monthly equivalent.

    Weekly and bi-weekly amounts are scaled; any other frequency is taken as monthly.
    """

    value = to_decimal(amount, field="income amount")
    factor = INCOME_FREQUENCY_FACTORS.get((frequency or "").strip().lower(), Decimal("1"))
    return value * factor


def total_monthly_income(
    sources: Iterable[Mapping],
    *,
    amount_key: str = "amount",
    frequency_key: str = "frequency",
) -> Decimal:
    """Sum income rows after normalizing each to a monthly amount."""

    return sum(
        (normalize_monthly_income(row.get(amount_key), row.get(frequency_key)) for row in sources),
        ZERO,
    )


@dataclass(frozen=True, slots=True)
class DebtSummary:
    """Totals shown next to the payoff plan.

    ``debt_to_income`` is a percentage of monthly income taken by minimum
    payments plus bills; it is ``None`` when no positive income is known.
    """

    total_debt: Decimal
    total_minimum_payment: Decimal
    monthly_bills: Decimal
    monthly_income: Decimal | None
    debt_to_income: Decimal | None
    available_cash: Decimal | None

    @property
    def monthly_obligations(self) -> Decimal:
        return self.total_minimum_payment + self.monthly_bills

    @property
    def dti_rating(self) -> str | None:
        if self.debt_to_income is None:
            return None
        for upper, label in DTI_BANDS:
            if self.debt_to_income <= upper:
                return label
        return "Dangerous"


def debt_summary(
    debts: Iterable[Debt],
    monthly_income: object = None,
    *,
    monthly_bills: object = 0,
) -> DebtSummary:
    """Total debt, total minimum payment and debt-to-income for a debt set."""

    debt_list = list(debts)
    total_debt = sum((d.balance for d in debt_list), ZERO)
    total_minimum = sum((d.minimum_payment for d in debt_list), ZERO)
    bills = to_decimal(monthly_bills, field="monthly bills")

    income = None if monthly_income is None else to_decimal(monthly_income, field="monthly income")
    dti = None
    available = None
    if income is not None:
        available = income - bills - total_minimum
        if income > 0:
            dti = ((total_minimum + bills) / income * 100).quantize(CENT, rounding=ROUND_HALF_UP)

    return DebtSummary(
        total_debt=total_debt,
        total_minimum_payment=total_minimum,
        monthly_bills=bills,
        monthly_income=income,
        debt_to_income=dti,
        available_cash=available,
    )


def debt_summary_rows(summary: DebtSummary) -> list[tuple[str, str]]:
    """Label/value pairs for the debt overview section of the exported summary."""

    rows = [
        ("Total Debt", _money(summary.total_debt)),
        ("Monthly Debt Payments", _money(summary.total_minimum_payment)),
    ]
    if summary.monthly_income is not None:
        rows.append(("Total Monthly Income", _money(summary.monthly_income)))
        rows.append(("Available Cash", _money(summary.available_cash)))
    if summary.debt_to_income is not None:
        rows.append(("Debt-to-Income", f"{summary.debt_to_income}% ({summary.dti_rating})"))
    return rows
