"""Debt payoff simulator (snowball and avalanche)."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Protocol, Sequence

from ..logging_config import get_logger
from ..models.debt import CENT, STRATEGIES, ZERO, Debt, DebtValidationError, OneTimePayment, to_decimal
from ..models.projection import AmortizationRow, DebtSchedule, HistoryEntry, PayoffResult

logger = get_logger("services.debts")

TARGET_BY_STRATEGY = "strategy"
MAX_SIMULATION_MONTHS = 1200  # 100 years


class AmortizationWriter(Protocol):
    """Persists payoff projections for later retrieval."""

    def write_schedule(
        self, *, debt_id: str, rows: Sequence[AmortizationRow]
    ) -> None:  # pragma: no cover - interface
        ...


@dataclass(slots=True)
class _WorkingDebt:
    """Private mutable copy of a Debt for the duration of one simulation."""

    id: str
    balance: Decimal
    apr: Decimal
    minimum_payment: Decimal
    rows: list[dict] = field(default_factory=list)


def _monthly_interest(balance: Decimal, apr: Decimal) -> Decimal:
    interest = balance * apr / Decimal(1200)
    # quantize needs the whole number of cents to fit the 28-digit context;
    # only runaway negative amortization gets anywhere near that.
    if interest.adjusted() < 24:
        interest = interest.quantize(CENT, rounding=ROUND_HALF_UP)
    return interest


def _non_negative(value: object, *, label: str) -> Decimal:
    amount = to_decimal(value, field=label)
    if amount < ZERO:
        logger.warning("Negative %s clamped to zero", label, extra={"value": str(amount)})
        return ZERO
    return amount


def _working_copies(debts: Iterable[Debt]) -> list[_WorkingDebt]:
    working: list[_WorkingDebt] = []
    seen: set[str] = set()
    for debt in debts:
        if debt.id in seen:
            raise DebtValidationError(f"duplicate debt id: {debt.id}")
        seen.add(debt.id)
        working.append(
            _WorkingDebt(
                id=debt.id,
                balance=debt.balance,
                apr=debt.apr,
                minimum_payment=debt.minimum_payment,
            )
        )
    return working


def _one_time_amount(payments: Sequence[OneTimePayment], month: int) -> Decimal:
    # Only the first payment scheduled for a month counts; later duplicates are ignored.
    for payment in payments:
        if payment.month == month:
            return _non_negative(payment.amount, label="one-time payment")
    return ZERO


def _extra_payment_order(
    debts: list[_WorkingDebt], strategy: str, target_debt_id: str
) -> list[_WorkingDebt]:
    active = [d for d in debts if d.balance > 0]
    if strategy == "avalanche":
        order = sorted(active, key=lambda d: (-d.apr, d.balance))
    else:
        order = sorted(active, key=lambda d: (d.balance, -d.apr))

    if target_debt_id != TARGET_BY_STRATEGY:
        target = next((d for d in order if d.id == target_debt_id), None)
        if target is not None:
            order = [target] + [d for d in order if d is not target]
    return order


def _snapshot(month: int, debts: list[_WorkingDebt]) -> HistoryEntry:
    balances = {d.id: max(d.balance, ZERO) for d in debts}
    return HistoryEntry(month=month, total_balance=sum(balances.values(), ZERO), balances=balances)


def _freeze_row(row: dict) -> AmortizationRow:
    return AmortizationRow(
        month=row["month"],
        payment=row["payment"],
        interest=row["interest"],
        principal=row["principal"],
        balance_after=row["balance_after"],
    )


def simulate_payoff(
    debts: Iterable[Debt],
    strategy: str = "snowball",
    extra_monthly_payment: object = 0,
    one_time_payments: Sequence[OneTimePayment] = (),
    target_debt_id: str = TARGET_BY_STRATEGY,
    *,
    max_months: int = MAX_SIMULATION_MONTHS,
) -> PayoffResult:
    """Simulate month-by-month payoff of ``debts`` under a payment policy.

    Each month the pool (every debt's minimum, the extra payment and the
    first one-time payment scheduled for that month) is spent as follows:
    interest accrues on every open balance, each open debt receives its
    minimum in input order, then the remainder sweeps debts in strategy
    order, with ``target_debt_id`` moved to the front while it is open.

    Minimums of debts already paid off stay in the pool, so freed payments
    roll onto the next debt. The loop stops once every balance is zero or
    ``max_months`` have been simulated; the latter marks the result as
    ``truncated``. Caller data is never mutated.
    """

    if strategy not in STRATEGIES:
        raise ValueError("Invalid debt payoff strategy.")

    working = _working_copies(debts)
    if not working:
        return PayoffResult.empty()

    extra = _non_negative(extra_monthly_payment, label="extra monthly payment")
    base_pool = sum((d.minimum_payment for d in working), ZERO) + extra

    history: list[HistoryEntry] = [_snapshot(0, working)]
    payoff_month: dict[str, int] = {}
    total_interest = ZERO
    month = 0

    logger.debug(
        "Simulating payoff",
        extra={"strategy": strategy, "debts": len(working), "extra_payment": str(extra)},
    )

    while any(d.balance > 0 for d in working) and month < max_months:
        month += 1
        pool = base_pool + _one_time_amount(one_time_payments, month)

        accrued: dict[str, Decimal] = {}
        for debt in working:
            if debt.balance > 0:
                interest = _monthly_interest(debt.balance, debt.apr)
                debt.balance += interest
                accrued[debt.id] = interest
                total_interest += interest

        rows_this_month: dict[str, dict] = {}
        for debt in working:
            if debt.balance > 0:
                paid = min(debt.balance, debt.minimum_payment)
                debt.balance -= paid
                pool -= paid
                interest = accrued.get(debt.id, ZERO)
                row = {
                    "month": month,
                    "payment": paid,
                    "interest": interest,
                    "principal": paid - interest,
                    "balance_after": debt.balance,
                }
                debt.rows.append(row)
                rows_this_month[debt.id] = row

        for debt in _extra_payment_order(working, strategy, target_debt_id):
            if pool <= 0:
                break
            if debt.balance <= 0:
                continue
            paid = min(pool, debt.balance)
            debt.balance -= paid
            pool -= paid
            row = rows_this_month.get(debt.id)
            if row is not None:
                row["payment"] += paid
                row["principal"] += paid
                row["balance_after"] = debt.balance
            else:
                row = {
                    "month": month,
                    "payment": paid,
                    "interest": ZERO,
                    "principal": paid,
                    "balance_after": debt.balance,
                }
                debt.rows.append(row)
                rows_this_month[debt.id] = row

        for debt in working:
            if debt.balance < 0:
                debt.balance = ZERO
            if debt.balance <= 0 and debt.id not in payoff_month:
                payoff_month[debt.id] = month

        history.append(_snapshot(month, working))

    truncated = any(d.balance > 0 for d in working)
    if truncated:
        logger.warning(
            "Payoff simulation hit the %s month cap before all debts were paid",
            max_months,
            extra={"strategy": strategy, "remaining": str(history[-1].total_balance)},
        )

    return PayoffResult(
        history=tuple(history),
        months=month,
        total_interest=total_interest,
        amortization=tuple(
            DebtSchedule(debt_id=d.id, rows=tuple(_freeze_row(r) for r in d.rows)) for d in working
        ),
        payoff_month=payoff_month,
        truncated=truncated,
    )


def snowball_schedule(debts: Iterable[Debt], **kwargs) -> PayoffResult:
    """Return a projection prioritizing smallest balances first."""
    return simulate_payoff(debts, "snowball", **kwargs)


def avalanche_schedule(debts: Iterable[Debt], **kwargs) -> PayoffResult:
    """Return a projection prioritizing highest APR first."""
    return simulate_payoff(debts, "avalanche", **kwargs)


def persist_projection(
    *,
    writer: AmortizationWriter,
    debts: Iterable[Debt],
    strategy: str,
    extra_monthly_payment: object = 0,
    one_time_payments: Sequence[OneTimePayment] = (),
    target_debt_id: str = TARGET_BY_STRATEGY,
) -> PayoffResult:
    """Compute the projection and hand each debt's schedule to the persistence layer."""

    result = simulate_payoff(
        list(debts),
        strategy,
        extra_monthly_payment,
        one_time_payments,
        target_debt_id,
    )
    for schedule in result.amortization:
        writer.write_schedule(debt_id=schedule.debt_id, rows=schedule.rows)
    return result
