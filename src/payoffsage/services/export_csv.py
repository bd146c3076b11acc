"""CSV export helpers for payoff projections."""

from __future__ import annotations

import csv
from decimal import Decimal
from pathlib import Path

from ..models.projection import PayoffResult


def _serialize_value(value) -> str:
    if value is None:
        return ""
    if isinstance(value, Decimal):
        return f"{value:.2f}"
    return str(value)


def export_amortization_csv(*, result: PayoffResult, output_path: Path) -> Path:
    """Write every debt's amortization rows to CSV at ``output_path``.

    Columns are deterministic: debt_id, month, payment, principal, interest, balance_after.
    Returns the path written.
    """

    headers = ["debt_id", "month", "payment", "principal", "interest", "balance_after"]
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=headers, quoting=csv.QUOTE_MINIMAL)
        writer.writeheader()
        for schedule in result.amortization:
            for row in schedule.rows:
                writer.writerow(
                    {
                        "debt_id": schedule.debt_id,
                        "month": _serialize_value(row.month),
                        "payment": _serialize_value(row.payment),
                        "principal": _serialize_value(row.principal),
                        "interest": _serialize_value(row.interest),
                        "balance_after": _serialize_value(row.balance_after),
                    }
                )

    return output_path


def export_history_csv(*, result: PayoffResult, output_path: Path) -> Path:
    """Write the month-by-month balance history: month, total_balance, then one column per debt."""

    debt_ids = [schedule.debt_id for schedule in result.amortization]
    headers = ["month", "total_balance", *debt_ids]
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh, quoting=csv.QUOTE_MINIMAL)
        writer.writerow(headers)
        for entry in result.history:
            writer.writerow(
                [
                    _serialize_value(entry.month),
                    _serialize_value(entry.total_balance),
                    *(_serialize_value(entry.balances.get(debt_id)) for debt_id in debt_ids),
                ]
            )

    return output_path
