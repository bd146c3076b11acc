"""CSV ingestion of debt records."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping

import pandas as pd

from ..logging_config import get_logger
from ..models.debt import Debt, DebtValidationError

logger = get_logger("services.import_csv")


@dataclass(slots=True)
class DebtColumnMapping:
    """Maps debt fields to (lowercased) CSV headers."""

    name: str = "debt name"
    balance: str = "balance"
    apr: str = "apr"
    minimum_payment: str = "minimum payment"


def normalize_frame(*, file_path: Path, encoding: str = "utf-8") -> pd.DataFrame:
    """Load a CSV file into a DataFrame with consistent column casing."""

    frame = pd.read_csv(file_path, encoding=encoding, dtype=str, keep_default_na=False)
    frame.columns = [c.strip().lower() for c in frame.columns]
    return frame


def debts_from_rows(
    *, rows: Iterable[Mapping], mapping: DebtColumnMapping | None = None
) -> list[Debt]:
    """Convert dict-like rows into ``Debt`` values.

    Rows without a name are skipped. Rows whose numbers cannot be parsed are
    logged and skipped so one bad line does not sink the whole sheet.
    """

    mapping = mapping or DebtColumnMapping()
    debts: list[Debt] = []
    seen: set[str] = set()
    for index, row in enumerate(rows, start=1):
        name = row.get(mapping.name)
        if name is None or not str(name).strip():
            continue
        try:
            debt = Debt(
                id=str(name),
                balance=row.get(mapping.balance),
                apr=row.get(mapping.apr),
                minimum_payment=row.get(mapping.minimum_payment),
            )
        except DebtValidationError as exc:
            logger.warning("Skipping debt row %s: %s", index, exc)
            continue
        if debt.id in seen:
            logger.warning("Skipping debt row %s: duplicate name %r", index, debt.id)
            continue
        seen.add(debt.id)
        debts.append(debt)
    return debts


def load_debts(*, csv_path: Path, mapping: DebtColumnMapping | None = None) -> list[Debt]:
    """Parse the file and return the debts it describes."""

    frame = normalize_frame(file_path=csv_path)
    debts = debts_from_rows(rows=frame.to_dict(orient="records"), mapping=mapping)
    logger.info("Loaded debts from CSV", extra={"path": str(csv_path), "count": len(debts)})
    return debts
