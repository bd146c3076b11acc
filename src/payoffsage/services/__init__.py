"""Service module exports."""

from . import debts, export_csv, import_csv, reports, scenarios

__all__ = [
    "debts",
    "export_csv",
    "import_csv",
    "reports",
    "scenarios",
]
