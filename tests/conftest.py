"""Pytest configuration and shared fixtures for PayoffSage tests.

Provides debt factories, environment isolation and helper assertions for the
payoff simulator and its surrounding services.
"""

from __future__ import annotations

import logging

import pytest

from payoffsage.models import Debt


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point config at a throwaway data directory and reset package logging."""

    monkeypatch.setenv("PAYOFFSAGE_DATA_DIR", str(tmp_path / "instance"))
    monkeypatch.delenv("PAYOFFSAGE_MAX_MONTHS", raising=False)
    monkeypatch.delenv("PAYOFFSAGE_DEFAULT_STRATEGY", raising=False)
    monkeypatch.delenv("PAYOFFSAGE_DEV_MODE", raising=False)
    yield
    package_logger = logging.getLogger("payoffsage")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def debt_factory():
    """Factory fixture for creating Debt inputs with sensible defaults."""

    def _create_debt(
        id: str = "Card",
        balance: float = 1000.0,
        apr: float = 12.0,
        minimum_payment: float = 50.0,
    ) -> Debt:
        return Debt(id=id, balance=balance, apr=apr, minimum_payment=minimum_payment)

    return _create_debt


@pytest.fixture
def sample_debts(debt_factory):
    """Three debts with distinct balances and APRs."""

    return [
        debt_factory(id="Visa", balance=5000.0, apr=18.0, minimum_payment=100.0),
        debt_factory(id="Car Loan", balance=1000.0, apr=12.0, minimum_payment=50.0),
        debt_factory(id="Store Card", balance=3000.0, apr=24.99, minimum_payment=75.0),
    ]


@pytest.fixture
def debts_csv(tmp_path):
    """Write a small debt sheet export and return its path."""

    path = tmp_path / "debts.csv"
    path.write_text(
        "Debt Name,Balance,APR,Minimum Payment\n"
        "Loan,1200,0,100\n",
        encoding="utf-8",
    )
    return path


def assert_float_equal(actual: float, expected: float, tolerance: float = 0.01):
    """Assert that two numbers are equal within a tolerance (default one cent).

    Args:
        actual: Actual value
        expected: Expected value
        tolerance: Maximum allowed difference

    Raises:
        AssertionError: If values differ by more than tolerance
    """
    assert (
        abs(float(actual) - float(expected)) < tolerance
    ), f"Expected {expected}, got {actual} (diff: {abs(float(actual) - float(expected))})"
