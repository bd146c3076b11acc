"""Scenario comparison tests (baseline vs what-if)."""

from __future__ import annotations

import logging
from decimal import Decimal

import pytest

from payoffsage.models import OneTimePayment
from payoffsage.services.scenarios import (
    ScenarioParameters,
    combined_history,
    compare_scenarios,
    snowflake_impact,
)


@pytest.fixture
def loan(debt_factory):
    return [debt_factory(id="Loan", balance=1200, apr=0, minimum_payment=100)]


def test_default_parameters_are_inactive():
    assert ScenarioParameters().is_active is False


@pytest.mark.parametrize(
    "params",
    [
        ScenarioParameters(extra_monthly_payment=25),
        ScenarioParameters(one_time_payments=(OneTimePayment(month=1, amount=10),)),
        ScenarioParameters(target_debt_id="Loan"),
    ],
)
def test_any_override_activates_scenario(params):
    assert params.is_active is True


def test_parameters_survive_storage_round_trip():
    params = ScenarioParameters(
        extra_monthly_payment="150.25",
        one_time_payments=[OneTimePayment(month=3, amount=500)],
        target_debt_id="Visa",
    )

    stored = params.to_mapping()

    assert stored == {
        "extraMonthlyPayment": 150.25,
        "oneTimePayments": [{"month": 3, "amount": 500.0}],
        "targetDebt": "Visa",
    }
    assert ScenarioParameters.from_mapping(stored) == params


def test_from_mapping_tolerates_blanks():
    params = ScenarioParameters.from_mapping(
        {"extraMonthlyPayment": "", "oneTimePayments": None, "targetDebt": ""}
    )

    assert params == ScenarioParameters()
    assert ScenarioParameters.from_mapping(None) == ScenarioParameters()


def test_from_mapping_skips_incomplete_one_time_payments(caplog):
    stored = {
        "oneTimePayments": [
            {"amount": 100},
            {"month": "", "amount": 100},
            {"month": 4},
            {"month": 2.5, "amount": 50},
            {"month": 3, "amount": 500},
        ]
    }

    with caplog.at_level(logging.WARNING, logger="payoffsage"):
        params = ScenarioParameters.from_mapping(stored)

    assert params.one_time_payments == (OneTimePayment(month=3, amount=500),)
    assert sum("Skipping stored one-time payment" in m for m in caplog.messages) == 4


def test_compare_scenarios_reports_savings(loan):
    comparison = compare_scenarios(loan, "snowball", ScenarioParameters(extra_monthly_payment=100))

    assert comparison.baseline.months == 12
    assert comparison.scenario.months == 6
    assert comparison.months_saved == 6
    assert comparison.interest_saved == 0


def test_compare_without_parameters_matches_baseline(debt_factory):
    debts = [debt_factory(id="Card", balance=2000, apr=19.99, minimum_payment=60)]

    comparison = compare_scenarios(debts, "avalanche")

    assert comparison.scenario == comparison.baseline
    assert comparison.months_saved == 0
    assert comparison.interest_saved == Decimal("0")


def test_snowflake_impact_measures_against_baseline(debt_factory):
    debts = [debt_factory(id="Card", balance=3000, apr=18, minimum_payment=90)]
    params = ScenarioParameters(extra_monthly_payment=10)

    impact = snowflake_impact(debts, "snowball", params, OneTimePayment(month=2, amount=500))

    assert impact.parameters.one_time_payments == (OneTimePayment(month=2, amount=500),)
    assert impact.months_saved > 0
    assert impact.interest_saved > 0
    assert params.one_time_payments == ()


@pytest.mark.parametrize("payment", [OneTimePayment(month=0, amount=100), OneTimePayment(month=2, amount=0)])
def test_snowflake_impact_rejects_empty_payment(loan, payment):
    with pytest.raises(ValueError):
        snowflake_impact(loan, "snowball", ScenarioParameters(), payment)


def test_combined_history_pads_shorter_series(loan):
    comparison = compare_scenarios(loan, "snowball", ScenarioParameters(extra_monthly_payment=100))

    rows = combined_history(comparison.baseline, comparison.scenario)

    assert len(rows) == 13
    assert rows[6] == {
        "month": 6,
        "Base Total": 600.0,
        "Scenario Total": 0.0,
        "Loan (Base)": 600.0,
        "Loan (Scenario)": 0.0,
    }
    assert rows[7]["Scenario Total"] is None
    assert rows[7]["Loan (Scenario)"] is None
    assert rows[12]["Base Total"] == 0.0


def test_combined_history_without_scenario_columns(loan):
    comparison = compare_scenarios(loan, "snowball")

    rows = combined_history(comparison.baseline, comparison.scenario, include_scenario=False)

    assert set(rows[0]) == {"month", "Base Total", "Loan (Base)"}
