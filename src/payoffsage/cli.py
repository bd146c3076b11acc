"""Command line interface for PayoffSage."""

from __future__ import annotations

from pathlib import Path

import click

from .config import BaseConfig
from .logging_config import setup_logging
from .models.debt import DebtValidationError, OneTimePayment
from .services.debts import STRATEGIES, TARGET_BY_STRATEGY
from .services.export_csv import export_amortization_csv, export_history_csv
from .services.import_csv import load_debts
from .services.reports import debt_summary, debt_summary_rows, summary_rows
from .services.scenarios import ScenarioParameters, compare_scenarios


def _parse_snowflake(value: str) -> OneTimePayment:
    month, sep, amount = value.partition(":")
    if not sep:
        raise click.BadParameter(f"expected MONTH:AMOUNT, got {value!r}", param_hint="--snowflake")
    try:
        payment = OneTimePayment(month=month.strip(), amount=amount.strip())
    except DebtValidationError as exc:
        raise click.BadParameter(str(exc), param_hint="--snowflake") from exc
    if payment.month <= 0 or payment.amount <= 0:
        raise click.BadParameter("month and amount must be positive", param_hint="--snowflake")
    return payment


@click.group()
@click.pass_context
def main(ctx: click.Context) -> None:
    """Debt payoff projections from a CSV of debts."""

    try:
        config = BaseConfig()
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    setup_logging(config)
    ctx.obj = config


@main.command("project")
@click.argument("csv_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--strategy", type=click.Choice(STRATEGIES), default=None, help="Payoff order for extra payments")
@click.option("--extra", type=float, default=0.0, show_default=True, help="Extra amount paid every month")
@click.option("--snowflake", "snowflakes", multiple=True, help="One-time payment as MONTH:AMOUNT")
@click.option("--target", default=TARGET_BY_STRATEGY, show_default=True, help="Debt name that gets extra payments first")
@click.option("--income", type=float, default=None, help="Gross monthly income, for the debt-to-income ratio")
@click.option("--bills", type=float, default=0.0, show_default=True, help="Other monthly bills counted in debt-to-income")
@click.option(
    "--export-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Write amortization.csv and history.csv here",
)
@click.pass_obj
def project(
    config: BaseConfig,
    csv_path: Path,
    strategy: str | None,
    extra: float,
    snowflakes: tuple[str, ...],
    target: str,
    income: float | None,
    bills: float,
    export_dir: Path | None,
) -> None:
    """Project payoff for the debts listed in CSV_PATH."""

    strategy = strategy or config.DEFAULT_STRATEGY
    debts = load_debts(csv_path=csv_path)
    if not debts:
        raise click.ClickException(f"No debts found in {csv_path}")

    known_ids = {debt.id for debt in debts}
    if target != TARGET_BY_STRATEGY and target not in known_ids:
        raise click.BadParameter(f"unknown debt {target!r}", param_hint="--target")

    params = ScenarioParameters(
        extra_monthly_payment=extra,
        one_time_payments=tuple(_parse_snowflake(value) for value in snowflakes),
        target_debt_id=target,
    )
    comparison = compare_scenarios(debts, strategy, params, max_months=config.MAX_MONTHS)
    result = comparison.scenario

    for label, value in debt_summary_rows(debt_summary(debts, income, monthly_bills=bills)):
        click.echo(f"{label}: {value}")
    click.echo(f"Strategy: {strategy}")
    for label, value in summary_rows(comparison):
        click.echo(f"{label}: {value}")
    click.echo("Payoff month by debt:")
    for debt in debts:
        month = result.payoff_month.get(debt.id)
        click.echo(f"  {debt.id}: {month if month is not None else 'N/A'}")

    if export_dir is not None:
        amortization_path = export_amortization_csv(
            result=result, output_path=export_dir / "amortization.csv"
        )
        history_path = export_history_csv(result=result, output_path=export_dir / "history.csv")
        click.echo(f"Export written: {amortization_path}")
        click.echo(f"Export written: {history_path}")
