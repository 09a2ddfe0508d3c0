"""Command-line interface for PayoffSage."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

import click

from .config import BaseConfig
from .constants.debt_types import DebtType
from .context import AppContext, create_app_context
from .logging_config import setup_logging
from .services import debts as debt_service
from .services.export_csv import export_debts_csv, export_payoff_plan_csv
from .services.import_csv import import_debts
from .services.money import format_currency, to_decimal
from .services.payoff import (
    NonConvergentPayoffError,
    PayoffError,
    PayoffPlan,
    PayoffStrategy,
    compute_baseline_savings,
    compute_payoff_plans,
    summarize_plans,
)
from .services.preferences import reset_preferences, save_preferences
from .services.validation import validate_extra_payment


class ExtraPaymentType(click.ParamType):
    """Parse ``1,250.50`` or ``$1250.50`` as an extra monthly payment."""

    name = "amount"

    def convert(self, value, param, ctx) -> Decimal:
        if isinstance(value, Decimal):
            return value
        result = validate_extra_payment(value)
        if not result.is_valid:
            self.fail(f"{value!r}: {'; '.join(result.errors)}", param, ctx)
        return to_decimal(value)


EXTRA_PAYMENT = ExtraPaymentType()
STRATEGY_CHOICE = click.Choice([s.value for s in PayoffStrategy], case_sensitive=False)
DEBT_TYPE_CHOICE = click.Choice([t.value for t in DebtType], case_sensitive=False)


def _app(ctx: click.Context) -> AppContext:
    return ctx.ensure_object(dict)["app"]


def _plan_inputs(
    app: AppContext, strategy: str | None, extra: Decimal | None
) -> tuple[PayoffStrategy, Decimal]:
    prefs = app.preferences()
    chosen = PayoffStrategy.resolve(strategy) if strategy else prefs.strategy
    amount = extra if extra is not None else prefs.extra_payment
    return chosen, amount


def _compute_plans(debts: list, strategy: PayoffStrategy, extra: Decimal) -> list[PayoffPlan]:
    try:
        return compute_payoff_plans(debts, strategy, extra)
    except PayoffError as exc:
        raise click.ClickException(str(exc)) from exc


def _months_label(months: int) -> str:
    years, remainder = divmod(abs(months), 12)
    sign = "-" if months < 0 else ""
    if years and remainder:
        return f"{sign}{years} years {remainder} months"
    if years:
        return f"{sign}{years} years"
    return f"{sign}{remainder} months"


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding the database and logs (defaults to PAYOFFSAGE_DATA_DIR).",
)
@click.pass_context
def main(ctx: click.Context, data_dir: Path | None) -> None:
    """Track debts and project avalanche/snowball payoff plans."""

    config = BaseConfig()
    if data_dir is not None:
        config.use_data_dir(data_dir)
    setup_logging(config)
    ctx.ensure_object(dict)["app"] = create_app_context(config)


@main.group("debts")
def debts_group() -> None:
    """Add, list, update and remove tracked debts."""


@debts_group.command("list")
@click.pass_context
def list_debts(ctx: click.Context) -> None:
    """Show tracked debts with their share of the total paid down."""

    debts = _app(ctx).debt_repo.list_all()
    if not debts:
        click.echo("No debts tracked.")
        return
    summary = summarize_plans(debts, [])
    for debt in debts:
        click.echo(
            f"[{debt.id}] {debt.name} ({debt.debt_type}) "
            f"{format_currency(debt.balance)} at {debt.interest_rate}% APR, "
            f"min {format_currency(debt.minimum_payment)}, "
            f"progress {summary.progress_percent(debt.balance)}%"
        )
    click.echo(f"Total debt: {format_currency(summary.total_debt)}")
    click.echo(f"Total minimum payments: {format_currency(summary.total_minimum_payments)}")


@debts_group.command("add")
@click.option("--name", required=True)
@click.option("--balance", required=True, help="Outstanding balance.")
@click.option("--rate", "interest_rate", required=True, help="Annual interest rate in percent.")
@click.option("--minimum", "minimum_payment", required=True, help="Minimum monthly payment.")
@click.option("--type", "debt_type", type=DEBT_TYPE_CHOICE, default=DebtType.CREDIT_CARD.value)
@click.option("--color", default=None, help="Hex display color.")
@click.pass_context
def add_debt(ctx, name, balance, interest_rate, minimum_payment, debt_type, color) -> None:
    """Add a debt."""

    try:
        debt = debt_service.add_debt(
            _app(ctx).debt_repo,
            name=name,
            balance=balance,
            interest_rate=interest_rate,
            minimum_payment=minimum_payment,
            debt_type=debt_type,
            color=color,
        )
    except debt_service.DebtValidationError as exc:
        raise click.ClickException("\n".join(exc.errors)) from exc
    click.echo(f"Added debt {debt.id}: {debt.name}")


@debts_group.command("update")
@click.argument("debt_id", type=int)
@click.option("--name", default=None)
@click.option("--balance", default=None)
@click.option("--rate", "interest_rate", default=None)
@click.option("--minimum", "minimum_payment", default=None)
@click.option("--type", "debt_type", type=DEBT_TYPE_CHOICE, default=None)
@click.option("--color", default=None)
@click.pass_context
def update_debt(ctx, debt_id, **changes) -> None:
    """Change fields of an existing debt."""

    try:
        debt = debt_service.update_debt(_app(ctx).debt_repo, debt_id, **changes)
    except LookupError as exc:
        raise click.ClickException(str(exc)) from exc
    except debt_service.DebtValidationError as exc:
        raise click.ClickException("\n".join(exc.errors)) from exc
    click.echo(f"Updated debt {debt.id}: {debt.name}")


@debts_group.command("remove")
@click.argument("debt_id", type=int)
@click.pass_context
def remove_debt(ctx: click.Context, debt_id: int) -> None:
    """Delete a debt."""

    try:
        debt_service.remove_debt(_app(ctx).debt_repo, debt_id)
    except LookupError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Removed debt {debt_id}")


@main.command("plan")
@click.option("--strategy", type=STRATEGY_CHOICE, default=None, help="Defaults to the stored strategy.")
@click.option("--extra", type=EXTRA_PAYMENT, default=None, help="Extra monthly payment (defaults to stored value).")
@click.option("--save", is_flag=True, default=False, help="Remember strategy and extra payment.")
@click.option("--reset", is_flag=True, default=False, help="Forget stored preferences first.")
@click.pass_context
def plan(
    ctx: click.Context, strategy: str | None, extra: Decimal | None, save: bool, reset: bool
) -> None:
    """Print the payoff order, totals and savings versus minimum payments."""

    app = _app(ctx)
    if reset:
        reset_preferences(app.preference_repo)
        click.echo("Stored preferences cleared.")
    if save:
        save_preferences(
            app.preference_repo,
            strategy=strategy,
            extra_payment=extra,
            default_strategy=app.default_strategy,
        )

    chosen, amount = _plan_inputs(app, strategy, extra)
    debts = app.debt_repo.list_all()
    plans = _compute_plans(debts, chosen, amount)
    if not plans:
        click.echo("No debts tracked.")
        return

    click.echo(f"{chosen.label} strategy")
    click.echo(chosen.description)
    click.echo(f"Extra monthly payment: {format_currency(amount)}")
    click.echo("")
    for item in plans:
        click.echo(
            f"{item.order}. {item.debt.name}: {format_currency(item.debt.balance)} "
            f"at {item.debt.interest_rate}% APR -> {item.months_to_payoff} months, "
            f"{format_currency(item.total_interest)} interest"
        )

    summary = summarize_plans(debts, plans)
    click.echo("")
    click.echo(f"Total debt: {format_currency(summary.total_debt)}")
    click.echo(f"Total minimum payments: {format_currency(summary.total_minimum_payments)}")
    click.echo(f"Total interest: {format_currency(summary.total_interest)}")
    click.echo(f"Debt-free in: {_months_label(summary.payoff_time_months)}")

    # Minimums alone may never clear a debt that the extra payment does
    try:
        savings = compute_baseline_savings(debts, plans)
    except NonConvergentPayoffError as exc:
        click.echo(f"Savings comparison unavailable: {exc}")
        return
    click.echo(f"Interest saved: {format_currency(savings.interest_saved)}")
    click.echo(f"Time saved: {_months_label(savings.time_saved)}")


@main.command("export")
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--strategy", type=STRATEGY_CHOICE, default=None)
@click.option("--extra", type=EXTRA_PAYMENT, default=None)
@click.pass_context
def export_plan(ctx: click.Context, output: Path, strategy: str | None, extra: Decimal | None) -> None:
    """Write the payoff plan to a CSV file."""

    app = _app(ctx)
    chosen, amount = _plan_inputs(app, strategy, extra)
    plans = _compute_plans(app.debt_repo.list_all(), chosen, amount)
    path = export_payoff_plan_csv(plans=plans, output_path=output)
    click.echo(f"Export written: {path}")


@main.command("export-debts")
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_context
def export_debts(ctx: click.Context, output: Path) -> None:
    """Write tracked debts to a CSV file."""

    path = export_debts_csv(debts=_app(ctx).debt_repo.list_all(), output_path=output)
    click.echo(f"Export written: {path}")


@main.command("import")
@click.argument("csv_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def import_debts_command(ctx: click.Context, csv_path: Path) -> None:
    """Add debts from a CSV file; invalid rows are reported and skipped."""

    try:
        result = import_debts(_app(ctx).debt_repo, csv_path=csv_path)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    for message in result.errors:
        click.echo(message, err=True)
    click.echo(f"Imported {result.created} debts ({len(result.errors)} rows skipped)")


if __name__ == "__main__":  # pragma: no cover
    main()
