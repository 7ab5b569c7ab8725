"""Command line interface for HomeFunds."""

from __future__ import annotations

import asyncio
import functools
from datetime import date
from pathlib import Path
from typing import Callable, Optional, TypeVar

import click

from .constants.categories import (
    EXPENSE_CATEGORIES,
    INCOME_SOURCES,
    get_category_by_id,
    get_source_by_id,
)
from .context import AppContext, create_app_context
from .errors import HomeFundsError
from .logging_config import setup_logging
from .models.transaction import TransactionKind
from .services import budgeting, dashboard, export_csv, ledger_service, reports
from .services.formatting import format_currency, format_percent
from .services.periods import Period, parse_period

F = TypeVar("F", bound=Callable[..., None])

CATEGORY_CHOICE = click.Choice([c.id for c in EXPENSE_CATEGORIES])
SOURCE_CHOICE = click.Choice([s.id for s in INCOME_SOURCES])
DATE_TYPE = click.DateTime(formats=["%Y-%m-%d"])


def _period_option(func: F) -> F:
    def _convert(_ctx, _param, value: Optional[str]) -> Period:
        if value is None:
            return Period.current()
        try:
            return parse_period(value)
        except ValueError as exc:
            raise click.BadParameter(str(exc)) from exc

    return click.option(
        "--month",
        "period",
        metavar="YYYY-MM",
        callback=_convert,
        help="Month to report on (defaults to the current month).",
    )(func)


def _handle_errors(func: F) -> F:
    """Turn domain errors into a one-line ``click`` failure."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except HomeFundsError as exc:
            raise click.ClickException(str(exc)) from exc

    return wrapper  # type: ignore[return-value]


def _as_date(value) -> Optional[date]:
    return value.date() if value is not None else None


@click.group()
@click.pass_context
def homefunds(ctx: click.Context) -> None:
    """Track household expenses, incomes, budget and savings goals."""

    if isinstance(ctx.obj, AppContext):
        return
    app_ctx = create_app_context()
    setup_logging(app_ctx.config)
    ctx.obj = app_ctx
    ctx.call_on_close(app_ctx.dispose)


pass_app = click.make_pass_decorator(AppContext)


@homefunds.command()
@_period_option
@pass_app
@_handle_errors
def summary(app: AppContext, period: Period) -> None:
    """Show the month's dashboard."""

    snap = asyncio.run(
        dashboard.load_dashboard(app.stores, period, recent_count=app.config.RECENT_COUNT)
    )
    click.echo(f"{period.label(short=False)}")
    click.echo(f"  Spent:   {format_currency(snap.total_spent)}")
    click.echo(f"  Income:  {format_currency(snap.total_income)}")
    click.echo(f"  Balance: {format_currency(snap.balance)}")

    status = snap.budget
    if status.is_set:
        click.echo(
            f"  Budget:  {format_currency(status.spent)} of {format_currency(status.budget)} "
            f"({format_percent(status.progress_ratio * 100)}, {status.severity.value})"
        )
        if status.is_over_budget:
            click.echo(f"  Over budget by {format_currency(-status.remaining)}")
        else:
            click.echo(f"  Remaining: {format_currency(status.remaining)}")
    else:
        click.echo("  Budget:  not set")

    if snap.categories:
        click.echo("Categories:")
        for entry in snap.categories:
            info = get_category_by_id(entry.key)
            click.echo(
                f"  {info.name:<14} {format_currency(entry.total):>12}  "
                f"{format_percent(entry.percent, 1)}"
            )

    if snap.recent_expenses:
        click.echo("Recent expenses:")
        for expense in snap.recent_expenses:
            click.echo(
                f"  #{expense.id} {expense.occurred_on.isoformat()} "
                f"{format_currency(expense.amount):>10}  {expense.description}"
            )

    click.echo(f"Fixed expenses: {format_currency(snap.total_fixed)} per month")
    for progress in snap.goals:
        goal = progress.goal
        click.echo(
            f"Goal #{goal.id} {goal.name}: {format_currency(goal.saved_amount)} of "
            f"{format_currency(goal.target_amount)} ({progress.percent}%)"
        )


@homefunds.command()
@_period_option
@click.option("--window", type=click.IntRange(min=1), default=None, help="Months of history.")
@click.option("--chart", "chart_path", type=click.Path(path_type=Path), help="Write the category donut as PNG.")
@click.option("--history-chart", "history_path", type=click.Path(path_type=Path), help="Write the history bars as PNG.")
@pass_app
@_handle_errors
def stats(
    app: AppContext,
    period: Period,
    window: Optional[int],
    chart_path: Optional[Path],
    history_path: Optional[Path],
) -> None:
    """Show monthly statistics and the trailing history."""

    snap = asyncio.run(
        dashboard.load_stats(app.stores, period, window_size=window or app.config.HISTORY_WINDOW)
    )
    click.echo(f"{period.label(short=False)}")
    click.echo(f"  Spent:   {format_currency(snap.total_spent)}")
    click.echo(f"  Income:  {format_currency(snap.total_income)}")
    click.echo(f"  Balance: {format_currency(snap.balance)}")
    click.echo(
        f"  vs {period.previous().label()}: {format_currency(snap.previous_total)} "
        f"({format_percent(snap.month_change, 1, signed=True)})"
    )

    if snap.contributors:
        click.echo("By member:")
        for entry in snap.contributors:
            click.echo(f"  {entry.key:<14} {format_currency(entry.total):>12}")

    click.echo("History:")
    for point in snap.history:
        click.echo(
            f"  {point.label:<4} out {format_currency(point.expenses):>12}  "
            f"in {format_currency(point.incomes):>12}"
        )

    if chart_path is not None:
        figure = reports.build_spending_chart(snap.category_slices)
        click.echo(f"Chart written: {reports.export_chart_png(figure, output_path=chart_path)}")
    if history_path is not None:
        figure = reports.build_history_chart(snap.history)
        click.echo(f"Chart written: {reports.export_chart_png(figure, output_path=history_path)}")


@homefunds.command()
@_period_option
@click.option("--category", type=CATEGORY_CHOICE, default=None, help="Only this category.")
@pass_app
@_handle_errors
def history(app: AppContext, period: Period, category: Optional[str]) -> None:
    """List the month's expenses."""

    view = asyncio.run(dashboard.load_history(app.stores, period, category=category))
    if not view.expenses:
        click.echo("No expenses.")
    for expense in view.expenses:
        info = get_category_by_id(expense.category)
        click.echo(
            f"#{expense.id} {expense.occurred_on.isoformat()} {info.name:<14} "
            f"{format_currency(expense.amount):>10}  {expense.description} ({expense.user_name})"
        )
    click.echo(f"Total: {format_currency(view.total)}")


@homefunds.command("add-expense")
@click.argument("amount")
@click.argument("description")
@click.option("--category", type=CATEGORY_CHOICE, required=True)
@click.option("--date", "occurred_on", type=DATE_TYPE, default=None, help="YYYY-MM-DD, defaults to today.")
@pass_app
@_handle_errors
def add_expense(app: AppContext, amount: str, description: str, category: str, occurred_on) -> None:
    """Record an expense."""

    record_id = ledger_service.record_expense(
        app.expense_repo,
        member=app.member,
        amount=amount,
        description=description,
        category=category,
        occurred_on=_as_date(occurred_on),
    )
    click.echo(f"Expense #{record_id} recorded.")


@homefunds.command("add-income")
@click.argument("amount")
@click.argument("description")
@click.option("--source", type=SOURCE_CHOICE, required=True)
@click.option("--date", "occurred_on", type=DATE_TYPE, default=None, help="YYYY-MM-DD, defaults to today.")
@pass_app
@_handle_errors
def add_income(app: AppContext, amount: str, description: str, source: str, occurred_on) -> None:
    """Record an income."""

    record_id = ledger_service.record_income(
        app.income_repo,
        member=app.member,
        amount=amount,
        description=description,
        source=source,
        occurred_on=_as_date(occurred_on),
    )
    click.echo(f"Income #{record_id} recorded ({get_source_by_id(source).name}).")


@homefunds.command()
@click.argument("kind", type=click.Choice([k.value for k in TransactionKind]))
@click.argument("record_id", type=int)
@pass_app
@_handle_errors
def delete(app: AppContext, kind: str, record_id: int) -> None:
    """Delete an expense or income by id."""

    repo = app.expense_repo if kind == TransactionKind.EXPENSE.value else app.income_repo
    ledger_service.delete_transaction(repo, record_id)
    click.echo(f"Deleted {kind} #{record_id}.")


@homefunds.command("set-budget")
@click.argument("amount")
@pass_app
@_handle_errors
def set_budget(app: AppContext, amount: str) -> None:
    """Set the monthly budget (0 clears it)."""

    saved = ledger_service.save_budget(app.settings_repo, amount)
    if saved == 0:
        click.echo("Monthly budget cleared.")
    else:
        click.echo(f"Monthly budget set to {format_currency(saved)}.")


@homefunds.command("add-fixed")
@click.argument("name")
@click.argument("amount")
@click.option("--category", type=CATEGORY_CHOICE, required=True)
@click.option("--day", "day_of_month", type=int, default=1, show_default=True)
@pass_app
@_handle_errors
def add_fixed(app: AppContext, name: str, amount: str, category: str, day_of_month: int) -> None:
    """Register a recurring monthly expense."""

    fixed = ledger_service.add_fixed_expense(
        app.fixed_expense_repo,
        member=app.member,
        name=name,
        amount=amount,
        category=category,
        day_of_month=day_of_month,
    )
    click.echo(f"Fixed expense #{fixed.id} added.")


@homefunds.command("add-goal")
@click.argument("name")
@click.argument("target")
@click.option("--icon", default="wallet", show_default=True)
@click.option("--color", default="#3B82F6", show_default=True)
@click.option("--deadline", type=DATE_TYPE, default=None, help="YYYY-MM-DD")
@pass_app
@_handle_errors
def add_goal(app: AppContext, name: str, target: str, icon: str, color: str, deadline) -> None:
    """Create a savings goal."""

    goal = ledger_service.add_goal(
        app.goal_repo,
        member=app.member,
        name=name,
        target_amount=target,
        icon=icon,
        color=color,
        deadline=_as_date(deadline),
    )
    click.echo(f"Goal #{goal.id} created.")


@homefunds.command()
@click.argument("goal_id", type=int)
@click.argument("amount")
@pass_app
@_handle_errors
def contribute(app: AppContext, goal_id: int, amount: str) -> None:
    """Add money to a savings goal."""

    goal = budgeting.contribute(repository=app.goal_repo, goal_id=goal_id, amount=amount)
    progress = budgeting.goal_progress(goal)
    click.echo(
        f"{goal.name}: {format_currency(goal.saved_amount)} of "
        f"{format_currency(goal.target_amount)} ({progress.percent}%)"
    )


@homefunds.command()
@pass_app
@_handle_errors
def profile(app: AppContext) -> None:
    """Show the budget, fixed expenses and savings goals."""

    snap = asyncio.run(dashboard.load_profile(app.stores))
    if snap.budget > 0:
        click.echo(f"Monthly budget: {format_currency(snap.budget)}")
    else:
        click.echo("Monthly budget: not set")

    click.echo(f"Fixed expenses ({format_currency(snap.total_fixed)} per month):")
    if not snap.fixed_expenses:
        click.echo("  none")
    for fixed in snap.fixed_expenses:
        info = get_category_by_id(fixed.category)
        click.echo(
            f"  #{fixed.id} {fixed.name:<20} {format_currency(fixed.amount):>12}  "
            f"day {fixed.day_of_month:<2} {info.name}"
        )

    click.echo("Goals:")
    if not snap.goals:
        click.echo("  none")
    for progress in snap.goals:
        goal = progress.goal
        deadline = f"  by {goal.deadline.isoformat()}" if goal.deadline else ""
        click.echo(
            f"  #{goal.id} {goal.name}: {format_currency(goal.saved_amount)} of "
            f"{format_currency(goal.target_amount)} ({progress.percent}%){deadline}"
        )


@homefunds.command("delete-fixed")
@click.argument("fixed_id", type=int)
@pass_app
@_handle_errors
def delete_fixed(app: AppContext, fixed_id: int) -> None:
    """Delete a fixed expense by id."""

    ledger_service.remove_fixed_expense(app.fixed_expense_repo, fixed_id)
    click.echo(f"Deleted fixed expense #{fixed_id}.")


@homefunds.command("delete-goal")
@click.argument("goal_id", type=int)
@pass_app
@_handle_errors
def delete_goal(app: AppContext, goal_id: int) -> None:
    """Delete a savings goal by id."""

    ledger_service.remove_goal(app.goal_repo, goal_id)
    click.echo(f"Deleted goal #{goal_id}.")


@homefunds.command()
@_period_option
@click.option(
    "--output",
    "output_path",
    type=click.Path(path_type=Path),
    default=None,
    help="CSV destination (defaults to exports/movements-YYYY-MM.csv in the data dir).",
)
@pass_app
@_handle_errors
def export(app: AppContext, period: Period, output_path: Optional[Path]) -> None:
    """Export the month's movements to CSV."""

    movements = asyncio.run(dashboard.load_movements(app.stores, period))
    if output_path is None:
        output_path = Path(app.config.DATA_DIR) / "exports" / f"movements-{period}.csv"
    path = export_csv.export_movements_csv(movements=movements, output_path=output_path)
    click.echo(f"Export written: {path} ({len(movements)} rows)")


def main() -> None:
    homefunds(prog_name="homefunds")


if __name__ == "__main__":  # pragma: no cover
    main()
