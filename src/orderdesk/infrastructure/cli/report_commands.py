"""CLI commands for sales reports."""

from __future__ import annotations

import click

from orderdesk.application.reports import (
    DashboardSummaryHandler,
    MonthlySalesHandler,
    SalesByCustomerHandler,
    SalesByProductHandler,
    SalesByStatusHandler,
    StatCard,
)
from orderdesk.domain.currency import format_amount
from orderdesk.domain.exceptions import DomainException
from orderdesk.domain.model.value_objects import CANONICAL_CURRENCY, Currency
from orderdesk.infrastructure.cli.context import CliContext

_date_from = click.option("--from", "date_from", type=click.DateTime(["%Y-%m-%d"]),
                          default=None, help="First day to include (YYYY-MM-DD).")
_date_to = click.option("--to", "date_to", type=click.DateTime(["%Y-%m-%d"]),
                        default=None, help="Last day to include (YYYY-MM-DD).")


def _day(value):
    return value.date() if value is not None else None


def _tl(amount) -> str:
    return format_amount(amount, CANONICAL_CURRENCY)


@click.command("status")
@_date_from
@_date_to
@click.pass_obj
def report_status(obj: CliContext, date_from, date_to) -> None:
    """Order count and value per status."""
    try:
        lines = SalesByStatusHandler(obj.order_repository()).handle(_day(date_from), _day(date_to))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not lines:
        click.echo("No orders in range.")
        return
    for line in lines:
        click.echo(f"{line.status_label:<32} {line.count:>5} {_tl(line.total):>18}")


@click.command("monthly")
@_date_from
@_date_to
@click.pass_obj
def report_monthly(obj: CliContext, date_from, date_to) -> None:
    """Completed sales per month."""
    try:
        lines = MonthlySalesHandler(obj.order_repository()).handle(_day(date_from), _day(date_to))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not lines:
        click.echo("No completed orders in range.")
        return
    for line in lines:
        click.echo(f"{line.name:<10} {_tl(line.total):>18}")


@click.command("customers")
@_date_from
@_date_to
@click.pass_obj
def report_customers(obj: CliContext, date_from, date_to) -> None:
    """Top customers by completed sales."""
    try:
        lines = SalesByCustomerHandler(obj.order_repository()).handle(_day(date_from), _day(date_to))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not lines:
        click.echo("No completed orders in range.")
        return
    for line in lines:
        click.echo(f"{line.name:<32} {_tl(line.total):>18}")


@click.command("products")
@_date_from
@_date_to
@click.pass_obj
def report_products(obj: CliContext, date_from, date_to) -> None:
    """Top products by completed sales (before discounts and tax)."""
    try:
        lines = SalesByProductHandler(obj.order_repository()).handle(_day(date_from), _day(date_to))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not lines:
        click.echo("No completed orders in range.")
        return
    for line in lines:
        click.echo(f"{line.name:<32} {line.quantity:>10} {_tl(line.total):>18}")


@click.command("dashboard")
@click.pass_obj
def report_dashboard(obj: CliContext) -> None:
    """Summary of quotations, open, delivered and completed orders."""
    handler = DashboardSummaryHandler(obj.order_repository(), obj.customer_repository())
    try:
        summary = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    def show(title: str, card: StatCard) -> None:
        per_currency = ", ".join(
            format_amount(total, Currency(code)) for code, total in card.currency_totals.items()
        )
        click.echo(f"{title:<28} {card.count:>5} {_tl(card.grand_total):>18}  {per_currency}")

    show("Quotations", summary.quotations)
    show("Open (pending/preparing)", summary.open_orders)
    show("Delivered", summary.delivered)
    show("Delivered, awaiting payment", summary.delivered_pending_payment)
    show("Completed", summary.completed)
    click.echo(f"{'Customers':<28} {summary.customer_count:>5}")
