"""CLI commands for the Order aggregate."""

from __future__ import annotations

import json

import click

from orderdesk.application.create_order import CreateOrderHandler
from orderdesk.application.delete_order import DeleteOrderHandler
from orderdesk.application.dto import OrderDTO
from orderdesk.application.show_order import ListOrdersHandler, ShowOrderHandler
from orderdesk.application.update_order import UpdateOrderHandler
from orderdesk.application.update_order_status import (
    BulkUpdateOrderStatusHandler,
    UpdateOrderStatusHandler,
)
from orderdesk.domain.currency import convert, format_amount
from orderdesk.domain.exceptions import DomainException
from orderdesk.domain.model.company import CompanyInfo
from orderdesk.domain.model.order import OrderStatus, parse_status
from orderdesk.domain.model.value_objects import (
    CANONICAL_CURRENCY,
    Currency,
    ExchangeRates,
)
from orderdesk.infrastructure.cli.context import CliContext
from orderdesk.infrastructure.cli.draft_file import draft_from_dict
from orderdesk.infrastructure.persistence.codecs import rates_from_raw

_STATUS_CHOICE = click.Choice([s.value for s in OrderStatus], case_sensitive=False)


def _read_draft(draft_file, customer: str | None):
    try:
        raw = json.load(draft_file)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"Not valid JSON: {exc}", param_hint="--file")
    return draft_from_dict(raw, customer_id=customer)


@click.command("create")
@click.option("--file", "draft_file", required=True, type=click.File("r", encoding="utf-8"),
              help="JSON file describing the order draft.")
@click.option("--customer", default=None, help="Customer ID (overrides the file).")
@click.pass_obj
def order_create(obj: CliContext, draft_file, customer: str | None) -> None:
    """Create a new order or quotation from a draft file."""
    try:
        draft = _read_draft(draft_file, customer)
        handler = CreateOrderHandler(
            order_repo=obj.order_repository(),
            customer_repo=obj.customer_repository(),
            settings_repo=obj.settings_repository(),
            sequence=obj.order_number_sequence(),
        )
        dto = handler.handle(draft)
        company = obj.settings_repository().get_company_info()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_number} created  (id={dto.id}, status={dto.status})")
    _display_order(dto, company=company)


@click.command("update")
@click.option("--id", "order_id", required=True, help="Order ID to update.")
@click.option("--file", "draft_file", required=True, type=click.File("r", encoding="utf-8"),
              help="JSON file describing the new order contents.")
@click.option("--customer", default=None, help="Customer ID (overrides the file).")
@click.pass_obj
def order_update(obj: CliContext, order_id: str, draft_file, customer: str | None) -> None:
    """Replace an order's contents; refreshes its name and rate snapshots."""
    try:
        draft = _read_draft(draft_file, customer)
        handler = UpdateOrderHandler(
            order_repo=obj.order_repository(),
            customer_repo=obj.customer_repository(),
            settings_repo=obj.settings_repository(),
        )
        dto = handler.handle(order_id, draft)
        company = obj.settings_repository().get_company_info()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_number} updated.")
    _display_order(dto, company=company)


def _display_order(dto: OrderDTO, extra_currency: Currency | None = None,
                   extra_rates: ExchangeRates | None = None,
                   company: CompanyInfo | None = None) -> None:
    """Shared formatting for displaying an order."""
    if company is not None:
        click.echo(company.name)
        for line in company.contact_lines():
            click.echo(line)
        click.echo("=" * 60)
    currency = Currency(dto.currency)
    snapshot = rates_from_raw(dto.exchange_rates)

    def money(amount) -> str:
        return format_amount(convert(amount, currency, snapshot), currency)

    click.echo(f"Order {dto.order_number}  (status={dto.status_label})")
    click.echo(f"Customer: {dto.customer_name}")
    click.echo(f"Date:     {dto.date}")
    if currency is not CANONICAL_CURRENCY:
        rate = dto.exchange_rates.get(currency.value)
        click.echo(f"Currency: {currency.value}  (1 {currency.value} = {rate} {CANONICAL_CURRENCY.value})")
    click.echo()

    for section in dto.sections:
        click.echo(f"  [{section.name}]")
        click.echo(f"  {'Product':<24} {'Qty':>8} {'Unit':<6} {'Price':>14} {'Total':>14}")
        click.echo(f"  {'-'*70}")
        for item in section.items:
            click.echo(
                f"  {item.name:<24} {item.quantity:>8} {item.unit:<6} "
                f"{money(item.unit_price):>14} {money(item.line_total):>14}"
            )
            if item.description:
                click.echo(f"    {item.description}")
        click.echo(f"  {'Section total':<56} {money(section.total):>14}")
        click.echo()

    click.echo(f"  {'Items total':<56} {money(dto.items_total):>14}")
    for discount in dto.discounts:
        label = discount.description or "Discount"
        if discount.kind == "percentage":
            label = f"{label} (%{discount.value})"
        click.echo(f"  {label:<56} {'':>14}")
    if dto.discounts:
        click.echo(f"  {'Total discount':<56} {'-' + money(dto.total_discount_amount):>14}")
        click.echo(f"  {'Subtotal':<56} {money(dto.subtotal_after_discounts):>14}")
    if dto.tax_rate is not None and dto.tax_rate > 0:
        click.echo(f"  {f'Tax (%{dto.tax_rate})':<56} {money(dto.tax_amount):>14}")
    click.echo(f"  {'Grand total':<56} {money(dto.grand_total):>14}")

    if currency is not CANONICAL_CURRENCY:
        click.echo(f"  {'Grand total (' + CANONICAL_CURRENCY.value + ')':<56} "
                   f"{format_amount(dto.grand_total, CANONICAL_CURRENCY):>14}")
    if extra_currency is not None and extra_currency not in (currency, CANONICAL_CURRENCY):
        converted = format_amount(convert(dto.grand_total, extra_currency, extra_rates), extra_currency)
        click.echo(f"  {'Grand total (' + extra_currency.value + ', current rate)':<56} {converted:>14}")

    if dto.notes:
        click.echo()
        click.echo(f"Notes: {dto.notes}")


@click.command("show")
@click.argument("reference")
@click.pass_obj
def order_show(obj: CliContext, reference: str) -> None:
    """Show an order by number (ORD-2024-0007) or ID."""
    handler = ShowOrderHandler(order_repo=obj.order_repository())

    try:
        dto = handler.handle(reference)
        settings_repo = obj.settings_repository()
        display_currency = settings_repo.get_display_currency()
        rates = settings_repo.get_exchange_rates()
        company = settings_repo.get_company_info()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto, extra_currency=display_currency, extra_rates=rates,
                   company=company)


@click.command("list")
@click.option("--status", "statuses", type=_STATUS_CHOICE, multiple=True,
              help="Only orders in this status. Repeat for several.")
@click.option("--customer", default=None, help="Only orders for this customer ID.")
@click.option("--search", default=None, help="Match order number or customer name.")
@click.option("--from", "date_from", type=click.DateTime(["%Y-%m-%d"]), default=None,
              help="First order date to include (YYYY-MM-DD).")
@click.option("--to", "date_to", type=click.DateTime(["%Y-%m-%d"]), default=None,
              help="Last order date to include (YYYY-MM-DD).")
@click.pass_obj
def order_list(obj: CliContext, statuses: tuple[str, ...], customer: str | None,
               search: str | None, date_from, date_to) -> None:
    """List orders, newest first."""
    handler = ListOrdersHandler(order_repo=obj.order_repository())
    try:
        orders = handler.handle(
            statuses=[parse_status(s) for s in statuses],
            customer_id=customer,
            search=search,
            date_from=date_from.date() if date_from else None,
            date_to=date_to.date() if date_to else None,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'Number':<15} {'Date':<11} {'Customer':<24} {'Status':<32} {'Total':>16}")
    click.echo("-" * 102)
    for dto in orders:
        currency = Currency(dto.currency)
        total = format_amount(
            convert(dto.grand_total, currency, rates_from_raw(dto.exchange_rates)), currency
        )
        click.echo(
            f"{dto.order_number:<15} {dto.date:<11} {dto.customer_name:<24} "
            f"{dto.status_label:<32} {total:>16}"
        )


@click.command("delete")
@click.option("--id", "order_id", required=True, help="Order ID to delete.")
@click.pass_obj
def order_delete(obj: CliContext, order_id: str) -> None:
    """Delete an order."""
    handler = DeleteOrderHandler(order_repo=obj.order_repository())

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order_id} deleted.")


@click.command("status")
@click.option("--id", "order_ids", required=True, multiple=True,
              help="Order ID; repeat to change several orders at once.")
@click.option("--to", "status", required=True, type=_STATUS_CHOICE, help="New status.")
@click.pass_obj
def order_status(obj: CliContext, order_ids: tuple[str, ...], status: str) -> None:
    """Change the status of one or more orders."""
    repo = obj.order_repository()

    try:
        if len(order_ids) == 1:
            UpdateOrderStatusHandler(repo).handle(order_ids[0], status)
            updated = list(order_ids)
        else:
            updated = BulkUpdateOrderStatusHandler(repo).handle(list(order_ids), status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    new_status = parse_status(status)
    click.echo(f"{len(updated)} order(s) set to {new_status.label}.")
