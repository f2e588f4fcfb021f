"""CLI commands for the Customer aggregate."""

from __future__ import annotations

import click

from orderdesk.application.customers import (
    AddCustomerHandler,
    DeleteCustomerHandler,
    ListCustomersHandler,
    ShowCustomerHandler,
    UpdateCustomerHandler,
)
from orderdesk.domain.currency import convert, format_amount
from orderdesk.domain.exceptions import DomainException
from orderdesk.domain.model.value_objects import Currency
from orderdesk.infrastructure.cli.context import CliContext
from orderdesk.infrastructure.persistence.codecs import rates_from_raw


@click.command("add")
@click.option("--name", required=True, help="Customer name.")
@click.option("--phone", default=None)
@click.option("--email", default=None)
@click.option("--address", default=None)
@click.pass_obj
def customer_add(obj: CliContext, name: str, phone, email, address) -> None:
    """Add a new customer."""
    handler = AddCustomerHandler(customer_repo=obj.customer_repository())

    try:
        dto = handler.handle(name=name, phone=phone, email=email, address=address)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Customer '{dto.name}' added  (id={dto.id})")


@click.command("update")
@click.option("--id", "customer_id", required=True, help="Customer ID.")
@click.option("--name", required=True, help="Customer name.")
@click.option("--phone", default=None)
@click.option("--email", default=None)
@click.option("--address", default=None)
@click.pass_obj
def customer_update(obj: CliContext, customer_id: str, name: str, phone, email, address) -> None:
    """Update a customer's details (existing orders keep their old name)."""
    handler = UpdateCustomerHandler(customer_repo=obj.customer_repository())

    try:
        dto = handler.handle(customer_id, name=name, phone=phone, email=email, address=address)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Customer {dto.id} updated.")


@click.command("delete")
@click.option("--id", "customer_id", required=True, help="Customer ID.")
@click.pass_obj
def customer_delete(obj: CliContext, customer_id: str) -> None:
    """Delete a customer (their orders are kept)."""
    handler = DeleteCustomerHandler(customer_repo=obj.customer_repository())

    try:
        handler.handle(customer_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Customer {customer_id} deleted.")


@click.command("list")
@click.pass_obj
def customer_list(obj: CliContext) -> None:
    """List all customers."""
    try:
        customers = ListCustomersHandler(customer_repo=obj.customer_repository()).handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not customers:
        click.echo("No customers found.")
        return

    click.echo(f"{'ID':<34} {'Name':<24} {'Phone':<16} {'Email'}")
    click.echo("-" * 90)
    for c in customers:
        click.echo(f"{c.id:<34} {c.name:<24} {c.phone or '':<16} {c.email or ''}")


@click.command("show")
@click.option("--id", "customer_id", required=True, help="Customer ID.")
@click.pass_obj
def customer_show(obj: CliContext, customer_id: str) -> None:
    """Show a customer and their orders."""
    handler = ShowCustomerHandler(
        customer_repo=obj.customer_repository(),
        order_repo=obj.order_repository(),
    )

    try:
        detail = handler.handle(customer_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    c = detail.customer
    click.echo(f"{c.name}  (id={c.id})")
    for label, value in (("Phone", c.phone), ("Email", c.email), ("Address", c.address)):
        if value:
            click.echo(f"{label + ':':<9}{value}")
    click.echo(f"Since:   {c.created_at}")
    click.echo()

    if not detail.orders:
        click.echo("No orders.")
        return
    for dto in detail.orders:
        currency = Currency(dto.currency)
        total = format_amount(
            convert(dto.grand_total, currency, rates_from_raw(dto.exchange_rates)), currency
        )
        click.echo(f"  {dto.order_number:<15} {dto.date:<11} {dto.status_label:<32} {total:>16}")
