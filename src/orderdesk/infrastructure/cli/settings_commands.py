"""CLI commands for global settings: rates, currency, units, suggestions, company."""

from __future__ import annotations

import click

from orderdesk.application.manage_settings import (
    CompanyInfoHandler,
    DisplayCurrencyHandler,
    ExchangeRatesHandler,
    ProductUnitsHandler,
)
from orderdesk.application.suggestions import SuggestionIndex
from orderdesk.domain.exceptions import DomainException
from orderdesk.domain.model.value_objects import Currency
from orderdesk.infrastructure.cli.context import CliContext


@click.command("rates")
@click.option("--usd", default=None, help="New rate: 1 USD in TRY.")
@click.option("--eur", default=None, help="New rate: 1 EUR in TRY.")
@click.pass_obj
def settings_rates(obj: CliContext, usd: str | None, eur: str | None) -> None:
    """Show or set the global exchange rates.

    Existing orders keep the rates they were saved with.
    """
    handler = ExchangeRatesHandler(settings_repo=obj.settings_repository())

    try:
        rates = handler.current()
        if usd is not None or eur is not None:
            rates = handler.handle(
                usd if usd is not None else rates.usd,
                eur if eur is not None else rates.eur,
            )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"1 USD = {rates.usd} TRY")
    click.echo(f"1 EUR = {rates.eur} TRY")


@click.command("company")
@click.option("--name", default=None, help="Company name.")
@click.option("--email", default=None, help="Contact e-mail; empty string clears it.")
@click.option("--phone", default=None, help="Contact phone; empty string clears it.")
@click.option("--address", default=None, help="Postal address; empty string clears it.")
@click.pass_obj
def settings_company(obj: CliContext, name: str | None, email: str | None,
                     phone: str | None, address: str | None) -> None:
    """Show or set the company details printed on orders."""
    handler = CompanyInfoHandler(settings_repo=obj.settings_repository())

    try:
        if any(v is not None for v in (name, email, phone, address)):
            info = handler.handle(name=name, email=email, phone=phone, address=address)
        else:
            info = handler.current()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Name:    {info.name}")
    click.echo(f"E-mail:  {info.email or '-'}")
    click.echo(f"Phone:   {info.phone or '-'}")
    click.echo(f"Address: {info.address or '-'}")


@click.command("currency")
@click.argument("code", required=False,
                type=click.Choice([c.value for c in Currency], case_sensitive=False))
@click.pass_obj
def settings_currency(obj: CliContext, code: str | None) -> None:
    """Show or set the display currency."""
    handler = DisplayCurrencyHandler(settings_repo=obj.settings_repository())

    try:
        currency = handler.handle(code) if code else handler.current()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Display currency: {currency.value}")


@click.command("units")
@click.option("--add", "to_add", default=None, help="Unit to add.")
@click.option("--remove", "to_remove", default=None, help="Unit to remove.")
@click.pass_obj
def settings_units(obj: CliContext, to_add: str | None, to_remove: str | None) -> None:
    """Show or edit the unit vocabulary."""
    handler = ProductUnitsHandler(settings_repo=obj.settings_repository())

    try:
        if to_add is not None:
            handler.add_unit(to_add)
        if to_remove is not None:
            handler.remove_unit(to_remove)
        units = handler.list_units()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(", ".join(units) if units else "No units defined.")


@click.command("suggestions")
@click.option("--descriptions", is_flag=True, default=False,
              help="Show description suggestions instead of names.")
@click.pass_obj
def settings_suggestions(obj: CliContext, descriptions: bool) -> None:
    """List remembered product names (or descriptions)."""
    index = SuggestionIndex(obj.settings_repository())

    try:
        values = index.description_suggestions() if descriptions else index.name_suggestions()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    for value in values:
        click.echo(value)
