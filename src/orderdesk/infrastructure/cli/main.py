from pathlib import Path

import click

from orderdesk.infrastructure.cli.context import CliContext
from orderdesk.infrastructure.cli.customer_commands import (
    customer_add,
    customer_delete,
    customer_list,
    customer_show,
    customer_update,
)
from orderdesk.infrastructure.cli.order_commands import (
    order_create,
    order_delete,
    order_list,
    order_show,
    order_status,
    order_update,
)
from orderdesk.infrastructure.cli.report_commands import (
    report_customers,
    report_dashboard,
    report_monthly,
    report_products,
    report_status,
)
from orderdesk.infrastructure.cli.settings_commands import (
    settings_company,
    settings_currency,
    settings_rates,
    settings_suggestions,
    settings_units,
)
from orderdesk.infrastructure.config import settings as app_settings
from orderdesk.infrastructure.logging_setup import setup_logging


@click.group()
@click.option("--data-dir", type=click.Path(file_okay=False, path_type=Path), default=None,
              help="Directory for the JSON data files.")
@click.option("--log-level", default=None, help="Logging level (default from ORDERDESK_LOG_LEVEL).")
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None, log_level: str | None) -> None:
    """orderdesk: orders and quotations for a small business."""
    setup_logging((log_level or app_settings.log_level).upper())
    ctx.obj = CliContext(data_dir)


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def customer() -> None:
    """Manage customers."""


@cli.group()
def settings() -> None:
    """Exchange rates, display currency, units and suggestions."""


@cli.group()
def report() -> None:
    """Sales reports."""


# Register subcommands
order.add_command(order_create)
order.add_command(order_delete)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
order.add_command(order_update)
customer.add_command(customer_add)
customer.add_command(customer_delete)
customer.add_command(customer_list)
customer.add_command(customer_show)
customer.add_command(customer_update)
settings.add_command(settings_company)
settings.add_command(settings_currency)
settings.add_command(settings_rates)
settings.add_command(settings_suggestions)
settings.add_command(settings_units)
report.add_command(report_customers)
report.add_command(report_dashboard)
report.add_command(report_monthly)
report.add_command(report_products)
report.add_command(report_status)
