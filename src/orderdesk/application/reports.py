"""Application services: read-only sales reports.

Sales figures count Completed orders only; the status breakdown covers
every order.  All totals are canonical-currency amounts taken from the
persisted ``grand_total`` of each order, so reports never recompute an
order's history.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from orderdesk.domain.currency import convert
from orderdesk.domain.financials import round_cents as _round
from orderdesk.domain.model.order import Order, OrderStatus
from orderdesk.domain.repository.customer_repository import CustomerRepository
from orderdesk.domain.repository.order_repository import OrderRepository

TOP_N = 10
ZERO = Decimal("0")


@dataclass(frozen=True)
class StatusSalesLine:
    status: str
    status_label: str
    count: int
    total: Decimal


@dataclass(frozen=True)
class SalesLine:
    name: str
    total: Decimal


@dataclass(frozen=True)
class ProductSalesLine:
    name: str
    quantity: Decimal
    total: Decimal


@dataclass(frozen=True)
class StatCard:
    """Count and totals for one group of orders on the dashboard."""

    count: int
    grand_total: Decimal
    currency_totals: dict[str, Decimal]


@dataclass(frozen=True)
class DashboardSummary:
    quotations: StatCard
    open_orders: StatCard
    delivered: StatCard
    delivered_pending_payment: StatCard
    completed: StatCard
    customer_count: int


class _ReportHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def _orders(self, date_from: date | None, date_to: date | None) -> list[Order]:
        return [
            o
            for o in self._order_repo.list_all()
            if (date_from is None or o.date >= date_from)
            and (date_to is None or o.date <= date_to)
        ]

    def _completed(self, date_from: date | None, date_to: date | None) -> list[Order]:
        return [
            o for o in self._orders(date_from, date_to) if o.status is OrderStatus.COMPLETED
        ]


class SalesByStatusHandler(_ReportHandler):

    def handle(
        self, date_from: date | None = None, date_to: date | None = None
    ) -> list[StatusSalesLine]:
        counts: dict[OrderStatus, int] = defaultdict(int)
        totals: dict[OrderStatus, Decimal] = defaultdict(lambda: ZERO)
        for order in self._orders(date_from, date_to):
            counts[order.status] += 1
            totals[order.status] += order.grand_total
        return [
            StatusSalesLine(
                status=status.value,
                status_label=status.label,
                count=counts[status],
                total=_round(totals[status]),
            )
            for status in OrderStatus
            if counts[status] > 0
        ]


class MonthlySalesHandler(_ReportHandler):

    def handle(
        self, date_from: date | None = None, date_to: date | None = None
    ) -> list[SalesLine]:
        by_month: dict[str, Decimal] = defaultdict(lambda: ZERO)
        for order in self._completed(date_from, date_to):
            by_month[order.date.strftime("%Y-%m")] += order.grand_total
        return [SalesLine(name=m, total=_round(t)) for m, t in sorted(by_month.items())]


class SalesByCustomerHandler(_ReportHandler):

    def handle(
        self, date_from: date | None = None, date_to: date | None = None
    ) -> list[SalesLine]:
        by_customer: dict[str, Decimal] = defaultdict(lambda: ZERO)
        for order in self._completed(date_from, date_to):
            by_customer[order.customer_name_snapshot] += order.grand_total
        lines = [SalesLine(name=n, total=_round(t)) for n, t in by_customer.items()]
        lines.sort(key=lambda line: line.total, reverse=True)
        return lines[:TOP_N]


class SalesByProductHandler(_ReportHandler):
    """Product revenue before order-level discounts and tax."""

    def handle(
        self, date_from: date | None = None, date_to: date | None = None
    ) -> list[ProductSalesLine]:
        quantities: dict[str, Decimal] = defaultdict(lambda: ZERO)
        totals: dict[str, Decimal] = defaultdict(lambda: ZERO)
        for order in self._completed(date_from, date_to):
            for item in order.iter_items():
                quantities[item.name] += item.quantity
                totals[item.name] += item.line_total
        lines = [
            ProductSalesLine(name=name, quantity=quantities[name], total=_round(total))
            for name, total in totals.items()
        ]
        lines.sort(key=lambda line: line.total, reverse=True)
        return lines[:TOP_N]


class DashboardSummaryHandler(_ReportHandler):

    def __init__(
        self,
        order_repo: OrderRepository,
        customer_repo: CustomerRepository,
    ) -> None:
        super().__init__(order_repo)
        self._customer_repo = customer_repo

    def handle(self) -> DashboardSummary:
        orders = self._order_repo.list_all()

        def card(*statuses: OrderStatus) -> StatCard:
            return _stat_card(o for o in orders if o.status in statuses)

        return DashboardSummary(
            quotations=card(OrderStatus.QUOTATION),
            open_orders=card(OrderStatus.PENDING, OrderStatus.PREPARING),
            delivered=card(OrderStatus.DELIVERED),
            delivered_pending_payment=card(OrderStatus.DELIVERED_PENDING_PAYMENT),
            completed=card(OrderStatus.COMPLETED),
            customer_count=len(self._customer_repo.list_all()),
        )


def _stat_card(orders: Iterable[Order]) -> StatCard:
    """Totals per order currency use each order's own rate snapshot."""
    count = 0
    grand_total = ZERO
    per_currency: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for order in orders:
        count += 1
        grand_total += order.grand_total
        per_currency[order.currency.value] += convert(
            order.grand_total, order.currency, order.exchange_rates_snapshot
        )
    return StatCard(
        count=count,
        grand_total=_round(grand_total),
        currency_totals={c: _round(t) for c, t in per_currency.items()},
    )
