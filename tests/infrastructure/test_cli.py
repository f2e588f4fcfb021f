"""End-to-end tests for the click command line against a temporary data dir."""

import json
import re

import pytest
from click.testing import CliRunner

from orderdesk.infrastructure.cli.main import cli


@pytest.fixture
def run(tmp_path):
    runner = CliRunner()

    def invoke(*args):
        return runner.invoke(
            cli, ["--data-dir", str(tmp_path / "data"), "--log-level", "WARNING", *args]
        )

    return invoke


def _add_customer(run, name: str = "Ayşe Yılmaz") -> str:
    result = run("customer", "add", "--name", name)
    assert result.exit_code == 0, result.output
    return re.search(r"id=(\w+)", result.output).group(1)


def _write_draft(tmp_path, customer_id: str, **overrides) -> str:
    draft = {
        "customer_id": customer_id,
        "date": "2024-05-01",
        "tax_rate": 10,
        "discounts": [{"kind": "percentage", "value": 10, "description": "Sadakat"}],
        "sections": [
            {"name": "Salon", "items": [
                {"name": "Tül Perde", "quantity": 2, "unit": "M2", "unit_price": 100},
            ]},
        ],
    }
    draft.update(overrides)
    path = tmp_path / "draft.json"
    path.write_text(json.dumps(draft), encoding="utf-8")
    return str(path)


def _create_order(run, tmp_path, customer_id: str, **overrides) -> str:
    result = run("order", "create", "--file", _write_draft(tmp_path, customer_id, **overrides))
    assert result.exit_code == 0, result.output
    return re.search(r"id=(\w+)", result.output).group(1)


class TestOrderCommands:

    def test_create_shows_number_and_total(self, run, tmp_path):
        customer_id = _add_customer(run)
        result = run("order", "create", "--file", _write_draft(tmp_path, customer_id))
        assert result.exit_code == 0, result.output
        assert re.search(r"Order ORD-\d{4}-0001 created", result.output)
        assert "Ayşe Yılmaz" in result.output
        assert "₺198,00" in result.output

    def test_create_invalid_draft(self, run, tmp_path):
        customer_id = _add_customer(run)
        result = run("order", "create", "--file", _write_draft(tmp_path, customer_id, sections=[]))
        assert result.exit_code != 0
        assert "at least one section" in result.output

    def test_create_bad_json(self, run, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{", encoding="utf-8")
        result = run("order", "create", "--file", str(path))
        assert result.exit_code != 0
        assert "Not valid JSON" in result.output

    def test_show_by_id_and_list(self, run, tmp_path):
        customer_id = _add_customer(run)
        order_id = _create_order(run, tmp_path, customer_id)
        shown = run("order", "show", order_id)
        assert shown.exit_code == 0, shown.output
        assert "Teklif" in shown.output
        listed = run("order", "list")
        assert "₺198,00" in listed.output

    def test_update(self, run, tmp_path):
        customer_id = _add_customer(run)
        order_id = _create_order(run, tmp_path, customer_id)
        path = _write_draft(tmp_path, customer_id, discounts=[], tax_rate=None)
        result = run("order", "update", "--id", order_id, "--file", path)
        assert result.exit_code == 0, result.output
        assert "₺200,00" in result.output

    def test_status_single_and_bulk(self, run, tmp_path):
        customer_id = _add_customer(run)
        first = _create_order(run, tmp_path, customer_id)
        second = _create_order(run, tmp_path, customer_id)
        result = run("order", "status", "--id", first, "--to", "Completed")
        assert "1 order(s) set to Tamamlandı." in result.output
        result = run("order", "status", "--id", first, "--id", second, "--to", "Pending")
        assert "2 order(s) set to Beklemede." in result.output
        assert run("order", "list", "--status", "Pending").output.count("Beklemede") == 2
        assert run("order", "list", "--status", "Completed").output.strip() == "No orders found."

    def test_list_filters(self, run, tmp_path):
        ayse = _add_customer(run)
        mehmet = _add_customer(run, "Mehmet Demir")
        _create_order(run, tmp_path, ayse, date="2024-03-01", status="Pending")
        _create_order(run, tmp_path, mehmet, date="2024-04-01", status="Completed")
        _create_order(run, tmp_path, mehmet, date="2024-05-01")

        result = run("order", "list", "--search", "mehmet")
        assert result.exit_code == 0, result.output
        assert result.output.count("Mehmet Demir") == 2
        assert "Ayşe" not in result.output

        result = run("order", "list", "--status", "Pending", "--status", "Completed")
        assert "Beklemede" in result.output and "Tamamlandı" in result.output
        assert "Teklif" not in result.output

        result = run("order", "list", "--from", "2024-04-01", "--to", "2024-04-01")
        assert "2024-04-01" in result.output
        assert "2024-03-01" not in result.output and "2024-05-01" not in result.output

        result = run("order", "list", "--from", "2024-05-01", "--to", "2024-04-01")
        assert result.exit_code != 0

    def test_bulk_status_reports_failures(self, run, tmp_path):
        customer_id = _add_customer(run)
        order_id = _create_order(run, tmp_path, customer_id)
        result = run("order", "status", "--id", order_id, "--id", "ghost", "--to", "Delivered")
        assert result.exit_code != 0
        assert "ghost" in result.output
        assert "Teslim Edildi" in run("order", "show", order_id).output

    def test_delete(self, run, tmp_path):
        customer_id = _add_customer(run)
        order_id = _create_order(run, tmp_path, customer_id)
        assert run("order", "delete", "--id", order_id).exit_code == 0
        assert run("order", "list").output.strip() == "No orders found."
        assert run("order", "delete", "--id", order_id).exit_code != 0


class TestCustomerCommands:

    def test_add_list_show(self, run, tmp_path):
        customer_id = _add_customer(run)
        assert "Ayşe Yılmaz" in run("customer", "list").output
        _create_order(run, tmp_path, customer_id)
        shown = run("customer", "show", "--id", customer_id)
        assert re.search(r"ORD-\d{4}-0001", shown.output)

    def test_add_requires_name(self, run):
        result = run("customer", "add", "--name", " ")
        assert result.exit_code != 0
        assert "Customer name is required" in result.output


class TestSettingsCommands:

    def test_rates(self, run):
        assert "1 USD = 32.50 TRY" in run("settings", "rates").output
        result = run("settings", "rates", "--usd", "33")
        assert "1 USD = 33 TRY" in result.output
        assert "1 EUR = 35.20 TRY" in result.output

    def test_rates_rejects_zero(self, run):
        result = run("settings", "rates", "--eur", "0")
        assert result.exit_code != 0
        assert "greater than zero" in result.output

    def test_currency(self, run):
        assert "Display currency: TRY" in run("settings", "currency").output
        assert "Display currency: USD" in run("settings", "currency", "usd").output

    def test_units(self, run):
        assert run("settings", "units", "--add", "Metre").output.strip() == "Adet, M2, Mtül, Metre"

    def test_company(self, run):
        assert "Name:    Firma Adınız" in run("settings", "company").output
        result = run("settings", "company", "--name", "Perdeci Ltd.", "--email", "")
        assert result.exit_code == 0, result.output
        assert "Name:    Perdeci Ltd." in result.output
        assert "E-mail:  -" in result.output
        assert "Phone:   (000) 000 0000" in result.output

    def test_company_blank_name_rejected(self, run):
        result = run("settings", "company", "--name", " ")
        assert result.exit_code != 0
        assert "Company name is required" in result.output

    def test_company_header_on_orders(self, run, tmp_path):
        run("settings", "company", "--name", "Perdeci Ltd.", "--address", "Kadıköy")
        customer_id = _add_customer(run)
        order_id = _create_order(run, tmp_path, customer_id)
        output = run("order", "show", order_id).output
        assert output.splitlines()[:2] == ["Perdeci Ltd.", "Kadıköy"]

    def test_suggestions_fed_by_orders(self, run, tmp_path):
        customer_id = _add_customer(run)
        _create_order(run, tmp_path, customer_id)
        assert run("settings", "suggestions").output.strip() == "Tül Perde"


class TestReportCommands:

    def test_dashboard_and_sales(self, run, tmp_path):
        customer_id = _add_customer(run)
        order_id = _create_order(run, tmp_path, customer_id)
        run("order", "status", "--id", order_id, "--to", "Completed")
        assert "Ayşe Yılmaz" in run("report", "customers").output
        assert "2024-05" in run("report", "monthly", "--from", "2024-01-01").output
        assert "Tül Perde" in run("report", "products").output
        dashboard = run("report", "dashboard")
        assert dashboard.exit_code == 0, dashboard.output
        assert "Completed" in dashboard.output
