"""End-to-end tests of the click CLI against a temporary data directory."""

import logging
import re

import pytest
from click.testing import CliRunner

from fut75.infrastructure.cli.main import cli


@pytest.fixture
def run(tmp_path, monkeypatch):
    monkeypatch.setenv("FUT75_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("FUT75_WHATSAPP_NUMBER", "5575900000000")
    runner = CliRunner()

    def invoke(*args, input=None):
        return runner.invoke(cli, list(args), input=input)

    yield invoke
    # Handlers were bound to the runner's captured stderr.
    logging.getLogger().handlers = []


def _order_id(output: str) -> str:
    return re.search(r"Order ([0-9a-f]{32})", output).group(1)


@pytest.fixture
def catalog(run):
    assert run("category", "add", "Seleções").exit_code == 0
    result = run(
        "product", "register", "--name", "Brasil Home", "--category", "Seleções",
        "--price", "149.90", "--stock", "10", "--allocation", "P:4,M:6",
    )
    assert result.exit_code == 0, result.output
    return run


class TestProductCommands:

    def test_register_prints_summary(self, catalog):
        result = catalog("product", "list")
        assert "Brasil Home" in result.output
        assert "R$ 149,90" in result.output

    def test_register_mismatch_fails(self, catalog):
        result = catalog(
            "product", "register", "--name", "Argentina Away", "--category", "Seleções",
            "--price", "129.90", "--stock", "10", "--allocation", "P:4,M:5",
        )
        assert result.exit_code != 0
        assert "remaining 1" in result.output

    def test_bad_allocation_format(self, catalog):
        result = catalog(
            "product", "register", "--name", "X", "--category", "Seleções",
            "--price", "1", "--stock", "1", "--allocation", "P4",
        )
        assert result.exit_code == 2
        assert "Invalid allocation" in result.output

    def test_delete_requires_confirmation(self, catalog):
        assert catalog("product", "delete", "--id", "1", input="n\n").exit_code != 0
        assert catalog("product", "delete", "--id", "1", "--yes").exit_code == 0
        assert "No products found." in catalog("product", "list").output


class TestStockCommands:

    def test_set_and_show(self, catalog):
        assert catalog("stock", "set", "--id", "1", "--size", "G", "--quantity", "2").exit_code == 0
        result = catalog("stock", "show")
        assert "12 un." in result.output
        assert "G:2" in result.output

    def test_negative_stock_rejected(self, catalog):
        result = catalog("stock", "set", "--id", "1", "--size", "M", "--quantity", "-1")
        assert result.exit_code == 1
        assert "cannot be negative" in result.output


class TestOrderLifecycle:

    def test_pending_confirm_and_partial_return(self, catalog):
        created = catalog("order", "create", "--items", "Brasil Home:M:5", "--customer", "Ana")
        assert created.exit_code == 0, created.output
        order_id = _order_id(created.output)
        assert "status=pending" in created.output

        assert "completed, stock updated" in catalog("order", "confirm", "--id", order_id).output
        assert "M:1" in catalog("stock", "show").output

        result = catalog("order", "return", "--id", order_id, "--partial", "--items", "Brasil Home:M:2")
        assert "partially returned" in result.output
        result = catalog("order", "return", "--id", order_id, "--partial", "--items", "Brasil Home:M:3")
        assert f"Order {order_id} returned" in result.output
        assert "M:6" in catalog("stock", "show").output

    def test_debit_and_oversell(self, catalog):
        result = catalog("order", "create", "--items", "Brasil Home:M:7", "--debit")
        assert result.exit_code == 1
        assert "need 7, have 6" in result.output
        assert "No orders found." in catalog("order", "list").output

    def test_cancel_then_confirm_fails(self, catalog):
        order_id = _order_id(catalog("order", "create", "--items", "Brasil Home:P:1").output)
        assert "cancelled" in catalog("order", "cancel", "--id", order_id).output
        result = catalog("order", "confirm", "--id", order_id)
        assert result.exit_code == 1
        assert "expected pending" in result.output

    def test_partial_return_requires_items(self, catalog):
        result = catalog("order", "return", "--id", "x", "--partial")
        assert result.exit_code == 1
        assert "--partial requires --items" in result.output

    def test_checkout_prints_message_and_link(self, catalog):
        result = catalog(
            "order", "checkout", "--items", "Brasil Home:M:2",
            "--customer", "Ana", "--phone", "75981284738",
        )
        assert result.exit_code == 0, result.output
        assert "Telefone: (75) 98128-4738" in result.output
        assert "https://wa.me/5575900000000?text=" in result.output
        assert "recorded as pending" in result.output

        listed = catalog("order", "list", "--status", "pending")
        assert "Ana" in listed.output

    def test_show_missing_order(self, catalog):
        result = catalog("order", "show", "--id", "nope")
        assert result.exit_code == 1
        assert "Order nope not found" in result.output

    def test_bad_item_format(self, catalog):
        result = catalog("order", "create", "--items", "Brasil Home")
        assert result.exit_code == 2
        assert "Invalid item format" in result.output
