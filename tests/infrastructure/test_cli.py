"""End-to-end CLI tests against the JSON store in a temporary directory."""

import json
import re

import pytest
from click.testing import CliRunner

from stockroom.infrastructure.cli.main import cli


@pytest.fixture
def run(tmp_path):
    runner = CliRunner()
    env = {"STOCKROOM_DATA_DIR": str(tmp_path), "STOCKROOM_STORE": "json", "STOCKROOM_LOG_LEVEL": "WARNING"}

    def invoke(*args):
        return runner.invoke(cli, list(args), env=env)

    return invoke


def _added_id(output: str) -> str:
    return re.search(r"Product (\S+) 'Widget' added", output).group(1)


def _created_order_id(output: str) -> str:
    return re.search(r"Order (\S+) created", output).group(1)


def test_product_lifecycle(run, tmp_path):
    result = run("product", "add", "--name", "Widget", "--price", "10.00", "--stock", "5", "--category", "tools")
    assert result.exit_code == 0, result.output
    product_id = _added_id(result.output)

    listed = run("product", "list")
    assert "Widget" in listed.output
    assert product_id in listed.output

    updated = run("product", "update", "--id", product_id, "--price", "12.50")
    assert updated.exit_code == 0, updated.output
    assert "$12.50" in updated.output

    (doc,) = json.loads((tmp_path / "products.json").read_text())
    assert doc["price"] == "12.50"
    assert doc["stock"] == 5

    assert run("product", "delete", "--id", product_id).exit_code == 0
    assert run("product", "delete", "--id", product_id).exit_code == 0
    assert "No products found." in run("product", "list").output


def test_order_flow(run):
    product_id = _added_id(run("product", "add", "--name", "Widget", "--price", "10", "--stock", "5").output)

    created = run("order", "create", "--product-id", product_id, "--quantity", "3")
    assert created.exit_code == 0, created.output
    assert "$30.00" in created.output
    order_id = _created_order_id(created.output)

    assert "Stock:    2" in run("product", "show", "--id", product_id).output

    rejected = run("order", "create", "--product-id", product_id, "--quantity", "3")
    assert rejected.exit_code == 1
    assert "Insufficient stock" in rejected.output

    shipped = run("order", "update", "--id", order_id, "--status", "shipped")
    assert shipped.exit_code == 0, shipped.output
    assert "status=Shipped" in shipped.output

    back = run("order", "update", "--id", order_id, "--status", "Pending")
    assert back.exit_code == 1
    assert "Cannot move order" in back.output


def test_unknown_product_order(run):
    result = run("order", "create", "--product-id", "nope", "--quantity", "1")
    assert result.exit_code == 1
    assert "Invalid product ID" in result.output


def test_show_missing_order(run):
    result = run("order", "show", "--id", "missing")
    assert result.exit_code == 1
    assert "not found" in result.output


def test_bad_store_setting(tmp_path):
    result = CliRunner().invoke(cli, ["product", "list"], env={"STOCKROOM_STORE": "redis"})
    assert result.exit_code == 1
    assert "Unknown store" in result.output
