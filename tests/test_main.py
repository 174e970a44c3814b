"""
Tests for the command line entry point.
"""

import json

import pytest

from initialize_database import SAMPLE_ORDERS, SAMPLE_PRODUCTS
from main import build_parser, main

SEEDED_PRODUCTS = sum(len(o["products"]) for o in SAMPLE_ORDERS) + len(SAMPLE_PRODUCTS)


@pytest.fixture
def seeded_url(database_url):
    assert main(["--database-url", database_url, "init", "--seed"]) == 0
    return database_url


def run(url, *args):
    return main(["--database-url", url, *args])


class TestCommands:
    """Tests for each subcommand against a seeded database."""

    def test_init_prints_location(self, database_url, capsys):
        assert run(database_url, "init") == 0
        assert "Database ready" in capsys.readouterr().out

    def test_count(self, seeded_url, capsys):
        capsys.readouterr()
        assert run(seeded_url, "count") == 0
        out = capsys.readouterr().out
        assert f"orders: {len(SAMPLE_ORDERS)}" in out
        assert f"products: {SEEDED_PRODUCTS}" in out

    def test_seed_is_not_repeated(self, seeded_url, capsys):
        assert run(seeded_url, "init", "--seed") == 0
        capsys.readouterr()
        run(seeded_url, "count")
        assert f"orders: {len(SAMPLE_ORDERS)}" in capsys.readouterr().out

    def test_show_order(self, seeded_url, capsys):
        capsys.readouterr()
        assert run(seeded_url, "show", "order", "1") == 0
        data = json.loads(capsys.readouterr().out)
        assert data["customer_name"] == SAMPLE_ORDERS[0]["customer_name"]
        assert data["total"] == SAMPLE_ORDERS[0]["total"]
        assert [p["name"] for p in data["products"]] == [
            p["name"] for p in SAMPLE_ORDERS[0]["products"]
        ]

    def test_show_missing(self, seeded_url, capsys):
        capsys.readouterr()
        assert run(seeded_url, "show", "product", "999") == 1
        assert "Product 999 not found" in capsys.readouterr().out

    def test_list_products(self, seeded_url, capsys):
        capsys.readouterr()
        assert run(seeded_url, "list", "products") == 0
        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == SEEDED_PRODUCTS
        assert json.loads(lines[-1])["order_id"] is None

    def test_list_orders_page(self, seeded_url, capsys):
        capsys.readouterr()
        assert run(seeded_url, "list", "orders", "--page", "1", "--size", "1") == 0
        data = json.loads(capsys.readouterr().out)
        assert data["page"] == 1
        assert data["total_elements"] == len(SAMPLE_ORDERS)
        assert data["total_pages"] == len(SAMPLE_ORDERS)
        assert data["content"][0]["customer_name"] == SAMPLE_ORDERS[1]["customer_name"]

    def test_list_bad_page_size(self, seeded_url, capsys):
        assert run(seeded_url, "list", "orders", "--size", "0") == 1
        assert "Page size" in capsys.readouterr().out

    def test_list_page_without_size(self, seeded_url, capsys):
        assert run(seeded_url, "list", "orders", "--page", "1") == 1
        assert "without a page size" in capsys.readouterr().out

    def test_delete_order_cascades(self, seeded_url, capsys):
        assert run(seeded_url, "delete", "order", "1") == 0
        assert run(seeded_url, "delete", "order", "1") == 1
        capsys.readouterr()
        run(seeded_url, "count")
        out = capsys.readouterr().out
        removed = len(SAMPLE_ORDERS[0]["products"])
        assert f"products: {SEEDED_PRODUCTS - removed}" in out


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])
