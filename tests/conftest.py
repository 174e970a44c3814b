"""Shared fixtures: a fresh SQLite database file per test."""

import pytest

from database import Database, OrderRepository, ProductRepository


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'orders.db'}"


@pytest.fixture
def database(database_url):
    db = Database(database_url)
    db.create_schema()
    yield db
    db.drop_schema()
    db.dispose()


@pytest.fixture
def orders(database):
    return OrderRepository(database)


@pytest.fixture
def products(database):
    return ProductRepository(database)
