"""
Shared fixtures: an in-memory SQLite database behind the app's connection pool
"""

import os

# Must be set before the app (and its limiter) is imported
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.pool import StaticPool

from app.database import Base, ConnectionPool, get_pool
from main import app


def make_engine():
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        isolation_level="AUTOCOMMIT",
    )


@pytest.fixture
def pool():
    """Pool over a fresh database with the orders, customer and student tables"""
    engine = make_engine()
    Base.metadata.create_all(bind=engine)
    pool = ConnectionPool(engine)
    yield pool
    pool.dispose()


@pytest.fixture
def empty_pool():
    """Pool over a database with no tables, so every query fails"""
    pool = ConnectionPool(make_engine())
    yield pool
    pool.dispose()


@pytest.fixture
def client(pool):
    app.dependency_overrides[get_pool] = lambda: pool
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def broken_client(empty_pool):
    app.dependency_overrides[get_pool] = lambda: empty_pool
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def insert_order(pool):
    """Insert an order row directly, bypassing the API"""
    def _insert(ord_num, **overrides):
        row = {
            "ORD_NUM": ord_num,
            "ORD_AMOUNT": 1000.0,
            "ADVANCE_AMOUNT": 100.0,
            "ORD_DATE": "2025-01-15",
            "CUST_CODE": "C00001",
            "AGENT_CODE": "A001",
            "ORD_DESCRIPTION": "Seeded order",
        }
        row.update(overrides)
        with pool.engine.connect() as conn:
            conn.execute(
                text(
                    "INSERT INTO orders (ORD_NUM, ORD_AMOUNT, ADVANCE_AMOUNT, ORD_DATE, CUST_CODE, "
                    "AGENT_CODE, ORD_DESCRIPTION) VALUES (:ORD_NUM, :ORD_AMOUNT, :ADVANCE_AMOUNT, "
                    ":ORD_DATE, :CUST_CODE, :AGENT_CODE, :ORD_DESCRIPTION)"
                ),
                row,
            )
        return row
    return _insert


@pytest.fixture
def fetch_order(pool):
    """Read an order row directly, or None"""
    def _fetch(ord_num):
        with pool.engine.connect() as conn:
            row = conn.execute(
                text("SELECT * FROM orders WHERE ORD_NUM = :ORD_NUM"), {"ORD_NUM": ord_num}
            ).first()
        return dict(row._mapping) if row else None
    return _fetch


@pytest.fixture
def valid_order():
    return {
        "ORD_AMOUNT": 5000,
        "ADVANCE_AMOUNT": 1000,
        "ORD_DATE": "2025-09-28",
        "CUST_CODE": "C00001",
        "AGENT_CODE": "A003",
        "ORD_DESCRIPTION": "New order",
    }
