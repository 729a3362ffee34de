"""Pytest fixtures and configuration.

Provides a sample schema and an in-memory stand-in for the database
executor, plus the connection string for optional Postgres tests.
"""
import sys
from pathlib import Path
import os

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from nl_sql_analyzer.errors import ExecutionError  # noqa: E402
from nl_sql_analyzer.schemas import Column, DatabaseSchema, Table  # noqa: E402


class FakeExecutor:
    """In-memory DatabaseExecutor replacement.

    Records every call; ``rows`` is returned from execute() unless
    ``execute_error`` is set, in which case ExecutionError is raised.
    """

    def __init__(self, schema, rows=None, connected=True, execute_error=None, schema_error=None):
        self.schema = schema
        self.rows = rows if rows is not None else []
        self.connected = connected
        self.execute_error = execute_error
        self.schema_error = schema_error
        self.calls = []
        self.executed = []

    def test_connection(self, connection_string):
        self.calls.append("test_connection")
        return self.connected

    def fetch_schema(self, connection_string):
        self.calls.append("fetch_schema")
        if self.schema_error:
            raise self.schema_error
        return self.schema

    def execute(self, connection_string, query):
        self.calls.append("execute")
        self.executed.append(query)
        if self.execute_error:
            raise ExecutionError(self.execute_error)
        return self.rows


@pytest.fixture
def orders_schema() -> DatabaseSchema:
    """Orders(OrderId int PK, Total decimal, CreatedAt datetime)."""
    return DatabaseSchema(
        tables=(
            Table(
                table_name="Orders",
                columns=(
                    Column(column_name="OrderId", data_type="int", is_nullable=False, is_primary_key=True),
                    Column(column_name="Total", data_type="decimal", is_nullable=True),
                    Column(column_name="CreatedAt", data_type="datetime", is_nullable=False),
                ),
            ),
        )
    )


@pytest.fixture
def shop_schema() -> DatabaseSchema:
    """Two tables, columns deliberately not in alphabetical order."""
    return DatabaseSchema(
        tables=(
            Table(
                table_name="customers",
                columns=(
                    Column(column_name="id", data_type="integer", is_nullable=False, is_primary_key=True),
                    Column(column_name="name", data_type="text", is_nullable=False),
                    Column(column_name="city", data_type="text", is_nullable=True),
                ),
            ),
            Table(
                table_name="accounts",
                columns=(
                    Column(column_name="number", data_type="character varying", is_nullable=False, is_primary_key=True),
                    Column(column_name="balance", data_type="numeric", is_nullable=True),
                ),
            ),
        )
    )


@pytest.fixture
def fake_executor(orders_schema) -> FakeExecutor:
    return FakeExecutor(orders_schema, rows=[{"N": 3}])


@pytest.fixture(scope="session")
def database_url() -> str:
    """Postgres conninfo for integration tests; skips when unset."""
    url = os.getenv("TEST_DATABASE_URL")
    if not url:
        pytest.skip("TEST_DATABASE_URL not set - integration tests need a live Postgres")
    return url


@pytest.fixture
def make_executor(orders_schema):
    """Factory for FakeExecutor instances with custom behavior."""
    def _make(schema=None, **kwargs) -> FakeExecutor:
        return FakeExecutor(schema or orders_schema, **kwargs)
    return _make
