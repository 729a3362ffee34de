"""Database executor for Postgres.

Each operation opens its own connection from the caller-supplied
connection descriptor (a libpq conninfo string or URL) and closes it on
every exit path. The descriptor is a credential and is never logged.
"""
import logging
from contextlib import contextmanager
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Generator

import psycopg
from psycopg.rows import dict_row

from .errors import ConnectivityError, ExecutionError
from .schemas import Column, DatabaseSchema, Row, RowValue, Table

logger = logging.getLogger(__name__)

TABLES_QUERY = """
    SELECT table_schema, table_name
    FROM information_schema.tables
    WHERE table_type = 'BASE TABLE'
      AND table_schema NOT IN ('pg_catalog', 'information_schema')
    ORDER BY table_schema, table_name
"""

COLUMNS_QUERY = """
    SELECT
        c.column_name,
        c.data_type,
        c.is_nullable,
        CASE WHEN pk.column_name IS NOT NULL THEN 1 ELSE 0 END AS is_primary_key
    FROM information_schema.columns c
    LEFT JOIN (
        SELECT ku.table_schema, ku.table_name, ku.column_name
        FROM information_schema.table_constraints tc
        JOIN information_schema.key_column_usage ku
            ON tc.constraint_name = ku.constraint_name
           AND tc.constraint_schema = ku.constraint_schema
           AND tc.table_name = ku.table_name
        WHERE tc.constraint_type = 'PRIMARY KEY'
    ) pk ON c.table_schema = pk.table_schema
        AND c.table_name = pk.table_name
        AND c.column_name = pk.column_name
    WHERE c.table_schema = %s AND c.table_name = %s
    ORDER BY c.ordinal_position
"""

DEFAULT_SCHEMA = "public"


def to_row_value(value: Any) -> RowValue:
    """Normalize a driver value into the scalar set rows may carry.

    Decimal becomes float; types outside the scalar set become str.
    """
    if value is None or isinstance(value, (bool, int, float, str, datetime, date, time)):
        return value
    if isinstance(value, Decimal):
        return float(value)
    return str(value)


def qualified_table_name(table_schema: str, table_name: str) -> str:
    if table_schema == DEFAULT_SCHEMA:
        return table_name
    return f"{table_schema}.{table_name}"


class DatabaseExecutor:
    """Runs schema introspection and arbitrary SQL against Postgres.

    Stateless apart from connect options, so one instance may be shared
    across concurrent requests.
    """

    def __init__(self, connect_timeout: int = 10):
        self._connect_timeout = connect_timeout

    @contextmanager
    def get_connection(self, connection_string: str) -> Generator[psycopg.Connection, None, None]:
        """Open a connection as a context manager.

        Usage:
            with executor.get_connection(conninfo) as conn:
                with conn.cursor() as cur:
                    cur.execute("SELECT ...")

        Raises:
            ConnectivityError: If the connection cannot be opened
        """
        try:
            conn = psycopg.connect(connection_string, connect_timeout=self._connect_timeout)
        except psycopg.Error as e:
            raise ConnectivityError(f"Failed to connect to database: {e}") from e
        try:
            yield conn
        finally:
            conn.close()

    def test_connection(self, connection_string: str) -> bool:
        """Test if a connection can be opened and queried.

        Returns:
            True if connection succeeds, False otherwise. Never raises.
        """
        try:
            with self.get_connection(connection_string) as conn:
                with conn.cursor() as cur:
                    cur.execute("SELECT 1")
                    cur.fetchone()
            return True
        except Exception as e:
            logger.warning("Connection test failed: %s", type(e).__name__)
            return False

    def fetch_schema(self, connection_string: str) -> DatabaseSchema:
        """Introspect all base tables with their columns.

        Tables are ordered by schema then name; columns by ordinal position.

        Raises:
            ConnectivityError: If the connection cannot be opened
            ExecutionError: If an introspection query fails
        """
        with self.get_connection(connection_string) as conn:
            try:
                with conn.cursor() as cur:
                    cur.execute(TABLES_QUERY)
                    table_refs = cur.fetchall()

                    tables = []
                    for table_schema, table_name in table_refs:
                        cur.execute(COLUMNS_QUERY, (table_schema, table_name))
                        columns = [
                            Column(
                                column_name=column_name,
                                data_type=data_type,
                                is_nullable=is_nullable == "YES",
                                is_primary_key=is_primary_key == 1,
                            )
                            for column_name, data_type, is_nullable, is_primary_key in cur.fetchall()
                        ]
                        tables.append(
                            Table(
                                table_name=qualified_table_name(table_schema, table_name),
                                columns=tuple(columns),
                            )
                        )
            except psycopg.Error as e:
                logger.error("Failed to get database schema: %s", e)
                raise ExecutionError(str(e), details=_error_details(e)) from e

        logger.info("Fetched schema with %d tables", len(tables))
        return DatabaseSchema(tables=tuple(tables))

    def execute(self, connection_string: str, query: str) -> list[Row]:
        """Execute a statement verbatim and collect all returned rows.

        Statements without a result set return an empty list and are
        committed.

        Raises:
            ConnectivityError: If the connection cannot be opened
            ExecutionError: With the driver message if the statement fails
        """
        with self.get_connection(connection_string) as conn:
            try:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(query)
                    if cur.description is None:
                        conn.commit()
                        return []
                    rows = [
                        {key: to_row_value(value) for key, value in row.items()}
                        for row in cur.fetchall()
                    ]
                conn.commit()
            except psycopg.Error as e:
                logger.error("Query execution failed: %s", e)
                raise ExecutionError(str(e), details=_error_details(e)) from e

        logger.info("Query returned %d rows", len(rows))
        return rows


def _error_details(error: psycopg.Error) -> dict[str, Any]:
    sqlstate = getattr(error, "sqlstate", None)
    return {"sqlstate": sqlstate} if sqlstate else {}
