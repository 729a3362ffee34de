"""Render a DatabaseSchema as prompt text.

The output is embedded verbatim in generation prompts, so it must be
byte-identical for identical schemas. Layout per table:

    <blank line>
    Table: Orders
    Columns:
      - OrderId (int, NOT NULL) [PRIMARY KEY]
      - Total (decimal, NULL)
"""
from .schemas import Column, DatabaseSchema

PRIMARY_KEY_MARKER = " [PRIMARY KEY]"


def describe_column(column: Column) -> str:
    nullable = "NULL" if column.is_nullable else "NOT NULL"
    pk = PRIMARY_KEY_MARKER if column.is_primary_key else ""
    return f"  - {column.column_name} ({column.data_type}, {nullable}){pk}"


def describe_schema(schema: DatabaseSchema) -> str:
    """Describe every table and column in stored order."""
    lines = []
    for table in schema.tables:
        lines.append("")
        lines.append(f"Table: {table.table_name}")
        lines.append("Columns:")
        lines.extend(describe_column(column) for column in table.columns)
    return "".join(line + "\n" for line in lines)
