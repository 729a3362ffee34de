"""Pydantic models for schemas, analysis requests and responses.

Field names on the wire are camelCase (``tableName``, ``generatedQuery``,
...); Python code uses the snake_case attribute names. Both are accepted
when parsing.
"""
from datetime import date, datetime, time
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .config import DEFAULT_MODEL, DEFAULT_OLLAMA_URL

# Tagged scalar set a result cell may hold after driver normalization
RowValue = Union[bool, int, float, str, datetime, date, time, None]
Row = dict[str, RowValue]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _FrozenCamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class Column(_FrozenCamelModel):
    """A column as reported by the source database."""
    column_name: str = Field(..., min_length=1)
    data_type: str = Field(..., description="Database-reported type label, e.g. 'integer'")
    is_nullable: bool = True
    is_primary_key: bool = False


class Table(_FrozenCamelModel):
    """A table with its columns in ordinal position order."""
    table_name: str = Field(..., min_length=1)
    columns: tuple[Column, ...] = ()

    @field_validator("columns")
    @classmethod
    def column_names_unique(cls, v: tuple[Column, ...]) -> tuple[Column, ...]:
        seen = set()
        for column in v:
            if column.column_name in seen:
                raise ValueError(f"Duplicate column name: {column.column_name}")
            seen.add(column.column_name)
        return v


class DatabaseSchema(_FrozenCamelModel):
    """Tables of a database, in the order the source reported them.

    Built fresh for every analysis and never mutated afterwards.
    """
    tables: tuple[Table, ...] = ()

    @field_validator("tables")
    @classmethod
    def table_names_unique(cls, v: tuple[Table, ...]) -> tuple[Table, ...]:
        seen = set()
        for table in v:
            if table.table_name in seen:
                raise ValueError(f"Duplicate table name: {table.table_name}")
            seen.add(table.table_name)
        return v

    def get_table(self, table_name: str) -> Optional[Table]:
        """Look up a table by name, case-insensitively."""
        for table in self.tables:
            if table.table_name.lower() == table_name.lower():
                return table
        return None


class AnalyzeRequest(_CamelModel):
    """Input to a single analysis.

    Missing or null ``ollamaUrl``/``model`` are replaced with the defaults
    here, once, so the pipeline never consults global configuration.
    The connection string is excluded from repr to keep it out of logs.
    """
    connection_string: str = Field(..., repr=False)
    prompt: str
    ollama_url: Optional[str] = DEFAULT_OLLAMA_URL
    model: Optional[str] = DEFAULT_MODEL

    @field_validator("ollama_url", mode="after")
    @classmethod
    def default_ollama_url(cls, v: Optional[str]) -> str:
        return v or DEFAULT_OLLAMA_URL

    @field_validator("model", mode="after")
    @classmethod
    def default_model(cls, v: Optional[str]) -> str:
        return v or DEFAULT_MODEL


class AnalyzeResponse(_CamelModel):
    """Outcome of an analysis.

    On success every field but ``error`` is populated. On failure
    ``success`` is False, ``error`` holds the message, and only the fields
    assigned before the failure are present.
    """
    success: bool = False
    generated_query: Optional[str] = None
    data: Optional[list[Row]] = None
    analysis: Optional[str] = None
    error: Optional[str] = None
    db_schema: Optional[DatabaseSchema] = Field(default=None, alias="schema")


class ConnectionCheckResponse(BaseModel):
    success: bool
    message: str
