"""Heuristic acceptance check for generated SQL text.

Decides whether a completion looks like a bare SQL statement or like the
model answering in prose. It does not parse SQL.
"""
from .sql_cleaner import STATEMENT_KEYWORDS

# Phrases that mean the model explained itself instead of emitting SQL
CONVERSATIONAL_MARKERS = (
    "here is",
    "this query",
    "explanation",
    "note that",
    "this will",
)


def rejection_reason(query: str) -> str | None:
    """Return why ``query`` is unacceptable, or None if it passes.

    Rules, on the trimmed text compared case-insensitively:
    1. Must not be blank
    2. Must start with SELECT, INSERT, UPDATE, DELETE or WITH
    3. A SELECT must contain FROM somewhere
    4. Must not contain any CONVERSATIONAL_MARKERS phrase
    """
    if not query or not query.strip():
        return "empty response"

    upper = query.strip().upper()

    if not upper.startswith(STATEMENT_KEYWORDS):
        return "does not start with a statement keyword"

    if upper.startswith("SELECT") and "FROM" not in upper:
        return "SELECT without FROM"

    for marker in CONVERSATIONAL_MARKERS:
        if marker.upper() in upper:
            return f"contains conversational marker {marker!r}"

    return None


def is_acceptable_sql(query: str) -> bool:
    """Check whether ``query`` looks like a bare SQL statement.

    Example:
        >>> is_acceptable_sql("SELECT * FROM T")
        True
        >>> is_acceptable_sql("SELECT 1")
        False
    """
    return rejection_reason(query) is None
