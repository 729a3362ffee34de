"""Strip markdown fencing and conversational preamble from LLM output.

This is a best-effort text heuristic, not a SQL parser: it never checks
grammar and never rejects input.
"""
import re

# Keywords a statement may start with, in search priority order
STATEMENT_KEYWORDS = ("SELECT", "INSERT", "UPDATE", "DELETE", "WITH")

# A fence, plus its language hint when the hint ends the line (```sql\n)
_FENCE = re.compile(r"```(?:[a-z0-9_+-]*[ \t]*\r?\n)?", re.IGNORECASE)

_KEYWORD_PATTERNS = tuple(
    re.compile(rf"\b{keyword}\b", re.IGNORECASE) for keyword in STATEMENT_KEYWORDS
)

# A keyword followed by the shape of a real statement, so that prose such as
# "With pleasure!" or "Update: ..." is not mistaken for SQL
_STATEMENT_START = re.compile(
    r"\b(?:"
    r"SELECT\b"
    r"|INSERT\s+INTO\b"
    r"|UPDATE\s+\S+\s+SET\b"
    r"|DELETE\s+FROM\b"
    r"|WITH\s+(?:RECURSIVE\s+)?\w+\s*(?:\([^)]*\)\s*)?AS\s*(?:NOT\s+)?(?:MATERIALIZED\s*)?\("
    r")",
    re.IGNORECASE,
)


def strip_fences(text: str) -> str:
    return _FENCE.sub("", text)


def clean_sql(raw: str) -> str:
    """Isolate the SQL statement in a raw completion.

    Steps:
    1. Remove markdown code fences, tagged (```sql) or bare.
    2. Trim surrounding whitespace.
    3. If the text starts with a statement, return it.
    4. Otherwise cut everything before the earliest statement start.
    5. Failing that, cut before the first whole-word match of the
       highest-priority keyword in STATEMENT_KEYWORDS, unless that match
       is at position 0.

    Text without any keyword is returned as-is after steps 1-2.

    Example:
        >>> clean_sql("Sure! Here you go: SELECT * FROM T")
        'SELECT * FROM T'
        >>> clean_sql("With pleasure! SELECT * FROM T")
        'SELECT * FROM T'
    """
    text = strip_fences(raw).strip()

    match = _STATEMENT_START.search(text)
    if match:
        return text[match.start():]

    for pattern in _KEYWORD_PATTERNS:
        match = pattern.search(text)
        if match is None:
            continue
        if match.start() == 0:
            break
        return text[match.start():]

    return text
