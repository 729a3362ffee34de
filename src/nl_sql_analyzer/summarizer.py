"""Result summarization: lightweight statistics plus an LLM narrative.

Numeric columns are detected from a single sample: the first non-null
value in the column decides whether min/max/average are computed for it.
"""
import json
import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from .llm.base import LLMProvider
from .schemas import Row

logger = logging.getLogger(__name__)

SAMPLE_SIZE = 5

ANALYSIS_PROMPT = """You are an expert data analyst. Analyze the query results and provide clear insights.

CONTEXT:
- User Question: "{question}"
- SQL Query: {query}
- Total Records: {row_count}

DATA STATISTICS:
{stats}

SAMPLE DATA (first {sample_size} rows):
{sample}

TASK:
Provide a professional analysis in 2-3 paragraphs that:

1. DIRECTLY ANSWERS the user's original question with specific numbers/facts from the data
2. Highlights the most important insights and patterns
3. Mentions any notable trends, outliers, or interesting findings
4. Uses simple, non-technical language
5. Is concise but informative (maximum 150 words)

IMPORTANT:
- Start with the direct answer to their question
- Use actual numbers from the data
- Be specific, not generic
- Don't explain SQL or technical details
- Focus on business insights

Your Analysis:"""


@dataclass(frozen=True)
class ColumnStats:
    column: str
    minimum: float
    maximum: float
    average: float

    def describe(self) -> str:
        return (
            f"- {self.column}: Min={self.minimum:,.2f}, "
            f"Max={self.maximum:,.2f}, Avg={self.average:,.2f}"
        )


def is_numeric(value: Any) -> bool:
    # bool is an int subclass but not a measure
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def compute_column_stats(rows: list[Row]) -> list[ColumnStats]:
    """Compute min/max/average for numeric columns.

    Columns are taken from the first row's keys, in order. Nulls are
    excluded from every aggregate. A column whose first non-null value is
    numeric is aggregated over all its non-null values.
    """
    if not rows:
        return []

    stats = []
    for key in rows[0].keys():
        values = [row.get(key) for row in rows]
        values = [v for v in values if v is not None]
        if not values or not is_numeric(values[0]):
            continue

        numbers = [float(v) for v in values]
        stats.append(
            ColumnStats(
                column=key,
                minimum=min(numbers),
                maximum=max(numbers),
                average=sum(numbers) / len(numbers),
            )
        )
    return stats


def format_stats(row_count: int, stats: list[ColumnStats]) -> str:
    lines = [f"Total Rows: {row_count}"]
    lines.extend(s.describe() for s in stats)
    return "\n".join(lines)


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    return str(value)


def format_sample(rows: list[Row], size: int = SAMPLE_SIZE) -> str:
    """Serialize the first ``size`` rows as indented JSON."""
    return json.dumps(rows[:size], indent=2, default=_json_default)


class ResultSummarizer:
    """Turn a question, its SQL and the result rows into a short narrative."""

    def __init__(self, llm_provider: LLMProvider):
        self._llm = llm_provider

    def build_prompt(self, question: str, query: str, rows: list[Row]) -> str:
        stats = compute_column_stats(rows)
        return ANALYSIS_PROMPT.format(
            question=question,
            query=query,
            row_count=len(rows),
            stats=format_stats(len(rows), stats),
            sample_size=SAMPLE_SIZE,
            sample=format_sample(rows),
        )

    def summarize(
        self,
        ollama_url: str,
        model: str,
        question: str,
        query: str,
        rows: list[Row]
    ) -> str:
        """Ask the model for a narrative; return it whitespace-trimmed.

        Raises:
            LLMError: If the completion service fails
        """
        prompt = self.build_prompt(question, query, rows)
        logger.debug("Requesting analysis for %d rows", len(rows))
        return self._llm.generate(ollama_url, model, prompt).strip()
