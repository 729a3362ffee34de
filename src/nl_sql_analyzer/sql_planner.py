"""SQL Planner - Natural Language to SQL using a local LLM.

Architecture:
    Natural Language Question + DatabaseSchema
         ↓
    Generation prompt → LLM Provider
         ↓
    clean_sql → is_acceptable_sql
         ↓ (rejected)
    Stricter retry prompt → LLM Provider → clean_sql
         ↓
    Return statement text

Recovery policy:
- Exactly one retry, only when the first answer is rejected
- The retry's cleaned text is returned without validation; a malformed
  statement surfaces later as an execution error
- Completion service failures propagate as LLMError
"""
import logging
from dataclasses import dataclass

from .llm.base import LLMProvider
from .schema_describer import describe_schema
from .schemas import DatabaseSchema
from .sql_cleaner import clean_sql
from .sql_validator import rejection_reason

logger = logging.getLogger(__name__)


GENERATION_PROMPT = """You are an expert PostgreSQL database assistant. Your ONLY job is to generate a valid SQL query.

DATABASE SCHEMA:
{schema}

USER QUESTION: {question}

CRITICAL RULES - READ CAREFULLY:
1. Output ONLY the SQL query - nothing else
2. No explanations, no markdown, no commentary
3. Use EXACT table and column names from the schema above
4. Use PostgreSQL syntax (LIMIT instead of TOP, double quotes for mixed-case identifiers)
5. Always use proper JOINs with ON clauses
6. Include WHERE clauses for filtering
7. Use aggregate functions (SUM, COUNT, AVG) when asking for totals or averages
8. Use ORDER BY when asking for 'top' or 'highest' or 'lowest'
9. Use GROUP BY when using aggregate functions with non-aggregated columns

EXAMPLES:
Question: "Show top 5 customers by revenue"
Answer: SELECT c.customer_id, c.customer_name, SUM(o.order_total) AS revenue FROM customers c JOIN orders o ON c.customer_id = o.customer_id GROUP BY c.customer_id, c.customer_name ORDER BY revenue DESC LIMIT 5

Question: "How many orders in 2024"
Answer: SELECT COUNT(*) AS order_count FROM orders WHERE EXTRACT(YEAR FROM order_date) = 2024

Question: "Average product price by category"
Answer: SELECT cat.category_name, AVG(p.price) AS avg_price FROM products p JOIN categories cat ON p.category_id = cat.category_id GROUP BY cat.category_name

NOW GENERATE THE SQL QUERY FOR THE USER'S QUESTION.
REMEMBER: Output ONLY the SQL query, starting with SELECT, INSERT, UPDATE, DELETE or WITH:"""


RETRY_PROMPT = """GENERATE ONLY A VALID SQL QUERY. NO EXPLANATIONS.

Schema: {schema}
Question: {question}

Output format: SELECT ... FROM ... WHERE ...
Start your response with SELECT:"""


@dataclass(frozen=True)
class SqlPlan:
    """Outcome of query generation.

    Attributes:
        sql: Statement text to execute
        attempts: Number of completion calls made (1 or 2)
        accepted: Whether the returned text passed validation. Always True
                  after one attempt; after a retry the text is not re-checked
                  and this is False.
    """
    sql: str
    attempts: int
    accepted: bool


class SqlPlanner:
    """Generate SQL statements from natural language with one retry.

    Example:
        >>> from nl_sql_analyzer.llm.providers import MockProvider
        >>> provider = MockProvider(responses=["SELECT * FROM orders"])
        >>> planner = SqlPlanner(provider)
        >>> planner.plan("http://localhost:11434", "llama3", "all orders", schema).sql
        'SELECT * FROM orders'
    """

    def __init__(self, llm_provider: LLMProvider):
        self._llm = llm_provider

    def plan(
        self,
        ollama_url: str,
        model: str,
        question: str,
        schema: DatabaseSchema
    ) -> SqlPlan:
        """Generate SQL for ``question`` against ``schema``.

        Raises:
            LLMError: If the completion service fails on either attempt
        """
        schema_text = describe_schema(schema)

        raw = self._llm.generate(ollama_url, model, self.build_prompt(question, schema_text))
        sql = clean_sql(raw)

        reason = rejection_reason(sql)
        if reason is None:
            return SqlPlan(sql=sql, attempts=1, accepted=True)

        logger.warning("Generated invalid query (%s), retrying... Original: %s", reason, sql)

        raw = self._llm.generate(ollama_url, model, self.build_retry_prompt(question, schema_text))
        sql = clean_sql(raw)
        return SqlPlan(sql=sql, attempts=2, accepted=False)

    @staticmethod
    def build_prompt(question: str, schema_text: str) -> str:
        """Build the first-attempt generation prompt."""
        return GENERATION_PROMPT.format(schema=schema_text, question=question)

    @staticmethod
    def build_retry_prompt(question: str, schema_text: str) -> str:
        """Build the shorter, stricter retry prompt."""
        return RETRY_PROMPT.format(schema=schema_text, question=question)
