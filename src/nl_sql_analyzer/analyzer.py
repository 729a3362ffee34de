"""Query analyzer: question in, SQL + rows + narrative out.

Flow (strictly sequential, one request per call):
  1. Connectivity probe (stop with a fixed error on failure)
  2. Schema introspection
  3. SQL generation (SqlPlanner, one retry)
  4. Execution
  5. Result narrative (ResultSummarizer)

Any exception raised in steps 2-5 ends the analysis with
``success=False`` and the exception message as the error. Fields
assigned before the failure stay on the response.
"""
import logging
import time
from typing import Optional

from .db import DatabaseExecutor
from .llm.base import LLMProvider
from .schemas import AnalyzeRequest, AnalyzeResponse
from .sql_planner import SqlPlanner
from .summarizer import ResultSummarizer

logger = logging.getLogger(__name__)

CONNECTION_FAILED_MESSAGE = "Failed to connect to database. Check your connection string."


class QueryAnalyzer:
    """Sequence schema fetch, generation, execution and summarization.

    Holds no per-request state; a single instance can serve concurrent
    requests as long as its collaborators can.

    Example:
        >>> analyzer = QueryAnalyzer(DatabaseExecutor(), OllamaProvider())
        >>> response = analyzer.analyze(AnalyzeRequest(
        ...     connection_string="postgresql://user:pw@localhost/shop",
        ...     prompt="How many orders were placed in 2024?"
        ... ))
        >>> response.success, response.generated_query
    """

    def __init__(
        self,
        executor: DatabaseExecutor,
        llm_provider: LLMProvider,
        planner: Optional[SqlPlanner] = None,
        summarizer: Optional[ResultSummarizer] = None
    ):
        self._executor = executor
        self._planner = planner or SqlPlanner(llm_provider)
        self._summarizer = summarizer or ResultSummarizer(llm_provider)

    def analyze(self, request: AnalyzeRequest) -> AnalyzeResponse:
        """Run one analysis to completion or to its first failure.

        Never raises; failures are reported on the response.
        """
        response = AnalyzeResponse()
        started = time.perf_counter()

        if not self._executor.test_connection(request.connection_string):
            logger.warning("Analysis aborted: database connection failed")
            response.error = CONNECTION_FAILED_MESSAGE
            return response

        try:
            schema = self._executor.fetch_schema(request.connection_string)
            response.db_schema = schema

            plan = self._planner.plan(
                request.ollama_url,
                request.model,
                request.prompt,
                schema
            )
            response.generated_query = plan.sql

            rows = self._executor.execute(request.connection_string, plan.sql)
            response.data = rows

            response.analysis = self._summarizer.summarize(
                request.ollama_url,
                request.model,
                request.prompt,
                plan.sql,
                rows
            )
            response.success = True

        except Exception as e:
            logger.exception("Error during analysis")
            response.error = str(e) or type(e).__name__
            response.success = False

        logger.info(
            "Analysis finished success=%s in %.0fms",
            response.success,
            (time.perf_counter() - started) * 1000,
        )
        return response
