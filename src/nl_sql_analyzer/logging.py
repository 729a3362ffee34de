"""Logging setup and request correlation for the analyzer service."""
import logging
import time
import uuid
from fastapi import Request

logger = logging.getLogger("nl_sql_analyzer")

CORRELATION_HEADER = "x-correlation-id"


def setup_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


async def correlation_id_middleware(request: Request, call_next):
    """Tag each request with a correlation id and log its outcome.

    An incoming ``x-correlation-id`` header is reused; otherwise a new
    UUID is generated. The id is echoed back on the response.
    """
    cid = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
    request.state.correlation_id = cid
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        "%s %s -> %s in %.1fms [cid=%s]",
        request.method, request.url.path, response.status_code, elapsed_ms, cid,
    )
    response.headers[CORRELATION_HEADER] = cid
    return response
