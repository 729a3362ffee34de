from fastapi import Body, Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST

from .analyzer import QueryAnalyzer
from .config import Settings, settings
from .db import DatabaseExecutor
from .llm.providers import OllamaProvider
from .logging import setup_logging, correlation_id_middleware, logger
from .schemas import AnalyzeRequest, AnalyzeResponse, ConnectionCheckResponse, DatabaseSchema

setup_logging()
app = FastAPI(
    title="Database Analyzer API",
    version="0.1.0",
    description="Analyze any Postgres database using natural language with Ollama",
)
app.middleware("http")(correlation_id_middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

executor = DatabaseExecutor()
analyzer = QueryAnalyzer(executor, OllamaProvider(timeout=settings.ollama_timeout_seconds))

ANALYSES = Counter("analyzer_requests_total", "Total analyses", ["outcome"])
LAT = Histogram("analyzer_request_duration_seconds", "Analysis duration in seconds")


def get_settings() -> Settings:
    return settings


def get_executor() -> DatabaseExecutor:
    return executor


def get_analyzer() -> QueryAnalyzer:
    return analyzer


def _bad_request(body: AnalyzeResponse) -> JSONResponse:
    return JSONResponse(status_code=400, content=body.model_dump(mode="json", by_alias=True))


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/metrics")
def metrics():
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


@app.post("/api/databaseanalyzer/analyze", response_model=AnalyzeResponse)
def analyze(
    prompt: str = Body(...),
    config: Settings = Depends(get_settings),
    service: QueryAnalyzer = Depends(get_analyzer),
):
    if not config.connection_string:
        return _bad_request(AnalyzeResponse(success=False, error="Connection string is required"))
    if not prompt:
        return _bad_request(AnalyzeResponse(success=False, error="Prompt is required"))

    request = AnalyzeRequest(
        connection_string=config.connection_string,
        prompt=prompt,
        ollama_url=config.ollama_url,
        model=config.model,
    )

    with LAT.time():
        result = service.analyze(request)
    ANALYSES.labels(outcome="success" if result.success else "failure").inc()

    if not result.success:
        return _bad_request(result)
    return result


@app.post("/api/databaseanalyzer/test-connection", response_model=ConnectionCheckResponse)
def test_connection(
    connection_string: str = Body(...),
    db: DatabaseExecutor = Depends(get_executor),
):
    is_connected = db.test_connection(connection_string)
    return ConnectionCheckResponse(
        success=is_connected,
        message="Connection successful" if is_connected else "Connection failed",
    )


@app.post("/api/databaseanalyzer/get-schema", response_model=DatabaseSchema)
def get_schema(
    connection_string: str = Body(...),
    db: DatabaseExecutor = Depends(get_executor),
):
    try:
        return db.fetch_schema(connection_string)
    except Exception as e:
        # Driver messages can echo the connection descriptor; log the type only
        logger.error("Error getting schema: %s", type(e).__name__)
        return JSONResponse(status_code=400, content={"error": str(e) or type(e).__name__})


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("nl_sql_analyzer.main:app", host="127.0.0.1", port=8000, reload=True)
