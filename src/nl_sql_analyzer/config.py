import os

from pydantic import BaseModel

from .errors import ConfigurationError

DEFAULT_OLLAMA_URL = "http://localhost:11434"
DEFAULT_MODEL = "llama3"


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(
            f"{name} must be a number, got {raw!r}",
            details={"variable": name}
        )


class Settings(BaseModel):
    service_name: str = "nl-sql-analyzer"
    environment: str = "dev"

    # Analysis target; read only by the HTTP layer and copied into each request
    connection_string: str = ""
    ollama_url: str = DEFAULT_OLLAMA_URL
    model: str = DEFAULT_MODEL

    # Transport timeout for completion calls (the pipeline itself enforces none)
    ollama_timeout_seconds: float = 120.0

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables."""
        return cls(
            environment=os.getenv("ANALYZER_ENVIRONMENT", "dev"),
            connection_string=os.getenv("ANALYZER_CONNECTION_STRING", ""),
            ollama_url=os.getenv("OLLAMA_URL") or DEFAULT_OLLAMA_URL,
            model=os.getenv("OLLAMA_MODEL") or DEFAULT_MODEL,
            ollama_timeout_seconds=_float_env("OLLAMA_TIMEOUT_SECONDS", 120.0),
        )

settings = Settings.from_env()
