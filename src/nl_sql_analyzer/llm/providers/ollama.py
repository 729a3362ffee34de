"""Ollama text completion provider.

Calls a locally hosted Ollama server's ``/api/generate`` endpoint with
streaming disabled and returns the ``response`` field of the reply.
"""
import logging

import requests

from ..base import LLMProvider, LLMError, LLMTimeoutError

logger = logging.getLogger(__name__)


class OllamaProvider(LLMProvider):
    """Ollama ``/api/generate`` client.

    The base URL and model are supplied per call so one provider instance
    can serve every request; the instance itself holds no request state.

    Example:
        >>> provider = OllamaProvider(timeout=60.0)
        >>> text = provider.generate(
        ...     "http://localhost:11434",
        ...     "llama3",
        ...     "Reply with the word pong"
        ... )
    """

    GENERATE_PATH = "/api/generate"

    def __init__(self, timeout: float = 120.0, session: requests.Session | None = None):
        """Initialize Ollama provider.

        Args:
            timeout: Transport timeout per request in seconds (default: 120.0)
            session: Optional requests session (default: module-level requests)
        """
        self._timeout = timeout
        self._http = session or requests

    def generate(self, base_url: str, model: str, prompt: str) -> str:
        """Send one non-streaming generate request.

        Raises:
            LLMTimeoutError: If the request exceeds the timeout
            LLMError: On connection failure, non-200 status or bad payload
        """
        url = base_url.rstrip("/") + self.GENERATE_PATH
        payload = {
            "model": model,
            "prompt": prompt,
            "stream": False
        }

        try:
            response = self._http.post(url, json=payload, timeout=self._timeout)

            if response.status_code != 200:
                raise LLMError(
                    f"Failed to connect to Ollama: status {response.status_code}: {response.text}",
                    details={"status_code": response.status_code, "model": model}
                )

            response_data = response.json()

        except LLMError:
            raise
        except requests.exceptions.Timeout as e:
            logger.error("Ollama request to %s timed out after %ss", url, self._timeout)
            raise LLMTimeoutError(
                f"Failed to connect to Ollama: request exceeded timeout of {self._timeout}s",
                timeout_seconds=self._timeout
            ) from e
        except requests.exceptions.RequestException as e:
            logger.error("Error calling Ollama API at %s: %s", url, e)
            raise LLMError(f"Failed to connect to Ollama: {e}") from e
        except ValueError as e:
            # JSON decode failure
            raise LLMError(f"Failed to connect to Ollama: invalid response body: {e}") from e

        if not isinstance(response_data, dict):
            raise LLMError("Failed to connect to Ollama: unexpected response shape")
        return response_data.get("response") or ""
