"""Mock completion provider for testing.

Returns scripted responses without making network calls and records
every call so tests can assert on prompts and call counts.
"""
from dataclasses import dataclass

from ..base import LLMProvider, LLMError, LLMTimeoutError


@dataclass(frozen=True)
class MockCall:
    base_url: str
    model: str
    prompt: str


class MockProvider(LLMProvider):
    """Mock completion provider.

    Responses are returned in order; once exhausted, the last one repeats.

    Example:
        >>> provider = MockProvider(responses=["```sql\\nSELECT 1\\n```"])
        >>> provider.generate("http://localhost:11434", "llama3", "prompt")
        '```sql\\nSELECT 1\\n```'
        >>> len(provider.calls)
        1
    """

    def __init__(
        self,
        responses: list[str] | None = None,
        should_fail: bool = False,
        should_timeout: bool = False
    ):
        """Initialize mock provider.

        Args:
            responses: Texts to return, one per call
            should_fail: If True, raise LLMError on every call
            should_timeout: If True, raise LLMTimeoutError on every call
        """
        self._responses = list(responses or [""])
        self._should_fail = should_fail
        self._should_timeout = should_timeout
        self.calls: list[MockCall] = []

    def generate(self, base_url: str, model: str, prompt: str) -> str:
        self.calls.append(MockCall(base_url=base_url, model=model, prompt=prompt))

        if self._should_timeout:
            raise LLMTimeoutError("Mock provider timed out after 0.0s", timeout_seconds=0.0)
        if self._should_fail:
            raise LLMError("Failed to connect to Ollama: mock provider configured to fail")

        index = min(len(self.calls), len(self._responses)) - 1
        return self._responses[index]

    @property
    def prompts(self) -> list[str]:
        """Prompts received so far, in call order."""
        return [call.prompt for call in self.calls]
