"""Natural-language questions to SQL, executed and summarized by a local LLM."""

__version__ = "0.1.0"
