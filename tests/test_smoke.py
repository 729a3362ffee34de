from nl_sql_analyzer.analyzer import QueryAnalyzer
from nl_sql_analyzer.db import DatabaseExecutor
from nl_sql_analyzer.llm.providers import MockProvider, OllamaProvider
from nl_sql_analyzer.schemas import AnalyzeRequest

def test_analyzer_instantiates():
    a = QueryAnalyzer(DatabaseExecutor(), OllamaProvider())
    assert a is not None

def test_request_defaults():
    r = AnalyzeRequest(connection_string="dbname=shop", prompt="How many orders?")
    assert r.ollama_url == "http://localhost:11434"
    assert r.model == "llama3"

def test_request_null_defaults_from_wire():
    r = AnalyzeRequest.model_validate(
        {"connectionString": "dbname=shop", "prompt": "Top customers", "ollamaUrl": None, "model": None}
    )
    assert r.ollama_url == "http://localhost:11434"
    assert r.model == "llama3"

def test_request_repr_hides_connection_string():
    r = AnalyzeRequest(connection_string="password=hunter2", prompt="x")
    assert "hunter2" not in repr(r)

def test_mock_provider_repeats_last_response():
    p = MockProvider(responses=["a", "b"])
    assert [p.generate("u", "m", "p") for _ in range(3)] == ["a", "b", "b"]
