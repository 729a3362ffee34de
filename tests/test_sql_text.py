"""Unit tests for SQL cleaning and acceptance heuristics.

Validates:
- Markdown fence removal (tagged and bare)
- Preamble stripping before the first statement keyword
- Idempotence on already-clean statements
- Acceptance rules: leading keyword, SELECT needs FROM, no prose markers
"""
import pytest

from nl_sql_analyzer.sql_cleaner import clean_sql
from nl_sql_analyzer.sql_validator import is_acceptable_sql, rejection_reason


class TestCleanSql:
    """clean_sql strips fencing and preamble without parsing SQL."""

    def test_strips_tagged_fence(self):
        assert clean_sql("```sql\nSELECT 1\n```") == "SELECT 1"

    def test_strips_fence_case_insensitive_tag(self):
        assert clean_sql("```SQL\nSELECT id FROM t\n```") == "SELECT id FROM t"

    def test_strips_bare_fence(self):
        assert clean_sql("```\nSELECT id FROM t\n```") == "SELECT id FROM t"

    def test_single_line_fence_keeps_statement(self):
        assert clean_sql("```SELECT id FROM t```") == "SELECT id FROM t"

    def test_strips_preamble(self):
        assert clean_sql("Sure! Here you go: SELECT * FROM T") == "SELECT * FROM T"

    def test_strips_preamble_inside_fence(self):
        raw = "Here is the query:\n```sql\nselect name from customers\n```\n"
        assert clean_sql(raw) == "select name from customers"

    def test_no_keyword_returns_trimmed_text(self):
        assert clean_sql("  I cannot answer that.  ") == "I cannot answer that."

    def test_empty_input(self):
        assert clean_sql("") == ""

    def test_keeps_cte(self):
        sql = "WITH totals AS (SELECT customer_id, SUM(total) AS s FROM orders GROUP BY customer_id) SELECT * FROM totals"
        assert clean_sql(sql) == sql

    def test_column_names_containing_keywords_survive(self):
        sql = "SELECT updated_at, deleted FROM orders"
        assert clean_sql(sql) == sql

    def test_preamble_with_word_containing_keyword(self):
        assert clean_sql("Here's the updated query: SELECT a FROM b") == "SELECT a FROM b"

    @pytest.mark.parametrize("raw", [
        "With the schema above, the answer is: SELECT COUNT(*) AS N FROM Orders",
        "With pleasure! SELECT COUNT(*) AS N FROM Orders",
        "Update: here's the query SELECT COUNT(*) AS N FROM Orders",
        "Delete nothing, just count: SELECT COUNT(*) AS N FROM Orders",
        "Insert this into your client: SELECT COUNT(*) AS N FROM Orders",
    ])
    def test_strips_preamble_starting_with_keyword_word(self, raw):
        assert clean_sql(raw) == "SELECT COUNT(*) AS N FROM Orders"

    def test_preamble_before_cte_keeps_whole_cte(self):
        raw = "Sure, here it is: WITH t AS (SELECT 1 AS a) SELECT a FROM t"
        assert clean_sql(raw) == "WITH t AS (SELECT 1 AS a) SELECT a FROM t"

    def test_keeps_recursive_cte_with_column_list(self):
        sql = "WITH RECURSIVE n(i) AS (SELECT 1 UNION ALL SELECT i + 1 FROM n WHERE i < 5) SELECT i FROM n"
        assert clean_sql(sql) == sql

    @pytest.mark.parametrize("sql", [
        "INSERT INTO orders (total) VALUES (5)",
        "UPDATE orders SET total = 0 WHERE id = 1",
        "DELETE FROM orders WHERE id = 1",
    ])
    def test_keeps_write_statements(self, sql):
        assert clean_sql(sql) == sql

    def test_strips_preamble_before_update(self):
        assert clean_sql("Okay. UPDATE orders SET total = 0") == "UPDATE orders SET total = 0"

    def test_does_not_validate(self):
        # Garbage after the keyword is left alone
        assert clean_sql("ok DELETE FRM WHERE") == "DELETE FRM WHERE"

    @pytest.mark.parametrize("raw", [
        "```sql\nSELECT 1\n```",
        "Sure! Here you go: SELECT * FROM T",
        "SELECT * FROM orders WHERE total > 10",
        "no sql at all",
        "",
        "Answer:\nWITH x AS (SELECT 1) SELECT * FROM x",
        "With pleasure! SELECT COUNT(*) AS N FROM Orders",
        "With care, DELETE rows WITH x",
        "Update: DELETE stuff DELETE more",
    ])
    def test_idempotent(self, raw):
        once = clean_sql(raw)
        assert clean_sql(once) == once


class TestIsAcceptableSql:
    """is_acceptable_sql is a cheap gate, not a parser."""

    def test_rejects_empty(self):
        assert is_acceptable_sql("") is False

    def test_rejects_whitespace(self):
        assert is_acceptable_sql("   \n\t") is False

    def test_rejects_select_without_from(self):
        assert is_acceptable_sql("SELECT 1") is False
        assert rejection_reason("SELECT 1") == "SELECT without FROM"

    def test_accepts_simple_select(self):
        assert is_acceptable_sql("SELECT * FROM T") is True

    def test_accepts_lowercase(self):
        assert is_acceptable_sql("select * from t") is True

    def test_rejects_leading_prose(self):
        # The validator does not strip preamble; that is the cleaner's job
        assert is_acceptable_sql("Here is the query: SELECT * FROM T") is False

    @pytest.mark.parametrize("sql", [
        "INSERT INTO t (a) VALUES (1)",
        "UPDATE t SET a = 1",
        "DELETE FROM t WHERE a = 1",
        "WITH x AS (SELECT 1) SELECT * FROM x",
    ])
    def test_accepts_other_statement_kinds(self, sql):
        assert is_acceptable_sql(sql) is True

    @pytest.mark.parametrize("sql", [
        "SELECT * FROM t -- here is the result",
        "SELECT * FROM t; This query lists everything",
        "SELECT * FROM t\nExplanation: lists rows",
        "SELECT * FROM t. Note that it is slow",
        "SELECT * FROM t. This will return all rows",
    ])
    def test_rejects_conversational_markers(self, sql):
        assert is_acceptable_sql(sql) is False

    def test_rejects_non_statement(self):
        assert is_acceptable_sql("DROP TABLE t") is False

    def test_leading_whitespace_is_ignored(self):
        assert is_acceptable_sql("\n  SELECT id FROM t  ") is True
