"""Tests for schema qualification of table references."""

import pytest

from kbgate.safety.qualify import qualify_table_names


class TestQualifyTableNames:
    def test_simple_select(self):
        assert qualify_table_names("SELECT * FROM users", "s1") == "SELECT * FROM s1.users"

    def test_already_qualified_unchanged(self):
        sql = "SELECT * FROM public.users"
        assert qualify_table_names(sql, "s1") == sql

    def test_quoted_schema_unchanged(self):
        sql = 'SELECT * FROM "MySchema".users'
        assert qualify_table_names(sql, "s1") == sql

    def test_insert_into(self):
        result = qualify_table_names("INSERT INTO users (name) VALUES ('a')", "s")
        assert "INTO s.users" in result

    def test_update(self):
        assert qualify_table_names("UPDATE users SET x=1", "app") == "UPDATE app.users SET x=1"

    def test_delete_from(self):
        assert (
            qualify_table_names("DELETE FROM logs WHERE id = $1", "app")
            == "DELETE FROM app.logs WHERE id = $1"
        )

    def test_join(self):
        sql = "SELECT * FROM users u JOIN orders o ON u.id = o.user_id"
        assert qualify_table_names(sql, "s") == (
            "SELECT * FROM s.users u JOIN s.orders o ON u.id = o.user_id"
        )

    def test_lowercase_keywords(self):
        assert qualify_table_names("select * from users", "s") == "select * from s.users"

    def test_keyword_text_preserved(self):
        # the identifier is rewritten, not the first matching substring
        assert qualify_table_names("select * from rom", "s") == "select * from s.rom"

    @pytest.mark.parametrize("sql, expected", [
        ("SELECT * FROM users;", "SELECT * FROM s.users;"),
        ("SELECT * FROM users, orders", "SELECT * FROM s.users, orders"),
        ("SELECT * FROM (SELECT * FROM users) x", "SELECT * FROM (SELECT * FROM s.users) x"),
        ("SELECT * FROM users\nWHERE id = 1", "SELECT * FROM s.users\nWHERE id = 1"),
        ("SELECT * FROM (SELECT id FROM users)", "SELECT * FROM (SELECT id FROM s.users)"),
    ])
    def test_terminators(self, sql, expected):
        assert qualify_table_names(sql, "s") == expected

    def test_not_followed_by_terminator(self):
        # users( is not a recognised boundary, left alone
        sql = "INSERT INTO users(name) VALUES ('a')"
        assert qualify_table_names(sql, "s") == sql

    @pytest.mark.parametrize("word", ["SELECT", "WITH", "VALUES", "TABLE", "NULL", "values"])
    def test_keyword_exclusions(self, word):
        sql = f"INSERT INTO {word} (1)"
        assert qualify_table_names(sql, "s") == sql

    def test_keyword_after_dot_is_not_a_keyword(self):
        assert qualify_table_names("SELECT * FROM FROM x", "s") == "SELECT * FROM s.FROM x"
        assert qualify_table_names("SELECT * FROM s.FROM x", "s") == "SELECT * FROM s.FROM x"

    def test_no_table_keywords(self):
        assert qualify_table_names("SHOW search_path", "s") == "SHOW search_path"

    def test_empty(self):
        assert qualify_table_names("", "s") == ""

    @pytest.mark.parametrize("sql", [
        "SELECT * FROM users",
        "SELECT * FROM users u JOIN orders o ON u.id = o.user_id",
        "INSERT INTO users (name) VALUES ('a')",
        "UPDATE users SET x = 1 WHERE id IN (SELECT id FROM banned)",
        "DELETE FROM logs;",
        "SELECT * FROM public.users",
        "SELECT * FROM FROM x",
        "UPDATE UPDATE SET a = 1",
    ])
    @pytest.mark.parametrize("schema", ["s1", "my-schema", "app"])
    def test_idempotent(self, sql, schema):
        once = qualify_table_names(sql, schema)
        assert qualify_table_names(once, schema) == once
