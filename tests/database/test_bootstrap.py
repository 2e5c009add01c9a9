from src.hris_admin.hris_admin.database.bootstrap import SCHEMA_PATH, _strip_create_db_and_use, iter_sql_statements


def test_split_ignores_semicolons_in_quotes():
    sql = "INSERT INTO t VALUES ('a;b'); SELECT \"x;y\";\nSELECT 1"

    assert list(iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('a;b')", 'SELECT "x;y"', "SELECT 1"]


def test_schema_file_is_idempotent():
    sql = _strip_create_db_and_use(SCHEMA_PATH.read_text(encoding="utf-8"))
    statements = list(iter_sql_statements(sql))

    assert statements
    assert all(s.upper().startswith("CREATE TABLE IF NOT EXISTS") for s in statements)
    assert not any(s.upper().startswith(("USE", "CREATE DATABASE")) for s in statements)
