from unittest.mock import MagicMock

import pytest

from sql_runner.models.playbook import TargetConfig
from sql_runner.models.status import QueryStatus, ReadyQuery
from sql_runner.targets.factory import create_target
from sql_runner.targets.sqlalchemy_target import SqlAlchemyTarget, build_url


def _query(script, count=False, name="q"):
    return ReadyQuery(name=name, path=f"{name}.sql", script=script, count=count)


@pytest.fixture
def sqlite_target(tmp_path):
    config = TargetConfig(name="local", type="sqlite", database=str(tmp_path / "target.db"))
    target = SqlAlchemyTarget(config)
    yield target
    target.close()


def test_dry_run_never_touches_the_database():
    engine = MagicMock()
    target = SqlAlchemyTarget(TargetConfig(name="local", type="sqlite"), engine=engine)
    query = _query("THIS IS NOT SQL")

    status = target.run_query(query, dry_run=True)

    assert status == QueryStatus(query=query, path="q.sql", affected=0, count=0, error=None)
    engine.begin.assert_not_called()
    engine.connect.assert_not_called()


def test_rows_affected_and_count(sqlite_target):
    create = sqlite_target.run_query(_query("CREATE TABLE events (id INTEGER)"), dry_run=False)
    insert = sqlite_target.run_query(_query("INSERT INTO events (id) VALUES (1), (2), (3)"), dry_run=False)
    count = sqlite_target.run_query(_query("SELECT COUNT(*) FROM events", count=True), dry_run=False)

    assert create.error is None
    assert create.affected == 0
    assert insert.error is None
    assert insert.affected == 3
    assert count.error is None
    assert count.count == 3


def test_failed_query_is_returned_as_data(sqlite_target):
    status = sqlite_target.run_query(_query("SELECT * FROM missing_table"), dry_run=False)

    assert status.error is not None
    assert "missing_table" in status.error
    assert status.path == "q.sql"


def test_count_query_without_rows_fails(sqlite_target):
    sqlite_target.run_query(_query("CREATE TABLE empty (id INTEGER)"), dry_run=False)

    status = sqlite_target.run_query(_query("SELECT id FROM empty", count=True), dry_run=False)

    assert status.error == "count query returned no rows"


def test_get_target_returns_config():
    config = TargetConfig(name="local", type="sqlite")
    target = SqlAlchemyTarget(config, engine=MagicMock())

    assert target.get_target() is config
    assert str(target) == "local (sqlite)"


def test_postgres_url_with_ssl():
    url = build_url(TargetConfig(
        name="pg", type="postgres", host="db.internal", database="analytics",
        username="runner", password="secret", ssl=True,
    ))

    assert url.drivername == "postgresql+psycopg2"
    assert url.host == "db.internal"
    assert url.port == 5432
    assert url.database == "analytics"
    assert url.password == "secret"
    assert url.query["sslmode"] == "require"


def test_redshift_default_port_and_no_ssl():
    url = build_url(TargetConfig(name="rs", type="redshift", host="cluster", database="dev"))

    assert url.port == 5439
    assert "sslmode" not in url.query


def test_mssql_url_uses_odbc_driver():
    url = build_url(TargetConfig(name="ms", type="mssql", host="sql1", port=14330, database="reports"))

    assert url.drivername == "mssql+pyodbc"
    assert url.port == 14330
    assert url.query["driver"] == "ODBC Driver 17 for SQL Server"


def test_factory_builds_sqlalchemy_targets(tmp_path):
    target = create_target(TargetConfig(name="local", type="sqlite", database=str(tmp_path / "f.db")))
    try:
        assert isinstance(target, SqlAlchemyTarget)
    finally:
        target.close()


def test_sqlite_rejects_multi_statement_scripts_as_query_error(sqlite_target):
    script = "CREATE TABLE a (id INTEGER); CREATE TABLE b (id INTEGER)"

    status = sqlite_target.run_query(_query(script), dry_run=False)

    assert status.error is not None
    assert "one statement" in status.error
