from __future__ import annotations

from typing import Any, Dict

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import URL
from sqlalchemy.exc import DBAPIError

from sql_runner.models.playbook import TargetConfig
from sql_runner.models.status import QueryStatus, ReadyQuery
from sql_runner.targets.base import Target
from sql_runner.utils.config import app_config
from sql_runner.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_PORTS = {
    "postgres": 5432,
    "redshift": 5439,
    "mssql": 1433,
}


def build_url(config: TargetConfig) -> URL:
    """Build the SQLAlchemy URL for a target."""
    if config.type == "sqlite":
        return URL.create("sqlite", database=config.database or None)

    port = config.port or DEFAULT_PORTS[config.type]
    query: Dict[str, str] = {}

    if config.type == "mssql":
        drivername = "mssql+pyodbc"
        query["driver"] = app_config.odbc_driver
        if config.ssl:
            query["Encrypt"] = "yes"
            query["TrustServerCertificate"] = "yes"
    else:
        drivername = "postgresql+psycopg2"
        if config.ssl:
            query["sslmode"] = "require"

    return URL.create(
        drivername,
        username=config.username or None,
        password=config.password or None,
        host=config.host or None,
        port=port,
        database=config.database or None,
        query=query,
    )


def _connect_args(config: TargetConfig) -> Dict[str, Any]:
    timeout = app_config.connect_timeout
    if config.type == "mssql":
        return {"timeout": timeout}
    if config.type == "sqlite":
        return {"timeout": float(timeout)}
    return {"connect_timeout": timeout, "keepalives": 1}


def _describe(exc: Exception) -> str:
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig).strip()
    return str(exc).strip() or exc.__class__.__name__


class SqlAlchemyTarget(Target):
    """
    Target backed by a SQLAlchemy engine, one engine per target.

    Scripts go to the driver as a single execute call. The sqlite driver accepts
    one statement per call, so multi-statement scripts fail as query errors there.
    """

    def __init__(self, config: TargetConfig, engine: Engine | None = None):
        super().__init__(config)
        self.engine: Engine = engine or create_engine(
            build_url(config),
            connect_args=_connect_args(config),
            pool_pre_ping=True,
        )

    def run_query(self, query: ReadyQuery, dry_run: bool) -> QueryStatus:
        if dry_run:
            return QueryStatus(query=query, path=query.path)

        affected = 0
        count = 0

        try:
            # Scripts are opaque: no bind-parameter parsing, no %-escaping by the driver
            with self.engine.begin() as conn:
                result = conn.exec_driver_sql(query.script, execution_options={"no_parameters": True})
                if query.count:
                    row = result.first()
                    if row is None:
                        raise ValueError("count query returned no rows")
                    count = int(row[0])
                    affected = 1
                else:
                    affected = max(result.rowcount, 0)
        except Exception as e:
            logger.error("Query %s failed on target %s: %s", query.name, self, _describe(e))
            return QueryStatus(query=query, path=query.path, error=_describe(e))

        return QueryStatus(query=query, path=query.path, affected=affected, count=count)

    def close(self) -> None:
        self.engine.dispose()
