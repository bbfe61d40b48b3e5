"""
Resolve declared queries into ReadyQuery objects.

SQL files are read relative to the SQL root. Templated files are rendered with
jinja2 against the playbook variables before they are sent to a target.
"""
from __future__ import annotations

import os
import pathlib
from datetime import datetime, timezone
from typing import Any, Mapping

from jinja2 import Environment, StrictUndefined

from sql_runner.errors import SqlRunnerError
from sql_runner.models.playbook import QueryConfig
from sql_runner.models.status import ReadyQuery


class QueryPreparationError(SqlRunnerError):
    """A query file could not be read or rendered."""


def now_with_format(fmt: str) -> str:
    return datetime.now(timezone.utc).strftime(fmt)


def system_env(name: str) -> str:
    return os.environ.get(name, "")


def _sql_environment() -> Environment:
    env = Environment(undefined=StrictUndefined, keep_trailing_newline=True, autoescape=False)
    env.globals["now_with_format"] = now_with_format
    env.globals["system_env"] = system_env
    return env


def prepare_query(
    query: QueryConfig,
    sql_root: pathlib.Path,
    variables: Mapping[str, Any],
) -> ReadyQuery:
    path = sql_root / query.file

    try:
        script = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise QueryPreparationError(f"Could not read {path}: {exc}") from exc

    if query.template:
        # Template helpers can raise anything, not only jinja2 errors
        try:
            script = _sql_environment().from_string(script).render({str(k): v for k, v in variables.items()})
        except Exception as exc:
            raise QueryPreparationError(f"Could not render template {path}: {exc}") from exc

    return ReadyQuery(name=query.name, path=str(path), script=script, count=query.count)
