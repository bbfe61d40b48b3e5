# src/sql_runner/review/renderers.py
"""
Plain text renderers for a finished run.

Presentation-layer only:
- No SQL
- No email
- Never raises: a template failure is reported in the returned text
"""
from __future__ import annotations

from functools import lru_cache
from typing import Sequence

from jinja2 import Environment, StrictUndefined, Template

from sql_runner.models.status import TargetStatus
from sql_runner.utils.logger import get_logger

logger = get_logger(__name__)

FAILURE_TEMPLATE = """\
TARGET INITIALIZATION FAILURES:
{% for status in statuses if status.errors %}
* {{ status.name }}, ERRORS:
{% for error in status.errors %}
  - {{ error }}
{% endfor %}
{% endfor %}
QUERY FAILURES:
{% for status in statuses %}
{% for step in status.steps %}
{% for query in step.queries if query.error is not none %}
* Query {{ query.query.name }} {{ query.path }} (in step {{ step.name }} @ target {{ status.name }}), ERROR:
  - {{ query.error }}
{% endfor %}
{% endfor %}
{% endfor %}
"""

DIGEST_TEMPLATE = """\
{% for status in statuses %}
Target: {{ status.name }}
{% for step in status.steps %}
  Step: {{ step.name }}
{% for query in step.queries %}
    * Query {{ query.query.name }}: {{ query.count if query.query.count else query.affected }}
{% endfor %}
{% endfor %}
{% endfor %}
"""


@lru_cache(maxsize=None)
def _compile(source: str) -> Template:
    env = Environment(
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        autoescape=False,
    )
    return env.from_string(source)


def _render(name: str, source: str, statuses: Sequence[TargetStatus]) -> str:
    try:
        return _compile(source).render(statuses=statuses)
    except Exception as e:
        logger.error("Rendering the %s message failed: %s", name, e)
        return f"ERROR: executing {name} message template itself failed: {e}"


# Don't use a template here as executing it could fail
def render_success(query_count: int, target_count: int) -> str:
    return f"SUCCESS: {query_count} queries executed against {target_count} targets"


def render_failure(statuses: Sequence[TargetStatus]) -> str:
    """Every initialization error and every failed query, across all targets."""
    return _render("failure", FAILURE_TEMPLATE, statuses)


def render_digest(statuses: Sequence[TargetStatus]) -> str:
    """Per-query results for the success notification."""
    return _render("digest", DIGEST_TEMPLATE, statuses)
