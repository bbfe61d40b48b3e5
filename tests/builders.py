"""Small constructors for status snapshots used across the tests."""
from sql_runner.models.status import QueryStatus, ReadyQuery, StepStatus, TargetStatus


def ok(name: str, affected: int = 1, count: int = 0, is_count: bool = False) -> QueryStatus:
    query = ReadyQuery(name=name, path=f"sql/{name}.sql", script="SELECT 1", count=is_count)
    return QueryStatus(query=query, path=query.path, affected=affected, count=count)


def failed(name: str, error: str = "boom") -> QueryStatus:
    query = ReadyQuery(name=name, path=f"sql/{name}.sql", script="SELECT 1")
    return QueryStatus(query=query, path=query.path, error=error)


def step(name: str, *queries: QueryStatus) -> StepStatus:
    return StepStatus(name=name, queries=tuple(queries))


def target(name: str, *steps: StepStatus, errors=None) -> TargetStatus:
    return TargetStatus(name=name, errors=errors, steps=tuple(steps))
