from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


# ------------------------------------------------------------
# A query that is ready to send to a target
# ------------------------------------------------------------
@dataclass(frozen=True)
class ReadyQuery:
    name: str
    path: str
    script: str
    # True when the query returns a single scalar instead of modifying rows
    count: bool = False


# ------------------------------------------------------------
# Outcome of one query
# ------------------------------------------------------------
@dataclass(frozen=True)
class QueryStatus:
    query: ReadyQuery
    path: str
    affected: int = 0
    count: int = 0
    # Set if and only if the query failed; affected/count are then meaningless
    error: Optional[str] = None


@dataclass(frozen=True)
class StepStatus:
    name: str
    queries: Tuple[QueryStatus, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class TargetStatus:
    name: str
    # Initialization failures (e.g. the target could not be created)
    errors: Optional[Tuple[str, ...]] = None
    steps: Tuple[StepStatus, ...] = field(default_factory=tuple)
