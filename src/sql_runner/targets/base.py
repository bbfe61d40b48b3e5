from __future__ import annotations

from abc import ABC, abstractmethod

from sql_runner.models.playbook import TargetConfig
from sql_runner.models.status import QueryStatus, ReadyQuery


class Target(ABC):
    """
    A database a playbook runs against.

    Implementations must never raise from ``run_query``: failures are returned
    in ``QueryStatus.error``. With ``dry_run`` set they must return a zero
    result without contacting the database.
    """

    def __init__(self, config: TargetConfig):
        self.config = config

    def get_target(self) -> TargetConfig:
        return self.config

    @abstractmethod
    def run_query(self, query: ReadyQuery, dry_run: bool) -> QueryStatus:
        raise NotImplementedError

    def close(self) -> None:
        """Release any connections held by the target."""

    def __str__(self):
        return f"{self.config.name} ({self.config.type})"
