from __future__ import annotations

from typing import Callable, Dict

from sql_runner.models.playbook import TargetConfig
from sql_runner.targets.base import Target
from sql_runner.targets.sqlalchemy_target import SqlAlchemyTarget

TARGET_TYPES: Dict[str, Callable[[TargetConfig], Target]] = {
    "postgres": SqlAlchemyTarget,
    "redshift": SqlAlchemyTarget,
    "mssql": SqlAlchemyTarget,
    "sqlite": SqlAlchemyTarget,
}


def create_target(config: TargetConfig) -> Target:
    """Instantiate the target implementation for ``config.type``."""
    try:
        factory = TARGET_TYPES[config.type]
    except KeyError:
        raise ValueError(f"Unsupported target type: {config.type}") from None
    return factory(config)
