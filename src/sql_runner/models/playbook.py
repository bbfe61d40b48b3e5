from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


TargetType = Literal["postgres", "redshift", "mssql", "sqlite"]


class TargetConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    type: TargetType
    host: str = ""
    port: Optional[int] = None
    database: str = ""
    username: str = ""
    password: str = ""
    ssl: bool = False


class QueryConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    file: str
    template: bool = False
    count: bool = False


class StepConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    queries: List[QueryConfig] = Field(default_factory=list)


class NotificationConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    to: str
    subject: str


class Playbook(BaseModel):
    """A full run plan: targets, variables, steps and notification settings."""

    model_config = ConfigDict(frozen=True)

    targets: List[TargetConfig]
    variables: Dict[str, Any] = Field(default_factory=dict)
    steps: List[StepConfig] = Field(default_factory=list)
    notification: Optional[NotificationConfig] = None
