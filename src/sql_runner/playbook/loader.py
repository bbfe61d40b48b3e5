from __future__ import annotations

import pathlib
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from sql_runner.errors import PlaybookError
from sql_runner.models.playbook import Playbook
from sql_runner.utils.logger import get_logger

logger = get_logger(__name__)


def parse_variable_overrides(pairs: Optional[List[str]]) -> Dict[str, str]:
    """Turn ``key=value`` strings from the command line into a mapping."""
    overrides: Dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise PlaybookError(f"Invalid variable override {pair!r}, expected key=value")
        overrides[key] = value
    return overrides


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err["loc"])
        parts.append(f"{location}: {err['msg']}")
    return "; ".join(parts)


def load_playbook(path: pathlib.Path, overrides: Optional[Dict[str, Any]] = None) -> Playbook:
    """
    Load and validate a playbook from a YAML file.
    Variables given in ``overrides`` replace the playbook's own values.
    """
    if not path.exists():
        raise PlaybookError(f"Playbook not found: {path}")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise PlaybookError(f"Playbook {path} is not valid YAML: {exc}") from exc

    if not isinstance(raw, dict):
        raise PlaybookError(f"Playbook {path} must be a YAML mapping")

    if overrides:
        variables = dict(raw.get("variables") or {})
        variables.update(overrides)
        raw["variables"] = variables

    try:
        playbook = Playbook.model_validate(raw)
    except ValidationError as exc:
        raise PlaybookError(f"Invalid playbook {path}: {_format_validation_error(exc)}") from exc

    logger.info(
        "Loaded playbook %s | targets=%d steps=%d",
        path,
        len(playbook.targets),
        len(playbook.steps),
    )
    return playbook
