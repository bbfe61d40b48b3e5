"""
Sequential playbook execution.

Targets run one after another in declaration order. Within a target, steps
and queries run in order and execution stops at the first failed query.
The result is the immutable status snapshot handed to the review pipeline.
"""

from __future__ import annotations

import pathlib
from typing import Callable, List, Optional, Sequence, Tuple

from sql_runner.errors import PlaybookError
from sql_runner.models.playbook import Playbook, QueryConfig, StepConfig, TargetConfig
from sql_runner.models.status import QueryStatus, ReadyQuery, StepStatus, TargetStatus
from sql_runner.playbook.queries import QueryPreparationError, prepare_query
from sql_runner.targets.base import Target
from sql_runner.targets.factory import create_target
from sql_runner.utils.logger import get_logger

logger = get_logger(__name__)

TargetFactory = Callable[[TargetConfig], Target]


def select_steps(
    steps: Sequence[StepConfig],
    from_step: Optional[str] = None,
    run_query: Optional[str] = None,
) -> List[StepConfig]:
    """
    Apply the --from-step / --run-query selections to the declared steps.
    ``run_query`` has the form ``step::query``.
    """
    selected = list(steps)

    if from_step:
        names = [s.name for s in selected]
        if from_step not in names:
            raise PlaybookError(f"Step {from_step!r} not found in playbook")
        selected = selected[names.index(from_step):]

    if run_query:
        step_name, sep, query_name = run_query.partition("::")
        if not sep or not step_name or not query_name:
            raise PlaybookError(f"Invalid query selector {run_query!r}, expected step::query")

        step = next((s for s in selected if s.name == step_name), None)
        if step is None:
            raise PlaybookError(f"Step {step_name!r} not found in playbook")
        query = next((q for q in step.queries if q.name == query_name), None)
        if query is None:
            raise PlaybookError(f"Query {query_name!r} not found in step {step_name!r}")
        selected = [step.model_copy(update={"queries": [query]})]

    return selected


def _failed_preparation(query: QueryConfig, sql_root: pathlib.Path, exc: Exception) -> QueryStatus:
    placeholder = ReadyQuery(name=query.name, path=str(sql_root / query.file), script="", count=query.count)
    return QueryStatus(query=placeholder, path=placeholder.path, error=str(exc))


def run_target(
    target: Target,
    steps: Sequence[StepConfig],
    playbook: Playbook,
    sql_root: pathlib.Path,
    dry_run: bool = False,
) -> Tuple[StepStatus, ...]:
    """Run every step against one target, stopping at the first failed query."""
    step_statuses: List[StepStatus] = []

    for step in steps:
        logger.info("Target %s | step %s", target, step.name)
        query_statuses: List[QueryStatus] = []
        failed = False

        for query in step.queries:
            try:
                ready = prepare_query(query, sql_root, playbook.variables)
            except QueryPreparationError as exc:
                logger.error("Query %s could not be prepared: %s", query.name, exc)
                status = _failed_preparation(query, sql_root, exc)
            else:
                logger.info("Running query %s (%s)%s", ready.name, ready.path, " [dry run]" if dry_run else "")
                status = target.run_query(ready, dry_run)

            query_statuses.append(status)
            if status.error is not None:
                failed = True
                break

        step_statuses.append(StepStatus(name=step.name, queries=tuple(query_statuses)))
        if failed:
            logger.warning("Target %s stopped after a failed query in step %s", target, step.name)
            break

    return tuple(step_statuses)


def run_playbook(
    playbook: Playbook,
    sql_root: pathlib.Path,
    dry_run: bool = False,
    from_step: Optional[str] = None,
    run_query: Optional[str] = None,
    target_factory: TargetFactory = create_target,
) -> List[TargetStatus]:
    """
    Execute the playbook against every target and return one TargetStatus per
    target, in declaration order.
    """
    steps = select_steps(playbook.steps, from_step=from_step, run_query=run_query)
    statuses: List[TargetStatus] = []

    for config in playbook.targets:
        try:
            target = target_factory(config)
        except Exception as e:
            logger.error("Could not initialise target %s: %s", config.name, e)
            statuses.append(TargetStatus(name=config.name, errors=(str(e) or e.__class__.__name__,)))
            continue

        try:
            step_statuses = run_target(target, steps, playbook, sql_root, dry_run=dry_run)
        finally:
            target.close()

        statuses.append(TargetStatus(name=config.name, steps=step_statuses))

    return statuses
