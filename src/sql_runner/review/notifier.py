from __future__ import annotations

from typing import Optional, Protocol, Sequence, Tuple

from sql_runner.models.playbook import NotificationConfig
from sql_runner.models.status import TargetStatus
from sql_runner.review.outcome import EXIT_OK, get_exit_code_and_query_count
from sql_runner.review.renderers import render_digest, render_failure, render_success
from sql_runner.utils.logger import get_logger

logger = get_logger(__name__)


class Sender(Protocol):
    def send(self, recipient: str, subject: str, body: str) -> None:
        ...


def review(
    notification: Optional[NotificationConfig],
    statuses: Sequence[TargetStatus],
    sender: Sender,
) -> Tuple[int, str]:
    """
    Derive the exit code and display text for a finished run.

    Only a successful run sends a notification. Failures are reported through
    the returned text and exit code alone.
    """
    exit_code, query_count = get_exit_code_and_query_count(statuses)

    if exit_code != EXIT_OK:
        logger.warning("Run finished with exit code %d", exit_code)
        return exit_code, render_failure(statuses)

    recipient = notification.to if notification else ""
    subject = notification.subject if notification else ""
    try:
        sender.send(recipient, subject, render_digest(statuses))
    except Exception as e:
        logger.error("Failed to send success notification: %s", e)

    return exit_code, render_success(query_count, len(statuses))
