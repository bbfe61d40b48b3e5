class SqlRunnerError(Exception):
    """Base class for errors raised by sql_runner."""


class PlaybookError(SqlRunnerError):
    """The playbook file, or a step/query selection against it, is invalid."""


class NotificationError(SqlRunnerError):
    """A notification could not be configured or delivered."""
