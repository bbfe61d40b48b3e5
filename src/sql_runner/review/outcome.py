"""
Run outcome aggregation.

Exit codes are a stable contract with whatever invokes the runner:

- 0: no errors
- 5: target initialization errors
- 6: query errors
- 7: both types of error
"""
from __future__ import annotations

from typing import Sequence, Tuple

from sql_runner.models.status import TargetStatus

EXIT_OK = 0
EXIT_INIT_ERRORS = 5
EXIT_QUERY_ERRORS = 6
EXIT_INIT_AND_QUERY_ERRORS = 7


def get_exit_code_and_query_count(statuses: Sequence[TargetStatus]) -> Tuple[int, int]:
    """
    Return the run's exit code and the number of successful queries.

    A failed query resets the count to zero for the whole run and stops the
    scan of its target, so the count is only meaningful when the exit code
    is 0.
    """
    init_errors = False
    query_errors = False
    query_count = 0

    for target_status in statuses:
        if target_status.errors:
            init_errors = True

        for step_status in target_status.steps:
            failed = False
            for query_status in step_status.queries:
                if query_status.error is not None:
                    query_errors = True
                    query_count = 0  # Reset
                    failed = True
                    break
                query_count += 1
            if failed:
                break

    if init_errors and query_errors:
        exit_code = EXIT_INIT_AND_QUERY_ERRORS
    elif init_errors:
        exit_code = EXIT_INIT_ERRORS
    elif query_errors:
        exit_code = EXIT_QUERY_ERRORS
    else:
        exit_code = EXIT_OK
    return exit_code, query_count
