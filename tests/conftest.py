import os
import tempfile
from pathlib import Path

# Keep test runs from writing logs into the working directory
os.environ.setdefault("SQL_RUNNER_LOG_FILE", str(Path(tempfile.gettempdir()) / "sql_runner_tests.log"))

import pytest

from builders import ok, step, target


@pytest.fixture
def clean_run():
    """Two targets, five successful queries."""
    return [
        target("alpha", step("create", ok("a1"), ok("a2")), step("audit", ok("a3", count=42, is_count=True))),
        target("beta", step("create", ok("b1"), ok("b2", affected=7))),
    ]
