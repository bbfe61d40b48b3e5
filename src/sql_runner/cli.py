from __future__ import annotations

import argparse
import pathlib
import sys
from typing import List, Optional

from dotenv import load_dotenv

from sql_runner import __version__
from sql_runner.errors import PlaybookError
from sql_runner.playbook.loader import load_playbook, parse_variable_overrides
from sql_runner.review.notifier import review
from sql_runner.runner import run_playbook
from sql_runner.utils.email_sender import LogSender, SmtpSender
from sql_runner.utils.logger import get_logger

log = get_logger(__name__)

EXIT_BAD_PLAYBOOK = 1


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="sql-runner",
        description="Run a playbook of SQL queries against one or more database targets.",
    )

    parser.add_argument(
        "--playbook",
        "-p",
        type=pathlib.Path,
        required=True,
        help="Path to the playbook YAML file.",
    )

    parser.add_argument(
        "--sqlroot",
        type=pathlib.Path,
        default=None,
        help="Directory SQL files are resolved against. Defaults to the playbook's directory.",
    )

    parser.add_argument(
        "--var",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override a playbook variable. May be repeated.",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Prepare every query but do not send anything to the targets.",
    )

    parser.add_argument(
        "--from-step",
        type=str,
        default=None,
        help="Start the run at the named step, skipping the steps declared before it.",
    )

    parser.add_argument(
        "--run-query",
        type=str,
        default=None,
        metavar="STEP::QUERY",
        help="Run a single query of a single step.",
    )

    parser.add_argument(
        "--no-notify",
        action="store_true",
        help="Log the success digest instead of emailing it.",
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = parse_args(argv)

    sql_root = args.sqlroot or args.playbook.resolve().parent

    try:
        overrides = parse_variable_overrides(args.var)
        playbook = load_playbook(args.playbook, overrides)
        statuses = run_playbook(
            playbook,
            sql_root,
            dry_run=args.dry_run,
            from_step=args.from_step,
            run_query=args.run_query,
        )
    except PlaybookError as e:
        log.error("%s", e)
        return EXIT_BAD_PLAYBOOK

    if args.no_notify or playbook.notification is None:
        sender = LogSender()
    else:
        sender = SmtpSender()

    exit_code, text = review(playbook.notification, statuses, sender)

    # Always print (useful for runs + golden capture)
    print(text)
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
