# src/wyd/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the AppContext, runs one subcommand and turns
core failures into exit codes:
- 0 success
- 1 expected board outcome (nothing matched, nothing active, bad input)
- 2 state file / I/O failure (nothing was saved)
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from .. import __version__
from ..config import get_settings
from ..errors import BoardError, MalformedState, NotificationError, StateIOError
from ..logging_setup import setup_logging
from ..timefmt import parse_duration
from .bootstrap import create_context
from .commands import (
    CommandHandler,
    cmd_cancel,
    cmd_done,
    cmd_info,
    cmd_log,
    cmd_ls,
    cmd_notifier,
    cmd_push,
    cmd_remind,
    cmd_resume,
    cmd_suspend,
    cmd_timebox,
    cmd_work,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_BOARD = 1
EXIT_STATE = 2


def _duration_arg(raw: str):
    try:
        return parse_duration(raw)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="wyd", description="What You're Doing: a stack of jobs.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")

    def add(name: str, handler: CommandHandler, help_text: str) -> argparse.ArgumentParser:
        p = sub.add_parser(name, help=help_text, description=help_text)
        p.set_defaults(handler=handler)
        return p

    p = add("push", cmd_push, "Add a new job to the top of the stack.")
    p.add_argument("-t", "--timebox", type=_duration_arg, default=None, help="Time until the job sends reminders (e.g. '1h 30m').")
    p.add_argument("--retro", type=_duration_arg, default=None, help="The job actually started this long ago.")
    p.add_argument("words", nargs="*", help="Name of the new job.")

    p = add("suspend", cmd_suspend, "Move a job (and the jobs above it) to the suspended queue.")
    p.add_argument("-t", "--timebox", type=_duration_arg, default=None, help="Remind me to resume after this long.")
    p.add_argument("-n", "--new", action="store_true", help="Create a new suspended job instead.")
    p.add_argument("-r", "--reason", default="None", help="Why the job was suspended.")
    p.add_argument("words", nargs="*", help="Name (or part of the name) of the job to suspend.")

    add("done", cmd_done, "Mark the current job as complete.")
    add("cancel", cmd_cancel, "Drop the current job without completing it.")

    p = add("resume", cmd_resume, "Resume a suspended job (the topmost one by default).")
    p.add_argument("words", nargs="*")

    p = add("remind", cmd_remind, "Send reminders for expired timers.")
    p.add_argument("-f", "--force", action="store_true", help="Re-send reminders, even recently sent ones.")

    add("info", cmd_info, "Print the active job stack.")
    add("ls", cmd_ls, "Print all jobs, including suspended ones.")

    p = add("timebox", cmd_timebox, "Show, apply or clear the current job's timebox.")
    p.add_argument("duration", nargs="?", type=_duration_arg, default=None)
    p.add_argument("--clear", action="store_true")

    p = add("notifier", cmd_notifier, "Start the background process that sends reminders.")
    p.add_argument("-k", "--kill", action="store_true", help="Stop running notifiers without starting a new one.")
    p.add_argument("--become", default=None, help=argparse.SUPPRESS)

    p = add("log", cmd_log, "Print today's log, or append a note to it.")
    p.add_argument("words", nargs="*")

    p = add("work", cmd_work, "Turn work mode (idle reminders) on or off.")
    p.add_argument("mode", choices=["on", "off"])

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if getattr(args, "handler", None) is None:
        args = parser.parse_args(["info"])

    settings = get_settings()
    background = args.command == "notifier" and bool(getattr(args, "become", None))

    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    setup_logging(log_dir=settings.data_dir, console_level=console_level, console=not background)

    context = create_context(settings=settings)
    handler: CommandHandler = args.handler

    try:
        output = handler(context, args)
    except (BoardError, ValueError) as e:
        print(str(e), file=sys.stderr)
        return EXIT_BOARD
    except NotificationError as e:
        logger.error("Notification failed: %s", e)
        print(str(e), file=sys.stderr)
        return EXIT_BOARD
    except (MalformedState, StateIOError) as e:
        logger.error("%s", e)
        print(str(e), file=sys.stderr)
        return EXIT_STATE

    if output:
        print(output.rstrip("\n"))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
