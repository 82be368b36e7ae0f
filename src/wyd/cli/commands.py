# src/wyd/cli/commands.py

from __future__ import annotations

import argparse
from collections.abc import Callable
from datetime import datetime, timedelta

from ..board.models import WorkState, utc_now
from ..core.application import WydApplication
from ..core.state import AppContext
from ..notifier.loop import become_notifier, kill_notifier, spawn_notifier

CommandHandler = Callable[[AppContext, argparse.Namespace], str]


def _words(args: argparse.Namespace) -> str:
    return " ".join(getattr(args, "words", None) or []).strip()


def _timer(timebox: timedelta | None) -> datetime | None:
    if timebox is None:
        return None
    return utc_now() + timebox


def cmd_push(context: AppContext, args: argparse.Namespace) -> str:
    app = WydApplication.load(context)
    return app.create_job(_words(args), timebox=args.timebox, retro=args.retro)


def cmd_suspend(context: AppContext, args: argparse.Namespace) -> str:
    """
    suspend <words>         -> suspend the first matching job (and everything above it)
    suspend                 -> suspend the current job
    suspend --new <words>   -> create a suspended job without touching the stack
    """
    app = WydApplication.load(context)
    label = _words(args)
    timer = _timer(args.timebox)
    if args.new:
        return app.create_suspended_job(label, args.reason, timer)
    if not label:
        return app.suspend_current_job(args.reason, timer)
    return app.suspend_job_named(label, args.reason, timer)


def cmd_done(context: AppContext, args: argparse.Namespace) -> str:
    return WydApplication.load(context).complete_current_job(cancelled=False)


def cmd_cancel(context: AppContext, args: argparse.Namespace) -> str:
    return WydApplication.load(context).complete_current_job(cancelled=True)


def cmd_resume(context: AppContext, args: argparse.Namespace) -> str:
    return WydApplication.load(context).resume_job_named(_words(args))


def cmd_remind(context: AppContext, args: argparse.Namespace) -> str:
    return WydApplication.load(context).send_reminders(force=args.force)


def cmd_info(context: AppContext, args: argparse.Namespace) -> str:
    return WydApplication.load(context).get_summary()


def cmd_ls(context: AppContext, args: argparse.Namespace) -> str:
    return WydApplication.load(context).ls()


def cmd_timebox(context: AppContext, args: argparse.Namespace) -> str:
    """
    timebox          -> show when the current timebox expires
    timebox 25m      -> apply a timebox to the current job
    timebox --clear  -> remove it
    """
    app = WydApplication.load(context)
    if args.clear:
        return app.apply_timebox(None)
    if args.duration is None:
        return app.describe_current_timebox()
    return app.apply_timebox(args.duration)


def cmd_notifier(context: AppContext, args: argparse.Namespace) -> str:
    if args.kill:
        kill_notifier(context)
        return "Notifier stopped."
    if args.become:
        ticks = become_notifier(context, args.become)
        return f"Notifier exited after {ticks} tick(s)."
    spawn_notifier(context)
    return "Notifier started."


def cmd_log(context: AppContext, args: argparse.Namespace) -> str:
    app = WydApplication.load(context)
    note = _words(args)
    if note:
        return app.add_log_note(note)
    return app.read_log()


def cmd_work(context: AppContext, args: argparse.Namespace) -> str:
    app = WydApplication.load(context)
    state = WorkState.working() if args.mode == "on" else WorkState.off()
    return app.set_work_state(state)
