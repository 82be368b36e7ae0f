# src/wyd/errors.py

"""
Typed failures raised by the core.

Board errors are expected outcomes (nothing matched, nothing to suspend...)
and are turned into user-facing messages by the CLI. State errors abort the
invocation.
"""

from __future__ import annotations


class WydError(Exception):
    """Base class for every failure the core reports."""


class BoardError(WydError):
    """Recoverable structural or search failure on the job board."""


class NotFound(BoardError):
    pass


class EmptyStack(BoardError):
    pass


class IndexOutOfRange(BoardError):
    def __init__(self, index: int, length: int) -> None:
        self.index = index
        self.length = length
        super().__init__(f"Index {index} is out of range for {length} item(s).")


class TimeboxedParent(BoardError):
    """A sub-job cannot be pushed on top of a time-boxed job."""


class StateIOError(WydError):
    """Reading or writing one of the application files failed."""


class MalformedState(WydError):
    """The persisted state file exists, is non-empty and does not parse."""


class NotificationError(WydError):
    """The notification sink or the alarm player failed."""
