"""Errors raised while executing a task in one directory."""

from __future__ import annotations


class TaskError(RuntimeError):
    """Base class for per-directory task failures."""


class NoCommandError(TaskError):
    """Raised when a task carries an empty command."""


class SubprocessSpawnError(TaskError):
    """Raised when the shell or git binary cannot be started."""


class SubprocessExitError(TaskError):
    """Raised when a subprocess exits with a non-zero status."""

    def __init__(self, message: str, returncode: int) -> None:
        super().__init__(message)
        self.returncode = returncode


class EmptyStatusOutputError(TaskError):
    """Raised when ``git status`` output holds no branch line."""


class BranchLookupError(TaskError):
    """Raised when the current branch of a directory cannot be determined."""


__all__ = [
    "BranchLookupError",
    "EmptyStatusOutputError",
    "NoCommandError",
    "SubprocessExitError",
    "SubprocessSpawnError",
    "TaskError",
]
