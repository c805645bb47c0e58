"""Concurrent command execution across directories."""

from .errors import (
    BranchLookupError,
    EmptyStatusOutputError,
    NoCommandError,
    SubprocessExitError,
    SubprocessSpawnError,
    TaskError,
)
from .executor import STATUS_COMMAND, Task, TaskExecutor, TaskResult
from .pool import RunReport, WorkerPool, build_tasks
from .status import GitStatusSummary, format_status_line, parse_status
from .utils import color_environment, force_color_flags
from .writer import PrefixedWriter

__all__ = [
    "BranchLookupError",
    "EmptyStatusOutputError",
    "GitStatusSummary",
    "NoCommandError",
    "PrefixedWriter",
    "RunReport",
    "STATUS_COMMAND",
    "SubprocessExitError",
    "SubprocessSpawnError",
    "Task",
    "TaskError",
    "TaskExecutor",
    "TaskResult",
    "WorkerPool",
    "build_tasks",
    "color_environment",
    "force_color_flags",
    "format_status_line",
    "parse_status",
]
