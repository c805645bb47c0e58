"""Execution of one command in one directory."""

from __future__ import annotations

import logging
import subprocess
import sys
import threading
from dataclasses import dataclass
from typing import Sequence

from .errors import (
    BranchLookupError,
    NoCommandError,
    SubprocessExitError,
    SubprocessSpawnError,
    TaskError,
)
from .status import GitStatusSummary, format_status_line, parse_status
from .utils import color_environment, force_color_flags
from .writer import PrefixedWriter, TextSink, directory_label

logger = logging.getLogger(__name__)

STATUS_COMMAND = "status"

_READ_SIZE = 64 * 1024


@dataclass(frozen=True, slots=True)
class Task:
    """A command to run in one directory."""

    directory: str
    command: str
    color: str
    branch_filter: str | None = None


@dataclass(frozen=True, slots=True)
class TaskResult:
    """Outcome of a task; output itself is streamed, never stored here."""

    directory: str
    color: str
    error: TaskError | None = None
    skipped: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


class TaskExecutor:
    """Run tasks, streaming their output to a shared sink.

    One executor is shared by all workers; every line it writes goes through a
    single lock so concurrent tasks interleave only at line boundaries.
    """

    def __init__(
        self,
        sink: TextSink | None = None,
        *,
        shell: str = "bash",
        git: str = "git",
    ) -> None:
        self._sink = sink if sink is not None else sys.stdout
        self._shell = shell
        self._git = git
        self._lock = threading.Lock()

    @property
    def sink(self) -> TextSink:
        return self._sink

    def writer_for(self, directory: str, color: str) -> PrefixedWriter:
        return PrefixedWriter(directory, color, self._sink, lock=self._lock)

    def execute(self, task: Task) -> TaskResult:
        """Run ``task`` and capture any failure in the returned result."""

        try:
            if not task.command:
                raise NoCommandError("no command provided")

            if task.branch_filter:
                branch = self.current_branch(task.directory)
                if task.branch_filter not in branch:
                    logger.debug(
                        "Skipping %s: branch %r does not contain %r",
                        task.directory,
                        branch,
                        task.branch_filter,
                    )
                    return TaskResult(task.directory, task.color, skipped=True)

            if task.command == STATUS_COMMAND:
                summary = self.git_status(task.directory)
                line = format_status_line(summary, directory_label(task.directory), task.color)
                with self._lock:
                    self._sink.write(line + "\n")
                    self._sink.flush()
            else:
                self.run_command(task)
        except TaskError as exc:
            return TaskResult(task.directory, task.color, error=exc)

        return TaskResult(task.directory, task.color)

    def current_branch(self, directory: str) -> str:
        """Return the checked-out branch name of ``directory``."""

        try:
            output = self._run_git(directory, ["branch", "--show-current"])
        except TaskError as exc:
            raise BranchLookupError(f"branch lookup failed: {exc}") from exc
        return output.strip()

    def git_status(self, directory: str) -> GitStatusSummary:
        """Return the parsed ``git status`` summary of ``directory``."""

        output = self._run_git(directory, ["status", "--branch", "--porcelain"])
        return parse_status(output)

    def run_command(self, task: Task) -> None:
        """Run the task's command through the shell, streaming its output."""

        command = force_color_flags(task.command)
        args = [self._shell, "-c", command]
        logger.debug("Running %r in %s", command, task.directory)
        try:
            process = subprocess.Popen(
                args,
                cwd=task.directory,
                env=color_environment(),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
            )
        except OSError as exc:
            raise SubprocessSpawnError(f"failed to start {self._shell}: {exc}") from exc

        assert process.stdout is not None
        with process, self.writer_for(task.directory, task.color) as writer:
            for chunk in iter(lambda: process.stdout.read1(_READ_SIZE), b""):
                writer.write(chunk)
        returncode = process.wait()

        logger.debug("%s exited with status %d in %s", self._shell, returncode, task.directory)
        if returncode != 0:
            raise SubprocessExitError(f"exit status {returncode}", returncode)

    def report(self, result: TaskResult) -> None:
        """Write a prefixed error line for a failed result."""

        if result.error is None:
            return
        self.writer_for(result.directory, result.color).write_line(str(result.error))

    def _run_git(self, directory: str, args: Sequence[str]) -> str:
        cmd = [self._git, *args]
        try:
            completed = subprocess.run(
                cmd,
                cwd=directory,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                check=False,
            )
        except OSError as exc:
            raise SubprocessSpawnError(f"failed to start {self._git}: {exc}") from exc

        output = completed.stdout.decode("utf-8", errors="replace")
        if completed.returncode != 0:
            detail = output.strip().splitlines()
            message = f"{' '.join(cmd)} exited with status {completed.returncode}"
            if detail:
                message = f"{message}: {detail[0]}"
            raise SubprocessExitError(message, completed.returncode)
        return output


__all__ = ["STATUS_COMMAND", "Task", "TaskExecutor", "TaskResult"]
