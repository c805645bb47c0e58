"""Parsing of ``git status --branch --porcelain`` output."""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..colors import GREEN, RED, RESET
from .errors import EmptyStatusOutputError

_AHEAD_BEHIND = re.compile(r"(\[.+\])")

DIRECTORY_WIDTH = 25
BRANCH_WIDTH = 15
STATE_WIDTH = 10


@dataclass(frozen=True, slots=True)
class GitStatusSummary:
    """Branch name, upstream drift and number of changed files."""

    branch_name: str
    ahead_behind: str | None
    dirty_count: int

    @property
    def is_clean(self) -> bool:
        return self.dirty_count == 0

    @property
    def state(self) -> str:
        if self.is_clean:
            return "Clean"
        return f"{self.dirty_count} modified"


def parse_status(output: str) -> GitStatusSummary:
    """Parse porcelain branch-status text.

    The first non-blank line is git's ``## <branch>[...<upstream>][ [ahead N, behind M]]``
    header; every other non-blank line is one changed file.
    """

    lines = [line for line in output.splitlines() if line.strip()]
    if not lines:
        raise EmptyStatusOutputError("git status produced no output")

    branch_info, changed = lines[0], lines[1:]

    match = _AHEAD_BEHIND.search(branch_info)
    ahead_behind = match.group(1) if match else None

    branch_name = branch_info.removeprefix("## ").split("...", 1)[0]
    if ahead_behind and branch_name.endswith(ahead_behind):
        branch_name = branch_name[: -len(ahead_behind)]

    return GitStatusSummary(
        branch_name=branch_name.strip(),
        ahead_behind=ahead_behind,
        dirty_count=len(changed),
    )


def format_status_line(summary: GitStatusSummary, label: str, color: str) -> str:
    """Render one aligned, colored status line (without trailing newline)."""

    directory = f"[{label}]"
    state_color = GREEN if summary.is_clean else RED
    return (
        f"{color}{directory:<{DIRECTORY_WIDTH}}{RESET} "
        f"{summary.branch_name:<{BRANCH_WIDTH}} "
        f"{state_color}{summary.state:<{STATE_WIDTH}}{RESET} "
        f"{summary.ahead_behind or ''}"
    ).rstrip()


__all__ = [
    "GitStatusSummary",
    "format_status_line",
    "parse_status",
]
