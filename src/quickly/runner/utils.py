"""Helpers for preparing colorized subprocess execution."""

from __future__ import annotations

import os
import re
from typing import Mapping

COLOR_ENVIRONMENT: Mapping[str, str] = {
    "TERM": "xterm-256color",
    "COLORTERM": "truecolor",
    "FORCE_COLOR": "true",
    "CLICOLOR": "1",
    "CLICOLOR_FORCE": "1",
}

# Command words at the start of the string or after whitespace / a shell separator.
_LS_GREP = re.compile(r"(?<![^\s;&|(])(ls|grep)(?=[\s;&|)]|$)")
_GIT = re.compile(r"(?<![^\s;&|(])git(?=[\s;&|)]|$)")


def force_color_flags(command: str) -> str:
    """Make ``ls``, ``grep`` and ``git`` emit color even when piped.

    Commands that already choose a color setting are left alone.
    """

    rewritten = command
    if "--color" not in command:
        rewritten = _LS_GREP.sub(r"\1 --color=always", rewritten)
    if "-c color" not in command:
        rewritten = _GIT.sub("git -c color.status=always", rewritten)
    return rewritten


def color_environment(additional: Mapping[str, str] | None = None) -> dict[str, str]:
    """Return the current environment with color output forced on."""

    env = dict(os.environ)
    env.update(COLOR_ENVIRONMENT)
    if additional:
        env.update(additional)
    return env


__all__ = ["COLOR_ENVIRONMENT", "color_environment", "force_color_flags"]
