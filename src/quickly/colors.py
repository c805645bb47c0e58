"""ANSI color palettes and per-directory color assignment."""

from __future__ import annotations

from typing import Sequence

RESET = "\033[0m"

GREEN = "\033[32m"
RED = "\033[31m"

BASIC_PALETTE: tuple[str, ...] = (
    "\033[31m",  # red
    "\033[32m",  # green
    "\033[33m",  # yellow
    "\033[34m",  # blue
    "\033[35m",  # magenta
    "\033[36m",  # cyan
)

EXTENDED_PALETTE: tuple[str, ...] = BASIC_PALETTE + (
    "\033[91m",
    "\033[92m",
    "\033[93m",
    "\033[94m",
    "\033[95m",
    "\033[96m",
)

_PALETTES = {
    "basic": BASIC_PALETTE,
    "extended": EXTENDED_PALETTE,
}


def get_palette(name: str) -> tuple[str, ...]:
    """Return the palette registered under ``name``."""

    try:
        return _PALETTES[name]
    except KeyError as exc:
        raise ValueError(f"Unknown palette '{name}'") from exc


def assign_colors(
    directories: Sequence[str],
    palette: Sequence[str] = BASIC_PALETTE,
) -> dict[str, str]:
    """Map each directory to ``palette[index % len(palette)]``.

    The result depends only on the directory order and the palette, so the
    same list always yields the same colors.
    """

    if not palette:
        raise ValueError("Color palette must not be empty")
    return {directory: palette[index % len(palette)] for index, directory in enumerate(directories)}


__all__ = [
    "BASIC_PALETTE",
    "EXTENDED_PALETTE",
    "GREEN",
    "RED",
    "RESET",
    "assign_colors",
    "get_palette",
]
