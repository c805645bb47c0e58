"""Directory list loading utilities."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from .models import DirectoryConfig

logger = logging.getLogger(__name__)


class DirectoryConfigError(RuntimeError):
    """Raised when the directory list cannot be created or read."""


class DirectoryLoader:
    """Loads the directory list from a plain-text file on disk."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def ensure_exists(self, default_directory: Path | None = None) -> bool:
        """Create the file with ``default_directory`` as its only entry.

        Returns ``True`` when a new file was written and ``False`` when one
        already existed.
        """

        if self._path.exists():
            return False

        directory = default_directory if default_directory is not None else Path.cwd()
        try:
            with self._path.open("x", encoding="utf-8") as handle:
                handle.write(f"{directory}\n")
        except FileExistsError:
            return False
        except OSError as exc:
            raise DirectoryConfigError(
                f"failed to create config file {self._path}: {exc}"
            ) from exc

        logger.info("Created directory list %s containing %s", self._path, directory)
        return True

    def load(self) -> DirectoryConfig:
        """Read and validate the directory list."""

        try:
            text = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise DirectoryConfigError(
                f"failed to read config file {self._path}: {exc}"
            ) from exc

        try:
            config = DirectoryConfig.from_text(text)
        except ValidationError as exc:  # pragma: no cover - text input always validates
            raise DirectoryConfigError(f"invalid config file {self._path}: {exc}") from exc

        logger.debug("Loaded %d directories from %s", len(config.directories), self._path)
        return config


def load_directories(path: Path) -> list[str]:
    """Convenience wrapper returning the directories listed in ``path``."""

    return DirectoryLoader(path).load().directories


__all__ = ["DirectoryConfigError", "DirectoryLoader", "load_directories"]
