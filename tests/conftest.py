from __future__ import annotations

import threading
from pathlib import Path

import pytest


class RecordingSink:
    """Text sink that records every write call separately."""

    def __init__(self) -> None:
        self.writes: list[str] = []
        self.flushes = 0
        self._lock = threading.Lock()

    def write(self, text: str) -> int:
        with self._lock:
            self.writes.append(text)
        return len(text)

    def flush(self) -> None:
        self.flushes += 1

    @property
    def text(self) -> str:
        return "".join(self.writes)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


def write_fake_git(path: Path, *, branch: str = "main", status: str = "", exit_code: int = 0) -> Path:
    """Write a fake ``git`` executable answering ``branch`` and ``status``."""

    script = path / "git"
    script.write_text(
        "#!/bin/sh\n"
        f"if [ \"$1\" = \"branch\" ]; then printf '%s\\n' '{branch}'; exit {exit_code}; fi\n"
        f"if [ \"$1\" = \"status\" ]; then printf '{status}'; exit {exit_code}; fi\n"
        "exit 2\n",
        encoding="utf-8",
    )
    script.chmod(0o755)
    return script


@pytest.fixture
def fake_git(tmp_path: Path):
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()

    def factory(**kwargs) -> Path:
        return write_fake_git(bin_dir, **kwargs)

    return factory
