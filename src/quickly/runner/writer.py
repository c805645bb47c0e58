"""Line-atomic, prefixed output for concurrent subprocesses."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Protocol

from ..colors import RESET


class TextSink(Protocol):
    """Minimal text stream API used for terminal output."""

    def write(self, text: str, /) -> int | None:
        ...

    def flush(self) -> None:
        ...


def directory_label(directory: str) -> str:
    """Return the basename shown in an output prefix."""

    return Path(directory).name or directory


def format_prefix(label: str, color: str) -> str:
    return f"{color}[{label}]{RESET}"


class PrefixedWriter:
    """Byte sink that writes every line as one prefixed, colored unit.

    Chunks may hold several lines or end mid-line. Complete lines are written
    immediately; an unterminated tail is kept until the next ``write`` or
    until ``flush``/``close``. All writers sharing ``lock`` serialise their
    writes to ``sink``, so lines from different writers never merge.
    """

    def __init__(
        self,
        directory: str,
        color: str,
        sink: TextSink,
        *,
        lock: threading.Lock | None = None,
        encoding: str = "utf-8",
    ) -> None:
        self._label = directory_label(directory)
        self._color = color
        self._sink = sink
        self._lock = lock or threading.Lock()
        self._encoding = encoding
        self._pending = b""

    @property
    def label(self) -> str:
        return self._label

    def write(self, data: bytes) -> int:
        buffer = self._pending + data
        *lines, self._pending = buffer.split(b"\n")
        for line in lines:
            self._emit(line)
        return len(data)

    def write_line(self, text: str) -> None:
        """Write an already-decoded line with this writer's prefix."""

        self._write_prefixed(text)

    def flush(self) -> None:
        if self._pending:
            pending, self._pending = self._pending, b""
            self._emit(pending)

    def close(self) -> None:
        self.flush()

    def __enter__(self) -> "PrefixedWriter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _emit(self, raw: bytes) -> None:
        if raw.endswith(b"\r"):
            raw = raw[:-1]
        self._write_prefixed(raw.decode(self._encoding, errors="replace"))

    def _write_prefixed(self, text: str) -> None:
        line = f"{format_prefix(self._label, self._color)} {text}\n"
        with self._lock:
            self._sink.write(line)
            self._sink.flush()


__all__ = ["PrefixedWriter", "TextSink", "directory_label", "format_prefix"]
