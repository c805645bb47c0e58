"""Models for the directory list configuration."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


class DirectoryConfig(BaseModel):
    """Ordered list of directories a command is run in."""

    directories: list[str] = Field(
        default_factory=list,
        description="Directories in configuration order; duplicates are kept.",
    )

    @field_validator("directories", mode="before")
    @classmethod
    def _strip_entries(cls, value: Any):
        if value is None:
            return []
        if isinstance(value, str):
            value = value.splitlines()
        if not isinstance(value, (list, tuple)):
            raise TypeError("directories must be a sequence of paths")
        stripped = (str(item).strip() for item in value)
        return [item for item in stripped if item]

    @classmethod
    def from_text(cls, text: str) -> "DirectoryConfig":
        """Parse the one-directory-per-line file format."""

        return cls(directories=text.splitlines())


__all__ = ["DirectoryConfig"]
