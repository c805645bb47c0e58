"""Configuration management for quickly."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal
import os

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class QuicklySettings(BaseSettings):
    """Runtime configuration sourced from environment variables."""

    model_config = SettingsConfigDict(extra="ignore")

    config_path: Path = Field(
        default=Path("~/.quicklyrc"),
        validation_alias="QUICKLY_CONFIG",
        validate_default=True,
    )
    workers: int | None = Field(default=None, validation_alias="QUICKLY_WORKERS")
    palette: Literal["basic", "extended"] = Field(
        default="basic", validation_alias="QUICKLY_PALETTE"
    )
    shell: str = Field(default="bash", validation_alias="QUICKLY_SHELL")
    log_level: str = Field(default="WARNING", validation_alias="QUICKLY_LOG_LEVEL")

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(
                "QUICKLY_LOG_LEVEL must be one of CRITICAL, ERROR, WARNING, INFO, DEBUG"
            )
        return normalized

    @field_validator("config_path")
    @classmethod
    def _expand_config_path(cls, value: Path) -> Path:
        return value.expanduser()

    @field_validator("palette", mode="before")
    @classmethod
    def _normalize_palette(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("workers", mode="before")
    @classmethod
    def _parse_workers(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        return value

    @field_validator("workers")
    @classmethod
    def _validate_workers(cls, value: int | None) -> int | None:
        if value is not None and value < 1:
            raise ValueError("QUICKLY_WORKERS must be >= 1")
        return value

    @field_validator("shell")
    @classmethod
    def _validate_shell(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError("QUICKLY_SHELL must not be empty")
        return normalized

    @property
    def worker_count(self) -> int:
        """Configured worker count, or the number of available CPUs."""

        return self.workers or os.cpu_count() or 1


@lru_cache(maxsize=1)
def get_settings() -> QuicklySettings:
    """Return cached settings instance."""

    return QuicklySettings()


__all__ = ["QuicklySettings", "get_settings"]
