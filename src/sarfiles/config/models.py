"""Configuration models describing sarfiles settings."""

from __future__ import annotations

import logging
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SarfilesBaseModel(BaseModel):
    """Shared configuration for sarfiles Pydantic models."""

    model_config = ConfigDict(extra="forbid")


class ScanOptions(SarfilesBaseModel):
    """Defaults for the directory scanner.

    Attributes:
        patterns: Glob patterns a file name must match; empty means any file.
        exclude: Glob patterns whose matches are skipped with their subtrees.
        recursive: Whether to descend into subdirectories.
        include_hidden: Whether dot-prefixed entries are listed.
        follow_symlinks: Whether to descend into symlinked directories.
        sniff_mime: Whether files are tagged with their magic-number label.
    """

    patterns: List[str] = Field(default_factory=list)
    exclude: List[str] = Field(default_factory=lambda: [".git", "__pycache__"])
    recursive: bool = False
    include_hidden: bool = False
    follow_symlinks: bool = False
    sniff_mime: bool = True


class TempOptions(SarfilesBaseModel):
    """Temporary directory settings.

    Attributes:
        prefix: Name prefix for created directories.
        base_dir: Parent directory; the system temp area when unset.
    """

    prefix: str = "sarfiles"
    base_dir: Optional[str] = None


class LoggingSettings(SarfilesBaseModel):
    """Runtime logging configuration.

    Attributes:
        level: Logging verbosity level name.
    """

    level: str = "WARNING"

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        normalized = value.upper()
        if not isinstance(logging.getLevelName(normalized), int):
            raise ValueError(f"unknown logging level {value!r}")
        return normalized


class CLIOptions(SarfilesBaseModel):
    """CLI behavior defaults.

    Attributes:
        quiet_default: Whether commands suppress non-error output by default.
    """

    quiet_default: bool = False


class SarfilesConfig(SarfilesBaseModel):
    """Top-level configuration for sarfiles.

    Attributes:
        scan: Directory scanner defaults.
        temp: Temporary directory settings.
        logging: Logging configuration.
        cli: CLI presentation defaults.
    """

    scan: ScanOptions = Field(default_factory=ScanOptions)
    temp: TempOptions = Field(default_factory=TempOptions)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    cli: CLIOptions = Field(default_factory=CLIOptions)


__all__ = [
    "SarfilesBaseModel",
    "ScanOptions",
    "TempOptions",
    "LoggingSettings",
    "CLIOptions",
    "SarfilesConfig",
]
