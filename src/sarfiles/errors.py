"""Exceptions raised by the sarfiles library."""


class SarfilesError(Exception):
    """Base exception for file utility operations."""


class PatternError(SarfilesError, ValueError):
    """Raised when a glob pattern is malformed."""


class TempDirError(SarfilesError):
    """Raised when a temporary directory cannot be created."""


__all__ = ["SarfilesError", "PatternError", "TempDirError"]
