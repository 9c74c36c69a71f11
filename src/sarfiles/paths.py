"""Path segment and filename helpers."""

from __future__ import annotations

import os
from typing import Sequence


def split_path(path: str) -> list[str]:
    """Split ``path`` into segments after trimming outer separators.

    Args:
        path: Separator-delimited path, absolute or relative.

    Returns:
        list[str]: Ordered segments. An empty path yields ``[""]``.
    """
    return path.strip(os.sep).split(os.sep)


def remove_path_before(segments: Sequence[str], at: str, after: bool = False) -> list[str]:
    """Drop the segments preceding the rightmost occurrence of ``at``.

    Args:
        segments: Path segments, usually from :func:`split_path`.
        at: Anchor segment to look for.
        after: Also drop the anchor itself when True.

    Returns:
        list[str]: A new list; a copy of ``segments`` when ``at`` is absent.
    """
    for index in range(len(segments) - 1, -1, -1):
        if segments[index] == at:
            start = index + 1 if after else index
            return list(segments[start:])
    return list(segments)


def _extension(filename: str) -> str:
    # Only the last slash-separated element is considered.
    for index in range(len(filename) - 1, -1, -1):
        char = filename[index]
        if char == "/":
            break
        if char == ".":
            return filename[index:]
    return ""


def _base(filename: str) -> str:
    if not filename:
        return "."
    trimmed = filename.rstrip(os.sep)
    if not trimmed:
        return os.sep
    return trimmed.rsplit(os.sep, 1)[-1]


def ext_ensure(filename: str, ext: str) -> str:
    """Return ``filename`` ending with ``ext``, replacing any current extension.

    No dot is inserted: pass ``".md"`` rather than ``"md"``.
    """
    if filename.endswith(ext):
        return filename
    current = _extension(filename)
    return filename[: len(filename) - len(current)] + ext


def base_no_ext(filename: str) -> str:
    """Return the final component of ``filename`` without its last extension."""
    base = _base(filename)
    current = _extension(base)
    return base[: len(base) - len(current)]


def current_dir() -> str:
    """Return the process working directory."""
    return os.getcwd()


__all__ = ["split_path", "remove_path_before", "ext_ensure", "base_no_ext", "current_dir"]
