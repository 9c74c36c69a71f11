"""Temporary directory lifecycle."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from contextlib import contextmanager
from typing import Iterator

from .errors import TempDirError

LOGGER = logging.getLogger(__name__)


def temp_make(prefix: str, base_dir: str | os.PathLike[str] | None = None) -> str:
    """Create a uniquely named temporary directory.

    Args:
        prefix: Leading part of the directory name; ``"-"`` and a random
            suffix are appended.
        base_dir: Parent directory. Defaults to the system temp area.

    Returns:
        str: Path of the new, empty directory with a trailing separator.

    Raises:
        TempDirError: If the directory cannot be created.
    """
    try:
        directory = tempfile.mkdtemp(prefix=f"{prefix}-", dir=base_dir)
    except OSError as exc:
        LOGGER.error("Unable to create temp directory: %s", exc)
        raise TempDirError(f"Unable to create temp directory: {exc}") from exc
    return directory + os.sep


def temp_remove(path: str | os.PathLike[str]) -> None:
    """Remove ``path`` and everything below it.

    A missing path is not an error. Symlinks are removed, never followed.

    Raises:
        OSError: If an existing tree cannot be deleted.
    """
    path = os.fspath(path)
    # "link/" would resolve through the link, so classify the bare name.
    target = path.rstrip(os.sep) or path
    try:
        if os.path.islink(target) or not os.path.isdir(target):
            os.remove(target)
        else:
            shutil.rmtree(target)
    except FileNotFoundError:
        return


@contextmanager
def temporary_directory(
    prefix: str, base_dir: str | os.PathLike[str] | None = None
) -> Iterator[str]:
    """Yield a fresh temp directory and remove it afterwards."""
    directory = temp_make(prefix, base_dir)
    try:
        yield directory
    finally:
        temp_remove(directory)


__all__ = ["temp_make", "temp_remove", "temporary_directory"]
