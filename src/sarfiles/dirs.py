"""Directory classification helpers."""

from __future__ import annotations

import logging
import os
import stat

from pydantic import BaseModel, ConfigDict

LOGGER = logging.getLogger(__name__)


class EntryInfo(BaseModel):
    """Metadata of a directory entry read without following symlinks.

    Attributes:
        name: Entry name relative to the directory it was listed from.
        mode: Raw ``st_mode`` from an lstat call.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    mode: int

    @classmethod
    def from_lstat(cls, root: str | os.PathLike[str], name: str) -> "EntryInfo":
        """Build an entry by calling ``os.lstat`` on ``root/name``."""
        return cls(name=name, mode=os.lstat(os.path.join(root, name)).st_mode)

    @classmethod
    def from_dir_entry(cls, entry: os.DirEntry[str]) -> "EntryInfo":
        """Build an entry from an ``os.scandir`` result."""
        return cls(name=entry.name, mode=entry.stat(follow_symlinks=False).st_mode)

    @property
    def is_dir(self) -> bool:
        return stat.S_ISDIR(self.mode)

    @property
    def is_symlink(self) -> bool:
        return stat.S_ISLNK(self.mode)


def is_dir_or_symlink_dir(root: str | os.PathLike[str], info: EntryInfo) -> bool:
    """Return True when ``info`` is a directory or a symlink to one.

    Link targets are resolved relative to ``root``. Resolution failures are
    logged and reported as False.

    Args:
        root: Directory ``info`` was listed from.
        info: Lstat-style metadata of the entry.

    Returns:
        bool: Whether the entry leads to a directory.
    """
    if info.is_dir:
        return True
    if not info.is_symlink:
        return False

    try:
        target = os.readlink(os.path.join(root, info.name))
        resolved = os.stat(os.path.join(root, target))
    except OSError as exc:
        LOGGER.warning("Unable to scan: %s", exc)
        return False
    return stat.S_ISDIR(resolved.st_mode)


def is_dir_empty(path: str | os.PathLike[str]) -> bool:
    """Return True when the directory at ``path`` has no entries.

    Raises:
        OSError: If the directory cannot be opened or read.
    """
    with os.scandir(path) as entries:
        return next(entries, None) is None


__all__ = ["EntryInfo", "is_dir_or_symlink_dir", "is_dir_empty"]
