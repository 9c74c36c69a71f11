"""Directory scanning built on the file utility helpers."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, Literal, Optional

from pydantic import BaseModel

from .dirs import EntryInfo, is_dir_empty, is_dir_or_symlink_dir
from .mime import get_file_mime
from .patterns import file_match

LOGGER = logging.getLogger(__name__)


class ScanEntry(BaseModel):
    """A file or directory discovered by :class:`DirectoryScanner`.

    Attributes:
        path: Absolute path of the entry.
        kind: Whether the entry leads to a file or a directory.
        symlink: Whether the entry itself is a symbolic link.
        empty: For directories, whether they contain no entries.
        mime: For files, the sniffed format label when sniffing is enabled.
    """

    path: Path
    kind: Literal["file", "dir"]
    symlink: bool = False
    empty: Optional[bool] = None
    mime: Optional[str] = None


class DirectoryScanner:
    """Discover entries within a directory tree subject to pattern filters."""

    def __init__(
        self,
        *,
        patterns: Iterable[str] = (),
        exclude: Iterable[str] = (),
        recursive: bool = False,
        include_hidden: bool = False,
        follow_symlinks: bool = False,
        sniff_mime: bool = True,
    ) -> None:
        self.patterns = list(patterns)
        self.exclude = list(exclude)
        self.recursive = recursive
        self.include_hidden = include_hidden
        self.follow_symlinks = follow_symlinks
        self.sniff_mime = sniff_mime

    def scan(self, root: Path) -> Iterator[ScanEntry]:
        """Yield entries discovered under root respecting configured filters."""
        root = root.expanduser().resolve()
        if not root.is_dir():
            return
        yield from self._scan_dir(root, set())

    def _scan_dir(self, directory: Path, seen: set[str]) -> Iterator[ScanEntry]:
        real = os.path.realpath(directory)
        if real in seen:
            LOGGER.debug("Skipping already visited directory %s", directory)
            return
        seen.add(real)
        infos: list[EntryInfo] = []
        try:
            with os.scandir(directory) as iterator:
                for entry in iterator:
                    try:
                        infos.append(EntryInfo.from_dir_entry(entry))
                    except OSError as exc:
                        LOGGER.warning("Skipping unreadable entry %s: %s", entry.path, exc)
        except OSError as exc:
            LOGGER.warning("Skipping unreadable directory %s: %s", directory, exc)
            return
        infos.sort(key=lambda info: info.name)

        for info in infos:
            if not self.include_hidden and info.name.startswith("."):
                continue
            if file_match(info.name, self.exclude):
                continue

            path = directory / info.name
            if is_dir_or_symlink_dir(directory, info):
                yield ScanEntry(
                    path=path,
                    kind="dir",
                    symlink=info.is_symlink,
                    empty=self._dir_is_empty(path),
                )
                if self.recursive and (self.follow_symlinks or not info.is_symlink):
                    yield from self._scan_dir(path, seen)
                continue

            if self.patterns and not file_match(info.name, self.patterns):
                continue
            yield ScanEntry(
                path=path,
                kind="file",
                symlink=info.is_symlink,
                mime=get_file_mime(path) if self.sniff_mime else None,
            )

    def _dir_is_empty(self, path: Path) -> Optional[bool]:
        try:
            return is_dir_empty(path)
        except OSError as exc:
            LOGGER.warning("Unable to list %s: %s", path, exc)
            return None


__all__ = ["DirectoryScanner", "ScanEntry"]
