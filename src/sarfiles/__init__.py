"""File utilities for the Search And Replace application."""

from importlib import metadata as _metadata

from .dirs import EntryInfo, is_dir_empty, is_dir_or_symlink_dir
from .encoding import bytes_to_size, size_to_bytes
from .errors import PatternError, SarfilesError, TempDirError
from .mime import MAGIC_TABLE, UNKNOWN_MIME, get_file_mime
from .paths import base_no_ext, current_dir, ext_ensure, remove_path_before, split_path
from .patterns import compile_pattern, file_match
from .tempdirs import temp_make, temp_remove, temporary_directory

__all__ = [
    "__version__",
    "EntryInfo",
    "is_dir_empty",
    "is_dir_or_symlink_dir",
    "bytes_to_size",
    "size_to_bytes",
    "PatternError",
    "SarfilesError",
    "TempDirError",
    "MAGIC_TABLE",
    "UNKNOWN_MIME",
    "get_file_mime",
    "base_no_ext",
    "current_dir",
    "ext_ensure",
    "remove_path_before",
    "split_path",
    "compile_pattern",
    "file_match",
    "temp_make",
    "temp_remove",
    "temporary_directory",
]


def __getattr__(name: str):
    if name == "__version__":
        return _metadata.version("sarfiles")
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__():
    return sorted(list(globals().keys()) + ["__version__"])
