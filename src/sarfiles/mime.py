"""Magic-number file type detection."""

from __future__ import annotations

import logging
import os
from types import MappingProxyType
from typing import Mapping

LOGGER = logging.getLogger(__name__)

UNKNOWN_MIME = "Unknown"

MAGIC_TABLE: Mapping[bytes, str] = MappingProxyType(
    {
        b"\x37\x7A\xBC\xAF\x27\x1C\x00\x04": "7zip",
        b"\xFD\x37\x7A\x58\x5A\x00\x00": "xz",
        b"\x1F\x8B\x08\x00\x00\x09\x6E\x88": "gzip",
        b"\x75\x73\x74\x61\x72": "tar",
    }
)

# Longest signatures are tried first so overlapping prefixes resolve the same
# way on every run. sorted() is stable, so equal lengths keep table order.
_ORDERED_SIGNATURES = tuple(sorted(MAGIC_TABLE.items(), key=lambda item: -len(item[0])))
_PEEK_SIZE = max(len(signature) for signature in MAGIC_TABLE)


def get_file_mime(filename: str | os.PathLike[str]) -> str:
    """Return the format label for ``filename`` based on its leading bytes.

    Args:
        filename: File to inspect.

    Returns:
        str: A label from :data:`MAGIC_TABLE`, or ``"Unknown"`` when the file
        cannot be read or no signature matches.
    """
    try:
        with open(filename, "rb") as handle:
            peeked = handle.read(_PEEK_SIZE)
    except OSError as exc:
        LOGGER.debug("Unable to sniff %s: %s", filename, exc)
        return UNKNOWN_MIME

    for signature, label in _ORDERED_SIGNATURES:
        if peeked.startswith(signature):
            return label
    return UNKNOWN_MIME


__all__ = ["MAGIC_TABLE", "UNKNOWN_MIME", "get_file_mime"]
