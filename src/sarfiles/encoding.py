"""Fixed-width size encoding for length-prefixed frames."""

from __future__ import annotations

import struct

_UINT32 = struct.Struct(">I")
UINT32_MAX = 0xFFFFFFFF


def size_to_bytes(size: int) -> bytes:
    """Encode ``size`` as 4 big-endian bytes.

    Raises:
        ValueError: If ``size`` does not fit an unsigned 32-bit integer.
    """
    if not 0 <= size <= UINT32_MAX:
        raise ValueError(f"size {size} is outside the uint32 range")
    return _UINT32.pack(size)


def bytes_to_size(data: bytes) -> int:
    """Decode 4 big-endian bytes produced by :func:`size_to_bytes`."""
    if len(data) != _UINT32.size:
        raise ValueError(f"expected {_UINT32.size} bytes, got {len(data)}")
    return _UINT32.unpack(data)[0]


__all__ = ["UINT32_MAX", "size_to_bytes", "bytes_to_size"]
