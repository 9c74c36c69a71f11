"""Glob-style filename matching."""

from __future__ import annotations

import logging
import os
import re
from functools import lru_cache
from typing import Iterable

from .errors import PatternError

LOGGER = logging.getLogger(__name__)

_SEPARATORS = re.escape("".join(sorted({"/", os.sep})))
_ANY_RUN = f"[^{_SEPARATORS}]*"
_ANY_ONE = f"[^{_SEPARATORS}]"


def _read_class_char(pattern: str, index: int) -> tuple[str, int]:
    """Return the literal character at ``index`` inside a class and the next index."""
    if index >= len(pattern):
        raise PatternError(f"unterminated character class in {pattern!r}")
    char = pattern[index]
    if char in "-]":
        raise PatternError(f"unescaped {char!r} in character class of {pattern!r}")
    if char == "\\":
        index += 1
        if index >= len(pattern):
            raise PatternError(f"dangling escape in {pattern!r}")
        char = pattern[index]
    return char, index + 1


def _translate_class(pattern: str, index: int) -> tuple[str, int]:
    """Translate the class opened just before ``index`` into a regex class."""
    negate = False
    if index < len(pattern) and pattern[index] in "^!":
        negate = True
        index += 1

    parts: list[str] = []
    while True:
        if index >= len(pattern):
            raise PatternError(f"unterminated character class in {pattern!r}")
        if pattern[index] == "]" and parts:
            index += 1
            break
        if pattern[index] == "]":
            raise PatternError(f"empty character class in {pattern!r}")
        low, index = _read_class_char(pattern, index)
        if index < len(pattern) and pattern[index] == "-":
            high, index = _read_class_char(pattern, index + 1)
            if high < low:
                raise PatternError(f"bad range {low}-{high} in {pattern!r}")
            parts.append(f"{re.escape(low)}-{re.escape(high)}")
        else:
            parts.append(re.escape(low))

    body = "".join(parts)
    if negate:
        return f"[^{body}]", index
    return f"[{body}]", index


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Translate a glob pattern into a compiled regular expression.

    ``*`` and ``?`` never match a path separator; classes, negated ones
    included, may. Classes accept ``^`` or ``!`` for negation, ``a-z`` ranges
    and backslash escapes; a literal ``-`` or ``]`` inside a class must be
    escaped.

    Args:
        pattern: Glob pattern to translate.

    Returns:
        re.Pattern[str]: Expression matching the whole of a name.

    Raises:
        PatternError: If the pattern is malformed.
    """
    chunks: list[str] = []
    index = 0
    while index < len(pattern):
        char = pattern[index]
        index += 1
        if char == "*":
            while index < len(pattern) and pattern[index] == "*":
                index += 1
            chunks.append(_ANY_RUN)
        elif char == "?":
            chunks.append(_ANY_ONE)
        elif char == "[":
            translated, index = _translate_class(pattern, index)
            chunks.append(translated)
        elif char == "\\":
            if index >= len(pattern):
                raise PatternError(f"dangling escape in {pattern!r}")
            chunks.append(re.escape(pattern[index]))
            index += 1
        else:
            chunks.append(re.escape(char))
    return re.compile("".join(chunks), re.DOTALL)


def file_match(name: str, patterns: Iterable[str]) -> bool:
    """Return True when any pattern in ``patterns`` matches ``name``.

    Malformed patterns are logged and skipped.
    """
    for pattern in patterns:
        try:
            regex = compile_pattern(pattern)
        except PatternError as exc:
            LOGGER.warning("FileMatch: %s, %s - %s", pattern, name, exc)
            continue
        if regex.fullmatch(name):
            return True
    return False


__all__ = ["compile_pattern", "file_match"]
