"""Tests for path segment and filename helpers."""

import os
from pathlib import Path

import pytest

from sarfiles.paths import base_no_ext, current_dir, ext_ensure, remove_path_before, split_path

SEP = os.sep


def test_split_path_trims_outer_separators() -> None:
    assert split_path(f"{SEP}a{SEP}b{SEP}c{SEP}") == ["a", "b", "c"]
    assert split_path(f"{SEP}{SEP}a{SEP}{SEP}") == ["a"]
    assert split_path(f"a{SEP}b") == ["a", "b"]


def test_split_path_empty_string_yields_single_empty_segment() -> None:
    assert split_path("") == [""]


def test_remove_path_before_uses_rightmost_anchor() -> None:
    assert remove_path_before(["a", "b", "a", "c"], "a") == ["a", "c"]
    assert remove_path_before(["a", "b", "a", "c"], "a", after=True) == ["c"]
    assert remove_path_before(["x", "src", "pkg", "mod"], "src", after=True) == ["pkg", "mod"]


def test_remove_path_before_missing_anchor_returns_copy() -> None:
    segments = ["a", "b", "c"]

    result = remove_path_before(segments, "z")

    assert result == ["a", "b", "c"]
    assert result is not segments


def test_remove_path_before_does_not_mutate_input() -> None:
    segments = ["a", "b", "c"]

    remove_path_before(segments, "b")

    assert segments == ["a", "b", "c"]


@pytest.mark.parametrize(
    ("filename", "ext", "expected"),
    [
        ("file.txt", ".md", "file.md"),
        ("file.md", ".md", "file.md"),
        ("README", ".md", "README.md"),
        ("archive.tar.gz", ".zip", "archive.tar.zip"),
        ("dir.d/file", ".md", "dir.d/file.md"),
        ("file.txt", "md", "filemd"),
    ],
)
def test_ext_ensure(filename: str, ext: str, expected: str) -> None:
    assert ext_ensure(filename, ext) == expected


def test_base_no_ext_strips_only_last_extension() -> None:
    assert base_no_ext(os.path.join(SEP, "dir", "archive.tar.gz")) == "archive.tar"
    assert base_no_ext(os.path.join("dir", "notes")) == "notes"
    assert base_no_ext(f"dir{SEP}notes.txt{SEP}") == "notes"
    assert base_no_ext("plain.txt") == "plain"


def test_current_dir_reports_working_directory(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)

    assert os.path.realpath(current_dir()) == os.path.realpath(tmp_path)
