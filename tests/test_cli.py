"""CLI tests for the file utility commands."""

import json
import os
from pathlib import Path

from click.testing import CliRunner

from sarfiles.cli import cli

SEP = os.sep
GZIP_HEADER = b"\x1f\x8b\x08\x00\x00\x09\x6e\x88"


def _env_with_home(tmp_path: Path) -> dict[str, str]:
    env = {key: value for key, value in os.environ.items() if not key.startswith("SARFILES__")}
    env["HOME"] = str(tmp_path / "home")
    return env


def test_cli_help_displays_commands() -> None:
    result = CliRunner().invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "Search And Replace" in result.output
    for command in ("match", "split", "mime", "scan", "temp", "config"):
        assert command in result.output


def test_match_command(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)

    hit = runner.invoke(cli, ["match", "main.go", "*.py", "*.go"], env=env)
    miss = runner.invoke(cli, ["match", "main.go", "*.py"], env=env)

    assert hit.exit_code == 0 and hit.output.strip() == "match"
    assert miss.exit_code == 0 and miss.output.strip() == "no match"


def test_split_command_with_anchor(tmp_path: Path) -> None:
    result = CliRunner().invoke(
        cli,
        ["split", f"{SEP}a{SEP}b{SEP}a{SEP}c{SEP}", "--at", "a"],
        env=_env_with_home(tmp_path),
    )

    assert result.exit_code == 0
    assert result.output.splitlines() == ["a", "c"]


def test_filename_commands() -> None:
    runner = CliRunner()

    assert runner.invoke(cli, ["ext", "file.txt", ".md"]).output.strip() == "file.md"
    assert runner.invoke(cli, ["basename", "archive.tar.gz"]).output.strip() == "archive.tar"
    assert runner.invoke(cli, ["size", "497"]).output.strip() == "000001f1"


def test_size_command_rejects_out_of_range() -> None:
    result = CliRunner().invoke(cli, ["size", "4294967296"])

    assert result.exit_code != 0


def test_mime_command_json(tmp_path: Path) -> None:
    archive = tmp_path / "a.gz"
    archive.write_bytes(GZIP_HEADER)
    missing = tmp_path / "missing.bin"

    result = CliRunner().invoke(
        cli, ["mime", str(archive), str(missing), "--json"], env=_env_with_home(tmp_path)
    )

    assert result.exit_code == 0
    assert json.loads(result.output) == {str(archive): "gzip", str(missing): "Unknown"}


def test_empty_command(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)
    target = tmp_path / "target"
    target.mkdir()

    assert runner.invoke(cli, ["empty", str(target)], env=env).output.strip() == "empty"

    (target / "file.txt").write_text("x", encoding="utf-8")
    assert runner.invoke(cli, ["empty", str(target)], env=env).output.strip() == "not empty"

    failed = runner.invoke(cli, ["empty", str(tmp_path / "missing")], env=env)
    assert failed.exit_code != 0
    assert "Unable to read" in failed.output


def test_temp_make_and_remove(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)
    base = tmp_path / "scratch"
    base.mkdir()

    made = runner.invoke(cli, ["temp", "make", "--prefix", "job", "--base-dir", str(base)], env=env)

    assert made.exit_code == 0
    created = made.output.strip()
    assert created.endswith(SEP)
    assert Path(created).is_dir()
    assert Path(created).name.startswith("job-")

    for _ in range(2):
        removed = runner.invoke(cli, ["temp", "rm", created], env=env)
        assert removed.exit_code == 0
    assert not Path(created).exists()


def test_temp_make_failure_exits_non_zero(tmp_path: Path) -> None:
    result = CliRunner().invoke(
        cli,
        ["temp", "make", "--base-dir", str(tmp_path / "missing")],
        env=_env_with_home(tmp_path),
    )

    assert result.exit_code != 0
    assert "Unable to create temp directory" in result.output


def test_scan_command_json(tmp_path: Path) -> None:
    root = tmp_path / "data"
    (root / "nested").mkdir(parents=True)
    (root / "notes.txt").write_text("hello", encoding="utf-8")
    (root / "nested" / "deep.txt").write_text("deep", encoding="utf-8")
    (root / "skip.log").write_text("log", encoding="utf-8")

    result = CliRunner().invoke(
        cli,
        ["scan", str(root), "-r", "-p", "*.txt", "--json"],
        env=_env_with_home(tmp_path),
    )

    assert result.exit_code == 0
    payload = json.loads(result.output)
    names = [Path(entry["path"]).name for entry in payload]
    assert names == ["nested", "deep.txt", "notes.txt"]
    assert payload[0]["kind"] == "dir" and payload[0]["empty"] is False


def test_scan_command_table_and_quiet(tmp_path: Path) -> None:
    root = tmp_path / "data"
    root.mkdir()
    (root / "notes.txt").write_text("hello", encoding="utf-8")
    runner = CliRunner()
    env = _env_with_home(tmp_path)

    loud = runner.invoke(cli, ["scan", str(root)], env=env)
    quiet = runner.invoke(cli, ["--quiet", "scan", str(root)], env=env)

    assert loud.exit_code == 0
    assert "notes.txt" in loud.output
    assert "Scan summary" in loud.output
    assert quiet.exit_code == 0
    assert "Scan summary" not in quiet.output


def test_scan_reports_config_errors_as_json(tmp_path: Path) -> None:
    env = _env_with_home(tmp_path)
    config_path = tmp_path / "home" / ".sarfiles" / "config.yaml"
    config_path.parent.mkdir(parents=True)
    config_path.write_text("scan:\n  recursive: maybe-later\n", encoding="utf-8")

    result = CliRunner().invoke(cli, ["scan", str(tmp_path), "--json"], env=env)

    assert result.exit_code == 1
    assert json.loads(result.output)["error"]["code"] == "config_error"


def test_scan_shows_bracketed_names_literally(tmp_path: Path) -> None:
    root = tmp_path / "data"
    (root / "notes[").mkdir(parents=True)
    (root / "notes[" / "b]").write_text("x", encoding="utf-8")
    (root / "[draft] notes.txt").write_text("x", encoding="utf-8")

    result = CliRunner().invoke(
        cli, ["scan", str(root), "-r", "--no-mime"], env=_env_with_home(tmp_path)
    )

    assert result.exit_code == 0
    assert "notes[/b]" in result.output
    assert "[draft] notes.txt" in result.output
    assert "Scan summary" in result.output


def test_temp_rm_bracketed_path_reports_success(tmp_path: Path) -> None:
    target = tmp_path / "job[" / "x]"
    target.mkdir(parents=True)

    result = CliRunner().invoke(cli, ["temp", "rm", str(target)], env=_env_with_home(tmp_path))

    assert result.exit_code == 0
    assert "Removed" in result.output
    assert not target.exists()


def test_mime_reports_config_errors_as_json(tmp_path: Path) -> None:
    env = _env_with_home(tmp_path)
    config_path = tmp_path / "home" / ".sarfiles" / "config.yaml"
    config_path.parent.mkdir(parents=True)
    config_path.write_text("logging:\n  level: chatty\n", encoding="utf-8")

    result = CliRunner().invoke(cli, ["mime", str(config_path), "--json"], env=env)

    assert result.exit_code == 1
    assert json.loads(result.output)["error"]["code"] == "config_error"
