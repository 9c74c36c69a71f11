"""Command line interface for the sarfiles utilities."""

from __future__ import annotations

import difflib
from pathlib import Path
from typing import Any

import click
import yaml
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from sarfiles.config import ConfigError, ConfigManager, SarfilesConfig, resolve_with_precedence
from sarfiles.dirs import is_dir_empty
from sarfiles.encoding import UINT32_MAX, size_to_bytes
from sarfiles.errors import SarfilesError
from sarfiles.logging_config import configure_logging
from sarfiles.mime import get_file_mime
from sarfiles.paths import base_no_ext, ext_ensure, remove_path_before, split_path
from sarfiles.patterns import file_match
from sarfiles.scanner import DirectoryScanner
from sarfiles.tempdirs import temp_make, temp_remove

console = Console()

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class AppContext:
    """Settings shared by every command of one invocation."""

    def __init__(self, *, log_level: str | None, quiet: bool | None) -> None:
        self._log_level = log_level
        self._quiet = quiet
        self._config: SarfilesConfig | None = None

    def load(self) -> SarfilesConfig:
        """Load the effective configuration once and configure logging from it.

        Raises:
            click.ClickException: If the configuration cannot be loaded.
        """
        if self._config is None:
            try:
                self._config = ConfigManager().load()
            except ConfigError as exc:
                raise click.ClickException(str(exc)) from exc
            configure_logging(self._log_level or self._config.logging.level)
        return self._config

    @property
    def quiet(self) -> bool:
        if self._quiet is not None:
            return self._quiet
        return self.load().cli.quiet_default


def _handle_cli_error(
    message: str,
    *,
    code: str,
    json_output: bool,
    original: Exception | None = None,
) -> None:
    """Report an error as JSON or as a Click exception.

    Args:
        message: Human-readable error message.
        code: Machine-readable error identifier.
        json_output: Indicates whether JSON mode is active.
        original: Exception to chain when not using JSON.

    Raises:
        SystemExit: When emitting JSON output.
        click.ClickException: For non-JSON flows.
    """
    if json_output:
        console.print_json(data={"error": {"code": code, "message": message}})
        raise SystemExit(1)
    raise click.ClickException(message) from original


def _emit(app: AppContext, message: Any) -> None:
    """Print an informational line unless quiet mode is active."""
    if not app.quiet:
        console.print(message)


def _assign_nested(target: dict[str, Any], path: list[str], value: Any) -> None:
    node = target
    for segment in path[:-1]:
        existing = node.setdefault(segment, {})
        if not isinstance(existing, dict):
            raise ConfigError(f"Cannot assign into '{segment}' because it is not a mapping.")
        node = existing
    node[path[-1]] = value


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="sarfiles")
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    help="Override the configured logging level.",
)
@click.option("--quiet/--no-quiet", default=None, help="Suppress informational output.")
@click.pass_context
def cli(ctx: click.Context, log_level: str | None, quiet: bool | None) -> None:
    """File utilities backing the Search And Replace file browser."""
    ctx.obj = AppContext(log_level=log_level, quiet=quiet)


@cli.command()
@click.argument("name")
@click.argument("patterns", nargs=-1)
@click.pass_obj
def match(app: AppContext, name: str, patterns: tuple[str, ...]) -> None:
    """Report whether NAME matches any of the glob PATTERNS."""
    app.load()
    console.print("match" if file_match(name, patterns) else "no match")


@cli.command()
@click.argument("path")
@click.option("--at", "anchor", help="Drop segments before the last ANCHOR segment.")
@click.option("--after", is_flag=True, help="Drop the anchor segment as well.")
@click.pass_obj
def split(app: AppContext, path: str, anchor: str | None, after: bool) -> None:
    """Print the segments of PATH, one per line."""
    app.load()
    segments = split_path(path)
    if anchor is not None:
        segments = remove_path_before(segments, anchor, after=after)
    for segment in segments:
        console.print(segment, markup=False, highlight=False, soft_wrap=True)


@cli.command()
@click.argument("filename")
@click.argument("extension")
def ext(filename: str, extension: str) -> None:
    """Print FILENAME with its extension replaced by EXTENSION."""
    console.print(ext_ensure(filename, extension), markup=False, highlight=False, soft_wrap=True)


@cli.command()
@click.argument("filename")
def basename(filename: str) -> None:
    """Print the final component of FILENAME without its extension."""
    console.print(base_no_ext(filename), markup=False, highlight=False, soft_wrap=True)


@cli.command()
@click.argument("value", type=click.IntRange(0, UINT32_MAX))
def size(value: int) -> None:
    """Print VALUE as 4 big-endian bytes in hex."""
    console.print(size_to_bytes(value).hex(), highlight=False)


@cli.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(path_type=str))
@click.option("--json", "json_output", is_flag=True, help="Emit results as JSON.")
@click.pass_obj
def mime(app: AppContext, files: tuple[str, ...], json_output: bool) -> None:
    """Detect the archive format of FILES from their magic numbers."""
    try:
        app.load()
    except click.ClickException as exc:
        _handle_cli_error(exc.message, code="config_error", json_output=json_output, original=exc)
        return
    results = {name: get_file_mime(name) for name in files}
    if json_output:
        console.print_json(data=results)
        return
    for name, label in results.items():
        console.print(f"{name}: {label}", markup=False, highlight=False, soft_wrap=True)


@cli.command()
@click.argument("directory", type=click.Path(path_type=str))
@click.pass_obj
def empty(app: AppContext, directory: str) -> None:
    """Report whether DIRECTORY has no entries."""
    app.load()
    try:
        result = is_dir_empty(directory)
    except OSError as exc:
        raise click.ClickException(f"Unable to read {directory}: {exc}") from exc
    console.print("empty" if result else "not empty")


@cli.group()
def temp() -> None:
    """Create and remove temporary directories."""


@temp.command("make")
@click.option("--prefix", help="Directory name prefix (defaults to temp.prefix).")
@click.option(
    "--base-dir",
    type=click.Path(file_okay=False, path_type=str),
    help="Parent directory (defaults to temp.base_dir or the system temp area).",
)
@click.pass_obj
def temp_make_command(app: AppContext, prefix: str | None, base_dir: str | None) -> None:
    """Create a temporary directory and print its path."""
    settings = app.load().temp
    try:
        directory = temp_make(prefix or settings.prefix, base_dir or settings.base_dir)
    except SarfilesError as exc:
        raise click.ClickException(str(exc)) from exc
    console.print(directory, markup=False, highlight=False, soft_wrap=True)


@temp.command("rm")
@click.argument("path", type=click.Path(path_type=str))
@click.pass_obj
def temp_rm_command(app: AppContext, path: str) -> None:
    """Remove PATH recursively; a missing PATH is not an error."""
    try:
        temp_remove(path)
    except OSError as exc:
        raise click.ClickException(f"Unable to remove {path}: {exc}") from exc
    _emit(app, f"[green]Removed {escape(path)}.[/green]")


@cli.command()
@click.argument("path", type=click.Path(exists=True, file_okay=False, path_type=str))
@click.option("-p", "--pattern", "patterns", multiple=True, help="Only list files matching PATTERN.")
@click.option("-x", "--exclude", multiple=True, help="Skip entries matching EXCLUDE.")
@click.option("-r", "--recursive", is_flag=True, help="Include all subdirectories.")
@click.option("--hidden", is_flag=True, help="Include dot-prefixed entries.")
@click.option("--follow-symlinks", is_flag=True, help="Descend into symlinked directories.")
@click.option("--no-mime", is_flag=True, help="Skip magic-number detection.")
@click.option("--json", "json_output", is_flag=True, help="Emit entries as JSON.")
@click.pass_obj
def scan(
    app: AppContext,
    path: str,
    patterns: tuple[str, ...],
    exclude: tuple[str, ...],
    recursive: bool,
    hidden: bool,
    follow_symlinks: bool,
    no_mime: bool,
    json_output: bool,
) -> None:
    """List files and directories under PATH.

    Command-line flags extend the defaults from the ``scan`` config section.
    """
    try:
        options = app.load().scan
    except click.ClickException as exc:
        _handle_cli_error(exc.message, code="config_error", json_output=json_output, original=exc)
        return

    scanner = DirectoryScanner(
        patterns=patterns or options.patterns,
        exclude=[*options.exclude, *exclude],
        recursive=recursive or options.recursive,
        include_hidden=hidden or options.include_hidden,
        follow_symlinks=follow_symlinks or options.follow_symlinks,
        sniff_mime=options.sniff_mime and not no_mime,
    )
    root = Path(path).expanduser().resolve()
    entries = list(scanner.scan(root))

    if json_output:
        console.print_json(data=[entry.model_dump(mode="json") for entry in entries])
        return

    table = Table(title=f"Entries under {escape(str(root))}")
    table.add_column("Path")
    table.add_column("Kind")
    table.add_column("Details")
    for entry in entries:
        if entry.kind == "dir":
            details = "empty" if entry.empty else ""
        else:
            details = entry.mime or ""
        if entry.symlink:
            details = f"{details} (symlink)".strip()
        table.add_row(escape(str(entry.path.relative_to(root))), entry.kind, details)
    console.print(table)

    files = sum(1 for entry in entries if entry.kind == "file")
    summary = f"Scan summary for {escape(str(root))}: files={files}, dirs={len(entries) - files}."
    _emit(app, f"[green]{summary}[/green]")


@cli.group()
def config() -> None:
    """Manage sarfiles configuration files and overrides."""


@config.command("view")
@click.option("--no-env", is_flag=True, help="Ignore environment overrides when displaying output.")
def config_view(no_env: bool) -> None:
    """Display the effective configuration after applying precedence rules.

    Raises:
        click.ClickException: If configuration cannot be loaded.
    """
    manager = ConfigManager()
    try:
        loaded = manager.load(include_env=not no_env)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    yaml_text = yaml.safe_dump(loaded.model_dump(mode="python"), sort_keys=False)
    console.print(Syntax(yaml_text, "yaml", word_wrap=True))


@config.command("set")
@click.argument("key")
@click.option("--value", required=True, help="Value to assign to KEY.")
def config_set(key: str, value: str) -> None:
    """Persist a configuration value expressed as a dotted KEY.

    Raises:
        click.ClickException: If parsing, assignment, or validation fails.
    """
    manager = ConfigManager()
    manager.ensure_exists()

    segments = [segment.strip() for segment in key.split(".") if segment.strip()]
    if not segments:
        raise click.ClickException("KEY must specify a dotted path such as 'scan.recursive'.")

    try:
        parsed_value = yaml.safe_load(value)
    except yaml.YAMLError as exc:
        raise click.ClickException(f"Unable to parse value: {exc}") from exc

    before = manager.read_text().splitlines()
    try:
        file_data = manager.load_file_overrides()
        _assign_nested(file_data, segments, parsed_value)
        resolve_with_precedence(defaults=SarfilesConfig(), file_overrides=file_data)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    manager.save(file_data)
    # The timestamp line always changes; ignore it when diffing.
    after = manager.read_text().splitlines()
    diff = [
        line
        for line in difflib.unified_diff(
            before, after, fromfile="config.yaml (before)", tofile="config.yaml (after)", lineterm=""
        )
        if "Last updated:" not in line
    ]

    if not any(line.startswith(("+", "-")) and not line.startswith(("+++", "---")) for line in diff):
        console.print("[yellow]No changes applied; value already up to date.[/yellow]")
        return

    console.print(Syntax("\n".join(diff), "diff", word_wrap=False))
    console.print(f"[green]Updated {'.'.join(segments)}.[/green]")


@config.command("edit")
def config_edit() -> None:
    """Open the configuration file in an interactive editor session.

    Raises:
        click.ClickException: If edited content is invalid or cannot be saved.
    """
    manager = ConfigManager()
    manager.ensure_exists()

    original = manager.read_text()
    edited = click.edit(original, extension=".yaml")

    if edited is None or edited == original:
        console.print("[yellow]No changes detected.[/yellow]")
        return

    try:
        parsed = yaml.safe_load(edited) or {}
    except yaml.YAMLError as exc:
        raise click.ClickException(f"Invalid YAML: {exc}") from exc

    if not isinstance(parsed, dict):
        raise click.ClickException("Configuration file must contain a top-level mapping.")

    try:
        resolve_with_precedence(defaults=SarfilesConfig(), file_overrides=parsed)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    manager.save(parsed)
    console.print("[green]Configuration updated successfully.[/green]")


def main() -> None:
    """Invoke the Click CLI as the console script entry point."""
    cli()


if __name__ == "__main__":
    main()
