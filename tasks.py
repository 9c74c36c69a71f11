"""Invoke tasks wrapping the uv toolchain for sarfiles development.

Run ``invoke --list`` for the available tasks; each one shells out to ``uv`` so
local runs match CI.
"""

from __future__ import annotations

import shlex
import shutil
from collections.abc import Sequence
from pathlib import Path

from invoke import Collection, Context, task

PROJECT_ROOT = Path(__file__).parent
DIST_DIR = PROJECT_ROOT / "dist"
SOURCE_DIRS = ("src", "tests")


def _uv(ctx: Context, *args: str, echo: bool = True) -> None:
    """Run ``uv`` with ``args`` inside a PTY."""
    ctx.run(shlex.join(("uv", *args)), echo=echo, pty=True)


@task
def sync(ctx: Context, dev: bool = True) -> None:
    """Install the project into the uv-managed environment.

    Args:
        ctx: Invoke execution context.
        dev: Also install the ``dev`` extra (pytest, ruff, mypy, invoke).
    """
    _uv(ctx, "sync", *(("--extra", "dev") if dev else ()))


@task(help={"clean": "Delete dist/ before building."})
def build(ctx: Context, clean: bool = False) -> None:
    """Build the sdist and wheel into ``dist/``."""
    if clean and DIST_DIR.exists():
        shutil.rmtree(DIST_DIR)
    _uv(ctx, "build")


@task(
    help={
        "k": "pytest -k expression for test selection.",
        "path": "Test path (defaults to tests/).",
        "options": "Extra flags passed to pytest as-is.",
    }
)
def tests(ctx: Context, k: str = "", path: str = "tests", options: str = "") -> None:
    """Run the pytest suite.

    Args:
        ctx: Invoke execution context.
        k: Selection expression forwarded as ``-k``.
        path: File or directory to collect from.
        options: Additional pytest arguments.
    """
    args: list[str] = ["run", "pytest"]
    if k:
        args.extend(["-k", k])
    args.extend(shlex.split(options))
    args.append(path)
    _uv(ctx, *args)


@task(help={"fix": "Let ruff apply safe fixes.", "check_format": "Also run ruff format --check."})
def lint(ctx: Context, fix: bool = False, check_format: bool = False) -> None:
    """Lint ``src`` and ``tests`` with ruff."""
    if check_format:
        _uv(ctx, "run", "ruff", "format", "--check", *SOURCE_DIRS)
    extra: Sequence[str] = ("--fix",) if fix else ()
    _uv(ctx, "run", "ruff", "check", *SOURCE_DIRS, *extra)


@task
def mypy(ctx: Context) -> None:
    """Type-check the ``sarfiles`` package."""
    _uv(ctx, "run", "mypy")


@task
def ci(ctx: Context) -> None:
    """Run format check, lint, type check and tests in CI order."""
    lint(ctx, check_format=True)
    mypy(ctx)
    tests(ctx)


namespace = Collection(sync, build, tests, lint, mypy, ci)
