# topmark:header:start
#
#   project      : RiverCheck
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the RiverCheck test suite.

This file sets up global fixtures and customizes the logging configuration for test
runs. It also provides `fake_alloy`, a factory writing small executable Python
scripts that stand in for the ``alloy`` binary, so invoker and CLI tests exercise a
real subprocess without requiring Grafana Alloy.

Notes:
    Tests should respect the immutable/mutable configuration split: build configs
    with `MutableConfig`, then `freeze()` them into a `Config`.
"""

from __future__ import annotations

import stat
import sys
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from rivercheck.config import logging
from rivercheck.config.model import Config, MutableConfig
from rivercheck.constants import LOG_LEVEL_ENV_VAR

if TYPE_CHECKING:
    from pathlib import Path

F = TypeVar("F", bound=Callable[..., object])

DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.slow`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_slow: DecoratorType[Any] = as_typed_mark(pytest.mark.slow)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_rivercheck_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure RiverCheck's runtime log level is not forced via env during tests."""
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE so every log call is exercised during tests."""
    logging.setup_logging(level=logging.TRACE_LEVEL)


# Script bodies for `fake_alloy`. ``data`` holds the full stdin text.
ECHO = "sys.stdout.write(data)"
STRIP_TRAILING_SPACES = (
    "sys.stdout.write(''.join(line.rstrip() + '\\n' for line in data.splitlines()))"
)
PRINT_CWD = "import os\nsys.stdout.write(os.getcwd())"
PRINT_ARGS = "sys.stdout.write(' '.join(sys.argv[1:]))"


def fail_with(stderr: str, exit_code: int = 1) -> str:
    """Return a script body writing ``stderr`` and exiting with ``exit_code``."""
    return f"sys.stderr.write({stderr!r})\nsys.exit({exit_code})"


def errors_if_contains(marker: str, stderr: str) -> str:
    """Return a script body failing with ``stderr`` when stdin contains ``marker``, else echoing."""
    return (
        f"if {marker!r} in data:\n"
        f"    sys.stderr.write({stderr!r})\n"
        f"    sys.exit(1)\n"
        f"sys.stdout.write(data)"
    )


FakeAlloyFactory = Callable[..., "Path"]


@pytest.fixture
def fake_alloy(tmp_path: Path) -> FakeAlloyFactory:
    """Return a factory writing an executable fake formatter script.

    The factory takes the script body (Python source run after ``data`` has been read
    from stdin) and an optional file name, and returns the script path.
    """
    bin_dir: Path = tmp_path / "bin"
    bin_dir.mkdir(exist_ok=True)

    def _make(body: str = ECHO, name: str = "alloy") -> Path:
        script: Path = bin_dir / name
        script.write_text(
            f"#!{sys.executable}\nimport sys\ndata = sys.stdin.read()\n{body}\n",
            encoding="utf-8",
        )
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return _make


def make_config(**overrides: Any) -> Config:
    """Return a frozen `Config` built from defaults and keyword overrides."""
    m: MutableConfig = MutableConfig.from_defaults()
    for k, v in overrides.items():
        setattr(m, k, v)
    return m.freeze()


def count_concurrent_runs(state_dir: Path) -> str:
    """Return an echoing script body that records how many runs are alive at start.

    Each run registers itself in ``state_dir/running`` for a short while and appends the
    number of registered runs to ``state_dir/counts.txt``.
    """
    return (
        "import os, pathlib, time\n"
        f"state = pathlib.Path({str(state_dir)!r})\n"
        "me = state / 'running' / str(os.getpid())\n"
        "me.touch()\n"
        "n = len(list((state / 'running').iterdir()))\n"
        "with open(state / 'counts.txt', 'a') as fh:\n"
        "    fh.write(f'{n}\\n')\n"
        "time.sleep(0.05)\n"
        "me.unlink()\n"
        "sys.stdout.write(data)"
    )
