# topmark:header:start
#
#   project      : RiverCheck
#   file         : test_cli_format.py
#   file_relpath : tests/cli/test_cli_format.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `rivercheck format`."""

from __future__ import annotations

from pathlib import Path

import pytest

from rivercheck.cli.exit_codes import ExitCode
from tests.cli.conftest import assert_exit, assert_SUCCESS, assert_WOULD_CHANGE, run_cli_in
from tests.conftest import (
    STRIP_TRAILING_SPACES,
    FakeAlloyFactory,
    count_concurrent_runs,
    errors_if_contains,
    fail_with,
)

UNFORMATTED = 'logging {\n  level = "info"   \n}\n'
FORMATTED = 'logging {\n  level = "info"\n}\n'


def _project(tmp_path: Path, **files: str) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    for name, text in files.items():
        (root / name.replace("__", "/")).parent.mkdir(parents=True, exist_ok=True)
        (root / name.replace("__", "/")).write_text(text, encoding="utf-8")
    return root


def test_rewrites_changed_files(tmp_path: Path, fake_alloy: FakeAlloyFactory) -> None:
    alloy = fake_alloy(STRIP_TRAILING_SPACES)
    root = _project(tmp_path, **{"main.alloy": UNFORMATTED})

    result = run_cli_in(root, ["--alloy-path", str(alloy), "format", "main.alloy"])

    assert_SUCCESS(result)
    assert "reformatted main.alloy" in result.output
    assert (root / "main.alloy").read_text(encoding="utf-8") == FORMATTED


def test_check_reports_without_writing(tmp_path: Path, fake_alloy: FakeAlloyFactory) -> None:
    alloy = fake_alloy(STRIP_TRAILING_SPACES)
    root = _project(tmp_path, **{"main.alloy": UNFORMATTED, "ok.alloy": FORMATTED})

    result = run_cli_in(root, ["--alloy-path", str(alloy), "format", "--check", "."])

    assert_WOULD_CHANGE(result)
    assert "would reformat main.alloy" in result.output
    assert "ok.alloy" not in result.output
    assert (root / "main.alloy").read_text(encoding="utf-8") == UNFORMATTED


def test_check_passes_on_formatted_files(tmp_path: Path, fake_alloy: FakeAlloyFactory) -> None:
    alloy = fake_alloy(STRIP_TRAILING_SPACES)
    root = _project(tmp_path, **{"ok.alloy": FORMATTED})

    assert_SUCCESS(run_cli_in(root, ["--alloy-path", str(alloy), "format", "--check", "."]))


def test_diff_prints_unified_diff(tmp_path: Path, fake_alloy: FakeAlloyFactory) -> None:
    alloy = fake_alloy(STRIP_TRAILING_SPACES)
    root = _project(tmp_path, **{"main.alloy": UNFORMATTED})

    result = run_cli_in(root, ["--alloy-path", str(alloy), "--no-color", "format", "--diff", "."])

    assert_SUCCESS(result)
    assert '-  level = "info"   ' in result.output
    assert '+  level = "info"' in result.output
    assert (root / "main.alloy").read_text(encoding="utf-8") == UNFORMATTED


def test_stdin_to_stdout(tmp_path: Path, fake_alloy: FakeAlloyFactory) -> None:
    alloy = fake_alloy(STRIP_TRAILING_SPACES)

    result = run_cli_in(
        tmp_path, ["--alloy-path", str(alloy), "format", "-"], input_text=UNFORMATTED
    )

    assert_SUCCESS(result)
    assert result.stdout == FORMATTED


def test_positional_errors_are_printed(tmp_path: Path, fake_alloy: FakeAlloyFactory) -> None:
    alloy = fake_alloy(errors_if_contains("oops", "<stdin>:2:3: missing '='\n"))
    root = _project(tmp_path, **{"bad.alloy": "a {\n  oops\n}\n", "good.alloy": FORMATTED})

    result = run_cli_in(root, ["--alloy-path", str(alloy), "format", "."])

    assert_exit(result, ExitCode.SYNTAX_ERROR)
    assert "bad.alloy:2:3: missing '='" in result.output
    assert (root / "bad.alloy").read_text(encoding="utf-8") == "a {\n  oops\n}\n"


def test_unknown_failure_shows_raw_output(tmp_path: Path, fake_alloy: FakeAlloyFactory) -> None:
    alloy = fake_alloy(fail_with("panic: unexpected\n", exit_code=2))
    root = _project(tmp_path, **{"main.alloy": FORMATTED})

    result = run_cli_in(root, ["--alloy-path", str(alloy), "format", "main.alloy"])

    assert_exit(result, ExitCode.FAILURE)
    assert "River format failed: panic: unexpected" in result.output


def test_missing_formatter(tmp_path: Path) -> None:
    root = _project(tmp_path, **{"main.alloy": FORMATTED})

    result = run_cli_in(root, ["--alloy-path", str(tmp_path / "nope"), "format", "main.alloy"])

    assert_exit(result, ExitCode.FORMATTER_UNAVAILABLE)
    assert "Failed to start formatter" in result.output
    assert "formatter.alloy_path" in result.output


def test_directories_only_pick_river_files(tmp_path: Path, fake_alloy: FakeAlloyFactory) -> None:
    alloy = fake_alloy(STRIP_TRAILING_SPACES)
    root = _project(
        tmp_path,
        **{
            "a.alloy": UNFORMATTED,
            "nested__b.river": UNFORMATTED,
            "notes.txt": "keep   \n",
            ".hidden__c.alloy": UNFORMATTED,
        },
    )

    assert_SUCCESS(run_cli_in(root, ["--alloy-path", str(alloy), "format", "."]))

    assert (root / "a.alloy").read_text(encoding="utf-8") == FORMATTED
    assert (root / "nested" / "b.river").read_text(encoding="utf-8") == FORMATTED
    assert (root / "notes.txt").read_text(encoding="utf-8") == "keep   \n"
    assert (root / ".hidden" / "c.alloy").read_text(encoding="utf-8") == UNFORMATTED


def test_missing_path(tmp_path: Path) -> None:
    assert_exit(run_cli_in(tmp_path, ["format", "missing.alloy"]), ExitCode.FILE_NOT_FOUND)


def test_no_paths_is_a_usage_error(tmp_path: Path) -> None:
    assert_exit(run_cli_in(tmp_path, ["format"]), ExitCode.USAGE_ERROR)


def test_stdin_cannot_be_mixed_with_paths(tmp_path: Path) -> None:
    (tmp_path / "a.alloy").write_text(FORMATTED, encoding="utf-8")
    assert_exit(run_cli_in(tmp_path, ["format", "-", "a.alloy"]), ExitCode.USAGE_ERROR)


def test_alloy_path_from_config_file(tmp_path: Path, fake_alloy: FakeAlloyFactory) -> None:
    alloy = fake_alloy(STRIP_TRAILING_SPACES)
    root = _project(tmp_path, **{"main.alloy": UNFORMATTED})
    (root / "rivercheck.toml").write_text(
        f"root = true\n[formatter]\nalloy_path = {str(alloy)!r}\n", encoding="utf-8"
    )

    assert_SUCCESS(run_cli_in(root, ["format", "main.alloy"]))
    assert (root / "main.alloy").read_text(encoding="utf-8") == FORMATTED


def test_many_files_run_a_bounded_number_of_formatters(
    tmp_path: Path, fake_alloy: FakeAlloyFactory, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr("rivercheck.formatter.invoker.MAX_CONCURRENT_RUNS", 2)
    state = tmp_path / "runs"
    (state / "running").mkdir(parents=True)
    alloy = fake_alloy(count_concurrent_runs(state))
    root = _project(tmp_path, **{f"f{i:02d}.alloy": FORMATTED for i in range(12)})

    result = run_cli_in(root, ["--alloy-path", str(alloy), "format", "--check", "."])

    assert_SUCCESS(result)
    counts = [int(n) for n in (state / "counts.txt").read_text(encoding="utf-8").split()]
    assert len(counts) == 12
    assert max(counts) <= 2
