# topmark:header:start
#
#   project      : RiverCheck
#   file         : test_cli_basics.py
#   file_relpath : tests/cli/test_cli_basics.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the group options and the `version` and `config` commands."""

from __future__ import annotations

from pathlib import Path

from rivercheck.cli.exit_codes import ExitCode
from rivercheck.constants import RIVERCHECK_VERSION
from tests.cli.conftest import assert_exit, assert_SUCCESS, run_cli, run_cli_in


def test_no_command_prints_help() -> None:
    result = run_cli([])
    assert_SUCCESS(result)
    assert "Hint: use 'rivercheck lint" in result.output
    assert "format" in result.output and "watch" in result.output


def test_version() -> None:
    result = run_cli(["version"])
    assert_SUCCESS(result)
    assert result.output.strip() == RIVERCHECK_VERSION


def test_verbose_and_quiet_are_exclusive() -> None:
    assert_exit(run_cli(["-v", "-q", "version"]), ExitCode.USAGE_ERROR)


def test_config_shows_effective_values(tmp_path: Path) -> None:
    (tmp_path / "rivercheck.toml").write_text(
        "root = true\n[validation]\nquick_delay_ms = 7\n", encoding="utf-8"
    )

    result = run_cli_in(tmp_path, ["-v", "--alloy-path", "/opt/alloy", "config"])

    assert_SUCCESS(result)
    assert "# source: " in result.output and "rivercheck.toml" in result.output
    body = result.output.split("# === BEGIN ===\n", 1)[1].split("# === END ===", 1)[0]
    assert "quick_delay_ms = 7" in body
    assert "change_delay_ms = 250" in body
    assert 'alloy_path = "/opt/alloy"' in body


def test_config_file_option_merges_last(tmp_path: Path) -> None:
    (tmp_path / "rivercheck.toml").write_text(
        "root = true\n[validation]\nquick_delay_ms = 7\n", encoding="utf-8"
    )
    (tmp_path / "ci.toml").write_text("[validation]\nquick_delay_ms = 99\n", encoding="utf-8")

    result = run_cli_in(tmp_path, ["--config", "ci.toml", "config"])

    assert_SUCCESS(result)
    assert "quick_delay_ms = 99" in result.output


def test_config_warnings_are_shown(tmp_path: Path) -> None:
    (tmp_path / "rivercheck.toml").write_text(
        "root = true\n[validation]\nquick_delay_ms = 'soon'\n", encoding="utf-8"
    )

    result = run_cli_in(tmp_path, ["config"])

    assert_SUCCESS(result)
    assert "config: Expected integer in [validation].quick_delay_ms" in result.output
    assert "quick_delay_ms = 50" in result.output


def test_missing_config_file_is_a_config_error(tmp_path: Path) -> None:
    (tmp_path / "rivercheck.toml").write_text("root = true\n", encoding="utf-8")
    result = run_cli_in(tmp_path, ["--config", "missing.toml", "config"])
    assert_exit(result, ExitCode.CONFIG_ERROR)
    assert "Config file not found" in result.output


def test_empty_alloy_path_is_a_config_error(tmp_path: Path) -> None:
    (tmp_path / "rivercheck.toml").write_text("root = true\n", encoding="utf-8")
    assert_exit(run_cli_in(tmp_path, ["--alloy-path", "", "config"]), ExitCode.CONFIG_ERROR)
