"""Tests for the command-line interface."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest
from typer.testing import CliRunner

from ctxgen import __version__
from ctxgen.cli import app

runner = CliRunner()


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A working directory holding a default .context folder."""
    context = tmp_path / ".context"
    context.mkdir()
    (context / "a.txt").write_text("X\n<ctxgen:fold>a\nb</ctxgen:fold>\nY")
    (context / "b.txt").write_text("plain")
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_defaults_write_to_current_directory(project: Path) -> None:
    result = runner.invoke(app, [])

    assert result.exit_code == 0, result.output
    assert "Generated AGENTS.md and CLAUDE.md in ." in result.output
    agents = (project / "AGENTS.md").read_text(encoding="utf-8")
    assert agents == (project / "CLAUDE.md").read_text(encoding="utf-8")
    assert agents.index('path="a.txt"') < agents.index('path="b.txt"')
    assert "2 lines" in agents


def test_explicit_directories(project: Path) -> None:
    output_dir = project / "generated" / "docs"

    result = runner.invoke(app, ["-c", str(project / ".context"), "-o", str(output_dir)])

    assert result.exit_code == 0, result.output
    assert str(output_dir) in result.output
    assert (output_dir / "AGENTS.md").exists()
    assert (output_dir / "CLAUDE.md").exists()


def test_long_options(project: Path) -> None:
    result = runner.invoke(
        app, ["--context-dir", ".context", "--output-dir", "out"]
    )

    assert result.exit_code == 0, result.output
    assert (project / "out" / "AGENTS.md").exists()


def test_missing_context_dir_fails(project: Path) -> None:
    output_dir = project / "out"

    result = runner.invoke(app, ["-c", "does-not-exist", "-o", str(output_dir)])

    assert result.exit_code != 0
    assert "does-not-exist" in result.output
    assert "does not exist" in result.output
    assert not output_dir.exists()


def test_context_path_is_a_file(project: Path) -> None:
    (project / "notadir.txt").write_text("x")

    result = runner.invoke(app, ["-c", "notadir.txt", "-o", "out"])

    assert result.exit_code == 1
    assert "is not a directory" in result.output
    assert not (project / "out").exists()


def test_read_failure_reports_chain(project: Path) -> None:
    (project / ".context" / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n\x00\x00")

    result = runner.invoke(app, ["-o", "out"])

    assert result.exit_code == 1
    assert "Failed to generate context markdown" in result.output
    assert "logo.png" in result.output
    assert not (project / "out").exists()


def test_runs_are_byte_identical(project: Path) -> None:
    runner.invoke(app, ["-o", "first"])
    runner.invoke(app, ["-o", "second"])

    first = (project / "first" / "AGENTS.md").read_bytes()
    assert first == (project / "second" / "AGENTS.md").read_bytes()


def test_config_file_is_used(project: Path) -> None:
    (project / "ctxgen.toml").write_text('output_dir = "from-config"\n')

    result = runner.invoke(app, [])

    assert result.exit_code == 0, result.output
    assert (project / "from-config" / "AGENTS.md").exists()


def test_cli_overrides_config_file(project: Path) -> None:
    (project / "ctxgen.toml").write_text('output_dir = "from-config"\n')

    result = runner.invoke(app, ["-o", "from-cli"])

    assert result.exit_code == 0, result.output
    assert (project / "from-cli" / "AGENTS.md").exists()
    assert not (project / "from-config").exists()


def test_explicit_missing_config_fails(project: Path) -> None:
    result = runner.invoke(app, ["--config", "missing.toml"])

    assert result.exit_code == 1
    assert "missing.toml" in result.output


def test_verbose_prints_statistics(project: Path) -> None:
    result = runner.invoke(app, ["--verbose", "-o", "out"])

    assert result.exit_code == 0, result.output
    assert "Files read: 2" in result.output
    assert "Folds replaced: 1" in result.output


def test_version() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_help() -> None:
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    assert "--context-dir" in result.output
    assert "--output-dir" in result.output


@pytest.mark.skipif(
    sys.platform in ("win32", "darwin"), reason="file names must be valid Unicode"
)
def test_undecodable_file_name(project: Path) -> None:
    raw_name = os.path.join(os.fsencode(project / ".context"), b"bad\xffname.txt")
    with open(raw_name, "wb") as f:
        f.write(b"hello")

    result = runner.invoke(app, ["-o", "out"])

    assert result.exit_code == 0, result.output
    agents = (project / "out" / "AGENTS.md").read_text(encoding="utf-8")
    assert agents == (project / "out" / "CLAUDE.md").read_text(encoding="utf-8")
    assert '<file path="bad\ufffdname.txt">\nhello\n</file>' in agents


def test_undecodable_config_file_is_ignored(project: Path) -> None:
    (project / "ctxgen.toml").write_bytes(b'context_dir = "\xff"\n')

    result = runner.invoke(app, ["-o", "out"])

    assert result.exit_code == 0, result.output
    assert "Ignoring invalid config file" in result.output
    assert (project / "out" / "AGENTS.md").exists()


def test_verbose_lists_every_statistic(project: Path) -> None:
    result = runner.invoke(app, ["--verbose", "-o", "out"])

    assert result.exit_code == 0, result.output
    labels = ["Files read", "Files with folds", "Folds replaced", "Bytes read", "Entries skipped"]
    for label in labels:
        assert f"  {label}: " in result.output
