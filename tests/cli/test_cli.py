"""Tests for the top-level command group."""

import logging
from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from spaces.cli.cli import SpacesGroup, configure_logging
from spaces.cli.core import workspace_containing
from spaces.cli.ensure import Ensure
from spaces.core.errors import ConfigError, WorkspaceNotFoundError
from spaces.core.project import project_context_for


@click.group(cls=SpacesGroup)
def _group() -> None:
    pass


@_group.command("user-error")
def _user_error() -> None:
    raise WorkspaceNotFoundError("zz", ["alpha"])


@_group.command("system-error")
def _system_error() -> None:
    raise ConfigError("config is broken")


@_group.command("subprocess-error")
def _subprocess_error() -> None:
    raise RuntimeError("git exploded")


def test_user_errors_exit_with_code_1() -> None:
    result = CliRunner().invoke(_group, ["user-error"])

    assert result.exit_code == 1
    assert result.output.startswith('Error: No workspace matching "zz"')


def test_system_failures_exit_with_code_2() -> None:
    result = CliRunner().invoke(_group, ["system-error"])

    assert result.exit_code == 2
    assert "Error: config is broken" in result.output


def test_runtime_errors_exit_with_code_2() -> None:
    result = CliRunner().invoke(_group, ["subprocess-error"])

    assert result.exit_code == 2
    assert "Error: git exploded" in result.output


def test_debug_env_var_enables_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict] = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    monkeypatch.setenv("SPACES_DEBUG", "1")

    configure_logging(debug=False)

    assert calls[0]["level"] == logging.DEBUG


def test_logging_untouched_without_debug(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict] = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    monkeypatch.delenv("SPACES_DEBUG", raising=False)

    configure_logging(debug=False)

    assert calls == []


def test_workspace_containing(tmp_path: Path) -> None:
    project = project_context_for(tmp_path, "proj")

    assert workspace_containing(project, project.workspaces_dir / "api" / "src") == "api"
    assert workspace_containing(project, project.workspaces_dir) is None
    assert workspace_containing(project, tmp_path / "elsewhere") is None


def test_ensure_not_none_exits_with_message(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        Ensure.not_none(None, "value missing")

    assert exc_info.value.code == 1
    assert "Error: value missing" in capsys.readouterr().err


def test_ensure_not_none_returns_value() -> None:
    assert Ensure.not_none("x", "unused") == "x"
