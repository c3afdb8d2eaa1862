"""Tests for workspace listing, session backend selection and prompt selection."""

from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from spaces.core.selector import PromptWorkspaceSelector, parse_selection
from spaces.core.sessions import NoSessionManager, TmuxSessionManager, create_session_manager
from spaces.core.workspaces import DirectoryWorkspaceListing


def test_listing_returns_sorted_non_empty_directories(tmp_path: Path) -> None:
    for name in ["zeta", "alpha"]:
        (tmp_path / name).mkdir()
        (tmp_path / name / ".git").write_text("gitdir: x\n")
    (tmp_path / "empty").mkdir()
    (tmp_path / "stray-file").write_text("not a workspace")

    listing = DirectoryWorkspaceListing(tmp_path)

    assert listing.list_workspace_names() == ["alpha", "zeta"]
    assert listing.workspace_path("alpha") == tmp_path / "alpha"


def test_listing_of_missing_directory_is_empty(tmp_path: Path) -> None:
    assert DirectoryWorkspaceListing(tmp_path / "missing").list_workspace_names() == []


def test_create_session_manager() -> None:
    assert isinstance(create_session_manager("tmux"), TmuxSessionManager)
    assert isinstance(create_session_manager("none"), NoSessionManager)
    with pytest.raises(ValueError, match="Unknown multiplexer"):
        create_session_manager("screen")


def test_shell_backend_has_no_sessions() -> None:
    sessions = NoSessionManager()

    assert sessions.supports_sessions is False
    assert sessions.session_exists("anything") is False
    assert sessions.current_session_name() is None


def _select_command(options: list[str]) -> click.Command:
    @click.command()
    def select() -> None:
        choice = PromptWorkspaceSelector().select(options, "Pick one:")
        click.echo(f"choice={choice}")

    return select


def test_prompt_selector_returns_zero_based_index() -> None:
    result = CliRunner().invoke(_select_command(["a", "b", "c"]), input="2\n")

    assert result.exit_code == 0, result.output
    assert "choice=1" in result.output
    assert "3) c" in result.output


def test_prompt_selector_zero_cancels() -> None:
    result = CliRunner().invoke(_select_command(["a", "b"]), input="0\n")

    assert "choice=None" in result.output


def test_prompt_selector_eof_cancels() -> None:
    result = CliRunner().invoke(_select_command(["a", "b"]), input="")

    assert "choice=None" in result.output


def _select_many_command(options: list[str]) -> click.Command:
    @click.command()
    def select_many() -> None:
        chosen = PromptWorkspaceSelector().select_many(options, "Pick some:")
        click.echo(f"chosen={chosen}")

    return select_many


def test_prompt_multi_select_defaults_to_everything() -> None:
    result = CliRunner().invoke(_select_many_command(["a", "b", "c"]), input="\n")

    assert result.exit_code == 0, result.output
    assert "chosen=[0, 1, 2]" in result.output


def test_prompt_multi_select_reprompts_on_out_of_range_number() -> None:
    result = CliRunner().invoke(_select_many_command(["a", "b", "c"]), input="4\n3 1\n")

    assert result.exit_code == 0, result.output
    assert "Enter numbers from 1 to 3" in result.output
    assert "chosen=[0, 2]" in result.output


def test_prompt_multi_select_eof_selects_nothing() -> None:
    result = CliRunner().invoke(_select_many_command(["a", "b"]), input="")

    assert "chosen=[]" in result.output


def test_parse_selection() -> None:
    assert parse_selection("all", 3) == [0, 1, 2]
    assert parse_selection("0", 3) == []
    assert parse_selection("3,1 1", 3) == [0, 2]
    assert parse_selection("2-3", 3) is None
    assert parse_selection("5", 3) is None
