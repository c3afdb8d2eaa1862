"""Tests for the init and project commands."""

from pathlib import Path

from click.testing import CliRunner

from spaces.cli.cli import cli
from spaces.core.context import SpacesContext
from spaces.core.global_config import GlobalConfig, InMemoryGlobalConfigOps
from spaces.core.project import project_context_for
from spaces.core.project_config import InMemoryProjectConfigStore, create_project_config


def _global(root: Path, current: str | None = None) -> GlobalConfig:
    return GlobalConfig(
        spaces_root=root,
        current_project=current,
        default_base_branch="main",
        stale_days=30,
        multiplexer="tmux",
    )


def test_init_writes_global_config(tmp_path: Path) -> None:
    ops = InMemoryGlobalConfigOps(None)
    root = tmp_path / "my-spaces"
    ctx = SpacesContext.for_test(global_config_ops=ops, global_config=_global(tmp_path))

    result = CliRunner().invoke(
        cli,
        ["init", "--root", str(root), "--multiplexer", "none", "--stale-days", "7"],
        obj=ctx,
    )

    assert result.exit_code == 0, result.output
    saved = ops.load()
    assert saved.spaces_root == root.resolve()
    assert saved.multiplexer == "none"
    assert saved.stale_days == 7
    assert saved.default_base_branch == "main"
    assert root.is_dir()


def test_init_rejects_unknown_multiplexer(tmp_path: Path) -> None:
    ctx = SpacesContext.for_test(global_config=_global(tmp_path))

    result = CliRunner().invoke(cli, ["init", "--multiplexer", "screen"], obj=ctx)

    assert result.exit_code == 2


def test_project_list_marks_current(tmp_path: Path) -> None:
    configs = InMemoryProjectConfigStore(
        [
            create_project_config("a", "repo-a", "main"),
            create_project_config("b", "repo-b", "main"),
        ]
    )
    ctx = SpacesContext.for_test(
        global_config=_global(tmp_path, "b"),
        project_configs=configs,
        project=project_context_for(tmp_path, "b"),
    )

    result = CliRunner().invoke(cli, ["project", "list"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == ["  a  repo-a", "* b  repo-b"]


def test_project_list_empty() -> None:
    result = CliRunner().invoke(cli, ["project", "list"], obj=SpacesContext.for_test())

    assert result.exit_code == 0, result.output
    assert "No projects found" in result.output


def test_project_use_saves_current_project(tmp_path: Path) -> None:
    ops = InMemoryGlobalConfigOps(_global(tmp_path))
    configs = InMemoryProjectConfigStore([create_project_config("a", "repo-a", "main")])
    ctx = SpacesContext.for_test(
        global_config_ops=ops, global_config=_global(tmp_path), project_configs=configs
    )

    result = CliRunner().invoke(cli, ["project", "use", "a"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert ops.load().current_project == "a"
    assert "SPACES_CURRENT_PROJECT=a" in result.output


def test_project_use_unknown_lists_known(tmp_path: Path) -> None:
    configs = InMemoryProjectConfigStore([create_project_config("a", "repo-a", "main")])
    ctx = SpacesContext.for_test(global_config=_global(tmp_path), project_configs=configs)

    result = CliRunner().invoke(cli, ["project", "use", "zzz"], obj=ctx)

    assert result.exit_code == 1
    assert "Known projects: a" in result.output


def test_project_use_without_any_projects(tmp_path: Path) -> None:
    ctx = SpacesContext.for_test(global_config=_global(tmp_path))

    result = CliRunner().invoke(cli, ["project", "use", "zzz"], obj=ctx)

    assert result.exit_code == 1
    assert 'Project "zzz" not found' in result.output
