"""Tests for single and cascading rebases of stacked workspaces."""

from pathlib import Path

from spaces.core.rebase import (
    RebaseConflict,
    RebaseError,
    RebaseOrchestrator,
    RebasePreconditionFailure,
    RebaseSuccess,
    RebaseTarget,
)
from spaces.core.stack.graph import StackGraph
from spaces.core.stack.store import InMemoryStackStore
from spaces.core.stack.types import StackEdge, StackParent
from tests.fakes.git import FakeGit
from tests.fakes.workspaces import FakeWorkspaceListing
from tests.test_utils.env_helpers import clean_status

WORKSPACES = Path("/spaces/proj/workspaces")
BASE_DIR = Path("/spaces/proj/base")


def _orchestrator(
    git: FakeGit, edges: dict[str, StackEdge] | None = None, names: list[str] | None = None
) -> tuple[RebaseOrchestrator, StackGraph]:
    store = InMemoryStackStore({"proj": edges or {}})
    graph = StackGraph(store, "proj", FakeWorkspaceListing(names or [], WORKSPACES), git)
    return RebaseOrchestrator(git, graph), graph


def test_rebase_onto_fetches_then_rebases() -> None:
    child = WORKSPACES / "child"
    parent = WORKSPACES / "parent"
    git = FakeGit(statuses={child: clean_status("feat/child")})
    orchestrator, _ = _orchestrator(git)

    outcome = orchestrator.rebase_onto(child, "feat/parent", parent)

    assert outcome == RebaseSuccess()
    assert git.fetched == [(child, parent, "feat/parent")]
    assert git.rebased == [(child, "refs/remotes/parent/feat/parent")]


def test_rebase_onto_refuses_uncommitted_changes() -> None:
    child = WORKSPACES / "child"
    git = FakeGit(statuses={child: clean_status("feat/child", uncommitted_changes=2)})
    orchestrator, _ = _orchestrator(git)

    outcome = orchestrator.rebase_onto(child, "main", BASE_DIR)

    assert isinstance(outcome, RebasePreconditionFailure)
    assert "2 uncommitted" in outcome.reason
    assert git.fetched == []
    assert git.rebased == []


def test_rebase_onto_invalid_working_tree() -> None:
    orchestrator, _ = _orchestrator(FakeGit())

    outcome = orchestrator.rebase_onto(WORKSPACES / "gone", "main", BASE_DIR)

    assert isinstance(outcome, RebasePreconditionFailure)


def test_rebase_onto_reports_conflict_without_aborting() -> None:
    child = WORKSPACES / "child"
    git = FakeGit(statuses={child: clean_status("feat/child")}, conflicts={child})
    orchestrator, _ = _orchestrator(git)

    outcome = orchestrator.rebase_onto(child, "main", BASE_DIR)

    assert outcome == RebaseConflict(onto_ref="refs/remotes/parent/main")


def test_cascade_continues_past_failed_child() -> None:
    names = ["gp", "removed", "c1", "c2", "c3"]
    paths = {name: WORKSPACES / name for name in names}
    git = FakeGit(
        statuses={paths[n]: clean_status(f"br-{n}") for n in names},
        conflicts={paths["c2"]},
    )
    edges = {
        "removed": StackEdge(based_on="gp", base_branch="br-gp"),
        "c1": StackEdge(based_on="removed", base_branch="br-removed"),
        "c2": StackEdge(based_on="removed", base_branch="br-removed"),
        "c3": StackEdge(based_on="removed", base_branch="br-removed"),
    }
    orchestrator, graph = _orchestrator(git, edges, names)
    target = RebaseTarget(parent_name="gp", branch="br-gp", source_path=paths["gp"])

    results = orchestrator.cascade_rebase(["c1", "c2", "c3"], target)

    assert [r.workspace for r in results] == ["c1", "c2", "c3"]
    assert [r.succeeded for r in results] == [True, False, True]
    assert isinstance(results[1].outcome, RebaseConflict)
    assert [path for path, _ in git.rebased] == [paths["c1"], paths["c2"], paths["c3"]]

    assert graph.get_parent("c1") == StackParent(workspace_name="gp", branch="br-gp")
    assert graph.get_parent("c2") == StackParent(workspace_name="removed", branch="br-removed")
    assert graph.get_parent("c3") == StackParent(workspace_name="gp", branch="br-gp")


def test_cascade_records_command_failure_and_continues() -> None:
    a = WORKSPACES / "a"
    b = WORKSPACES / "b"
    git = FakeGit(
        statuses={a: clean_status("br-a"), b: clean_status("br-b")},
        fetch_failures={a},
    )
    edges = {
        "a": StackEdge(based_on="old", base_branch="br-old"),
        "b": StackEdge(based_on="old", base_branch="br-old"),
    }
    orchestrator, graph = _orchestrator(git, edges, ["a", "b"])
    target = RebaseTarget(parent_name="new", branch="br-new", source_path=WORKSPACES / "new")

    results = orchestrator.cascade_rebase(["a", "b"], target)

    assert isinstance(results[0].outcome, RebaseError)
    assert "Failed to fetch" in results[0].outcome.describe()
    assert results[1].succeeded
    assert graph.get_parent("a") == StackParent(workspace_name="old", branch="br-old")
    assert graph.get_parent("b") == StackParent(workspace_name="new", branch="br-new")


def test_cascade_onto_base_branch_turns_children_into_roots() -> None:
    a = WORKSPACES / "a"
    git = FakeGit(statuses={a: clean_status("br-a")})
    orchestrator, graph = _orchestrator(
        git, {"a": StackEdge(based_on="root", base_branch="br-root")}, ["a"]
    )
    target = RebaseTarget(parent_name=None, branch="main", source_path=BASE_DIR)

    results = orchestrator.cascade_rebase(["a"], target)

    assert results[0].succeeded
    assert graph.get_parent("a") is None
    assert git.fetched == [(a, BASE_DIR, "main")]


def test_cascade_with_no_children() -> None:
    orchestrator, _ = _orchestrator(FakeGit())
    target = RebaseTarget(parent_name=None, branch="main", source_path=BASE_DIR)

    assert orchestrator.cascade_rebase([], target) == []
