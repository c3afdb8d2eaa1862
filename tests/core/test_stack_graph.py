"""Tests for the stack edge graph."""

from pathlib import Path

from spaces.core.stack.graph import StackGraph
from spaces.core.stack.store import InMemoryStackStore
from spaces.core.stack.types import StackEdge, StackParent
from tests.fakes.git import FakeGit
from tests.fakes.workspaces import FakeWorkspaceListing
from tests.test_utils.env_helpers import clean_status

WORKSPACES = Path("/spaces/proj/workspaces")


def _graph(
    names: list[str] | None = None,
    edges: dict[str, StackEdge] | None = None,
    *,
    unreadable: set[str] | None = None,
) -> tuple[StackGraph, InMemoryStackStore]:
    names = names or []
    unreadable = unreadable or set()
    store = InMemoryStackStore({"proj": edges or {}})
    git = FakeGit(
        statuses={
            WORKSPACES / name: clean_status(f"br-{name}")
            for name in names
            if name not in unreadable
        }
    )
    return StackGraph(store, "proj", FakeWorkspaceListing(names, WORKSPACES), git), store


def _edge(parent: str) -> StackEdge:
    return StackEdge(based_on=parent, base_branch=f"br-{parent}")


def _shape(nodes) -> list:
    return [(n.workspace_name, n.depth, _shape(n.children)) for n in nodes]


def test_set_edge_then_get_parent_round_trips() -> None:
    graph, _ = _graph()

    graph.set_edge("child", "parent", "feat/parent")

    assert graph.get_parent("child") == StackParent(workspace_name="parent", branch="feat/parent")


def test_set_edge_overwrites_existing_edge() -> None:
    graph, _ = _graph(edges={"child": _edge("old")})

    graph.set_edge("child", "new", "br-new")

    assert graph.get_parent("child") == StackParent(workspace_name="new", branch="br-new")


def test_remove_edge_makes_workspace_a_root() -> None:
    graph, _ = _graph(edges={"child": _edge("parent")})

    graph.remove_edge("child")

    assert graph.get_parent("child") is None


def test_remove_missing_edge_is_noop() -> None:
    graph, store = _graph(edges={"child": _edge("parent")})

    graph.remove_edge("nobody")

    assert store.save_count == 0
    assert graph.get_parent("child") is not None


def test_get_children_lists_direct_children_only() -> None:
    graph, _ = _graph(edges={"b": _edge("a"), "c": _edge("a"), "d": _edge("b")})

    assert graph.get_children("a") == ["b", "c"]
    assert graph.get_children("d") == []


def test_graph_reads_store_fresh_on_each_call() -> None:
    graph, store = _graph()
    other = StackGraph(store, "proj", FakeWorkspaceListing([]), FakeGit())

    other.set_edge("child", "parent", "br-parent")

    assert graph.get_children("parent") == ["child"]


def test_detect_circular_dependency_on_chain() -> None:
    graph, _ = _graph(edges={"B": _edge("A"), "C": _edge("B")})

    # Stacking A on C would make A its own ancestor
    assert graph.detect_circular_dependency("C", "A") is True
    assert graph.detect_circular_dependency("A", "C") is False


def test_detect_circular_dependency_self_stacking() -> None:
    graph, _ = _graph()

    assert graph.detect_circular_dependency("A", "A") is True


def test_detect_circular_dependency_unrelated_trees() -> None:
    graph, _ = _graph(edges={"B": _edge("A"), "Y": _edge("X")})

    assert graph.detect_circular_dependency("Y", "B") is False


def test_detect_circular_dependency_terminates_on_corrupt_cycle() -> None:
    graph, _ = _graph(edges={"A": _edge("B"), "B": _edge("A")})

    assert graph.detect_circular_dependency("A", "Z") is True


def test_build_tree_empty_project() -> None:
    graph, _ = _graph()

    assert graph.build_tree() == []


def test_build_tree_single_root_without_children() -> None:
    graph, _ = _graph(["solo"])

    (root,) = graph.build_tree()

    assert root.workspace_name == "solo"
    assert root.branch == "br-solo"
    assert root.depth == 0
    assert root.children == []


def test_build_tree_nests_children_with_depth() -> None:
    graph, _ = _graph(
        ["a", "b", "c", "d", "e"],
        {"b": _edge("a"), "c": _edge("b"), "d": _edge("a")},
    )

    assert _shape(graph.build_tree()) == [
        ("a", 0, [("b", 1, [("c", 2, [])]), ("d", 1, [])]),
        ("e", 0, []),
    ]


def test_build_tree_drops_workspace_with_missing_parent() -> None:
    graph, _ = _graph(["orphan", "root"], {"orphan": _edge("deleted")})

    assert _shape(graph.build_tree()) == [("root", 0, [])]


def test_build_tree_drops_unreadable_workspace_and_its_subtree() -> None:
    graph, _ = _graph(
        ["a", "b", "c"],
        {"b": _edge("a"), "c": _edge("b")},
        unreadable={"b"},
    )

    assert _shape(graph.build_tree()) == [("a", 0, [])]


def test_build_tree_cycle_does_not_recurse_forever() -> None:
    graph, _ = _graph(["a", "b", "root"], {"a": _edge("b"), "b": _edge("a")})

    # Both cycle members have edges, so neither is a root
    assert _shape(graph.build_tree()) == [("root", 0, [])]
