"""Stack data types."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class StackEdge:
    """Persisted parent reference of one stacked workspace.

    ``base_branch`` is the parent's branch name when the edge was created or
    last rebased. Only the name is tracked, never a commit.
    """

    based_on: str
    base_branch: str


@dataclass(frozen=True)
class StackParent:
    workspace_name: str
    branch: str


@dataclass(frozen=True)
class StackTreeNode:
    """A workspace in the rendered stack forest. Derived, never persisted."""

    workspace_name: str
    branch: str
    depth: int
    children: list["StackTreeNode"] = field(default_factory=list)
