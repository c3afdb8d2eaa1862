"""Text rendering of the stack forest.

    api-base [api-base]
    ├─ api-auth [feat/auth]
    │  └─ api-auth-ui [feat/auth-ui]
    └─ api-docs [docs]
"""

import click

from spaces.core.stack.types import StackTreeNode


def format_stack_tree(roots: list[StackTreeNode], *, current: str | None = None) -> str:
    """Render each root and its descendants, one workspace per line.

    Args:
        roots: Output of StackGraph.build_tree()
        current: Workspace to highlight, if any
    """
    lines: list[str] = []
    for root in roots:
        _format_node(root, lines, prefix="", is_last=True, is_root=True, current=current)
    return "\n".join(lines)


def _format_node(
    node: StackTreeNode,
    lines: list[str],
    prefix: str,
    is_last: bool,
    is_root: bool,
    current: str | None,
) -> None:
    name = node.workspace_name
    if name == current:
        name = click.style(name, fg="bright_green", bold=True)
    else:
        name = click.style(name, fg="cyan")
    info = f"{name} [{click.style(node.branch, fg='yellow')}]"

    if is_root:
        lines.append(info)
        child_prefix = ""
    else:
        connector = "└─" if is_last else "├─"
        lines.append(f"{prefix}{connector} {info}")
        child_prefix = prefix + ("   " if is_last else "│  ")

    for i, child in enumerate(node.children):
        _format_node(
            child,
            lines,
            prefix=child_prefix,
            is_last=i == len(node.children) - 1,
            is_root=False,
            current=current,
        )
