"""Finding workspaces that can be cleaned up.

A workspace is cleanable when its last commit is older than the configured
number of days and it has no uncommitted changes. Nothing here touches disk
or prompts; the ``clean`` command decides what to do with the result.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path

from spaces.core.git.abc import Git
from spaces.core.stack.graph import StackGraph
from spaces.core.workspace_types import WorkspaceStatus
from spaces.core.workspaces import WorkspaceListing

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StaleWorkspace:
    name: str
    path: Path
    branch: str
    days_since_commit: int


def is_stale(status: WorkspaceStatus, stale_days: int, now: datetime) -> bool:
    """A workspace is stale when its last commit is older than ``stale_days``."""
    if status.last_commit_date is None:
        return False
    return now - status.last_commit_date > timedelta(days=stale_days)


def identify_stale_workspaces(
    listing: WorkspaceListing,
    git: Git,
    names: Iterable[str],
    stale_days: int,
    now: datetime,
) -> list[StaleWorkspace]:
    """Stale workspaces without uncommitted changes, in ``names`` order.

    Workspaces whose status cannot be read are never offered.
    """
    stale: list[StaleWorkspace] = []
    for name in names:
        path = listing.workspace_path(name)
        status = git.get_status(path)
        if status is None:
            logger.debug("No git status for %s; not offering it for cleanup", name)
            continue
        if status.uncommitted_changes > 0 or status.last_commit_date is None:
            continue
        if not is_stale(status, stale_days, now):
            continue
        stale.append(
            StaleWorkspace(
                name=name,
                path=path,
                branch=status.branch,
                days_since_commit=(now - status.last_commit_date).days,
            )
        )
    return stale


def removal_order(graph: StackGraph, names: Iterable[str]) -> list[str]:
    """Order ``names`` so that stacked workspaces come before their parents.

    Removing children first means a parent that is also being removed has no
    children left to rebase. Names at the same depth keep their input order.
    """

    def depth(name: str) -> int:
        seen = {name}
        parent = graph.get_parent(name)
        count = 0
        while parent is not None and parent.workspace_name not in seen:
            seen.add(parent.workspace_name)
            count += 1
            parent = graph.get_parent(parent.workspace_name)
        return count

    return sorted(names, key=depth, reverse=True)
