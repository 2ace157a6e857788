"""Validation of a chain of merges before it is collapsed.

These functions raise for fatal problems and return Diagnostic lists
for advisory ones; printing is left to the caller.
"""

from __future__ import annotations

from combine_merges.errors import (
    ChainElementNotMergeError,
    NotAMergeError,
    SecondParentMismatchError,
)
from combine_merges.git.base import Repository
from combine_merges.model import Commit, Diagnostic


def validate_structure(chain: list[Commit]) -> None:
    """Require a two-parent tip and merges all the way down.

    Args:
        chain: Chain commits, tip first

    Raises:
        NotAMergeError: If the tip does not have exactly 2 parents
        ChainElementNotMergeError: If another element has fewer than 2
    """
    tip, *rest = chain
    if len(tip.parents) != 2:
        raise NotAMergeError(tip.sha, len(tip.parents))
    for commit in rest:
        if not commit.is_merge:
            raise ChainElementNotMergeError(commit.sha, len(commit.parents))


def check_second_parent(
    override: str,
    override_tree: str,
    original: str,
    original_tree: str,
    force: bool,
) -> list[Diagnostic]:
    """Compare the override's tree with the current second parent's.

    Raises:
        SecondParentMismatchError: On a mismatch without force
    """
    if override_tree == original_tree:
        return []
    if not force:
        raise SecondParentMismatchError(override, original)
    return [
        Diagnostic(
            message=SecondParentMismatchError.describe(override, original),
            commit=override,
        )
    ]


def collapsed_parents(chain: list[Commit], base: str) -> list[str]:
    """Parents that disappear from history once the chain is replaced.

    That is every parent of a chain commit which is neither in the
    chain nor the lower bound, in first-seen order.
    """
    members = {commit.sha for commit in chain}
    seen: list[str] = []
    for commit in chain:
        for parent in commit.parents:
            if parent in members or parent == base or parent in seen:
                continue
            seen.append(parent)
    return seen


def audit_reachability(
    repo: Repository,
    chain: list[Commit],
    base: str,
    second_parent: str,
) -> list[Diagnostic]:
    """Warn about collapsed parents the new second parent cannot reach."""
    diagnostics = []
    for parent in collapsed_parents(chain, base):
        if repo.is_ancestor(parent, second_parent):
            continue
        diagnostics.append(
            Diagnostic(
                message=(
                    f"parent {repo.describe(parent)} is not reachable "
                    f"from the new second parent and will be dropped"
                ),
                commit=parent,
            )
        )
    return diagnostics
