"""Capabilities the workflow needs from a version-control backend."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from combine_merges.model import Commit


@runtime_checkable
class Repository(Protocol):
    """Narrow interface over the commit graph.

    GitRepository implements it with the git command line and
    MemoryRepository with an in-memory graph, which keeps the
    workflow testable without a git binary.
    """

    def resolve(self, rev: str) -> str:
        """Full hash of the commit `rev` names.

        Raises:
            ResolutionError: If rev does not name exactly one commit
        """
        ...

    def is_ancestor(self, ancestor: str, descendant: str) -> bool:
        """True if ancestor is reachable from descendant (or equal)."""
        ...

    def ancestry_path(self, base: str, tip: str) -> list[Commit]:
        """Commits descending from base and reachable from tip.

        base is excluded, tip included. Topological order, tip first.
        """
        ...

    def read_commit(self, sha: str) -> Commit:
        ...

    def tree_of(self, sha: str) -> str:
        ...

    def describe(self, sha: str) -> str:
        """One-line description: abbreviated hash and subject."""
        ...

    def create_commit(
        self, tree: str, parents: list[str], message: str
    ) -> str:
        """Write a commit object and return its hash. Refs are untouched."""
        ...

    def update_ref(
        self, ref: str, new: str, old: str, reason: str
    ) -> None:
        """Point ref at new if it still points at old.

        Raises:
            ConcurrentModificationError: If ref no longer holds old
        """
        ...

    def edit_message(self, message: str) -> str:
        """Let the user edit message and return the result.

        Raises:
            EditAbortedError: If editing was cancelled
        """
        ...
