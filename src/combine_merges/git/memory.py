"""In-memory commit graph implementing the Repository capabilities."""

from __future__ import annotations

import hashlib
import re
from collections.abc import Callable
from dataclasses import dataclass, field

from combine_merges.errors import (
    ConcurrentModificationError,
    EditAbortedError,
    ResolutionError,
)
from combine_merges.model import Commit

_PARENT_SUFFIX = re.compile(r"^(?P<rev>.+?)\^(?P<n>\d*)$")
_HEX = re.compile(r"^[0-9a-f]{4,40}$")


@dataclass
class MemoryCommit:
    sha: str
    parents: tuple[str, ...]
    message: str
    tree: str


@dataclass
class MemoryRepository:
    """A tiny object database with refs and a symbolic HEAD.

    Revision expressions understood by resolve():
    full or abbreviated hashes, HEAD, refs/..., branch and tag names,
    and one or more ^ / ^N suffixes.

    The editor callable stands in for the user's editor. Returning
    None simulates cancelling the edit.

    Example:
        >>> repo = MemoryRepository()
        >>> root = repo.commit("root\\n")
        >>> repo.set_branch("main", root)
        >>> repo.resolve("main") == root
        True
    """

    commits: dict[str, MemoryCommit] = field(default_factory=dict)
    refs: dict[str, str] = field(default_factory=dict)
    head: str = "refs/heads/main"
    editor: Callable[[str], str | None] = lambda message: message
    commits_created: list[str] = field(default_factory=list)
    # Called just before a compare-and-swap, for simulating races
    before_update: Callable[[MemoryRepository], None] | None = None

    def commit(
        self,
        message: str,
        parents: list[str] | tuple[str, ...] = (),
        tree: str | None = None,
    ) -> str:
        """Add a commit and return its hash.

        Without an explicit tree each commit gets a tree of its own.
        """
        parents = tuple(parents)
        for parent in parents:
            if parent not in self.commits:
                raise KeyError(f"unknown parent {parent}")

        payload = f"{tree}\0{' '.join(parents)}\0{message}\0{len(self.commits)}"
        sha = hashlib.sha1(payload.encode("utf-8")).hexdigest()
        if tree is None:
            tree = hashlib.sha1(f"tree\0{sha}".encode()).hexdigest()
        self.commits[sha] = MemoryCommit(sha, parents, message, tree)
        return sha

    def set_branch(self, name: str, sha: str) -> None:
        self.refs[f"refs/heads/{name}"] = sha

    def checkout(self, name: str) -> None:
        """Point HEAD at a branch."""
        self.head = f"refs/heads/{name}"

    def detach(self, sha: str) -> None:
        self.head = sha

    def _lookup(self, rev: str) -> str:
        if rev == "HEAD":
            if self.head in self.commits:
                return self.head
            if self.head in self.refs:
                return self.refs[self.head]
            raise ResolutionError(rev, "HEAD does not point at a commit")

        for name in (rev, f"refs/heads/{rev}", f"refs/tags/{rev}"):
            if name in self.refs:
                return self.refs[name]

        if _HEX.match(rev):
            matches = [sha for sha in self.commits if sha.startswith(rev)]
            if len(matches) == 1:
                return matches[0]
            if len(matches) > 1:
                raise ResolutionError(rev, "ambiguous abbreviated hash")

        raise ResolutionError(rev, "unknown revision")

    def resolve(self, rev: str) -> str:
        match = _PARENT_SUFFIX.match(rev)
        if match is None:
            return self._lookup(rev)

        sha = self.resolve(match.group("rev"))
        n = int(match.group("n") or 1)
        if n == 0:
            return sha
        parents = self.commits[sha].parents
        if n > len(parents):
            raise ResolutionError(rev, f"{sha} has no parent {n}")
        return parents[n - 1]

    def _ancestors(self, sha: str) -> set[str]:
        seen = set()
        stack = [sha]
        while stack:
            current = stack.pop()
            if current in seen:
                continue
            seen.add(current)
            stack.extend(self.commits[current].parents)
        return seen

    def is_ancestor(self, ancestor: str, descendant: str) -> bool:
        return ancestor in self._ancestors(descendant)

    def ancestry_path(self, base: str, tip: str) -> list[Commit]:
        excluded = self._ancestors(base)
        candidates = {
            sha for sha in self._ancestors(tip)
            if sha not in excluded and self.is_ancestor(base, sha)
        }

        # Children before parents; visit order follows parent order
        ordered: list[str] = []
        pending = {sha: 0 for sha in candidates}
        for sha in candidates:
            for parent in self.commits[sha].parents:
                if parent in pending:
                    pending[parent] += 1
        ready = [tip] if tip in candidates else []
        while ready:
            sha = ready.pop(0)
            ordered.append(sha)
            for parent in self.commits[sha].parents:
                if parent in pending:
                    pending[parent] -= 1
                    if pending[parent] == 0:
                        ready.append(parent)

        return [self.read_commit(sha) for sha in ordered]

    def read_commit(self, sha: str) -> Commit:
        stored = self.commits[sha]
        return Commit(
            sha=stored.sha, parents=stored.parents, message=stored.message
        )

    def tree_of(self, sha: str) -> str:
        return self.commits[sha].tree

    def describe(self, sha: str) -> str:
        subject = self.commits[sha].message.split("\n", 1)[0]
        return f"{sha[:7]} {subject}"

    def create_commit(
        self, tree: str, parents: list[str], message: str
    ) -> str:
        sha = self.commit(message, parents, tree=tree)
        self.commits_created.append(sha)
        return sha

    def _ref_value(self, ref: str) -> str | None:
        if ref == "HEAD":
            return self.head if self.head in self.commits else self.refs.get(self.head)
        return self.refs.get(ref)

    def update_ref(
        self, ref: str, new: str, old: str, reason: str  # noqa: ARG002
    ) -> None:
        if self.before_update is not None:
            self.before_update(self)

        current = self._ref_value(ref)
        if current != old:
            raise ConcurrentModificationError(ref, old, current)

        if ref == "HEAD" and self.head in self.commits:
            self.head = new
        elif ref == "HEAD":
            self.refs[self.head] = new
        else:
            self.refs[ref] = new

    def edit_message(self, message: str) -> str:
        edited = self.editor(message)
        if edited is None:
            raise EditAbortedError("editor exited with code 1")
        if not edited.strip():
            raise EditAbortedError("aborting due to empty commit message")
        return edited
