"""Repository backed by the git command line."""

from __future__ import annotations

import contextlib
import os
import shlex
import tempfile
from pathlib import Path

from invoke import Result

from combine_merges.core.log import logger
from combine_merges.core.runner import Runner
from combine_merges.errors import (
    ConcurrentModificationError,
    EditAbortedError,
    GitCommandError,
    ResolutionError,
)
from combine_merges.model import Commit

# Used when no commands.git section is configured
DEFAULT_COMMANDS = {
    "rev_parse": "git rev-parse --verify --quiet {rev}",
    "is_ancestor": "git merge-base --is-ancestor {ancestor} {descendant}",
    "ancestry_path": "git rev-list --topo-order --ancestry-path {range}",
    "cat_commit": "git cat-file commit {sha}",
    "describe": "git show -s --format='%h %s' {sha}",
    "commit_tree": "git commit-tree {tree} {parents} -F -",
    "update_ref": "git update-ref -m {reason} {ref} {new} {old}",
    "var_editor": "git var GIT_EDITOR",
}


class GitRepository:
    """Implements the Repository capabilities by running git.

    Commands come from the commands.git templates in the config. Every
    placeholder is shell-quoted before substitution.
    """

    def __init__(
        self,
        workdir: Path,
        commands: dict[str, str] | None = None,
        runner: Runner | None = None,
    ):
        """Initialize git wrapper.

        Args:
            workdir: Directory inside the repository
            commands: Command templates keyed by operation name;
                missing keys fall back to DEFAULT_COMMANDS
            runner: Runner to execute commands with
        """
        self.workdir = workdir
        self.commands = {**DEFAULT_COMMANDS, **(commands or {})}
        self.runner = runner or Runner()

    def _command(self, name: str, **fields: str) -> str:
        quoted = {key: shlex.quote(value) for key, value in fields.items()}
        return self.commands[name].format(**quoted)

    def _run(
        self,
        name: str,
        check: bool = True,
        stdin: str | None = None,
        **fields: str,
    ) -> Result:
        command = self._command(name, **fields)
        result = self.runner.execute(
            command,
            cwd=self.workdir,
            stdin=stdin,
            log_level="debug",
            check=False,
        )
        if check and result.exited != 0:
            raise GitCommandError(command, result.exited, result.stderr)
        return result

    def resolve(self, rev: str) -> str:
        result = self._run("rev_parse", check=False, rev=f"{rev}^{{commit}}")
        sha = result.stdout.strip()
        if result.exited != 0 or not sha:
            raise ResolutionError(rev, result.stderr.strip() or None)
        return sha

    def is_ancestor(self, ancestor: str, descendant: str) -> bool:
        result = self._run(
            "is_ancestor",
            check=False,
            ancestor=ancestor,
            descendant=descendant,
        )
        if result.exited == 0:
            return True
        if result.exited == 1:
            return False
        raise GitCommandError(
            self._command(
                "is_ancestor", ancestor=ancestor, descendant=descendant
            ),
            result.exited,
            result.stderr,
        )

    def ancestry_path(self, base: str, tip: str) -> list[Commit]:
        result = self._run("ancestry_path", range=f"{base}..{tip}")
        return [
            self.read_commit(sha)
            for sha in result.stdout.split()
        ]

    def read_commit(self, sha: str) -> Commit:
        """Parse `git cat-file commit` output.

        The header ends at the first empty line. Multi-line headers
        such as gpgsig continue with a leading space, so they never
        produce an empty line.
        """
        result = self._run("cat_commit", sha=sha)
        header, _, message = result.stdout.partition("\n\n")
        parents = tuple(
            line.split(" ", 1)[1]
            for line in header.split("\n")
            if line.startswith("parent ")
        )
        return Commit(sha=sha, parents=parents, message=message)

    def tree_of(self, sha: str) -> str:
        result = self._run("rev_parse", rev=f"{sha}^{{tree}}")
        return result.stdout.strip()

    def describe(self, sha: str) -> str:
        return self._run("describe", sha=sha).stdout.strip()

    def create_commit(
        self, tree: str, parents: list[str], message: str
    ) -> str:
        parent_args = " ".join(f"-p {shlex.quote(p)}" for p in parents)
        command = self.commands["commit_tree"].format(
            tree=shlex.quote(tree), parents=parent_args
        )
        result = self.runner.execute(
            command,
            cwd=self.workdir,
            stdin=message,
            log_level="debug",
            check=False,
        )
        if result.exited != 0:
            raise GitCommandError(command, result.exited, result.stderr)
        return result.stdout.strip()

    def update_ref(
        self, ref: str, new: str, old: str, reason: str
    ) -> None:
        result = self._run(
            "update_ref", check=False, reason=reason, ref=ref, new=new, old=old
        )
        if result.exited == 0:
            return

        # git refuses the update both for a moved ref and for other
        # failures; only the former is a concurrent modification
        current = self._run("rev_parse", check=False, rev=ref).stdout.strip()
        if current != old:
            raise ConcurrentModificationError(ref, old, current or None)
        raise GitCommandError(
            self._command(
                "update_ref", reason=reason, ref=ref, new=new, old=old
            ),
            result.exited,
            result.stderr,
        )

    def edit_message(self, message: str) -> str:
        editor = self._run("var_editor").stdout.strip()

        fd, path = tempfile.mkstemp(
            prefix="COMBINE_MERGES_EDITMSG.", suffix=".txt"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(message)

            logger.info("Waiting for editor {editor}", editor=editor)
            result = self.runner.execute(
                f"{editor} {shlex.quote(path)}",
                cwd=self.workdir,
                check=False,
                interactive=True,
            )
            if result.exited != 0:
                raise EditAbortedError(
                    f"editor exited with code {result.exited}"
                )

            edited = Path(path).read_text(encoding="utf-8")
        finally:
            with contextlib.suppress(OSError):
                os.unlink(path)

        if not edited.strip():
            raise EditAbortedError("aborting due to empty commit message")
        return edited
