"""Exceptions raised while combining merges.

Every failure that should end the run derives from CombineMergesError
and carries the process exit code to use.
"""


class CombineMergesError(Exception):
    """Base class for fatal errors."""

    exit_code = 1


class ResolutionError(CombineMergesError):
    """A revision expression did not name exactly one commit."""

    def __init__(self, rev: str, reason: str | None = None):
        self.rev = rev
        message = f"cannot resolve '{rev}' to a commit"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class AncestryError(CombineMergesError):
    """The lower bound is not an ancestor of the tip's first parent."""

    def __init__(self, base: str, first_parent: str):
        self.base = base
        self.first_parent = first_parent
        super().__init__(
            f"{base} is not an ancestor of {first_parent}, "
            f"the tip's first parent"
        )


class EmptyRangeError(CombineMergesError):
    """No commits lie on the ancestry path."""

    def __init__(self, base: str, tip: str):
        self.base = base
        self.tip = tip
        super().__init__(f"no commits between {base} and {tip}")


class NotAMergeError(CombineMergesError):
    """The tip does not have exactly two parents."""

    def __init__(self, sha: str, parent_count: int):
        self.sha = sha
        self.parent_count = parent_count
        super().__init__(
            f"tip {sha} has {parent_count} parent(s), expected 2"
        )


class ChainElementNotMergeError(CombineMergesError):
    """A commit inside the chain is not a merge."""

    def __init__(self, sha: str, parent_count: int):
        self.sha = sha
        self.parent_count = parent_count
        super().__init__(
            f"commit {sha} in the chain has {parent_count} parent(s), "
            f"expected at least 2"
        )


class SecondParentMismatchError(CombineMergesError):
    """The override's tree differs from the tip's second parent tree."""

    def __init__(self, override: str, original: str):
        self.override = override
        self.original = original
        super().__init__(self.describe(override, original))

    @staticmethod
    def describe(override: str, original: str) -> str:
        return (
            f"tree of second parent override {override} differs from "
            f"tree of current second parent {original}"
        )


class ConcurrentModificationError(CombineMergesError):
    """The target ref moved while the run was in progress."""

    def __init__(self, ref: str, expected: str, actual: str | None):
        self.ref = ref
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{ref} changed during the run "
            f"(expected {expected}, found {actual or 'nothing'})"
        )


class EditAbortedError(CombineMergesError):
    """The interactive edit was cancelled."""


class GitCommandError(CombineMergesError):
    """A git invocation exited non-zero.

    exit_code is git's own exit code, which the CLI propagates.
    """

    def __init__(self, command: str, exit_code: int, stderr: str = ""):
        self.command = command
        self.exit_code = exit_code
        self.stderr = stderr
        message = f"'{command}' failed with exit code {exit_code}"
        if stderr.strip():
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)
