"""Pytest configuration and fixtures for git-combine-merges tests."""

import asyncio
import tempfile
from pathlib import Path
from types import SimpleNamespace

import pytest

from combine_merges.command.combine import CombineCommand
from combine_merges.core.config import CombineOptions, State
from combine_merges.core.log import ConsoleSink, setup_logger
from combine_merges.git.memory import MemoryRepository

FIX_MESSAGE = "fix\n\n# Conflicts:\n#\tfile1.txt\n"
FIX2_MESSAGE = "fix2\n\n# Conflicts:\n#\tfile2.txt\n"
TIP_MESSAGE = "merge\n"


def install_test_logger():
    setup_logger(
        log_root=Path(tempfile.gettempdir()) / "combine-merges-tests",
        run_name="test",
        console=ConsoleSink(level="debug"),
    )


@pytest.fixture(autouse=True, scope="session")
def configure_logging():
    """Console-only logging at debug level for the whole session."""
    install_test_logger()


@pytest.fixture
def restore_logging():
    """Reinstall the session logger after a test that replaced it."""
    yield
    install_test_logger()


@pytest.fixture
def chain():
    """A topic branch that merged three side commits one at a time.

        root ── base ── m1 ── m2 ── tip     (main)
           \\          /     /     /
            s1 ───────   s2 ── s3           (side)

    m1 and m2 carry conflict sections; the tip does not.
    """
    repo = MemoryRepository()
    root = repo.commit("root\n")
    base = repo.commit("base\n", [root])
    s1 = repo.commit("side 1\n", [root])
    s2 = repo.commit("side 2\n", [s1])
    s3 = repo.commit("side 3\n", [s2])
    m1 = repo.commit(FIX_MESSAGE, [base, s1])
    m2 = repo.commit(FIX2_MESSAGE, [m1, s2])
    tip = repo.commit(TIP_MESSAGE, [m2, s3])
    repo.set_branch("main", tip)
    repo.set_branch("side", s3)
    repo.checkout("main")

    return SimpleNamespace(
        repo=repo,
        root=root,
        base=base,
        s1=s1,
        s2=s2,
        s3=s3,
        m1=m1,
        m2=m2,
        tip=tip,
    )


@pytest.fixture
def state():
    """A fresh State loaded from the package defaults."""
    return State()


@pytest.fixture
def combine(state):
    """Run the combine command against a repository.

    Returns the exit code; results are left in state.runtime.combine.
    """

    def _combine(repo, commit, **options):
        command = CombineCommand(
            CombineOptions(commit=commit, **options), repository=repo
        )
        return asyncio.run(command.run_workflow(state))

    return _combine
