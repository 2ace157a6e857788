"""End-to-end tests running the CLI against a real git repository."""

import shutil
import subprocess
import sys

import pytest

from combine_merges.cli import main

pytestmark = [
    pytest.mark.skipif(shutil.which("git") is None, reason="git not found"),
    pytest.mark.usefixtures("restore_logging"),
]

FIX_MESSAGE = "fix\n\n# Conflicts:\n#\tfile1.txt\n"
FIX2_MESSAGE = "fix2\n\n# Conflicts:\n#\tfile2.txt\n"


def git(repo, *args, stdin=None):
    result = subprocess.run(
        ["git", *args],
        cwd=repo,
        input=stdin,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


def commit_file(repo, name, content, message):
    (repo / name).write_text(content)
    git(repo, "add", name)
    git(repo, "commit", "-q", "-m", message)
    return git(repo, "rev-parse", "HEAD")


def merge_side(repo, message):
    git(repo, "merge", "-q", "--no-ff", "--no-commit", "side")
    git(repo, "commit", "-q", "--cleanup=verbatim", "-F", "-", stdin=message)
    return git(repo, "rev-parse", "HEAD")


@pytest.fixture
def git_repo(tmp_path, monkeypatch):
    """A repository whose main branch merged side three times.

    Returns (repo path, base commit, tip commit).
    """
    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init", "-q")
    git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
    git(repo, "config", "user.name", "Test User")
    git(repo, "config", "user.email", "test@example.com")
    git(repo, "config", "commit.gpgsign", "false")

    commit_file(repo, "README", "root\n", "root")
    git(repo, "branch", "side")
    base = commit_file(repo, "base.txt", "base\n", "base")

    for n, message in enumerate([FIX_MESSAGE, FIX2_MESSAGE, "merge\n"], 1):
        git(repo, "checkout", "-q", "side")
        commit_file(repo, f"side{n}.txt", f"{n}\n", f"side {n}")
        git(repo, "checkout", "-q", "main")
        tip = merge_side(repo, message)

    monkeypatch.chdir(repo)
    return repo, base, tip


def run_cli(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["git-combine-merges", *args])
    with pytest.raises(SystemExit) as exc_info:
        main()
    return exc_info.value.code


def read_message(repo, rev):
    raw = git(repo, "cat-file", "commit", rev)
    return raw.partition("\n\n")[2]


def test_dry_run_prints_new_commit(git_repo, monkeypatch, capsys):
    repo, base, tip = git_repo

    assert run_cli(monkeypatch, "-n", base) == 0

    new = capsys.readouterr().out.strip()
    assert len(new) == 40
    assert git(repo, "rev-parse", "main") == tip
    assert git(repo, "rev-parse", f"{new}^1") == base
    assert git(repo, "rev-parse", f"{new}^2") == git(repo, "rev-parse", "side")


def test_combine_updates_branch(git_repo, monkeypatch):
    repo, base, tip = git_repo

    assert run_cli(monkeypatch, "-v", base) == 0

    new = git(repo, "rev-parse", "main")
    assert new != tip
    assert git(repo, "rev-parse", "main^{tree}") == git(
        repo, "rev-parse", f"{tip}^{{tree}}"
    )
    assert git(repo, "rev-parse", "main^1") == base
    assert read_message(repo, "main") == (
        "merge\n\n# Conflicts:\n#\tfile1.txt\n#\tfile2.txt"
    )
    assert git(repo, "reflog", "-1", "--format=%gs", "main").startswith(
        "combine-merges: combined 3 merge(s)"
    )


def test_unknown_revision_exits_nonzero(git_repo, monkeypatch):
    repo, _, tip = git_repo

    assert run_cli(monkeypatch, "no-such-revision") == 1
    assert git(repo, "rev-parse", "main") == tip
