"""Tests for chain validation and the reachability audit."""

import pytest

from combine_merges.chain import (
    audit_reachability,
    check_second_parent,
    collapsed_parents,
    validate_structure,
)
from combine_merges.errors import (
    ChainElementNotMergeError,
    NotAMergeError,
    SecondParentMismatchError,
)
from combine_merges.model import Commit


def _commit(sha, *parents):
    return Commit(sha=sha, parents=parents, message=f"{sha}\n")


class TestValidateStructure:
    """Tests for validate_structure()."""

    def test_chain_of_merges_passes(self):
        validate_structure([
            _commit("tip", "m1", "s2"),
            _commit("m1", "base", "s1", "s0"),
        ])

    def test_single_parent_tip_fails(self):
        with pytest.raises(NotAMergeError) as exc_info:
            validate_structure([_commit("tip", "base")])

        assert exc_info.value.parent_count == 1

    def test_octopus_tip_fails(self):
        with pytest.raises(NotAMergeError):
            validate_structure([_commit("tip", "a", "b", "c")])

    def test_non_merge_in_chain_is_named(self):
        with pytest.raises(ChainElementNotMergeError) as exc_info:
            validate_structure([
                _commit("tip", "c", "s"),
                _commit("c", "base"),
            ])

        assert exc_info.value.sha == "c"
        assert "c" in str(exc_info.value)


class TestCheckSecondParent:
    """Tests for check_second_parent()."""

    def test_matching_trees(self):
        assert check_second_parent("new", "t1", "old", "t1", False) == []

    def test_mismatch_raises(self):
        with pytest.raises(SecondParentMismatchError):
            check_second_parent("new", "t1", "old", "t2", False)

    def test_mismatch_with_force_warns(self):
        diagnostics = check_second_parent("new", "t1", "old", "t2", True)

        assert len(diagnostics) == 1
        assert diagnostics[0].level == "warning"
        assert diagnostics[0].commit == "new"


class TestCollapsedParents:
    """Tests for collapsed_parents()."""

    def test_excludes_chain_members_and_base(self):
        chain = [
            _commit("tip", "m1", "s3"),
            _commit("m1", "base", "s1"),
        ]

        assert collapsed_parents(chain, "base") == ["s3", "s1"]

    def test_each_parent_once(self):
        chain = [
            _commit("tip", "m1", "s"),
            _commit("m1", "base", "s"),
        ]

        assert collapsed_parents(chain, "base") == ["s"]


class TestAuditReachability:
    """Tests for audit_reachability() on an in-memory graph."""

    def test_reachable_parents_are_silent(self, chain):
        commits = chain.repo.ancestry_path(chain.base, chain.tip)

        diagnostics = audit_reachability(
            chain.repo, commits, chain.base, chain.s3
        )

        assert diagnostics == []

    def test_unreachable_parent_is_reported(self, chain):
        repo = chain.repo
        other = repo.commit("unrelated work\n", [chain.root])
        m3 = repo.commit("merge other\n", [chain.tip, other])
        tip = repo.commit("merge again\n", [m3, chain.s3])
        commits = repo.ancestry_path(chain.base, tip)

        diagnostics = audit_reachability(repo, commits, chain.base, chain.s3)

        assert [d.commit for d in diagnostics] == [other]
        assert "unrelated work" in diagnostics[0].message
        assert other[:7] in diagnostics[0].message
