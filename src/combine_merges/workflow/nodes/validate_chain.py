"""ValidateChain node - structural checks and second parent selection."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic_graph import BaseNode, GraphRunContext

from combine_merges.chain import check_second_parent, validate_structure
from combine_merges.core.config import State
from combine_merges.core.log import logger
from combine_merges.git.base import Repository
from combine_merges.workflow.nodes.audit_parents import AuditParents


@dataclass
class ValidateChain(BaseNode[State, Repository, str]):
    """Check the chain is made of merges and pick the new parents."""

    async def run(
        self, ctx: GraphRunContext[State, Repository]
    ) -> AuditParents:
        """Validate the chain and settle the second and extra parents.

        The tip's own second parent is used unless overridden. An
        override must carry the same tree; --force turns a mismatch
        into a warning.

        Returns:
            AuditParents: Next node to audit collapsed parents
        """
        combine = ctx.state.runtime.combine
        options = combine.options
        repo = ctx.deps

        validate_structure(combine.chain)

        original = combine.chain[0].parents[1]
        second_parent = original
        if options.second_parent:
            second_parent = repo.resolve(options.second_parent)
            combine.diagnostics.extend(
                check_second_parent(
                    override=second_parent,
                    override_tree=repo.tree_of(second_parent),
                    original=original,
                    original_tree=repo.tree_of(original),
                    force=options.force,
                )
            )
            logger.info(
                "Using {sha} as second parent instead of {original}",
                sha=second_parent,
                original=original,
            )

        combine.second_parent = second_parent
        # Extra parents are taken as given
        combine.extra_parents = [
            repo.resolve(rev) for rev in options.octopus_parents
        ]
        return AuditParents()
