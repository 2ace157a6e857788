"""ResolveRefs node - resolve the target ref and the chain's lower bound."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic_graph import BaseNode, GraphRunContext

from combine_merges.core.config import State
from combine_merges.core.log import logger
from combine_merges.errors import (
    AncestryError,
    NotAMergeError,
    ResolutionError,
)
from combine_merges.git.base import Repository
from combine_merges.workflow.nodes.enumerate_chain import EnumerateChain


@dataclass
class ResolveRefs(BaseNode[State, Repository, str]):
    """Resolve the target ref and lower bound to commit hashes."""

    async def run(
        self, ctx: GraphRunContext[State, Repository]
    ) -> EnumerateChain:
        """Record the ref's current value and check ancestry.

        Returns:
            EnumerateChain: Next node to list the chain

        Raises:
            ResolutionError: If either revision does not resolve
            NotAMergeError: If the tip has no first parent
            AncestryError: If the lower bound is not an ancestor of
                the tip's first parent
        """
        combine = ctx.state.runtime.combine
        options = combine.options
        repo = ctx.deps
        combine.status = "running"

        target_ref = options.target_ref
        tip = repo.resolve(target_ref)
        base = repo.resolve(options.commit)
        logger.info(
            "Combining merges on {ref} ({tip}) down to {base}",
            ref=target_ref,
            tip=tip,
            base=base,
        )

        try:
            first_parent = repo.resolve(f"{tip}^1")
        except ResolutionError as e:
            raise NotAMergeError(tip, 0) from e

        if not repo.is_ancestor(base, first_parent):
            raise AncestryError(base, first_parent)

        combine.target_ref = target_ref
        combine.tip = tip
        combine.base = base
        return EnumerateChain()
