"""UpdateRef node - move the target ref to the new commit."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic_graph import BaseNode, End, GraphRunContext

from combine_merges.core.config import State
from combine_merges.core.log import logger
from combine_merges.git.base import Repository


@dataclass
class UpdateRef(BaseNode[State, Repository, str]):
    """Compare-and-swap the target ref from the old tip to the new commit."""

    async def run(
        self, ctx: GraphRunContext[State, Repository]
    ) -> End[str]:
        """Update the ref only if it still points at the old tip.

        Returns:
            End[str]: The new commit hash

        Raises:
            ConcurrentModificationError: If the ref moved meanwhile
        """
        combine = ctx.state.runtime.combine
        count = len(combine.chain)
        reason = (
            f"combine-merges: combined {count} merge(s) "
            f"onto {combine.base[:12]}"
        )

        ctx.deps.update_ref(
            combine.target_ref, combine.new_commit, combine.tip, reason
        )
        combine.status = "complete"

        logger.info(
            "Updated {ref} to {sha}",
            ref=combine.target_ref,
            sha=combine.new_commit,
        )
        return End(combine.new_commit)
