"""CreateCommit node - write the replacement merge commit."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic_graph import BaseNode, End, GraphRunContext

from combine_merges.core.config import State
from combine_merges.core.log import logger
from combine_merges.git.base import Repository
from combine_merges.workflow.nodes.update_ref import UpdateRef


@dataclass
class CreateCommit(BaseNode[State, Repository, str]):
    """Create the new merge with the tip's tree."""

    async def run(
        self, ctx: GraphRunContext[State, Repository]
    ) -> UpdateRef | End[str]:
        """Write the commit object without touching any ref.

        Returns:
            UpdateRef: Next node to move the target ref
            End[str]: The new commit hash, in dry-run mode
        """
        combine = ctx.state.runtime.combine
        repo = ctx.deps

        parents = [combine.base, combine.second_parent, *combine.extra_parents]
        combine.new_commit = repo.create_commit(
            repo.tree_of(combine.tip), parents, combine.message
        )
        logger.info(
            "Created {sha} with parents {parents}",
            sha=combine.new_commit,
            parents=parents,
        )

        if combine.options.dry_run:
            combine.status = "complete"
            return End(combine.new_commit)
        return UpdateRef()
