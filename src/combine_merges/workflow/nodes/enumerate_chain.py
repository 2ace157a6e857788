"""EnumerateChain node - list the commits being collapsed."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic_graph import BaseNode, GraphRunContext

from combine_merges.core.config import State
from combine_merges.core.log import logger
from combine_merges.errors import EmptyRangeError
from combine_merges.git.base import Repository
from combine_merges.workflow.nodes.validate_chain import ValidateChain


@dataclass
class EnumerateChain(BaseNode[State, Repository, str]):
    """Read the ancestry path from the lower bound up to the tip."""

    async def run(
        self, ctx: GraphRunContext[State, Repository]
    ) -> ValidateChain:
        combine = ctx.state.runtime.combine

        chain = ctx.deps.ancestry_path(combine.base, combine.tip)
        if not chain:
            raise EmptyRangeError(combine.base, combine.tip)

        logger.info("Found {count} commit(s) to combine", count=len(chain))
        for commit in chain:
            logger.debug(
                "{sha} parents={parents}",
                sha=commit.sha,
                parents=list(commit.parents),
            )

        combine.chain = chain
        return ValidateChain()
