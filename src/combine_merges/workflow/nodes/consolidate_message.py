"""ConsolidateMessage node - build the combined commit message."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic_graph import BaseNode, GraphRunContext

from combine_merges.core.config import State
from combine_merges.core.log import literal, logger
from combine_merges.git.base import Repository
from combine_merges.message import consolidate_messages
from combine_merges.workflow.nodes.create_commit import CreateCommit
from combine_merges.workflow.nodes.edit_message import EditMessage


@dataclass
class ConsolidateMessage(BaseNode[State, Repository, str]):
    """Merge the chain's conflict sections into the tip's message."""

    async def run(
        self, ctx: GraphRunContext[State, Repository]
    ) -> EditMessage | CreateCommit:
        """Build the message, or copy --message-commit verbatim.

        Returns:
            EditMessage: When --edit was given
            CreateCommit: Otherwise
        """
        combine = ctx.state.runtime.combine
        options = combine.options

        if options.message_commit:
            source = ctx.deps.resolve(options.message_commit)
            combine.message = ctx.deps.read_commit(source).message
            logger.info("Using message of {sha} verbatim", sha=source)
        else:
            combine.message = consolidate_messages(
                combine.chain[0].message,
                [commit.message for commit in combine.chain],
            )

        logger.debug("Combined message:\n" + literal(combine.message))

        if options.edit:
            return EditMessage()
        return CreateCommit()
