"""EditMessage node - let the user edit the combined message."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic_graph import BaseNode, GraphRunContext

from combine_merges.core.config import State
from combine_merges.git.base import Repository
from combine_merges.workflow.nodes.create_commit import CreateCommit


@dataclass
class EditMessage(BaseNode[State, Repository, str]):
    """Open the editor on the message; cancelling aborts the run."""

    async def run(
        self, ctx: GraphRunContext[State, Repository]
    ) -> CreateCommit:
        combine = ctx.state.runtime.combine
        combine.message = ctx.deps.edit_message(combine.message)
        return CreateCommit()
