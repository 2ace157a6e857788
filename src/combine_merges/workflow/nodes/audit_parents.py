"""AuditParents node - warn about parents that will drop out of history."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic_graph import BaseNode, GraphRunContext

from combine_merges.chain import audit_reachability
from combine_merges.core.config import State
from combine_merges.git.base import Repository
from combine_merges.workflow.nodes.consolidate_message import (
    ConsolidateMessage,
)


@dataclass
class AuditParents(BaseNode[State, Repository, str]):
    """Check every collapsed parent is reachable from the second parent.

    Findings are warnings only; the run always continues.
    """

    async def run(
        self, ctx: GraphRunContext[State, Repository]
    ) -> ConsolidateMessage:
        combine = ctx.state.runtime.combine
        combine.diagnostics.extend(
            audit_reachability(
                ctx.deps,
                combine.chain,
                combine.base,
                combine.second_parent,
            )
        )
        return ConsolidateMessage()
