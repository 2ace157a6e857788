"""Graph workflow definition."""

from pydantic_graph import Graph

from combine_merges.core.config import State
from combine_merges.core.log import logger
from combine_merges.git.base import Repository


def create_workflow() -> Graph[State, Repository, str]:
    """Create the combine workflow graph.

    ResolveRefs → EnumerateChain → ValidateChain → AuditParents →
        ConsolidateMessage → [EditMessage] → CreateCommit →
        [UpdateRef unless dry-run]

    Returns:
        Graph with State as state and a Repository as deps
    """
    logger.trace("Building workflow graph")

    from combine_merges.workflow.nodes import (
        AuditParents,
        ConsolidateMessage,
        CreateCommit,
        EditMessage,
        EnumerateChain,
        ResolveRefs,
        UpdateRef,
        ValidateChain,
    )

    return Graph(
        nodes=(
            ResolveRefs,
            EnumerateChain,
            ValidateChain,
            AuditParents,
            ConsolidateMessage,
            EditMessage,
            CreateCommit,
            UpdateRef,
        ),
        state_type=State,
    )
