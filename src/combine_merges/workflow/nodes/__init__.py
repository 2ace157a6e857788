"""Workflow nodes, in pipeline order."""

from combine_merges.workflow.nodes.audit_parents import AuditParents
from combine_merges.workflow.nodes.consolidate_message import (
    ConsolidateMessage,
)
from combine_merges.workflow.nodes.create_commit import CreateCommit
from combine_merges.workflow.nodes.edit_message import EditMessage
from combine_merges.workflow.nodes.enumerate_chain import EnumerateChain
from combine_merges.workflow.nodes.resolve_refs import ResolveRefs
from combine_merges.workflow.nodes.update_ref import UpdateRef
from combine_merges.workflow.nodes.validate_chain import ValidateChain

__all__ = [
    "ResolveRefs",
    "EnumerateChain",
    "ValidateChain",
    "AuditParents",
    "ConsolidateMessage",
    "EditMessage",
    "CreateCommit",
    "UpdateRef",
]
