"""CLI command implementations."""

from combine_merges.command.combine import CombineCommand

__all__ = ["CombineCommand"]
