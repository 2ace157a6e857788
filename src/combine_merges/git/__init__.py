"""Repository backends."""

from combine_merges.git.base import Repository
from combine_merges.git.memory import MemoryRepository
from combine_merges.git.repository import GitRepository

__all__ = ["Repository", "GitRepository", "MemoryRepository"]
