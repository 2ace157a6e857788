"""Collapse a linear chain of git merge commits into a single merge."""

__version__ = "0.1.0"
