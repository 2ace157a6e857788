"""Workflow graph for combining merges."""
