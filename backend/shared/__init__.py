"""Shared utilities for layout, generator and tutor."""

from .graph import assign_depths, build_children_map, diagnose_nodes

__all__ = ["assign_depths", "build_children_map", "diagnose_nodes"]
