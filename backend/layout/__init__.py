"""Layout module - positions roadmap trees for the graph canvas."""

from .tree_layout import (
    LayoutValidationError,
    RoadmapLayout,
    compute_roadmap_layout,
    edge_id,
    layout_nodes,
)

__all__ = [
    "LayoutValidationError",
    "RoadmapLayout",
    "compute_roadmap_layout",
    "edge_id",
    "layout_nodes",
]
