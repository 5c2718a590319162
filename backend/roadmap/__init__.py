"""
Roadmap module - data model, bundled sample, progress tracking, in-memory store.
"""

from .models import (
    ChatMessage,
    GeneratedNode,
    GeneratedRoadmapResponse,
    LayoutDiagnostics,
    LayoutEdge,
    LayoutNode,
    Resource,
    RoadmapData,
    RoadmapNodeData,
)

__all__ = [
    "ChatMessage",
    "GeneratedNode",
    "GeneratedRoadmapResponse",
    "LayoutDiagnostics",
    "LayoutEdge",
    "LayoutNode",
    "Resource",
    "RoadmapData",
    "RoadmapNodeData",
]
