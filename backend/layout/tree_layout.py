"""
Depth-column tree layout for generated roadmaps (flat list with parent references).
Column = BFS depth from the roots; row = order of appearance among nodes of that depth.

Vertical order follows the input list, not the tree: siblings are not centred
under their parent, and reordering the input can move nodes even when the tree
shape is unchanged.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence, Tuple, Union

from roadmap.models import (
    GeneratedNode,
    LayoutDiagnostics,
    LayoutEdge,
    LayoutNode,
    Position,
    RoadmapNodeData,
)
from shared.graph import assign_depths, diagnose_nodes

from .constants import DEFAULT_NODE_TYPE, EDGE_STYLE, LEVEL_HEIGHT, NODE_STYLE, X_SPACING

NodeInput = Union[GeneratedNode, Mapping[str, Any]]


class LayoutValidationError(ValueError):
    """Raised only in strict mode when the node list is not a well-formed tree."""

    def __init__(self, diagnostics: LayoutDiagnostics):
        self.diagnostics = diagnostics
        super().__init__(f"Invalid roadmap tree: {diagnostics.summary()}")


@dataclass
class RoadmapLayout:
    nodes: List[LayoutNode] = field(default_factory=list)
    edges: List[LayoutEdge] = field(default_factory=list)
    diagnostics: LayoutDiagnostics = field(default_factory=LayoutDiagnostics)


def edge_id(parent_id: str, child_id: str) -> str:
    return f"e-{parent_id}-{child_id}"


def _coerce_nodes(nodes: Sequence[NodeInput]) -> List[GeneratedNode]:
    return [n if isinstance(n, GeneratedNode) else GeneratedNode.model_validate(n) for n in nodes or []]


def compute_roadmap_layout(nodes: Sequence[NodeInput], strict: bool = False) -> RoadmapLayout:
    """
    Position a flat node list as a left-to-right tree.

    Lenient by default: dangling parents, cycles and duplicate ids degrade to
    best-effort placement (unreached nodes sit in column 0) and are only
    reported in diagnostics. strict=True raises LayoutValidationError instead.
    """
    items = _coerce_nodes(nodes)
    if not items:
        return RoadmapLayout()

    diagnostics = diagnose_nodes(items)
    if strict and not diagnostics.ok:
        raise LayoutValidationError(diagnostics)

    depths = assign_depths(items)

    # Rows already taken per depth column
    level_usage: Dict[int, int] = {}
    out_nodes: List[LayoutNode] = []
    out_edges: List[LayoutEdge] = []

    for node in items:
        level = depths.get(node.id, 0)
        slot = level_usage.get(level, 0)
        level_usage[level] = slot + 1

        out_nodes.append(LayoutNode(
            id=node.id,
            position=Position(x=level * X_SPACING, y=slot * LEVEL_HEIGHT),
            data=RoadmapNodeData(
                label=node.label,
                description=node.description,
                status="pending",
                resources=[r.model_copy() for r in node.resources],
            ),
            type=DEFAULT_NODE_TYPE,
            style=dict(NODE_STYLE),
        ))

        if node.parent_id:
            out_edges.append(LayoutEdge(
                id=edge_id(node.parent_id, node.id),
                source=node.parent_id,
                target=node.id,
                animated=True,
                style=dict(EDGE_STYLE),
            ))

    return RoadmapLayout(nodes=out_nodes, edges=out_edges, diagnostics=diagnostics)


def layout_nodes(nodes: Sequence[NodeInput]) -> Tuple[List[LayoutNode], List[LayoutEdge]]:
    """Lenient layout returning just (nodes, edges)."""
    result = compute_roadmap_layout(nodes)
    return result.nodes, result.edges
