"""Pydantic models for roadmaps: generated input, positioned graph output, chat transcript."""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

ResourceType = Literal["article", "video", "documentation"]
NodeStatus = Literal["pending", "in-progress", "completed"]

RESOURCE_TYPES = ("article", "video", "documentation")
NODE_STATUSES = ("pending", "in-progress", "completed")


class Resource(BaseModel):
    title: str = ""
    url: str = ""
    type: ResourceType = "article"

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, v: Any) -> str:
        # The producer's enum is advisory; unknown kinds render as articles
        v = (v or "").strip().lower() if isinstance(v, str) else v
        return v if v in RESOURCE_TYPES else "article"


class GeneratedNode(BaseModel):
    """One record of the flat, parent-referencing list returned by the generator."""
    model_config = ConfigDict(populate_by_name=True)
    id: str
    label: str = ""
    description: str = ""
    parent_id: Optional[str] = Field(default=None, alias="parentId")
    resources: List[Resource] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) else v

    @field_validator("label", "description", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("parent_id", mode="before")
    @classmethod
    def _blank_parent_is_root(cls, v: Any) -> Any:
        if isinstance(v, int):
            return str(v)
        if isinstance(v, str) and not v.strip():
            return None
        return v


class GeneratedRoadmapResponse(BaseModel):
    """Raw JSON shape expected from Gemini for generation."""
    title: str = ""
    nodes: List[GeneratedNode] = Field(default_factory=list)


class Position(BaseModel):
    x: float = 0
    y: float = 0


class RoadmapNodeData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    label: str = ""
    description: str = ""
    status: NodeStatus = "pending"
    resources: List[Resource] = Field(default_factory=list)
    is_ai: Optional[bool] = Field(default=None, alias="isAI")


class LayoutNode(BaseModel):
    """Positioned node in the shape the graph canvas (React Flow) consumes."""
    id: str
    position: Position
    data: RoadmapNodeData
    type: str = "default"
    style: Dict[str, Any] = Field(default_factory=dict)


class LayoutEdge(BaseModel):
    id: str
    source: str
    target: str
    animated: bool = True
    style: Dict[str, Any] = Field(default_factory=dict)


class RoadmapData(BaseModel):
    id: str
    title: str
    nodes: List[LayoutNode] = Field(default_factory=list)
    edges: List[LayoutEdge] = Field(default_factory=list)

    def find_node(self, node_id: str) -> Optional[LayoutNode]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None


class ChatMessage(BaseModel):
    id: str
    role: Literal["user", "model"]
    content: str = ""
    timestamp: int = 0


class DanglingParent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    node_id: str = Field(alias="nodeId")
    parent_id: str = Field(alias="parentId")


class LayoutDiagnostics(BaseModel):
    """Malformed-input signals. Informational: placement never depends on them."""
    model_config = ConfigDict(populate_by_name=True)
    duplicate_ids: List[str] = Field(default_factory=list, alias="duplicateIds")
    dangling_parents: List[DanglingParent] = Field(default_factory=list, alias="danglingParents")
    cycles: List[List[str]] = Field(default_factory=list)
    unreachable: List[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not (self.duplicate_ids or self.dangling_parents or self.cycles or self.unreachable)

    def summary(self) -> str:
        parts = []
        if self.duplicate_ids:
            parts.append(f"duplicate ids: {', '.join(self.duplicate_ids)}")
        if self.dangling_parents:
            refs = ", ".join(f"{d.node_id}->{d.parent_id}" for d in self.dangling_parents)
            parts.append(f"dangling parents: {refs}")
        if self.cycles:
            parts.append(f"cycles: {'; '.join(' -> '.join(c) for c in self.cycles)}")
        if self.unreachable:
            parts.append(f"unreachable: {', '.join(self.unreachable)}")
        return "; ".join(parts)
