"""Pydantic request/response schemas for API."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from roadmap.models import ChatMessage, GeneratedNode


class GenerateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    topic: Optional[str] = None
    use_mock: Optional[bool] = Field(default=None, alias="useMock")
    strict: bool = False


class LayoutRequest(BaseModel):
    """Run the layout engine on a raw generated node list."""
    nodes: List[GeneratedNode] = Field(default_factory=list)
    strict: bool = False


class NodeStatusRequest(BaseModel):
    status: str = ""


class SelectNodeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    node_id: Optional[str] = Field(default=None, alias="nodeId")


class TutorChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    message: str = ""
    history: List[ChatMessage] = Field(default_factory=list)
    node_id: Optional[str] = Field(default=None, alias="nodeId")
    use_mock: Optional[bool] = Field(default=None, alias="useMock")
