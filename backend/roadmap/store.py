"""
In-memory holder of the roadmap currently shown to the user.
Replaced wholesale on each successful generation; not persisted across restarts.
"""

import asyncio
from typing import Optional

from loguru import logger

from .models import LayoutNode, RoadmapData
from .progress import set_node_status
from .sample import build_sample_roadmap


class RoadmapStore:
    def __init__(self, initial: Optional[RoadmapData] = None):
        self._roadmap = initial or build_sample_roadmap()
        self._selected_id: Optional[str] = None
        self._lock = asyncio.Lock()

    def get(self) -> RoadmapData:
        return self._roadmap

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    async def replace(self, roadmap: RoadmapData) -> RoadmapData:
        """Swap in a new roadmap (no merge with the previous one). Clears selection."""
        async with self._lock:
            logger.info("Replacing roadmap {} with {} ({} nodes)", self._roadmap.id, roadmap.id, len(roadmap.nodes))
            self._roadmap = roadmap
            self._selected_id = None
            return self._roadmap

    async def update_status(self, node_id: str, status: str) -> LayoutNode:
        """Set one node's status. Raises KeyError (unknown node) or ValueError (bad status)."""
        async with self._lock:
            self._roadmap = set_node_status(self._roadmap, node_id, status)
            return self._roadmap.find_node(node_id)

    async def select(self, node_id: Optional[str]) -> Optional[LayoutNode]:
        async with self._lock:
            if node_id is None:
                self._selected_id = None
                return None
            node = self._roadmap.find_node(node_id)
            if node is None:
                raise KeyError(node_id)
            self._selected_id = node_id
            return node

    def selected_node(self) -> Optional[LayoutNode]:
        if self._selected_id is None:
            return None
        return self._roadmap.find_node(self._selected_id)

    async def reset(self) -> RoadmapData:
        return await self.replace(build_sample_roadmap())
