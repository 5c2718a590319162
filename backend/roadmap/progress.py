"""
Progress tracking - status changes on an already laid-out roadmap.
Layout only ever creates nodes as pending; everything after that lives here.
"""

from typing import Dict, Union

from .models import NODE_STATUSES, RoadmapData


def set_node_status(roadmap: RoadmapData, node_id: str, status: str) -> RoadmapData:
    """Return a copy of roadmap with one node's status replaced. Positions are untouched."""
    if status not in NODE_STATUSES:
        raise ValueError(f"Invalid status '{status}'. Expected one of: {', '.join(NODE_STATUSES)}")
    if roadmap.find_node(node_id) is None:
        raise KeyError(node_id)

    nodes = []
    for node in roadmap.nodes:
        if node.id == node_id:
            data = node.data.model_copy(update={"status": status})
            node = node.model_copy(update={"data": data})
        nodes.append(node)
    return roadmap.model_copy(update={"nodes": nodes})


def mark_complete(roadmap: RoadmapData, node_id: str) -> RoadmapData:
    return set_node_status(roadmap, node_id, "completed")


def progress_summary(roadmap: RoadmapData) -> Dict[str, Union[int, float]]:
    counts = {s: 0 for s in NODE_STATUSES}
    for node in roadmap.nodes:
        counts[node.data.status] = counts.get(node.data.status, 0) + 1
    total = len(roadmap.nodes)
    percent = round(counts["completed"] * 100 / total, 1) if total else 0.0
    return {
        "total": total,
        "completed": counts["completed"],
        "inProgress": counts["in-progress"],
        "pending": counts["pending"],
        "percent": percent,
    }
