"""Bundled example roadmap shown before the first generation."""

from layout import layout_nodes

from .models import GeneratedNode, Resource, RoadmapData

SAMPLE_ROADMAP_ID = "frontend-dev"
SAMPLE_ROADMAP_TITLE = "Frontend Developer"


def _node(node_id, label, description, parent_id, title, url, kind):
    return GeneratedNode(
        id=node_id,
        label=label,
        description=description,
        parent_id=parent_id,
        resources=[Resource(title=title, url=url, type=kind)],
    )


SAMPLE_NODES = [
    _node("1", "Internet", "How the internet works.", None, "How does the Internet work?", "#", "article"),
    _node("2", "HTML", "Structure of web pages.", "1", "MDN HTML", "#", "documentation"),
    _node("3", "CSS", "Styling web pages.", "1", "MDN CSS", "#", "documentation"),
    _node("4", "JavaScript", "Programming logic.", "1", "JS Info", "#", "article"),
    _node("5", "React", "UI Library.", "4", "React Docs", "#", "documentation"),
    _node("6", "Tailwind CSS", "Utility-first CSS.", "3", "Tailwind Docs", "#", "documentation"),
    _node("7", "Git", "Version control system.", "4", "Git Docs", "https://git-scm.com/doc", "documentation"),
]

_sample_nodes, _sample_edges = layout_nodes(SAMPLE_NODES)

SAMPLE_ROADMAP_DATA = RoadmapData(
    id=SAMPLE_ROADMAP_ID,
    title=SAMPLE_ROADMAP_TITLE,
    nodes=_sample_nodes,
    edges=_sample_edges,
)


def build_sample_roadmap() -> RoadmapData:
    """Fresh copy of the sample; callers may mutate progress freely."""
    return SAMPLE_ROADMAP_DATA.model_copy(deep=True)
