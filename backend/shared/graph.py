"""
Graph utilities for parent-referencing roadmap node lists.
Shared by layout (depth assignment) and generator (diagnostics logging).
"""

from typing import Dict, List, Optional, Sequence, Set

import networkx as nx

from roadmap.models import DanglingParent, GeneratedNode, LayoutDiagnostics


def build_children_map(nodes: Sequence[GeneratedNode]) -> Dict[str, List[str]]:
    """parent_id -> [child ids] in first-encountered input order. Roots are not keys' values."""
    children: Dict[str, List[str]] = {}
    for node in nodes:
        if node.parent_id:
            children.setdefault(node.parent_id, []).append(node.id)
    return children


def get_root_ids(nodes: Sequence[GeneratedNode]) -> List[str]:
    """Ids of nodes without a parent, in input order."""
    return [n.id for n in nodes if not n.parent_id]


def assign_depths(nodes: Sequence[GeneratedNode]) -> Dict[str, int]:
    """
    Breadth-first depth assignment from every root (input order).
    Each id is expanded at most once, so cyclic or duplicated input terminates.
    Ids missing from the result were never reached from a root.
    """
    children_map = build_children_map(nodes)
    depths: Dict[str, int] = {}
    queue: List[str] = []
    for rid in get_root_ids(nodes):
        depths[rid] = 0
        queue.append(rid)

    expanded: Set[str] = set()
    head = 0
    while head < len(queue):
        current = queue[head]
        head += 1
        if current in expanded:
            continue
        expanded.add(current)
        level = depths.get(current, 0)
        for child in children_map.get(current, []):
            if child in expanded:
                continue
            depths[child] = level + 1
            queue.append(child)
    return depths


def build_parent_graph(nodes: Sequence[GeneratedNode], ids: Optional[Set[str]] = None) -> nx.DiGraph:
    """Directed parent -> child graph over resolvable parent links only."""
    ids = ids if ids is not None else {n.id for n in nodes}
    G = nx.DiGraph()
    for node in nodes:
        G.add_node(node.id)
        if node.parent_id and node.parent_id in ids:
            G.add_edge(node.parent_id, node.id)
    return G


def find_cycles(G: nx.DiGraph, order: Dict[str, int]) -> List[List[str]]:
    """
    Cyclic groups of the parent graph, one per strongly connected component
    (size > 1, or a self-parented node). Linear in nodes + edges.
    Members and groups are ordered by first appearance in the input.
    """
    groups: List[List[str]] = []
    for component in nx.strongly_connected_components(G):
        if len(component) == 1:
            (only,) = component
            if not G.has_edge(only, only):
                continue
        groups.append(sorted(component, key=lambda nid: order.get(nid, 0)))
    groups.sort(key=lambda g: order.get(g[0], 0))
    return groups


def diagnose_nodes(nodes: Sequence[GeneratedNode]) -> LayoutDiagnostics:
    """Report duplicate ids, dangling parent references, parent cycles and unreachable nodes."""
    order: Dict[str, int] = {}
    duplicates: Dict[str, None] = {}
    for idx, node in enumerate(nodes):
        if node.id in order:
            duplicates[node.id] = None
            continue
        order[node.id] = idx

    ids = set(order)
    dangling = [
        DanglingParent(node_id=n.id, parent_id=n.parent_id)
        for n in nodes
        if n.parent_id and n.parent_id not in ids
    ]

    G = build_parent_graph(nodes, ids)
    cycles = find_cycles(G, order)

    depths = assign_depths(nodes)
    unreachable = list(dict.fromkeys(n.id for n in nodes if n.id not in depths))

    return LayoutDiagnostics(
        duplicate_ids=list(duplicates),
        dangling_parents=dangling,
        cycles=cycles,
        unreachable=unreachable,
    )
