import time
import unittest

from layout import LayoutValidationError, compute_roadmap_layout, layout_nodes
from layout.constants import LEVEL_HEIGHT, X_SPACING
from roadmap.models import GeneratedNode


def _n(node_id, parent_id=None, label=None):
    return GeneratedNode(id=node_id, label=label or node_id, description=f"{node_id} topic", parent_id=parent_id)


def _positions(nodes):
    return {n.id: (n.position.x, n.position.y) for n in nodes}


class TreeLayoutTests(unittest.TestCase):
    def test_empty_input(self) -> None:
        nodes, edges = layout_nodes([])
        self.assertEqual(nodes, [])
        self.assertEqual(edges, [])

    def test_single_root_at_origin(self) -> None:
        nodes, edges = layout_nodes([_n("root")])
        self.assertEqual(len(nodes), 1)
        self.assertEqual(_positions(nodes)["root"], (0, 0))
        self.assertEqual(edges, [])

    def test_linear_chain(self) -> None:
        nodes, edges = layout_nodes([_n("A"), _n("B", "A"), _n("C", "B"), _n("D", "C")])
        pos = _positions(nodes)
        self.assertEqual([pos[k][0] for k in "ABCD"], [0, 300, 600, 900])
        self.assertEqual([pos[k][1] for k in "ABCD"], [0, 0, 0, 0])
        self.assertEqual([e.id for e in edges], ["e-A-B", "e-B-C", "e-C-D"])
        self.assertEqual([(e.source, e.target) for e in edges], [("A", "B"), ("B", "C"), ("C", "D")])

    def test_sibling_fan_out_follows_input_order(self) -> None:
        nodes, _ = layout_nodes([_n("R"), _n("X", "R"), _n("Y", "R"), _n("Z", "R")])
        pos = _positions(nodes)
        self.assertEqual(pos["X"], (300, 0))
        self.assertEqual(pos["Y"], (300, 150))
        self.assertEqual(pos["Z"], (300, 300))

    def test_swapping_same_depth_nodes_swaps_rows(self) -> None:
        before = _positions(layout_nodes([_n("R"), _n("X", "R"), _n("Y", "R")])[0])
        after = _positions(layout_nodes([_n("R"), _n("Y", "R"), _n("X", "R")])[0])
        self.assertEqual(before["X"], after["Y"])
        self.assertEqual(before["Y"], after["X"])

    def test_rows_use_input_order_not_traversal_order(self) -> None:
        # BFS would visit B's child before C's child; input lists C's child first
        nodes, _ = layout_nodes([
            _n("A"), _n("B", "A"), _n("C", "A"), _n("c1", "C"), _n("b1", "B"),
        ])
        pos = _positions(nodes)
        self.assertEqual(pos["c1"], (600, 0))
        self.assertEqual(pos["b1"], (600, 150))

    def test_child_listed_before_parent(self) -> None:
        nodes, edges = layout_nodes([_n("leaf", "mid"), _n("mid", "root"), _n("root")])
        pos = _positions(nodes)
        self.assertEqual(pos["root"], (0, 0))
        self.assertEqual(pos["mid"], (X_SPACING, 0))
        self.assertEqual(pos["leaf"], (2 * X_SPACING, 0))
        self.assertEqual(len(edges), 2)

    def test_identical_input_gives_identical_output(self) -> None:
        data = [_n("A"), _n("B", "A"), _n("C", "A"), _n("D", "C")]
        first = compute_roadmap_layout(data)
        second = compute_roadmap_layout(data)
        self.assertEqual(
            [n.model_dump() for n in first.nodes], [n.model_dump() for n in second.nodes],
        )
        self.assertEqual(
            [e.model_dump() for e in first.edges], [e.model_dump() for e in second.edges],
        )

    def test_dangling_parent_keeps_edge_and_sits_at_depth_zero(self) -> None:
        nodes, edges = layout_nodes([_n("A"), _n("orphan", "ghost")])
        pos = _positions(nodes)
        self.assertEqual(pos["orphan"], (0, LEVEL_HEIGHT))
        self.assertEqual(len(edges), 1)
        self.assertEqual(edges[0].id, "e-ghost-orphan")
        self.assertEqual(edges[0].source, "ghost")
        self.assertEqual(edges[0].target, "orphan")

    def test_forest_roots_share_column_zero(self) -> None:
        nodes, edges = layout_nodes([_n("R1"), _n("R2"), _n("a", "R1"), _n("b", "R2")])
        pos = _positions(nodes)
        self.assertEqual(pos["R1"], (0, 0))
        self.assertEqual(pos["R2"], (0, 150))
        self.assertEqual(pos["a"], (300, 0))
        self.assertEqual(pos["b"], (300, 150))
        self.assertEqual(len(edges), 2)

    def test_output_nodes_carry_data_and_style(self) -> None:
        src = GeneratedNode.model_validate({
            "id": "1", "label": "HTML", "description": "Markup", "parentId": None,
            "resources": [{"title": "MDN", "url": "https://developer.mozilla.org", "type": "documentation"}],
        })
        result = compute_roadmap_layout([src])
        node = result.nodes[0]
        self.assertEqual(node.data.label, "HTML")
        self.assertEqual(node.data.description, "Markup")
        self.assertEqual(node.data.status, "pending")
        self.assertIsNone(node.data.is_ai)
        self.assertEqual(node.data.resources[0].title, "MDN")
        self.assertEqual(node.type, "default")
        self.assertEqual(node.style["background"], "#1e293b")

    def test_edges_are_animated_with_stroke_style(self) -> None:
        _, edges = layout_nodes([_n("A"), _n("B", "A")])
        self.assertTrue(edges[0].animated)
        self.assertEqual(edges[0].style, {"stroke": "#64748b"})

    def test_accepts_plain_dicts(self) -> None:
        nodes, edges = layout_nodes([
            {"id": "a", "label": "A", "description": "", "parentId": None, "resources": []},
            {"id": "b", "label": "B", "description": "", "parentId": "a", "resources": []},
        ])
        self.assertEqual(_positions(nodes)["b"], (300, 0))
        self.assertEqual(edges[0].id, "e-a-b")

    def test_blank_parent_is_treated_as_root(self) -> None:
        nodes, edges = layout_nodes([{"id": "a", "parentId": ""}])
        self.assertEqual(_positions(nodes)["a"], (0, 0))
        self.assertEqual(edges, [])

    def test_calls_do_not_share_row_counters(self) -> None:
        layout_nodes([_n("A"), _n("B"), _n("C")])
        nodes, _ = layout_nodes([_n("Z")])
        self.assertEqual(_positions(nodes)["Z"], (0, 0))

    def test_output_nodes_are_independent_copies(self) -> None:
        src = [_n("A"), _n("B", "A")]
        first = compute_roadmap_layout(src)
        first.nodes[0].data.status = "completed"
        first.nodes[0].style["background"] = "#000"
        second = compute_roadmap_layout(src)
        self.assertEqual(second.nodes[0].data.status, "pending")
        self.assertEqual(second.nodes[0].style["background"], "#1e293b")


class MalformedInputTests(unittest.TestCase):
    def test_cycle_does_not_hang_or_raise(self) -> None:
        result = compute_roadmap_layout([_n("R"), _n("A", "B"), _n("B", "A")])
        pos = _positions(result.nodes)
        self.assertEqual(pos["A"], (0, 150))
        self.assertEqual(pos["B"], (0, 300))
        self.assertEqual(len(result.edges), 2)
        self.assertEqual(result.diagnostics.cycles, [["A", "B"]])

    def test_duplicate_ids_each_produce_a_node(self) -> None:
        result = compute_roadmap_layout([_n("R"), _n("X", "R"), _n("X", "R")])
        self.assertEqual(len(result.nodes), 3)
        pos = [(n.position.x, n.position.y) for n in result.nodes]
        self.assertEqual(pos, [(0, 0), (300, 0), (300, 150)])
        self.assertEqual(result.diagnostics.duplicate_ids, ["X"])

    def test_duplicate_id_cycle_through_root_terminates(self) -> None:
        result = compute_roadmap_layout([_n("A"), _n("B", "A"), _n("A", "B")])
        self.assertEqual(len(result.nodes), 3)
        self.assertEqual(len(result.edges), 2)

    def test_densely_duplicated_ids_stay_fast(self) -> None:
        ids = [f"n{i}" for i in range(12)]
        src = [_n("root")] + [_n(a, b) for a in ids for b in ids if a != b]
        started = time.perf_counter()
        result = compute_roadmap_layout(src)
        self.assertLess(time.perf_counter() - started, 2.0)
        self.assertEqual(len(result.nodes), len(src))
        self.assertEqual(len(result.diagnostics.cycles), 1)

    def test_lenient_mode_reports_dangling_parent(self) -> None:
        result = compute_roadmap_layout([_n("A"), _n("orphan", "ghost")])
        self.assertFalse(result.diagnostics.ok)
        self.assertEqual(result.diagnostics.dangling_parents[0].parent_id, "ghost")

    def test_strict_mode_rejects_dangling_parent(self) -> None:
        with self.assertRaises(LayoutValidationError) as ctx:
            compute_roadmap_layout([_n("A"), _n("orphan", "ghost")], strict=True)
        self.assertIn("ghost", str(ctx.exception))
        self.assertEqual(ctx.exception.diagnostics.dangling_parents[0].node_id, "orphan")

    def test_strict_mode_accepts_clean_tree(self) -> None:
        result = compute_roadmap_layout([_n("A"), _n("B", "A")], strict=True)
        self.assertTrue(result.diagnostics.ok)
        self.assertEqual(len(result.nodes), 2)

    def test_strict_error_is_a_value_error(self) -> None:
        with self.assertRaises(ValueError):
            compute_roadmap_layout([_n("A", "A")], strict=True)


if __name__ == "__main__":
    unittest.main()
