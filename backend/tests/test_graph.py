import unittest

from roadmap.models import GeneratedNode
from shared.graph import assign_depths, build_children_map, diagnose_nodes


def _n(node_id, parent_id=None):
    return GeneratedNode(id=node_id, parent_id=parent_id)


class GraphUtilsTests(unittest.TestCase):
    def test_children_map_keeps_first_encountered_order(self) -> None:
        children = build_children_map([_n("R"), _n("b", "R"), _n("a", "R"), _n("c", "b")])
        self.assertEqual(children, {"R": ["b", "a"], "b": ["c"]})

    def test_depths_from_multiple_roots(self) -> None:
        depths = assign_depths([_n("R1"), _n("x", "R1"), _n("R2"), _n("y", "x"), _n("z", "R2")])
        self.assertEqual(depths, {"R1": 0, "R2": 0, "x": 1, "z": 1, "y": 2})

    def test_unreached_nodes_have_no_depth(self) -> None:
        depths = assign_depths([_n("R"), _n("lost", "nowhere")])
        self.assertNotIn("lost", depths)

    def test_clean_tree_has_no_diagnostics(self) -> None:
        diag = diagnose_nodes([_n("R"), _n("a", "R"), _n("b", "a")])
        self.assertTrue(diag.ok)
        self.assertEqual(diag.summary(), "")

    def test_diagnostics_report_every_problem(self) -> None:
        diag = diagnose_nodes([
            _n("R"),
            _n("dup", "R"),
            _n("dup", "R"),
            _n("orphan", "ghost"),
            _n("p", "q"),
            _n("q", "p"),
        ])
        self.assertEqual(diag.duplicate_ids, ["dup"])
        self.assertEqual([(d.node_id, d.parent_id) for d in diag.dangling_parents], [("orphan", "ghost")])
        self.assertEqual(diag.cycles, [["p", "q"]])
        self.assertEqual(diag.unreachable, ["orphan", "p", "q"])
        self.assertFalse(diag.ok)
        self.assertIn("dangling parents: orphan->ghost", diag.summary())

    def test_self_parent_and_multi_node_loops_are_grouped(self) -> None:
        diag = diagnose_nodes([_n("R"), _n("s", "s"), _n("c", "b"), _n("a", "c"), _n("b", "a")])
        self.assertEqual(diag.cycles, [["s"], ["c", "a", "b"]])

    def test_densely_duplicated_parents_report_one_group(self) -> None:
        ids = [f"n{i}" for i in range(12)]
        nodes = [_n("root")] + [_n(a, b) for a in ids for b in ids if a != b]
        diag = diagnose_nodes(nodes)
        self.assertEqual(diag.cycles, [ids])
        self.assertEqual(diag.duplicate_ids, ids)

    def test_diagnostics_serialize_camel_case(self) -> None:
        dumped = diagnose_nodes([_n("orphan", "ghost")]).model_dump(by_alias=True)
        self.assertEqual(dumped["danglingParents"], [{"nodeId": "orphan", "parentId": "ghost"}])
        self.assertEqual(dumped["duplicateIds"], [])


if __name__ == "__main__":
    unittest.main()
