import sys
import unittest
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from pydantic import ValidationError

from flowlens.workflow.analyzer import validate
from flowlens.workflow.report import ValidationResult
from flowlens.workflow.schema import Workflow


def _workflow(node_ids, connections=None):
    return Workflow.model_validate(
        {
            "id": "wf",
            "name": "Validation fixture",
            "nodes": [{"id": node_id, "type": "n8n-nodes-base.set", "parameters": {}} for node_id in node_ids],
            "connections": {
                source: {"main": [[{"node": target, "type": "main", "index": 0} for target in targets]]}
                for source, targets in (connections or {}).items()
            },
        }
    )


class ValidateTests(unittest.TestCase):
    def test_connected_workflow_is_valid(self):
        result = validate(_workflow(["start", "http"], {"start": ["http"]}))

        self.assertTrue(result.valid)
        self.assertEqual(result.errors, [])

    def test_empty_workflow_short_circuits(self):
        result = validate(_workflow([]))

        self.assertFalse(result.valid)
        self.assertEqual(result.errors, ["Workflow must have at least one node"])

    def test_empty_workflow_ignores_dangling_connections(self):
        result = validate(_workflow([], {"ghost": ["other"]}))

        self.assertEqual(result.errors, ["Workflow must have at least one node"])

    def test_single_node_is_valid(self):
        result = validate(_workflow(["http"]))

        self.assertTrue(result.valid)

    def test_disconnected_node_reported_once(self):
        result = validate(_workflow(["start", "orphan"]))

        self.assertFalse(result.valid)
        self.assertEqual(result.errors, ["Disconnected nodes found: orphan"])

    def test_all_disconnected_nodes_in_one_message(self):
        result = validate(_workflow(["start", "a", "b", "c"], {"start": ["b"]}))

        self.assertEqual(result.errors, ["Disconnected nodes found: a, c"])

    def test_missing_target_reported(self):
        result = validate(_workflow(["start"], {"start": ["non-existent"]}))

        self.assertFalse(result.valid)
        self.assertEqual(result.errors, ["Connection target node not found: non-existent"])

    def test_missing_source_reported(self):
        result = validate(_workflow(["a", "b"], {"ghost": ["a"], "a": ["b"]}))

        self.assertEqual(result.errors, ["Connection source node not found: ghost"])

    def test_unknown_ids_do_not_join_components(self):
        result = validate(_workflow(["a", "b"], {"a": ["ghost"], "b": ["ghost"]}))

        self.assertEqual(
            result.errors,
            [
                "Connection target node not found: ghost",
                "Connection target node not found: ghost",
                "Disconnected nodes found: b",
            ],
        )

    def test_connectivity_ignores_edge_direction(self):
        # The first node in document order is a sink; it still reaches its source
        result = validate(_workflow(["end", "middle", "start"], {"start": ["middle"], "middle": ["end"]}))

        self.assertTrue(result.valid)

    def test_cycles_do_not_invalidate(self):
        result = validate(_workflow(["start", "loop"], {"start": ["loop"], "loop": ["loop"]}))

        self.assertTrue(result.valid)

    def test_valid_flag_matches_errors(self):
        fixtures = [
            _workflow([]),
            _workflow(["a"]),
            _workflow(["a", "b"]),
            _workflow(["a", "b"], {"a": ["b"]}),
            _workflow(["a"], {"a": ["x"], "y": ["a"]}),
        ]
        for workflow in fixtures:
            result = validate(workflow)
            self.assertEqual(result.valid, not result.errors)


class ValidationResultTests(unittest.TestCase):
    def test_from_errors(self):
        self.assertTrue(ValidationResult.from_errors([]).valid)
        self.assertFalse(ValidationResult.from_errors(["boom"]).valid)

    def test_rejects_inconsistent_flag(self):
        with self.assertRaises(ValidationError):
            ValidationResult(valid=True, errors=["boom"])
        with self.assertRaises(ValidationError):
            ValidationResult(valid=False, errors=[])

    def test_markdown(self):
        self.assertEqual(ValidationResult.from_errors([]).to_markdown(), "Workflow is valid.")
        rendered = ValidationResult.from_errors(["Disconnected nodes found: b"]).to_markdown()
        self.assertIn("Workflow validation failed:", rendered)
        self.assertIn("  - Disconnected nodes found: b", rendered)


if __name__ == "__main__":
    unittest.main()
