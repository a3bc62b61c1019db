"""Structural analysis and validation of workflow graphs."""

from __future__ import annotations

import logging
import math
from collections import deque

from .report import AnalysisResult, ValidationResult
from .schema import Workflow, WorkflowNode

logger = logging.getLogger(__name__)

# Typical execution time per node type, in milliseconds
NODE_DURATION_ESTIMATES: dict[str, int] = {
    "start": 10,
    "webhook": 1000,
    "httpRequest": 2000,
    "function": 100,
    "code": 200,
    "set": 50,
    "if": 50,
    "switch": 50,
    "merge": 20,
    "wait": 1000,  # used only when parameters.amount is not a positive finite number
    "default": 500,
}

NODE_WEIGHT = 1.0
CONNECTION_WEIGHT = 0.5
BRANCH_WEIGHT = 2.0
LOOP_PENALTY = 3.0


def node_type_name(full_type: str) -> str:
    """Return the trailing segment of a dotted type ("n8n-nodes-base.if" -> "if")."""
    segments = [segment for segment in full_type.split(".") if segment]
    return segments[-1] if segments else ""


def analyze(workflow: Workflow) -> AnalysisResult:
    """Derive node/edge counts, entry and exit nodes, complexity and duration."""
    connection_count = count_connections(workflow)
    result = AnalysisResult(
        workflow_id=workflow.id,
        workflow_name=workflow.name,
        node_count=len(workflow.nodes),
        connection_count=connection_count,
        node_type_counts=count_node_types(workflow),
        start_node_ids=find_start_nodes(workflow),
        end_node_ids=find_end_nodes(workflow),
        complexity_score=calculate_complexity(workflow, connection_count),
        estimated_duration_ms=estimate_duration(workflow),
    )
    logger.debug(
        "Analyzed workflow %r: nodes=%d connections=%d complexity=%.1f duration_ms=%d",
        workflow.id,
        result.node_count,
        result.connection_count,
        result.complexity_score,
        result.estimated_duration_ms,
    )
    return result


def count_connections(workflow: Workflow) -> int:
    return sum(len(edges) for _, edges in workflow.iter_slots())


def count_node_types(workflow: Workflow) -> dict[str, int]:
    counts: dict[str, int] = {}
    for node in workflow.nodes:
        type_name = node_type_name(node.type)
        counts[type_name] = counts.get(type_name, 0) + 1
    return counts


def find_start_nodes(workflow: Workflow) -> list[str]:
    """Nodes that are never the target of an edge, in document order."""
    targets = {edge.target_node_id for _, edge in workflow.iter_edges()}
    return [node_id for node_id in workflow.node_ids() if node_id not in targets]


def find_end_nodes(workflow: Workflow) -> list[str]:
    """Nodes that never appear as a connection source, in document order."""
    sources = set(workflow.connections)
    return [node_id for node_id in workflow.node_ids() if node_id not in sources]


def calculate_complexity(workflow: Workflow, connection_count: int | None = None) -> float:
    if connection_count is None:
        connection_count = count_connections(workflow)

    complexity = len(workflow.nodes) * NODE_WEIGHT + connection_count * CONNECTION_WEIGHT

    # Fan-out beyond the first edge of a single output slot
    for _, edges in workflow.iter_slots():
        if len(edges) > 1:
            complexity += (len(edges) - 1) * BRANCH_WEIGHT

    complexity += count_back_edges(workflow) * LOOP_PENALTY
    return complexity


def count_back_edges(workflow: Workflow) -> int:
    """Count edges closing a cycle, via DFS seeded from every start node.

    Uses an explicit stack of (node, successor iterator) pairs so deep graphs
    do not hit the interpreter's recursion limit. A node is expanded at most
    once across all seeds.
    """
    visited: set[str] = set()
    on_stack: set[str] = set()
    back_edges = 0

    for start_id in find_start_nodes(workflow):
        if start_id in visited:
            continue

        visited.add(start_id)
        on_stack.add(start_id)
        stack = [(start_id, iter(workflow.successors(start_id)))]

        while stack:
            node_id, successors = stack[-1]
            for target_id in successors:
                if target_id not in visited:
                    visited.add(target_id)
                    on_stack.add(target_id)
                    stack.append((target_id, iter(workflow.successors(target_id))))
                    break
                if target_id in on_stack:
                    back_edges += 1
            else:
                stack.pop()
                on_stack.discard(node_id)

    return back_edges


def estimate_duration(workflow: Workflow) -> int:
    return sum(_node_duration(node) for node in workflow.nodes)


def _node_duration(node: WorkflowNode) -> int:
    type_name = node_type_name(node.type)
    if type_name == "wait":
        amount = node.parameters.get("amount")
        # bool is an int subclass; a flag is not a wait amount
        if isinstance(amount, (int, float)) and not isinstance(amount, bool) and amount > 0:
            duration = amount * 1000
            # JSON Infinity, and floats that overflow once scaled, fall back to the table
            if isinstance(duration, int) or math.isfinite(duration):
                return int(duration)
    return NODE_DURATION_ESTIMATES.get(type_name, NODE_DURATION_ESTIMATES["default"])


def validate(workflow: Workflow) -> ValidationResult:
    """Check that the graph is non-empty, fully resolvable and connected.

    Rules:
    1. The workflow must have at least one node (stops here otherwise)
    2. Every connection source and edge target must name an existing node
    3. With more than one node, every node must be reachable from the first
       one when edges are treated as undirected
    """
    if not workflow.nodes:
        logger.info("Workflow %r failed validation: no nodes", workflow.id)
        return ValidationResult.from_errors(["Workflow must have at least one node"])

    errors: list[str] = []
    node_ids = set(workflow.node_ids())

    for source_id, outputs in workflow.connections.items():
        if source_id not in node_ids:
            errors.append(f"Connection source node not found: {source_id}")
        for slots in outputs.values():
            for edges in slots:
                for edge in edges:
                    if edge.target_node_id not in node_ids:
                        errors.append(f"Connection target node not found: {edge.target_node_id}")

    if len(workflow.nodes) > 1:
        disconnected = find_disconnected_nodes(workflow)
        if disconnected:
            errors.append(f"Disconnected nodes found: {', '.join(disconnected)}")

    result = ValidationResult.from_errors(errors)
    if result.valid:
        logger.debug("Workflow %r is valid", workflow.id)
    else:
        logger.info("Workflow %r failed validation with %d error(s)", workflow.id, len(errors))
    return result


def find_disconnected_nodes(workflow: Workflow) -> list[str]:
    """Nodes not reachable from the first node over the undirected edge view."""
    if not workflow.nodes:
        return []

    adjacency: dict[str, set[str]] = {node_id: set() for node_id in workflow.node_ids()}
    # Unresolved ids get no entry, so they cannot bridge two components
    for source_id, edge in workflow.iter_edges():
        if source_id in adjacency:
            adjacency[source_id].add(edge.target_node_id)
        if edge.target_node_id in adjacency:
            adjacency[edge.target_node_id].add(source_id)

    first_id = workflow.nodes[0].id
    reached = {first_id}
    queue: deque[str] = deque([first_id])
    while queue:
        node_id = queue.popleft()
        for neighbor_id in adjacency.get(node_id, ()):
            if neighbor_id not in reached:
                reached.add(neighbor_id)
                queue.append(neighbor_id)

    return [node_id for node_id in workflow.node_ids() if node_id not in reached]
