"""Pydantic models for the workflow engine's definition document."""

from __future__ import annotations

import hashlib
import json
from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, Field


class WorkflowEdge(BaseModel):
    """A link from one output slot of a source node to an input of a target node."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    target_node_id: str = Field(alias="node")
    connection_type: str = Field("main", alias="type")
    input_index: int = Field(0, alias="index")


class WorkflowNode(BaseModel):
    """A single unit of work. Engine-only fields (position, typeVersion, ...) are dropped."""

    model_config = ConfigDict(frozen=True)

    id: str
    type: str = ""  # fully qualified, e.g. "n8n-nodes-base.httpRequest"
    parameters: dict[str, Any] = {}


class Workflow(BaseModel):
    """A workflow graph as exported by the engine.

    ``connections`` maps source node id -> connection type (usually ``main``)
    -> ordered output slots -> edges leaving that slot.
    """

    model_config = ConfigDict(frozen=True)

    id: str = ""
    name: str = ""
    nodes: list[WorkflowNode] = []
    connections: dict[str, dict[str, list[list[WorkflowEdge]]]] = {}

    def node_ids(self) -> list[str]:
        return [node.id for node in self.nodes]

    def iter_slots(self) -> Iterator[tuple[str, list[WorkflowEdge]]]:
        """Yield (source_id, edges) for every output slot, in document order."""
        for source_id, outputs in self.connections.items():
            for slots in outputs.values():
                for edges in slots:
                    yield source_id, edges

    def iter_edges(self) -> Iterator[tuple[str, WorkflowEdge]]:
        """Yield (source_id, edge) for every edge, in document order."""
        for source_id, edges in self.iter_slots():
            for edge in edges:
                yield source_id, edge

    def successors(self, node_id: str) -> list[str]:
        """Target ids reachable over one edge from ``node_id``, duplicates kept."""
        outputs = self.connections.get(node_id, {})
        return [edge.target_node_id for slots in outputs.values() for edges in slots for edge in edges]

    def fingerprint(self) -> str:
        """SHA-256 of the graph content, usable as a cache key by callers."""
        payload = self.model_dump(mode="json", by_alias=True, include={"nodes", "connections"})
        canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"), default=str)
        return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
