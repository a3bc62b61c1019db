"""Boundary loading of workflow documents: parsing, shape checks and size guard."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..config import Settings, get_settings
from .analyzer import count_connections
from .schema import Workflow

logger = logging.getLogger(__name__)


class WorkflowDocumentError(ValueError):
    """Raised when a document cannot be turned into a Workflow."""


class GraphTooLargeError(WorkflowDocumentError):
    """Raised when a workflow exceeds the configured node or connection limits."""

    def __init__(self, message: str, node_count: int, connection_count: int):
        self.node_count = node_count
        self.connection_count = connection_count
        super().__init__(message)


def load_workflow(source: Workflow | dict[str, Any] | str | bytes | Path, settings: Settings | None = None) -> Workflow:
    """Build a Workflow from a dict, JSON text or a JSON file and enforce size limits."""
    if isinstance(source, Workflow):
        workflow = source
    else:
        data = _read_document(source)
        try:
            workflow = Workflow.model_validate(data)
        except ValidationError as e:
            raise WorkflowDocumentError(f"Invalid workflow document: {e}") from e

    check_size(workflow, settings)
    return workflow


def check_size(workflow: Workflow, settings: Settings | None = None) -> None:
    """Reject graphs larger than the configured limits before they are analyzed."""
    if settings is None:
        settings = get_settings()

    node_count = len(workflow.nodes)
    connection_count = count_connections(workflow)

    if node_count > settings.max_nodes or connection_count > settings.max_connections:
        logger.warning(
            "Rejected workflow %r: %d nodes, %d connections (limits %d/%d)",
            workflow.id,
            node_count,
            connection_count,
            settings.max_nodes,
            settings.max_connections,
        )
        raise GraphTooLargeError(
            f"Workflow too large: {node_count} nodes, {connection_count} connections "
            f"(limits: {settings.max_nodes} nodes, {settings.max_connections} connections)",
            node_count=node_count,
            connection_count=connection_count,
        )


def _read_document(source: dict[str, Any] | str | bytes | Path) -> Any:
    if isinstance(source, dict):
        return source

    if isinstance(source, Path):
        try:
            source = source.read_text()
        except OSError as e:
            raise WorkflowDocumentError(f"Cannot read workflow file: {e}") from e

    try:
        return json.loads(source)
    except json.JSONDecodeError as e:
        raise WorkflowDocumentError(f"Workflow document is not valid JSON: {e.msg} at line {e.lineno}") from e
