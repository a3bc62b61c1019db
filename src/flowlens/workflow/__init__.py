"""Workflow graph models, loading and structural analysis."""

from .analyzer import analyze, node_type_name, validate
from .loader import GraphTooLargeError, WorkflowDocumentError, load_workflow
from .report import AnalysisResult, ValidationResult
from .schema import Workflow, WorkflowEdge, WorkflowNode

__all__ = [
    "AnalysisResult",
    "GraphTooLargeError",
    "ValidationResult",
    "Workflow",
    "WorkflowDocumentError",
    "WorkflowEdge",
    "WorkflowNode",
    "analyze",
    "load_workflow",
    "node_type_name",
    "validate",
]
