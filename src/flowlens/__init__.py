"""flowlens: structural analysis of workflow graphs and classification of failed runs."""

from .outcome import (
    ErrorAnalysis,
    ErrorCategory,
    ErrorSeverity,
    ExecutionError,
    RetryStrategy,
    classify,
    should_alert,
    suggest_retry,
    summarize,
)
from .workflow import AnalysisResult, ValidationResult, Workflow, analyze, load_workflow, validate

__all__ = [
    "AnalysisResult",
    "ErrorAnalysis",
    "ErrorCategory",
    "ErrorSeverity",
    "ExecutionError",
    "RetryStrategy",
    "ValidationResult",
    "Workflow",
    "analyze",
    "classify",
    "load_workflow",
    "should_alert",
    "suggest_retry",
    "summarize",
    "validate",
]
