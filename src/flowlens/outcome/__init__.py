"""Execution outcome classification and retry recommendations."""

from .classifier import build_search_text, classify, should_alert, summarize
from .retry import (
    DEFAULT_RETRY_POLICY,
    RETRY_POLICIES,
    RetryPolicy,
    RetryStrategy,
    RetryStrategyKind,
    retry_strategy_for,
    suggest_retry,
)
from .rules import CATEGORY_RULES, CategoryRule
from .types import ErrorAnalysis, ErrorCategory, ErrorSeverity, ErrorSummary, ExecutionError, ImpactLevel

__all__ = [
    "CATEGORY_RULES",
    "CategoryRule",
    "DEFAULT_RETRY_POLICY",
    "ErrorAnalysis",
    "ErrorCategory",
    "ErrorSeverity",
    "ErrorSummary",
    "ExecutionError",
    "ImpactLevel",
    "RETRY_POLICIES",
    "RetryPolicy",
    "RetryStrategy",
    "RetryStrategyKind",
    "build_search_text",
    "classify",
    "retry_strategy_for",
    "should_alert",
    "suggest_retry",
    "summarize",
]
