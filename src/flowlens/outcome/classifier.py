"""Classification of failed execution errors."""

from __future__ import annotations

import json
import logging
from typing import Iterable, Sequence

from .rules import CATEGORY_RULES, UNKNOWN_ANALYSIS, CategoryRule
from .types import ErrorAnalysis, ErrorCategory, ErrorSeverity, ErrorSummary, ExecutionError, ImpactLevel

logger = logging.getLogger(__name__)


def build_search_text(error: ExecutionError) -> str:
    """Join message, description, stack trace and JSON context into one lowercase string."""
    parts = [error.message, error.description, error.stack_trace]
    if error.context:
        parts.append(json.dumps(error.context, default=str))
    return " ".join(part for part in parts if part).lower()


def classify(error: ExecutionError, rules: Sequence[CategoryRule] = CATEGORY_RULES) -> ErrorAnalysis:
    """Return the outcome of the first rule matching the error text, else UNKNOWN."""
    text = build_search_text(error)
    for rule in rules:
        if rule.matches(text):
            analysis = rule.to_analysis()
            logger.debug(
                "Classified error as %s/%s via %r",
                analysis.category.value,
                analysis.severity.value,
                analysis.matched_pattern,
            )
            return analysis

    logger.debug("No rule matched error text; classified as unknown")
    return UNKNOWN_ANALYSIS


def should_alert(error: ExecutionError, rules: Sequence[CategoryRule] = CATEGORY_RULES) -> bool:
    """Whether the error warrants paging: critical severity or impact, or any auth failure."""
    analysis = classify(error, rules)
    return (
        analysis.severity == ErrorSeverity.CRITICAL
        or analysis.category == ErrorCategory.AUTHENTICATION
        or analysis.estimated_impact == ImpactLevel.CRITICAL
    )


def summarize(errors: Iterable[ExecutionError], rules: Sequence[CategoryRule] = CATEGORY_RULES) -> ErrorSummary:
    """Classify a batch of errors and count them by category and severity."""
    analyses = [classify(error, rules) for error in errors]

    by_category: dict[str, int] = {}
    by_severity: dict[str, int] = {}
    retryable_count = 0
    critical_count = 0

    for analysis in analyses:
        by_category[analysis.category.value] = by_category.get(analysis.category.value, 0) + 1
        by_severity[analysis.severity.value] = by_severity.get(analysis.severity.value, 0) + 1
        if analysis.is_retryable:
            retryable_count += 1
        if analysis.severity == ErrorSeverity.CRITICAL:
            critical_count += 1

    return ErrorSummary(
        analyses=analyses,
        total_errors=len(analyses),
        by_category=by_category,
        by_severity=by_severity,
        retryable_count=retryable_count,
        critical_count=critical_count,
    )
