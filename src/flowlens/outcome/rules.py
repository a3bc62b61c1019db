"""Ordered category rules for execution error classification.

Rules are evaluated top to bottom against lowercased error text and the first
match wins, so more specific wording must come before generic wording. In
particular CONFIGURATION sits above VALIDATION, which would otherwise claim
any message containing "invalid".
"""

import re
from typing import Optional

from pydantic import BaseModel, ConfigDict

from .types import ErrorAnalysis, ErrorCategory, ErrorSeverity, ImpactLevel


class CategoryRule(BaseModel):
    """Maps a text pattern to a fixed classification outcome."""

    model_config = ConfigDict(frozen=True)

    pattern: re.Pattern
    category: ErrorCategory
    severity: ErrorSeverity
    is_retryable: bool
    suggestion: str
    estimated_impact: Optional[ImpactLevel] = None

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None

    def to_analysis(self) -> ErrorAnalysis:
        return ErrorAnalysis(
            category=self.category,
            severity=self.severity,
            is_retryable=self.is_retryable,
            suggestion=self.suggestion,
            estimated_impact=self.estimated_impact,
            matched_pattern=self.pattern.pattern,
        )


CATEGORY_RULES: list[CategoryRule] = [
    CategoryRule(
        pattern=re.compile(
            r"econnrefused|enotfound|enetunreach|ehostunreach|econnreset|connection refused|connection reset"
        ),
        category=ErrorCategory.NETWORK,
        severity=ErrorSeverity.HIGH,
        is_retryable=True,
        suggestion=(
            "Check network connectivity and ensure the target service is running. "
            "Verify firewall rules and DNS resolution."
        ),
        estimated_impact=ImpactLevel.HIGH,
    ),
    CategoryRule(
        pattern=re.compile(r"socket hang up"),
        category=ErrorCategory.NETWORK,
        severity=ErrorSeverity.MEDIUM,
        is_retryable=True,
        suggestion="Connection was interrupted. Check network stability and retry.",
        estimated_impact=ImpactLevel.MEDIUM,
    ),
    CategoryRule(
        pattern=re.compile(r"\b401\b|unauthorized|authentication failed|invalid credentials"),
        category=ErrorCategory.AUTHENTICATION,
        severity=ErrorSeverity.CRITICAL,
        is_retryable=False,
        suggestion="Verify credentials and API keys. Check if they have expired.",
        estimated_impact=ImpactLevel.CRITICAL,
    ),
    CategoryRule(
        pattern=re.compile(r"\b403\b|forbidden|access denied"),
        category=ErrorCategory.AUTHENTICATION,
        severity=ErrorSeverity.HIGH,
        is_retryable=False,
        suggestion="Check permissions and access rights for this resource.",
        estimated_impact=ImpactLevel.HIGH,
    ),
    CategoryRule(
        pattern=re.compile(r"timeout|timed out|etimedout|deadline exceeded"),
        category=ErrorCategory.TIMEOUT,
        severity=ErrorSeverity.MEDIUM,
        is_retryable=True,
        suggestion="Operation exceeded its time limit. Increase timeout settings or optimize the operation.",
        estimated_impact=ImpactLevel.MEDIUM,
    ),
    CategoryRule(
        pattern=re.compile(r"configuration|misconfigured|config error"),
        category=ErrorCategory.CONFIGURATION,
        severity=ErrorSeverity.HIGH,
        is_retryable=False,
        suggestion="Review and fix the workflow or node configuration settings.",
        estimated_impact=ImpactLevel.HIGH,
    ),
    CategoryRule(
        pattern=re.compile(
            r"\b400\b|bad request|invalid|validation|required field|missing required|field is required"
        ),
        category=ErrorCategory.VALIDATION,
        severity=ErrorSeverity.MEDIUM,
        is_retryable=False,
        suggestion="Check input data format and required fields.",
        estimated_impact=ImpactLevel.MEDIUM,
    ),
    CategoryRule(
        pattern=re.compile(r"\b429\b|rate limit|too many requests|quota exceeded"),
        category=ErrorCategory.RATE_LIMIT,
        severity=ErrorSeverity.MEDIUM,
        is_retryable=True,
        suggestion="API rate limit exceeded. Wait before retrying and reduce request frequency.",
        estimated_impact=ImpactLevel.MEDIUM,
    ),
    # RESOURCE branches on sub-pattern: exhaustion is fatal, unavailability is transient
    CategoryRule(
        pattern=re.compile(r"out of memory|heap|memory limit|disk full|no space left"),
        category=ErrorCategory.RESOURCE,
        severity=ErrorSeverity.CRITICAL,
        is_retryable=False,
        suggestion="System resources exhausted. Scale up resources or optimize memory usage.",
        estimated_impact=ImpactLevel.CRITICAL,
    ),
    CategoryRule(
        pattern=re.compile(r"\b502\b|\b503\b|service unavailable|temporarily unavailable"),
        category=ErrorCategory.RESOURCE,
        severity=ErrorSeverity.HIGH,
        is_retryable=True,
        suggestion="Dependent service is unavailable. Wait and retry, or check the service status.",
        estimated_impact=ImpactLevel.HIGH,
    ),
]

UNKNOWN_ANALYSIS = ErrorAnalysis(
    category=ErrorCategory.UNKNOWN,
    severity=ErrorSeverity.MEDIUM,
    is_retryable=False,
    suggestion="Review error details and logs for more information.",
    estimated_impact=ImpactLevel.MEDIUM,
    matched_pattern="unknown",
)
