"""Error records reported by failed executions and their classification."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ErrorCategory(str, Enum):
    NETWORK = "network"
    AUTHENTICATION = "authentication"
    TIMEOUT = "timeout"
    VALIDATION = "validation"
    RATE_LIMIT = "rate_limit"
    CONFIGURATION = "configuration"
    RESOURCE = "resource"
    UNKNOWN = "unknown"


class ErrorSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ImpactLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ExecutionError(BaseModel):
    """Free-text failure record assembled from whatever the engine reported."""

    message: str
    description: Optional[str] = None
    stack_trace: Optional[str] = Field(
        None, validation_alias=AliasChoices("stack_trace", "stackTrace", "stack")
    )
    context: Optional[dict[str, Any]] = None


class ErrorAnalysis(BaseModel):
    """Category, severity and retryability assigned to one execution error."""

    model_config = ConfigDict(frozen=True)

    category: ErrorCategory
    severity: ErrorSeverity
    is_retryable: bool
    suggestion: str
    estimated_impact: Optional[ImpactLevel] = None
    matched_pattern: str = "unknown"


class ErrorSummary(BaseModel):
    """Aggregate view over a batch of classified errors."""

    analyses: list[ErrorAnalysis] = []
    total_errors: int = 0
    by_category: dict[str, int] = {}
    by_severity: dict[str, int] = {}
    retryable_count: int = 0
    critical_count: int = 0
