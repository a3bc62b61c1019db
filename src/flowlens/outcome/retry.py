"""Retry recommendations derived from an error's category.

Only the recommendation lives here. Counting attempts and actually
resubmitting a workflow is left to whoever consumes the RetryStrategy.
"""

from __future__ import annotations

from enum import Enum
from typing import Mapping, Sequence

from pydantic import BaseModel, ConfigDict

from .classifier import classify
from .rules import CATEGORY_RULES, CategoryRule
from .types import ErrorAnalysis, ErrorCategory, ExecutionError


class RetryStrategyKind(str, Enum):
    NONE = "none"
    LINEAR = "linear"
    EXPONENTIAL = "exponential"


class RetryPolicy(BaseModel):
    """Tunable backoff settings for one error category."""

    model_config = ConfigDict(frozen=True)

    strategy: RetryStrategyKind
    initial_delay_ms: int
    max_attempts: int


class RetryStrategy(BaseModel):
    """Whether and how to resubmit a failed workflow."""

    model_config = ConfigDict(frozen=True)

    should_retry: bool
    strategy: RetryStrategyKind
    initial_delay_ms: int
    max_attempts: int

    def delay_for_attempt(self, attempt: int) -> int:
        """Delay in ms before the given retry (1-based); 0 once attempts run out."""
        if not self.should_retry or attempt < 1 or attempt > self.max_attempts:
            return 0
        if self.strategy == RetryStrategyKind.LINEAR:
            return self.initial_delay_ms * attempt
        if self.strategy == RetryStrategyKind.EXPONENTIAL:
            return self.initial_delay_ms * 2 ** (attempt - 1)
        return 0


NO_RETRY = RetryStrategy(
    should_retry=False,
    strategy=RetryStrategyKind.NONE,
    initial_delay_ms=0,
    max_attempts=0,
)

DEFAULT_RETRY_POLICY = RetryPolicy(
    strategy=RetryStrategyKind.EXPONENTIAL,
    initial_delay_ms=5_000,
    max_attempts=3,
)

RETRY_POLICIES: dict[ErrorCategory, RetryPolicy] = {
    ErrorCategory.RATE_LIMIT: RetryPolicy(
        strategy=RetryStrategyKind.EXPONENTIAL,
        initial_delay_ms=60_000,
        max_attempts=5,
    ),
    ErrorCategory.TIMEOUT: RetryPolicy(
        strategy=RetryStrategyKind.LINEAR,
        initial_delay_ms=10_000,
        max_attempts=2,
    ),
    ErrorCategory.NETWORK: DEFAULT_RETRY_POLICY,
    ErrorCategory.RESOURCE: DEFAULT_RETRY_POLICY,
}


def retry_strategy_for(
    analysis: ErrorAnalysis,
    policies: Mapping[ErrorCategory, RetryPolicy] = RETRY_POLICIES,
) -> RetryStrategy:
    """Map an existing classification onto a retry strategy."""
    if not analysis.is_retryable:
        return NO_RETRY

    policy = policies.get(analysis.category, DEFAULT_RETRY_POLICY)
    return RetryStrategy(
        should_retry=True,
        strategy=policy.strategy,
        initial_delay_ms=policy.initial_delay_ms,
        max_attempts=policy.max_attempts,
    )


def suggest_retry(
    error: ExecutionError,
    policies: Mapping[ErrorCategory, RetryPolicy] = RETRY_POLICIES,
    rules: Sequence[CategoryRule] = CATEGORY_RULES,
) -> RetryStrategy:
    """Classify the error and recommend a retry strategy for it."""
    return retry_strategy_for(classify(error, rules), policies)
