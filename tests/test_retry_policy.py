import sys
import unittest
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from flowlens.outcome.retry import (
    DEFAULT_RETRY_POLICY,
    NO_RETRY,
    RETRY_POLICIES,
    RetryPolicy,
    RetryStrategy,
    RetryStrategyKind,
    retry_strategy_for,
    suggest_retry,
)
from flowlens.outcome.types import ErrorAnalysis, ErrorCategory, ErrorSeverity, ExecutionError


class SuggestRetryTests(unittest.TestCase):
    def test_authentication_is_never_retried(self):
        for message in ("401 Unauthorized", "403 Forbidden", "authentication failed"):
            strategy = suggest_retry(ExecutionError(message=message))
            self.assertFalse(strategy.should_retry, message)
            self.assertEqual(strategy.strategy, RetryStrategyKind.NONE, message)
            self.assertEqual(strategy.initial_delay_ms, 0, message)
            self.assertEqual(strategy.max_attempts, 0, message)

    def test_rate_limit(self):
        strategy = suggest_retry(ExecutionError(message="429 Too Many Requests"))

        self.assertEqual(
            strategy,
            RetryStrategy(
                should_retry=True,
                strategy=RetryStrategyKind.EXPONENTIAL,
                initial_delay_ms=60000,
                max_attempts=5,
            ),
        )

    def test_timeout(self):
        strategy = suggest_retry(ExecutionError(message="Request timeout"))

        self.assertTrue(strategy.should_retry)
        self.assertEqual(strategy.strategy, RetryStrategyKind.LINEAR)
        self.assertEqual(strategy.initial_delay_ms, 10000)
        self.assertEqual(strategy.max_attempts, 2)

    def test_network_and_transient_resource(self):
        for message in ("ECONNREFUSED", "503 Service Unavailable"):
            strategy = suggest_retry(ExecutionError(message=message))
            self.assertTrue(strategy.should_retry, message)
            self.assertEqual(strategy.strategy, RetryStrategyKind.EXPONENTIAL, message)
            self.assertEqual(strategy.initial_delay_ms, 5000, message)
            self.assertEqual(strategy.max_attempts, 3, message)

    def test_non_retryable_categories(self):
        for message in ("Out of memory", "Configuration error", "400 Bad Request", "Something odd"):
            self.assertEqual(suggest_retry(ExecutionError(message=message)), NO_RETRY, message)

    def test_default_policy_for_other_retryable_categories(self):
        analysis = ErrorAnalysis(
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.LOW,
            is_retryable=True,
            suggestion="Retry with refreshed input.",
        )

        strategy = retry_strategy_for(analysis)

        self.assertTrue(strategy.should_retry)
        self.assertEqual(strategy.strategy, DEFAULT_RETRY_POLICY.strategy)
        self.assertEqual(strategy.initial_delay_ms, 5000)
        self.assertEqual(strategy.max_attempts, 3)

    def test_policies_can_be_tuned(self):
        policies = {
            **RETRY_POLICIES,
            ErrorCategory.RATE_LIMIT: RetryPolicy(
                strategy=RetryStrategyKind.LINEAR,
                initial_delay_ms=1000,
                max_attempts=10,
            ),
        }

        strategy = suggest_retry(ExecutionError(message="rate limit reached"), policies=policies)

        self.assertEqual(strategy.strategy, RetryStrategyKind.LINEAR)
        self.assertEqual(strategy.initial_delay_ms, 1000)
        self.assertEqual(strategy.max_attempts, 10)
        # The shared table is untouched
        self.assertEqual(RETRY_POLICIES[ErrorCategory.RATE_LIMIT].initial_delay_ms, 60000)


class DelayForAttemptTests(unittest.TestCase):
    def test_exponential(self):
        strategy = suggest_retry(ExecutionError(message="ECONNRESET"))

        self.assertEqual([strategy.delay_for_attempt(n) for n in range(1, 5)], [5000, 10000, 20000, 0])

    def test_linear(self):
        strategy = suggest_retry(ExecutionError(message="timed out"))

        self.assertEqual([strategy.delay_for_attempt(n) for n in range(1, 4)], [10000, 20000, 0])

    def test_out_of_range_and_no_retry(self):
        strategy = suggest_retry(ExecutionError(message="429"))

        self.assertEqual(strategy.delay_for_attempt(0), 0)
        self.assertEqual(strategy.delay_for_attempt(5), 60000 * 16)
        self.assertEqual(strategy.delay_for_attempt(6), 0)
        self.assertEqual(NO_RETRY.delay_for_attempt(1), 0)


if __name__ == "__main__":
    unittest.main()
