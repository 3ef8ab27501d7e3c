"""
Retry configuration with exponential backoff for request dispatch.

Only the initial dispatch of a request is ever retried. Once a streaming
body has been handed to the event decoder nothing is replayed.

Date: 2026-10-18
"""

import random

from azopenai.client.exceptions import InsecureTransportError, TransportError

RETRYABLE_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})


class RetryConfig:
    """Configuration for retry behavior."""

    def __init__(
        self,
        max_retries: int = 3,
        initial_delay: float = 0.8,
        max_delay: float = 60.0,
        exponential_base: float = 2.0,
        jitter: bool = True
    ):
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        self.max_retries = max_retries
        self.initial_delay = initial_delay
        self.max_delay = max_delay
        self.exponential_base = exponential_base
        self.jitter = jitter

    def calculate_delay(self, attempt: int) -> float:
        """Calculate delay for given retry attempt."""
        delay = min(
            self.initial_delay * (self.exponential_base ** attempt),
            self.max_delay
        )

        if self.jitter:
            # Add jitter to prevent thundering herd
            delay = delay * (0.5 + random.random() * 0.5)

        return delay

    def __repr__(self) -> str:
        return (
            f"RetryConfig(max_retries={self.max_retries}, "
            f"initial_delay={self.initial_delay}, max_delay={self.max_delay})"
        )


def is_retryable_error(error: Exception) -> bool:
    """Check if a dispatch error should trigger a retry."""
    if isinstance(error, InsecureTransportError):
        return False

    # TimeoutError is a TransportError
    if isinstance(error, TransportError):
        return True

    # Don't retry configuration errors, credential failures, etc.
    return False


def is_retryable_status(status_code: int) -> bool:
    """Check if a response status should trigger a retry."""
    return status_code in RETRYABLE_STATUS_CODES
