"""Workers module - recovery-aware retry of browser actions."""

from .retry import RetryableAction, RetryPolicy, RetryStrategy, UploadAttempt

__all__ = ["RetryableAction", "RetryPolicy", "RetryStrategy", "UploadAttempt"]
