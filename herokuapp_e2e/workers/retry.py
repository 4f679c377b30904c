"""Retry policies and recovery-aware retry of browser actions."""

import random
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, TypeVar

from herokuapp_e2e.automation.browser import BrowserSession
from herokuapp_e2e.automation.screenshots import capture_screenshot
from herokuapp_e2e.core.config import settings
from herokuapp_e2e.core.exceptions import (
    ActionExhaustedError,
    ErrorKind,
    SessionRestartError,
    UpstreamApplicationError,
    classify_error,
)
from herokuapp_e2e.monitoring.logger import get_logger, log_attempt
from herokuapp_e2e.pages.file_upload_page import FileUploadPage

logger = get_logger(__name__)

T = TypeVar("T")


class RetryStrategy(str, Enum):
    """Retry strategy types."""

    FIXED = "fixed"
    LINEAR = "linear"
    EXPONENTIAL = "exponential"
    EXPONENTIAL_JITTER = "exponential_jitter"


@dataclass
class RetryPolicy:
    """Configuration for retry behavior."""

    max_attempts: int = field(default_factory=lambda: settings.retry_max_attempts)
    initial_delay: float = field(default_factory=lambda: settings.retry_delay)
    max_delay: float = 30.0
    strategy: RetryStrategy = RetryStrategy.FIXED
    multiplier: float = 2.0
    jitter_range: tuple[float, float] = (0.5, 1.5)

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")

    def calculate_delay(self, attempt: int) -> float:
        """Calculate delay after a failed attempt.

        Args:
            attempt: Failed attempt number (0-indexed)

        Returns:
            Delay in seconds
        """
        if self.strategy == RetryStrategy.FIXED:
            delay = self.initial_delay

        elif self.strategy == RetryStrategy.LINEAR:
            delay = self.initial_delay * (attempt + 1)

        elif self.strategy == RetryStrategy.EXPONENTIAL:
            delay = self.initial_delay * (self.multiplier ** attempt)

        elif self.strategy == RetryStrategy.EXPONENTIAL_JITTER:
            base_delay = self.initial_delay * (self.multiplier ** attempt)
            jitter = random.uniform(*self.jitter_range)
            delay = base_delay * jitter

        else:
            delay = self.initial_delay

        return min(delay, self.max_delay)


@dataclass
class UploadAttempt:
    """One failed try of a retryable action."""

    file_path: str | None
    attempt: int
    last_error: BaseException | None = None
    kind: ErrorKind | None = None

    def describe(self) -> str:
        error = f"{type(self.last_error).__name__}: {self.last_error}" if self.last_error else "-"
        return f"Attempt {self.attempt} [{self.kind.value if self.kind else '-'}] {error}"


class RetryableAction:
    """Runs a page action with bounded retries and per-failure recovery.

    Stale elements trigger a page refresh, a severed session triggers a
    browser restart plus re-navigation, and timeouts are screenshotted and
    retried. The upstream application error page aborts immediately.
    """

    def __init__(
        self,
        session: BrowserSession,
        page: FileUploadPage,
        policy: RetryPolicy | None = None,
        check_upstream: bool = True,
        name: str = "file_upload",
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize retryable action.

        Args:
            session: Browser session to restart on severed connections
            page: Upload page used for refresh, re-wait and re-navigation
            policy: Retry policy (attempt budget and delays)
            check_upstream: Check for the application error page around each attempt
            name: Action name used in logs and errors
            sleep: Delay function
        """
        self.session = session
        self.page = page
        self.policy = policy or RetryPolicy()
        self.check_upstream = check_upstream
        self.name = name
        self._sleep = sleep
        self.attempts: list[UploadAttempt] = []

    def run(self, action: Callable[[], T], file_path: str | Path | None = None) -> T:
        """Execute action until it succeeds or the attempt budget is spent.

        Args:
            action: Zero-argument callable performing the browser work
            file_path: File being uploaded, recorded in attempt history

        Returns:
            Result of action

        Raises:
            UpstreamApplicationError: Application error page detected
            SessionRestartError: Browser could not be recreated
            ActionExhaustedError: All attempts failed with transient errors
        """
        self.attempts = []
        path = str(file_path) if file_path is not None else None
        last_error: BaseException | None = None
        max_attempts = self.policy.max_attempts

        for attempt in range(1, max_attempts + 1):
            log_attempt(self.name, attempt, max_attempts)
            try:
                self._ensure_no_upstream_error("before")
                result = action()
                self._ensure_no_upstream_error("after")
                return result

            except (UpstreamApplicationError, SessionRestartError):
                raise

            except Exception as e:
                kind = classify_error(e)
                if kind == ErrorKind.FATAL:
                    raise

                last_error = e
                record = UploadAttempt(file_path=path, attempt=attempt, last_error=e, kind=kind)
                self.attempts.append(record)
                log_attempt(self.name, attempt, max_attempts, kind=kind.value, error=str(e))

            if kind == ErrorKind.TIMEOUT:
                capture_screenshot(self._driver_or_none(), f"{self.name}_timeout_attempt{attempt}.png")

            if attempt >= max_attempts:
                break

            recovery_error = self._recover(kind)
            if recovery_error is not None:
                record.last_error = recovery_error
                last_error = recovery_error

            self._sleep(self.policy.calculate_delay(attempt - 1))

        logger.error(f"{self.name} exhausted after {len(self.attempts)} attempt(s)")
        raise ActionExhaustedError(self.name, len(self.attempts), last_error, list(self.attempts)) from last_error

    def _ensure_no_upstream_error(self, stage: str) -> None:
        if self.check_upstream and self.page.has_application_error():
            logger.error(f"Application error detected {stage} {self.name}")
            capture_screenshot(self._driver_or_none(), f"{self.name}_application_error.png")
            raise UpstreamApplicationError(
                f"Application error detected {stage} {self.name}", url=self.page.url
            )

    def _recover(self, kind: ErrorKind) -> BaseException | None:
        """Bring the browser back to a usable state before the next attempt.

        Returns:
            The transient error raised by recovery, if any
        """
        try:
            if kind == ErrorKind.STALE_ELEMENT:
                if self.page.is_displayed(self.page.FILE_INPUT):
                    logger.warning("Stale element; refreshing upload page")
                    self.page.refresh()
                    self.page.wait_for_upload_input()
                else:
                    # Result page after a submit has no file input
                    logger.warning("Stale element off the upload form; re-opening upload page")
                    self.page.navigate_to()

            elif kind == ErrorKind.SESSION_SEVERED:
                logger.warning("Browser session severed; restarting")
                self.session.restart()
                self.page.navigate_to()

            return None

        except (UpstreamApplicationError, SessionRestartError):
            raise

        except Exception as e:
            if classify_error(e) == ErrorKind.FATAL:
                raise
            logger.warning(f"Recovery after {kind.value} failed: {type(e).__name__}: {e}")
            return e

    def _driver_or_none(self):
        return self.session.driver if self.session.has_driver else None
