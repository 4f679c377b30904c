"""Error taxonomy for the suite and classification of driver failures."""

from enum import Enum

from selenium.common.exceptions import (
    InvalidSessionIdException,
    NoSuchWindowException,
    StaleElementReferenceException,
    TimeoutException,
    WebDriverException,
)
from urllib3.exceptions import MaxRetryError, NewConnectionError, ProtocolError


class ErrorKind(str, Enum):
    """Recovery class of a failure."""

    STALE_ELEMENT = "stale_element"
    SESSION_SEVERED = "session_severed"
    TIMEOUT = "timeout"
    UPSTREAM_APPLICATION = "upstream_application"
    FATAL = "fatal"


class HerokuAppError(Exception):
    """Base exception for all suite errors."""

    kind: ErrorKind = ErrorKind.FATAL

    @property
    def retryable(self) -> bool:
        return self.kind in RETRYABLE_KINDS


class UnsupportedBrowserError(HerokuAppError, ValueError):
    """Requested browser kind is not one of the supported backends."""

    def __init__(self, browser: object) -> None:
        self.browser = browser
        super().__init__(f"Unsupported browser type: {browser}")


class SessionNotStartedError(HerokuAppError, RuntimeError):
    """Driver was accessed before the session was started."""


class SessionRestartError(HerokuAppError):
    """Browser session could not be recreated."""


class NavigationTimeoutError(HerokuAppError):
    """Page did not reach the expected state within the wait bound."""

    kind = ErrorKind.TIMEOUT

    def __init__(self, message: str, url: str | None = None, timeout: float | None = None) -> None:
        self.url = url
        self.timeout = timeout
        super().__init__(message)


class UpstreamApplicationError(HerokuAppError):
    """The application server failed to handle the request (Heroku error page).

    Not retryable: it signals a server-side limit, not a client fault.
    """

    kind = ErrorKind.UPSTREAM_APPLICATION

    def __init__(self, message: str = "Application error page detected", url: str | None = None) -> None:
        self.url = url
        super().__init__(message)


class StaleElementError(HerokuAppError):
    """Element reference went stale because the page re-rendered."""

    kind = ErrorKind.STALE_ELEMENT


class SessionSeveredError(HerokuAppError):
    """Connection to the browser process was lost."""

    kind = ErrorKind.SESSION_SEVERED


class ActionExhaustedError(HerokuAppError):
    """A retryable action failed on every allowed attempt."""

    def __init__(self, action: str, attempts: int, cause: BaseException, history: list | None = None) -> None:
        self.action = action
        self.attempts = attempts
        self.cause = cause
        self.history = history or []
        super().__init__(
            f"{action} failed after {attempts} attempt(s): {type(cause).__name__}: {cause}"
        )


RETRYABLE_KINDS = frozenset(
    {ErrorKind.STALE_ELEMENT, ErrorKind.SESSION_SEVERED, ErrorKind.TIMEOUT}
)

# Fragments of WebDriverException messages raised when the browser process is gone
_SEVERED_MESSAGES = (
    "invalid session id",
    "session deleted",
    "no such session",
    "session not created",
    "disconnected",
    "not reachable",
    "connection refused",
    "failed to establish a new connection",
    "browsing context has been discarded",
    "tried to run command without establishing a connection",
)


def classify_error(error: BaseException) -> ErrorKind:
    """Map an exception to the recovery class used by retry handling.

    Args:
        error: Exception raised by a page action or the driver

    Returns:
        ErrorKind tag
    """
    if isinstance(error, HerokuAppError):
        return error.kind

    if isinstance(error, StaleElementReferenceException):
        return ErrorKind.STALE_ELEMENT

    if isinstance(error, TimeoutException):
        return ErrorKind.TIMEOUT

    if isinstance(error, (InvalidSessionIdException, NoSuchWindowException)):
        return ErrorKind.SESSION_SEVERED

    if isinstance(error, (MaxRetryError, NewConnectionError, ProtocolError, ConnectionError)):
        return ErrorKind.SESSION_SEVERED

    if isinstance(error, WebDriverException):
        message = (error.msg or str(error)).lower()
        if any(fragment in message for fragment in _SEVERED_MESSAGES):
            return ErrorKind.SESSION_SEVERED

    return ErrorKind.FATAL
