"""Core module - configuration and error taxonomy."""

from .config import BrowserType, Settings, TimeoutProfile, get_settings, settings
from .exceptions import (
    ActionExhaustedError,
    ErrorKind,
    HerokuAppError,
    NavigationTimeoutError,
    SessionNotStartedError,
    SessionRestartError,
    SessionSeveredError,
    StaleElementError,
    UnsupportedBrowserError,
    UpstreamApplicationError,
    classify_error,
)

__all__ = [
    "BrowserType",
    "Settings",
    "TimeoutProfile",
    "get_settings",
    "settings",
    "ErrorKind",
    "HerokuAppError",
    "UnsupportedBrowserError",
    "SessionNotStartedError",
    "SessionRestartError",
    "NavigationTimeoutError",
    "UpstreamApplicationError",
    "StaleElementError",
    "SessionSeveredError",
    "ActionExhaustedError",
    "classify_error",
]
