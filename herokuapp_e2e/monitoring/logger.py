"""Centralized logging configuration using Loguru."""

import sys
from typing import Any

from loguru import logger

from herokuapp_e2e.core.config import settings

_configured = False


def setup_logging(force: bool = False) -> None:
    """Configure Loguru logging for the suite.

    Args:
        force: Reconfigure even if logging was already set up
    """
    global _configured
    if _configured and not force:
        return

    # Remove default handler
    logger.remove()

    # Console format
    console_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        "<level>{message}</level>"
    )

    # File format (more detailed)
    file_format = (
        "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
        "{level: <8} | "
        "{extra[name]}:{function}:{line} | "
        "{message} | "
        "{extra}"
    )

    logger.configure(extra={"name": "herokuapp_e2e"})

    logger.add(
        sys.stderr,
        format=console_format,
        level=settings.log_level,
        colorize=True,
        backtrace=True,
        diagnose=settings.debug,
    )

    logs_dir = settings.logs_dir
    logs_dir.mkdir(parents=True, exist_ok=True)

    logger.add(
        logs_dir / "e2e_{time:YYYY-MM-DD}.log",
        format=file_format,
        level="DEBUG",
        rotation="00:00",  # Rotate at midnight
        retention="14 days",
        compression="gz",
        backtrace=True,
        diagnose=True,
    )

    # Separate file for errors
    logger.add(
        logs_dir / "errors_{time:YYYY-MM-DD}.log",
        format=file_format,
        level="ERROR",
        rotation="00:00",
        retention="30 days",
        compression="gz",
        backtrace=True,
        diagnose=True,
    )

    _configured = True
    logger.info(f"Logging initialized | level={settings.log_level} | base_url={settings.base_url}")


def get_logger(name: str) -> Any:
    """Get a logger instance with the given name.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured logger instance
    """
    return logger.bind(name=name)


def log_step(scenario: str, step: str, **extra: Any) -> None:
    """Log a scenario step.

    Args:
        scenario: Scenario name
        step: Human readable step description
        **extra: Additional context
    """
    logger.bind(name="scenario", scenario=scenario, **extra).info(f"[{scenario}] {step}")


def log_attempt(
    action: str, attempt: int, max_attempts: int, kind: str | None = None, **extra: Any
) -> None:
    """Log a retry attempt event.

    Args:
        action: Action name
        attempt: Attempt number (1-based)
        max_attempts: Attempt budget
        kind: Error kind that triggered the retry, if any
        **extra: Additional context
    """
    log_func = logger.info if kind is None else logger.warning
    msg = f"Attempt {attempt}/{max_attempts} | action={action}"
    if kind is not None:
        msg += f" | error_kind={kind}"

    log_func(
        msg,
        name="retry",
        action=action,
        attempt=attempt,
        max_attempts=max_attempts,
        error_kind=kind,
        **extra,
    )
