"""Monitoring module - logging setup."""

from .logger import get_logger, log_attempt, log_step, setup_logging

__all__ = ["get_logger", "log_attempt", "log_step", "setup_logging"]
