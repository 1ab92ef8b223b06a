"""Logging and metrics for the change tracker."""

from change_tracker.observability.logging import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
