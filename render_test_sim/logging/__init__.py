"""Operational logging for render_test_sim (loguru sinks bridged from stdlib logging)."""

from .loguru_bootstrap import InterceptHandler, get_logger, log_context, setup_logging

__all__ = ["InterceptHandler", "get_logger", "log_context", "setup_logging"]
