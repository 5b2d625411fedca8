"""Logging configuration."""

from profilecard.logging.setup import (
    bind_handle,
    clear_context,
    configure_logging,
    get_logger,
)

__all__ = ["configure_logging", "get_logger", "bind_handle", "clear_context"]
