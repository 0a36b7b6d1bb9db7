"""
Trace viewer error handling module.

This module provides:
1. The exception hierarchy for fatal, unrecoverable conditions
2. A centralized error reporting helper used by the entry point
"""

import traceback
import logging

logger = logging.getLogger("tsc_trace.error_handler")


class TraceViewerError(Exception):
    """Base class for every fatal trace viewer error."""


class EmptyTraceError(TraceViewerError):
    """No spans left to display after loading and filtering."""


class InvalidSpanError(TraceViewerError):
    """A span violates stop >= start or holds a value outside the u64 range."""


class TraceFileError(TraceViewerError):
    """The trace file could not be opened or is shorter than requested."""


class UsageError(TraceViewerError):
    """The command invocation or its filtering parameters are malformed."""


class ConfigurationError(TraceViewerError):
    """A configuration value cannot be used to build the view."""


class LaneOverflowError(TraceViewerError):
    """A tag is too large to be laid out as a lane."""


class PixelRangeError(TraceViewerError):
    """A computed position, width or display value does not fit its target range."""


class ViewportDomainError(TraceViewerError):
    """A timestamp lies outside the domain the viewport was built for."""


class RenderError(TraceViewerError):
    """The rendering backend failed to draw."""


class ErrorHandler:
    """Centralized error reporting for the trace viewer."""

    @staticmethod
    def log_exception(e: Exception, context: str = "") -> str:
        """Log an exception with stack trace."""
        error_type = type(e).__name__
        error_msg = str(e)

        if context:
            logger.error(f"{context}: {error_type}: {error_msg}")
        else:
            logger.error(f"{error_type}: {error_msg}")

        # Log the full stack trace
        traceback.print_exc()

        return f"{error_type}: {error_msg}"

