# ABOUTME: Logging configuration, progress tracking, and output formatting
# ABOUTME: Provides rich console output and structured logging for the scraper

from .config import LoggingMode, configure_logging, detect_logging_mode, get_logging_status
from .progress import SourceProgress, create_fanout_progress, create_source_progress
from .utils import (
    LogContext,
    get_logger,
    log_api_call,
    log_extraction_step,
    with_pipeline_context,
    with_source_context,
)

__all__ = [
    # Configuration
    "LoggingMode",
    "configure_logging",
    "detect_logging_mode",
    "get_logging_status",
    # Progress
    "SourceProgress",
    "create_fanout_progress",
    "create_source_progress",
    # Utilities
    "LogContext",
    "get_logger",
    "log_api_call",
    "log_extraction_step",
    "with_pipeline_context",
    "with_source_context",
]
