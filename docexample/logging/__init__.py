"""Logging infrastructure for docexample.

Key components:
    get_pipeline_logger: Factory function for module loggers
    setup_logging: Initialize logging configuration from YAML or defaults
    LoggingConfig: Configuration loader

Example:
    >>> from docexample.logging import get_pipeline_logger
    >>>
    >>> logger = get_pipeline_logger(__name__)
    >>> logger.info("Generation started")

Note:
    Never import Python's logging module directly. Always use
    get_pipeline_logger() for consistent Prefect integration.
"""

from .logging_config import LoggingConfig, get_pipeline_logger, setup_logging

__all__ = [
    "LoggingConfig",
    "setup_logging",
    "get_pipeline_logger",
]
