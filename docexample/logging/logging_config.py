"""Centralized logging configuration for docexample.

Loggers come from Prefect's logger factory so that generation runs embedded
in a Prefect flow report into the flow's log stream. Configuration is read
from a YAML file when one is available and falls back to a console setup.

Usage:
    >>> from docexample.logging import get_pipeline_logger
    >>> logger = get_pipeline_logger(__name__)
    >>> logger.info("Compiling %d files", 3)

Environment variables:
    DOCEXAMPLE_LOGGING_CONFIG: Path to a custom logging.yml
    DOCEXAMPLE_LOG_LEVEL: Default log level for docexample loggers (INFO, DEBUG, ...)
    PREFECT_LOGGING_SETTINGS_PATH: Alternative config path shared with Prefect
"""

import logging.config
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from prefect.logging import get_logger

# Prefect's factory nests every named logger under "prefect"
PIPELINE_LOGGER = "prefect.docexample"

# Default log levels for the generator components
DEFAULT_LOG_LEVELS = {
    "docexample": "INFO",
    "docexample.generator": "INFO",
    "docexample.runtime": "INFO",
}


class LoggingConfig:
    """Loads and applies the logging configuration.

    Configuration precedence:
        1. Explicit config_path parameter
        2. DOCEXAMPLE_LOGGING_CONFIG environment variable
        3. PREFECT_LOGGING_SETTINGS_PATH environment variable
        4. Built-in console configuration

    Example:
        >>> config = LoggingConfig(Path("logging.yml"))
        >>> config.apply()
    """

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or self._get_default_config_path()
        self._config: Optional[Dict[str, Any]] = None

    @staticmethod
    def _get_default_config_path() -> Optional[Path]:
        if env_path := os.environ.get("DOCEXAMPLE_LOGGING_CONFIG"):
            return Path(env_path)

        if prefect_path := os.environ.get("PREFECT_LOGGING_SETTINGS_PATH"):
            return Path(prefect_path)

        return None

    def load_config(self) -> Dict[str, Any]:
        """Load the dictConfig mapping from file, or the defaults.

        The result is cached; create a new LoggingConfig to reload from disk.
        """
        if self._config is None:
            if self.config_path and self.config_path.exists():
                with open(self.config_path, "r", encoding="utf-8") as f:
                    self._config = yaml.safe_load(f)
            else:
                self._config = self._get_default_config()
        assert self._config is not None
        return self._config

    @staticmethod
    def _get_default_config() -> Dict[str, Any]:
        """Console logging in "HH:MM:SS.mmm | LEVEL | logger.name - message" format."""
        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {
                    "format": "%(asctime)s.%(msecs)03d | %(levelname)-7s | %(name)s - %(message)s",
                    "datefmt": "%H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "standard",
                    "stream": "ext://sys.stderr",
                },
            },
            "loggers": {
                PIPELINE_LOGGER: {
                    "level": os.environ.get("DOCEXAMPLE_LOG_LEVEL", "INFO"),
                    "handlers": ["console"],
                    "propagate": False,
                },
            },
            "root": {
                "level": "WARNING",
                "handlers": ["console"],
            },
        }

    def apply(self):
        """Apply the configuration with logging.config.dictConfig.

        A "prefect" logger section also seeds PREFECT_LOGGING_LEVEL.
        """
        config = self.load_config()
        logging.config.dictConfig(config)

        if "prefect" in config.get("loggers", {}):
            prefect_level = config["loggers"]["prefect"].get("level", "INFO")
            os.environ.setdefault("PREFECT_LOGGING_LEVEL", prefect_level)


# Global configuration instance
_logging_config: Optional[LoggingConfig] = None


def setup_logging(config_path: Optional[Path] = None, level: Optional[str] = None):
    """Configure logging for docexample.

    Args:
        config_path: Optional YAML logging configuration file.
        level: Optional level override applied to every docexample logger.

    Example:
        >>> setup_logging(level="DEBUG")
    """
    global _logging_config

    _logging_config = LoggingConfig(config_path)
    _logging_config.apply()

    if level:
        for logger_name in DEFAULT_LOG_LEVELS:
            logger = get_logger(logger_name)
            logger.setLevel(level)

        os.environ["PREFECT_LOGGING_LEVEL"] = level


def get_pipeline_logger(name: str):
    """Return a Prefect-integrated logger, configuring logging on first use."""
    if _logging_config is None:
        setup_logging()

    return get_logger(name)
