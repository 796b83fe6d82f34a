"""
Structured Logging for DocForge.

This module provides a logging infrastructure that supports context fields,
a publish-run logger that tracks pipeline stages, and consistent formatting
across the entire application.

Architecture Context
--------------------
Logging is a Core layer service used by every module in the system. All modules
should import get_logger() from here rather than using Python's logging directly:

    # Good - uses DocForge's structured logging
    from docforge.core.logging import get_logger
    logger = get_logger(__name__)

    # Avoid - bypasses our structure
    import logging
    logger = logging.getLogger(__name__)

Logger Types
------------
**StructuredLogger**
    Base logger that appends key-value fields to every message:

        logger = get_logger(__name__)
        logger.info("Registered link", longname="Foo#bar", url="Foo.html#bar")

**PublishLogger**
    Specialized for one documentation run. Tracks stages (register, expand,
    shortnames, signatures, nav, pages) with timing, and owns the warning
    stream for the run:

        plog = PublishLogger("api-docs")
        plog.start_stage("shortnames")
        plog.warn("ambiguous-shortname", "Ambiguous shortname: helper")
        plog.finish(pages=12)
        plog.warnings  # every warning raised during the run

Warnings are never fatal. The pipeline reports ambiguous shortnames and
unresolved references here and keeps going.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional

from rich.logging import RichHandler


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    file_path: Optional[Path] = None
    console: bool = True


class StructuredLogger:
    """
    Structured logger with context support.

    Provides consistent logging across the application with
    support for structured fields.
    """

    def __init__(self, name: str, config: Optional[LogConfig] = None) -> None:
        self.logger = logging.getLogger(name)
        self.config = config or _ConfigHolder.get_config()
        self._context: dict[str, Any] = {}
        self._setup_logger()

    def _setup_logger(self) -> None:
        """Configure the logger."""
        level = getattr(logging, self.config.level.upper(), logging.INFO)
        self.logger.setLevel(level)

        # Remove existing handlers
        self.logger.handlers.clear()

        formatter = logging.Formatter(
            self.config.format,
            datefmt=self.config.date_format,
        )

        if self.config.console:
            console_handler = RichHandler(
                show_time=True,
                show_path=False,
                markup=False,
                rich_tracebacks=True,
            )
            console_handler.setLevel(level)
            self.logger.addHandler(console_handler)

        if self.config.file_path:
            self.config.file_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(self.config.file_path)
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    def bind(self, **kwargs: Any) -> "StructuredLogger":
        """Attach fields that appear in every subsequent message."""
        self._context.update(kwargs)
        return self

    def _format_message(self, message: str, **kwargs: Any) -> str:
        """Format message with context and extra fields."""
        fields = {**self._context, **kwargs}
        if fields:
            field_str = " | ".join(f"{k}={v}" for k, v in fields.items())
            return f"{message} | {field_str}"
        return message

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message."""
        self.logger.debug(self._format_message(message, **kwargs))

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message."""
        self.logger.info(self._format_message(message, **kwargs))

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message."""
        self.logger.warning(self._format_message(message, **kwargs))

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error message."""
        self.logger.error(self._format_message(message, **kwargs))

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log exception with traceback."""
        self.logger.exception(self._format_message(message, **kwargs))


# Module-level logger factory
_loggers: dict[str, StructuredLogger] = {}


def get_logger(name: str, config: Optional[LogConfig] = None) -> StructuredLogger:
    """
    Get or create a structured logger.

    Args:
        name: Logger name (typically __name__).
        config: Optional logging configuration.

    Returns:
        Configured StructuredLogger instance.
    """
    if name not in _loggers:
        _loggers[name] = StructuredLogger(name, config)
    return _loggers[name]


def configure_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    console: bool = True,
) -> None:
    """
    Configure global logging settings.

    Loggers created before this call are set up again with the new
    settings. The CLI callback calls this once per invocation.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional file path for log output.
        console: Whether to log to console.
    """
    config = LogConfig(
        level=level,
        file_path=log_file,
        console=console,
    )

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    _ConfigHolder.set_config(config)
    for logger in _loggers.values():
        logger.config = config
        logger._setup_logger()


class _ConfigHolder:
    """Holds default logging configuration."""

    _config: LogConfig = LogConfig()

    @classmethod
    def get_config(cls) -> LogConfig:
        """Get the default config."""
        return cls._config

    @classmethod
    def set_config(cls, config: LogConfig) -> None:
        """Set the default config."""
        cls._config = config


@dataclass(frozen=True)
class PublishWarning:
    """One non-fatal problem found during a documentation run.

    Attributes:
        kind: Category, e.g. "ambiguous-shortname" or "unknown-link"
        message: Human-readable message as logged
        subject: The long name, alias or link target the warning is about
    """

    kind: str
    message: str
    subject: Optional[str] = None


class PublishLogger:
    """
    Specialized logger for one documentation run.

    Tracks publish stages, provides timing information and collects
    the run's warnings.
    """

    def __init__(self, run_name: str = "docs") -> None:
        self.run_name = run_name
        self.logger = get_logger("docforge.publish")
        self.warnings: List[PublishWarning] = []
        self._stage_start: Optional[datetime] = None
        self._current_stage: Optional[str] = None

    def start_stage(self, stage: str) -> None:
        """Mark the start of a publish stage."""
        self._finish_current_stage()
        self._current_stage = stage
        self._stage_start = datetime.now()
        self.logger.debug("Starting stage", run=self.run_name, stage=stage)

    def _finish_current_stage(self) -> None:
        """Log completion of current stage if any."""
        if self._current_stage and self._stage_start:
            duration = (datetime.now() - self._stage_start).total_seconds()
            self.logger.debug(
                "Completed stage",
                run=self.run_name,
                stage=self._current_stage,
                duration_sec=f"{duration:.3f}",
            )
        self._current_stage = None
        self._stage_start = None

    @property
    def current_stage(self) -> Optional[str]:
        """Name of the stage in progress, if any."""
        return self._current_stage

    def warn(self, kind: str, message: str, subject: Optional[str] = None) -> None:
        """Record and log a non-fatal warning."""
        self.warnings.append(PublishWarning(kind=kind, message=message, subject=subject))
        self.logger.warning(message)

    def warnings_of(self, kind: str) -> List[PublishWarning]:
        """Return the warnings of one category, in emission order."""
        return [w for w in self.warnings if w.kind == kind]

    def finish(self, **stats: Any) -> None:
        """Mark run completion."""
        self._finish_current_stage()
        self.logger.info(
            "Publish completed",
            run=self.run_name,
            warnings=len(self.warnings),
            **stats,
        )
