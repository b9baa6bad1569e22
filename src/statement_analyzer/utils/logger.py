"""Logging infrastructure with analysis-run context."""
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOGGER_NAME = "statement_analyzer"
LOG_DIR_ENV = "STATEMENT_ANALYZER_LOG_DIR"


class AnalysisContextFilter(logging.Filter):
    """Add the current analysis id to log records."""

    def __init__(self):
        super().__init__()
        self.analysis_id: Optional[str] = None

    def filter(self, record):
        """Add analysis_id to record."""
        record.analysis_id = self.analysis_id or "-"
        return True


class AnalyzerLogger:
    """Centralized logging manager."""

    def __init__(
        self,
        log_level: str = "INFO",
        log_dir: Optional[str] = None,
        max_file_size_mb: int = 10,
        backup_count: int = 5
    ):
        self.context_filter = AnalysisContextFilter()

        self.logger = logging.getLogger(LOGGER_NAME)
        self.logger.setLevel(getattr(logging, log_level.upper()))
        self.logger.propagate = False

        # Remove existing handlers
        for handler in self.logger.handlers:
            handler.close()
        self.logger.handlers.clear()

        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] [analysis:%(analysis_id)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(formatter)
        console_handler.addFilter(self.context_filter)
        self.logger.addHandler(console_handler)

        log_dir = log_dir or os.getenv(LOG_DIR_ENV)
        self.log_file: Optional[Path] = None
        if log_dir:
            log_path = Path(log_dir)
            log_path.mkdir(parents=True, exist_ok=True)
            self.log_file = log_path / "analyzer.log"

            file_handler = RotatingFileHandler(
                self.log_file,
                maxBytes=max_file_size_mb * 1024 * 1024,
                backupCount=backup_count,
                encoding="utf-8"
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            file_handler.addFilter(self.context_filter)
            self.logger.addHandler(file_handler)

    def set_analysis_context(self, analysis_id: Optional[str]):
        """Set current analysis context for logging."""
        self.context_filter.analysis_id = analysis_id

    def get_logger(self) -> logging.Logger:
        """Get the configured logger."""
        return self.logger


# Global logger instance
_logger_instance: Optional[AnalyzerLogger] = None


def get_logger(log_level: str = "INFO", log_dir: Optional[str] = None) -> logging.Logger:
    """Get or create global logger instance."""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = AnalyzerLogger(log_level, log_dir)
    return _logger_instance.get_logger()


def configure_logging(
    log_level: str = "INFO",
    log_dir: Optional[str] = None,
    max_file_size_mb: int = 10,
    backup_count: int = 5
) -> logging.Logger:
    """Rebuild the global logger with explicit settings."""
    global _logger_instance
    _logger_instance = AnalyzerLogger(log_level, log_dir, max_file_size_mb, backup_count)
    return _logger_instance.get_logger()


def set_analysis_context(analysis_id: Optional[str]):
    """Set analysis context for logging."""
    global _logger_instance
    if _logger_instance:
        _logger_instance.set_analysis_context(analysis_id)
