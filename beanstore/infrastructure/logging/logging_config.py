"""
Logging configuration for the bean storefront client

Sets up console output for development, rotating JSON log files and a
dedicated file for request performance records.
"""

import logging
import logging.handlers
import os
import sys
import threading
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

from beanstore.infrastructure.configuration.config import Settings, get_config
from beanstore.infrastructure.logging.logger_config import (
    ColoredFormatter,
    configure_structlog,
)
from beanstore.infrastructure.utilities.constants import FileSettings, LoggingSettings


class ProductionLogger:
    """Production-ready logging configuration"""

    @staticmethod
    def setup_logging(config: Optional[Settings] = None, log_to_files: bool = True):
        """
        Setup logging for the client

        Features:
        - Colored console output outside production
        - Structured JSON log files with rotation
        - Error-only and performance log files
        - structlog bound to the same handlers
        """
        config = config or get_config()

        root_logger = logging.getLogger()
        root_logger.setLevel(getattr(logging, config.log_level.upper(), logging.INFO))
        root_logger.handlers.clear()

        if config.environment != "production":
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(logging.INFO)
            console_handler.setFormatter(
                ColoredFormatter(
                    fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
            root_logger.addHandler(console_handler)

        if log_to_files:
            logs_dir = Path(config.log_dir or FileSettings.LOGS_DIRECTORY)
            logs_dir.mkdir(parents=True, exist_ok=True)
            ProductionLogger._add_file_handlers(root_logger, logs_dir)

        configure_structlog()
        ProductionLogger._configure_specific_loggers()

        logger = logging.getLogger(__name__)
        logger.info(
            "Logging configured successfully",
            extra={
                "environment": config.environment,
                "log_level": config.log_level,
                "log_to_files": log_to_files,
            },
        )

    @staticmethod
    def _json_file_handler(
        path: Path, level: int, max_bytes: int, backups: int
    ) -> logging.handlers.RotatingFileHandler:
        handler = logging.handlers.RotatingFileHandler(
            path, maxBytes=max_bytes, backupCount=backups, encoding="utf-8"
        )
        handler.setFormatter(QAEnhancedFormatter())
        handler.setLevel(level)
        return handler

    @staticmethod
    def _add_file_handlers(root_logger: logging.Logger, logs_dir: Path):
        # (file, level, size, backups); the performance file only takes timed records
        layout = [
            (FileSettings.MAIN_LOG_FILE, logging.INFO,
             LoggingSettings.MAX_LOG_FILE_SIZE, LoggingSettings.MAIN_LOG_BACKUP_COUNT),
            (FileSettings.ERROR_LOG_FILE, logging.ERROR,
             LoggingSettings.MAX_LOG_FILE_SIZE, LoggingSettings.ERROR_LOG_BACKUP_COUNT),
            (FileSettings.PERFORMANCE_LOG_FILE, logging.INFO,
             LoggingSettings.PERFORMANCE_LOG_FILE_SIZE, LoggingSettings.PERFORMANCE_LOG_BACKUP_COUNT),
        ]
        for filename, level, max_bytes, backups in layout:
            handler = ProductionLogger._json_file_handler(
                logs_dir / filename, level, max_bytes, backups
            )
            if filename == FileSettings.PERFORMANCE_LOG_FILE:
                handler.addFilter(PerformanceFilter())
            root_logger.addHandler(handler)

    @staticmethod
    def _configure_specific_loggers():
        """Quiet chatty third-party loggers"""
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)
        logging.getLogger("asyncio").setLevel(logging.WARNING)


class PerformanceFilter(logging.Filter):
    """Filter for performance events"""

    def filter(self, record):
        return hasattr(record, "response_time") or hasattr(record, "operation_time")


class QAEnhancedFormatter(jsonlogger.JsonFormatter):
    """JSON formatter with process, thread and request fields"""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["thread_id"] = threading.current_thread().ident
        log_record["process_id"] = os.getpid()

        if hasattr(record, "user_id"):
            log_record["user_id"] = record.user_id

        if hasattr(record, "operation_time"):
            log_record["operation_time_ms"] = record.operation_time

        if hasattr(record, "response_time"):
            log_record["response_time_ms"] = round(record.response_time * 1000, 2)


class OperationTimer:
    """Context manager that logs how long a use case step took"""

    def __init__(
        self,
        operation_name: str,
        logger: Optional[logging.Logger] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.operation_name = operation_name
        self.logger = logger or logging.getLogger(__name__)
        self.details = details or {}
        self.start_time = 0.0

    def __enter__(self):
        self.start_time = time.perf_counter()
        self.logger.debug(
            "Starting operation: %s",
            self.operation_name,
            extra={"operation": self.operation_name, **self.details},
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration = (time.perf_counter() - self.start_time) * 1000

        if exc_type is None:
            self.logger.info(
                "Completed operation: %s",
                self.operation_name,
                extra={
                    "operation": self.operation_name,
                    "operation_time": duration,
                    "success": True,
                    **self.details,
                },
            )
        else:
            self.logger.error(
                "Failed operation: %s",
                self.operation_name,
                extra={
                    "operation": self.operation_name,
                    "operation_time": duration,
                    "success": False,
                    "error_type": exc_type.__name__,
                    "error_message": str(exc_val),
                    **self.details,
                },
            )
        return False
