"""
Structured logging and request performance monitoring
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import structlog

from beanstore.infrastructure.utilities.constants import HttpSettings


class ColoredFormatter(logging.Formatter):
    """Colored log formatter for console output"""

    colors = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
        "RESET": "\033[0m",
    }

    def format(self, record: logging.LogRecord) -> str:
        log_color = self.colors.get(record.levelname, self.colors["RESET"])
        # Copy so file handlers sharing the record keep the plain level name
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{log_color}{record.levelname}{self.colors['RESET']}"
        return super().format(record)


@dataclass
class PerformanceLog:
    """One completed outgoing request"""

    method: str
    endpoint: str
    response_time: float
    status: str = "success"
    status_code: Optional[int] = None
    user_id: Optional[str] = None
    extra_data: Optional[Dict[str, Any]] = field(default_factory=dict)


class PerformanceLogger:
    """Keeps running request metrics and logs slow requests"""

    def __init__(
        self,
        name: str = "performance",
        slow_threshold: float = HttpSettings.SLOW_REQUEST_THRESHOLD_SECONDS,
    ):
        self.logger = logging.getLogger(name)
        self.slow_threshold = slow_threshold
        self.metrics = {
            "total_requests": 0,
            "slow_requests": 0,
            "error_requests": 0,
            "avg_response_time": 0.0,
        }

    def log_request(self, log: PerformanceLog):
        """Log a request with performance metrics"""
        self.metrics["total_requests"] += 1

        is_slow = log.response_time > self.slow_threshold
        if is_slow:
            self.metrics["slow_requests"] += 1

        if log.status != "success":
            self.metrics["error_requests"] += 1

        current_avg = self.metrics["avg_response_time"]
        total_requests = self.metrics["total_requests"]
        self.metrics["avg_response_time"] = (
            current_avg * (total_requests - 1) + log.response_time
        ) / total_requests

        log_data = {
            "method": log.method,
            "endpoint": log.endpoint,
            "response_time": log.response_time,
            "status": log.status,
            "status_code": log.status_code,
            "user_id": log.user_id,
            **(log.extra_data or {}),
        }

        if is_slow:
            self.logger.warning(
                "Slow request: %s %s took %.2fs",
                log.method,
                log.endpoint,
                log.response_time,
                extra=log_data,
            )
        else:
            self.logger.debug(
                "Request: %s %s (%.2fs)",
                log.method,
                log.endpoint,
                log.response_time,
                extra=log_data,
            )

    def get_metrics(self) -> Dict[str, Any]:
        """Get current performance metrics"""
        total = max(1, self.metrics["total_requests"])
        return {
            **self.metrics,
            "slow_request_ratio": self.metrics["slow_requests"] / total,
            "error_rate": self.metrics["error_requests"] / total,
        }

    def reset(self):
        for key in self.metrics:
            self.metrics[key] = 0.0 if key == "avg_response_time" else 0


def configure_structlog():
    """Configure structlog to render through the stdlib handlers"""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


# Singleton instance for performance logger
performance_logger = PerformanceLogger()


def get_performance_metrics() -> Dict[str, Any]:
    """Get performance metrics from the performance logger"""
    return performance_logger.get_metrics()


def get_structured_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance"""
    return structlog.get_logger(name)
