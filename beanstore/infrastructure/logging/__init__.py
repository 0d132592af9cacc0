"""
Logging Infrastructure

Structured logging, JSON log files and request performance monitoring.
"""

from .logger_config import (
    PerformanceLog,
    PerformanceLogger,
    get_performance_metrics,
    get_structured_logger,
    performance_logger,
)
from .logging_config import OperationTimer, ProductionLogger, QAEnhancedFormatter

__all__ = [
    "OperationTimer",
    "PerformanceLog",
    "PerformanceLogger",
    "ProductionLogger",
    "QAEnhancedFormatter",
    "get_performance_metrics",
    "get_structured_logger",
    "performance_logger",
]
