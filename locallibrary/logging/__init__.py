"""
Logging for the application.

- Formatters: colorized console output and JSON records
- Setup: root logger configuration and ``get_logger``
- Integration: decorator logging document store operations
"""

from locallibrary.logging.formatters import ColorizedFormatter, JSONFormatter
from locallibrary.logging.integration import log_store_operation
from locallibrary.logging.setup import get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
    "JSONFormatter",
    "ColorizedFormatter",
    "log_store_operation",
]
