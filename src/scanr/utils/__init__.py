"""Utility modules for scanr.

Provides:
- logger: get_logger for logging
"""

from scanr.utils.logger import get_logger

__all__ = ["get_logger"]
