"""
Core utilities and configuration for Mindful Heaven.

This package provides core functionality including logging configuration,
security primitives, error types, database setup, and other shared utilities.
"""

from mindful_heaven.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
