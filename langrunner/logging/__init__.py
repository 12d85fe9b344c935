"""Logging utilities."""

from .utils import setup_file_logger

__all__ = ["setup_file_logger"]
