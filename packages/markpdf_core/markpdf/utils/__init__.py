"""Utility helpers for markpdf."""

from .rich_logger import create_rich_handler, setup_logging

__all__ = ["create_rich_handler", "setup_logging"]
