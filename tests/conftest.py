"""
Pytest configuration for markpdf
"""

import logging
import sys

import pytest

from markpdf.engine.geometry import LayoutOptions
from markpdf.engine.layout_engine import FlowLayoutEngine
from markpdf.models import InlineRun, InlineStyle, Paragraph


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests; the CLI installs its own handlers."""
    root_logger = logging.getLogger()
    saved_level = root_logger.level
    root_logger.handlers.clear()

    # Set up console-only logging for tests
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)  # Only show warnings and errors during tests
    console_handler.setFormatter(logging.Formatter('%(name)s - %(levelname)s - %(message)s'))

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    # Cleanup after test
    root_logger.handlers.clear()
    root_logger.setLevel(saved_level)


@pytest.fixture
def options():
    """Default A4 layout options with the average-width metrics."""
    return LayoutOptions()


@pytest.fixture
def engine(options):
    """Flow layout engine with default options."""
    return FlowLayoutEngine(options)


@pytest.fixture
def plain():
    """Factory for plain inline runs."""
    def _plain(text):
        return InlineRun(InlineStyle.PLAIN, text)
    return _plain


@pytest.fixture
def paragraphs():
    """Factory for ``count`` one-line paragraphs."""
    def _paragraphs(count, text="Lorem ipsum dolor sit amet"):
        return [Paragraph([InlineRun.plain(f"{text} {index}")]) for index in range(count)]
    return _paragraphs


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    # Ignore logging errors during tests
    logging.raiseExceptions = False
