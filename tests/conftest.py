"""
Global pytest fixtures and configuration for test suite.

This module provides reusable fixtures for:
- Mock settings/configuration
- Sample email data
- Temporary files
"""

import logging
import os

import pytest
import structlog

from eml_multipart.config import Settings
from eml_multipart.logging_config import PACKAGE_LOGGER
from tests.fixtures.emails import SAMPLE_EMAILS, crlf


@pytest.fixture
def mock_settings() -> Settings:
    """
    Create mock settings for testing with safe defaults.

    Returns:
        Settings instance with test configuration
    """
    return Settings(
        log_level="DEBUG",
        log_json=False,  # Easier to read in tests
        read_chunk_size=7,
        max_header_bytes=1024,
    )


@pytest.fixture
def four_part_eml() -> bytes:
    """
    Get multipart/mixed email with plain, HTML and two binary attachments.

    Returns:
        bytes of a four-part .eml file
    """
    return SAMPLE_EMAILS["four_part"]


@pytest.fixture
def four_part_eml_crlf() -> bytes:
    """
    Get the four-part email with CRLF line endings.

    Returns:
        bytes of a four-part .eml file in wire format
    """
    return crlf(SAMPLE_EMAILS["four_part"])


@pytest.fixture
def multipart_html_eml() -> bytes:
    """
    Get multipart email with both HTML and plain text.

    Returns:
        bytes of multipart/alternative email
    """
    return SAMPLE_EMAILS["multipart_html"]


@pytest.fixture
def truncated_eml() -> bytes:
    """
    Get multipart email cut off inside its second part.

    Returns:
        bytes without a terminal boundary
    """
    return SAMPLE_EMAILS["truncated"]


@pytest.fixture
def tmp_eml_file(tmp_path) -> str:
    """
    Create temporary .eml file for file-based tests.

    Args:
        tmp_path: pytest's temporary directory fixture

    Returns:
        Path to temporary .eml file
    """
    eml_path = tmp_path / "test_email.eml"
    eml_path.write_bytes(SAMPLE_EMAILS["four_part"])
    return str(eml_path)


@pytest.fixture(autouse=True)
def reset_env_vars():
    """
    Reset environment variables before each test.

    This prevents test pollution from env var changes.
    """
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo logging configuration done by CLI tests."""
    yield
    structlog.reset_defaults()
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)


def pytest_configure(config):
    """
    Configure pytest with custom markers and settings.
    """
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
