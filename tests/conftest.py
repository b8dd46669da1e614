"""Pytest configuration and fixtures."""

import pytest
from tree_sitter_language_pack import get_parser

from hazardous.utils.logging import logger


@pytest.fixture
def bash_parser():
    """Create a Bash tree-sitter parser."""
    return get_parser("bash")


@pytest.fixture
def go_parser():
    """Create a Go tree-sitter parser."""
    return get_parser("go")


@pytest.fixture
def log_messages():
    """Capture formatted loguru messages for the duration of a test."""
    messages = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)
