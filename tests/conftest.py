"""Shared fixtures."""

import pytest
from loguru import logger

from toolcall_extractor import ToolCallExtractor


@pytest.fixture
def extractor():
    """Create an extractor with the default configuration."""
    return ToolCallExtractor()


@pytest.fixture
def log_messages():
    """Capture package log messages emitted during a test."""
    messages: list[str] = []
    logger.enable("toolcall_extractor")
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG", format="{message}")
    yield messages
    logger.remove(handler_id)
    logger.disable("toolcall_extractor")
