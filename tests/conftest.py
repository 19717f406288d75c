# ABOUTME: Shared pytest fixtures
# ABOUTME: Undoes the global logging bridge that CLI invocations install

import logging

import pytest
import structlog
from loguru import logger

from webscrimg.utils.logging.config import InterceptHandler


@pytest.fixture(autouse=True)
def reset_logging_bridge():
    yield
    root = logging.getLogger()
    for handler in [h for h in root.handlers if isinstance(h, InterceptHandler)]:
        root.removeHandler(handler)
    structlog.reset_defaults()
    logger.remove()
