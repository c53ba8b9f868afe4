"""Shared test fixtures."""

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers added by setup_logging so they don't outlive captured streams."""
    yield
    logger = logging.getLogger("skeleton")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
