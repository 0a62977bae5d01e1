"""Shared pytest fixtures."""

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_provisioner_logger():
    """Undo CLI logging setup so caplog sees records in every test."""
    logger = logging.getLogger("provisioner")
    yield
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
