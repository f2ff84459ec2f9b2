from __future__ import annotations

import logging

import pytest

from github2slack.config import Settings
from github2slack.logging import configure_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_level_applies_when_root_already_has_a_handler(root_logger):
    # e.g. the AWS Lambda runtime installs its own handler before import
    root_logger.addHandler(logging.NullHandler())
    root_logger.setLevel(logging.WARNING)

    configure_logging(Settings(log_level="DEBUG"))

    assert root_logger.level == logging.DEBUG


def test_unknown_level_falls_back_to_info(root_logger):
    configure_logging(Settings(log_level="chatty"))

    assert root_logger.level == logging.INFO
