import logging
import sys

import pytest

from tradescope.config import EngineConfig
from tradescope.errors import ConfigError
from tradescope.logging_setup import configure_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield root
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


def test_force_installs_stdout_handler(root_logger) -> None:
    configure_logging("debug", force=True)

    assert root_logger.level == logging.DEBUG
    assert len(root_logger.handlers) == 1
    handler = root_logger.handlers[0]
    assert isinstance(handler, logging.StreamHandler)
    assert handler.stream is sys.stdout


def test_existing_handlers_are_left_alone(root_logger) -> None:
    sentinel = logging.NullHandler()
    root_logger.handlers[:] = [sentinel]

    configure_logging("DEBUG")

    assert root_logger.handlers == [sentinel]


def test_level_defaults_to_config(root_logger) -> None:
    configure_logging(force=True, config=EngineConfig(log_level="WARNING"))
    assert root_logger.level == logging.WARNING


def test_unknown_level(root_logger) -> None:
    with pytest.raises(ConfigError):
        configure_logging("chatty", force=True)
