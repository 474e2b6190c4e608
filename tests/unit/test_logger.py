"""Tests for logging setup."""

import logging
import logging.handlers

import pydantic
import pytest

from grouphub.core.config import Settings
from grouphub.core.logger import ROOT_LOGGER, configure_logging, get_logger


@pytest.fixture
def package_logger():
    logger = logging.getLogger(ROOT_LOGGER)
    saved_handlers, saved_level = list(logger.handlers), logger.level
    yield logger
    for handler in logger.handlers:
        if handler not in saved_handlers:
            handler.close()
    logger.handlers[:] = saved_handlers
    logger.setLevel(saved_level)


def settings(**overrides):
    return Settings(_env_file=None, **overrides)


class TestConfigureLogging:

    def test_console_only_by_default(self, package_logger):
        package_logger.handlers.clear()
        logger = configure_logging(settings())
        assert logger is package_logger
        assert logger.level == logging.INFO
        assert [type(h) for h in logger.handlers] == [logging.StreamHandler]

    def test_file_output_uses_configured_format(self, package_logger, tmp_path):
        package_logger.handlers.clear()
        logger = configure_logging(settings(
            log_dir=str(tmp_path),
            log_level="debug",
            log_format="%(levelname)s|%(name)s|%(message)s",
        ))
        assert logger.level == logging.DEBUG
        rotating = [h for h in logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]
        assert len(rotating) == 1
        assert rotating[0].maxBytes == 10 * 1024 * 1024
        assert rotating[0].backupCount == 5

        get_logger("grouphub.services.groups").debug("hello")
        for handler in logger.handlers:
            handler.flush()
        content = (tmp_path / "grouphub.log").read_text(encoding="utf-8")
        assert "DEBUG|grouphub.services.groups|hello" in content

    def test_reconfigure_replaces_own_handlers(self, package_logger):
        foreign = logging.NullHandler()
        package_logger.handlers[:] = [foreign]

        configure_logging(settings())
        logger = configure_logging(settings(log_level="WARNING"))

        assert logger.level == logging.WARNING
        assert foreign in logger.handlers
        assert len(logger.handlers) == 2

    def test_invalid_level_is_rejected_by_settings(self):
        with pytest.raises(pydantic.ValidationError):
            settings(log_level="LOUD")

    def test_get_logger(self):
        assert get_logger("grouphub.x") is logging.getLogger("grouphub.x")
