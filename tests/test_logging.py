import json
import logging

import pytest

from sysapi.errors import ConfigError
from sysapi.logging_config import LOGGER_NAME, configure_logging


@pytest.fixture
def restore_loggers():
    names = (LOGGER_NAME, "uvicorn", "uvicorn.error", "uvicorn.access")
    saved = {
        name: (list(logging.getLogger(name).handlers), logging.getLogger(name).level,
               logging.getLogger(name).propagate)
        for name in names
    }
    yield
    for name, (handlers, level, propagate) in saved.items():
        target = logging.getLogger(name)
        for handler in target.handlers:
            if handler not in handlers:
                handler.close()
        target.handlers = handlers
        target.setLevel(level)
        target.propagate = propagate


def test_configure_logging_writes_json_lines(tmp_path, restore_loggers):
    logfile = tmp_path / "sysapi.log"

    logger = configure_logging(str(logfile), "INFO")
    logger.info("hello %s", "world")
    logger.debug("not written")
    logging.getLogger(f"{LOGGER_NAME}.LibvirtClient").warning("child logger")
    for handler in logger.handlers:
        handler.flush()

    lines = logfile.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2

    first = json.loads(lines[0])
    assert first["level"] == "INFO"
    assert first["logger"] == LOGGER_NAME
    assert first["message"] == "hello world"
    assert "timestamp" in first

    assert json.loads(lines[1])["logger"] == f"{LOGGER_NAME}.LibvirtClient"


def test_configure_logging_unwritable_path_raises(tmp_path, restore_loggers):
    with pytest.raises(ConfigError):
        configure_logging(str(tmp_path / "missing-dir" / "sysapi.log"))


def test_configure_logging_unknown_level_raises(tmp_path, restore_loggers):
    with pytest.raises(ConfigError):
        configure_logging(str(tmp_path / "sysapi.log"), "LOUD")
