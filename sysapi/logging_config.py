import json
import logging
from datetime import datetime, timezone

from sysapi.errors import ConfigError

LOGGER_NAME = "sysapi"

# Loggers owned by uvicorn that should end up in the same file
_UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


class JsonLineFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def configure_logging(logfile: str, level: str = "INFO") -> logging.Logger:
    """
    Attach a JSON-lines file handler to the sysapi and uvicorn loggers.

    Returns the application logger, which is then handed to the components
    that log. Raises ConfigError if the log file cannot be opened.
    """
    try:
        handler = logging.FileHandler(logfile, encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot open log file {logfile}: {exc}") from exc
    handler.setFormatter(JsonLineFormatter())

    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        handler.close()
        raise ConfigError(f"unknown log level {level!r}")

    for name in (LOGGER_NAME,) + _UVICORN_LOGGERS:
        target = logging.getLogger(name)
        target.handlers = [handler]
        target.setLevel(numeric_level)
        target.propagate = False

    return logging.getLogger(LOGGER_NAME)
