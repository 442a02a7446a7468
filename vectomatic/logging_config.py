"""Logging setup driven by LOG_LEVEL and LOG_FORMAT."""

import json
import logging

from vectomatic.config import get_settings


class JsonFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(level: str | None = None, log_format: str | None = None) -> None:
    """
    Configure the root logger from settings.

    Args:
        level: Optional level name overriding LOG_LEVEL
        log_format: Optional "json" or "text" overriding LOG_FORMAT
    """
    settings = get_settings()
    level = (level or settings.log_level).upper()
    log_format = (log_format or settings.log_format).lower()

    handler = logging.StreamHandler()
    if log_format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )

    logging.basicConfig(level=level, handlers=[handler], force=True)
