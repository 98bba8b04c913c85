import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Optional

_RESERVED_LOG_RECORD_FIELDS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime", "taskName"}

_NOISY_LOGGERS = ("urllib3", "requests", "atlassian")


class StructuredLogFormatter(logging.Formatter):
    """Emit one JSON object per record, keeping ``extra`` fields."""

    def __init__(
        self,
        *,
        include_timestamp: bool = True,
        include_module: bool = True,
    ) -> None:
        super().__init__()
        self._include_timestamp = include_timestamp
        self._include_module = include_module

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "level": record.levelname,
            "message": record.getMessage(),
        }
        if self._include_timestamp:
            payload["timestamp"] = datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat()
        if self._include_module:
            payload["logger"] = record.name

        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_LOG_RECORD_FIELDS
        }
        if extras:
            payload["extra"] = extras
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def _structured_from_env() -> bool:
    env_value = os.getenv("STRUCTURED_LOGS")
    return env_value.lower() in {"1", "true", "yes"} if env_value else False


def configure_logging(
    level: str = "INFO",
    include_timestamp: bool = True,
    include_module: bool = True,
    structured: Optional[bool] = None,
) -> None:
    """
    Configure logging for the command line tools.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        include_timestamp: Whether to include a timestamp
        include_module: Whether to include the logger name
        structured: Emit JSON logs. Falls back to ``STRUCTURED_LOGS`` when None.
    """
    if structured is None:
        structured = _structured_from_env()

    if structured:
        formatter: logging.Formatter = StructuredLogFormatter(
            include_timestamp=include_timestamp,
            include_module=include_module,
        )
    else:
        parts = []
        if include_timestamp:
            parts.append("%(asctime)s")
        parts.append("%(levelname)s")
        if include_module:
            parts.append("%(name)s")
        parts.append("%(message)s")
        formatter = logging.Formatter(" - ".join(parts))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    for handler in logging.getLogger().handlers:
        handler.setFormatter(formatter)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).debug("Logging configured with level: %s", level)
