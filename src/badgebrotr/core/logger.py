"""
Structured logging with key=value and JSON output support.

Wraps the standard library ``logging`` module so that services log an
event name plus keyword fields, rendered either as human-readable
key=value pairs (default) or as one JSON object per line.

The ``StructuredFormatter`` reads structured data from the
``structured_kv`` extra field (attached by Logger) and appends it as
key=value pairs. Installed on the root handler by
[configure_logging()][badgebrotr.core.logger.configure_logging], it also
renders the plain ``logging.getLogger(__name__)`` calls of the nips layer.

Examples:
    ```python
    from badgebrotr.core.logger import Logger

    logger = Logger("badges")
    logger.info("awards_fetched", subject="ab12...", count=3)
    # Output: info badges awards_fetched subject=ab12... count=3

    json_logger = Logger("badges", json_output=True)
    json_logger.info("awards_fetched", count=3)
    # Output: {"timestamp": "...", "level": "info", "service": "badges", ...}
    ```
"""

import datetime
import json
import logging
from typing import Any, ClassVar


_default_json_output = False


def format_kv_pairs(
    kwargs: dict[str, Any],
    max_value_length: int | None = 1000,
    prefix: str = " ",
) -> str:
    """Format a dictionary as space-separated key=value pairs.

    Values longer than ``max_value_length`` are truncated. Values containing
    whitespace, equals signs, or quotes are escaped and double-quoted.

    Returns:
        Formatted string, e.g. ``' key1=value1 key2="value with spaces"'``,
        or an empty string if *kwargs* is empty.
    """
    if not kwargs:
        return ""

    parts = []
    for k, v in kwargs.items():
        s = _truncate(str(v), max_value_length)
        if not s or any(c in s for c in " =\"'"):
            escaped = s.replace("\\", "\\\\").replace('"', '\\"')
            parts.append(f'{k}="{escaped}"')
        else:
            parts.append(f"{k}={s}")

    return prefix + " ".join(parts)


def _truncate(value: str, max_length: int | None) -> str:
    if max_length and len(value) > max_length:
        return value[:max_length] + f"...<truncated {len(value) - max_length} chars>"
    return value


class StructuredFormatter(logging.Formatter):
    """Formats log records as ``level name message key=value ...``."""

    def format(self, record: logging.LogRecord) -> str:
        base = f"{record.levelname.lower()} {record.name} {record.getMessage()}"
        extra: dict[str, Any] = getattr(record, "structured_kv", {})
        if extra:
            base += format_kv_pairs(extra)
        if record.exc_info:
            base += "\n" + self.formatException(record.exc_info)
        return base


def configure_logging(level: str = "INFO", *, json_output: bool = False) -> None:
    """Install a [StructuredFormatter][badgebrotr.core.logger.StructuredFormatter] on the root logger.

    Args:
        level: Root log level name.
        json_output: Default output mode of [Logger][badgebrotr.core.logger.Logger]
            instances that do not choose one explicitly.
    """
    global _default_json_output  # noqa: PLW0603
    _default_json_output = json_output
    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level.upper())


class Logger:
    """Structured logger that appends keyword arguments as extra fields.

    All public methods mirror the standard logging API with an added
    ``**kwargs`` parameter.
    """

    _DEFAULT_MAX_VALUE_LENGTH: ClassVar[int] = 1000

    def __init__(
        self,
        name: str,
        *,
        json_output: bool | None = None,
        max_value_length: int | None = None,
    ) -> None:
        """Initialize a structured logger.

        Args:
            name: Logger name, passed to ``logging.getLogger(name)``.
            json_output: If True, emit JSON objects instead of key=value pairs.
                Defaults to the mode set by
                [configure_logging()][badgebrotr.core.logger.configure_logging].
            max_value_length: Maximum character length for individual values
                before truncation. Defaults to 1000.
        """
        if max_value_length is None:
            max_value_length = self._DEFAULT_MAX_VALUE_LENGTH
        self._logger = logging.getLogger(name)
        self._json_output = _default_json_output if json_output is None else json_output
        self._max_value_length = max_value_length

    @property
    def name(self) -> str:
        return self._logger.name

    def _format_json(self, msg: str, level: str, kwargs: dict[str, Any]) -> str:
        record = {
            "timestamp": datetime.datetime.now(datetime.UTC).isoformat(),
            "level": level,
            "service": self._logger.name,
            "message": msg,
            **kwargs,
        }
        return json.dumps(record, default=str)

    def _make_extra(self, kwargs: dict[str, Any]) -> dict[str, Any]:
        if not kwargs:
            return {}
        truncated = {
            k: _truncate(v, self._max_value_length) if isinstance(v, str) else v
            for k, v in kwargs.items()
        }
        return {"structured_kv": truncated}

    def _log(
        self, level: int, msg: str, kwargs: dict[str, Any], *, exc_info: bool = False
    ) -> None:
        if not self._logger.isEnabledFor(level):
            return
        if self._json_output:
            name = logging.getLevelName(level).lower()
            self._logger.log(level, self._format_json(msg, name, kwargs), exc_info=exc_info)
        else:
            self._logger.log(level, msg, extra=self._make_extra(kwargs), exc_info=exc_info)

    def debug(self, msg: str, **kwargs: Any) -> None:
        """Log a DEBUG level message with optional key=value pairs."""
        self._log(logging.DEBUG, msg, kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        """Log an INFO level message with optional key=value pairs."""
        self._log(logging.INFO, msg, kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        """Log a WARNING level message with optional key=value pairs."""
        self._log(logging.WARNING, msg, kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        """Log an ERROR level message with optional key=value pairs."""
        self._log(logging.ERROR, msg, kwargs)

    def exception(self, msg: str, **kwargs: Any) -> None:
        """Log an ERROR level message with the current exception traceback."""
        self._log(logging.ERROR, msg, kwargs, exc_info=True)
