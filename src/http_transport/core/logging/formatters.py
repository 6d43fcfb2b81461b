"""
Formatters for client log records.

Request fields passed as ``**kwargs`` to TransportLogger (method, url,
status_code, attempts, duration_ms, ...) end up as LogRecord attributes;
both formatters render them after the message.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Type

# LogRecord's own attributes; the rest came in through ``extra``
_RECORD_ATTRS = frozenset(vars(logging.LogRecord('', 0, '', 0, '', None, None))) | {
    'message', 'asctime',
}

# Rendered first, in this order, when present
_REQUEST_FIELDS = ('method', 'url', 'status_code', 'attempts', 'duration_ms')


def request_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """Extra fields of ``record``: request fields first, then the rest."""
    extra = {
        key: value
        for key, value in vars(record).items()
        if key not in _RECORD_ATTRS and not key.startswith('_')
    }
    ordered = {key: extra.pop(key) for key in _REQUEST_FIELDS if key in extra}
    ordered.update(extra)
    return ordered


class JSONFormatter(logging.Formatter):
    """
    One JSON object per line.

    Example output:
        {"timestamp": "2024-01-15T10:30:45.123+00:00", "level": "INFO",
         "logger": "http_transport.client", "message": "GET https://api.com 200",
         "method": "GET", "url": "https://api.com", "status_code": 200, "attempts": 1}
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(
                timespec='milliseconds'
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(request_fields(record))

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """
    Human readable line with ``key=value`` request fields.

    Example output:
        2024-01-15 10:30:45 INFO http_transport.client: GET https://api.com 200 | method=GET status_code=200
    """

    def __init__(self):
        super().__init__(fmt='%(asctime)s %(levelname)s %(name)s: %(message)s',
                         datefmt='%Y-%m-%d %H:%M:%S')

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = request_fields(record)
        if not fields:
            return line
        return line + " | " + " ".join(f"{key}={value}" for key, value in fields.items())


FORMATTERS: Dict[str, Type[logging.Formatter]] = {
    "json": JSONFormatter,
    "text": TextFormatter,
}


def get_formatter(format_type: str) -> logging.Formatter:
    """
    Formatter instance for ``"json"`` or ``"text"``.

    Raises:
        ValueError: If format_type is unknown
    """
    try:
        return FORMATTERS[format_type.lower()]()
    except KeyError:
        raise ValueError(
            f"Unknown format type: {format_type}. Available: {', '.join(FORMATTERS)}"
        ) from None
