# emojiseq/telemetry/logging.py
from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, MutableMapping, TextIO, Tuple

_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# LogRecord attributes that are never copied into the JSON payload.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}

_configured = False


def _log_value(value: Any) -> Any:
    """
    Make one ``extra=`` value JSON-safe. Code point tuples (records, matches)
    become ``U+XXXX`` lists, bytes are decoded, anything else unknown is str().
    """
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, tuple) and value and all(isinstance(v, int) for v in value):
        return [f"U+{v:04X}" for v in value]
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, (list, tuple)):
        return [_log_value(v) for v in value]
    return str(value)


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        k: _log_value(v)
        for k, v in record.__dict__.items()
        if k not in _RECORD_ATTRS and not k.startswith("_")
    }


class JsonFormatter(logging.Formatter):
    """
    One JSON object per line: ``ts`` (UTC, trailing Z), ``level``, ``logger``,
    ``message``, then the fields passed via ``extra=`` or a bound adapter.
    """

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: Dict[str, Any] = {
            "ts": ts.isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_extra_fields(record))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def configure_root_logging(
    level: int | str = "INFO",
    *,
    json_lines: bool = True,
    stream: TextIO | None = None,
) -> None:
    """
    Idempotent root logger setup for the generator CLI: one stream handler,
    JSON lines by default, plain text with ``json_lines=False``.
    """
    global _configured
    if _configured:
        return

    root = logging.getLogger()
    if isinstance(level, int):
        root.setLevel(level)
    else:
        root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Remove pre-existing handlers to avoid duplicate lines
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(stream=stream or sys.stdout)
    handler.setFormatter(JsonFormatter() if json_lines else logging.Formatter(_PLAIN_FORMAT))
    root.addHandler(handler)

    _configured = True


def reset_logging_configuration() -> None:
    """Allow configure_root_logging() to run again (tests, repeated CLI runs)."""
    global _configured
    _configured = False


class ContextAdapter(logging.LoggerAdapter):  # type: ignore[type-arg]
    """Adds bound fields (e.g. the source file name) to every record's extra."""

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        # Per-call extra wins over bound context
        kwargs["extra"] = {**(self.extra or {}), **(kwargs.get("extra") or {})}
        return msg, kwargs


def bind(logger: logging.Logger | None = None, **context: Any) -> ContextAdapter:
    """
    Return a ContextAdapter carrying ``context``.

        log = bind(logging.getLogger(__name__), source="emoji-sequences.txt")
        log.info("parsed source", extra={"records": 12})

    If logger is None, the root logger is used.
    """
    return ContextAdapter(logger or logging.getLogger(), dict(context))
