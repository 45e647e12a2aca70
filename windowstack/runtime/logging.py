"""Window stack logging implementation."""

from __future__ import annotations

import json
import logging
import queue
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from windowstack.api.logging import LoggingConfig
from windowstack.runtime.config import WindowStackConfig, load_window_stack_config

_QUEUE_LISTENER: QueueListener | None = None

# Attributes every LogRecord carries; anything else came in through `extra=`.
_RECORD_ATTRIBUTES = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """One JSON object per record; `extra=` fields land under `fields`."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        fields = {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRIBUTES}
        if fields:
            payload["fields"] = fields
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(config: LoggingConfig) -> None:
    """Replace root handlers: console inline, optional file behind a queue listener."""
    global _QUEUE_LISTENER

    shutdown_logging()
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(getattr(logging, config.level_name.upper(), logging.INFO))

    console = logging.StreamHandler()
    console.setFormatter(_formatter_for(config.console_format))
    root.addHandler(console)
    if not config.file_path:
        return

    path = Path(config.file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(path, encoding="utf-8", delay=True)
    file_handler.setFormatter(_formatter_for(config.file_format))
    records: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    root.addHandler(QueueHandler(records))
    _QUEUE_LISTENER = QueueListener(records, file_handler)
    _QUEUE_LISTENER.start()


def setup_logging(config: WindowStackConfig | None = None) -> None:
    """Configure logging from window stack config if no handlers are present."""
    if logging.getLogger().handlers:
        return
    resolved = config or load_window_stack_config()
    configure_logging(
        LoggingConfig(
            level_name=resolved.log_level,
            console_format=resolved.log_format,
            file_path=resolved.log_file,
        )
    )


def shutdown_logging() -> None:
    """Flush and stop the file listener if one is running."""
    global _QUEUE_LISTENER

    if _QUEUE_LISTENER is None:
        return
    _QUEUE_LISTENER.stop()
    for handler in _QUEUE_LISTENER.handlers:
        handler.close()
    _QUEUE_LISTENER = None


def _formatter_for(kind: str) -> logging.Formatter:
    return JsonFormatter() if kind.strip().lower() == "json" else logging.Formatter(_TEXT_FORMAT)
