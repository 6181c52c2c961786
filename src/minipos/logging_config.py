from __future__ import annotations

import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

MAX_BYTES = 2_000_000
BACKUPS = 5

# Logger name -> dedicated file, on top of app.log / errors.log.
CHANNEL_FILES = {
    "minipos.sales": "sales.log",
    "minipos.api": "api.log",
}


class JsonFormatter(logging.Formatter):
    """One JSON object per line; thread is included because backend calls run on workers."""

    def __init__(self, datefmt: str = "%Y-%m-%d %H:%M:%S"):
        super().__init__(datefmt=datefmt)

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "thread": record.threadName,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def _file_handler(logs_dir: Path, filename: str, level: int) -> RotatingFileHandler:
    handler = RotatingFileHandler(logs_dir / filename, maxBytes=MAX_BYTES, backupCount=BACKUPS, encoding="utf-8")
    handler.setFormatter(JsonFormatter())
    handler.setLevel(level)
    return handler


def setup_logging(logs_dir: Path, level: int = logging.INFO) -> None:
    logs_dir.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(level)
    if root.handlers:
        return

    root.addHandler(_file_handler(logs_dir, "app.log", level))
    root.addHandler(_file_handler(logs_dir, "errors.log", logging.ERROR))

    for name, filename in CHANNEL_FILES.items():
        channel = logging.getLogger(name)
        channel.addHandler(_file_handler(logs_dir, filename, logging.INFO))
        channel.setLevel(logging.INFO)
