"""
Logging configuration for switchboard.

Text output for local runs, one JSON object per line for log shippers.
Hook and agent log calls attach routing context through `extra=` (hook id,
event, agent id, session key); the JSON formatter lifts those fields to the
top level and the text format appends them in brackets.
"""

import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone

LOG_FILE_NAME = "switchboard.log"
CONTEXT_FIELDS = ("hook_id", "event", "agent_id", "session_key")

_TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s%(context)s"


def _context(record: logging.LogRecord) -> dict[str, str]:
    return {
        key: str(getattr(record, key))
        for key in CONTEXT_FIELDS
        if getattr(record, key, None) is not None
    }


class ContextTextFormatter(logging.Formatter):
    """Plain text formatter that appends routing context, e.g. `[hook_id=boot-info]`."""

    def format(self, record: logging.LogRecord) -> str:
        ctx = _context(record)
        record.context = (
            " [" + " ".join(f"{k}={v}" for k, v in ctx.items()) + "]" if ctx else ""
        )
        return super().format(record)


class JsonFormatter(logging.Formatter):
    """Structured JSON log formatter, one object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_context(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log)


def setup_logging(log_level: str, logs_dir: str, json_logs: bool = False) -> str:
    """
    Configure the root logger: stdout plus a rotating file in logs_dir.

    Returns:
        Path of the log file.
    """
    os.makedirs(logs_dir, exist_ok=True)
    level = getattr(logging, log_level.upper(), logging.INFO)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(
        JsonFormatter() if json_logs else ContextTextFormatter(_TEXT_FORMAT, datefmt="%H:%M:%S")
    )

    # 10MB per file, keep 5 backups
    log_file = os.path.join(logs_dir, LOG_FILE_NAME)
    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(ContextTextFormatter(_TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    for handler in (console, file_handler):
        handler.setLevel(level)
    logging.basicConfig(level=level, handlers=[console, file_handler], force=True)

    logging.getLogger("asyncio").setLevel(logging.WARNING)
    return log_file
