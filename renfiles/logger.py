"""JSON line logging for renfiles runs.

Every record is a single JSON object with ``ts``, ``level``, ``action`` and
``message`` keys plus whatever the caller passes in ``extra``. Paths under the
user's home directory are written as ``~/...``.
"""
from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Mapping

ROOT_LOGGER_NAME = "renfiles"
_MAX_BYTES = 10 * 1024 * 1024
_BACKUP_COUNT = 5


def _sanitize(value: str) -> str:
    home = str(Path.home()).rstrip("/")
    if not home:
        return value
    if value == home:
        return "~"
    return value.replace(home + "/", "~/")


def _scrub(value: Any) -> Any:
    """Make *value* JSON friendly: paths become strings, sets become sorted lists."""

    if isinstance(value, Path):
        return _sanitize(str(value))
    if isinstance(value, str):
        return _sanitize(value)
    if isinstance(value, Mapping):
        return {str(key): _scrub(item) for key, item in value.items()}
    if isinstance(value, (set, frozenset)):
        return [_scrub(item) for item in sorted(value, key=str)]
    if isinstance(value, (list, tuple)):
        return [_scrub(item) for item in value]
    return value


def configure_logging(log_path: Path | None = None, *, debug: bool = False) -> logging.Logger:
    """Install a single handler on the ``renfiles`` logger and return it.

    Records go to a rotating *log_path* when given, otherwise to stderr.
    Calling it again replaces the previous handler.
    """

    level = logging.DEBUG if debug else logging.INFO
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = RotatingFileHandler(
            log_path,
            maxBytes=_MAX_BYTES,
            backupCount=_BACKUP_COUNT,
            encoding="utf-8",
        )
    else:
        handler = logging.StreamHandler(sys.stderr)

    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


def log_event(
    logger: logging.Logger,
    *,
    level: int,
    action: str,
    message: str,
    file_name: str | None = None,
    extra: Mapping[str, Any] | None = None,
) -> None:
    payload: dict[str, Any] = {
        "ts": _utcnow_iso(),
        "level": logging.getLevelName(level),
        "action": action,
        "message": _sanitize(message),
    }
    if file_name is not None:
        payload["file"] = file_name
    if extra:
        payload.update(_scrub(extra))

    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


def _utcnow_iso() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


__all__ = ["ROOT_LOGGER_NAME", "configure_logging", "log_event"]
