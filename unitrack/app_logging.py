"""
# path: unitrack/app_logging.py

Единый JSON-логгер для проекта.

ВАЖНО:
- Файл НЕ должен называться logging.py, иначе он перекрывает стандартный модуль `logging`.
- Сообщение можно передать строкой (+ extra={...}) или dict-ом {"event": ..., ...} —
  dict вливается в payload как есть.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional


class JsonFormatter(logging.Formatter):
    """Форматтер, превращающий LogRecord в JSON строку."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "time": datetime.now(timezone.utc).isoformat(timespec="seconds"),
            "level": record.levelname,
            "logger": record.name,
            "func": record.funcName,
        }

        if isinstance(record.msg, dict):
            payload.update(record.msg)
        else:
            payload["message"] = record.getMessage()

        extra: Optional[Dict[str, Any]] = getattr(record, "extra", None)
        if isinstance(extra, dict) and extra:
            payload.update(extra)

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


class JsonLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter, который безопасно прокидывает user extra в record.extra."""

    def process(self, msg: Any, kwargs: Dict[str, Any]):
        user_extra = kwargs.pop("extra", None)
        kwargs["extra"] = {"extra": user_extra} if user_extra else {}
        return msg, kwargs


def _resolve_level(level: Optional[str]) -> int:
    level_str = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    return getattr(logging, level_str, logging.INFO)


def configure_logging(level: Optional[str] = None) -> None:
    """Выставляет уровень всем уже созданным логгерам unitrack (вызывается из create_app)."""
    lvl = _resolve_level(level)
    for name, obj in logging.root.manager.loggerDict.items():
        if name.startswith("unitrack") and isinstance(obj, logging.Logger):
            obj.setLevel(lvl)
            for handler in obj.handlers:
                handler.setLevel(lvl)


def get_logger(name: str) -> JsonLoggerAdapter:
    """Создаёт/возвращает настроенный JSON-логгер (stdout, idempotent)."""
    if not name.startswith("unitrack"):
        name = f"unitrack.{name}"

    logger = logging.getLogger(name)
    logger.propagate = False

    if logger.handlers:
        return JsonLoggerAdapter(logger, {})

    level = _resolve_level(None)
    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter())

    logger.addHandler(handler)
    return JsonLoggerAdapter(logger, {})
