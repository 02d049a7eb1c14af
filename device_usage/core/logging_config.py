from __future__ import annotations

import logging
from logging.config import dictConfig
from typing import Iterable, Sequence

from device_usage.core.config import Settings

_DEFAULT_EXTRA_KEYS = (
    "record_id",
    "device_name",
    "row_count",
    "status_code",
    "url",
    "reason",
)

_configured = False


class ContextualFormatter(logging.Formatter):
    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: str = "%",
        extra_keys: Iterable[str] | None = None,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt, style=style)
        self._extra_keys: Sequence[str] = tuple(extra_keys or _DEFAULT_EXTRA_KEYS)

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context_parts: list[str] = []
        for key in self._extra_keys:
            value = getattr(record, key, None)
            if value is None:
                continue
            context_parts.append(f"{key}={value}")
        if context_parts:
            return f"{message} | {' '.join(context_parts)}"
        return message


def configure_logging(settings: Settings, *, force: bool = False) -> None:
    """Install the contextual stream handler on the root logger.

    Runs once per process unless ``force`` is set; repeated app construction
    (tests build one app per test) keeps the first configuration.
    """
    global _configured
    if _configured and not force:
        return

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "contextual": {
                    "()": "device_usage.core.logging_config.ContextualFormatter",
                    "fmt": "%(asctime)sZ | %(levelname)s | %(name)s | %(message)s",
                    "datefmt": "%Y-%m-%dT%H:%M:%S",
                    "style": "%",
                    "extra_keys": list(_DEFAULT_EXTRA_KEYS),
                }
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "level": settings.log_level,
                    "formatter": "contextual",
                }
            },
            "root": {"handlers": ["default"], "level": settings.log_level},
        }
    )

    _configured = True
