"""Logging configuration utilities for beatshelf.

Records can carry two context fields: ``device`` (the headset's mount name)
and ``playlist`` (a playlist file name). Both formatters surface them, so a
failed save can be traced to the file and the headset it was meant for:

- text lines end with ``[device=... playlist=...]``
- JSON lines carry them as top-level keys

Bind them once with get_logger(..., device=...) and add per-call values with
``extra={"playlist": ...}``.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from datetime import UTC, datetime
import json
import logging
import sys
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from beatshelf.core.config.models import LoggingConfig

CONTEXT_FIELDS = ("device", "playlist")

# Attributes every LogRecord has; anything else arrived through extra=
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def record_context(record: logging.LogRecord) -> dict[str, Any]:
    """Context fields set on record, in CONTEXT_FIELDS order."""
    return {
        key: getattr(record, key)
        for key in CONTEXT_FIELDS
        if getattr(record, key, None) is not None
    }


class ContextTextFormatter(logging.Formatter):
    """Text formatter that appends device and playlist context to the first line."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = record_context(record)
        if not context:
            return line

        suffix = " ".join(f"{key}={value}" for key, value in context.items())
        first, sep, rest = line.partition("\n")
        return f"{first} [{suffix}]{sep}{rest}"


class StructuredJSONFormatter(logging.Formatter):
    """Formatter that outputs one JSON object per record.

    Format:
    {
        "timestamp": "2026-10-19T12:00:00.000000+00:00",
        "level": "WARNING",
        "logger": "beatshelf.core.playlists.store",
        "message": "...",
        "device": "mtp:host=Oculus_Quest_2",   # when bound
        "playlist": "Favorites.json",          # when bound
        "context": {...other extra fields...},
        "error": {"type": "...", "message": "...", "trace": "..."}
    }

    ``context`` and ``error`` are present only when there is something to put
    in them.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **record_context(record),
        }

        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS and key not in CONTEXT_FIELDS and not key.startswith("_")
        }
        if extras:
            entry["context"] = extras

        if record.exc_info and record.exc_info[0] is not None:
            entry["error"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "trace": record.exc_text or self.formatException(record.exc_info),
            }

        return json.dumps(entry, default=str)


class ContextAdapter(logging.LoggerAdapter):
    """LoggerAdapter whose bound context merges with per-call ``extra``.

    The stock adapter replaces a call's ``extra`` with its own; here the
    call's values win and bound ones fill the rest.
    """

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        kwargs["extra"] = {**(self.extra or {}), **kwargs.get("extra", {})}
        return msg, kwargs


def configure_logging(config: LoggingConfig, level: str | None = None) -> None:
    """Configure application-wide logging from the ``logging`` config section.

    Can be called multiple times to reconfigure logging (uses force=True).

    Args:
        config: Logging section of AppConfig
        level: Overrides config.level, e.g. from --log-level. Case-insensitive.

    Examples:
        >>> configure_logging(LoggingConfig(), level="debug")
        >>> configure_logging(LoggingConfig(structured=True, filename="beatshelf.jsonl"))
    """
    handler: logging.Handler
    if config.filename:
        handler = logging.FileHandler(config.filename)
    else:
        handler = logging.StreamHandler(sys.stdout)

    formatter: logging.Formatter
    if config.structured:
        formatter = StructuredJSONFormatter()
    else:
        formatter = ContextTextFormatter(config.format)
    handler.setFormatter(formatter)

    logging.basicConfig(
        level=getattr(logging, (level or config.level).upper()),
        handlers=[handler],
        force=True,
    )


def get_logger(
    name: str,
    *,
    device: str | None = None,
    playlist: str | None = None,
) -> logging.Logger | ContextAdapter:
    """Get a logger, bound to a device and/or playlist when given.

    Args:
        name: Logger name (usually __name__ from the calling module)
        device: Mount name of the headset the caller works on
        playlist: Playlist file name the caller works on

    Returns:
        Plain logger, or ContextAdapter when any context is given
    """
    logger = logging.getLogger(name)
    context = {
        key: value for key, value in (("device", device), ("playlist", playlist)) if value
    }
    if context:
        return ContextAdapter(logger, context)
    return logger
