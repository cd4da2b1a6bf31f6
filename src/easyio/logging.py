# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


"""Structured logging for :mod:`easyio`.

Every record the library emits carries an ``event`` name and a ``context``
mapping (the path being opened, the operation that failed, and so on).
Nothing is configured on import; call :func:`configure_logging` to see the
records on stderr::

    from easyio import configure_logging

    configure_logging(level="DEBUG", json_mode=True)
"""

from __future__ import annotations

import json
import logging
import logging.config
import os
from collections.abc import Mapping, MutableMapping
from datetime import UTC, datetime
from typing import Any, Final, cast, override

__all__ = [
    "StructuredLogger",
    "configure_logging",
    "get_logger",
]

_LOG_LEVEL_ENV: Final = "EASYIO_LOG_LEVEL"
_LOG_FORMAT_ENV: Final = "EASYIO_LOG_FORMAT"


class StructuredLogger(logging.LoggerAdapter[logging.Logger]):
    """Logger adapter that turns every call into an ``event`` plus ``context``.

    Callers pass ``event=`` (or an ``"event"`` key inside ``extra``) and an
    optional ``context=`` mapping. Context bound with :meth:`bind` is merged
    underneath the per-call context.
    """

    def __init__(
        self,
        logger: logging.Logger,
        *,
        context: Mapping[str, object] | None = None,
    ) -> None:
        super().__init__(logger, dict(context or {}))

    @property
    def context(self) -> Mapping[str, object]:
        """Context attached to every record from this adapter."""
        return cast(Mapping[str, object], self.extra)

    def bind(self, **context: object) -> StructuredLogger:
        """Return a copy of this adapter with extra bound context."""
        return type(self)(self.logger, context={**self.context, **context})

    @override
    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        extra = _as_mapping(kwargs.pop("extra", None), "extra")
        context = {**self.context}
        context.update(_as_mapping(kwargs.pop("context", None), "context"))

        event = kwargs.pop("event", None)
        if event is None:
            event = extra.pop("event", None)
        else:
            _ = extra.pop("event", None)
        if not isinstance(event, str):
            raise TypeError("Structured logs require an 'event' field.")

        context.update(extra)
        kwargs["extra"] = {"event": event, "context": context}
        return msg, kwargs


def _as_mapping(value: object, name: str) -> dict[str, object]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise TypeError(f"{name} must be a mapping when provided.")
    return dict(cast(Mapping[str, object], value))


def get_logger(
    name: str,
    *,
    context: Mapping[str, object] | None = None,
) -> StructuredLogger:
    """Return a :class:`StructuredLogger` for the module ``name``."""
    return StructuredLogger(logging.getLogger(name), context=context)


def configure_logging(
    *,
    level: int | str | None = None,
    json_mode: bool | None = None,
    env: Mapping[str, str] | None = None,
    force: bool = False,
) -> None:
    """Send log records to stderr.

    Args:
        level: Root level. Falls back to ``EASYIO_LOG_LEVEL``, then ``INFO``.
        json_mode: Render one JSON object per record. Falls back to
            ``EASYIO_LOG_FORMAT=json``.
        env: Environment to read instead of :data:`os.environ`.
        force: Replace handlers the host application already installed.
            Without it only the level is changed.
    """

    source = os.environ if env is None else env
    resolved_level = _coerce_level(level or source.get(_LOG_LEVEL_ENV) or "INFO")
    if json_mode is None:
        json_mode = source.get(_LOG_FORMAT_ENV, "").strip().lower() == "json"

    root = logging.getLogger()
    if root.handlers and not force:
        root.setLevel(resolved_level)
        return

    logging.config.dictConfig(
        _handler_config(resolved_level, "json" if json_mode else "text")
    )


def _handler_config(level: int, formatter: str) -> dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "text": {"()": "easyio.logging._TextFormatter"},
            "json": {"()": "easyio.logging._JsonFormatter"},
        },
        "handlers": {
            "stderr": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
                "formatter": formatter,
            }
        },
        "root": {"handlers": ["stderr"], "level": level},
    }


class _TextFormatter(logging.Formatter):
    """``time level logger event: message key=value ...``"""

    def __init__(self) -> None:
        super().__init__(
            "%(asctime)s %(levelname)s %(name)s %(event)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    @override
    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "event"):
            record.event = "-"
        line = super().format(record)
        context = getattr(record, "context", None)
        if context:
            pairs = " ".join(f"{key}={value!r}" for key, value in context.items())
            line = f"{line} {pairs}"
        return line


class _JsonFormatter(logging.Formatter):
    """One compact JSON object per record."""

    @override
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": getattr(record, "event", None),
            "message": record.getMessage(),
        }
        context = getattr(record, "context", None)
        if context:
            payload["context"] = context
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=repr, separators=(",", ":"))


def _coerce_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    try:
        return logging.getLevelNamesMapping()[level.strip().upper()]
    except KeyError:
        raise TypeError(f"Unknown log level: {level!r}") from None
