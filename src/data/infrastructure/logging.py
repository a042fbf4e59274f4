"""Structlog setup for processes hosting the Aroma repositories.

Repository and connection probes log through structlog. Interactive
terminals get colored console lines; anything else gets one JSON object
per event so the ``entity`` and ``event`` fields can be indexed.
"""

import logging
import os
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    try:
        return logging.getLevelNamesMapping()[level.upper()]
    except KeyError:
        raise ValueError(f"Unknown log level: {level!r}") from None


def _use_console(json_logs: bool | None) -> bool:
    if json_logs is not None:
        return not json_logs
    # FORCE_COLOR=1 keeps colors in containers without a TTY
    force_color = os.environ.get("FORCE_COLOR", "").lower() in ("1", "true", "yes")
    return force_color or sys.stdout.isatty()


def _service_stamper(service: str) -> Processor:
    def stamp(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service", service)
        return event_dict

    return stamp


def configure_logging(
    level: int | str = 0,
    json_logs: bool | None = None,
    service: str | None = None,
) -> None:
    """Configure structlog for the data layer.

    Args:
        level: Minimum level, as a number or a name such as ``"INFO"``
            (0 emits everything)
        json_logs: Force JSON (True) or console (False) rendering; None
            picks console output only for terminals or when FORCE_COLOR is set
        service: Optional service name stamped on every event

    Raises:
        ValueError: If ``level`` names no known level
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if service:
        processors.append(_service_stamper(service))
    processors.append(structlog.processors.StackInfoRenderer())

    if _use_console(json_logs):
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_resolve_level(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
