from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from ..rules.patterns import redact_emails


def redact_personal_info(logger: Any, name: str, event_dict: dict) -> dict:
    """Scrub email addresses from string fields before they reach any sink."""
    for key, value in event_dict.items():
        if isinstance(value, str):
            event_dict[key] = redact_emails(value)
    return event_dict


def setup_logging(level: int = logging.INFO, use_json: bool = False) -> None:
    """
    Setup structured logging for the moderation pipeline.

    Args:
        level: Logging level (default: INFO)
        use_json: If True, render JSON lines instead of console output (default: False)
    """
    if use_json:
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    shared_processors: list[Any] = [
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%H:%M:%S", utc=False),
        redact_personal_info,
    ]

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )

    # stdlib loggers (httpx, tenacity) go through the same renderer
    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
            foreign_pre_chain=shared_processors,
        )
    )
    logging.basicConfig(level=level, handlers=[handler], force=True)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
