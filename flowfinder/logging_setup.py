"""Logging configuration.

Modules log through ``logging.getLogger(__name__)`` with structured
``extra`` fields. Plain text output is the default; with
``structured=True`` records are rendered as JSON by structlog, extra
fields included.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import structlog

from .config import ObservabilityConfig, get_config

_HANDLER_NAME = "flowfinder"


def _json_formatter() -> logging.Formatter:
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.ExtraAdder(),
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.JSONRenderer(),
        ],
    )


def configure_logging(config: Optional[ObservabilityConfig] = None) -> logging.Handler:
    """Install the flowfinder handler on the root logger.

    Calling it again replaces the previously installed handler.

    Returns:
        The installed handler.
    """
    config = config or get_config().observability

    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    if config.structured:
        handler.setFormatter(_json_formatter())
    else:
        handler.setFormatter(logging.Formatter(config.format))

    root.addHandler(handler)
    root.setLevel(config.level.upper())
    return handler
