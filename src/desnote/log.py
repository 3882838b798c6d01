# SPDX-License-Identifier: GPL-3.0-or-later

"""
Logging setup.

Call setup_logging() once at startup, then get a logger per module:

    from desnote.log import get_logger
    logger = get_logger(__name__)
    logger.info('Folder deleted', folder_id=folder_id, spilled=3)
"""

import logging
import sys

import structlog
from structlog.typing import Processor


def setup_logging(level: str = 'INFO', json_output: bool = False) -> None:
    """
    Configure structlog on top of the stdlib logging module.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        json_output: Render records as JSON lines instead of console text
    """
    log_level = getattr(logging, level.upper())

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.processors.StackInfoRenderer(),
    ]

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structured logger for the given module name."""
    return structlog.get_logger(name)
