"""Structured logging setup using structlog."""

from __future__ import annotations

import logging
import sys

import structlog

from zone_bridge.config.schema import LoggingConfig


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Route stdlib and structlog records through one structlog formatter.

    Records emitted during a lookup carry the ``zone_id`` bound by the
    resolver. Output goes to stderr (stdout is reserved for command output)
    and, when ``config.file`` is set, to that file as well.
    """
    config = config or LoggingConfig()
    log_level = getattr(logging, config.level.upper(), logging.INFO)

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]

    renderer: structlog.types.Processor
    if config.format == "console":
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    else:
        renderer = structlog.processors.JSONRenderer(sort_keys=True)

    structlog.configure(
        processors=[
            *pre_chain,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    )

    targets: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.file:
        targets.append(logging.FileHandler(config.file))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    for handler in targets:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    # tzlocal logs at INFO while detecting the host zone
    logging.getLogger("tzlocal").setLevel(logging.WARNING)
