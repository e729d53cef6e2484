"""structlog configuration for wildfacts.

One processor chain (context vars, level, stack info, ISO timestamps) feeds
one of two renderers:

- ``ConsoleRenderer`` while developing, coloured only when stderr is a TTY;
- ``JSONRenderer`` when ``APP_ENV=production`` or ``json_output`` is set.

The stdlib root logger is routed through the same chain, so httpx and
aiosqlite records look like ours.  Everything is written to stderr; stdout
belongs to the CLI's fact output.
"""

import logging
import os
import sys

import structlog

# Third-party loggers that chatter at INFO on every request.
_NOISY_LOGGERS = ("httpx", "httpcore", "aiosqlite")


def configure_logging(
    log_level: str = "INFO",
    json_output: bool = False,
    app_env: str | None = None,
) -> structlog.BoundLogger:
    """Install the wildfacts logging setup and return a root logger.

    Args:
        log_level: Threshold name (DEBUG, INFO, WARNING, ERROR).
        json_output: Force the JSON renderer regardless of environment.
        app_env: Deployment environment; read from ``APP_ENV`` when omitted.
    """
    env = app_env if app_env is not None else os.environ.get("APP_ENV", "development")
    level = log_level.upper()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    renderer: structlog.types.Processor
    if json_output or env == "production":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *shared_processors,
                renderer,
            ],
        )
    )
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    # Request-level lines from the HTTP and SQLite libraries only at DEBUG.
    library_level = logging.DEBUG if level == "DEBUG" else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)

    return structlog.get_logger()


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a structlog logger bound to *name*.

    Falls back to :func:`configure_logging` defaults the first time it is
    called before any explicit configuration.
    """
    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(logger_name=name)
