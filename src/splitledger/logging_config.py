"""structlog setup shared by the CLI and library users."""

import logging
import sys

import structlog


def configure_logging(level: str = "WARNING", json: bool = False) -> None:
    """Route structlog through stdlib logging at the given level.

    Args:
        level: Standard logging level name
        json: Render JSON lines instead of the console format
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.WARNING),
        force=True,
    )
    renderer = (
        structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Module-level loggers must follow a later configure_logging call
        cache_logger_on_first_use=False,
    )
