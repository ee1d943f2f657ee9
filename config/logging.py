"""
Structured logging setup.

Call configure_logging() once from the process that embeds the
transformer (worker, API, script). Modules only do
structlog.get_logger(__name__).
"""

import logging
from typing import Optional

import structlog

from config.settings import Settings, get_settings


def configure_logging(app_settings: Optional[Settings] = None) -> None:
    """
    Configure structlog on top of the stdlib logging module.

    JSON lines in production, colored console output everywhere else.
    """
    app_settings = app_settings or get_settings()

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, app_settings.log_level),
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer() if app_settings.is_production
                else structlog.dev.ConsoleRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
