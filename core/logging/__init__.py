# Structured logging for the agent layer
import sys
import logging
import structlog
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from core.config.settings import Settings

# Global flag to prevent duplicate logging configuration
_logging_configured = False


def configure_logging(settings: "Settings") -> None:
    """Configure stdlib logging and structlog from settings."""
    global _logging_configured

    if _logging_configured:
        return

    level = settings.logging.level

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    if settings.logging.json_format or settings.logging.console_json_format:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    _logging_configured = True


def get_logger(name: str, component: Optional[str] = None) -> structlog.BoundLogger:
    """Get a structured logger, optionally bound to a component name."""
    logger = structlog.get_logger(name)
    if component:
        return logger.bind(component=component)
    return logger
