"""Logfire setup and structured logging helpers for crewcal.

Modules log through ``logging.getLogger(__name__)``; Logfire picks those
records up once ``configure_logfire`` has run. Service entry points wrap
their work in ``span``.
"""

import logging

import logfire

from src.core.config import settings


def configure_logfire() -> None:
    """Configure Logfire for this process. Nothing is exported without a token."""
    logfire.configure(
        token=settings.logfire_token,
        service_name="crewcal",
        service_version="0.1.0",
        environment=settings.environment,
        send_to_logfire="if-token-present",
    )

    logger = logging.getLogger(__name__)
    logger.info("Logfire configured")


def span(name: str) -> logfire.LogfireSpan:
    """Span named ``<module>.<operation>``, e.g. ``span("bucket_service.bucket")``."""
    return logfire.span(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **context: object,
) -> None:
    """Log ``message`` at ``level`` with the keyword fields attached to the record.

    Example:
        log_with_context(logger, "warning", "Skipping task", task_id="42", reason="bad start_date")
    """
    getattr(logger, level.lower())(message, extra=context)


def log_with_screen_context(
    logger: logging.Logger,
    level: str,
    message: str,
    screen: str | None = None,
    **extra: object,
) -> None:
    """Like log_with_context, tagging the record with the screen ("calendar", "tasks") that caused it."""
    context = {"screen": screen, **extra} if screen else extra
    log_with_context(logger, level, message, **context)
