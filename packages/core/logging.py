"""Structured logging with structlog.

JSON lines in production, colorized console output in development. Long
digit runs (account, reference and phone numbers) are masked before
rendering, since log events may carry fragments of SMS bodies.

Usage:
    import structlog
    logger = structlog.get_logger()
    logger.info("transaction_extracted", bank="State Bank of India")
"""

import logging
import re
import sys

import structlog

_DIGIT_RUN = re.compile(r"\d{6,}")


def mask_digit_runs(_, __, event_dict: dict) -> dict:
    """Keep the last 4 digits of any run of 6 or more."""
    for key, value in event_dict.items():
        if isinstance(value, str):
            event_dict[key] = _DIGIT_RUN.sub(
                lambda m: "*" * (len(m.group()) - 4) + m.group()[-4:], value
            )
    return event_dict


def setup_logging(
    log_level: str = "INFO", json_output: bool = True, environment: str = "development"
) -> None:
    """Configure structured logging.

    Args:
        log_level: Python log level string (DEBUG, INFO, WARNING, ERROR).
        json_output: JSON renderer if True, console renderer otherwise.
        environment: bound into every event as ``environment``.
    """
    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        mask_digit_runs,
    ]
    processors.append(
        structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(environment=environment)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO),
    )


def setup_logging_from_settings(settings) -> None:
    setup_logging(
        log_level=settings.log_level,
        json_output=settings.LOG_JSON,
        environment=settings.ENVIRONMENT,
    )
