"""Structlog configuration for the resilience layer.

Every module gets its logger from get_module_logger(); log entries carry
the module's component name plus any context bound with bind_log_context.
Development renders to the console, production emits one JSON object per
line, and test runs emit nothing.

Usage:
    from offline_resilience.logging import get_module_logger

    logger = get_module_logger()
    logger.info("action_queued", action_id=action.id)

Dependencies:
    - offline_resilience.configuration.settings
"""

import inspect
import logging
import sys
from typing import List, Optional

import structlog
from structlog.stdlib import BoundLogger
from structlog.typing import Processor

from offline_resilience.configuration import settings

ROOT_PACKAGE = "offline_resilience"

# Above CRITICAL, so nothing is emitted
SILENT_LEVEL = logging.CRITICAL + 1


def _running_under_pytest() -> bool:
    return "pytest" in sys.modules


def _base_processors() -> List[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
        structlog.processors.StackInfoRenderer(),
    ]


def _renderer_processors(prod_mode: bool) -> List[Processor]:
    if prod_mode:
        return [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    return [structlog.dev.ConsoleRenderer()]


def configure_logging(
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structlog and the stdlib root logger.

    Args:
        log_level: Level name (DEBUG, INFO, WARNING, ...). Defaults to
            settings.LOG_LEVEL.
        is_production: JSON output when True, console output when False.
            Defaults to settings.is_production.

    Returns:
        Root bound logger
    """
    if _running_under_pytest():
        structlog.configure(
            processors=[
                structlog.stdlib.add_log_level,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(format="%(message)s", level=SILENT_LEVEL, force=True)
        return structlog.stdlib.get_logger()

    prod_mode = settings.is_production if is_production is None else is_production
    level_name = (log_level or settings.LOG_LEVEL).upper()

    structlog.configure(
        processors=_base_processors() + _renderer_processors(prod_mode),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level_name, logging.INFO),
    )

    return structlog.stdlib.get_logger()


logger: BoundLogger = configure_logging()


def get_module_logger() -> BoundLogger:
    """Get a logger bound to the calling module.

    Binds ``component`` (the module's last dotted segment) and
    ``module_path`` (the dotted path without the package prefix).

    Example:
        # In offline_resilience/resilience/queue/queue.py
        logger = get_module_logger()
        # context: {"component": "queue", "module_path": "resilience.queue.queue"}
    """
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    module = inspect.getmodule(caller) if caller is not None else None
    if module is None:
        return logger.bind(component="unknown")

    name = module.__name__
    if name.startswith(f"{ROOT_PACKAGE}."):
        name = name[len(ROOT_PACKAGE) + 1 :]
    return logger.bind(component=name.rsplit(".", 1)[-1], module_path=name)
