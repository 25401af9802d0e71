import logging
import sys
from loguru import logger

from config.settings import settings


class InterceptHandler(logging.Handler):
    """
    Default handler from examples in loguru documention.
    It intercepts standard logging messages and routes them to loguru.
    """
    def emit(self, record):
        # Get corresponding Loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(level: str | None = None, log_file: str | None = None):
    level = level or settings.LOG_LEVEL
    log_file = log_file if log_file is not None else settings.LOG_FILE

    logger.remove()

    # JSON to stdout for the container log collector
    logger.add(
        sys.stdout,
        serialize=True,
        enqueue=True,
        level=level,
    )

    if log_file:
        logger.add(
            log_file,
            rotation="10 MB",
            retention="10 days",
            level=level,
            enqueue=True,
            serialize=False,
        )

    # Route uvicorn, fastapi and sqlalchemy loggers through loguru
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    for _log in ["uvicorn", "uvicorn.error", "uvicorn.access", "fastapi"]:
        _logger = logging.getLogger(_log)
        _logger.handlers = [InterceptHandler()]
        _logger.propagate = False

    logger.info("Structured logging (Loguru) initialized successfully.")
