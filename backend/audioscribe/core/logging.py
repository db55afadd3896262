import json
import logging
import os
import sys
from typing import Dict, Any

from loguru import logger

from audioscribe.core.config import Settings, settings as default_settings


class InterceptHandler(logging.Handler):
    """
    Intercept standard logging messages toward loguru

    This handler intercepts all log records sent by the standard logging
    module and redirects them to loguru.
    """

    def emit(self, record: logging.LogRecord) -> None:
        # Get corresponding loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where the logged message originated
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


class JSONFormatter:
    """
    JSON formatter for loguru records

    Serializes the record into ``extra["serialized"]`` and returns a format
    string pointing at it, so loguru does not try to interpret the braces
    of the JSON payload.
    """

    def __call__(self, record: Dict[str, Any]) -> str:
        log_record = {
            "timestamp": record["time"].strftime("%Y-%m-%dT%H:%M:%S.%fZ"),
            "level": record["level"].name,
            "message": record["message"],
            "module": record["name"],
            "function": record["function"],
            "line": record["line"],
            "process_id": record["process"].id,
            "thread_id": record["thread"].id,
        }

        # Add exception info if present
        if record["exception"]:
            log_record["exception"] = {
                "type": record["exception"].type.__name__,
                "value": str(record["exception"].value),
            }

        # Add extra fields
        extra = {k: v for k, v in record["extra"].items() if k != "serialized"}
        if extra:
            log_record.update(extra)

        record["extra"]["serialized"] = json.dumps(log_record, default=str)
        return "{extra[serialized]}\n"


CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def setup_logging(settings: Settings = default_settings) -> None:
    """
    Set up logging configuration

    Configures loguru logger with appropriate handlers and formatters
    based on the application environment.
    """
    # Remove default handler
    logger.remove()

    log_level = "DEBUG" if settings.DEBUG else "INFO"
    is_deployed = settings.ENVIRONMENT in ["production", "staging"]

    logger.add(
        sys.stderr,
        format=JSONFormatter() if is_deployed else CONSOLE_FORMAT,
        level=log_level,
        diagnose=settings.DEBUG,
        backtrace=True,
    )

    if settings.LOG_TO_FILE:
        os.makedirs(settings.LOG_DIR, exist_ok=True)

        # File for error logs
        error_log_file = os.path.join(settings.LOG_DIR, f"{settings.ENVIRONMENT}_error.log")
        logger.add(
            error_log_file,
            format=JSONFormatter() if settings.ENVIRONMENT == "production" else CONSOLE_FORMAT,
            level="ERROR",
            rotation="10 MB",
            retention="30 days",
            compression="zip",
            backtrace=True,
            enqueue=True,
        )

        # Add file handler for all logs in production/staging
        if is_deployed:
            all_log_file = os.path.join(settings.LOG_DIR, f"{settings.ENVIRONMENT}_all.log")
            logger.add(
                all_log_file,
                format=JSONFormatter(),
                level=log_level,
                rotation="50 MB",
                retention="7 days",
                compression="zip",
                enqueue=True,
            )

    # Intercept standard logging
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    # Update logging for commonly used libraries
    for logger_name in ["uvicorn", "uvicorn.error", "uvicorn.access", "fastapi", "sqlalchemy.engine", "httpx"]:
        std_logger = logging.getLogger(logger_name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False

    logger.info(f"Logging configured for {settings.ENVIRONMENT} environment at {log_level} level")
