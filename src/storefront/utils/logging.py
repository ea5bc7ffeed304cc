"""Logging configuration for the storefront service.

structlog renders on top of the standard library handlers so that Protean,
uvicorn and our own loggers end up in the same files. The deployment
environment is resolved once and decides both the level and the renderer.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path

import structlog

JSON_ENVIRONMENTS = ("production", "staging")

_DEFAULT_LEVELS = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}


def current_environment() -> str:
    """Name of the deployment environment.

    ``ENVIRONMENT`` wins when set, otherwise ``PROTEAN_ENV`` (the variable that
    also picks the domain.toml overlay), otherwise development.
    """
    return (os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def get_log_level(env: str | None = None) -> str:
    env = env or current_environment()
    return os.getenv("LOG_LEVEL", _DEFAULT_LEVELS.get(env, "INFO"))


def _rotating_file(path: Path, level: str | int) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def setup_stdlib_logging(env: str, log_dir: str = "logs", log_file_prefix: str = "storefront") -> None:
    log_level = get_log_level(env)

    log_path = Path(log_dir)
    log_path.mkdir(exist_ok=True)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = [
        console_handler,
        _rotating_file(log_path / f"{log_file_prefix}.log", log_level),
        _rotating_file(log_path / f"{log_file_prefix}_error.log", logging.ERROR),
    ]

    # Protean logs every unit of work at INFO
    logging.getLogger("protean").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def renderer_for(env: str):
    """JSON lines in deployed environments, a readable console elsewhere."""
    if env in JSON_ENVIRONMENTS:
        return structlog.processors.JSONRenderer()
    # Locals stay out of tracebacks: request frames hold bearer tokens
    return structlog.dev.ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=2),
    )


def setup_structlog(env: str) -> None:
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    structlog.processors.CallsiteParameter.FILENAME,
                    structlog.processors.CallsiteParameter.LINENO,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                ]
            ),
            renderer_for(env),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(log_dir: str = "logs", log_file_prefix: str = "storefront") -> None:
    """Configure all logging for the application."""
    env = current_environment()
    setup_stdlib_logging(env, log_dir=log_dir, log_file_prefix=log_file_prefix)
    setup_structlog(env)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
