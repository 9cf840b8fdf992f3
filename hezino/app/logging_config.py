"""
Structured logging configuration for the hezino contact page.

JSON logs in production for log aggregation, coloured human-readable logs in
development, and WARNING-level logging in test to keep pytest output quiet.
Every record emitted inside a request carries request_id, method and path.
"""

import logging
import sys
import time
import uuid
from typing import Any, Dict
from datetime import datetime, timezone

from flask import Flask, g, has_request_context, request
from pythonjsonlogger import jsonlogger
from .services.request_utils import get_client_ip


class ContextualJsonFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter that adds contextual fields from Flask's request context.

    Includes timestamp (ISO-8601), level, logger name, app_env and, inside a
    request, request_id, method, path, remote_addr, user_agent and the elapsed
    response time. Exception text is attached when present.
    """

    def __init__(self, *args, app_env: str = "production", **kwargs):
        super().__init__(*args, **kwargs)
        self.app_env = app_env

    def add_fields(
        self,
        log_record: Dict[str, Any],
        record: logging.LogRecord,
        message_dict: Dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["app_env"] = self.app_env

        if has_request_context():
            log_record["request_id"] = getattr(g, "request_id", None)
            log_record["method"] = request.method
            log_record["path"] = request.path

            if request.query_string:
                log_record["query_string"] = request.query_string.decode("utf-8")

            log_record["remote_addr"] = get_client_ip(request)

            if request.user_agent:
                log_record["user_agent"] = request.user_agent.string

            request_start_time = getattr(g, "request_start_time", None)
            if request_start_time:
                response_time_ms = (time.time() - request_start_time) * 1000
                log_record["response_time_ms"] = round(response_time_ms, 2)

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)


class DevelopmentFormatter(logging.Formatter):
    """Human-readable, colour-coded formatter for the development server."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "")
        reset = self.COLORS["RESET"]

        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        base = f"{color}[{timestamp}] {record.levelname:8s}{reset} {record.name:30s} | {record.getMessage()}"

        context_parts = []
        if has_request_context():
            request_id = getattr(g, "request_id", None)
            if request_id:
                context_parts.append(f"request_id={request_id[:8]}")
            context_parts.append(f"{request.method} {request.path}")

        event = getattr(record, "event", None)
        if event:
            context_parts.append(f"event={event}")

        if context_parts:
            base += f" [{' | '.join(context_parts)}]"

        if record.exc_info:
            base += "\n" + self.formatException(record.exc_info)

        return base


def resolve_log_level(app_env: str, log_level_str=None) -> int:
    """Nivel explícito si se configuró; si no, uno por entorno."""
    if log_level_str:
        return getattr(logging, str(log_level_str).upper(), logging.INFO)
    if app_env == "test":
        return logging.WARNING
    if app_env == "development":
        return logging.DEBUG
    return logging.INFO


def configure_logging(app: Flask) -> None:
    """
    Configure structured logging for the Flask application.

    Picks the formatter from APP_ENV / LOG_JSON_ENABLED, sets the level and
    attaches a stdout handler to app.logger and the root logger.
    """
    app_env = app.config.get("APP_ENV", "production")
    log_level = resolve_log_level(app_env, app.config.get("LOG_LEVEL"))

    json_enabled = app.config.get("LOG_JSON_ENABLED", None)
    if json_enabled is None:
        json_enabled = app_env == "production"

    if json_enabled:
        formatter = ContextualJsonFormatter(
            fmt="%(message)s",
            app_env=app_env,
        )
    else:
        formatter = DevelopmentFormatter()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)

    # In test mode, don't clear handlers to preserve pytest's caplog handler
    if app_env != "test":
        app.logger.handlers.clear()
    app.logger.addHandler(handler)
    app.logger.setLevel(log_level)
    app.logger.propagate = (app_env == "test")

    root_logger = logging.getLogger()
    if app_env != "test":
        root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    if app_env == "development":
        logging.getLogger("werkzeug").setLevel(logging.WARNING)

    app.logger.info(
        "Logging configured",
        extra={
            "app_env": app_env,
            "log_level": logging.getLevelName(log_level),
            "json_enabled": json_enabled,
        },
    )


def setup_request_logging(app: Flask) -> None:
    """
    Set up request/response logging hooks.

    Attaches a request_id to each request, logs start and completion (status
    code, response time) and logs uncaught exceptions with full context.
    """

    @app.before_request
    def before_request_logging():
        g.request_id = str(uuid.uuid4())
        g.request_start_time = time.time()

        app.logger.info(
            "Request started",
            extra={
                "event": "request.started",
                "method": request.method,
                "path": request.path,
            },
        )

    @app.after_request
    def after_request_logging(response):
        if hasattr(g, "request_start_time"):
            response_time_ms = (time.time() - g.request_start_time) * 1000

            app.logger.info(
                "Request completed",
                extra={
                    "event": "request.completed",
                    "status_code": response.status_code,
                    "response_time_ms": round(response_time_ms, 2),
                },
            )
        response.headers.setdefault("X-Request-ID", getattr(g, "request_id", ""))
        return response

    @app.errorhandler(Exception)
    def handle_exception(error: Exception):
        from werkzeug.exceptions import HTTPException

        # 4xx/404 are part of normal flow; return them untouched
        if isinstance(error, HTTPException):
            return error

        app.logger.error(
            f"Uncaught exception: {str(error)}",
            exc_info=True,
            extra={
                "event": "exception.uncaught",
                "exception_type": type(error).__name__,
            },
        )
        raise error


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name (typically __name__)."""
    return logging.getLogger(name)
