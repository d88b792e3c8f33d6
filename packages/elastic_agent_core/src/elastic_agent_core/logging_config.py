import logging
import logging.config
import os
import sys

import structlog
from opentelemetry import trace
from structlog.types import EventDict, Processor

SENSITIVE_KEYS = frozenset(
    {
        "oauth_token",
        "kubernetes_cluster_ca_cert",
        "client_key_data",
        "client_cert_data",
        "api_key",
    }
)


def add_opentelemetry_ids(_, __, event_dict: EventDict) -> EventDict:
    """
    Adds trace_id and span_id to the log record if a trace is active.
    """
    span_context = trace.get_current_span().get_span_context()
    if span_context.is_valid:
        event_dict["trace_id"] = trace.format_trace_id(span_context.trace_id)
        event_dict["span_id"] = trace.format_span_id(span_context.span_id)
    return event_dict


def add_service_info(_, __, event_dict: EventDict) -> EventDict:
    event_dict["service"] = os.getenv("SERVICE_NAME", "unknown")
    event_dict["env"] = os.getenv("ENVIRONMENT", "development")
    return event_dict


def mask_sensitive_values(_, __, event_dict: EventDict) -> EventDict:
    """Replaces values of secret plugin settings with a fixed mask."""
    for key in SENSITIVE_KEYS.intersection(event_dict):
        if event_dict[key]:
            event_dict[key] = "********"
    return event_dict


def drop_color_message_key(_, __, event_dict: EventDict) -> EventDict:
    event_dict.pop("color_message", None)
    return event_dict


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        add_service_info,
        add_opentelemetry_ids,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.ExtraAdder(),
        mask_sensitive_values,
        drop_color_message_key,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _dict_config(level: str, renderer: Processor, pre_chain: list[Processor]) -> dict:
    """stdlib logging config routing every record through one structlog formatter."""
    # uvicorn's own handlers are dropped so its records reach the root handler;
    # access lines are silenced, the request middleware logs requests instead.
    uvicorn_loggers = {
        "uvicorn": {"handlers": [], "level": level, "propagate": True},
        "uvicorn.error": {"handlers": [], "level": level, "propagate": True},
        "uvicorn.access": {"handlers": [], "propagate": False},
    }
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "structlog": {
                "()": "structlog.stdlib.ProcessorFormatter",
                "processors": [
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    renderer,
                ],
                "foreign_pre_chain": pre_chain,
            },
        },
        "handlers": {
            "console": {
                "level": level,
                "class": "logging.StreamHandler",
                "formatter": "structlog",
            },
        },
        "loggers": {
            "": {"handlers": ["console"], "level": level, "propagate": True},
            **uvicorn_loggers,
        },
    }


def _log_uncaught_exception(exc_type, exc_value, exc_traceback):
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_traceback)
        return
    structlog.get_logger("uncaught_exception").error(
        "Uncaught exception", exc_info=(exc_type, exc_value, exc_traceback)
    )


def setup_structlog(json_logs: bool = False, log_level: str = "INFO"):
    """
    Configure structured logging for the entire application.

    Both structlog loggers and plain stdlib loggers (uvicorn, fastapi) end up
    in the same handler, rendered as JSON or as colored console output.
    """
    processors = _shared_processors()
    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=True)
    )

    logging.config.dictConfig(_dict_config(log_level.upper(), renderer, processors))

    structlog.configure(
        processors=[*processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    sys.excepthook = _log_uncaught_exception
