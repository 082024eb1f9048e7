"""Custom structlog processors for mtpfs logging"""

import socket
import sys
import traceback

from structlog.types import EventDict, WrappedLogger
from structlog.contextvars import get_contextvars

from mtpfs.core.config import get_settings


DEVICE_CONTEXT_KEYS = ("device", "storage_id", "session_id")


def add_service_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service-level context to logs"""
    settings = get_settings()
    event_dict["service"] = settings.app_name
    event_dict["environment"] = settings.environment

    try:
        event_dict["hostname"] = socket.gethostname()
    except OSError:
        pass

    return event_dict


def add_device_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Copy device/session identifiers bound via contextvars onto the event"""
    context = get_contextvars()

    for key in DEVICE_CONTEXT_KEYS:
        if key in context and key not in event_dict:
            event_dict[key] = context[key]

    return event_dict


def format_exception_info(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Format exception information for better readability"""
    exc_info = event_dict.pop("exc_info", None)
    if exc_info:
        if isinstance(exc_info, BaseException):
            exc_type, exc_value, exc_tb = type(exc_info), exc_info, exc_info.__traceback__
        elif isinstance(exc_info, tuple):
            exc_type, exc_value, exc_tb = exc_info
        else:
            exc_type, exc_value, exc_tb = sys.exc_info()

        if exc_type:
            event_dict["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
                "traceback": traceback.format_exception(exc_type, exc_value, exc_tb)
            }

    return event_dict


def set_log_severity(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Set proper severity field for log aggregation systems"""
    level_map = {
        "debug": "DEBUG",
        "info": "INFO",
        "warning": "WARNING",
        "error": "ERROR",
        "critical": "CRITICAL"
    }

    if "level" in event_dict:
        event_dict["severity"] = level_map.get(event_dict["level"], "INFO")

    return event_dict
