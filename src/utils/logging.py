"""Logging utilities for the application."""

import logging
import os
import sys

# Import OpenTelemetry components for Azure Monitor
from azure.monitor.opentelemetry import configure_azure_monitor
from opentelemetry.instrumentation.logging import LoggingInstrumentor

from settings import settings


def resolve_level(name: str) -> int:
    """Map a level name such as ``"debug"`` to its value, falling back to INFO."""
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


logging_level = resolve_level(settings.logging_level)

logger = logging.getLogger("tutorhub")
logger.setLevel(logging_level)

# Request handlers and lifecycle listeners run on the same loop, so the task name tells them apart
formatter = logging.Formatter("%(asctime)s - PID:%(process)d - %(taskName)s - %(name)s - %(levelname)s - %(message)s", defaults={"taskName": "-"})

console_handler = logging.StreamHandler(sys.stdout)
console_handler.setFormatter(formatter)
logger.addHandler(console_handler)

# The driver logs every heartbeat at DEBUG
logging.getLogger("pymongo").setLevel(max(logging_level, logging.INFO))

appinsights_connection_string = os.environ.get("APPLICATIONINSIGHTS_CONNECTION_STRING")
if appinsights_connection_string:
    configure_azure_monitor(connection_string=appinsights_connection_string)

    LoggingInstrumentor().instrument(level=logging_level, excluded_loggers=["azure"])  # Avoid recursive logging

# Prevent propagation to root logger to avoid duplicate logs
logger.propagate = False
