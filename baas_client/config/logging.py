"""
Structured Logging Configuration for the storage client.

Key Features:
- Structured JSON output outside development, one object per line
- Human-readable console format in development
- Quiet output in test runs
- Helpers attaching component/action metadata to records
"""

import json
import logging
import logging.config
import traceback
from datetime import UTC, datetime
from typing import Any

from baas_client.config.env import EnvConfig

APP_LOGGERS = ("baas_client", "baas_client.uploads", "baas_client.transport")


class StructuredFormatter(logging.Formatter):
  """
  JSON formatter producing searchable structured logs.

  - Timestamp in ISO format
  - Consistent field names for filtering
  - Component/action structure
  - Metadata preserved as searchable fields
  """

  def format(self, record: logging.LogRecord) -> str:
    log_entry = {
      "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
      "level": record.levelname,
      "component": getattr(record, "component", record.name),
      "message": record.getMessage(),
    }

    if hasattr(record, "action"):
      log_entry["action"] = record.action

    # Upload context
    for key in ("resource_id", "chunk_index", "path", "status_code", "duration_ms"):
      if hasattr(record, key):
        log_entry[key] = getattr(record, key)

    if record.levelno >= logging.ERROR:
      if record.exc_info:
        log_entry["error"] = {
          "type": record.exc_info[0].__name__ if record.exc_info[0] else "Unknown",
          "message": str(record.exc_info[1]) if record.exc_info[1] else "",
          "traceback": traceback.format_exception(*record.exc_info),
        }

      if hasattr(record, "error_category"):
        log_entry["error_category"] = record.error_category

    if hasattr(record, "metadata"):
      log_entry["metadata"] = record.metadata

    return json.dumps(log_entry, default=str, separators=(",", ":"))


def get_logging_config(environment: str | None = None) -> dict[str, Any]:
  """
  Generate logging configuration based on environment.

  - prod: INFO level, structured output
  - staging: INFO level, structured output
  - test: WARNING level, minimal output for clean test runs
  - dev: LOG_LEVEL (default INFO), simple console output
  """
  env = environment or EnvConfig.ENVIRONMENT

  if env in ("prod", "staging"):
    default_level = "INFO"
  elif env == "test":
    default_level = "WARNING"
  else:
    default_level = EnvConfig.LOG_LEVEL or "INFO"

  handler = "console" if env == "dev" else "structured"

  return {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
      "structured": {
        "()": StructuredFormatter,
      },
      "simple": {"format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"},
    },
    "handlers": {
      "structured": {
        "class": "logging.StreamHandler",
        "level": default_level,
        "formatter": "structured",
        "stream": "ext://sys.stderr",
      },
      "console": {
        "class": "logging.StreamHandler",
        "level": default_level,
        "formatter": "simple",
        "stream": "ext://sys.stderr",
      },
    },
    "loggers": {
      name: {
        "level": default_level,
        "handlers": [handler] if name == "baas_client" else [],
        "propagate": name != "baas_client",
      }
      for name in APP_LOGGERS
    }
    | {
      # Third-party loggers (reduced verbosity)
      "httpx": {"level": "WARNING"},
      "httpcore": {"level": "WARNING"},
    },
  }


def setup_logging(environment: str | None = None) -> None:
  """Initialize structured logging configuration."""
  logging.config.dictConfig(get_logging_config(environment))


def get_logger(name: str) -> logging.Logger:
  """Get a logger with structured logging capabilities."""
  return logging.getLogger(name)


def log_error(
  logger: logging.Logger,
  error: Exception,
  component: str,
  action: str,
  error_category: str = "application",
  metadata: dict[str, Any] | None = None,
) -> None:
  """Log error with structured data for easy searching."""
  logger.error(
    f"Error in {component}.{action}: {error!s}",
    exc_info=error,
    extra={
      "component": component,
      "action": action,
      "error_category": error_category,
      "metadata": metadata or {},
    },
  )


def log_performance_metric(
  logger: logging.Logger,
  metric_name: str,
  value: int | float,
  unit: str = "count",
  component: str = "system",
  metadata: dict[str, Any] | None = None,
) -> None:
  """Log performance metrics for monitoring."""
  logger.info(
    f"Performance metric: {metric_name} = {value} {unit}",
    extra={
      "component": "performance",
      "action": "metric_recorded",
      "metric_name": metric_name,
      "metric_value": value,
      "unit": unit,
      "source_component": component,
      "metadata": metadata or {},
    },
  )
