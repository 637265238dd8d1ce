"""
Client logging.

Sets up structured logging on import and exposes the loggers used across the
package, plus small helpers that attach component/action metadata.
"""

from typing import Any, Dict, Optional, Union

from .config.logging import (
  get_logger,
  log_error,
  log_performance_metric,
  setup_logging,
)

setup_logging()

logger = get_logger("baas_client")
upload_logger = get_logger("baas_client.uploads")
transport_logger = get_logger("baas_client.transport")


def log_app_error(
  error: Exception,
  component: str,
  action: str,
  error_category: str = "application",
  metadata: Optional[Dict[str, Any]] = None,
) -> None:
  """Log application errors with context."""
  log_error(logger, error, component, action, error_category, metadata)


def log_metric(
  metric_name: str,
  value: Union[int, float],
  unit: str = "count",
  component: str = "system",
  metadata: Optional[Dict[str, Any]] = None,
) -> None:
  """Log performance metrics."""
  log_performance_metric(logger, metric_name, value, unit, component, metadata)


__all__ = [
  "logger",
  "upload_logger",
  "transport_logger",
  "log_app_error",
  "log_metric",
  "get_logger",
]
