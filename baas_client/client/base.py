"""
Base API Client.

Shared functionality for the async client and its synchronous wrapper:
configuration, authentication headers, retry decisions and error mapping.
"""

import random
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urljoin

from baas_client.config.constants import API_KEY_HEADER, PROJECT_HEADER
from baas_client.logger import transport_logger as logger
from .config import ClientConfig
from .exceptions import APIError, ServerError


def backoff_delay(attempt: int, retry_delay: float, retry_backoff: float) -> float:
  """
  Exponential backoff with jitter.

  Args:
      attempt: Current attempt number (0-based)
      retry_delay: Base delay in seconds
      retry_backoff: Multiplier applied per attempt

  Returns:
      Delay in seconds
  """
  delay = retry_delay * (retry_backoff**attempt)
  # Add jitter to prevent thundering herd
  jitter = random.uniform(0, delay * 0.1)
  return delay + jitter


def flatten_params(data: Any, prefix: str = "") -> List[Tuple[str, Any]]:
  """
  Flatten nested params into form/query pairs.

  ``{"permissions": ["a", "b"]}`` becomes ``[("permissions[0]", "a"),
  ("permissions[1]", "b")]``. ``None`` values are dropped.
  """
  pairs: List[Tuple[str, Any]] = []
  if isinstance(data, dict):
    items = data.items()
  else:
    items = enumerate(data)

  for key, value in items:
    name = f"{prefix}[{key}]" if prefix else str(key)
    if value is None:
      continue
    if isinstance(value, (dict, list, tuple)):
      pairs.extend(flatten_params(value, name))
    elif isinstance(value, bool):
      pairs.append((name, "true" if value else "false"))
    else:
      pairs.append((name, value))
  return pairs


class BaseClient:
  """Base class for storage API clients with shared functionality."""

  def __init__(
    self,
    endpoint: Optional[str] = None,
    config: Optional[ClientConfig] = None,
    **kwargs,
  ):
    """
    Initialize the client.

    Args:
        endpoint: Base URL of the API, e.g. ``https://cloud.example.com/v1``
        config: Client configuration
        **kwargs: Additional config overrides; ``project_id`` and ``api_key``
            are turned into authentication headers
    """
    self.config = config or ClientConfig.from_env()

    if endpoint:
      self.config.endpoint = endpoint

    self.config.endpoint = self.config.endpoint.rstrip("/")

    auth_headers = {}
    project_id = kwargs.pop("project_id", None)
    if project_id:
      auth_headers[PROJECT_HEADER] = project_id

    api_key = kwargs.pop("api_key", None)
    if api_key:
      auth_headers[API_KEY_HEADER] = api_key
      logger.debug("Client configured with API key")
    else:
      logger.debug("Client initialized without API key")

    if auth_headers:
      headers = dict(kwargs.pop("headers", None) or self.config.headers)
      headers.update(auth_headers)
      kwargs["headers"] = headers

    if kwargs:
      self.config = self.config.with_overrides(**kwargs)

    if not self.config.endpoint:
      raise ValueError("endpoint must be provided or set in environment")

  def _build_url(self, path: str) -> str:
    """Build full URL from base and path."""
    if path.startswith("/"):
      path = path[1:]
    return urljoin(self.config.endpoint + "/", path)

  def _should_retry(self, error: Exception, attempt: int) -> bool:
    """
    Determine if request should be retried.

    Args:
        error: The exception that occurred
        attempt: Current attempt number (0-based)

    Returns:
        True if should retry, False otherwise
    """
    if attempt >= self.config.max_retries:
      return False

    if isinstance(error, APIError):
      return error.is_transient

    # Unknown errors - don't retry
    return False

  def _calculate_retry_delay(self, attempt: int) -> float:
    """Calculate delay before retry using exponential backoff with jitter."""
    return backoff_delay(attempt, self.config.retry_delay, self.config.retry_backoff)

  def _handle_response_error(
    self, status_code: int, response_data: Optional[Dict[str, Any]] = None
  ) -> ServerError:
    """
    Convert an error response into a ServerError.

    Args:
        status_code: HTTP status code
        response_data: Decoded response body

    Returns:
        ServerError carrying the payload verbatim
    """
    error_message = "API request failed"
    if response_data and isinstance(response_data, dict):
      error_message = response_data.get("message", error_message)

    return ServerError(error_message, status_code, response_data)
