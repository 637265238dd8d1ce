"""
Transport Exceptions.

Defines the exception hierarchy for requests made against the storage API.
"""

from typing import Any, Dict, Optional

from baas_client.config.constants import TRANSIENT_STATUS_CODES


class APIError(Exception):
  """Base exception for all API request errors."""

  def __init__(
    self,
    message: str,
    status_code: Optional[int] = None,
    response_data: Optional[Dict[str, Any]] = None,
  ):
    super().__init__(message)
    self.status_code = status_code
    self.response_data = response_data

  @property
  def is_transient(self) -> bool:
    return False


class TransportError(APIError):
  """
  Network-level failure; the request may never have reached the server.

  Examples: connection refused, connection reset, DNS failure
  """

  @property
  def is_transient(self) -> bool:
    return True


class RequestTimeoutError(TransportError):
  """Request timeout errors."""

  pass


class ServerError(APIError):
  """
  The server answered with a non-success status.

  ``response_data`` holds the decoded error payload verbatim.
  """

  @property
  def code(self) -> Optional[int]:
    if self.response_data:
      return self.response_data.get("code", self.status_code)
    return self.status_code

  @property
  def type(self) -> Optional[str]:
    if self.response_data:
      return self.response_data.get("type")
    return None

  @property
  def is_transient(self) -> bool:
    return self.status_code in TRANSIENT_STATUS_CODES
