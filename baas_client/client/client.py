"""
Asynchronous API Client.

Performs single requests against the storage API: JSON or multipart bodies,
transient-error retry, and translation of httpx failures into the client's
own exception types. It is the transport the chunked uploader drives.
"""

import asyncio
from typing import Any, Dict, Optional, Tuple

import httpx

from baas_client.config.constants import API_KEY_HEADER
from baas_client.logger import transport_logger as logger
from .base import BaseClient, flatten_params
from .config import ClientConfig
from .exceptions import RequestTimeoutError, TransportError

# (filename, content, mime type)
FilePart = Tuple[str, bytes, str]


class Client(BaseClient):
  """Asynchronous client for storage API operations."""

  def __init__(
    self,
    endpoint: Optional[str] = None,
    config: Optional[ClientConfig] = None,
    **kwargs,
  ):
    """
    Initialize asynchronous client.

    Args:
        endpoint: Base URL for the API
        config: Client configuration
        **kwargs: Additional config overrides
    """
    super().__init__(endpoint, config, **kwargs)

    limits = httpx.Limits(
      max_connections=self.config.max_connections,
      max_keepalive_connections=self.config.max_keepalive_connections,
      keepalive_expiry=self.config.keepalive_expiry,
    )

    self.client = httpx.AsyncClient(
      base_url=self.config.endpoint,
      timeout=httpx.Timeout(self.config.timeout),
      limits=limits,
      headers=self.config.headers,
      verify=self.config.verify_ssl,
    )

  async def __aenter__(self):
    """Async context manager entry."""
    return self

  async def __aexit__(self, exc_type, exc_val, exc_tb):
    """Async context manager exit."""
    await self.close()

  async def close(self):
    """Close the client and cleanup resources."""
    await self.client.aclose()

  async def _execute_with_retry(self, func, *args, **kwargs):
    """
    Execute an async function with retry logic.

    Raises:
        APIError: If all retries fail
    """
    last_error: Optional[Exception] = None

    for attempt in range(self.config.max_retries + 1):
      try:
        return await func(*args, **kwargs)

      except Exception as e:
        last_error = e

        # Convert to appropriate exception type
        if isinstance(e, httpx.TimeoutException):
          last_error = RequestTimeoutError(f"Request timeout: {e}")
        elif isinstance(e, httpx.ConnectError):
          last_error = TransportError(f"Connection error: {e}")
        elif isinstance(e, httpx.RequestError):
          last_error = TransportError(f"Request error: {e}")

        if not self._should_retry(last_error, attempt):
          if last_error is e:
            raise
          raise last_error from e

        delay = self._calculate_retry_delay(attempt)
        logger.warning(
          f"Request failed (attempt {attempt + 1}/{self.config.max_retries + 1}), "
          f"retrying in {delay:.2f}s: {last_error}"
        )
        await asyncio.sleep(delay)

    if last_error is None:
      raise RuntimeError("Retry logic failed without capturing an exception")
    raise last_error

  async def call(
    self,
    method: str,
    path: str,
    headers: Optional[Dict[str, str]] = None,
    params: Optional[Dict[str, Any]] = None,
    files: Optional[Dict[str, FilePart]] = None,
    timeout: Optional[float] = None,
  ) -> Dict[str, Any]:
    """
    Make one API call and return the decoded JSON body.

    GET requests send ``params`` as the query string. Requests with ``files``
    are sent as multipart forms with ``params`` as form fields; all others as
    JSON bodies.

    Args:
        method: HTTP method
        path: API path relative to the endpoint
        headers: Extra request headers
        params: Request parameters
        files: Multipart file parts keyed by form field
        timeout: Per-request timeout override

    Returns:
        Decoded response body, ``{}`` for empty responses

    Raises:
        ServerError: Non-success status
        TransportError: Network failure or timeout after retries
    """
    method = method.upper()
    params = params or {}

    # httpx sets the content type itself (with the multipart boundary)
    request_headers = {
      key: value
      for key, value in (headers or {}).items()
      if key.lower() != "content-type"
    }

    request_kwargs: Dict[str, Any] = {
      "method": method,
      "url": path,
      "headers": request_headers,
    }

    if method == "GET":
      request_kwargs["params"] = flatten_params(params)
    elif files:
      request_kwargs["data"] = dict(flatten_params(params))
      request_kwargs["files"] = files
    else:
      request_kwargs["json"] = {k: v for k, v in params.items() if v is not None}

    if timeout is not None:
      request_kwargs["timeout"] = timeout

    async def make_request():
      logger.debug(f"Making request: {method} {path}")
      if self.client.headers:
        debug_headers = dict(self.client.headers)
        for key in list(debug_headers):
          if key.lower() == API_KEY_HEADER.lower():
            debug_headers[key] = debug_headers[key][:8] + "..."
        logger.debug(f"Client headers: {debug_headers}")

      response = await self.client.request(**request_kwargs)

      if response.status_code >= 400:
        try:
          error_data = response.json()
        except ValueError:
          error_data = {"message": response.text}

        raise self._handle_response_error(response.status_code, error_data)

      return response

    response = await self._execute_with_retry(make_request)

    if not response.content:
      return {}
    return response.json()
