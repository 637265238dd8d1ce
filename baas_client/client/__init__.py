"""
Storage API Client - Async client for the storage service.

This module provides an asynchronous httpx-based client that performs single
requests and serves as the transport for chunked uploads.
"""

from .client import Client
from .config import ClientConfig
from .exceptions import (
  APIError,
  RequestTimeoutError,
  ServerError,
  TransportError,
)

__all__ = [
  "APIError",
  "Client",
  "ClientConfig",
  "RequestTimeoutError",
  "ServerError",
  "TransportError",
]
