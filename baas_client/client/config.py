"""
Client Configuration.

Settings for the storage API client, read from ``BAAS_*`` environment
variables or passed explicitly. Values are checked when the config is built,
so a bad chunk size or timeout fails before any request is made.
"""

import os
from dataclasses import dataclass, field, fields
from typing import Any, Callable, Dict, Tuple

from baas_client.config.constants import (
  CHUNK_SIZE,
  DEFAULT_HTTP_TIMEOUT,
  DEFAULT_MAX_RETRIES,
  DEFAULT_RETRY_BACKOFF,
  DEFAULT_RETRY_DELAY,
)
from baas_client.exceptions import InvalidInputError


def _parse_bool(value: str) -> bool:
  return value.strip().lower() in ("true", "1", "yes")


def _parse_endpoint(value: str) -> str:
  return value.strip().rstrip("/")


# config attribute -> (env var suffix, parser)
ENV_SETTINGS: Dict[str, Tuple[str, Callable[[str], Any]]] = {
  "endpoint": ("ENDPOINT", _parse_endpoint),
  "timeout": ("HTTP_TIMEOUT", int),
  "max_retries": ("MAX_RETRIES", int),
  "retry_delay": ("RETRY_DELAY", float),
  "retry_backoff": ("RETRY_BACKOFF", float),
  "max_connections": ("MAX_CONNECTIONS", int),
  "max_keepalive_connections": ("MAX_KEEPALIVE_CONNECTIONS", int),
  "keepalive_expiry": ("KEEPALIVE_EXPIRY", float),
  "chunk_size": ("UPLOAD_CHUNK_SIZE", int),
  "verify_ssl": ("VERIFY_SSL", _parse_bool),
}


@dataclass
class ClientConfig:
  """Configuration for the storage API client."""

  # Connection settings
  endpoint: str = ""
  timeout: int = DEFAULT_HTTP_TIMEOUT
  max_retries: int = DEFAULT_MAX_RETRIES
  retry_delay: float = DEFAULT_RETRY_DELAY
  retry_backoff: float = DEFAULT_RETRY_BACKOFF

  # Connection pool settings
  max_connections: int = 100
  max_keepalive_connections: int = 20
  keepalive_expiry: float = 5.0

  # Bytes per upload request; files up to this size go out in one request
  chunk_size: int = CHUNK_SIZE

  # Request settings
  headers: Dict[str, str] = field(default_factory=dict)
  verify_ssl: bool = True

  def __post_init__(self):
    if self.chunk_size <= 0:
      raise InvalidInputError(
        f"chunk_size must be positive, got {self.chunk_size}",
        chunk_size=self.chunk_size,
      )
    if self.timeout <= 0:
      raise InvalidInputError(
        f"timeout must be positive, got {self.timeout}", timeout=self.timeout
      )
    if self.max_retries < 0:
      raise InvalidInputError(
        f"max_retries must not be negative, got {self.max_retries}",
        max_retries=self.max_retries,
      )

  @classmethod
  def from_env(cls, prefix: str = "BAAS_") -> "ClientConfig":
    """
    Create configuration from environment variables.

    Args:
        prefix: Environment variable prefix

    Returns:
        ClientConfig instance

    Raises:
        InvalidInputError: A variable cannot be parsed or is out of range
    """
    values: Dict[str, Any] = {}
    for attr, (suffix, parse) in ENV_SETTINGS.items():
      name = prefix + suffix
      raw = os.environ.get(name)
      if raw is None or raw == "":
        continue
      try:
        values[attr] = parse(raw)
      except ValueError as e:
        raise InvalidInputError(f"Invalid value for {name}: {raw!r}", variable=name) from e

    return cls(**values)

  def with_overrides(self, **kwargs: Any) -> "ClientConfig":
    """Copy of this config with ``kwargs`` applied; headers are not shared."""
    values: Dict[str, Any] = {f.name: getattr(self, f.name) for f in fields(self)}
    values["headers"] = dict(self.headers)
    values.update(kwargs)
    return ClientConfig(**values)
