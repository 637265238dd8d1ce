"""
Centralized environment variable configuration.

Process-wide settings read once at import time. Connection and upload
settings are read per client through ``ClientConfig.from_env``.
"""

import os


def get_str_env(key: str, default: str = "") -> str:
  """
  Get a string environment variable.

  Args:
      key: Environment variable name
      default: Default value if not set

  Returns:
      String value from environment or default
  """
  return os.getenv(key, default)


class EnvConfig:
  """Centralized environment variable configuration."""

  # Environment and debugging
  ENVIRONMENT = get_str_env("ENVIRONMENT", "dev")
  LOG_LEVEL = get_str_env("LOG_LEVEL", "INFO")


env = EnvConfig
