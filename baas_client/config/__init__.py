"""
Centralized configuration package for the storage client.

Environment-driven settings live in ``env``; wire conventions and defaults in
``constants``.
"""

from .env import EnvConfig, env

__all__ = ["EnvConfig", "env"]
