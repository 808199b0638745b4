"""Utility helpers for logging and environment lookups."""

from .logging import configure_logging
from .env import load_repo_dotenv, read_env

__all__ = [
    "configure_logging",
    "load_repo_dotenv",
    "read_env",
]
