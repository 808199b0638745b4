"""Environment lookups backed by the repository-local .env file."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ENV_PREFIX = "CALLBACK_CONTRACTS_"

_REPO_ROOT = Path(__file__).resolve().parents[3]


@lru_cache(maxsize=1)
def load_repo_dotenv() -> bool:
    """Load ``<repo>/.env`` once without clobbering variables already exported."""

    env_path = _REPO_ROOT / ".env"
    if not env_path.exists():
        return False
    return load_dotenv(env_path, override=False)


def read_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """Return ``$CALLBACK_CONTRACTS_<KEY>``, treating blank values as unset."""

    load_repo_dotenv()
    value = os.getenv(f"{ENV_PREFIX}{key.upper()}")
    if value is None or not value.strip():
        return default
    return value.strip()


__all__ = ["ENV_PREFIX", "load_repo_dotenv", "read_env"]
