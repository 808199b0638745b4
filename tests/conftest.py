"""Pytest fixtures and path configuration for callback contract tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from callback_contracts.config import ContractsConfig, set_config  # noqa: E402


@pytest.fixture(autouse=True)
def default_contracts_config() -> ContractsConfig:
    """Pin every test to default settings regardless of the host environment."""

    config = ContractsConfig()
    set_config(config)
    yield config
    set_config(None)
