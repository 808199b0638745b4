"""Configuration loading and logging setup tests."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from callback_contracts.config import (
    ContractsConfig,
    build_contracts_config,
    get_config,
    load_contracts_config,
    set_config,
)
from callback_contracts.utils import configure_logging, read_env


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for key in ("CONFIG", "LOG_LEVEL", "TRACE"):
        monkeypatch.delenv(f"CALLBACK_CONTRACTS_{key}", raising=False)
    return monkeypatch


def test_defaults_are_quiet() -> None:
    config = ContractsConfig()
    assert config.log_level == "WARNING"
    assert config.level == logging.WARNING
    assert config.trace_invocations is False


def test_build_config_normalises_and_rejects_unknown_keys() -> None:
    config = build_contracts_config({"log_level": "debug", "trace_invocations": "yes"})
    assert config.log_level == "DEBUG"
    assert config.trace_invocations is True

    copied = build_contracts_config(config, logger_name="contracts.test")
    assert copied.logger_name == "contracts.test"
    assert copied.log_level == "DEBUG"

    with pytest.raises(ValueError, match="Unknown contracts config keys: colour"):
        build_contracts_config({"colour": "blue"})
    with pytest.raises(ValueError, match="Unsupported log level"):
        build_contracts_config({"log_level": "LOUD"})
    with pytest.raises(ValueError, match="boolean"):
        build_contracts_config({"trace_invocations": "maybe"})
    with pytest.raises(TypeError):
        build_contracts_config(["log_level"])  # type: ignore[arg-type]


def test_load_config_reads_yaml_section(tmp_path: Path, clean_env: pytest.MonkeyPatch) -> None:
    path = tmp_path / "contracts.yaml"
    path.write_text(
        "callback_contracts:\n  log_level: info\n  trace_invocations: true\n",
        encoding="utf-8",
    )

    config = load_contracts_config(path)

    assert config.log_level == "INFO"
    assert config.trace_invocations is True


def test_environment_overrides_file_values(tmp_path: Path, clean_env: pytest.MonkeyPatch) -> None:
    path = tmp_path / "contracts.yaml"
    path.write_text("log_level: ERROR\ntrace_invocations: true\n", encoding="utf-8")
    clean_env.setenv("CALLBACK_CONTRACTS_CONFIG", str(path))
    clean_env.setenv("CALLBACK_CONTRACTS_LOG_LEVEL", "debug")
    clean_env.setenv("CALLBACK_CONTRACTS_TRACE", "off")

    config = load_contracts_config()

    assert config.log_level == "DEBUG"
    assert config.trace_invocations is False
    assert read_env("log_level") == "debug"


def test_missing_or_malformed_config_file(tmp_path: Path, clean_env: pytest.MonkeyPatch) -> None:
    with pytest.raises(ValueError, match="not found"):
        load_contracts_config(tmp_path / "absent.yaml")

    bad = tmp_path / "bad.yaml"
    bad.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError, match="mapping"):
        load_contracts_config(bad)


def test_get_config_reloads_after_reset(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("CALLBACK_CONTRACTS_TRACE", "1")
    set_config(None)

    assert get_config().trace_invocations is True
    assert get_config() is get_config()


def test_configure_logging_uses_config_defaults() -> None:
    config = ContractsConfig(log_level="INFO", logger_name="callback contracts test")
    logger = configure_logging(config=config, extra_loggers=["callback contracts test.child"])

    try:
        assert logger.name == "callback contracts test"
        assert logger.level == logging.INFO
        assert logger.propagate is False
        assert any(isinstance(handler, logging.StreamHandler) for handler in logger.handlers)
        child = logging.getLogger("callback contracts test.child")
        assert child.level == logging.INFO

        again = configure_logging("debug", name="callback contracts test")
        assert again is logger
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
    finally:
        for name in ("callback contracts test", "callback contracts test.child"):
            target = logging.getLogger(name)
            target.handlers.clear()
            target.propagate = True
            target.setLevel(logging.NOTSET)
