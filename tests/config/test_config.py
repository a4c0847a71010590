from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from imagetrigger.config import (
    InvalidConfigurationError,
    MissingConfigurationError,
    StorageConfig,
    configure_logging,
    get_database_config,
    get_registry_config,
    get_storage_config,
    optional_env_var,
    require_env_var,
    require_env_vars,
)

if TYPE_CHECKING:
    from pathlib import Path


def test_require_env_vars_returns_stripped_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", " value ")

    assert require_env_vars(["EXAMPLE_VAR"]) == {"EXAMPLE_VAR": "value"}


def test_require_env_vars_lists_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_B", raising=False)
    monkeypatch.setenv("MISSING_A", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert "MISSING_A, MISSING_B" in str(exc.value)


def test_require_env_var_handles_blank_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "")

    with pytest.raises(MissingConfigurationError):
        require_env_var("EXAMPLE_VAR")


def test_optional_env_var(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "  ")
    assert optional_env_var("EXAMPLE_VAR") is None

    monkeypatch.setenv("EXAMPLE_VAR", "set")
    assert optional_env_var("EXAMPLE_VAR") == "set"


def test_registry_config_requires_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("IMAGETRIGGER_REGISTRY_URL", raising=False)

    with pytest.raises(MissingConfigurationError, match="IMAGETRIGGER_REGISTRY_URL"):
        get_registry_config()


def test_registry_config_sends_bearer_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("IMAGETRIGGER_REGISTRY_URL", "https://registry.test/apis/")
    monkeypatch.setenv("IMAGETRIGGER_REGISTRY_TOKEN", "secret")

    config = get_registry_config()

    assert config.base_url == "https://registry.test/apis"
    assert config.token == "secret"
    assert config.resilience.base_url == "https://registry.test/apis"
    assert config.resilience.default_headers is not None
    assert config.resilience.default_headers["Authorization"] == "Bearer secret"
    assert config.resilience.ratelimit is not None


def test_registry_config_without_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("IMAGETRIGGER_REGISTRY_URL", "https://registry.test")
    monkeypatch.delenv("IMAGETRIGGER_REGISTRY_TOKEN", raising=False)

    config = get_registry_config()

    assert config.token is None
    assert config.resilience.default_headers is not None
    assert "Authorization" not in config.resilience.default_headers


def test_storage_config_uses_data_dir_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("IMAGETRIGGER_DATA_DIR", str(tmp_path / "data"))

    config = get_storage_config()

    assert config.data_dir == tmp_path / "data"
    assert config.database_path() == (tmp_path / "data" / "imagetrigger.db").resolve()
    assert (tmp_path / "data").is_dir()


def test_database_config_prefers_uri_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite+pysqlite:///:memory:")

    assert get_database_config().uri == "sqlite+pysqlite:///:memory:"


def test_database_config_falls_back_to_storage(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    monkeypatch.delenv("DATABASE_URI", raising=False)

    config = get_database_config(storage=StorageConfig(data_dir=tmp_path))

    assert config.uri == f"sqlite+pysqlite:///{(tmp_path / 'imagetrigger.db').resolve()}"


@pytest.mark.parametrize("url", ["registry.test", "ftp://registry.test", "https://"])
def test_registry_config_rejects_non_http_urls(monkeypatch: pytest.MonkeyPatch, url: str) -> None:
    monkeypatch.setenv("IMAGETRIGGER_REGISTRY_URL", url)

    with pytest.raises(InvalidConfigurationError) as exc:
        get_registry_config()

    assert exc.value.name == "IMAGETRIGGER_REGISTRY_URL"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1", True), ("TRUE", True), ("no", False), ("", False)],
)
def test_database_config_reads_sql_echo(
    monkeypatch: pytest.MonkeyPatch,
    raw: str,
    expected: bool,  # noqa: FBT001
) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite+pysqlite:///:memory:")
    monkeypatch.setenv("IMAGETRIGGER_SQL_ECHO", raw)

    assert get_database_config().echo is expected


def test_configure_logging_quiets_http_client_logs() -> None:
    configure_logging(level=logging.INFO)
    assert logging.getLogger("httpx").level == logging.WARNING

    configure_logging(level=logging.DEBUG)
    assert logging.getLogger("httpx").level == logging.DEBUG
    logging.getLogger("httpx").setLevel(logging.NOTSET)
    logging.getLogger("httpcore").setLevel(logging.NOTSET)
