"""Configuration loading from defaults, ``.env`` files and the environment."""

from __future__ import annotations

import dataclasses

import pytest

from chatbridge.config import CompletionPolicy, GatewayConfig, load_config
from chatbridge.config.defaults import DEFAULT_MODEL, DEFAULT_MODELS
from chatbridge.config.env import parse_csv, parse_port, parse_positive_float, read_dotenv


@pytest.fixture()
def no_dotenv(tmp_path):
    return {"DOTENV_FILE": str(tmp_path / "missing.env")}


def test_defaults_without_any_source(no_dotenv):
    config = load_config(no_dotenv)
    assert config.host == "0.0.0.0"  # nosec B101
    assert config.port == 3000  # nosec B101
    assert config.shared_secret == "1"  # nosec B101
    assert config.models == DEFAULT_MODELS  # nosec B101
    assert config.default_model == DEFAULT_MODEL  # nosec B101
    assert config.completion_policy is CompletionPolicy.REPLACE  # nosec B101
    assert config.upstream_timeout_seconds is None  # nosec B101
    assert config.upstream_referer.endswith("/chat")  # nosec B101


def test_environment_overrides(no_dotenv):
    env = dict(
        no_dotenv,
        PORT="8080",
        API_MASTER_KEY="sk-env",
        MODELS=" a/one, b/two,,c/three ",
        DEFAULT_MODEL="b/two",
        COMPLETION_POLICY="APPEND",
        UPSTREAM_TIMEOUT_SECONDS="2.5",
        UPSTREAM_ORIGIN="https://example.test/",
    )
    config = load_config(env)
    assert config.port == 8080  # nosec B101
    assert config.shared_secret == "sk-env"  # nosec B101
    assert config.models == ("a/one", "b/two", "c/three")  # nosec B101
    assert config.default_model == "b/two"  # nosec B101
    assert config.completion_policy is CompletionPolicy.APPEND  # nosec B101
    assert config.upstream_timeout_seconds == 2.5  # nosec B101
    assert config.upstream_referer == "https://example.test/chat"  # nosec B101


def test_dotenv_file_is_read_and_environment_wins(tmp_path):
    path = tmp_path / ".env"
    path.write_text(
        "# gateway settings\n"
        'export API_MASTER_KEY="from-file"\n'
        "PORT='4000'\n"
        "MODELS_OWNED_BY=file-owner\n"
        "not a pair\n",
        encoding="utf-8",
    )
    config = load_config({"DOTENV_FILE": str(path), "PORT": "5000"})
    assert config.shared_secret == "from-file"  # nosec B101
    assert config.port == 5000  # nosec B101
    assert config.owned_by == "file-owner"  # nosec B101


def test_unknown_completion_policy_is_rejected(no_dotenv):
    with pytest.raises(ValueError):
        load_config(dict(no_dotenv, COMPLETION_POLICY="merge"))


def test_config_is_immutable(no_dotenv):
    config = load_config(no_dotenv)
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.port = 1  # type: ignore[misc]


def test_gateway_config_defaults_match_loader(no_dotenv):
    assert GatewayConfig() == load_config(no_dotenv)  # nosec B101


@pytest.mark.parametrize(
    "raw,expected",
    [(None, 3000), ("", 3000), ("abc", 3000), ("0", 3000), ("70000", 3000), ("8081", 8081)],
)
def test_parse_port(raw, expected):
    assert parse_port(raw, 3000) == expected  # nosec B101


@pytest.mark.parametrize(
    "raw,expected",
    [(None, None), ("x", None), ("-1", None), ("0", None), ("1.5", 1.5)],
)
def test_parse_positive_float(raw, expected):
    assert parse_positive_float(raw, None) == expected  # nosec B101


def test_parse_csv_falls_back_when_blank():
    assert parse_csv(" , ,", ("d",)) == ("d",)  # nosec B101
    assert parse_csv(None, ("d",)) == ("d",)  # nosec B101


def test_read_dotenv_missing_file(tmp_path):
    assert read_dotenv(str(tmp_path / "nope")) == {}  # nosec B101
