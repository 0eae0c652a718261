import pytest

from mpesa_daraja.config import (
    PRODUCTION_BASE,
    SANDBOX_BASE,
    ClientConfig,
    Environment,
    base_url_for,
)
from mpesa_daraja.errors import ConfigError


def test_sandbox_selects_sandbox_host():
    assert base_url_for("sandbox") == SANDBOX_BASE
    assert base_url_for(Environment.SANDBOX) == SANDBOX_BASE


@pytest.mark.parametrize("value", ["production", Environment.PRODUCTION, "staging", "Sandbox", ""])
def test_everything_else_selects_production_host(value):
    assert base_url_for(value) == PRODUCTION_BASE


def test_parse_exact_values():
    assert Environment.parse("production") is Environment.PRODUCTION
    assert Environment.parse("sandbox") is Environment.SANDBOX


@pytest.mark.parametrize("value", ["staging", "", None, "prod", "Sandbox", "SANDBOX", " sandbox "])
def test_parse_rejects_unknown_environments(value):
    with pytest.raises(ConfigError):
        Environment.parse(value)


def test_config_is_immutable():
    config = ClientConfig("key", "secret", "production")
    assert config.environment is Environment.PRODUCTION
    assert config.is_production
    with pytest.raises(AttributeError):
        config.environment = Environment.SANDBOX


def test_config_requires_credentials():
    with pytest.raises(ConfigError):
        ClientConfig("", "secret")


def test_repr_hides_secret():
    assert "topsecret" not in repr(ClientConfig("abcdefgh", "topsecret"))


def test_from_env():
    config = ClientConfig.from_env({
        "MPESA_CONSUMER_KEY": "k",
        "MPESA_CONSUMER_SECRET": "s",
        "MPESA_ENVIRONMENT": "production",
    })
    assert config.base_url == PRODUCTION_BASE


def test_from_env_defaults_to_sandbox():
    config = ClientConfig.from_env({"MPESA_CONSUMER_KEY": "k", "MPESA_CONSUMER_SECRET": "s"})
    assert config.environment is Environment.SANDBOX


def test_from_env_missing_values():
    with pytest.raises(ConfigError):
        ClientConfig.from_env({"MPESA_CONSUMER_KEY": "k"})
