"""Client configuration and environment host resolution."""

import os
from dataclasses import dataclass
from enum import Enum

from mpesa_daraja.errors import ConfigError

SANDBOX_BASE = "https://sandbox.safaricom.co.ke"
PRODUCTION_BASE = "https://api.safaricom.co.ke"


class Environment(str, Enum):
    SANDBOX = "sandbox"
    PRODUCTION = "production"

    @classmethod
    def parse(cls, value):
        """Return the Environment for ``value`` or raise ConfigError.

        Matching is exact, the same rule ``base_url_for`` applies.
        """
        if isinstance(value, cls):
            return value
        for env in cls:
            if env.value == value:
                return env
        raise ConfigError(
            f"environment must be 'sandbox' or 'production', got {value!r}"
        )

    @property
    def is_production(self) -> bool:
        return self is Environment.PRODUCTION


def base_url_for(environment) -> str:
    """Return the host base for an environment.

    Only ``sandbox`` selects the sandbox host; any other value, including
    unrecognized strings, resolves to production.
    """
    if isinstance(environment, Environment):
        environment = environment.value
    if environment == Environment.SANDBOX.value:
        return SANDBOX_BASE
    return PRODUCTION_BASE


@dataclass(frozen=True)
class ClientConfig:
    """API key/secret pair plus the target environment."""

    consumer_key: str
    consumer_secret: str
    environment: Environment = Environment.SANDBOX

    def __post_init__(self):
        if not self.consumer_key or not self.consumer_secret:
            raise ConfigError("consumer_key and consumer_secret are required")
        # frozen dataclass: bypass __setattr__ to store the parsed value
        object.__setattr__(self, "environment", Environment.parse(self.environment))

    @property
    def base_url(self) -> str:
        return base_url_for(self.environment)

    @property
    def is_production(self) -> bool:
        return self.environment.is_production

    def __repr__(self):
        return (f"ClientConfig(consumer_key={self.consumer_key[:4]}..., "
                f"environment={self.environment.value})")

    @classmethod
    def from_env(cls, environ=None):
        """Build a config from MPESA_* environment variables.

        Reads MPESA_CONSUMER_KEY, MPESA_CONSUMER_SECRET and
        MPESA_ENVIRONMENT (defaults to sandbox).
        """
        environ = os.environ if environ is None else environ
        key = environ.get("MPESA_CONSUMER_KEY", "")
        secret = environ.get("MPESA_CONSUMER_SECRET", "")
        if not key or not secret:
            raise ConfigError("MPESA_CONSUMER_KEY and MPESA_CONSUMER_SECRET must be set")
        return cls(key, secret, environ.get("MPESA_ENVIRONMENT", "sandbox"))
