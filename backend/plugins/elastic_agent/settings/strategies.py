"""Authentication strategies the plugin can use to talk to the cluster."""

from enum import Enum


class UnsupportedAuthenticationStrategyError(ValueError):
    """Raised when a raw value does not name a known authentication strategy."""

    def __init__(self, raw_value: str):
        self.raw_value = raw_value
        valid_values = ", ".join(strategy.name for strategy in AuthenticationStrategy)
        super().__init__(
            f"Invalid authentication strategy '{raw_value}'. "
            f"Valid values are: {valid_values}."
        )


class AuthenticationStrategy(Enum):
    OAUTH_TOKEN = "OAUTH_TOKEN"
    CLUSTER_CERTS = "CLUSTER_CERTS"

    @classmethod
    def parse(cls, raw_value: str) -> "AuthenticationStrategy":
        """
        Parse a submitted setting value, ignoring case and surrounding whitespace.

        Raises:
            UnsupportedAuthenticationStrategyError: If the value is not a known strategy.
        """
        try:
            return cls[raw_value.strip().upper()]
        except KeyError:
            raise UnsupportedAuthenticationStrategyError(raw_value) from None
