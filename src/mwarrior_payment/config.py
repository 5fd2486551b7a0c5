"""Configuration management for the Merchant Warrior server-to-server payment type."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SANDBOX_ENDPOINT = "https://base.merchantwarrior.com/post/"
PRODUCTION_ENDPOINT = "https://api.merchantwarrior.com/post/"


class GatewaySettings(BaseSettings):
    """Merchant Warrior gateway settings."""

    test_mode: bool = Field(default=True, description="Use the sandbox endpoint")
    merchant_uuid: str = Field(default="", description="Merchant UUID")
    api_key: str = Field(default="", description="Merchant API key")
    passphrase: str = Field(default="", description="Merchant API pass phrase")
    order_status: str | None = Field(
        default=None,
        description="Order status assigned after a successful payment",
    )
    transaction_currency: str = Field(
        default="aud",
        description="ISO 4217 currency code sent with every transaction",
    )
    connect_timeout_seconds: float = Field(default=30.0, description="Connection timeout")
    timeout_seconds: float = Field(
        default=3600.0,
        description="Upper bound for reading, writing and waiting on the gateway",
    )
    verify_tls: bool = Field(default=True, description="Verify the gateway's TLS certificate")
    ca_bundle: str | None = Field(default=None, description="Path to a custom CA bundle")

    model_config = SettingsConfigDict(env_prefix="GATEWAY_", case_sensitive=False)

    @field_validator("merchant_uuid", "api_key", "passphrase", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @field_validator("transaction_currency")
    @classmethod
    def _normalize_currency(cls, value: str) -> str:
        return value.strip().lower()

    @property
    def endpoint(self) -> str:
        """Gateway endpoint selected by the sandbox flag."""
        return SANDBOX_ENDPOINT if self.test_mode else PRODUCTION_ENDPOINT


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    environment: str = Field(default="development", description="Environment name")
    log_level: str = Field(default="INFO", description="Logging level")
    log_json: bool = Field(default=True, description="Render logs as JSON")

    # Gateway
    gateway: GatewaySettings = Field(default_factory=GatewaySettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
    )


# Global settings instance
settings = Settings()
