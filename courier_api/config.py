"""
Application configuration using Pydantic Settings.

The service reads exactly five environment variables and exposes them as
named fields of a single immutable record:

    PORT            -> port
    NODE_ENV        -> environment
    DATABASE_URL    -> database_url
    JWT_SECRET      -> jwt_secret
    JWT_EXPIRES_IN  -> jwt_expiry

Values are passed through exactly as the environment provides them. There is
no validation and there are no defaults: a missing variable simply becomes
None, and loading never fails. Anything that needs a typed value (the listen
port, the token lifetime) parses it at the point of use.

Pydantic Settings resolves each field from:
  1. Environment variables (highest priority)
  2. A local .env file, if one exists

Usage:
    from courier_api.config import load_settings

    settings = load_settings()
    app = create_app(settings)

There is deliberately no module-level `settings` instance. The record is built
once by the entry point and passed to whatever needs it.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_ENV_FILE = ".env"


class Settings(BaseSettings):
    """
    Process-wide configuration record, read-only after construction.

    Field names are Pythonic; the validation aliases pin the exact
    environment variable names, so `NODE_ENV` must be spelled exactly that way.
    """

    model_config = SettingsConfigDict(
        env_file=DEFAULT_ENV_FILE,
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        frozen=True,
    )

    # --- Server ---
    # Raw string on purpose; see listen_port()
    port: str | None = Field(default=None, validation_alias="PORT")
    environment: str | None = Field(default=None, validation_alias="NODE_ENV")

    # --- Database ---
    database_url: str | None = Field(default=None, validation_alias="DATABASE_URL")

    # --- Authentication ---
    jwt_secret: str | None = Field(default=None, validation_alias="JWT_SECRET")
    jwt_expiry: str | None = Field(default=None, validation_alias="JWT_EXPIRES_IN")

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    def listen_port(self, default: int = 3000) -> int:
        """
        Parse the raw PORT value for the server entry point.

        Falls back to `default` when PORT is unset or not a number.
        """
        if self.port is None:
            return default
        try:
            return int(self.port)
        except ValueError:
            return default


def load_settings(env_file: str | None = DEFAULT_ENV_FILE) -> Settings:
    """
    Build the configuration record from the current process environment.

    Args:
        env_file: Path of the .env file to read as a fallback source.
                  Pass None to read only the real environment.

    Returns:
        A frozen Settings instance. Never raises for missing variables.
    """
    return Settings(_env_file=env_file)
