"""Configuration management using pydantic-settings."""

from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from headerscope.core.errors import ConfigurationError


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="HEADERSCOPE_",
        extra="ignore",
    )

    # CPI tenant API
    api_base_url: Annotated[
        str,
        Field(description="Base URL of the Cloud Integration tenant API"),
    ] = ""

    token_url: Annotated[
        str,
        Field(description="OAuth2 token endpoint"),
    ] = ""

    client_id: Annotated[
        str,
        Field(description="OAuth2 client id"),
    ] = ""

    client_secret: Annotated[
        SecretStr,
        Field(description="OAuth2 client secret"),
    ] = SecretStr("")

    request_timeout: Annotated[
        float,
        Field(gt=0, description="Artifact download timeout in seconds"),
    ] = 30.0

    token_timeout: Annotated[
        float,
        Field(gt=0, description="Token request timeout in seconds"),
    ] = 15.0

    token_expiry_margin: Annotated[
        int,
        Field(ge=0, description="Refresh cached tokens this many seconds before expiry"),
    ] = 60

    # Extraction
    max_workers: Annotated[
        int,
        Field(ge=1, le=64, description="Threads used to extract call activities"),
    ] = 1

    mark_unparseable_tables: Annotated[
        bool,
        Field(description="Emit a marker record for header tables that fail to parse"),
    ] = False

    # Output
    output_dir: Annotated[
        Path,
        Field(description="Default output directory"),
    ] = Path("output")

    output_file_name: Annotated[
        str,
        Field(description="Excel report file name"),
    ] = "CPI_Headers_Extract.xlsx"

    # HTTP API
    api_host: Annotated[
        str,
        Field(description="Host the HTTP API binds to"),
    ] = "127.0.0.1"

    api_port: Annotated[
        int,
        Field(ge=1, le=65535, description="Port the HTTP API listens on"),
    ] = 3000

    # Logging Configuration
    log_level: Annotated[
        str,
        Field(description="Logging level"),
    ] = "INFO"

    log_file: Annotated[
        Path | None,
        Field(description="Log file path (None for stdout only)"),
    ] = None

    @property
    def output_file(self) -> Path:
        """Full path of the Excel report."""
        return self.output_dir / self.output_file_name

    @property
    def missing_remote_settings(self) -> list[str]:
        """Environment variable names of unset remote settings."""
        values = {
            "api_base_url": self.api_base_url,
            "token_url": self.token_url,
            "client_id": self.client_id,
            "client_secret": self.client_secret.get_secret_value(),
        }
        return [f"HEADERSCOPE_{name.upper()}" for name, value in values.items() if not value]

    @property
    def has_remote_credentials(self) -> bool:
        """Check if everything needed to reach the tenant is configured."""
        return not self.missing_remote_settings

    def require_remote(self) -> None:
        """Ensure remote settings are present.

        Raises:
            ConfigurationError: Naming every missing environment variable.
        """
        missing = self.missing_remote_settings
        if missing:
            raise ConfigurationError(
                f"Missing required environment variable(s): {', '.join(missing)}"
            )


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
