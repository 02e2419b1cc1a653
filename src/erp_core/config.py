"""
Runtime configuration.

Settings are loaded with pydantic-settings: every field can be overridden by
an ``ERP_``-prefixed environment variable (``ERP_JWT_SECRET``,
``ERP_AUTH_TIMEOUT`` ...). Empty variables are treated as unset.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError


ENV_PREFIX = "ERP_"

DEFAULT_TOKEN_FILE = Path.home() / ".erp_core_token"
DEFAULT_JWT_ALGORITHM = "HS256"
DEFAULT_TOKEN_TTL_MINUTES = 12 * 60  # one working day
DEFAULT_AUTH_TIMEOUT = 10.0
DEFAULT_CONNECTIVITY_TIMEOUT = 5.0
DEFAULT_COMPANY_NAME = "BOTEZINI"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        token_file: Where the session credential is persisted
        jwt_secret: Secret used to sign session tokens (None disables token auth)
        jwt_algorithm: JWT signing algorithm
        token_ttl_minutes: Lifetime of an issued session token
        backend_url: Health endpoint of the hosted backend (None skips the check)
        auth_timeout: Seconds to wait for the auth collaborator
        connectivity_timeout: Seconds to wait for the connectivity check
        company_profile: JSON file holding the company profile
        company_name: Name shown when no company profile is available
        log_level: loguru level for the stderr sink
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_ignore_empty=True,
        extra="ignore",
    )

    token_file: Path = DEFAULT_TOKEN_FILE
    jwt_secret: Optional[str] = None
    jwt_algorithm: str = DEFAULT_JWT_ALGORITHM
    token_ttl_minutes: int = Field(default=DEFAULT_TOKEN_TTL_MINUTES, gt=0)
    backend_url: Optional[str] = None
    auth_timeout: float = Field(default=DEFAULT_AUTH_TIMEOUT, gt=0)
    connectivity_timeout: float = Field(default=DEFAULT_CONNECTIVITY_TIMEOUT, gt=0)
    company_profile: Optional[Path] = None
    company_name: str = DEFAULT_COMPANY_NAME
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Load settings, reporting invalid variables as a configuration error.

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        try:
            return cls()
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e
