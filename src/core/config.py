"""
Application settings.

Values come from the environment (or a .env file in the working directory)
and are validated once at import. Import the module-level ``settings``
instance; never read os.environ directly.
"""

from typing import Literal

from pydantic import Field, PostgresDsn, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Stock Tracker configuration.

    Only JWT_SECRET and DATABASE_URL are required; see .env.example.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Application -----------------------------------------------------------
    app_name: str = "Stock Tracker"
    version: str = "0.1.0"
    description: str = "Household grocery stock tracker with account sharing"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False

    # --- Server (used by `stock-tracker` / src.main:run) -----------------------
    host: str = "0.0.0.0"
    port: int = Field(default=3100, ge=1, le=65535)
    reload: bool = False

    # --- Auth service ----------------------------------------------------------
    # Tokens are issued elsewhere; this service only verifies them.
    jwt_secret: SecretStr
    jwt_algorithm: str = "HS256"
    auth_cookie_name: str = "auth_token"
    auth_service_url: str = "https://auth.nicefox.net"

    # --- Database --------------------------------------------------------------
    database_url: PostgresDsn
    db_pool_size: int = Field(default=5, ge=1, le=50)
    db_max_overflow: int = Field(default=10, ge=0, le=100)
    db_pool_recycle: int = Field(default=3600, ge=300)  # seconds
    db_pool_timeout: int = Field(default=30, ge=1)  # seconds
    db_pool_pre_ping: bool = True

    # --- CORS ------------------------------------------------------------------
    # Comma-separated frontend origins
    cors_origins: str = "http://localhost:5173"
    cors_allow_credentials: bool = True

    # --- Rate limiting ---------------------------------------------------------
    rate_limit_enabled: bool = True
    # memory:// counts per process; use redis://host:6379 with several workers
    rate_limit_storage_uri: str = "memory://"
    rate_limit_share_request: str = "10/hour"

    # --- Logging ---------------------------------------------------------------
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "console"
    log_file_enabled: bool = True
    log_file_path: str = "logs/app.log"
    log_file_max_bytes: int = 10 * 1024 * 1024
    log_file_backup_count: int = 5

    @field_validator("jwt_secret")
    @classmethod
    def check_jwt_secret_length(cls, value: SecretStr) -> SecretStr:
        if len(value.get_secret_value()) < 32:
            raise ValueError("JWT_SECRET must be at least 32 characters")
        return value

    @field_validator("database_url", mode="before")
    @classmethod
    def use_asyncpg_driver(cls, value: object) -> object:
        """Accept plain postgres:// and postgresql:// URLs and switch them to asyncpg."""
        if isinstance(value, str):
            for prefix in ("postgres://", "postgresql://"):
                if value.startswith(prefix):
                    return "postgresql+asyncpg://" + value[len(prefix):]
        return value

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def database_url_str(self) -> str:
        return str(self.database_url)

    @property
    def jwt_secret_value(self) -> str:
        return self.jwt_secret.get_secret_value()


settings = Settings()
