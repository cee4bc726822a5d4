"""
Application configuration using Pydantic Settings.

Loads configuration from BUILDLENS_* environment variables and .env file.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_prefix="BUILDLENS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="buildlens", description="Application name")
    app_env: str = Field(default="development", description="Environment (development/production)")
    log_level: str = Field(default="WARNING", description="Logging level")
    log_json: bool = Field(default=False, description="Force JSON log output")

    # Module classification
    manifest_marker: str = Field(
        default="src/main/AndroidManifest.xml",
        description="File whose presence under a module directory marks an Android module",
    )

    # Variant selection
    fallback_variant_name: str = Field(
        default="debug",
        description="Reference variant used when the project has no application module",
    )

    # Resolution
    module_concurrency: int = Field(
        default=4,
        description="Maximum number of modules resolved at the same time",
    )
    resolve_generic_modules: bool = Field(
        default=False,
        description="Fetch source roots and dependencies for non-Android modules",
    )
    include_runtime_classpath: bool = Field(
        default=True,
        description="Add runtime classpath edges as RUNTIME dependencies",
    )
    include_test_classpath: bool = Field(
        default=True,
        description="Add unit test classpath edges as TEST dependencies",
    )

    # Model server (HTTP transport)
    model_server_url: str | None = Field(default=None, description="Base URL of the model server")
    model_server_timeout: float = Field(default=120.0, description="Model server request timeout in seconds")

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env.lower() == "development"

    @field_validator("module_concurrency")
    @classmethod
    def _validate_concurrency(cls, value: int) -> int:
        """Module concurrency must be at least one."""
        if value < 1:
            raise ValueError("BUILDLENS_MODULE_CONCURRENCY must be at least 1")
        return value


# Global settings instance
settings = Settings()
