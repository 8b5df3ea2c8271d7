# ABOUTME: Base configuration classes for the onion core
# ABOUTME: Provides environment-driven settings and their validation logic

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseOnionSettings(BaseSettings):
    """Defines the foundational configuration loaded from the process environment.

    This class is the only place where environment variables and `.env` files
    are read for the application. It leverages `pydantic-settings` so that
    deployments can tune the application without code changes. The values are
    turned into an explicit `ApplicationConfig` which is what the `Application`
    actually consumes. Logging has its own settings in `onion.config.logging`.

    Attributes:
        ENV: The runtime environment. The "test" environment silences error output.
        OUTPUT_ERRORS: Explicit override for error reporting. Derived from ENV when unset.
        POWERED_BY: Whether responses carry the informational X-Powered-By header.
        JSON_SPACES: Indent width used when encoding structured bodies as JSON.
        SUBDOMAIN_OFFSET: Number of trailing host labels ignored by Context.subdomains.
        model_config: Pydantic's configuration dictionary, specifying how settings are loaded.
    """

    # Environment Configuration
    ENV: Literal["development", "test", "staging", "production"] = Field(
        default="development",
        description="The application's runtime environment. 'test' disables error output.",
    )

    # Response Configuration
    OUTPUT_ERRORS: bool | None = Field(
        default=None,
        description="Whether uncaught errors are reported. Defaults to ENV != 'test'.",
    )
    POWERED_BY: bool = Field(
        default=True,
        description="Whether responses carry the X-Powered-By header.",
    )
    JSON_SPACES: int = Field(
        default=2,
        ge=0,
        description="Indent width for JSON encoded bodies. 0 produces compact output.",
    )
    SUBDOMAIN_OFFSET: int = Field(
        default=2,
        ge=0,
        description="Number of trailing host labels that are not subdomains.",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("ENV", mode="before")
    @classmethod
    def validate_env_case_insensitive(cls, v: str) -> str:
        """Validate ENV field with case-insensitive mapping.

        Accepts common environment aliases and normalizes them:
        - dev, develop -> development
        - prod -> production
        - stage -> staging
        - testing -> test
        """
        if isinstance(v, str):
            v_lower = v.lower().strip()
            env_mapping = {
                "dev": "development",
                "develop": "development",
                "development": "development",
                "test": "test",
                "testing": "test",
                "stage": "staging",
                "staging": "staging",
                "prod": "production",
                "production": "production",
            }
            return env_mapping.get(v_lower, v_lower)
        return v
