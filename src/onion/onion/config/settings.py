# ABOUTME: Main configuration composition for the onion core.
# ABOUTME: Assembles environment settings and the explicit ApplicationConfig.

from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ._base import BaseOnionSettings


class OnionSettings(BaseOnionSettings):
    """Represents the complete, composed environment configuration.

    This class is the final aggregator for settings read from the environment.
    It is designed to be extended through inheritance with other settings
    classes when an embedding application needs more of them.

    The `get_settings` function provides a singleton instance of this class.
    """

    pass


@lru_cache
def get_settings() -> OnionSettings:
    """Provides a singleton instance of the environment settings.

    The cache guarantees the environment and `.env` file are read only once.

    Returns:
        A single, cached instance of OnionSettings.
    """
    return OnionSettings()


class ApplicationConfig(BaseModel):
    """Explicit configuration handed to an `Application`.

    Nothing in here reads the process environment; use `from_settings` to
    build one from `OnionSettings`. Defaults:

    - environment: "development"
    - output_errors: derived, False only when environment is "test"
    - powered_by: True
    - json_spaces: 2
    - subdomain_offset: 2
    """

    environment: str = Field(default="development", description="Runtime environment name")
    output_errors: bool | None = Field(default=None, description="Whether uncaught errors are reported")
    powered_by: bool = Field(default=True, description="Whether to send X-Powered-By")
    json_spaces: int = Field(default=2, ge=0, description="JSON indent width")
    subdomain_offset: int = Field(default=2, ge=0, description="Trailing host labels ignored by subdomains")

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def derive_output_errors(self) -> "ApplicationConfig":
        if self.output_errors is None:
            object.__setattr__(self, "output_errors", self.environment != "test")
        return self

    @classmethod
    def from_settings(cls, settings: BaseOnionSettings | None = None) -> "ApplicationConfig":
        """Build a config from environment settings (the cached singleton by default)."""
        settings = settings if settings is not None else get_settings()
        return cls(
            environment=settings.ENV,
            output_errors=settings.OUTPUT_ERRORS,
            powered_by=settings.POWERED_BY,
            json_spaces=settings.JSON_SPACES,
            subdomain_offset=settings.SUBDOMAIN_OFFSET,
        )
