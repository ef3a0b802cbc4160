"""Configuration management for Stylecraft.

Configuration is loaded with Pydantic Settings from environment variables
with the ``STYLECRAFT_`` prefix, falling back to a ``.env`` file in the
working directory and then to the defaults defined below.

The provider credential is the one required value.  It is read from
``FAL_KEY`` (the name the fal.ai tooling uses) or ``STYLECRAFT_FAL_KEY``.
Without it the application refuses to start.

Example .env file:
    FAL_KEY=your-fal-key
    STYLECRAFT_PROVIDER_MODEL=fal-ai/fast-sdxl
    STYLECRAFT_SERVER_PORT=5000
    STYLECRAFT_LOG_LEVEL=DEBUG

Unlike a module-level settings singleton, configuration is loaded explicitly
through :func:`load_config` when the application is built, so importing the
package never requires credentials.

Usage Example
-------------
    from stylecraft.core.config import load_config

    config = load_config()
    print(config.provider_model)
"""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, Field, SecretStr
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from stylecraft.core.errors import ConfigError


class StylecraftConfig(BaseSettings):
    """Main configuration for Stylecraft.

    Attributes
    ----------
    Provider Settings:
        fal_key : SecretStr
            fal.ai API credential (required)
        provider_base_url : str
            Base URL of the synchronous fal.ai endpoint
        provider_model : str
            Model application path appended to the base URL
        provider_timeout : float | None
            Seconds to wait for the provider; ``None`` waits indefinitely

    Generation Settings:
        image_size : str
            Provider image size preset (``square_hd`` is 1024x1024)
        num_inference_steps : int
            Diffusion steps requested from the provider
        guidance_scale : float
            Classifier-free guidance scale requested from the provider
        default_width : int
            Width recorded when the provider does not report one
        default_height : int
            Height recorded when the provider does not report one

    Server Settings:
        server_host : str
            Bind address for uvicorn
        server_port : int
            Port for uvicorn (1024-65535)
        log_level : str
            Root logging level
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="STYLECRAFT_",
        case_sensitive=False,
        extra="ignore",
    )

    # Provider settings
    fal_key: SecretStr = Field(
        ...,
        validation_alias=AliasChoices("fal_key", "FAL_KEY", "STYLECRAFT_FAL_KEY"),
        description="fal.ai API credential",
    )
    provider_base_url: str = Field(
        default="https://fal.run",
        description="Base URL of the synchronous fal.ai endpoint",
    )
    provider_model: str = Field(
        default="fal-ai/fast-sdxl",
        description="fal.ai model application to invoke",
    )
    provider_timeout: float | None = Field(
        default=None,
        description="Provider request timeout in seconds (None = no timeout)",
        gt=0,
    )

    # Generation settings
    image_size: str = Field(
        default="square_hd",
        description="Provider image size preset",
    )
    num_inference_steps: int = Field(
        default=30,
        description="Number of inference steps requested from the provider",
        ge=1,
        le=100,
    )
    guidance_scale: float = Field(
        default=7.5,
        description="Guidance scale requested from the provider",
        ge=0.0,
        le=20.0,
    )
    default_width: int = Field(default=1024, ge=1)
    default_height: int = Field(default=1024, ge=1)

    # Server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address",
    )
    server_port: int = Field(
        default=5000,
        description="Server port",
        ge=1024,
        le=65535,
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )


def load_config(**overrides) -> StylecraftConfig:
    """Load configuration from the environment, ``.env``, and ``overrides``.

    Args:
        **overrides: Field values that take precedence over the environment.

    Returns:
        A validated :class:`StylecraftConfig`.

    Raises:
        ConfigError: If a required setting is missing or a value is invalid.
    """
    try:
        return StylecraftConfig(**overrides)
    except PydanticValidationError as e:
        fields = [".".join(str(loc) for loc in err["loc"]) for err in e.errors()]
        missing = [f for f, err in zip(fields, e.errors()) if err["type"] == "missing"]
        if missing:
            message = "Missing required configuration: " + ", ".join(
                "FAL_KEY" if f == "fal_key" else f for f in missing
            )
        else:
            message = "Invalid configuration: " + ", ".join(fields)
        raise ConfigError(message, missing=missing) from e
