"""Error types for the Stylecraft application.

Each failure the application can surface has its own exception class so the
request boundary can map it to a response without inspecting messages:

- :class:`ValidationError` - client input did not match the request schema.
  Mapped to HTTP 400 and never retried.
- :class:`ProviderError` - the image-generation provider failed, rejected
  the prompt, or returned no image.  Mapped to HTTP 500; the message is
  passed through for display.
- :class:`ConfigError` - required process configuration (the provider
  credential) is missing or invalid.  Fatal at startup.
"""

from __future__ import annotations

from typing import Any


class StylecraftError(Exception):
    """Base class for all application errors."""


class ValidationError(StylecraftError):
    """Client input failed schema validation.

    Attributes:
        errors: Structured validation errors, one dictionary per failing
            field (the shape produced by pydantic's ``errors()``).
    """

    def __init__(self, message: str = "Invalid request data", errors: list[dict] | None = None):
        super().__init__(message)
        self.message = message
        self.errors: list[dict[str, Any]] = errors or []


class ProviderError(StylecraftError):
    """The external image-generation provider call failed.

    Attributes:
        message: Human-readable diagnostic, safe to show to the user.
        status_code: HTTP status returned by the provider, if any.
        code: Provider-specific error code (e.g. ``content_policy_violation``).
    """

    def __init__(self, message: str, *, status_code: int | None = None, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code


class ConfigError(StylecraftError):
    """Process configuration is missing or invalid.

    Attributes:
        missing: Names of the settings that failed to load.
    """

    def __init__(self, message: str, *, missing: list[str] | None = None):
        super().__init__(message)
        self.message = message
        self.missing = missing or []
