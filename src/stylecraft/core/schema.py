"""Shared request, response, and record models.

These pydantic models are the single schema used by the record store, the
generation service, and the HTTP layer.  FastAPI uses them for request
validation and response serialisation.

JSON keys are camelCase (``imageUrl``) to match what the browser sends and
expects; Python attributes stay snake_case.  Both spellings are accepted on
input.

Models
------
User / InsertUser
    User accounts.  Stored but not exposed over HTTP.
Generation / InsertGeneration / GenerationMetadata
    The persisted result of one successful image generation.
GenerateRequest
    Payload for ``POST /api/generate``.
ErrorResponse
    Body of every 400/500 response from ``POST /api/generate``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictStr
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    """Base model that serialises field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InsertUser(_CamelModel):
    """Fields needed to create a :class:`User`."""

    username: str
    password: str


class User(_CamelModel):
    """A stored user account.  Never mutated after creation."""

    model_config = ConfigDict(frozen=True)

    id: int
    username: str
    password: str


class GenerationMetadata(_CamelModel):
    """Pixel dimensions of a generated image."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)


class InsertGeneration(_CamelModel):
    """Fields needed to create a :class:`Generation`.

    Attributes:
        prompt: The prompt as the user typed it (not the styled prompt sent
            to the provider).
        style: The style preset the user selected.
        image_url: URL of the image returned by the provider.
        metadata: Image dimensions.
    """

    prompt: str = Field(..., min_length=1)
    style: str = Field(..., min_length=1)
    image_url: str
    metadata: GenerationMetadata


class Generation(_CamelModel):
    """A stored generation record.  Immutable once created.

    Fields are declared in the order they appear in JSON responses, with
    ``id`` first.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    prompt: str = Field(..., min_length=1)
    style: str = Field(..., min_length=1)
    image_url: str
    metadata: GenerationMetadata


class GenerateRequest(_CamelModel):
    """Request body for the ``POST /api/generate`` endpoint.

    Attributes:
        prompt: Free-text description of the image.  Must be non-empty.
        style: Style preset value (e.g. ``"default"``, ``"watercolor"``).
            Unknown styles are allowed and fall back to a generic suffix.
    """

    prompt: StrictStr = Field(
        ...,
        min_length=1,
        description="Text description of the image to generate.",
    )
    style: StrictStr = Field(
        ...,
        min_length=1,
        description="Style preset, or 'default' to use the prompt unchanged.",
    )


class ErrorResponse(BaseModel):
    """Body returned for failed generation requests.

    Attributes:
        message: Short summary (``"Invalid request data"`` or
            ``"Failed to generate image"``).
        error: Diagnostic detail from the underlying failure, if any.
    """

    message: str
    error: str | None = None
