"""Image generation orchestration.

:class:`GenerationService` turns a validated :class:`GenerateRequest` into a
stored :class:`Generation`:

1. Compose the styled prompt with :func:`compose_prompt`.
2. Call the provider with the fixed generation parameters from config.
3. Persist a record holding the user's *original* prompt, the style, the
   returned URL, and the image dimensions.

A record is written only after the provider call succeeds, so a failed
attempt leaves the store untouched.
"""

from __future__ import annotations

import logging

from stylecraft.core.config import StylecraftConfig
from stylecraft.core.errors import ProviderError, ValidationError
from stylecraft.core.provider import ImageProvider
from stylecraft.core.schema import (
    GenerateRequest,
    Generation,
    GenerationMetadata,
    InsertGeneration,
)
from stylecraft.core.store import RecordStore
from stylecraft.core.styles import compose_prompt

logger = logging.getLogger(__name__)


class GenerationService:
    """Generate images through a provider and record the results.

    Args:
        store: Where successful generations are persisted.
        provider: Image-generation backend.
        config: Supplies the fixed generation parameters and the fallback
            image dimensions.
    """

    def __init__(self, store: RecordStore, provider: ImageProvider, config: StylecraftConfig):
        self._store = store
        self._provider = provider
        self._config = config

    async def generate(self, request: GenerateRequest) -> Generation:
        """Generate one image for ``request`` and store the record.

        Args:
            request: Validated prompt and style.

        Returns:
            The stored generation record.

        Raises:
            ValidationError: If the prompt or style is empty (only possible
                for requests built without validation).
            ProviderError: If the provider call fails or returns no image
                URL.  Any other exception from the provider is wrapped in a
                ``ProviderError`` carrying its message.
        """
        missing = [name for name in ("prompt", "style") if not getattr(request, name, None)]
        if missing:
            raise ValidationError(
                errors=[{"loc": (name,), "msg": "must be a non-empty string"} for name in missing]
            )

        effective_prompt = compose_prompt(request.prompt, request.style)
        logger.info(f"Generating image (style={request.style!r}) with prompt: {effective_prompt}")

        try:
            image = await self._provider.generate(
                effective_prompt,
                image_size=self._config.image_size,
                num_inference_steps=self._config.num_inference_steps,
                guidance_scale=self._config.guidance_scale,
            )
        except ProviderError as e:
            logger.error(f"Image generation failed: {e.message}")
            raise
        except Exception as e:
            logger.exception("Image generation failed unexpectedly")
            raise ProviderError(str(e) or e.__class__.__name__) from e

        if not image.url:
            logger.error("Image generation failed: provider returned no image URL")
            raise ProviderError("No image URL in response")

        generation = self._store.create_generation(
            InsertGeneration(
                prompt=request.prompt,
                style=request.style,
                image_url=image.url,
                metadata=GenerationMetadata(
                    width=_positive_or(image.width, self._config.default_width),
                    height=_positive_or(image.height, self._config.default_height),
                ),
            )
        )
        logger.info(f"Stored generation {generation.id}: {generation.image_url}")
        return generation


def _positive_or(value: int | None, default: int) -> int:
    return value if value is not None and value > 0 else default
