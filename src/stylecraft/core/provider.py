"""Image-generation provider clients.

The provider is an external service that takes a prompt plus generation
parameters and returns the URL of a finished image.  The application only
relays that URL; it never downloads or stores image bytes.

:class:`ImageProvider` is the contract the generation service depends on.
:class:`FalImageProvider` implements it against fal.ai's synchronous REST
endpoint (``POST https://fal.run/<model>``) using an ``httpx.AsyncClient``.

Error Mapping
-------------
Every failure is raised as :class:`~stylecraft.core.errors.ProviderError`:

- transport failures (DNS, connection reset, timeout)
- HTTP status >= 400, with the provider's own message where it sent one;
  content-policy rejections and rate limits get a friendlier message
- a success response with no image URL

Nothing is retried.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import httpx

from stylecraft.core.config import StylecraftConfig
from stylecraft.core.errors import ProviderError

logger = logging.getLogger(__name__)

CONTENT_POLICY_MESSAGE = "Content policy violation. Please modify your prompt and try again."
RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again later."


@dataclass(frozen=True)
class ProviderImage:
    """First image returned by a provider call.

    ``width`` and ``height`` are ``None`` when the provider does not report
    them.
    """

    url: str
    width: int | None = None
    height: int | None = None


class ImageProvider(ABC):
    """Abstract interface for an image-generation provider."""

    name: str = "provider"

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        *,
        image_size: str,
        num_inference_steps: int,
        guidance_scale: float,
    ) -> ProviderImage:
        """Generate an image and return its URL.

        Raises:
            ProviderError: If the provider fails or returns no image URL.
        """

    async def close(self) -> None:
        """Release network resources.  No-op by default."""


def _extract_error(payload: Any) -> tuple[str, str]:
    """Pull ``(message, code)`` out of a provider error body.

    fal.ai sends ``{"detail": "..."}`` or ``{"detail": [{"msg": ..., "type":
    ...}]}``; OpenAI-style services send ``{"error": {"message", "code"}}``.
    """
    if not isinstance(payload, dict):
        return "", ""

    error_obj = payload.get("error")
    if isinstance(error_obj, dict):
        return str(error_obj.get("message") or ""), str(error_obj.get("code") or "")

    detail = payload.get("detail")
    if isinstance(detail, str):
        return detail, ""
    if isinstance(detail, list) and detail and isinstance(detail[0], dict):
        first = detail[0]
        return str(first.get("msg") or ""), str(first.get("type") or "")

    return "", ""


def provider_error_from_response(provider_name: str, response: httpx.Response) -> ProviderError:
    """Build a :class:`ProviderError` from a failed HTTP response."""
    status = response.status_code

    if status == 429:
        return ProviderError(RATE_LIMIT_MESSAGE, status_code=status, code="rate_limit_exceeded")

    try:
        payload = response.json()
    except ValueError:
        return ProviderError(
            f"{provider_name} returned an unexpected error ({status}).",
            status_code=status,
        )

    message, code = _extract_error(payload)
    lowered = f"{code} {message}".lower()
    if "content_policy" in lowered or "moderation" in lowered or "nsfw" in lowered:
        return ProviderError(
            CONTENT_POLICY_MESSAGE, status_code=status, code="content_policy_violation"
        )
    if message:
        return ProviderError(f"{provider_name}: {message}", status_code=status, code=code or None)

    return ProviderError(f"{provider_name} error ({status}).", status_code=status)


class FalImageProvider(ImageProvider):
    """fal.ai text-to-image client.

    Args:
        config: Application configuration (credential, base URL, model,
            timeout).
        client: Optional pre-built ``httpx.AsyncClient``.  Tests pass one
            backed by ``httpx.MockTransport``.  A client passed in is still
            closed by :meth:`close`.
    """

    name = "fal.ai"

    def __init__(self, config: StylecraftConfig, client: httpx.AsyncClient | None = None):
        self._api_key = config.fal_key.get_secret_value()
        self._endpoint = f"{config.provider_base_url.rstrip('/')}/{config.provider_model.strip('/')}"
        self._client = client or httpx.AsyncClient(timeout=config.provider_timeout)

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def generate(
        self,
        prompt: str,
        *,
        image_size: str,
        num_inference_steps: int,
        guidance_scale: float,
    ) -> ProviderImage:
        body = {
            "prompt": prompt,
            "image_size": image_size,
            "num_inference_steps": num_inference_steps,
            "guidance_scale": guidance_scale,
        }

        try:
            response = await self._client.post(
                self._endpoint,
                headers={
                    "Authorization": f"Key {self._api_key}",
                    "Content-Type": "application/json",
                },
                json=body,
            )
        except httpx.HTTPError as e:
            raise ProviderError(f"{self.name} request failed: {e}") from e

        if response.status_code >= 400:
            raise provider_error_from_response(self.name, response)

        try:
            payload = response.json()
        except ValueError as e:
            raise ProviderError(f"{self.name} returned a non-JSON response") from e

        logger.debug(f"{self.name} response: {payload}")
        return parse_images(payload)

    async def close(self) -> None:
        await self._client.aclose()


def parse_images(payload: Any) -> ProviderImage:
    """Return the first image from a ``{"images": [{"url": ...}]}`` payload.

    Raises:
        ProviderError: If there is no image or the first image has no URL.
    """
    images = payload.get("images") if isinstance(payload, dict) else None
    first = images[0] if isinstance(images, list) and images else None
    url = first.get("url") if isinstance(first, dict) else None
    if not url or not isinstance(url, str):
        raise ProviderError("No image URL in response")

    return ProviderImage(
        url=url,
        width=_dimension(first.get("width")),
        height=_dimension(first.get("height")),
    )


def _dimension(value: Any) -> int | None:
    """Return ``value`` if it is a positive pixel count, else ``None``."""
    if isinstance(value, int) and not isinstance(value, bool) and value > 0:
        return value
    return None
