"""Tests for stylecraft.core.generation - the generation service.

The provider is an ``AsyncMock`` so these tests exercise only the service's
own behaviour: prompt composition, parameter passing, persistence, and
failure handling.
"""

from __future__ import annotations

import asyncio
from unittest.mock import MagicMock

import pytest

from stylecraft.core.config import StylecraftConfig
from stylecraft.core.errors import ProviderError, ValidationError
from stylecraft.core.generation import GenerationService
from stylecraft.core.provider import ProviderImage
from stylecraft.core.schema import GenerateRequest
from stylecraft.core.store import MemoryStore

TEST_IMAGE_URL = "https://fal.media/files/test/generated.png"


@pytest.fixture
def service(store: MemoryStore, mock_provider: MagicMock, test_config: StylecraftConfig):
    return GenerationService(store, mock_provider, test_config)


def _generate(service: GenerationService, prompt: str = "a red fox", style: str = "default"):
    return asyncio.run(service.generate(GenerateRequest(prompt=prompt, style=style)))


class TestSuccess:
    """Test the successful generation path."""

    def test_returns_stored_record(self, service, store: MemoryStore):
        """The returned record is the one in the store."""
        generation = _generate(service)
        assert store.get_generation(generation.id) == generation
        assert generation.image_url == TEST_IMAGE_URL

    def test_default_style_sends_raw_prompt(self, service, mock_provider: MagicMock):
        """The default style sends the prompt unchanged."""
        _generate(service, prompt="a red fox", style="default")
        assert mock_provider.generate.await_args.args[0] == "a red fox"

    def test_styled_prompt_sent_original_stored(self, service, mock_provider: MagicMock):
        """The provider gets the styled prompt; the record keeps the original."""
        generation = _generate(service, prompt="a red fox", style="oil painting")

        sent = mock_provider.generate.await_args.args[0]
        assert sent != "a red fox"
        assert "a red fox" in sent
        assert generation.prompt == "a red fox"
        assert generation.style == "oil painting"

    def test_fixed_parameters_from_config(self, service, mock_provider: MagicMock):
        """Image size, steps, and guidance come from configuration."""
        _generate(service)
        assert mock_provider.generate.await_args.kwargs == {
            "image_size": "square_hd",
            "num_inference_steps": 30,
            "guidance_scale": 7.5,
        }

    def test_metadata_from_provider(self, service, mock_provider: MagicMock):
        """Reported dimensions are recorded."""
        mock_provider.generate.return_value = ProviderImage(url="https://x/y.png", width=768, height=512)
        generation = _generate(service)
        assert (generation.metadata.width, generation.metadata.height) == (768, 512)

    def test_metadata_falls_back_to_config(self, service, mock_provider: MagicMock):
        """Unreported dimensions fall back to 1024x1024."""
        mock_provider.generate.return_value = ProviderImage(url="https://x/y.png")
        generation = _generate(service)
        assert (generation.metadata.width, generation.metadata.height) == (1024, 1024)

    def test_non_positive_metadata_falls_back_to_config(self, service, mock_provider: MagicMock):
        """Zero or negative dimensions are replaced by the 1024x1024 default."""
        mock_provider.generate.return_value = ProviderImage(url="https://x/y.png", width=-512, height=0)
        generation = _generate(service)
        assert (generation.metadata.width, generation.metadata.height) == (1024, 1024)


class TestFailure:
    """Test that failures surface as ProviderError and store nothing."""

    def test_provider_error_propagates(self, service, store: MemoryStore, mock_provider: MagicMock):
        """A ProviderError from the provider is re-raised unchanged."""
        mock_provider.generate.side_effect = ProviderError("No image URL in response")
        with pytest.raises(ProviderError, match="No image URL in response"):
            _generate(service)
        assert store.list_generations() == []

    def test_unexpected_exception_wrapped(self, service, store: MemoryStore, mock_provider: MagicMock):
        """Any other exception is wrapped with its message attached."""
        mock_provider.generate.side_effect = RuntimeError("socket closed")
        with pytest.raises(ProviderError, match="socket closed") as exc_info:
            _generate(service)
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert store.list_generations() == []

    def test_empty_url_rejected(self, service, store: MemoryStore, mock_provider: MagicMock):
        """An image without a URL is treated as a failure."""
        mock_provider.generate.return_value = ProviderImage(url="")
        with pytest.raises(ProviderError, match="No image URL"):
            _generate(service)
        assert store.list_generations() == []

    def test_unvalidated_empty_prompt_rejected(self, service, mock_provider: MagicMock):
        """Requests built without validation still cannot carry an empty prompt."""
        request = GenerateRequest.model_construct(prompt="", style="default")
        with pytest.raises(ValidationError):
            asyncio.run(service.generate(request))
        mock_provider.generate.assert_not_awaited()
