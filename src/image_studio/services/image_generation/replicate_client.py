"""Replicate API client for text-to-image generation."""

import asyncio
from dataclasses import dataclass
from typing import Any, Optional

import replicate
import structlog
from replicate.exceptions import ReplicateError as ReplicateAPIError

from image_studio.services.exceptions import (
    PermanentError,
    ProviderConfigurationError,
    ProviderError,
    TransientError,
)
from image_studio.services.image_generation.output import classify_output, image_urls

logger = structlog.get_logger(__name__)


class ProviderTransientError(ProviderError, TransientError):
    """Network, rate limit or availability failure at the provider."""


class ProviderPermanentError(ProviderError, PermanentError):
    """Authentication, validation or content policy failure at the provider."""


def classify_error(exception: Exception) -> ProviderError:
    """Classify a provider exception for logging.

    Args:
        exception: Original exception from Replicate SDK or network layer

    Returns:
        ProviderTransientError for timeouts, 429, 503 and connection errors,
        ProviderPermanentError otherwise
    """
    error_message = str(exception)
    error_message_lower = error_message.lower()

    if "timeout" in error_message_lower:
        return ProviderTransientError(f"Network timeout: {error_message}")

    if "429" in error_message or "rate limit" in error_message_lower:
        return ProviderTransientError(f"Rate limit exceeded: {error_message}")

    if "503" in error_message or "service unavailable" in error_message_lower:
        return ProviderTransientError(f"Service unavailable: {error_message}")

    if isinstance(exception, (ConnectionError, OSError, TimeoutError)):
        return ProviderTransientError(f"Connection error: {error_message}")

    return ProviderPermanentError(f"Provider error: {error_message}")


@dataclass(frozen=True)
class GenerationInput:
    """Parameters sent to the provider for one generation call."""

    prompt: str
    seed: int
    steps: int
    guidance_scale: float
    width: int
    height: int
    num_images: int

    def to_provider_input(self) -> dict[str, Any]:
        return {
            "prompt": self.prompt,
            "seed": self.seed,
            "num_inference_steps": self.steps,
            "guidance_scale": self.guidance_scale,
            "width": self.width,
            "height": self.height,
            "num_outputs": self.num_images,
            "disable_safety_checker": False,
        }


@dataclass(frozen=True)
class GenerationOutput:
    """Normalized provider answer."""

    urls: list[str]
    seed: Optional[int] = None


class ReplicateImageClient:
    """Image generation client backed by the Replicate SDK."""

    def __init__(self, api_token: str, client: Optional[replicate.Client] = None):
        """Initialize Replicate client.

        Args:
            api_token: Replicate API token (from REPLICATE_API_TOKEN env var)
            client: Preconfigured SDK client (tests); built from api_token otherwise
        """
        self.api_token = api_token
        self._client = client

    def _sdk_client(self) -> replicate.Client:
        if self._client is None:
            if not self.api_token:
                raise ProviderConfigurationError("REPLICATE_API_TOKEN not configured")
            self._client = replicate.Client(api_token=self.api_token)
        return self._client

    async def generate(self, route: str, params: GenerationInput) -> GenerationOutput:
        """Run a model on Replicate and normalize its output.

        Args:
            route: Replicate model reference (e.g. "black-forest-labs/flux-dev")
            params: Generation parameters

        Returns:
            GenerationOutput with image URLs in provider order

        Raises:
            ProviderConfigurationError: Token not configured
            ProviderTransientError: Temporary failure
            ProviderPermanentError: Permanent failure
        """
        client = self._sdk_client()

        try:
            # SDK is synchronous; run in thread pool
            raw = await asyncio.to_thread(client.run, route, input=params.to_provider_input())
        except ReplicateAPIError as e:
            raise classify_error(e) from e
        except (ConnectionError, OSError, TimeoutError) as e:
            raise classify_error(e) from e

        output = classify_output(raw)
        urls = image_urls(output)
        logger.debug("replicate.output_normalized", route=route, image_count=len(urls))
        return GenerationOutput(urls=urls, seed=output.seed)
