"""Pinata client for re-hosting generated images."""

import json
from dataclasses import dataclass
from typing import Optional
from uuid import uuid4

import httpx
import structlog

from image_studio.services.exceptions import (
    MirrorAuthError,
    MirrorNetworkError,
    MirrorRateLimitError,
    MirrorValidationError,
)

logger = structlog.get_logger(__name__)


class PinataClient:
    """Image upload client using Pinata pinning service."""

    def __init__(
        self,
        jwt_token: str,
        gateway_domain: str = "gateway.pinata.cloud",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize Pinata client.

        Args:
            jwt_token: Pinata API JWT token (from PINATA_JWT env var)
            gateway_domain: Gateway domain for URL generation (default: public gateway)
            transport: Optional httpx transport (tests inject httpx.MockTransport)
        """
        self.jwt_token = jwt_token
        self.gateway_domain = gateway_domain
        self.base_url = "https://api.pinata.cloud"
        self.headers = {"Authorization": f"Bearer {jwt_token}"}
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=30.0, transport=self._transport)

    def is_mirrored(self, url: str) -> bool:
        """True if the URL already points at this client's gateway."""
        return self.gateway_domain in url

    async def upload_image(self, image_url: str) -> str:
        """Download image from URL and pin it via Pinata.

        Args:
            image_url: HTTP/HTTPS URL of image to upload (e.g., Replicate CDN URL)

        Returns:
            IPFS CID of the pinned file

        Raises:
            MirrorNetworkError: Network timeout, service unavailable (500, 503)
            MirrorRateLimitError: Rate limit (429)
            MirrorAuthError: Invalid API key (401), forbidden (403)
            MirrorValidationError: Bad request (400)
        """
        try:
            async with self._client() as client:
                image_response = await client.get(image_url)
                image_response.raise_for_status()
                image_data = image_response.content
                content_type = image_response.headers.get("content-type") or "image/png"
                extension = content_type.split("/")[-1].split(";")[0] or "png"

                filename = f"gen-{uuid4()}.{extension}"
                files = {"file": (filename, image_data, content_type)}
                response = await client.post(
                    f"{self.base_url}/pinning/pinFileToIPFS",
                    headers=self.headers,
                    files=files,
                    data={
                        "pinataOptions": '{"cidVersion": 1}',
                        "pinataMetadata": json.dumps({"name": filename}),
                    },
                )

                # Error classification
                if response.status_code == 429:
                    raise MirrorRateLimitError(f"Rate limit exceeded: {response.text}")
                elif response.status_code in (500, 503):
                    raise MirrorNetworkError(
                        f"Service unavailable ({response.status_code}): {response.text}"
                    )
                elif response.status_code == 401:
                    raise MirrorAuthError(
                        "Unauthorized: Invalid API key. Check PINATA_JWT configuration."
                    )
                elif response.status_code == 403:
                    raise MirrorAuthError(
                        "Forbidden: Access denied. "
                        "Check PINATA_JWT permissions (requires pinFileToIPFS access)."
                    )
                elif response.status_code == 400:
                    raise MirrorValidationError(f"Bad request: {response.text}")

                response.raise_for_status()
                return response.json()["IpfsHash"]

        except httpx.TimeoutException as e:
            raise MirrorNetworkError(f"Request timeout after 30s: {str(e)}")
        except httpx.HTTPError as e:
            raise MirrorNetworkError(f"Network error: {str(e)}")

    def get_gateway_url(self, cid: str) -> str:
        """Convert CID to gateway URL for browser access.

        Args:
            cid: IPFS CID

        Returns:
            Gateway URL (e.g., "https://gateway.pinata.cloud/ipfs/<CID>")
        """
        return f"https://{self.gateway_domain}/ipfs/{cid}"


@dataclass(frozen=True)
class MirrorResult:
    """Outcome of a mirroring attempt.

    ``url`` is always usable: the mirrored URL on success, the original otherwise.
    """

    url: str
    mirrored: bool
    error: Optional[str] = None


async def mirror_image(client: Optional[PinataClient], image_url: str) -> MirrorResult:
    """Re-host an image, falling back to the original URL on any failure.

    Never raises. Skips the upload when no client is configured, the URL is
    empty, or the URL already points at the mirror gateway.

    Args:
        client: Configured PinataClient, or None when mirroring is disabled
        image_url: Current image URL

    Returns:
        MirrorResult with the URL to persist
    """
    if client is None or not image_url or client.is_mirrored(image_url):
        return MirrorResult(url=image_url, mirrored=False)

    try:
        cid = await client.upload_image(image_url)
    except Exception as e:
        logger.warning(
            "history.mirror_failed",
            image_url=image_url,
            error=str(e),
            error_type=type(e).__name__,
        )
        return MirrorResult(url=image_url, mirrored=False, error=str(e))

    return MirrorResult(url=client.get_gateway_url(cid), mirrored=True)
