"""Mirroring tests.

mirror_image() must never raise: every failure falls back to the original URL.
"""

import httpx
import pytest

from image_studio.services.exceptions import MirrorAuthError, MirrorNetworkError
from image_studio.services.mirror.pinata_client import MirrorResult, PinataClient, mirror_image

SOURCE_URL = "https://replicate.delivery/abc/out-0.webp"


def pinata(handler) -> PinataClient:
    return PinataClient("jwt-token", transport=httpx.MockTransport(handler))


def image_then(pin_response: httpx.Response):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(200, content=b"RIFF", headers={"content-type": "image/webp"})
        return pin_response

    return handler


@pytest.mark.asyncio
class TestPinataClient:
    async def test_upload_returns_cid_and_sends_auth(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            if request.method == "GET":
                return httpx.Response(200, content=b"RIFF", headers={"content-type": "image/webp"})
            return httpx.Response(200, json={"IpfsHash": "bafkreiabc"})

        cid = await pinata(handler).upload_image(SOURCE_URL)

        assert cid == "bafkreiabc"
        assert str(seen[0].url) == SOURCE_URL
        upload = seen[1]
        assert upload.url.path == "/pinning/pinFileToIPFS"
        assert upload.headers["Authorization"] == "Bearer jwt-token"
        assert b".webp" in upload.content

    async def test_unauthorized_raises_auth_error(self):
        with pytest.raises(MirrorAuthError):
            await pinata(image_then(httpx.Response(401))).upload_image(SOURCE_URL)

    async def test_timeout_raises_network_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        with pytest.raises(MirrorNetworkError):
            await pinata(handler).upload_image(SOURCE_URL)


@pytest.mark.asyncio
class TestMirrorImage:
    async def test_disabled_mirror_keeps_url(self):
        assert await mirror_image(None, SOURCE_URL) == MirrorResult(url=SOURCE_URL, mirrored=False)

    async def test_already_mirrored_url_is_not_uploaded(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        url = "https://gateway.pinata.cloud/ipfs/bafkreiabc"
        result = await mirror_image(pinata(handler), url)

        assert result == MirrorResult(url=url, mirrored=False)

    async def test_success_returns_gateway_url(self):
        handler = image_then(httpx.Response(200, json={"IpfsHash": "bafkreiabc"}))

        result = await mirror_image(pinata(handler), SOURCE_URL)

        assert result.mirrored is True
        assert result.url == "https://gateway.pinata.cloud/ipfs/bafkreiabc"
        assert result.error is None

    @pytest.mark.parametrize("status_code", [400, 403, 429, 500])
    async def test_upload_failure_falls_back(self, status_code):
        handler = image_then(httpx.Response(status_code, text="nope"))

        result = await mirror_image(pinata(handler), SOURCE_URL)

        assert result.url == SOURCE_URL
        assert result.mirrored is False
        assert result.error

    async def test_download_failure_falls_back(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404)

        result = await mirror_image(pinata(handler), SOURCE_URL)

        assert result == MirrorResult(url=SOURCE_URL, mirrored=False, error=result.error)
        assert result.error

    async def test_malformed_pin_response_falls_back(self):
        handler = image_then(httpx.Response(200, json={"unexpected": True}))

        result = await mirror_image(pinata(handler), SOURCE_URL)

        assert result.url == SOURCE_URL
        assert result.mirrored is False


def test_gateway_url():
    client = PinataClient("jwt", gateway_domain="studio.mypinata.cloud")
    assert client.get_gateway_url("bafk") == "https://studio.mypinata.cloud/ipfs/bafk"
    assert client.is_mirrored("https://studio.mypinata.cloud/ipfs/bafk")
