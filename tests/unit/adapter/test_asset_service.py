"""Unit tests for HttpAssetService"""

import base64
import httpx
import pytest

from src.adapter.services.asset_service import HttpAssetService

RealAsyncClient = httpx.AsyncClient


def _client_with(handler):
    def factory(*args, **kwargs):
        kwargs["transport"] = httpx.MockTransport(handler)
        return RealAsyncClient(*args, **kwargs)

    return factory


@pytest.mark.asyncio
class TestFetchLogo:
    async def test_reads_logo_file(self, tmp_path):
        logo = tmp_path / "logo.png"
        logo.write_bytes(b"\x89PNG logo")

        assert await HttpAssetService(str(logo)).fetch_logo() == b"\x89PNG logo"

    async def test_missing_logo(self, tmp_path, caplog):
        service = HttpAssetService(str(tmp_path / "missing.png"))

        with caplog.at_level("WARNING"):
            assert await service.fetch_logo() is None

        assert "Logo not found" in caplog.text

    async def test_no_logo_configured(self):
        assert await HttpAssetService(None).fetch_logo() is None


@pytest.mark.asyncio
class TestFetchImage:
    async def test_base64_data_url(self):
        payload = base64.b64encode(b"signature-bytes").decode()

        image = await HttpAssetService(None).fetch_image(f"data:image/png;base64,{payload}")

        assert image == b"signature-bytes"

    async def test_empty_data_url(self):
        assert await HttpAssetService(None).fetch_image("data:image/png;base64,") is None

    async def test_unsupported_scheme(self):
        assert await HttpAssetService(None).fetch_image("ftp://example.com/sig.png") is None

    async def test_http_image(self, monkeypatch):
        def handler(request):
            assert request.url == "https://cdn.example.com/sig.png"
            return httpx.Response(200, content=b"remote-image")

        monkeypatch.setattr(httpx, "AsyncClient", _client_with(handler))

        image = await HttpAssetService(None).fetch_image("https://cdn.example.com/sig.png")

        assert image == b"remote-image"

    async def test_http_error_returns_none(self, monkeypatch, caplog):
        monkeypatch.setattr(httpx, "AsyncClient", _client_with(lambda request: httpx.Response(404)))

        with caplog.at_level("WARNING"):
            image = await HttpAssetService(None).fetch_image("https://cdn.example.com/missing.png")

        assert image is None
        assert "Failed to fetch image" in caplog.text
