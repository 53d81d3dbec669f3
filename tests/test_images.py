"""Tests for career_quest.images — HttpImageGenerator and PlaceholderImageGenerator."""

import pytest
import httpx
from unittest.mock import AsyncMock, MagicMock, patch

from career_quest.errors import ImageEnrichmentError
from career_quest.images import HttpImageGenerator, PlaceholderImageGenerator

URL = "https://images.test/api/ai/images/generate/v2"


def _mock_response(body: dict, status: int = 200) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    resp.json.return_value = body
    resp.raise_for_status = MagicMock(
        side_effect=None if status < 400 else httpx.HTTPStatusError(
            "", request=MagicMock(), response=resp
        )
    )
    return resp


class TestHttpImageGenerator:
    @pytest.fixture
    def images(self) -> HttpImageGenerator:
        return HttpImageGenerator(url=URL, api_key="secret")

    async def test_returns_image_url(self, images: HttpImageGenerator) -> None:
        mock_post = AsyncMock(return_value=_mock_response({"image": "https://cdn.test/a.png"}))
        with patch("httpx.AsyncClient.post", mock_post):
            assert await images("a drafting table") == "https://cdn.test/a.png"

    async def test_sends_description_with_fixed_style(self, images: HttpImageGenerator) -> None:
        mock_post = AsyncMock(return_value=_mock_response({"image": "u"}))
        with patch("httpx.AsyncClient.post", mock_post):
            await images("a drafting table")
        assert mock_post.call_args[0][0] == URL
        assert mock_post.call_args.kwargs["json"] == {
            "prompt": ["a drafting table"],
            "image_style": "Anime",
            "orientation": "Square",
            "output_type": "url",
        }
        assert mock_post.call_args.kwargs["headers"]["Authorization"] == "Bearer secret"

    async def test_style_and_orientation_configurable(self) -> None:
        images = HttpImageGenerator(url=URL, style="Photorealistic", orientation="Landscape")
        mock_post = AsyncMock(return_value=_mock_response({"image": "u"}))
        with patch("httpx.AsyncClient.post", mock_post):
            await images("x")
        body = mock_post.call_args.kwargs["json"]
        assert body["image_style"] == "Photorealistic"
        assert body["orientation"] == "Landscape"

    async def test_http_error_raises(self, images: HttpImageGenerator) -> None:
        mock_post = AsyncMock(return_value=_mock_response({}, status=500))
        with patch("httpx.AsyncClient.post", mock_post):
            with pytest.raises(ImageEnrichmentError, match="HTTP 500"):
                await images("x")

    async def test_connect_error_raises(self, images: HttpImageGenerator) -> None:
        mock_post = AsyncMock(side_effect=httpx.ConnectError("refused"))
        with patch("httpx.AsyncClient.post", mock_post):
            with pytest.raises(ImageEnrichmentError):
                await images("x")

    async def test_timeout_raises(self, images: HttpImageGenerator) -> None:
        mock_post = AsyncMock(side_effect=httpx.ReadTimeout("slow"))
        with patch("httpx.AsyncClient.post", mock_post):
            with pytest.raises(ImageEnrichmentError, match="timed out"):
                await images("x")

    async def test_missing_image_key_raises(self, images: HttpImageGenerator) -> None:
        mock_post = AsyncMock(return_value=_mock_response({"status": "ok"}))
        with patch("httpx.AsyncClient.post", mock_post):
            with pytest.raises(ImageEnrichmentError, match="Unexpected response format"):
                await images("x")


class TestPlaceholderImageGenerator:
    async def test_deterministic_per_description(self) -> None:
        images = PlaceholderImageGenerator()
        assert await images("a") == await images("a")
        assert await images("a") != await images("b")
