"""Image generation client.

The enrichment fan-out injects an image generator matching the protocol:

    async def __call__(self, description: str) -> str: ...

which returns the URL of an image rendered from `description`, or raises
ImageEnrichmentError.

    HttpImageGenerator        — real HTTP client for the image API.
    PlaceholderImageGenerator — returns a placeholder URL; no network calls.
"""

from __future__ import annotations

import hashlib
import json
import logging
from typing import Protocol

import httpx

from career_quest.errors import ImageEnrichmentError

logger = logging.getLogger(__name__)


class ImageGenerator(Protocol):
    async def __call__(self, description: str) -> str: ...


class HttpImageGenerator:
    """Async HTTP client for the image API.

    Request:  POST {url}  {"prompt": [description], "image_style",
                           "orientation", "output_type": "url"}
    Response: {"image": "<url>"}

    Style and orientation are fixed per instance, so every item in a batch
    renders with the same look.
    """

    def __init__(
        self,
        url: str,
        api_key: str = "",
        style: str = "Anime",
        orientation: str = "Square",
        timeout: float = 120.0,
    ) -> None:
        self._url = url
        self._api_key = api_key
        self._style = style
        self._orientation = orientation
        self._timeout = timeout

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    def _build_body(self, description: str) -> dict:
        return {
            "prompt": [description],
            "image_style": self._style,
            "orientation": self._orientation,
            "output_type": "url",
        }

    async def __call__(self, description: str) -> str:
        logger.debug("image call url=%s description_len=%d", self._url, len(description))

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.post(
                    self._url, json=self._build_body(description), headers=self._headers(),
                )
                resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ImageEnrichmentError(
                f"Image API returned HTTP {e.response.status_code}"
            ) from e
        except httpx.TimeoutException as e:
            raise ImageEnrichmentError(f"Image API timed out after {self._timeout}s") from e
        except httpx.HTTPError as e:
            raise ImageEnrichmentError(f"Image API request failed: {e}") from e

        try:
            data = resp.json()
        except (json.JSONDecodeError, ValueError) as e:
            raise ImageEnrichmentError("Image API returned a non-JSON body") from e
        url = data.get("image") if isinstance(data, dict) else None
        if not isinstance(url, str) or not url:
            raise ImageEnrichmentError("Unexpected response format from image API")
        return url


class PlaceholderImageGenerator:
    """Returns a deterministic placeholder URL per description."""

    def __init__(self, base_url: str = "https://placehold.co/512x512?text=") -> None:
        self._base_url = base_url

    async def __call__(self, description: str) -> str:
        digest = hashlib.sha1(description.encode("utf-8")).hexdigest()[:8]
        return f"{self._base_url}{digest}"
