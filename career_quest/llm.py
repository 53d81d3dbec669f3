"""LLM client — HTTP connection to the content generation API.

The pipeline injects an LLM callable matching the protocol:

    async def __call__(self, stage: str, question: str, instructions: str) -> str: ...

`stage` is the request kind ("paths", "detail", "timeline") and is used for
logging. `question` is the user's raw text, `instructions` the rendered
instruction template. The return value is the raw content string, which the
ContentClient parses as JSON.

Two implementations are provided:

    HttpLLM    — real HTTP client for the content API.
    CannedLLM  — returns fixed, well-formed JSON for each request kind. Lets
                 the app run end-to-end without an API key.

Tests use StubLLM (defined in conftest.py) instead.
"""

from __future__ import annotations

import json
import logging
from typing import Protocol

import httpx

from career_quest.errors import GenerationNetworkError, GenerationParseError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Protocol — every LLM implementation must match this signature
# ---------------------------------------------------------------------------

class LLM(Protocol):
    async def __call__(self, stage: str, question: str, instructions: str) -> str: ...


# ---------------------------------------------------------------------------
# HttpLLM — connects to the content API
# ---------------------------------------------------------------------------

class HttpLLM:
    """Async HTTP client for the content API.

    Request:  POST {url}  {"question", "model", "randomness", "stream_data",
                           "training_data", "response_type": "json"}
    Response: {"content": "<JSON document encoded as a string>"}

    Args:
        url:        Full endpoint URL.
        api_key:    Bearer token, or empty string if not required.
        model:      Model identifier sent with every request.
        randomness: Sampling randomness. Defaults to 0.5.
        timeout:    HTTP timeout in seconds. Defaults to 120.
    """

    def __init__(
        self,
        url: str,
        api_key: str = "",
        model: str = "aicon-v4-alpha-160824",
        randomness: float = 0.5,
        timeout: float = 120.0,
    ) -> None:
        self._url = url
        self._api_key = api_key
        self._model = model
        self._randomness = randomness
        self._timeout = timeout

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    def _build_body(self, question: str, instructions: str) -> dict:
        return {
            "question": question,
            "model": self._model,
            "randomness": self._randomness,
            "stream_data": False,
            "training_data": instructions,
            "response_type": "json",
        }

    def _parse_response(self, resp: httpx.Response) -> str:
        """Extract the content string from the response envelope."""
        try:
            data = resp.json()
        except (json.JSONDecodeError, ValueError) as e:
            raise GenerationParseError("Content API returned a non-JSON envelope") from e
        content = data.get("content") if isinstance(data, dict) else None
        if not isinstance(content, str):
            raise GenerationParseError("Unexpected response format from content API")
        return content

    async def __call__(self, stage: str, question: str, instructions: str) -> str:
        body = self._build_body(question, instructions)
        logger.debug("llm call stage=%s url=%s question_len=%d", stage, self._url, len(question))

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.post(self._url, json=body, headers=self._headers())
                resp.raise_for_status()
        except httpx.ConnectError as e:
            raise GenerationNetworkError(f"Cannot connect to content API at {self._url}") from e
        except httpx.HTTPStatusError as e:
            raise GenerationNetworkError(
                f"Content API returned HTTP {e.response.status_code}"
            ) from e
        except httpx.TimeoutException as e:
            raise GenerationNetworkError(f"Content API timed out after {self._timeout}s") from e
        except httpx.HTTPError as e:
            raise GenerationNetworkError(f"Content API request failed: {e}") from e

        content = self._parse_response(resp)
        logger.debug("llm response stage=%s len=%d", stage, len(content))
        return content


# ---------------------------------------------------------------------------
# CannedLLM — fixed answers; no network calls
# ---------------------------------------------------------------------------

_CANNED: dict[str, dict] = {
    "paths": {
        "career_paths": [
            {
                "what_if": "What if you became a data visualisation designer?",
                "narrative": "You turn spreadsheets into stories that newsrooms fight over.",
                "image_description": "A bright studio wall covered in colourful charts.",
            },
            {
                "what_if": "What if you became an industrial designer?",
                "narrative": "You sketch, prototype and ship objects people hold every day.",
                "image_description": "A workbench with foam prototypes and calipers.",
            },
        ]
    },
    "detail": {
        "input": "Designers who work with data blend statistics, typography and "
                 "storytelling. Most start with a degree in design or a numerate "
                 "field and build a portfolio of public projects.",
    },
    "timelines": {
        "timelines": [
            {
                "step": "Learn the fundamentals",
                "description": "Work through an introductory course on visual design.",
                "duration": "6 weeks",
                "resources": ["Coursera", "Figma"],
                "image_description": "A learner sketching layouts at a sunny desk.",
            },
            {
                "step": "Publish a portfolio",
                "description": "Ship three small projects and write about each one.",
                "duration": "3 months",
                "resources": ["GitHub Pages", "Observable"],
                "image_description": "A laptop showing a polished portfolio site.",
            },
        ]
    },
}


class CannedLLM:
    """Returns the same well-formed JSON for every call of a given kind.

    Lets you click through every stage of the conversation without an API key.
    """

    async def __call__(self, stage: str, question: str, instructions: str) -> str:
        logger.debug("CannedLLM stage=%s question_len=%d", stage, len(question))
        key = "timelines" if stage == "timeline" else stage
        return json.dumps(_CANNED[key])
