"""Content Generation Client — one structured request per stage.

Wraps an LLM callable: renders the instruction template for the request kind,
sends it with the user's text, and parses the returned JSON into the
stage's item models.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import pydantic

from career_quest.errors import GenerationParseError
from career_quest.llm import LLM
from career_quest.models import DetailItem, PathItem, TimelineItem
from career_quest.prompts import instructions_for
from career_quest.stages import StageKind

logger = logging.getLogger(__name__)

GeneratedResult = list[PathItem] | DetailItem | list[TimelineItem]


class ContentClient:
    """Issues the paths / detail / timeline requests.

    Network failures surface as GenerationNetworkError (raised by the LLM),
    malformed payloads as GenerationParseError. Nothing is retried here.
    """

    def __init__(self, llm: LLM, counselor: str = "John") -> None:
        self._llm = llm
        self._counselor = counselor

    async def generate(self, kind: StageKind, user_text: str) -> GeneratedResult:
        instructions = instructions_for(kind, self._counselor)
        raw = await self._llm(kind, user_text, instructions)
        data = _load_json(kind, raw)

        if kind == "paths":
            return _parse_items(data, "career_paths", PathItem)
        if kind == "timeline":
            return _parse_items(data, "timelines", TimelineItem)
        return _parse_detail(data)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _load_json(kind: str, raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning("Content API returned invalid JSON for %s: %r", kind, raw[:200])
        raise GenerationParseError(f"Content API returned invalid JSON: {e}") from e


def _parse_items(data: Any, key: str, model: type[PathItem] | type[TimelineItem]) -> list:
    if not isinstance(data, dict) or key not in data:
        raise GenerationParseError(f"Content API response is missing {key!r}")
    items = data[key]
    if not isinstance(items, list):
        raise GenerationParseError(
            f"{key!r} must be a JSON array, got {type(items).__name__}"
        )
    try:
        return [model.model_validate(item) for item in items]
    except pydantic.ValidationError as e:
        raise GenerationParseError(f"Malformed item under {key!r}: {e}") from e


def _parse_detail(data: Any) -> DetailItem:
    if not isinstance(data, dict) or not isinstance(data.get("input"), str):
        raise GenerationParseError("Content API response is missing 'input'")
    return DetailItem(text=data["input"])
