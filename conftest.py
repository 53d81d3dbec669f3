import asyncio
import json
from typing import Any

import pytest

from career_quest.content import ContentClient
from career_quest.conversation import Conversation
from career_quest.errors import ImageEnrichmentError
from career_quest.session import SessionRegistry


class StubLLM:
    """Scripted LLM: returns queued responses per request kind and records calls.

    A queued value that is an exception instance is raised instead of returned.
    Dicts and lists are JSON-encoded, strings are returned as-is.
    """

    def __init__(self, responses: dict[str, list[Any]] | None = None) -> None:
        self.responses: dict[str, list[Any]] = responses or {}
        self.calls: list[dict[str, str]] = []

    def queue(self, kind: str, *responses: Any) -> None:
        self.responses.setdefault(kind, []).extend(responses)

    async def __call__(self, stage: str, question: str, instructions: str) -> str:
        self.calls.append({"stage": stage, "question": question, "instructions": instructions})
        queued = self.responses.get(stage)
        if not queued:
            raise AssertionError(f"StubLLM has no response queued for {stage!r}")
        value = queued.pop(0)
        if isinstance(value, Exception):
            raise value
        if isinstance(value, str):
            return value
        return json.dumps(value)


class StubImages:
    """Image generator returning "https://img.test/<description>".

    Descriptions listed in `fail` raise ImageEnrichmentError; `delays` maps a
    description to seconds to sleep first, to force out-of-order completion.
    """

    def __init__(self, fail: set[str] | None = None, delays: dict[str, float] | None = None) -> None:
        self.fail = fail or set()
        self.delays = delays or {}
        self.calls: list[str] = []
        self.completed: list[str] = []

    async def __call__(self, description: str) -> str:
        self.calls.append(description)
        await asyncio.sleep(self.delays.get(description, 0))
        self.completed.append(description)
        if description in self.fail:
            raise ImageEnrichmentError(f"no image for {description}")
        return f"https://img.test/{description}"


def path_payload(*names: str) -> dict:
    return {
        "career_paths": [
            {
                "what_if": f"What if you became a {n}?",
                "narrative": f"The story of a {n}.",
                "image_description": n,
            }
            for n in names
        ]
    }


def timeline_payload(*steps: str) -> dict:
    return {
        "timelines": [
            {
                "step": s,
                "description": f"Do {s}.",
                "duration": "4 weeks",
                "resources": ["freeCodeCamp"],
                "image_description": s,
            }
            for s in steps
        ]
    }


@pytest.fixture
def stub_llm() -> StubLLM:
    return StubLLM()


@pytest.fixture
def stub_images() -> StubImages:
    return StubImages()


@pytest.fixture
def content(stub_llm: StubLLM) -> ContentClient:
    return ContentClient(stub_llm, counselor="John")


@pytest.fixture
def conversation(content: ContentClient, stub_images: StubImages) -> Conversation:
    return Conversation(content=content, images=stub_images, registry=SessionRegistry())
