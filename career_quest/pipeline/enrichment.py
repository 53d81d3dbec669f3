"""Image enrichment fan-out.

Every generated item that carries an image_description gets one image
request. Requests run concurrently; results are merged back by position, so
output[i] always belongs to input[i] no matter which request finishes first.

A failing request only costs its own slot: the item is kept, with an
ErrorMarker in place of the image URL.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Sequence
from typing import Generic, TypeVar

from career_quest.images import ImageGenerator
from career_quest.models import (
    EnrichedItem,
    EnrichedPath,
    EnrichedTimelineStep,
    ErrorMarker,
    PathItem,
    TimelineItem,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

IMAGE_FAILED_MESSAGE = "Image generation failed"


class Settled(Generic[T]):
    """Outcome of one awaitable: either a value or the exception it raised."""

    __slots__ = ("value", "error")

    def __init__(self, value: T | None = None, error: BaseException | None = None) -> None:
        self.value = value
        self.error = error

    @property
    def ok(self) -> bool:
        return self.error is None

    def __repr__(self) -> str:
        if self.ok:
            return f"Settled(value={self.value!r})"
        return f"Settled(error={self.error!r})"


async def settle_all(awaitables: Sequence[Awaitable[T]]) -> list[Settled[T]]:
    """Run all awaitables concurrently and wait for every one to finish.

    Never raises for a failed awaitable; its slot holds the exception instead.
    Results keep the input order.
    """
    results = await asyncio.gather(*awaitables, return_exceptions=True)
    return [
        Settled(error=r) if isinstance(r, BaseException) else Settled(value=r)
        for r in results
    ]


async def enrich(
    items: Sequence[PathItem | TimelineItem],
    images: ImageGenerator,
) -> list[EnrichedItem]:
    """Attach an image (or ErrorMarker) to each item. Same length and order as `items`."""
    outcomes = await settle_all([images(item.image_description) for item in items])

    enriched: list[EnrichedItem] = []
    for i, (item, outcome) in enumerate(zip(items, outcomes)):
        if outcome.ok:
            image: str | ErrorMarker = outcome.value
        else:
            logger.warning("Image %d/%d failed: %s", i + 1, len(items), outcome.error)
            image = ErrorMarker(error_message=IMAGE_FAILED_MESSAGE)
        enriched.append(_with_image(item, image))
    return enriched


def _with_image(item: PathItem | TimelineItem, image: str | ErrorMarker) -> EnrichedItem:
    fields = item.model_dump()
    if isinstance(item, TimelineItem):
        return EnrichedTimelineStep(**fields, image=image)
    return EnrichedPath(**fields, image=image)
