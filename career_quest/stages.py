"""Conversation stages and the transition table between them.

A session's stage counter counts completed turns. The counter maps onto a
Stage, which decides what the next turn asks the content API for:

    counter 0   → PATHS      alternative career paths, each with an image
    counter 1   → DETAIL     one paragraph elaborating on a path
    counter 2   → TIMELINE   step-by-step timeline, each step with an image
    counter 3+  → FOLLOW_UP  open-ended detail answers, indefinitely
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

StageKind = Literal["paths", "detail", "timeline"]


class Stage(Enum):
    PATHS = "paths"
    DETAIL = "detail"
    TIMELINE = "timeline"
    FOLLOW_UP = "follow_up"

    @property
    def kind(self) -> StageKind:
        """Which instruction template this stage sends to the content API."""
        return _KIND_BY_STAGE[self]

    @property
    def needs_images(self) -> bool:
        return self in _ENRICHED_STAGES

    @property
    def next(self) -> Stage:
        return _TRANSITIONS[self]

    @classmethod
    def for_counter(cls, counter: int) -> Stage:
        """Resolve a turn counter to a stage by walking the transition table."""
        if counter < 0:
            raise ValueError(f"Stage counter must be >= 0, got {counter}")
        stage = INITIAL_STAGE
        for _ in range(min(counter, len(_TRANSITIONS))):
            stage = stage.next
        return stage


INITIAL_STAGE = Stage.PATHS

_TRANSITIONS: dict[Stage, Stage] = {
    Stage.PATHS: Stage.DETAIL,
    Stage.DETAIL: Stage.TIMELINE,
    Stage.TIMELINE: Stage.FOLLOW_UP,
    Stage.FOLLOW_UP: Stage.FOLLOW_UP,
}

_KIND_BY_STAGE: dict[Stage, StageKind] = {
    Stage.PATHS: "paths",
    Stage.DETAIL: "detail",
    Stage.TIMELINE: "timeline",
    Stage.FOLLOW_UP: "detail",
}

_ENRICHED_STAGES = frozenset({Stage.PATHS, Stage.TIMELINE})
