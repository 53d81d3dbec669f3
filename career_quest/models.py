"""Core domain models.

Everything the pipeline produces ends up as a LogEntry in a session's
append-only log. Pydantic is used for validation and serialisation at every
data boundary: content API payloads are validated into the *Item models, and
the log is dumped as JSON for the presentation layer.

Field names follow the content API's snake_case keys (what_if,
image_description, ...) so payloads validate without a mapping layer.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Generated items — raw, stage-specific output of the content API
# ---------------------------------------------------------------------------

class PathItem(BaseModel):
    """One alternative career path ("What if you...")."""

    what_if: str
    narrative: str
    image_description: str


class DetailItem(BaseModel):
    """A single paragraph elaborating on a profession. Carries no image."""

    text: str


class TimelineItem(BaseModel):
    """One milestone in a step-by-step career timeline."""

    step: str
    description: str
    duration: str
    resources: list[str] = Field(default_factory=list)
    # The timeline instruction's own example calls this key image_prompt
    image_description: str = Field(
        validation_alias=AliasChoices("image_description", "image_prompt"),
    )

    @field_validator("resources", mode="before")
    @classmethod
    def _wrap_single_resource(cls, value: object) -> object:
        if isinstance(value, str):
            return [value]
        return value


# ---------------------------------------------------------------------------
# Log entries — what the session log is made of
# ---------------------------------------------------------------------------

class ErrorMarker(BaseModel):
    """Placeholder for content that failed to generate. Never retried."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["error"] = "error"
    error_message: str


class UserEntry(BaseModel):
    """Text the user submitted. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["user"] = "user"
    role: Literal["user"] = "user"
    text: str


class EnrichedPath(PathItem):
    """A PathItem with its generated image (or the marker for a failed one)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["path"] = "path"
    role: Literal["bot"] = "bot"
    image: str | ErrorMarker

    @property
    def has_image(self) -> bool:
        return not isinstance(self.image, ErrorMarker)


class EnrichedTimelineStep(TimelineItem):
    """A TimelineItem with its generated image (or the marker for a failed one)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["timeline_step"] = "timeline_step"
    role: Literal["bot"] = "bot"
    image: str | ErrorMarker

    @property
    def has_image(self) -> bool:
        return not isinstance(self.image, ErrorMarker)


class DetailEntry(BaseModel):
    """A DetailItem as it appears in the log."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["detail"] = "detail"
    role: Literal["bot"] = "bot"
    text: str


EnrichedItem = Union[EnrichedPath, EnrichedTimelineStep]

LogEntry = Annotated[
    Union[UserEntry, EnrichedPath, EnrichedTimelineStep, DetailEntry],
    Field(discriminator="kind"),
]
