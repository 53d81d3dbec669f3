"""Stage dispatcher — runs one turn of the conversation.

Turn flow:
  1. Resolve the session's stage from its turn counter.
  2. Ask the ContentClient for the stage's request kind.
  3. If the stage carries images, fan out one image request per item.
  4. Assemble the user entry and the bot entries, in that order.

The dispatcher never touches the session; it returns the turn's entries and
the caller commits them. A GenerationError therefore leaves the session
exactly as it was.
"""

from __future__ import annotations

import logging

from career_quest.content import ContentClient
from career_quest.errors import GenerationParseError
from career_quest.images import ImageGenerator
from career_quest.models import DetailItem, LogEntry, UserEntry
from career_quest.session import Session
from career_quest.stages import Stage

from .assembler import assemble
from .enrichment import enrich

logger = logging.getLogger(__name__)


async def run_turn(
    *,
    stage: Stage,
    user_entry: UserEntry,
    content: ContentClient,
    images: ImageGenerator,
) -> list[LogEntry]:
    """Execute one turn for `stage` and return the entries to append."""
    logger.info("Running %s turn (kind=%s)", stage.value, stage.kind)
    result = await content.generate(stage.kind, user_entry.text)

    if stage.needs_images:
        if isinstance(result, DetailItem):
            raise GenerationParseError(f"Stage {stage.value} expected items, got a detail payload")
        result = await enrich(result, images)

    return assemble(user_entry, result)


async def advance(
    session: Session,
    *,
    content: ContentClient,
    images: ImageGenerator,
) -> Session:
    """Consume the session's pending input, if any, and commit the turn.

    With nothing pending this is a no-op. On GenerationError the session is
    left untouched: same stage, same log, input still pending for a retry.
    """
    user_entry = session.pending_input
    if user_entry is None:
        return session

    entries = await run_turn(
        stage=session.current_stage,
        user_entry=user_entry,
        content=content,
        images=images,
    )
    session.commit_turn(user_entry, entries)
    logger.info("Turn committed: stage=%d entries=%d", session.stage, len(entries))
    return session
