"""Boundary operations for one conversation per session id.

    submit_input(session_id, text)  — store text as the pending input
    render_current(session_id)      — run the pending turn, if any; return the log
    reset_session(session_id)       — back to the initial state, in place

All three hold the session's lock, so a render can never observe a half-built
turn and two renders on the same session run one after the other.
"""

from __future__ import annotations

import logging

from career_quest.content import ContentClient
from career_quest.images import ImageGenerator
from career_quest.pipeline import advance
from career_quest.session import SessionRegistry, SessionView, validate_input

logger = logging.getLogger(__name__)


class Conversation:
    def __init__(
        self,
        content: ContentClient,
        images: ImageGenerator,
        registry: SessionRegistry | None = None,
    ) -> None:
        self._content = content
        self._images = images
        self.registry = registry if registry is not None else SessionRegistry()

    async def submit_input(self, session_id: str, text: str) -> None:
        """Raises ValidationError for empty text; the session is left unchanged."""
        validate_input(text)
        async with self.registry.acquire(session_id) as session:
            session.submit(text)
            logger.debug("Session %s: input pending at stage %d", session_id, session.stage)

    async def render_current(self, session_id: str) -> SessionView:
        """Raises GenerationError when the pending turn could not be generated."""
        async with self.registry.acquire(session_id) as session:
            await advance(session, content=self._content, images=self._images)
            return session.snapshot()

    async def reset_session(self, session_id: str) -> None:
        async with self.registry.acquire(session_id) as session:
            session.reset()
        logger.info("Session %s reset", session_id)
