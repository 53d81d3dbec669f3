"""Session state and the per-session registry.

A Session holds a stage counter, the pending user input, and the ordered log.
Only three things change it:

    submit()       — replace the pending input (last write wins)
    commit_turn()  — append one turn's entries, clear pending, stage += 1
    reset()        — back to {stage: 0, pending: None, log: []}

The SessionRegistry maps session ids to sessions and gives each one its own
asyncio.Lock, so two requests can never extend the same log at once.
Sessions idle for longer than the registry's timeout are evicted.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import AsyncIterator, Callable, Sequence
from contextlib import asynccontextmanager

from pydantic import BaseModel, Field

from career_quest.errors import ValidationError
from career_quest.models import LogEntry, UserEntry
from career_quest.stages import Stage

logger = logging.getLogger(__name__)


def validate_input(text: str) -> str:
    """Raise ValidationError unless `text` has visible content."""
    if not isinstance(text, str) or not text.strip():
        raise ValidationError("User input is required.")
    return text


class SessionView(BaseModel):
    """Read-only copy of a session, safe to hand to the presentation layer."""

    stage: int
    log: list[LogEntry] = Field(default_factory=list)
    pending_input: UserEntry | None = None


class Session:
    def __init__(self) -> None:
        self._stage = 0
        self._pending: UserEntry | None = None
        self._log: list[LogEntry] = []

    @property
    def stage(self) -> int:
        return self._stage

    @property
    def current_stage(self) -> Stage:
        """The stage the next turn will run."""
        return Stage.for_counter(self._stage)

    @property
    def pending_input(self) -> UserEntry | None:
        return self._pending

    @property
    def log(self) -> tuple[LogEntry, ...]:
        return tuple(self._log)

    def submit(self, text: str) -> UserEntry:
        """Validate `text` and store it as the pending input."""
        self._pending = UserEntry(text=validate_input(text))
        return self._pending

    def commit_turn(self, user_entry: UserEntry, entries: Sequence[LogEntry]) -> None:
        """Append a completed turn and advance the stage by one."""
        self._log.extend(entries)
        if self._pending is user_entry:
            self._pending = None
        self._stage += 1

    def reset(self) -> None:
        self._stage = 0
        self._pending = None
        self._log = []

    def snapshot(self) -> SessionView:
        return SessionView(
            stage=self._stage,
            log=list(self._log),
            pending_input=self._pending,
        )


class _Slot:
    __slots__ = ("session", "lock", "last_used")

    def __init__(self, now: float) -> None:
        self.session = Session()
        self.lock = asyncio.Lock()
        self.last_used = now


class SessionRegistry:
    """Concurrency-safe map of session id → Session.

    Args:
        idle_timeout: Seconds without activity after which a session is evicted.
                      None disables eviction.
        clock:        Monotonic time source, injectable for tests.
    """

    def __init__(
        self,
        idle_timeout: float | None = 3600.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._idle_timeout = idle_timeout
        self._clock = clock
        self._slots: dict[str, _Slot] = {}

    def __len__(self) -> int:
        return len(self._slots)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._slots

    @asynccontextmanager
    async def acquire(self, session_id: str) -> AsyncIterator[Session]:
        """Hold the session's lock for the duration of the block.

        Creates the session on first use.
        """
        self.evict_idle()
        slot = self._slots.get(session_id)
        if slot is None:
            slot = _Slot(self._clock())
            self._slots[session_id] = slot
            logger.debug("Created session %s", session_id)
        slot.last_used = self._clock()
        async with slot.lock:
            try:
                yield slot.session
            finally:
                slot.last_used = self._clock()

    def evict_idle(self) -> int:
        """Drop sessions idle past the timeout. Returns how many were dropped."""
        if self._idle_timeout is None:
            return 0
        cutoff = self._clock() - self._idle_timeout
        stale = [
            sid for sid, slot in self._slots.items()
            if slot.last_used < cutoff and not slot.lock.locked()
        ]
        for sid in stale:
            del self._slots[sid]
        if stale:
            logger.info("Evicted %d idle session(s)", len(stale))
        return len(stale)
