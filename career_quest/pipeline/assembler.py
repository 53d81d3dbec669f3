"""Response assembler — turns one completed turn into log entries."""

from __future__ import annotations

from career_quest.models import DetailEntry, DetailItem, EnrichedItem, LogEntry, UserEntry


def assemble(
    user_entry: UserEntry,
    result: DetailItem | list[EnrichedItem],
) -> list[LogEntry]:
    """Return this turn's entries: the user's entry first, then the bot's.

    Enriched items keep the order the content API returned them in.
    """
    entries: list[LogEntry] = [user_entry]
    if isinstance(result, DetailItem):
        entries.append(DetailEntry(text=result.text))
    else:
        entries.extend(result)
    return entries
