"""Session list presentation helpers for the chat picker."""

import math
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from verdict.store.session_store import SessionStore

_ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class SessionEntry:
    """One row of the session picker."""

    id: str
    title: str
    date_label: str
    count_label: str
    active: bool


def relative_label(created_at: datetime, now: datetime | None = None) -> str:
    """Describe a creation time relative to now.

    Uses whole days, rounded up: anything within the last day is "Today",
    the day before is "Yesterday", then "<n> days ago" up to a week, then
    the locale's date.
    """
    now = now or datetime.now(UTC)
    days = math.ceil(abs(now - created_at) / _ONE_DAY)

    if days <= 1:
        return "Today"
    if days == 2:
        return "Yesterday"
    if days <= 7:
        return f"{days - 1} days ago"
    return created_at.astimezone().strftime("%x")


def count_label(count: int) -> str:
    return "1 message" if count == 1 else f"{count} messages"


def list_entries(store: SessionStore, now: datetime | None = None) -> list[SessionEntry]:
    """Build picker rows in store order (most recent first)."""
    now = now or datetime.now(UTC)
    return [
        SessionEntry(
            id=session.id,
            title=session.title,
            date_label=relative_label(session.created_at, now),
            count_label=count_label(len(session.messages)),
            active=session.id == store.current_id,
        )
        for session in store.sessions
    ]
