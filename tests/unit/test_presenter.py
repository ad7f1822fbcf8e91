"""Unit tests for session list presentation."""

from datetime import UTC, datetime, timedelta

import pytest
import pytest_check as check

from verdict.models.schemas import UserMessage
from verdict.store.session_store import SessionStore
from verdict.ui.presenter import count_label, list_entries, relative_label

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=UTC)


class TestRelativeLabel:
    """Tests for relative creation labels."""

    @pytest.mark.parametrize(
        ("elapsed", "expected"),
        [
            (timedelta(0), "Today"),
            (timedelta(hours=5), "Today"),
            (timedelta(days=1), "Today"),
            (timedelta(days=1, minutes=1), "Yesterday"),
            (timedelta(days=2), "Yesterday"),
            (timedelta(days=2, hours=1), "2 days ago"),
            (timedelta(days=7), "6 days ago"),
        ],
    )
    def test_recent(self, elapsed: timedelta, expected: str) -> None:
        """Whole days are rounded up before labelling."""
        assert relative_label(NOW - elapsed, NOW) == expected

    def test_older_uses_date(self) -> None:
        """Anything beyond a week shows the locale date."""
        created = NOW - timedelta(days=10)

        assert relative_label(created, NOW) == created.astimezone().strftime("%x")


class TestCountLabel:
    """Tests for message counts."""

    def test_singular_and_plural(self) -> None:
        """One message is singular, everything else plural."""
        check.equal(count_label(0), "0 messages")
        check.equal(count_label(1), "1 message")
        check.equal(count_label(12), "12 messages")


class TestListEntries:
    """Tests for picker rows."""

    def test_rows_follow_store(self, store: SessionStore) -> None:
        """Rows are most-recent-first and flag the current session."""
        older = store.create_session()
        store.append_message(older, UserMessage(content="hi"))
        newer = store.create_session()

        entries = list_entries(store)

        check.equal([e.id for e in entries], [newer, older])
        check.is_true(entries[0].active)
        check.is_false(entries[1].active)
        check.equal(entries[1].count_label, "1 message")
        check.equal(entries[0].date_label, "Today")
