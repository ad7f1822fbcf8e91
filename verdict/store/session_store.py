"""Session store with durable persistence.

Owns every session and message. The whole ordered session list is
serialized into a single storage key on each mutation and restored by
``init()``. Any ``MutableMapping`` works as storage: the chat page passes
NiceGUI's per-browser ``app.storage.user``, tests pass a plain dict.
"""

import logging
from collections.abc import Callable, MutableMapping
from typing import Any

from pydantic import TypeAdapter, ValidationError

from verdict.models.schemas import Message, Session

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "verdict-chats"

_SESSION_LIST = TypeAdapter(list[Session])
_MUTABLE_FIELDS = frozenset(Session.model_fields) - {"id"}


class SessionStore:
    """Ordered, most-recent-first collection of chat sessions.

    Mutations on an unknown session id are silent no-ops: completions of
    in-flight requests may legitimately land after the session was deleted.
    """

    def __init__(
        self,
        storage: MutableMapping[str, Any],
        key: str = DEFAULT_STORAGE_KEY,
    ) -> None:
        """Initialize an empty store bound to a storage mapping.

        Args:
            storage: Durable key-value storage.
            key: Key holding the serialized session list.
        """
        self._storage = storage
        self._key = key
        self._sessions: list[Session] = []
        self._current_id: str | None = None
        self._listeners: list[Callable[[], None]] = []

    def init(self) -> None:
        """Load the session list from storage, replacing in-memory state."""
        self._current_id = None
        raw = self._storage.get(self._key)
        if raw is None:
            self._sessions = []
            return

        try:
            if isinstance(raw, str | bytes):
                self._sessions = _SESSION_LIST.validate_json(raw)
            else:
                self._sessions = _SESSION_LIST.validate_python(raw)
        except ValidationError as e:
            logger.warning(f"Discarding unreadable session data under {self._key!r}: {e}")
            self._sessions = []
            return

        logger.debug(f"Loaded {len(self._sessions)} sessions from {self._key!r}")

    def flush(self) -> None:
        """Write the full session list to storage."""
        self._storage[self._key] = _SESSION_LIST.dump_json(self._sessions).decode()
        logger.debug(f"Flushed {len(self._sessions)} sessions to {self._key!r}")

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register a change listener.

        Returns:
            A function that removes the listener.
        """
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    @property
    def sessions(self) -> tuple[Session, ...]:
        return tuple(self._sessions)

    @property
    def current_id(self) -> str | None:
        return self._current_id

    @property
    def current(self) -> Session | None:
        return self.get(self._current_id) if self._current_id else None

    def get(self, session_id: str) -> Session | None:
        for session in self._sessions:
            if session.id == session_id:
                return session
        return None

    def select(self, session_id: str | None) -> bool:
        """Point the current-session pointer at an existing session or clear it."""
        if session_id is not None and self.get(session_id) is None:
            return False
        self._current_id = session_id
        self._notify()
        return True

    def create_session(self) -> str:
        """Insert a new session at the head of the list and make it current."""
        session = Session()
        self._sessions.insert(0, session)
        self._current_id = session.id
        self._commit()
        return session.id

    def update_session(self, session_id: str, **fields: Any) -> Session | None:
        """Merge fields into a session.

        Returns:
            The updated session, or None if the id is unknown.

        Raises:
            ValueError: If a field is not a mutable session attribute.
        """
        unknown = set(fields) - _MUTABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update session fields: {sorted(unknown)}")

        for index, session in enumerate(self._sessions):
            if session.id == session_id:
                updated = session.model_copy(update=fields)
                self._sessions[index] = updated
                self._commit()
                return updated

        logger.debug(f"Ignoring update for unknown session {session_id}")
        return None

    def append_message(self, session_id: str, message: Message) -> Session | None:
        """Append a message to the end of a session's log.

        Returns:
            The updated session, or None if the id is unknown.
        """
        session = self.get(session_id)
        if session is None:
            logger.debug(f"Ignoring message for unknown session {session_id}")
            return None
        return self.update_session(session_id, messages=(*session.messages, message))

    def delete_session(self, session_id: str) -> bool:
        """Remove a session, clearing the current pointer if it pointed there."""
        remaining = [s for s in self._sessions if s.id != session_id]
        if len(remaining) == len(self._sessions):
            return False

        self._sessions = remaining
        if self._current_id == session_id:
            self._current_id = None
        self._commit()
        return True

    def _commit(self) -> None:
        self.flush()
        self._notify()

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback()


class StoreRegistry:
    """One SessionStore per browser, shared by every page of that browser.

    A store writes its whole list on each mutation, so two stores over the
    same storage would overwrite each other's sessions. Pages look their
    store up here instead of building one.
    """

    def __init__(self, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._key = key
        self._stores: dict[str, SessionStore] = {}

    def get(self, browser_id: str, storage: MutableMapping[str, Any]) -> SessionStore:
        """Return the browser's store, loading it from storage on first use."""
        store = self._stores.get(browser_id)
        if store is None:
            store = SessionStore(storage, self._key)
            store.init()
            self._stores[browser_id] = store
            logger.debug(f"Opened session store for browser {browser_id}")
        return store

    def __contains__(self, browser_id: object) -> bool:
        return browser_id in self._stores
