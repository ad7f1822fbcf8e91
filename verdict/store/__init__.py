"""Durable session storage.

Single source of truth for sessions and their message logs, persisted as
one serialized blob under a single storage key. ``StoreRegistry`` hands
every page of a browser the same store.
"""

from verdict.store.session_store import DEFAULT_STORAGE_KEY, SessionStore, StoreRegistry

__all__ = ["DEFAULT_STORAGE_KEY", "SessionStore", "StoreRegistry"]
