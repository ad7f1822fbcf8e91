"""Progressive reveal of finished text results.

A reveal is a non-resumable sequence of prefixes, one character longer
each frame, driven by a cancellable asyncio task bound to a message id.
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Callable, Iterator
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 0.02


@dataclass
class RevealState:
    """Progress of the active reveal. Never persisted."""

    full_text: str
    revealed_length: int = 0
    active: bool = True

    @property
    def text(self) -> str:
        return self.full_text[: self.revealed_length]


def reveal_prefixes(text: str) -> Iterator[str]:
    """Yield every non-empty prefix of ``text``, shortest first."""
    for end in range(1, len(text) + 1):
        yield text[:end]


async def stream(text: str, interval: float = DEFAULT_INTERVAL) -> AsyncIterator[str]:
    """Yield prefixes of ``text`` paced ``interval`` seconds apart."""
    for index, prefix in enumerate(reveal_prefixes(text)):
        if index:
            await asyncio.sleep(interval)
        yield prefix


class RevealRenderer:
    """Runs at most one reveal at a time.

    Starting a reveal cancels the previous one; ``cancel`` stops the
    active reveal when its message leaves the view.
    """

    def __init__(self, interval: float = DEFAULT_INTERVAL) -> None:
        self._interval = interval
        self._task: asyncio.Task[None] | None = None
        self._message_id: str | None = None
        self._state: RevealState | None = None

    @property
    def active_id(self) -> str | None:
        """Id of the message being revealed, if a reveal is running."""
        if self._task is None or self._task.done():
            return None
        return self._message_id

    @property
    def state(self) -> RevealState | None:
        return self._state

    def start(
        self,
        message_id: str,
        text: str,
        on_frame: Callable[[str], None],
    ) -> asyncio.Task[None]:
        """Start revealing ``text`` for a message.

        Must be called with a running event loop.

        Args:
            message_id: Message the reveal belongs to.
            text: Full text to reveal.
            on_frame: Called with each prefix.

        Returns:
            The task driving the reveal.
        """
        self.cancel()
        self._message_id = message_id
        self._state = RevealState(full_text=text)
        self._task = asyncio.create_task(self._run(self._state, on_frame))
        return self._task

    def cancel(self, message_id: str | None = None) -> bool:
        """Stop the active reveal and discard its state.

        Args:
            message_id: Only cancel if the active reveal belongs to this
                message. None cancels whatever is running.

        Returns:
            True if state was discarded.
        """
        if message_id is not None and message_id != self._message_id:
            return False
        if self._task is not None and not self._task.done():
            self._task.cancel()
            logger.debug(f"Cancelled reveal for message {self._message_id}")
        if self._state is not None:
            self._state.active = False
        discarded = self._message_id is not None
        self._task = None
        self._state = None
        self._message_id = None
        return discarded

    async def _run(self, state: RevealState, on_frame: Callable[[str], None]) -> None:
        async for prefix in stream(state.full_text, self._interval):
            state.revealed_length = len(prefix)
            on_frame(prefix)
        state.active = False
