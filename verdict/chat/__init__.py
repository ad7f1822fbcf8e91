"""Message orchestration between the input surface, gateway, and store.

Responsibilities:
    - Submission guard (non-empty input, attachment for document actions)
    - Per-session in-flight flag
    - User-before-result append ordering
    - Terminal error messages for failed requests
"""

from verdict.chat.controller import (
    ActionState,
    ChatController,
    Draft,
    InputValidationError,
    Job,
    SessionBusyError,
    make_title,
    route,
)

__all__ = [
    "ActionState",
    "ChatController",
    "Draft",
    "InputValidationError",
    "Job",
    "SessionBusyError",
    "make_title",
    "route",
]
