"""Per-message request orchestration.

Drives each user action through ``IDLE -> SUBMITTING -> SUCCEEDED | FAILED``:
the user message is appended before the gateway is contacted, exactly one
assistant message is appended afterwards, and the per-session in-flight
flag is always released.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from verdict.attachments.validator import Attachment, CandidateFile, RejectedFormat, attach
from verdict.gateway.client import AnalysisGateway, GatewayError
from verdict.models.schemas import (
    NEW_CHAT_TITLE,
    AnalysisResult,
    AssistantMessage,
    DocumentAction,
    ErrorPayload,
    SummaryResult,
    UserMessage,
)
from verdict.store.session_store import SessionStore

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 30


class ActionState(str, Enum):
    """Lifecycle of one submitted action."""

    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class InputValidationError(Exception):
    """Raised when a submission fails its local guard; nothing is sent."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class SessionBusyError(InputValidationError):
    """Raised when the session already has a request in flight."""


class Job(Enum):
    """What a submission asks the gateway to do."""

    ANALYZE_TEXT = ("Sentiment analysis", None, "Analyzing your message...")
    ANALYZE_DOCUMENT = (
        "Document analysis",
        DocumentAction.ANALYZE_SENTIMENT,
        "Analyzing your document...",
    )
    SUMMARIZE_DOCUMENT = (
        "Summarization",
        DocumentAction.SUMMARIZE,
        "Summarizing your document...",
    )

    def __init__(self, label: str, action: DocumentAction | None, progress: str) -> None:
        self.label = label
        self.action = action
        self.progress = progress


@dataclass
class Draft:
    """Transient input fields for the next submission."""

    text: str = ""
    attachment: Attachment | None = None
    error: str = ""

    @property
    def can_submit(self) -> bool:
        return bool(self.text.strip()) or self.attachment is not None

    def pick(self, candidate: CandidateFile) -> bool:
        """Attach a picked file if its format is supported.

        A rejected file leaves the current attachment untouched and records
        the reason in ``error``.
        """
        try:
            self.attachment = attach(candidate)
        except RejectedFormat as e:
            self.error = e.message
            return False
        self.error = ""
        return True

    def remove_attachment(self) -> None:
        self.attachment = None

    def clear(self) -> None:
        self.text = ""
        self.attachment = None
        self.error = ""


def route(text: str, attachment: Attachment | None, action: DocumentAction | None) -> Job:
    """Pick the job for a submission or reject it.

    An attachment always means a document job; text alone means text analysis.

    Raises:
        InputValidationError: If the submission is empty or a document
            action has no attachment.
    """
    if action is DocumentAction.SUMMARIZE:
        if attachment is None:
            raise InputValidationError("Please select a file to summarize.")
        return Job.SUMMARIZE_DOCUMENT
    if action is DocumentAction.ANALYZE_SENTIMENT and attachment is None:
        raise InputValidationError("Please select a file to analyze.")
    if attachment is not None:
        return Job.ANALYZE_DOCUMENT
    if not text:
        raise InputValidationError("Please enter some text to analyze.")
    return Job.ANALYZE_TEXT


def make_title(text: str, attachment: Attachment | None, job: Job) -> str:
    """Derive a session title from the first submission."""
    if text:
        source = text
    else:
        verb = "Summarize" if job is Job.SUMMARIZE_DOCUMENT else "Analyze"
        source = f"{verb}: {attachment.name}" if attachment else job.label
    if len(source) <= TITLE_MAX_LENGTH:
        return source
    return source[:TITLE_MAX_LENGTH] + "..."


class ChatController:
    """Submits user actions and records their outcomes in the session store.

    At most one action per session is SUBMITTING; different sessions run
    independently.
    """

    def __init__(self, store: SessionStore, gateway: AnalysisGateway) -> None:
        self._store = store
        self._gateway = gateway
        self._states: dict[str, ActionState] = {}
        self._jobs: dict[str, Job] = {}

    def state(self, session_id: str) -> ActionState:
        """SUBMITTING while an action is in flight, IDLE otherwise."""
        return self._states.get(session_id, ActionState.IDLE)

    def is_submitting(self, session_id: str) -> bool:
        return self.state(session_id) is ActionState.SUBMITTING

    def progress_text(self, session_id: str) -> str | None:
        """Loading text for the session's in-flight action, if any."""
        if not self.is_submitting(session_id):
            return None
        return self._jobs[session_id].progress

    async def submit(
        self,
        session_id: str,
        draft: Draft,
        action: DocumentAction | None = None,
    ) -> ActionState:
        """Submit the draft as one action and wait for its outcome.

        Args:
            session_id: Session that owns the action.
            draft: Input fields; cleared once the action is accepted.
            action: Explicit document action, or None to infer from the draft.

        Returns:
            SUCCEEDED or FAILED.

        Raises:
            InputValidationError: If the guard rejects the submission.
            SessionBusyError: If the session already has an action in flight.
        """
        text = draft.text.strip()
        attachment = draft.attachment
        try:
            job = route(text, attachment, action)
            if self.is_submitting(session_id):
                raise SessionBusyError("Please wait for the current request to finish.")
            session = self._store.get(session_id)
            if session is None:
                raise InputValidationError("This chat no longer exists.")
        except InputValidationError as e:
            logger.info(f"Rejected submission for session {session_id}: {e.message}")
            raise

        logger.info(f"Submitting {job.name} for session {session_id}")
        self._states[session_id] = ActionState.SUBMITTING
        self._jobs[session_id] = job
        state = ActionState.FAILED
        draft.clear()
        try:
            self._store.append_message(
                session_id,
                UserMessage(
                    content=text,
                    attachment=attachment.descriptor if attachment else None,
                ),
            )
            if session.title == NEW_CHAT_TITLE and not session.messages:
                self._store.update_session(
                    session_id, title=make_title(text, attachment, job)
                )

            payload = await self._request(job, text, attachment)
            state = ActionState.SUCCEEDED
        except GatewayError as e:
            logger.info(f"{job.label} failed for session {session_id}: {e.kind.value}")
            payload = ErrorPayload(message=f"{job.label} failed: {e.message}")
        except Exception as e:
            logger.exception(f"{job.label} crashed for session {session_id}")
            payload = ErrorPayload(message=f"{job.label} failed: {e}")
        finally:
            self._states.pop(session_id, None)
            self._jobs.pop(session_id, None)

        message = AssistantMessage(
            payload=payload,
            action=job.action,
            animate=state is ActionState.SUCCEEDED and job is Job.SUMMARIZE_DOCUMENT,
        )
        if self._store.append_message(session_id, message) is None:
            logger.info(f"Session {session_id} was deleted before {job.label} finished")
        return state

    async def _request(
        self,
        job: Job,
        text: str,
        attachment: Attachment | None,
    ) -> AnalysisResult | SummaryResult:
        match job:
            case Job.ANALYZE_TEXT:
                return await self._gateway.analyze_text(text)
            case Job.ANALYZE_DOCUMENT:
                return await self._gateway.analyze_document(attachment)
            case Job.SUMMARIZE_DOCUMENT:
                return await self._gateway.summarize_document(attachment)
