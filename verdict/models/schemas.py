import uuid
from datetime import UTC, datetime
from enum import Enum
from typing import Annotated, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

NEW_CHAT_TITLE = "New Chat"

Extension = Literal["txt", "pdf", "docx"]


def _now() -> datetime:
    return datetime.now(UTC)


def _message_id() -> str:
    return uuid.uuid4().hex


class DocumentAction(str, Enum):
    """Actions available for an attached document."""

    ANALYZE_SENTIMENT = "analyze_sentiment"
    SUMMARIZE = "summarize"


class AttachmentDescriptor(BaseModel):
    """Normalized description of an accepted attachment.

    Only the attachment validator creates these, so ``extension`` is always
    one of the supported document types.

    Attributes:
        name: Original file name.
        size_bytes: File size in bytes.
        mime_hint: Content type reported by the source, if any.
        extension: Normalized lowercase extension.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    size_bytes: int = Field(..., ge=0)
    mime_hint: str | None = None
    extension: Extension


class DistributionEntry(BaseModel):
    """One label of the sentiment distribution.

    Accepts the remote service's ``emotion``/``prob`` field names.
    """

    model_config = ConfigDict(frozen=True)

    label: str = Field(validation_alias=AliasChoices("label", "emotion"))
    probability_percent: float = Field(
        ge=0.0,
        le=100.0,
        validation_alias=AliasChoices("probability_percent", "probabilityPercent", "prob"),
    )


class AnalysisResult(BaseModel):
    """Sentiment analysis result, kept exactly as the service produced it.

    The predicted label and the distribution arrive together and are never
    recomputed locally.

    Attributes:
        predicted_label: Label with the highest probability.
        confidence_percent: Probability of the predicted label.
        distribution: Every detected label with its probability.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["analysis"] = "analysis"
    predicted_label: str = Field(
        validation_alias=AliasChoices(
            "predicted_label", "predictedLabel", "Predicted_Sentiment"
        ),
    )
    confidence_percent: float = Field(
        ge=0.0,
        le=100.0,
        validation_alias=AliasChoices("confidence_percent", "confidencePercent", "cd"),
    )
    distribution: tuple[DistributionEntry, ...] = Field(
        default=(),
        validation_alias=AliasChoices("distribution", "emotions"),
    )


class SummaryResult(BaseModel):
    """Summarization result."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["summary"] = "summary"
    summary_text: str = Field(
        validation_alias=AliasChoices("summary_text", "summaryText", "summary"),
    )


class ErrorPayload(BaseModel):
    """Terminal failure shown in place of a result."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["error"] = "error"
    message: str


Payload = Annotated[
    AnalysisResult | SummaryResult | ErrorPayload, Field(discriminator="kind")
]


class UserMessage(BaseModel):
    """Message authored by the user.

    Attributes:
        id: Unique message identifier.
        content: Trimmed input text (may be empty for document actions).
        attachment: Descriptor of the file sent with the message.
        created_at: Creation timestamp (UTC).
    """

    model_config = ConfigDict(frozen=True)

    role: Literal["user"] = "user"
    id: str = Field(default_factory=_message_id)
    content: str = ""
    attachment: AttachmentDescriptor | None = None
    created_at: datetime = Field(default_factory=_now)


class AssistantMessage(BaseModel):
    """Message carrying the outcome of an analysis request.

    Attributes:
        id: Unique message identifier.
        payload: Analysis result, summary, or error.
        action: Document action that produced the payload, if any.
        created_at: Creation timestamp (UTC).
        animate: Whether the text should be revealed progressively.
            Never persisted, so reloaded messages display immediately.
    """

    model_config = ConfigDict(frozen=True)

    role: Literal["assistant"] = "assistant"
    id: str = Field(default_factory=_message_id)
    payload: Payload
    action: DocumentAction | None = None
    created_at: datetime = Field(default_factory=_now)
    animate: bool = Field(default=False, exclude=True)


Message = Annotated[UserMessage | AssistantMessage, Field(discriminator="role")]


class Session(BaseModel):
    """A persisted chat thread.

    Attributes:
        id: Unique session identifier.
        title: ``New Chat`` until the first submission renames it.
        messages: Append-only message log, in arrival order.
        created_at: Creation timestamp (UTC).
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    title: str = NEW_CHAT_TITLE
    messages: tuple[Message, ...] = ()
    created_at: datetime = Field(default_factory=_now)
