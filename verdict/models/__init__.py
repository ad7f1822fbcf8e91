"""Pydantic models for sessions, messages, and analysis results.

Provides type safety, validation, and lossless JSON persistence.

Models:
    - Session: Chat thread with its append-only message log
    - UserMessage / AssistantMessage: Entries of the log
    - AnalysisResult / SummaryResult / ErrorPayload: Assistant payloads
    - AttachmentDescriptor: Accepted document metadata
"""

from verdict.models.schemas import (
    NEW_CHAT_TITLE,
    AnalysisResult,
    AssistantMessage,
    AttachmentDescriptor,
    DistributionEntry,
    DocumentAction,
    ErrorPayload,
    Message,
    Payload,
    Session,
    SummaryResult,
    UserMessage,
)

__all__ = [
    "NEW_CHAT_TITLE",
    "AnalysisResult",
    "AssistantMessage",
    "AttachmentDescriptor",
    "DistributionEntry",
    "DocumentAction",
    "ErrorPayload",
    "Message",
    "Payload",
    "Session",
    "SummaryResult",
    "UserMessage",
]
