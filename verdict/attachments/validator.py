"""Attachment validation for document actions.

Accepts a picked file by extension or content type and produces the
normalized descriptor the rest of the core relies on. Never reads contents.
"""

import logging
from pathlib import PurePath

from pydantic import BaseModel, ConfigDict, Field

from verdict.models.schemas import AttachmentDescriptor

logger = logging.getLogger(__name__)

# Constants
ALLOWED_EXTENSIONS = ("txt", "pdf", "docx")
MIME_TO_EXTENSION = {
    "text/plain": "txt",
    "application/pdf": "pdf",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
}
EXTENSION_TO_MIME = {ext: mime for mime, ext in MIME_TO_EXTENSION.items()}
ACCEPT_ATTRIBUTE = ",".join(f".{ext}" for ext in ALLOWED_EXTENSIONS)
REJECTION_MESSAGE = "Please select a .txt, .pdf, or .docx file"
FALLBACK_STEM = "document"


class AttachmentError(Exception):
    """Base class for attachment failures."""


class RejectedFormat(AttachmentError):
    """Raised when a file is neither an allowed extension nor content type."""

    def __init__(self, name: str, message: str = REJECTION_MESSAGE) -> None:
        super().__init__(message)
        self.name = name
        self.message = message


class CandidateFile(BaseModel):
    """A file as handed over by the upload surface.

    Attributes:
        name: Reported file name.
        content_type: Declared content type, often unreliable or missing.
        content: Raw bytes, sent to the gateway but never persisted.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    content_type: str | None = None
    content: bytes = Field(default=b"", repr=False)


class Attachment(BaseModel):
    """An accepted file: persisted descriptor plus in-flight bytes."""

    model_config = ConfigDict(frozen=True)

    descriptor: AttachmentDescriptor
    content: bytes = Field(default=b"", repr=False)

    @property
    def name(self) -> str:
        return self.descriptor.name


def _extension_of(name: str) -> str:
    """Return the lowercase extension without the dot."""
    return PurePath(name).suffix.lstrip(".").lower()


def _normalize_mime(content_type: str | None) -> str:
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def validate(candidate: CandidateFile) -> AttachmentDescriptor:
    """Validate a candidate file and build its descriptor.

    The extension is authoritative; the content type is a fallback for
    sources that report a canonical MIME string with an odd file name.
    A nameless file accepted by content type is called ``document.<ext>``.

    Args:
        candidate: The picked file.

    Returns:
        AttachmentDescriptor with a normalized extension.

    Raises:
        RejectedFormat: If neither extension nor content type is allowed.
    """
    extension = _extension_of(candidate.name)
    mime = _normalize_mime(candidate.content_type)

    if extension not in ALLOWED_EXTENSIONS:
        if mime not in MIME_TO_EXTENSION:
            logger.info(f"Rejected attachment {candidate.name!r} ({mime or 'no type'})")
            raise RejectedFormat(candidate.name)
        extension = MIME_TO_EXTENSION[mime]

    return AttachmentDescriptor(
        name=candidate.name.strip() or f"{FALLBACK_STEM}.{extension}",
        size_bytes=len(candidate.content),
        mime_hint=mime or None,
        extension=extension,
    )


def attach(candidate: CandidateFile) -> Attachment:
    """Validate a candidate and pair its descriptor with the file bytes.

    Raises:
        RejectedFormat: If the file type is not supported.
    """
    return Attachment(descriptor=validate(candidate), content=candidate.content)
