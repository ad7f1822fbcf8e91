"""Attachment validation for the document actions.

Responsibilities:
    - Allow-list check by extension (authoritative) or content type
    - Normalized AttachmentDescriptor creation
    - Pairing accepted descriptors with in-flight file bytes
"""

from verdict.attachments.validator import (
    ACCEPT_ATTRIBUTE,
    ALLOWED_EXTENSIONS,
    Attachment,
    AttachmentError,
    CandidateFile,
    RejectedFormat,
    attach,
    validate,
)

__all__ = [
    "ACCEPT_ATTRIBUTE",
    "ALLOWED_EXTENSIONS",
    "Attachment",
    "AttachmentError",
    "CandidateFile",
    "RejectedFormat",
    "attach",
    "validate",
]
