"""Unit tests for attachment validation."""

import pytest
import pytest_check as check

from verdict.attachments.validator import (
    REJECTION_MESSAGE,
    CandidateFile,
    RejectedFormat,
    attach,
    validate,
)

DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class TestValidateAccepts:
    """Tests for accepted files."""

    @pytest.mark.parametrize(
        ("name", "extension"),
        [
            ("notes.txt", "txt"),
            ("REPORT.PDF", "pdf"),
            ("Minutes.DocX", "docx"),
            ("archive.v2.Txt", "txt"),
        ],
    )
    def test_allowed_extension_any_case(self, name: str, extension: str) -> None:
        """Allowed extensions are accepted regardless of case."""
        descriptor = validate(CandidateFile(name=name, content=b"abc"))

        check.equal(descriptor.extension, extension)
        check.equal(descriptor.name, name)
        check.equal(descriptor.size_bytes, 3)

    def test_extension_wins_over_wrong_content_type(self) -> None:
        """A correct extension is enough even with a misleading content type."""
        descriptor = validate(
            CandidateFile(name="report.pdf", content_type="application/octet-stream")
        )

        check.equal(descriptor.extension, "pdf")
        check.equal(descriptor.mime_hint, "application/octet-stream")

    def test_canonical_mime_without_extension(self) -> None:
        """A canonical content type is accepted and the extension normalized."""
        descriptor = validate(CandidateFile(name="scan", content_type=DOCX_MIME))

        check.equal(descriptor.extension, "docx")

    def test_mime_parameters_are_ignored(self) -> None:
        """Content type parameters such as charset do not block acceptance."""
        descriptor = validate(
            CandidateFile(name="notes", content_type="text/plain; charset=utf-8")
        )

        check.equal(descriptor.extension, "txt")
        check.equal(descriptor.mime_hint, "text/plain")


class TestValidateRejects:
    """Tests for rejected files."""

    @pytest.mark.parametrize(
        ("name", "content_type"),
        [
            ("image.jpg", "image/jpeg"),
            ("setup.exe", None),
            ("README", None),
            ("sheet.xlsx", ""),
        ],
    )
    def test_rejects_unsupported_files(self, name: str, content_type: str | None) -> None:
        """Unsupported files raise RejectedFormat with a display message."""
        with pytest.raises(RejectedFormat) as exc_info:
            validate(CandidateFile(name=name, content_type=content_type))

        assert exc_info.value.name == name
        assert exc_info.value.message == REJECTION_MESSAGE


class TestAttach:
    """Tests for pairing descriptors with file bytes."""

    def test_attach_keeps_content_out_of_descriptor(self) -> None:
        """Bytes travel with the attachment but never with the descriptor."""
        attachment = attach(CandidateFile(name="a.txt", content=b"hello"))

        check.equal(attachment.content, b"hello")
        check.equal(attachment.name, "a.txt")
        check.is_not_in("content", attachment.descriptor.model_dump())

    def test_nameless_file_gets_fallback_name(self) -> None:
        """A file with no name but a canonical content type is still usable."""
        attachment = attach(
            CandidateFile(name="", content_type="application/pdf", content=b"%PDF")
        )

        check.equal(attachment.name, "document.pdf")
        check.equal(attachment.descriptor.extension, "pdf")
        check.equal(attachment.descriptor.size_bytes, 4)
