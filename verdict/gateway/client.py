"""Client for the remote analysis service.

Three operations, one request each. Every failure is raised once as a
typed GatewayError; retry policy belongs to the caller.
"""

import logging
from enum import Enum
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from verdict.attachments.validator import EXTENSION_TO_MIME, Attachment
from verdict.config import AppConfig
from verdict.models.schemas import AnalysisResult, SummaryResult

logger = logging.getLogger(__name__)

ANALYZE_TEXT_PATH = "/api/analyze_sms"
ANALYZE_DOCUMENT_PATH = "/api/analyze_document"
SUMMARIZE_DOCUMENT_PATH = "/api/summarize_document"

DEFAULT_TIMEOUT = 120.0
DEFAULT_QUESTION = "Summarize this document."

ResultT = TypeVar("ResultT", bound=BaseModel)


class GatewayErrorKind(str, Enum):
    """Machine-distinguishable failure categories."""

    NETWORK = "network"
    BAD_STATUS = "bad_status"
    DECODE = "decode"


class GatewayError(Exception):
    """Raised when a gateway call does not produce a usable result.

    Attributes:
        kind: Failure category.
        message: Human-readable reason.
        status_code: HTTP status for BAD_STATUS failures.
    """

    def __init__(
        self,
        kind: GatewayErrorKind,
        message: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code


def _status_message(response: httpx.Response) -> str:
    message = f"HTTP {response.status_code}"
    if response.reason_phrase:
        message += f" {response.reason_phrase}"

    try:
        detail = response.json().get("detail")
    except (ValueError, AttributeError):
        detail = None
    if isinstance(detail, str) and detail:
        message += f": {detail}"
    return message


class AnalysisGateway:
    """Async client for the sentiment and summarization endpoints."""

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        question: str = DEFAULT_QUESTION,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            base_url: Service base address, e.g. ``http://localhost:8000``.
            timeout: Transport timeout in seconds.
            question: Fixed question sent with summarize requests.
            transport: Optional httpx transport (tests, ASGI apps).
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._question = question
        self._transport = transport

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "AnalysisGateway":
        return cls(
            base_url=config.api_base_url,
            timeout=config.request_timeout,
            question=config.summarize_question,
            transport=transport,
        )

    async def analyze_text(self, text: str) -> AnalysisResult:
        """Analyze the sentiment of free text.

        Raises:
            GatewayError: On transport, status, or decoding failure.
        """
        data = await self._post(ANALYZE_TEXT_PATH, json={"text": text})
        return self._decode(AnalysisResult, data)

    async def analyze_document(self, attachment: Attachment) -> AnalysisResult:
        """Analyze the sentiment of an uploaded document.

        Raises:
            GatewayError: On transport, status, or decoding failure.
        """
        data = await self._post(ANALYZE_DOCUMENT_PATH, files=self._file_field(attachment))
        return self._decode(AnalysisResult, data)

    async def summarize_document(self, attachment: Attachment) -> SummaryResult:
        """Summarize an uploaded document.

        Raises:
            GatewayError: On transport, status, or decoding failure.
        """
        data = await self._post(
            SUMMARIZE_DOCUMENT_PATH,
            data={"question": self._question},
            files=self._file_field(attachment),
        )
        return self._decode(SummaryResult, data)

    def _file_field(self, attachment: Attachment) -> dict[str, tuple[str, bytes, str]]:
        descriptor = attachment.descriptor
        mime = descriptor.mime_hint or EXTENSION_TO_MIME[descriptor.extension]
        return {"file": (descriptor.name, attachment.content, mime)}

    async def _post(self, path: str, **kwargs: Any) -> Any:
        logger.info(f"POST {self._base_url}{path}")
        async with httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            try:
                response = await client.post(path, **kwargs)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                code = e.response.status_code
                logger.warning(f"{path} returned HTTP {code}")
                raise GatewayError(
                    GatewayErrorKind.BAD_STATUS,
                    _status_message(e.response),
                    status_code=code,
                ) from e
            except httpx.RequestError as e:
                logger.warning(f"{path} request failed: {e!r}")
                raise GatewayError(
                    GatewayErrorKind.NETWORK,
                    f"Connection failed: {str(e) or type(e).__name__}",
                ) from e

        try:
            return response.json()
        except ValueError as e:
            logger.warning(f"{path} returned a non-JSON body")
            raise GatewayError(GatewayErrorKind.DECODE, "Invalid JSON in response") from e

    @staticmethod
    def _decode(model: type[ResultT], data: Any) -> ResultT:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Unexpected {model.__name__} payload: {e}")
            raise GatewayError(
                GatewayErrorKind.DECODE,
                f"Unexpected response format ({e.error_count()} invalid fields)",
            ) from e
