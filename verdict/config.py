"""Application configuration with environment variable loading.

Pydantic-based configuration for the chat core. Branding and the remote
analysis endpoint are inputs, so one build serves every deployment.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()


class AppConfig(BaseModel):
    """Configuration for the Verdict chat core.

    Attributes:
        api_base_url: Base URL of the remote analysis service.
        app_name: Product name shown in the header and welcome screen.
        tagline: One-line description shown on the welcome screen.
        request_timeout: Transport timeout in seconds for gateway calls.
        summarize_question: Fixed question sent with summarize requests.
        reveal_interval: Seconds between reveal frames.
        storage_key: Durable storage key holding the session list.
    """

    api_base_url: str = Field(
        default_factory=lambda: os.getenv("VERDICT_API_URL", "http://localhost:8000"),
        description="Base URL of the analysis service",
    )
    app_name: str = Field(
        default_factory=lambda: os.getenv("VERDICT_APP_NAME", "Verdict AI"),
        description="Product name",
    )
    tagline: str = Field(
        default_factory=lambda: os.getenv(
            "VERDICT_TAGLINE",
            "Your intelligent companion for understanding sentiment in text and documents.",
        ),
        description="Welcome screen tagline",
    )
    request_timeout: float = Field(
        default_factory=lambda: float(os.getenv("VERDICT_REQUEST_TIMEOUT", "120")),
        gt=0.0,
        le=600.0,
        description="Transport timeout for gateway requests, in seconds",
    )
    summarize_question: str = Field(
        default_factory=lambda: os.getenv(
            "VERDICT_SUMMARIZE_QUESTION", "Summarize this document."
        ),
        description="Question field sent with summarize requests",
    )
    reveal_interval: float = Field(
        default_factory=lambda: float(os.getenv("VERDICT_REVEAL_INTERVAL", "0.02")),
        gt=0.0,
        le=1.0,
        description="Delay between reveal frames, in seconds",
    )
    storage_key: str = Field(
        default_factory=lambda: os.getenv("VERDICT_STORAGE_KEY", "verdict-chats"),
        min_length=1,
        description="Storage key for the persisted session list",
    )

    @field_validator("api_base_url")
    @classmethod
    def validate_api_base_url(cls, v: str) -> str:
        """Validate that a base URL is provided and normalize it."""
        v = v.strip().rstrip("/")
        if not v:
            raise ValueError("API base URL required. Set VERDICT_API_URL in .env")
        return v


def get_config() -> AppConfig:
    """Create application configuration from environment.

    Returns:
        Configured AppConfig instance.

    Raises:
        ValueError: If the API base URL is empty.
    """
    return AppConfig()
