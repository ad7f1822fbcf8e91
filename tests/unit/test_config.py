"""Unit tests for AppConfig.

Tests environment loading and validation.
"""

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from verdict.config import AppConfig, get_config


class TestAppConfig:
    """Tests for AppConfig validation."""

    def test_valid_config_with_all_fields(self) -> None:
        """Config accepts valid values for all fields."""
        config = AppConfig(
            api_base_url="https://verdict.example.com",
            app_name="VerdictAI",
            request_timeout=30,
            summarize_question="Give me the gist.",
            reveal_interval=0.05,
            storage_key="chats",
        )

        assert config.api_base_url == "https://verdict.example.com"
        assert config.app_name == "VerdictAI"
        assert config.request_timeout == 30
        assert config.reveal_interval == 0.05
        assert config.storage_key == "chats"

    def test_defaults(self) -> None:
        """Config uses sensible defaults when the environment is empty."""
        with patch.dict("os.environ", {}, clear=True):
            config = AppConfig()

        assert config.api_base_url == "http://localhost:8000"
        assert config.app_name == "Verdict AI"
        assert config.request_timeout == 120
        assert config.storage_key == "verdict-chats"

    def test_base_url_normalized(self) -> None:
        """Whitespace and trailing slashes are removed."""
        config = AppConfig(api_base_url="  http://remote:8000/  ")

        assert config.api_base_url == "http://remote:8000"

    def test_empty_base_url_rejected(self) -> None:
        """Config rejects an empty base URL."""
        with pytest.raises(ValidationError) as exc_info:
            AppConfig(api_base_url="   ")

        assert "VERDICT_API_URL" in str(exc_info.value)

    @pytest.mark.parametrize("timeout", [0, -1, 601])
    def test_timeout_bounds(self, timeout: float) -> None:
        """Config rejects timeouts outside (0, 600]."""
        with pytest.raises(ValidationError) as exc_info:
            AppConfig(request_timeout=timeout)

        assert "request_timeout" in str(exc_info.value)

    def test_reveal_interval_bounds(self) -> None:
        """Config rejects non-positive reveal intervals."""
        with pytest.raises(ValidationError):
            AppConfig(reveal_interval=0)


class TestGetConfig:
    """Tests for get_config factory function."""

    def test_reads_environment(self) -> None:
        """get_config loads branding and endpoint from the environment."""
        env = {
            "VERDICT_API_URL": "https://web.example.app/",
            "VERDICT_APP_NAME": "VerdictAI",
            "VERDICT_REQUEST_TIMEOUT": "15",
        }
        with patch.dict("os.environ", env):
            config = get_config()

        assert config.api_base_url == "https://web.example.app"
        assert config.app_name == "VerdictAI"
        assert config.request_timeout == 15
