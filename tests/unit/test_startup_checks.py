"""Tests for settings and startup validation checks."""

from __future__ import annotations

import logging
import os
from unittest.mock import patch

import pytest

from seal_preview.config import SealSettings
from seal_preview.core.startup_checks import validate_settings
from seal_preview.exceptions import ConfigurationError


class TestSettingsFromEnv:
    def test_defaults(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            settings = SealSettings()
        assert settings.page_limit == 25
        assert settings.request_timeout == 30.0
        assert settings.log_level == "INFO"

    def test_env_prefix(self) -> None:
        env = {
            "SEAL_API_URL": "https://seal.example.com/seal-ws/v5",
            "SEAL_SESSION_TOKEN": "tok",
            "SEAL_PAGE_LIMIT": "50",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = SealSettings()
        assert settings.api_url == "https://seal.example.com/seal-ws/v5"
        assert settings.session_token == "tok"
        assert settings.page_limit == 50


class TestValidateSettings:
    def test_accepts_valid_settings(self, settings: SealSettings) -> None:
        validate_settings(settings)  # Should not raise

    @pytest.mark.parametrize("limit", [0, -25])
    def test_rejects_non_positive_page_limit(self, settings: SealSettings, limit: int) -> None:
        with pytest.raises(ConfigurationError, match="SEAL_PAGE_LIMIT"):
            validate_settings(settings.model_copy(update={"page_limit": limit}))

    def test_rejects_empty_api_url(self, settings: SealSettings) -> None:
        with pytest.raises(ConfigurationError, match="SEAL_API_URL"):
            validate_settings(settings.model_copy(update={"api_url": "  "}))

    def test_rejects_non_http_api_url(self, settings: SealSettings) -> None:
        with pytest.raises(ConfigurationError, match="http"):
            validate_settings(settings.model_copy(update={"api_url": "ftp://seal"}))

    def test_rejects_non_positive_timeout(self, settings: SealSettings) -> None:
        with pytest.raises(ConfigurationError, match="SEAL_REQUEST_TIMEOUT"):
            validate_settings(settings.model_copy(update={"request_timeout": 0}))

    def test_warns_without_credentials(self, settings: SealSettings, caplog) -> None:
        anonymous = settings.model_copy(update={"session_token": ""})
        with caplog.at_level(logging.WARNING, logger="seal_preview"):
            validate_settings(anonymous)
        assert "SEAL_SESSION_TOKEN" in caplog.text
