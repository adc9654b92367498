"""Startup validation: fail-fast on critical misconfigurations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from seal_preview.exceptions import ConfigurationError

if TYPE_CHECKING:
    from seal_preview.config import SealSettings

log = logging.getLogger(__name__)


def validate_settings(settings: SealSettings) -> None:
    """Validate settings before any request is issued. Raises ConfigurationError."""
    _check_api_url(settings)
    _check_pagination(settings)
    _check_timeout(settings)
    _check_credentials(settings)


def _check_api_url(settings: SealSettings) -> None:
    if not settings.api_url.strip():
        raise ConfigurationError("SEAL_API_URL must not be empty.")
    if not settings.api_url.startswith(("http://", "https://")):
        raise ConfigurationError(
            f"SEAL_API_URL must be an http(s) URL, got '{settings.api_url}'."
        )


def _check_pagination(settings: SealSettings) -> None:
    if settings.page_limit <= 0:
        raise ConfigurationError(
            f"SEAL_PAGE_LIMIT must be a positive integer, got {settings.page_limit}."
        )


def _check_timeout(settings: SealSettings) -> None:
    if settings.request_timeout <= 0:
        raise ConfigurationError(
            f"SEAL_REQUEST_TIMEOUT must be positive, got {settings.request_timeout}."
        )


def _check_credentials(settings: SealSettings) -> None:
    """Warn when there is neither a session token nor login credentials."""
    if not settings.session_token and not (settings.username and settings.password):
        log.warning(
            "Neither SEAL_SESSION_TOKEN nor SEAL_USERNAME/SEAL_PASSWORD is set. "
            "Requests will be sent without a session token."
        )
