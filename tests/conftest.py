"""Shared fixtures for seal-preview tests."""

from __future__ import annotations

from typing import Any

import pytest

from seal_preview.config import SealSettings
from tests.fakes.fake_transport import make_group


@pytest.fixture
def settings() -> SealSettings:
    """Default test settings (local API URL, fixed token)."""
    return SealSettings(
        api_url="http://seal.test/seal-ws/v5",
        session_token="test-token",
        page_limit=25,
    )


@pytest.fixture
def sample_groups() -> list[dict[str, Any]]:
    """Raw metadata payload: a reviewed category, a plain one, one unanchored value."""
    return [
        make_group("Party.Review", [42, 100]),
        make_group("EffectiveDate", [7, None]),
        make_group("Governing Law", ["310"]),
    ]
