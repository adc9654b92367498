"""Environment-driven configuration via Pydantic Settings."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class SealSettings(BaseSettings):
    """All configuration is driven by env vars with ``SEAL_`` prefix.

    Example::

        export SEAL_API_URL=https://seal.example.com/seal-ws/v5
        export SEAL_SESSION_TOKEN=...
    """

    model_config = {"env_prefix": "SEAL_"}

    # ── API ──────────────────────────────────────────────────────────
    api_url: str = "http://localhost:8080/seal-ws/v5"
    session_token: str = ""
    request_timeout: float = 30.0

    # ── Login ────────────────────────────────────────────────────────
    username: str = ""
    password: str = ""

    # ── Metadata pagination ──────────────────────────────────────────
    page_limit: int = 25

    # ── Observability ────────────────────────────────────────────────
    log_level: str = "INFO"
