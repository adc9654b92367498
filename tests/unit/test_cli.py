"""Tests for the seal-preview CLI using typer's CliRunner and a fake transport."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any
from unittest.mock import patch

from typer.testing import CliRunner

from seal_preview.cli.main import app
from tests.fakes.fake_transport import FakeSealTransport

runner = CliRunner()

_ARGS = ["--api-url", "http://seal.test/v5", "--token", "tok"]


@contextmanager
def _patched(transport: FakeSealTransport) -> Iterator[None]:
    """Route the CLI client to *transport* and leave global logging untouched."""
    with patch(
        "seal_preview.providers.seal.client.SealTransport",
        lambda settings: transport,
    ), patch("seal_preview.cli.main.setup_logging"):
        yield


class TestFetchCommand:
    def test_writes_combined_json(self, tmp_path: Path, sample_groups: list[dict[str, Any]]) -> None:
        out = tmp_path / "result.json"
        with _patched(FakeSealTransport(sample_groups, html="<p>x</p>")):
            result = runner.invoke(app, ["fetch", "c1", "--output", str(out), *_ARGS])

        assert result.exit_code == 0, result.output
        payload = json.loads(out.read_text(encoding="utf-8"))
        assert payload["html"] == "<p>x</p>"
        assert payload["metadata"]["Party_42"]["inReview"] is True

    def test_join_failure_exits_with_code_1(self, sample_groups: list[dict[str, Any]]) -> None:
        with _patched(FakeSealTransport(sample_groups, fail_preview=True)):
            result = runner.invoke(app, ["fetch", "c1", *_ARGS])

        assert result.exit_code == 1

    def test_invalid_limit_exits_with_code_1(self) -> None:
        with _patched(FakeSealTransport()):
            result = runner.invoke(app, ["fetch", "c1", "--limit", "0", *_ARGS])

        assert result.exit_code == 1


class TestMetadataCommand:
    def test_in_review_only(self, sample_groups: list[dict[str, Any]]) -> None:
        with _patched(FakeSealTransport(sample_groups)):
            result = runner.invoke(app, ["metadata", "c1", "--in-review-only", *_ARGS])

        assert result.exit_code == 0, result.output
        assert "Party_42" in result.output
        assert "EffectiveDate_7" not in result.output


class TestLoginCommand:
    def test_prints_token(self) -> None:
        transport = FakeSealTransport(token="session-abc")
        with _patched(transport):
            result = runner.invoke(
                app, ["login", "--api-url", "http://seal.test/v5", "-u", "alice", "-p", "pw"],
            )

        assert result.exit_code == 0, result.output
        assert "session-abc" in result.output
        assert transport.login_calls == [("alice", "pw")]

    def test_flag_credentials_satisfy_startup_check(self, monkeypatch, caplog) -> None:
        for name in ("SEAL_SESSION_TOKEN", "SEAL_USERNAME", "SEAL_PASSWORD"):
            monkeypatch.delenv(name, raising=False)
        transport = FakeSealTransport()

        with _patched(transport), caplog.at_level(logging.WARNING, logger="seal_preview"):
            result = runner.invoke(
                app, ["login", "--api-url", "http://seal.test/v5", "-u", "alice", "-p", "pw"],
            )

        assert result.exit_code == 0, result.output
        assert "SEAL_USERNAME" not in caplog.text
        assert transport.login_calls == [("alice", "pw")]

    def test_missing_credentials_exit_with_code_1(self, monkeypatch) -> None:
        for name in ("SEAL_USERNAME", "SEAL_PASSWORD"):
            monkeypatch.delenv(name, raising=False)
        transport = FakeSealTransport()

        with _patched(transport):
            result = runner.invoke(app, ["login", "--api-url", "http://seal.test/v5"])

        assert result.exit_code == 1
        assert transport.login_calls == []
