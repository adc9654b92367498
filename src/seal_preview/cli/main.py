"""CLI for seal-preview: login / preview / metadata / fetch commands."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any, Optional, TypeVar

import typer
from rich.console import Console

from seal_preview.config import SealSettings
from seal_preview.core.logging_config import setup_logging
from seal_preview.exceptions import JoinFailure, SealError
from seal_preview.models import MetadataIndex
from seal_preview.providers.seal.client import SealClient

app = typer.Typer(name="seal-preview", help="Fetch Seal contract previews and metadata annotations")
console = Console()
err_console = Console(stderr=True)

T = TypeVar("T")


def _build_settings(
    api_url: Optional[str],
    token: Optional[str],
    limit: Optional[int] = None,
    verbose: bool = False,
    username: Optional[str] = None,
    password: Optional[str] = None,
) -> SealSettings:
    """Build settings, overriding env defaults with CLI flags."""
    overrides: dict[str, Any] = {}
    if api_url:
        overrides["api_url"] = api_url
    if token:
        overrides["session_token"] = token
    if limit is not None:
        overrides["page_limit"] = limit
    if username:
        overrides["username"] = username
    if password:
        overrides["password"] = password
    if verbose:
        overrides["log_level"] = "DEBUG"
    settings = SealSettings(**overrides)
    setup_logging(settings)
    return settings


def _run(settings: SealSettings, call: Callable[[SealClient], Awaitable[T]]) -> T:
    """Run *call* against a fresh client, turning library errors into exit code 1."""

    async def _go() -> T:
        async with SealClient(settings) as client:
            return await call(client)

    try:
        return asyncio.run(_go())
    except JoinFailure as e:
        for key, error in e.errors.items():
            err_console.print(f"[red]{key} failed:[/red] {error}")
        raise typer.Exit(code=1)
    except SealError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)


def _dump_index(index: MetadataIndex) -> str:
    return json.dumps(
        {ann_id: ann.model_dump(mode="json", by_alias=True) for ann_id, ann in index.items()},
        indent=2,
    )


@app.command()
def login(
    api_url: Optional[str] = typer.Option(None, "--api-url", help="Seal API base URL"),
    username: Optional[str] = typer.Option(None, "--username", "-u"),
    password: Optional[str] = typer.Option(None, "--password", "-p"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Log in and print a session token."""
    settings = _build_settings(
        api_url, None, verbose=verbose, username=username, password=password,
    )
    token = _run(settings, lambda client: client.login())
    console.print(token)


@app.command()
def preview(
    contract_id: str = typer.Argument(..., help="Contract id"),
    api_url: Optional[str] = typer.Option(None, "--api-url", help="Seal API base URL"),
    token: Optional[str] = typer.Option(None, "--token", help="Session token"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Print the preview markup of a contract."""
    settings = _build_settings(api_url, token, verbose=verbose)
    html = _run(settings, lambda client: client.get_preview(contract_id))
    console.print(html, markup=False, highlight=False)


@app.command()
def metadata(
    contract_id: str = typer.Argument(..., help="Contract id"),
    limit: Optional[int] = typer.Option(None, "--limit", help="Metadata page size"),
    in_review_only: bool = typer.Option(False, "--in-review-only", help="Only annotations still in review"),
    api_url: Optional[str] = typer.Option(None, "--api-url", help="Seal API base URL"),
    token: Optional[str] = typer.Option(None, "--token", help="Session token"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Print the offset-indexed metadata of a contract as JSON."""
    settings = _build_settings(api_url, token, limit=limit, verbose=verbose)
    index = _run(settings, lambda client: client.get_metadata(contract_id))
    if in_review_only:
        index = {ann_id: ann for ann_id, ann in index.items() if ann.in_review}
    console.print_json(_dump_index(index))


@app.command()
def fetch(
    contract_id: str = typer.Argument(..., help="Contract id"),
    output: Optional[Path] = typer.Option(None, help="Write the combined JSON here"),
    limit: Optional[int] = typer.Option(None, "--limit", help="Metadata page size"),
    api_url: Optional[str] = typer.Option(None, "--api-url", help="Seal API base URL"),
    token: Optional[str] = typer.Option(None, "--token", help="Session token"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Fetch preview markup and metadata in parallel."""
    settings = _build_settings(api_url, token, limit=limit, verbose=verbose)
    result = _run(settings, lambda client: client.get_all(contract_id))
    payload = result.model_dump_json(by_alias=True, indent=2)

    if output:
        output.write_text(payload, encoding="utf-8")
        console.print(f"[green]Saved preview and {len(result.metadata)} annotations to {output}[/green]")
    else:
        console.print_json(payload)


if __name__ == "__main__":
    app()
