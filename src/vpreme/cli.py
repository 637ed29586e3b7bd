"""Typer CLI entry point for vpreme."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from vpreme import __version__
from vpreme.api.server import run_server
from vpreme.config import Settings, format_validation_error
from vpreme.exceptions import VpremeError
from vpreme.logging import configure_logging, request_logging_context
from vpreme.services import ServiceHandles, ShortenHandler, VideoAnalysisHandler

if TYPE_CHECKING:
    from vpreme.domain import AnalysisResult

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name="vpreme",
    help="API proxy for video analysis, shopping chat, and link shortening.",
    no_args_is_help=True,
)

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Path to config YAML file."),
]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_settings(
    config_path: Path | None = None,
    **overrides: Any,
) -> Settings:
    """Load settings with error handling and user-friendly messages."""
    from pydantic import ValidationError

    try:
        return Settings.load(config_path=config_path, **overrides)
    except ValidationError as exc:
        err_console.print(
            Panel(
                format_validation_error(exc),
                title="Configuration Error",
                border_style="red",
            )
        )
        raise typer.Exit(code=1) from exc


def _configure_cli_logging(settings: Settings) -> None:
    # Keep stdout for command output; logs go to stderr at WARNING and up.
    configure_logging(
        level="WARNING" if settings.logging.level == "INFO" else settings.logging.level,
        fmt=settings.logging.format,
        log_file=settings.logging.file,
    )


def _display_error(exc: VpremeError) -> None:
    body = exc.message if exc.details is None else f"{exc.message}\n\n{exc.details}"
    err_console.print(Panel(body, title="Error", border_style="red"))


async def _analyze(settings: Settings, reference: str) -> AnalysisResult:
    services = ServiceHandles.from_settings(settings)
    handler = VideoAnalysisHandler(
        services.youtube,
        services.completion,
        max_comments=settings.youtube.max_comments,
        max_tokens=settings.llm.analysis_max_tokens,
        temperature=settings.llm.analysis_temperature,
    )
    try:
        with request_logging_context("cli.analyze", reference=reference):
            return await handler.analyze(reference)
    finally:
        await services.aclose()


async def _shorten(settings: Settings, url: str) -> str | None:
    services = ServiceHandles.from_settings(settings)
    try:
        with request_logging_context("cli.shorten"):
            return await ShortenHandler(services.shortener).shorten(url)
    finally:
        await services.aclose()


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold]vpreme[/bold] {__version__}")
        raise typer.Exit


@app.callback()
def common(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """vpreme global options."""


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def serve(
    port: Annotated[
        int | None,
        typer.Option("--port", help="Port to bind the FastAPI server. [default: 3000]"),
    ] = None,
    host: Annotated[
        str | None,
        typer.Option(
            "--host", help="Host/interface to bind the FastAPI server. [default: 0.0.0.0]"
        ),
    ] = None,
    config: ConfigOption = None,
) -> None:
    """Run the vpreme FastAPI server."""
    # Only explicit flags override; otherwise env, .env and YAML apply.
    api: dict[str, Any] = {}
    if port is not None:
        api["port"] = port
    if host is not None:
        api["host"] = host
    overrides: dict[str, Any] = {"api": api} if api else {}
    settings = _load_settings(config, **overrides)
    run_server(settings)


@app.command()
def analyze(
    reference: Annotated[
        str, typer.Argument(help="YouTube URL (watch or shorts) or 11-character ID.")
    ],
    config: ConfigOption = None,
) -> None:
    """Analyze one video and print metadata plus suggestions."""
    settings = _load_settings(config)
    _configure_cli_logging(settings)

    try:
        result = asyncio.run(_analyze(settings, reference))
    except VpremeError as exc:
        _display_error(exc)
        raise typer.Exit(code=1) from exc

    meta = result.metadata
    table = Table(title=meta.title or meta.video_id, show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Video ID", meta.video_id)
    table.add_row("Published", meta.published_at)
    table.add_row("Duration", f"{meta.duration_seconds}s")
    table.add_row("Views", str(meta.view_count))
    table.add_row("Likes", str(meta.like_count))
    table.add_row("Comments", str(meta.comment_count))
    console.print(table)
    console.print(Panel(result.suggestions, title="Suggestions", border_style="green"))


@app.command()
def shorten(
    url: Annotated[str, typer.Argument(help="Long URL to shorten.")],
    config: ConfigOption = None,
) -> None:
    """Shorten a URL; prints the input unchanged when shortening fails."""
    settings = _load_settings(config)
    _configure_cli_logging(settings)
    console.print(asyncio.run(_shorten(settings, url)))


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
