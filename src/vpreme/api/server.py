"""Uvicorn server runner for the vpreme API."""

from __future__ import annotations

from typing import TYPE_CHECKING

import uvicorn

from vpreme.api.app import create_app
from vpreme.logging import configure_logging

if TYPE_CHECKING:
    from vpreme.config import Settings


def run_server(settings: Settings) -> None:
    """Configure logging and run uvicorn with settings-backed host/port values."""
    configure_logging(
        level=settings.logging.level,
        fmt=settings.logging.format,
        log_file=settings.logging.file,
    )
    app = create_app(settings)
    uvicorn.run(
        app,
        host=settings.api.host,
        port=settings.api.port,
        log_level=settings.logging.level.lower(),
        log_config=None,
    )
