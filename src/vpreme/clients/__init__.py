"""Async clients for the external collaborators."""

from __future__ import annotations

from vpreme.clients.completion import CompletionClient
from vpreme.clients.shortener import BitlyShortener
from vpreme.clients.youtube import YouTubeDataClient

__all__ = ["BitlyShortener", "CompletionClient", "YouTubeDataClient"]
