"""vpreme-backend: API proxy for video analysis, chat, and link shortening."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("vpreme-backend")
except PackageNotFoundError:
    __version__ = "0.1.0"

__all__ = ["__version__"]
