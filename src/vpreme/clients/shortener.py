"""Bitly v4 link shortener client."""

from __future__ import annotations

import httpx

from vpreme.exceptions import DownstreamError


class BitlyShortener:
    """Shorten long URLs through ``POST /shorten``."""

    def __init__(
        self,
        token: str | None,
        base_url: str = "https://api-ssl.bitly.com/v4",
        timeout: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._token = token
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def shorten(self, long_url: str) -> str:
        """Return the short link for ``long_url``.

        Raises:
            DownstreamError: If no token is configured, the call fails,
                or the response carries no ``link``.
        """
        if not self._token:
            raise DownstreamError("Bitly token is not configured")

        try:
            response = await self._client.post(
                "/shorten",
                json={"long_url": long_url},
                headers={"Authorization": f"Bearer {self._token}"},
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise DownstreamError("Bitly request failed", details=str(exc)) from exc

        link = payload.get("link") if isinstance(payload, dict) else None
        if not isinstance(link, str) or not link:
            raise DownstreamError("Bitly response had no link")
        return link
