"""Chat-completion client. Uses litellm for provider-agnostic LLM access."""

from __future__ import annotations

from typing import Any

import litellm
import structlog

from vpreme.exceptions import DownstreamError

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


class CompletionClient:
    """Submit message lists to the configured completion model."""

    def __init__(
        self,
        model: str,
        api_key: str | None = None,
        timeout: int = 60,
    ) -> None:
        self._model = model
        self._api_key = api_key
        self._timeout = timeout

    @property
    def model(self) -> str:
        return self._model

    async def complete(
        self,
        messages: list[dict[str, Any]],
        *,
        max_tokens: int,
        temperature: float,
    ) -> str:
        """Return the first choice's text, stripped.

        Raises:
            DownstreamError: If the provider call fails or returns no text.
        """
        kwargs: dict[str, Any] = {
            "model": self._model,
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "timeout": self._timeout,
        }
        if self._api_key:
            kwargs["api_key"] = self._api_key

        try:
            response = await litellm.acompletion(**kwargs)
        except Exception as exc:
            raise DownstreamError("Completion request failed", details=str(exc)) from exc

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError) as exc:
            raise DownstreamError(
                "Completion response had no choices", details=str(exc)
            ) from exc
        if not content:
            raise DownstreamError("Completion response was empty")

        usage = getattr(response, "usage", None)
        logger.info(
            "completion_ok",
            model=self._model,
            messages=len(messages),
            total_tokens=getattr(usage, "total_tokens", None),
        )
        return content.strip()
