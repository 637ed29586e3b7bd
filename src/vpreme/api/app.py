"""FastAPI application exposing the proxy endpoints."""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from vpreme.api.models import (
    ChatRequest,
    ChatResponse,
    ErrorResponse,
    MessageResponse,
    SearchRequest,
    SearchResponse,
    ShortenRequest,
    ShortenResponse,
    VideoAnalysisRequest,
    VideoAnalysisResponse,
)
from vpreme.config import Settings
from vpreme.exceptions import VpremeError
from vpreme.logging import request_logging_context
from vpreme.services import (
    ChatHandler,
    ServiceHandles,
    ShortenHandler,
    VideoAnalysisHandler,
)

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

_ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts: list[str] = []
    for error in exc.errors():
        loc = ".".join(str(part) for part in error.get("loc", ()))
        parts.append(f"{loc}: {error.get('msg', 'invalid')}")
    return "; ".join(parts)


def create_app(
    settings: Settings | None = None,
    services: ServiceHandles | None = None,
) -> FastAPI:
    """Create and configure the FastAPI server app.

    Args:
        settings: Resolved settings; loaded from the environment when omitted.
        services: Pre-built collaborator clients. When omitted they are
            built from ``settings`` and closed on application shutdown.
    """
    app_settings = settings or Settings.load()
    owns_services = services is None
    handles = services or ServiceHandles.from_settings(app_settings)

    app = FastAPI(title="vpreme API", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    analysis = VideoAnalysisHandler(
        handles.youtube,
        handles.completion,
        max_comments=app_settings.youtube.max_comments,
        max_tokens=app_settings.llm.analysis_max_tokens,
        temperature=app_settings.llm.analysis_temperature,
    )
    chat = ChatHandler(
        handles.completion,
        max_tokens=app_settings.llm.chat_max_tokens,
        temperature=app_settings.llm.chat_temperature,
    )
    shortener = ShortenHandler(handles.shortener)

    app.state.settings = app_settings
    app.state.services = handles

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        if owns_services:
            await handles.aclose()

    @app.exception_handler(VpremeError)
    async def vpreme_error_handler(request: Request, exc: VpremeError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={
                "error": "Invalid request body.",
                "details": _format_validation_errors(exc),
            },
        )

    @app.get("/")
    async def status() -> dict[str, str]:
        return {"status": "running"}

    @app.post(
        "/youtube",
        response_model=VideoAnalysisResponse,
        responses=_ERROR_RESPONSES,
    )
    async def analyze_video(payload: VideoAnalysisRequest) -> VideoAnalysisResponse:
        with request_logging_context("youtube", reference=payload.video_link):
            result = await analysis.analyze(payload.video_link)
        return VideoAnalysisResponse.from_result(result)

    @app.post("/search", response_model=SearchResponse)
    async def search(payload: SearchRequest) -> SearchResponse:
        # Product search has no backing integration yet.
        return SearchResponse(
            message="Amazon search integration to be implemented.",
            query=payload.query,
        )

    @app.post("/chat", response_model=ChatResponse, responses=_ERROR_RESPONSES)
    async def chat_reply(payload: ChatRequest) -> ChatResponse:
        history = (
            [turn.model_dump(exclude_unset=True) for turn in payload.chat_history]
            if payload.chat_history
            else None
        )
        with request_logging_context("chat", history_turns=len(history or [])):
            reply = await chat.reply(payload.user_message, history)
        return ChatResponse(reply=reply)

    @app.post("/shorten", response_model=ShortenResponse)
    async def shorten(payload: ShortenRequest) -> ShortenResponse:
        with request_logging_context("shorten"):
            short = await shortener.shorten(payload.url)
        return ShortenResponse(original=payload.url, short=short)

    @app.post("/log", response_model=MessageResponse)
    async def log_event() -> MessageResponse:
        return MessageResponse(message="Log feature placeholder.")

    logger.debug("app_created", cors_origins=app_settings.api.cors_origins)
    return app
