import uuid

from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .ask import handle_ask
from .deps import get_chat_client, get_session_store
from .errors import error_response
from .exceptions import InvalidSessionState, SessionNotFound, UpstreamError
from .logging_config import logger
from .models import AskRequest, AskResponse
from .session_routes import router as session_router
from .session_store import SessionStore
from .upstream import OpenAIChatClient


class HealthResponse(BaseModel):
    status: str = "ok"


async def handle_session_not_found(request: Request, exc: SessionNotFound):
    return error_response(
        status.HTTP_404_NOT_FOUND,
        "not_found",
        str(exc),
        details={"session_id": exc.session_id},
    )


async def handle_invalid_session_state(request: Request, exc: InvalidSessionState):
    return error_response(
        status.HTTP_409_CONFLICT,
        "conflict",
        str(exc),
        details={"session_id": exc.session_id},
    )


async def handle_upstream_error(request: Request, exc: UpstreamError):
    return error_response(status.HTTP_502_BAD_GATEWAY, "upstream_error", str(exc))


async def handle_unexpected_error(request: Request, exc: Exception):
    error_id = uuid.uuid4().hex
    logger.exception(
        "Unhandled error %s %s (error_id=%s)",
        request.method,
        request.url.path,
        error_id,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error_code": "internal_error",
            "message": "Internal server error, please retry later",
            "error_id": error_id,
        },
    )


def create_app() -> FastAPI:
    app = FastAPI(title="GPT Proxy", version="0.1.0")
    app.add_exception_handler(SessionNotFound, handle_session_not_found)
    app.add_exception_handler(InvalidSessionState, handle_invalid_session_state)
    app.add_exception_handler(UpstreamError, handle_upstream_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    app.include_router(session_router)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        client_host = request.client.host if request.client else "-"
        logger.info("HTTP %s %s from %s", request.method, request.url.path, client_host)
        response = await call_next(request)
        logger.info(
            "HTTP %s %s -> %s", request.method, request.url.path, response.status_code
        )
        return response

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse()

    @app.post("/v1/ask", response_model=AskResponse)
    async def ask_endpoint(
        payload: AskRequest,
        store: SessionStore = Depends(get_session_store),
        client: OpenAIChatClient = Depends(get_chat_client),
    ) -> AskResponse:
        """
        Send a prompt to an OpenAI model, optionally within a session.
        """
        return await handle_ask(payload, store, client)

    return app


__all__ = ["create_app"]
