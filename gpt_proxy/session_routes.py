from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends, status
from pydantic import BaseModel, Field

from gpt_proxy.deps import get_session_store
from gpt_proxy.errors import not_found
from gpt_proxy.models import Message, SessionSummary
from gpt_proxy.session_store import SessionStore


router = APIRouter(tags=["sessions"])


class CreateSessionRequest(BaseModel):
    system_prompt: Optional[str] = Field(
        default=None, description="Pinned system prompt for the conversation"
    )


class CreateSessionResponse(BaseModel):
    session_id: str
    message: str = "Session created successfully"
    system_prompt: str = Field(..., description="'Set' or 'None'")


class SessionListResponse(BaseModel):
    sessions: list[SessionSummary]
    total: int


class SessionHistoryResponse(BaseModel):
    session_id: str
    messages: list[Message]


class ClearSessionResponse(BaseModel):
    cleared: bool
    message: str


@router.post(
    "/sessions",
    response_model=CreateSessionResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_session_endpoint(
    payload: Optional[CreateSessionRequest] = Body(default=None),
    store: SessionStore = Depends(get_session_store),
) -> CreateSessionResponse:
    """
    Create a new conversation session for keeping context across calls.
    """
    system_prompt = payload.system_prompt if payload else None
    session_id = store.create(system_prompt)
    return CreateSessionResponse(
        session_id=session_id,
        system_prompt="Set" if system_prompt else "None",
    )


@router.get("/sessions", response_model=SessionListResponse)
def list_sessions_endpoint(
    store: SessionStore = Depends(get_session_store),
) -> SessionListResponse:
    sessions = store.list_sessions()
    return SessionListResponse(sessions=sessions, total=len(sessions))


@router.get("/sessions/{session_id}", response_model=SessionSummary)
def get_session_info_endpoint(
    session_id: str,
    store: SessionStore = Depends(get_session_store),
) -> SessionSummary:
    """
    Return session metadata without counting as conversational use.
    """
    info = store.info(session_id)
    if info is None:
        raise not_found(f"Session {session_id} not found")
    return info


@router.get("/sessions/{session_id}/messages", response_model=SessionHistoryResponse)
def get_session_messages_endpoint(
    session_id: str,
    store: SessionStore = Depends(get_session_store),
) -> SessionHistoryResponse:
    messages = store.get_history(session_id)
    if messages is None:
        raise not_found(f"Session {session_id} not found")
    return SessionHistoryResponse(session_id=session_id, messages=messages)


@router.delete("/sessions/{session_id}", response_model=ClearSessionResponse)
def clear_session_endpoint(
    session_id: str,
    store: SessionStore = Depends(get_session_store),
) -> ClearSessionResponse:
    """
    Clear a session and its history. Clearing an unknown id is not an error.
    """
    cleared = store.clear(session_id)
    return ClearSessionResponse(
        cleared=cleared,
        message="Session cleared successfully" if cleared else "Session not found",
    )


__all__ = ["router"]
