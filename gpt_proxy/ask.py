from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Protocol, Sequence

from .exceptions import SessionNotFound
from .logging_config import logger
from .models import AskRequest, AskResponse, Message
from .session_store import SessionStore
from .upstream import UpstreamReply, supports_tuning


class ChatClient(Protocol):
    async def ask(
        self,
        model: str,
        prompt: str,
        *,
        reasoning_effort: Optional[str] = None,
        verbosity: Optional[str] = None,
        history: Optional[Sequence[Message]] = None,
    ) -> UpstreamReply: ...


async def handle_ask(
    req: AskRequest,
    store: SessionStore,
    client: ChatClient,
) -> AskResponse:
    """
    Forward a prompt upstream, replaying and extending the session history
    when a session id is supplied.

    The store lock is never held across the upstream call; the turn is
    appended only once the reply is back.
    """
    history: Optional[list[Message]] = None
    if req.session_id:
        session = store.get(req.session_id)
        if session is None:
            raise SessionNotFound(req.session_id)
        history = session.messages
        store.set_model_preference(req.session_id, req.model)

    reply = await client.ask(
        req.model,
        req.prompt,
        reasoning_effort=req.reasoning_effort,
        verbosity=req.verbosity,
        history=history,
    )

    if req.session_id:
        store.append(req.session_id, Message(role="user", content=req.prompt), 0)
        store.append(
            req.session_id,
            Message(role="assistant", content=reply.text),
            reply.tokens_used,
        )
        logger.info(
            "Session %s extended with one turn (%d tokens)",
            req.session_id,
            reply.tokens_used,
        )

    tunable = supports_tuning(req.model)
    return AskResponse(
        model=req.model,
        response=reply.text,
        reasoning_effort=req.reasoning_effort if tunable else None,
        verbosity=req.verbosity if tunable else None,
        session_id=req.session_id,
        timestamp=datetime.now(timezone.utc).isoformat(),
        tokens_used=reply.tokens_used,
    )


__all__ = ["ChatClient", "handle_ask"]
