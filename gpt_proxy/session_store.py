"""
In-memory conversation store.

Sessions are kept in a single dict guarded by one lock. Each session is
bounded two ways:

- size: once a session holds more than ``max_messages`` messages the oldest
  non-system messages are dropped, the system prompt stays pinned at index 0;
- budget: once ``total_tokens`` exceeds ``max_tokens`` the whole
  conversational history is discarded, only the system prompt survives, and
  the token counter restarts from zero.

Pruning always runs before the budget check. Idle sessions are expired
lazily: ``create`` and ``list_sessions`` sweep the map before returning, no
background timer is involved.
"""

from __future__ import annotations

import threading
import time
import uuid
from typing import Callable, Optional

from .exceptions import InvalidSessionState, SessionNotFound
from .logging_config import logger
from .models import GPTModel, Message, Session, SessionMetadata, SessionSummary

MAX_TOKENS_PER_SESSION = 100000
MAX_MESSAGES_PER_SESSION = 100
SESSION_EXPIRY_HOURS = 24


class SessionStore:
    def __init__(
        self,
        *,
        max_tokens: int = MAX_TOKENS_PER_SESSION,
        max_messages: int = MAX_MESSAGES_PER_SESSION,
        expiry_hours: float = SESSION_EXPIRY_HOURS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if max_messages < 2:
            raise ValueError("max_messages must leave room for a system prompt and one turn")
        if max_tokens < 1:
            raise ValueError("max_tokens must be positive")
        if expiry_hours <= 0:
            raise ValueError("expiry_hours must be positive")
        self.max_tokens = max_tokens
        self.max_messages = max_messages
        self.expiry_seconds = expiry_hours * 3600
        self._clock = clock
        self._lock = threading.Lock()
        self._sessions: dict[str, Session] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def create(self, system_prompt: Optional[str] = None) -> str:
        """
        Create a session, optionally seeded with a system prompt, and return
        its id. Expired sessions are swept as a side effect.
        """
        with self._lock:
            now = self._clock()
            session_id = uuid.uuid4().hex
            messages = []
            if system_prompt:
                messages.append(Message(role="system", content=system_prompt))
            self._sessions[session_id] = Session(
                id=session_id,
                created_at=now,
                last_used=now,
                messages=messages,
                metadata=SessionMetadata(message_count=len(messages)),
            )
            logger.debug(
                "Created session %s (system_prompt=%s)", session_id, bool(system_prompt)
            )
            self._sweep_expired(now)
            return session_id

    def get(self, session_id: str) -> Optional[Session]:
        """
        Return a copy of the session and mark it as used.
        Returns None when the id is unknown.
        """
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None
            session.last_used = self._clock()
            return session.model_copy(deep=True)

    def append(self, session_id: str, message: Message, tokens_used: int = 0) -> None:
        """
        Append one message and account ``tokens_used`` against the session.

        Raises SessionNotFound for unknown ids and InvalidSessionState when a
        second system message is appended.
        """
        if tokens_used < 0:
            raise ValueError("tokens_used must not be negative")

        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise SessionNotFound(session_id)

            message = message.model_copy()
            if message.role == "system":
                if session.system_message is not None:
                    raise InvalidSessionState(
                        session_id, f"Session {session_id} already has a system message"
                    )
                session.messages.insert(0, message)
            else:
                session.messages.append(message)

            session.metadata.message_count += 1
            session.metadata.total_tokens += tokens_used
            session.last_used = self._clock()

            self._prune(session)
            self._enforce_token_budget(session)

    def clear(self, session_id: str) -> bool:
        with self._lock:
            removed = self._sessions.pop(session_id, None) is not None
        if removed:
            logger.info("Cleared session %s", session_id)
        return removed

    def list_sessions(self) -> list[SessionSummary]:
        """
        Sweep expired sessions, then summarise the remaining ones in
        creation order.
        """
        with self._lock:
            self._sweep_expired(self._clock())
            return [session.to_summary() for session in self._sessions.values()]

    def info(self, session_id: str) -> Optional[SessionSummary]:
        """
        Summary of one session. Read-only: neither sweeps nor touches
        ``last_used``.
        """
        with self._lock:
            session = self._sessions.get(session_id)
            return session.to_summary() if session is not None else None

    def get_history(self, session_id: str) -> Optional[list[Message]]:
        """
        Copy of the conversation, or None when the id is unknown.
        Does not touch ``last_used``.
        """
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None
            return [m.model_copy() for m in session.messages]

    def set_model_preference(self, session_id: str, model: GPTModel) -> bool:
        """
        Record the last model used. Unknown model names raise
        ValidationError and leave the session unchanged.
        """
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return False
            session.metadata.model_preference = model
            return True

    def _prune(self, session: Session) -> None:
        # Caller holds the lock.
        if len(session.messages) <= self.max_messages:
            return
        system = session.system_message
        if system is not None:
            tail = session.messages[1:][-(self.max_messages - 1):]
            session.messages = [system, *tail]
        else:
            session.messages = session.messages[-self.max_messages:]
        session.metadata.message_count = len(session.messages)
        logger.info(
            "Pruned session %s to the most recent %d messages",
            session.id,
            len(session.messages),
        )

    def _enforce_token_budget(self, session: Session) -> None:
        # Caller holds the lock.
        if session.metadata.total_tokens <= self.max_tokens:
            return
        logger.info(
            "Session %s used %d tokens (limit %d); resetting conversation",
            session.id,
            session.metadata.total_tokens,
            self.max_tokens,
        )
        system = session.system_message
        session.messages = [system] if system is not None else []
        session.metadata.total_tokens = 0
        session.metadata.message_count = len(session.messages)

    def _sweep_expired(self, now: float) -> int:
        # Caller holds the lock.
        expired = [
            session_id
            for session_id, session in self._sessions.items()
            if now - session.last_used > self.expiry_seconds
        ]
        for session_id in expired:
            del self._sessions[session_id]
        if expired:
            logger.info("Expired %d idle session(s)", len(expired))
        return len(expired)


__all__ = [
    "MAX_MESSAGES_PER_SESSION",
    "MAX_TOKENS_PER_SESSION",
    "SESSION_EXPIRY_HOURS",
    "SessionStore",
]
