from __future__ import annotations


class SessionNotFound(LookupError):
    """Raised when a session id does not match any live session."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Session {session_id} not found")


class InvalidSessionState(RuntimeError):
    """Raised when a mutation would break a session invariant."""

    def __init__(self, session_id: str, message: str):
        self.session_id = session_id
        super().__init__(message)


class UpstreamError(RuntimeError):
    """Raised when the upstream model API call fails."""


__all__ = ["InvalidSessionState", "SessionNotFound", "UpstreamError"]
