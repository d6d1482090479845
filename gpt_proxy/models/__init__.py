from .chat import AskRequest, AskResponse, ReasoningEffort, Verbosity
from .session import (
    GPTModel,
    Message,
    MessageRole,
    Session,
    SessionMetadata,
    SessionSummary,
)

__all__ = [
    "AskRequest",
    "AskResponse",
    "GPTModel",
    "Message",
    "MessageRole",
    "ReasoningEffort",
    "Session",
    "SessionMetadata",
    "SessionSummary",
    "Verbosity",
]
