from typing import Literal, Optional

from pydantic import BaseModel, Field

from .session import GPTModel

ReasoningEffort = Literal["minimal", "low", "medium", "high"]
Verbosity = Literal["low", "medium", "high"]


class AskRequest(BaseModel):
    model: GPTModel
    prompt: str = Field(..., min_length=1)
    reasoning_effort: Optional[ReasoningEffort] = None
    verbosity: Optional[Verbosity] = None
    session_id: Optional[str] = Field(
        default=None, description="Continue an existing conversation"
    )


class AskResponse(BaseModel):
    model: GPTModel
    response: str
    reasoning_effort: Optional[ReasoningEffort] = None
    verbosity: Optional[Verbosity] = None
    session_id: Optional[str] = None
    timestamp: str = Field(..., description="ISO 8601 UTC time of the reply")
    tokens_used: int = 0


__all__ = ["AskRequest", "AskResponse", "ReasoningEffort", "Verbosity"]
