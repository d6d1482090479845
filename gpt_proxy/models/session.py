from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

MessageRole = Literal["system", "user", "assistant"]
GPTModel = Literal["gpt-5", "gpt-5-mini", "o3"]


class Message(BaseModel):
    role: MessageRole
    content: str


class SessionMetadata(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    total_tokens: int = Field(default=0, description="Tokens accounted since the last reset", ge=0)
    message_count: int = Field(default=0, description="Mirrors len(messages)", ge=0)
    model_preference: Optional[GPTModel] = Field(
        default=None, description="Last model used in this session"
    )


class Session(BaseModel):
    """
    One ongoing conversation held by the session store.
    """

    id: str = Field(..., description="Opaque session id")
    created_at: float = Field(..., description="Creation timestamp (epoch seconds)")
    last_used: float = Field(..., description="Last access timestamp (epoch seconds)")
    messages: list[Message] = Field(default_factory=list)
    metadata: SessionMetadata = Field(default_factory=SessionMetadata)

    @property
    def system_message(self) -> Optional[Message]:
        if self.messages and self.messages[0].role == "system":
            return self.messages[0]
        return None

    def to_summary(self) -> "SessionSummary":
        return SessionSummary(
            id=self.id,
            created_at=self.created_at,
            last_used=self.last_used,
            message_count=self.metadata.message_count,
            total_tokens=self.metadata.total_tokens,
            model_preference=self.metadata.model_preference,
        )


class SessionSummary(BaseModel):
    id: str
    created_at: float
    last_used: float
    message_count: int
    total_tokens: int
    model_preference: Optional[GPTModel] = None


__all__ = [
    "GPTModel",
    "Message",
    "MessageRole",
    "Session",
    "SessionMetadata",
    "SessionSummary",
]
