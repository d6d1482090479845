from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Read from OS env and optional .env file in project root.
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Upstream OpenAI credentials
    openai_api_key: Optional[str] = Field(
        default=None,
        alias="OPENAI_API_KEY",
        description="API key used for chat.completions calls",
    )
    openai_base_url: Optional[str] = Field(
        default=None,
        alias="OPENAI_BASE_URL",
        description="Optional override of the OpenAI API base URL",
    )

    # HTTP timeouts
    upstream_timeout: float = Field(600.0, alias="UPSTREAM_TIMEOUT", gt=0)

    # Session store limits
    max_tokens_per_session: int = Field(
        100000,
        alias="MAX_TOKENS_PER_SESSION",
        description="Token budget per session; exceeding it resets the conversation",
        ge=1,
    )
    max_messages_per_session: int = Field(
        100,
        alias="MAX_MESSAGES_PER_SESSION",
        description="Maximum messages kept per session, system prompt included",
        ge=2,
    )
    session_expiry_hours: float = Field(
        24,
        alias="SESSION_EXPIRY_HOURS",
        description="Idle hours after which a session is swept",
        gt=0,
    )

    # Application log level for our gptproxy logger.
    # Can be overridden via LOG_LEVEL env var, e.g. "DEBUG" while debugging.
    log_level: str = Field(
        "INFO",
        alias="LOG_LEVEL",
        description="Application log level: DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_timezone: Optional[str] = Field(
        default=None,
        alias="LOG_TIMEZONE",
        description="Timezone name for log timestamps, e.g. 'Europe/Berlin'. Defaults to system local time.",
    )
    log_dir: str = Field("logs", alias="LOG_DIR")


settings = Settings()  # Reads from environment if available
