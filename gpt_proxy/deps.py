import threading

from .errors import service_unavailable
from .session_store import SessionStore
from .settings import settings
from .upstream import OpenAIChatClient

# Sync endpoints resolve dependencies on the threadpool, so first use can race.
_singleton_lock = threading.Lock()


def get_session_store() -> SessionStore:
    """
    Lazy process-wide SessionStore shared by every request.
    """
    if not hasattr(get_session_store, "_store"):
        with _singleton_lock:
            if not hasattr(get_session_store, "_store"):
                get_session_store._store = SessionStore(  # type: ignore[attr-defined]
                    max_tokens=settings.max_tokens_per_session,
                    max_messages=settings.max_messages_per_session,
                    expiry_hours=settings.session_expiry_hours,
                )
    return get_session_store._store  # type: ignore[attr-defined]


def get_chat_client() -> OpenAIChatClient:
    """
    Lazy singleton OpenAI client dependency.

    Tests are expected to override this dependency with a fake client.
    """
    if not hasattr(get_chat_client, "_client"):
        if not settings.openai_api_key:
            raise service_unavailable("OPENAI_API_KEY is not configured")
        with _singleton_lock:
            if not hasattr(get_chat_client, "_client"):
                get_chat_client._client = OpenAIChatClient(  # type: ignore[attr-defined]
                    settings.openai_api_key,
                    base_url=settings.openai_base_url,
                    timeout=settings.upstream_timeout,
                )
    return get_chat_client._client  # type: ignore[attr-defined]
