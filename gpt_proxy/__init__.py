"""
GPT Proxy package.

This package contains:
- settings: configuration loaded from env / .env
- logging_config: shared logging setup
- session_store: in-memory, bounded conversation sessions
- upstream: OpenAI chat.completions client
- ask: prompt forwarding with optional session context
- routes / session_routes: FastAPI app factory and HTTP endpoints
"""

__version__ = "0.1.0"
