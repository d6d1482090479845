"""
Shared pytest configuration.

This file ensures the project root is on sys.path so that `import gpt_proxy`
works consistently in all tests, and provides the fakes used across them.
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import pytest

# Ensure project root is importable for test modules.
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from gpt_proxy.models import Message  # noqa: E402
from gpt_proxy.session_store import SessionStore  # noqa: E402
from gpt_proxy.upstream import UpstreamReply  # noqa: E402


class FakeClock:
    """Manually advanced replacement for time.time."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeChatClient:
    """
    Stand-in for OpenAIChatClient that records calls and returns canned
    replies without touching the network.
    """

    def __init__(self, text: str = "pong", tokens_used: int = 42) -> None:
        self.text = text
        self.tokens_used = tokens_used
        self.calls: List[Dict[str, Any]] = []

    async def ask(
        self,
        model: str,
        prompt: str,
        *,
        reasoning_effort: Optional[str] = None,
        verbosity: Optional[str] = None,
        history: Optional[Sequence[Message]] = None,
    ) -> UpstreamReply:
        self.calls.append(
            {
                "model": model,
                "prompt": prompt,
                "reasoning_effort": reasoning_effort,
                "verbosity": verbosity,
                "history": list(history) if history is not None else None,
            }
        )
        return UpstreamReply(text=self.text, tokens_used=self.tokens_used)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> SessionStore:
    return SessionStore(clock=clock)


@pytest.fixture
def chat_client() -> FakeChatClient:
    return FakeChatClient()
