import pytest

from gpt_proxy.ask import handle_ask
from gpt_proxy.exceptions import SessionNotFound
from gpt_proxy.models import AskRequest, Message


@pytest.mark.asyncio
async def test_ask_without_session_leaves_store_untouched(store, chat_client):
    resp = await handle_ask(
        AskRequest(model="gpt-5", prompt="ping", verbosity="high"), store, chat_client
    )

    assert resp.response == "pong"
    assert resp.tokens_used == 42
    assert resp.session_id is None
    assert resp.verbosity == "high"
    assert chat_client.calls[0]["history"] is None
    assert store.list_sessions() == []


@pytest.mark.asyncio
async def test_ask_with_session_replays_and_extends_history(store, chat_client):
    sid = store.create("be brief")

    await handle_ask(
        AskRequest(model="gpt-5-mini", prompt="first", session_id=sid),
        store,
        chat_client,
    )
    resp = await handle_ask(
        AskRequest(model="gpt-5", prompt="second", session_id=sid),
        store,
        chat_client,
    )

    assert resp.session_id == sid
    assert chat_client.calls[0]["history"] == [
        Message(role="system", content="be brief")
    ]
    assert chat_client.calls[1]["history"] == [
        Message(role="system", content="be brief"),
        Message(role="user", content="first"),
        Message(role="assistant", content="pong"),
    ]

    info = store.info(sid)
    assert info.message_count == 5
    assert info.total_tokens == 84
    assert info.model_preference == "gpt-5"


@pytest.mark.asyncio
async def test_ask_unknown_session_does_not_call_upstream(store, chat_client):
    with pytest.raises(SessionNotFound):
        await handle_ask(
            AskRequest(model="gpt-5", prompt="ping", session_id="missing"),
            store,
            chat_client,
        )

    assert chat_client.calls == []


@pytest.mark.asyncio
async def test_ask_o3_reports_no_tuning(store, chat_client):
    resp = await handle_ask(
        AskRequest(model="o3", prompt="ping", reasoning_effort="high", verbosity="low"),
        store,
        chat_client,
    )

    assert resp.reasoning_effort is None
    assert resp.verbosity is None
    assert resp.model == "o3"


@pytest.mark.asyncio
async def test_large_reply_resets_session_budget(store, chat_client):
    chat_client.tokens_used = 150000
    sid = store.create("P")

    await handle_ask(
        AskRequest(model="gpt-5", prompt="ping", session_id=sid), store, chat_client
    )

    assert store.get_history(sid) == [Message(role="system", content="P")]
    assert store.info(sid).total_tokens == 0
