# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import asyncio

import pytest

from ferry.cancel import CancelToken
from ferry.errors import Cancel, RequestError, is_cancel, is_request_error


def test_executor_must_be_callable():
    with pytest.raises(TypeError):
        CancelToken("not callable")


def test_cancel_is_idempotent_first_message_wins():
    source = CancelToken.source()
    source.cancel("first")
    source.cancel("second")
    assert source.token.reason is not None
    assert source.token.reason.message == "first"
    assert source.token.cancelled is True


def test_executor_receives_trigger_synchronously():
    triggers = []
    token = CancelToken(triggers.append)
    assert len(triggers) == 1
    assert token.requested() is None
    triggers[0]("stop")
    assert token.requested() is token.reason


def test_throw_if_requested():
    source = CancelToken.source()
    source.token.throw_if_requested()

    source.cancel("abort")
    with pytest.raises(Cancel) as excinfo:
        source.token.throw_if_requested()
    assert excinfo.value is source.token.reason
    assert str(excinfo.value) == "Cancel: abort"


def test_reentrant_cancel_from_callback_is_ignored():
    source = CancelToken.source()
    calls = []

    def on_cancel(reason):
        calls.append(reason.message)
        source.cancel("reentrant")

    source.token.add_callback(on_cancel)
    source.cancel("outer")

    assert calls == ["outer"]
    assert source.token.reason.message == "outer"


def test_add_callback_after_cancel_runs_immediately():
    source = CancelToken.source()
    source.cancel()
    seen = []
    source.token.add_callback(seen.append)
    assert seen == [source.token.reason]
    assert str(seen[0]) == "Cancel"


def test_wait_resolves_when_cancelled_from_the_loop():
    source = CancelToken.source()

    async def scenario():
        asyncio.get_running_loop().call_soon(source.cancel, "stop")
        return await asyncio.wait_for(source.token.wait(), timeout=1)

    reason = asyncio.run(scenario())
    assert reason.message == "stop"


def test_wait_returns_immediately_when_already_cancelled():
    source = CancelToken.source()
    source.cancel("done")
    assert asyncio.run(source.token.wait()).message == "done"


def test_cancel_and_request_error_are_distinguished_by_capability():
    cancel = Cancel("x")
    error = RequestError("boom", code="ECONNABORTED")
    assert is_cancel(cancel) and not is_request_error(cancel)
    assert is_request_error(error) and not is_cancel(error)
    assert not is_cancel(ValueError("x"))
    assert error.to_dict()["code"] == "ECONNABORTED"


def test_remove_callback_detaches_pending_callback():
    source = CancelToken.source()
    seen = []
    source.token.add_callback(seen.append)
    source.token.remove_callback(seen.append)
    source.token.remove_callback(print)
    source.cancel("late")
    assert seen == []


def test_token_can_be_awaited_from_successive_event_loops():
    source = CancelToken.source()

    async def abandoned_wait():
        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(source.token.wait(), timeout=0.01)

    async def cancelled_wait():
        asyncio.get_running_loop().call_soon(source.cancel, "second loop")
        return await asyncio.wait_for(source.token.wait(), timeout=1)

    asyncio.run(abandoned_wait())
    assert source.token._callbacks == []
    assert asyncio.run(cancelled_wait()).message == "second loop"
