import asyncio

import pytest

from shared.retry import backoff_delay, retry_call


def _flaky(failures, exc_type=ConnectionError):
    calls = []

    async def func():
        calls.append(1)
        if len(calls) <= failures:
            raise exc_type("not yet")
        return "ok"

    return func, calls


def _recording_sleep():
    delays = []

    async def sleep(delay):
        delays.append(delay)

    return sleep, delays


def test_backoff_delay_doubles_and_caps():
    assert [backoff_delay(n, 1.0, 5.0) for n in range(5)] == [1.0, 2.0, 4.0, 5.0, 5.0]


def test_retry_call_succeeds_after_failures():
    func, calls = _flaky(2)
    sleep, delays = _recording_sleep()

    result = asyncio.run(retry_call(func, max_retries=3, sleep=sleep))

    assert result == "ok"
    assert len(calls) == 3
    assert delays == [1.0, 2.0]


def test_retry_call_reraises_when_exhausted():
    func, calls = _flaky(5)
    sleep, delays = _recording_sleep()

    with pytest.raises(ConnectionError):
        asyncio.run(retry_call(func, max_retries=2, sleep=sleep))
    assert len(calls) == 3


def test_retry_call_zero_retries_is_single_attempt():
    func, calls = _flaky(1)
    with pytest.raises(ConnectionError):
        asyncio.run(retry_call(func, max_retries=0))
    assert len(calls) == 1


def test_retry_call_ignores_other_exceptions():
    func, calls = _flaky(1, exc_type=KeyError)
    with pytest.raises(KeyError):
        asyncio.run(retry_call(func, max_retries=3, exceptions=(ConnectionError,)))
    assert len(calls) == 1
