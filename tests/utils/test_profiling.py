"""Unit tests for the @timed profiling decorator."""

import pytest
from loguru import logger

from reframe_tools.utils.profiling import timed


@pytest.fixture
def log_messages():
    messages: list[str] = []
    handler_id = logger.add(lambda message: messages.append(str(message)), level="INFO")
    yield messages
    logger.remove(handler_id)


def test_timed_sync_logs_and_returns(log_messages: list[str]):
    """Test @timed preserves the return value and logs a profile line."""

    @timed
    def add(a: int, b: int) -> int:
        return a + b

    assert add(2, 3) == 5
    assert any("[PROFILE]" in m and "add" in m for m in log_messages)


def test_timed_logs_on_exception(log_messages: list[str]):
    """Test @timed still logs when the wrapped call raises."""

    @timed
    def boom() -> None:
        raise ValueError("nope")

    with pytest.raises(ValueError):
        boom()

    assert any("boom" in m for m in log_messages)


@pytest.mark.asyncio
async def test_timed_async(log_messages: list[str]):
    """Test @timed awaits coroutine functions."""

    @timed
    async def double(x: int) -> int:
        return x * 2

    assert await double(4) == 8
    assert any("double" in m for m in log_messages)
