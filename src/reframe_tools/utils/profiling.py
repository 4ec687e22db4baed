"""Wall-clock profiling for reframe algorithms."""

import inspect
import time
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import ParamSpec, TypeVar, cast

from loguru import logger

P = ParamSpec("P")
R = TypeVar("R")


def _report(name: str, started: float) -> None:
    logger.info(f"[PROFILE] {name} took {time.perf_counter() - started:.3f}s")


def timed(func: Callable[P, R]) -> Callable[P, R]:
    """Log how long each call of ``func`` takes, for sync and async callables.

    Usage:
        @timed
        def convert(request):
            ...
    """
    name = func.__qualname__

    if inspect.iscoroutinefunction(func):
        async_func = cast(Callable[P, Awaitable[object]], func)

        @wraps(func)
        async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> object:
            started = time.perf_counter()
            try:
                return await async_func(*args, **kwargs)
            finally:
                _report(name, started)

        return cast(Callable[P, R], async_wrapper)

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        started = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            _report(name, started)

    return wrapper
