"""
Timeout-bounded thread pool calls.

Blocking SDK calls (vector store, embedding, PDF parsing) run in the
Starlette thread pool and are awaited with an explicit deadline.

Dependencies: fastapi.concurrency
System role: Shared helper for every blocking external call
"""

import asyncio
from typing import Any, Callable, TypeVar

from fastapi.concurrency import run_in_threadpool

T = TypeVar("T")


def start_in_threadpool(func: Callable[..., T], *args: Any, **kwargs: Any) -> "asyncio.Future[T]":
    """
    Schedule a blocking callable in the thread pool.

    Returns:
        asyncio.Future: Resolves when the worker thread returns, whether or not anyone still awaits it
    """
    return asyncio.ensure_future(run_in_threadpool(func, *args, **kwargs))


async def call_with_timeout(func: Callable[..., T], *args: Any, timeout: float, **kwargs: Any) -> T:
    """
    Run a blocking callable in the thread pool with a deadline.

    Args:
        func: Blocking callable
        timeout: Seconds to wait before raising asyncio.TimeoutError

    Returns:
        The callable's return value

    Raises:
        asyncio.TimeoutError: When the deadline passes (the worker thread is not cancelled)
    """
    return await asyncio.wait_for(run_in_threadpool(func, *args, **kwargs), timeout=timeout)
