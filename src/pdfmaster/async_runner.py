"""Helpers to run async operations from sync contexts and blocking work from async ones."""

from __future__ import annotations

import asyncio
import contextvars
import functools
import threading
from concurrent.futures import ThreadPoolExecutor
from queue import Queue
from typing import TYPE_CHECKING, Any, TypeVar

from pdfmaster.exceptions import AsyncExecutionError

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine

T = TypeVar("T")


def _run_in_background_thread(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine in a dedicated thread with its own event loop.

    Args:
        coro: The coroutine to run.

    Raises:
        AsyncExecutionError: If the coroutine raises an exception.

    Returns:
        The result of the coroutine.
    """
    output: Queue[T | BaseException] = Queue(maxsize=1)

    def _runner() -> None:
        try:
            output.put(asyncio.run(coro))
        except BaseException as exc:
            output.put(exc)

    thread = threading.Thread(target=_runner, daemon=True)
    thread.start()
    thread.join()

    result = output.get()
    if isinstance(result, BaseException):
        raise AsyncExecutionError(result=result) from result
    return result


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """Run an async coroutine from both sync and async contexts.

    If no event loop is running, the coroutine runs on a fresh loop in the
    current thread. If one is running, the coroutine runs in a dedicated thread
    with its own event loop.

    Args:
        coro: The coroutine to run.

    Returns:
        The result of the coroutine.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    return _run_in_background_thread(coro)


# PyMuPDF keeps global state and must not be driven from two threads at once.
PDF_ENGINE_LOCK = threading.RLock()
PDF_ENGINE_THREAD_PREFIX = "pdf-engine"

# Queued PDF jobs wait here instead of occupying threads of the default executor.
_PDF_EXECUTOR = ThreadPoolExecutor(max_workers=1, thread_name_prefix=PDF_ENGINE_THREAD_PREFIX)


def _call_with_engine_lock(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    with PDF_ENGINE_LOCK:
        return func(*args, **kwargs)


async def run_in_worker(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Run blocking PDF work on the dedicated PDF engine thread.

    Calls are serialized process-wide so that concurrent requests never use
    the PDF engine in parallel, while the event loop and the default executor
    stay free. Context variables such as the bound request id are carried over.

    Args:
        func: Blocking callable.
        *args: Positional arguments for `func`.
        **kwargs: Keyword arguments for `func`.

    Returns:
        The result of `func`.
    """
    loop = asyncio.get_running_loop()
    context = contextvars.copy_context()
    call = functools.partial(context.run, _call_with_engine_lock, func, *args, **kwargs)
    return await loop.run_in_executor(_PDF_EXECUTOR, call)
