from __future__ import annotations

import asyncio
import contextvars
import threading

import pytest

from pdfmaster.async_runner import PDF_ENGINE_LOCK, PDF_ENGINE_THREAD_PREFIX, run_async, run_in_worker
from pdfmaster.exceptions import AsyncExecutionError


async def _identity(value: int) -> int:
    await asyncio.sleep(0)
    return value


async def _fail() -> None:
    await asyncio.sleep(0)
    raise RuntimeError("boom")


def test_run_async_from_sync_context() -> None:
    assert run_async(_identity(7)) == 7


def test_run_async_with_running_loop() -> None:
    async def _nested() -> int:
        await asyncio.sleep(0)
        return run_async(_identity(11))

    assert asyncio.run(_nested()) == 11


def test_run_async_wraps_errors_from_background_thread() -> None:
    async def _nested() -> None:
        run_async(_fail())

    with pytest.raises(AsyncExecutionError, match="boom"):
        asyncio.run(_nested())


def test_run_in_worker_runs_off_loop_thread_with_engine_lock() -> None:
    loop_thread = threading.get_ident()

    def _blocking(value: int, *, offset: int) -> tuple[int, int, bool]:
        acquired = PDF_ENGINE_LOCK.acquire(blocking=False)
        if acquired:
            PDF_ENGINE_LOCK.release()
        return value + offset, threading.get_ident(), acquired

    result, worker_thread, reentrant = asyncio.run(run_in_worker(_blocking, 1, offset=2))

    assert result == 3
    assert worker_thread != loop_thread
    assert reentrant


def test_run_in_worker_serializes_calls() -> None:
    active = {"now": 0, "peak": 0}
    guard = threading.Lock()

    def _blocking() -> None:
        with guard:
            active["now"] += 1
            active["peak"] = max(active["peak"], active["now"])
        threading.Event().wait(0.01)
        with guard:
            active["now"] -= 1

    async def _run() -> None:
        await asyncio.gather(*(run_in_worker(_blocking) for _ in range(4)))

    asyncio.run(_run())

    assert active["peak"] == 1


def test_run_in_worker_uses_dedicated_engine_thread() -> None:
    async def _run() -> tuple[str, str]:
        pdf_thread = await run_in_worker(lambda: threading.current_thread().name)
        default_thread = await asyncio.to_thread(lambda: threading.current_thread().name)
        return pdf_thread, default_thread

    pdf_thread, default_thread = asyncio.run(_run())

    assert pdf_thread.startswith(PDF_ENGINE_THREAD_PREFIX)
    assert not default_thread.startswith(PDF_ENGINE_THREAD_PREFIX)


def test_run_in_worker_carries_context_variables() -> None:
    request_id: contextvars.ContextVar[str] = contextvars.ContextVar("request_id", default="unset")

    async def _run() -> str:
        request_id.set("req-42")
        return await run_in_worker(request_id.get)

    assert asyncio.run(_run()) == "req-42"
