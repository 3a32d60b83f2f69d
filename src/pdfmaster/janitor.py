"""Deletion of uploaded inputs and produced outputs."""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING

from pdfmaster.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

logger = get_logger(__name__)


class TempFileJanitor:
    """Best-effort cleanup of temp files, either immediately or after a delay.

    Deletion never raises: missing files are ignored and other failures are
    logged. Delayed deletions are timers on the running event loop, so they do
    not survive a process restart; `sweep` covers leftovers at startup.
    """

    def __init__(self, *, default_delay_seconds: float = 3600.0) -> None:
        """Initialize janitor.

        Args:
            default_delay_seconds (float): Delay used by `schedule` when none is given.
        """
        self._default_delay_seconds = default_delay_seconds
        self._pending: set[asyncio.TimerHandle] = set()

    @property
    def pending_count(self) -> int:
        """Return number of scheduled deletions not yet run."""
        return len(self._pending)

    def delete_now(self, paths: Iterable[Path]) -> int:
        """Delete files immediately.

        Args:
            paths (Iterable[Path]): Files to delete.

        Returns:
            int: Number of files actually removed.
        """
        removed = 0
        for path in paths:
            try:
                path.unlink()
            except FileNotFoundError:
                continue
            except OSError as exc:
                logger.warning("Temp file cleanup failed", extra={"path": str(path), "error": str(exc)})
                continue
            removed += 1
            logger.debug("Temp file removed", extra={"path": str(path)})
        return removed

    def schedule(self, paths: Iterable[Path], delay_seconds: float | None = None) -> asyncio.TimerHandle:
        """Delete files after a delay on the running event loop.

        Args:
            paths (Iterable[Path]): Files to delete.
            delay_seconds (float | None): Delay, defaults to the janitor's default.

        Returns:
            asyncio.TimerHandle: Handle of the scheduled deletion.
        """
        targets = tuple(paths)
        delay = self._default_delay_seconds if delay_seconds is None else delay_seconds
        loop = asyncio.get_running_loop()

        handle: asyncio.TimerHandle

        def _run() -> None:
            self._pending.discard(handle)
            self.delete_now(targets)

        handle = loop.call_later(delay, _run)
        self._pending.add(handle)
        logger.debug(
            "Temp file cleanup scheduled",
            extra={"paths": [str(path) for path in targets], "delay_seconds": delay},
        )
        return handle

    def sweep(self, directory: Path, max_age_seconds: float) -> int:
        """Delete files in a directory older than a maximum age.

        Args:
            directory (Path): Directory to scan, not recursive.
            max_age_seconds (float): Files modified longer ago are removed.

        Returns:
            int: Number of files removed.
        """
        if not directory.is_dir():
            return 0

        cutoff = time.time() - max_age_seconds
        stale: list[Path] = []
        for path in directory.iterdir():
            try:
                if path.is_file() and path.stat().st_mtime < cutoff:
                    stale.append(path)
            except OSError:
                continue

        removed = self.delete_now(stale)
        if removed:
            logger.info("Stale temp files swept", extra={"directory": str(directory), "removed": removed})
        return removed

    def cancel_all(self) -> int:
        """Cancel every pending scheduled deletion.

        Returns:
            int: Number of cancelled timers.
        """
        cancelled = len(self._pending)
        for handle in self._pending:
            handle.cancel()
        self._pending.clear()
        return cancelled
