"""
Shared utilities for API route modules.

Engine operations are CPU-bound and synchronous. :func:`run_analysis` moves each
call onto a worker thread, caps how many run at once and bounds how long a
caller waits, so the event loop stays responsive while analyses are in flight.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Optional, TypeVar

from fastapi import HTTPException

from config import settings

log = logging.getLogger(__name__)

_T = TypeVar("_T")


class AnalysisRunner:
    """Runs engine calls on worker threads, at most ``max_concurrency`` at a time.

    A slot is held until the worker thread finishes, not until the caller stops
    waiting, so timed-out analyses still count against the limit.
    """

    def __init__(self, max_concurrency: Optional[int] = None) -> None:
        limit = max_concurrency if max_concurrency is not None else settings.max_concurrent_analyses
        self._semaphore = asyncio.Semaphore(max(1, int(limit)))

    def _release(self, _task: asyncio.Future) -> None:
        self._semaphore.release()

    async def run(self, func: Callable[..., _T], *args: Any, **kwargs: Any) -> _T:
        timeout = float(settings.analysis_timeout_seconds)
        await self._semaphore.acquire()
        try:
            task = asyncio.ensure_future(asyncio.to_thread(func, *args, **kwargs))
        except BaseException:
            self._semaphore.release()
            raise
        task.add_done_callback(self._release)
        try:
            return await asyncio.wait_for(asyncio.shield(task), timeout=timeout)
        except asyncio.TimeoutError as exc:
            name = getattr(func, "__name__", "analysis")
            log.warning("%s exceeded %.1fs timeout", name, timeout)
            task.add_done_callback(_log_abandoned)
            raise HTTPException(status_code=504, detail=f"{name} timed out after {timeout:g}s") from exc


def _log_abandoned(task: asyncio.Future) -> None:
    if not task.cancelled() and task.exception() is not None:
        log.warning("abandoned analysis failed after timeout: %r", task.exception())


_runner = AnalysisRunner()


async def run_analysis(func: Callable[..., _T], *args: Any, **kwargs: Any) -> _T:
    return await _runner.run(func, *args, **kwargs)
