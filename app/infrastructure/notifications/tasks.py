"""Background execution of best-effort work such as notification fan-out."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Protocol

logger = logging.getLogger(__name__)


class TaskRunner(Protocol):
    """Something that accepts a unit of work and runs it eventually."""

    def submit(
        self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any
    ) -> Future | None: ...

    def shutdown(self, *, wait: bool = True) -> None: ...


def _run_guarded(fn: Callable[..., Any], args: tuple, kwargs: dict[str, Any]) -> None:
    try:
        fn(*args, **kwargs)
    except Exception:
        logger.exception("Background task %s failed", getattr(fn, "__qualname__", fn))


class BackgroundTaskRunner:
    """Run submitted callables on a bounded pool of worker threads.

    ``submit`` returns immediately; failures are logged at the task boundary
    and never reach the submitter.
    """

    def __init__(self, max_workers: int = 4, *, thread_name_prefix: str = "notify") -> None:
        self._max_workers = max_workers
        self._thread_name_prefix = thread_name_prefix
        self._executor: ThreadPoolExecutor | None = None

    def submit(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Future | None:
        try:
            return self._get_executor().submit(_run_guarded, fn, args, kwargs)
        except RuntimeError:
            # Raised after shutdown; the work is dropped like any other failure.
            logger.warning("Background runner is shut down; dropping %s", fn)
            return None

    def shutdown(self, *, wait: bool = True) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=wait)
            self._executor = None

    def _get_executor(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self._max_workers,
                thread_name_prefix=self._thread_name_prefix,
            )
        return self._executor


class InlineTaskRunner:
    """Run submitted callables immediately on the calling thread."""

    def submit(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Future | None:
        _run_guarded(fn, args, kwargs)
        return None

    def shutdown(self, *, wait: bool = True) -> None:
        return None


__all__ = ["TaskRunner", "BackgroundTaskRunner", "InlineTaskRunner"]
