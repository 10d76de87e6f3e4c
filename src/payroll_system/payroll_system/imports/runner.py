from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional

from ..core.constants import DEFAULT_IMPORT_WORKERS
from ..core.enums import ImportStatus
from ..core.exceptions import ConflictError, NotFoundError
from .repository import ImportJobRepository

logger = logging.getLogger(__name__)

JobFn = Callable[[str, threading.Event], None]


@dataclass(frozen=True)
class JobHandle:
    import_id: str
    future: Future
    cancel_event: threading.Event

    @property
    def done(self) -> bool:
        return self.future.done()


class ImportJobRunner:
    """Runs import jobs on a bounded worker pool, one run per job id.

    Only Pending jobs are accepted. Handles are kept while a run is queued or
    in progress and dropped once it finishes.
    """

    def __init__(self, jobs: ImportJobRepository, max_workers: int = DEFAULT_IMPORT_WORKERS):
        self._jobs = jobs
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="import")
        self._handles: dict[str, JobHandle] = {}
        self._lock = threading.Lock()

    def submit(self, import_id: str, fn: JobFn) -> JobHandle:
        with self._lock:
            if import_id in self._handles:
                raise ConflictError(f"Import {import_id} is already running")

            job = self._jobs.get(import_id)
            if job is None:
                raise NotFoundError(f"Import {import_id} not found")
            if job.status != ImportStatus.PENDING:
                raise ConflictError(f"Import {import_id} has already been run (status {job.status.value})")

            cancel_event = threading.Event()
            future = self._executor.submit(fn, import_id, cancel_event)
            handle = JobHandle(import_id=import_id, future=future, cancel_event=cancel_event)
            self._handles[import_id] = handle

        future.add_done_callback(lambda f: self._on_done(handle, f))
        return handle

    def _on_done(self, handle: JobHandle, future: Future) -> None:
        with self._lock:
            if self._handles.get(handle.import_id) is handle:
                del self._handles[handle.import_id]

        exc = future.exception()
        if exc is not None:
            logger.error("[import-runner] %s ended with an unhandled error: %s", handle.import_id, exc, exc_info=exc)

    def get(self, import_id: str) -> Optional[JobHandle]:
        with self._lock:
            return self._handles.get(import_id)

    def active_count(self) -> int:
        with self._lock:
            return len(self._handles)

    def cancel(self, import_id: str) -> bool:
        handle = self.get(import_id)
        if handle is None or handle.done:
            return False
        # The run observes the token and records the job as Failed.
        handle.cancel_event.set()
        return True

    def wait(self, import_id: str, timeout: Optional[float] = None) -> None:
        """Block until the run for import_id finishes; returns at once if none is live."""
        handle = self.get(import_id)
        if handle is not None:
            handle.future.result(timeout=timeout)

    def shutdown(self, *, cancel_pending: bool = True) -> None:
        if cancel_pending:
            with self._lock:
                for handle in self._handles.values():
                    handle.cancel_event.set()
        self._executor.shutdown(wait=True)
