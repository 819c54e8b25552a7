"""Blocking persistence of audit records over the async activity store."""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Coroutine, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeVar

from content_security_audit.application.ports.activity_repository_port import (
    ActivityCreateInput,
    ActivityRepositoryPort,
    PersistenceError,
)
from content_security_audit.domain.security_save_type import SecuritySaveType

T = TypeVar("T")
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuditRecord:
    """One audit log entry built from one content security event."""

    activity_type: str
    action: SecuritySaveType
    data: Mapping[str, str] = field(default_factory=dict)


class _BackgroundLoop:
    """Event loop running on its own daemon thread for store coroutines."""

    def __init__(self, *, thread_name: str) -> None:
        self._thread_name = thread_name
        self._lock = threading.Lock()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None
        self._closed = False

    def run(self, coroutine: Coroutine[Any, Any, T]) -> T:
        """Run coroutine on the loop and block until it completes."""

        # Submission and close() are serialized by the lock; close() drains
        # everything submitted before it.
        with self._lock:
            if self._closed:
                coroutine.close()
                raise RuntimeError("persister loop is closed")
            loop = self._ensure_started()
            future = asyncio.run_coroutine_threadsafe(coroutine, loop)
        return future.result()

    def close(self) -> None:
        """Wait for in-flight coroutines, then stop the loop and join its thread."""

        with self._lock:
            if self._closed:
                return
            self._closed = True
            loop, thread = self._loop, self._thread
            self._loop = None
            self._thread = None

        if loop is None or thread is None:
            return

        asyncio.run_coroutine_threadsafe(_drain_pending_tasks(), loop).result()
        loop.call_soon_threadsafe(loop.stop)
        thread.join()
        loop.close()

    def _ensure_started(self) -> asyncio.AbstractEventLoop:
        if self._loop is not None:
            return self._loop

        loop = asyncio.new_event_loop()
        thread = threading.Thread(
            target=loop.run_forever,
            name=self._thread_name,
            daemon=True,
        )
        thread.start()
        self._loop = loop
        self._thread = thread
        return loop


async def _drain_pending_tasks() -> None:
    current = asyncio.current_task()
    while True:
        pending = [task for task in asyncio.all_tasks() if task is not current]
        if not pending:
            return
        await asyncio.gather(*pending, return_exceptions=True)


class AuditPersister:
    """Write audit records one at a time, blocking until the store confirms."""

    def __init__(self) -> None:
        self._loop = _BackgroundLoop(thread_name="audit-persister")

    def persist(self, store: ActivityRepositoryPort, record: AuditRecord) -> int:
        """Save record through store and return the store-assigned identifier."""

        payload = ActivityCreateInput(
            activity_type=record.activity_type,
            action_code=int(record.action),
            action_label=record.action.label,
            data=dict(record.data),
        )

        try:
            activity_id = self._loop.run(store.save(payload))
        except Exception as error:  # noqa: BLE001
            raise PersistenceError(
                f"Failed to save {record.activity_type} activity "
                f"action={record.action.label}: {error}"
            ) from error

        if activity_id is None:
            raise PersistenceError(
                f"Activity store returned no id for {record.activity_type} activity"
            )
        return int(activity_id)

    def run_on_store_loop(self, coroutine: Coroutine[Any, Any, T]) -> T:
        """Run a store maintenance coroutine on the loop that owns store connections."""

        return self._loop.run(coroutine)

    def close(self) -> None:
        """Finish in-flight writes and release the loop; later persists fail."""

        self._loop.close()
        logger.debug("audit_persister_closed")
