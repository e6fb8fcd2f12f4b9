"""Fire-and-forget event dispatch via pluggy + ThreadPoolExecutor.

Events are not persisted: a dispatch that is still running when the
process exits is lost, which is acceptable for best-effort audit.
Nothing is retried.

INVARIANT: Plugin failures are warnings, never errors.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from chatplus.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class EventBus:
    """Async hook dispatch on a small worker pool.

    Parameters:
        plugin_manager: Loaded PluginManager for hook dispatch.
        sync: Run hooks inline instead of on the pool (tests / ``--sync``).
        max_workers: ThreadPoolExecutor worker count.
    """

    def __init__(
        self,
        plugin_manager: PluginManager,
        *,
        sync: bool = False,
        max_workers: int = 2,
    ) -> None:
        self._pm = plugin_manager
        self._sync = sync
        self._executor: ThreadPoolExecutor | None = (
            None
            if sync
            else ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="chatplus-event")
        )
        self._futures: set[Future[None]] = set()
        self._lock = threading.Lock()
        self._closed = False

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def is_sync(self) -> bool:
        return self._sync

    def dispatch(self, hook_name: str, payload: dict[str, Any]) -> bool:
        """Schedule *hook_name* with *payload* and return without waiting.

        Returns False when nothing was scheduled: no plugin implements
        the hook, or the bus is already shut down.
        """
        if self._closed:
            logger.debug("Event bus closed, dropping %s", hook_name)
            return False
        if not self._pm.has_implementations(hook_name):
            return False

        if self._sync:
            self._execute_hook(hook_name, payload)
            return True

        assert self._executor is not None
        future = self._executor.submit(self._execute_hook, hook_name, payload)
        with self._lock:
            self._futures.add(future)
        future.add_done_callback(self._forget)
        return True

    def wait(self, timeout: float | None = 30) -> None:
        """Block until in-flight dispatches finish. For tests and orderly exits."""
        with self._lock:
            pending = list(self._futures)
        for future in pending:
            try:
                future.result(timeout=timeout)
            except Exception:
                pass  # Errors already handled in _execute_hook

    def shutdown(self, *, wait: bool = False) -> None:
        """Stop the worker pool. With ``wait=False`` queued work is cancelled."""
        self._closed = True
        if self._executor is not None:
            self._executor.shutdown(wait=wait, cancel_futures=not wait)
            self._executor = None

    @property
    def pending_count(self) -> int:
        with self._lock:
            return len(self._futures)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _execute_hook(self, hook_name: str, payload: dict[str, Any]) -> None:
        hook_fn = getattr(self._pm.hook, hook_name, None)
        if hook_fn is None:
            return
        try:
            hook_fn(**payload)
        except Exception:
            logger.warning("Hook %s failed", hook_name, exc_info=True)

    def _forget(self, future: Future[None]) -> None:
        with self._lock:
            self._futures.discard(future)
