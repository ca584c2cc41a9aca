"""Sync engine driving a storage backend in one-shot or interval mode."""

import logging
import threading
from typing import Optional

from ..backends.base import StorageBackend
from ..utils.logging import TimedOperation

# Module logger
logger = logging.getLogger(__name__)


class SyncEngine:
    """Runs copies against a single, already initialized backend.

    Use :func:`init_backend_with_engine` to obtain an engine; it initializes
    the backend first and refuses to return an engine if that fails.
    """

    def __init__(self, backend: StorageBackend):
        """Initialize the engine.

        Args:
            backend: Initialized backend used for every copy
        """
        self.backend = backend
        self._stop_event = threading.Event()

    def run_once(self) -> None:
        """Full copy of the source tree (distcp)."""
        with TimedOperation(logger, "full copy"):
            self.backend.full_copy()

    def sync_once(self) -> None:
        """Single incremental copy."""
        with TimedOperation(logger, "incremental copy"):
            self.backend.incremental_copy()

    def run_forever(self, interval: float, stop_event: Optional[threading.Event] = None) -> int:
        """Repeat incremental copies, waiting ``interval`` seconds between them.

        The loop ends when an incremental copy raises, in which case the
        exception propagates unchanged, or when ``stop_event`` (the engine's own
        event by default, see :meth:`stop`) is set. There is no retry: one
        failed cycle ends the whole loop.

        The engine's own event is cleared when the loop starts, so an engine
        can be run again after :meth:`stop`. A ``stop()`` issued before the
        loop starts is therefore discarded. A caller-supplied event is never
        cleared.

        Args:
            interval: Seconds to wait between cycles
            stop_event: Event that requests shutdown when set

        Returns:
            Number of completed cycles
        """
        if stop_event is None:
            stop_event = self._stop_event
            stop_event.clear()
        cycles = 0

        logger.info(f"Starting continuous sync every {interval}s")
        while not stop_event.is_set():
            with TimedOperation(logger, f"sync cycle {cycles + 1}"):
                self.backend.incremental_copy()
            cycles += 1

            if stop_event.wait(interval):
                break

        logger.info(f"Continuous sync stopped after {cycles} cycles")
        return cycles

    def stop(self) -> None:
        """Ask a running :meth:`run_forever` loop to exit after its current cycle."""
        self._stop_event.set()


def init_backend_with_engine(backend: StorageBackend) -> SyncEngine:
    """Initialize ``backend`` and wrap it in a :class:`SyncEngine`.

    Raises:
        Whatever ``backend.initialize()`` raises; no engine is created then.
    """
    backend.initialize()
    logger.info(f"Initialized {type(backend).__name__}")
    return SyncEngine(backend)
