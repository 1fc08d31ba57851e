from __future__ import annotations
import logging
import threading
from typing import Callable, Hashable
from PyQt6.QtCore import QObject, Qt, pyqtSignal, pyqtSlot

logger = logging.getLogger(__name__)


class RenderDispatcher(QObject):
    """Serializes draw jobs onto the thread that created it (the GUI thread).

    Jobs submitted on that thread run immediately. Jobs submitted from any
    other thread are queued and the GUI thread is woken through a queued
    signal; the caller never waits and gets no result back.

    Queued jobs are coalesced: a job whose key is already queued is dropped,
    and a job submitted with ``replaces_pending=True`` discards everything
    queued before it.
    """

    _wake = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self._owner_ident = threading.get_ident()
        self._lock = threading.Lock()
        self._queue: list[tuple[Hashable | None, Callable[[], None]]] = []
        self._keys: set[Hashable] = set()
        self._wake_posted = False
        self._wake.connect(self._drain, Qt.ConnectionType.QueuedConnection)

    def is_render_thread(self) -> bool:
        return threading.get_ident() == self._owner_ident

    def submit(self, job: Callable[[], None], key: Hashable | None = None,
               replaces_pending: bool = False) -> bool:
        """Run or queue ``job``. Returns True if it ran synchronously."""
        if self.is_render_thread():
            job()
            return True

        with self._lock:
            if replaces_pending:
                self._queue.clear()
                self._keys.clear()
            if key is not None:
                if key in self._keys:
                    return False
                self._keys.add(key)
            self._queue.append((key, job))
            post = not self._wake_posted
            self._wake_posted = True

        if post:
            logger.debug("Deferred draw scheduled from thread %s", threading.get_ident())
            self._wake.emit()
        return False

    def pending(self) -> int:
        with self._lock:
            return len(self._queue)

    def flush(self):
        """Run queued jobs now. Only valid on the render thread."""
        if not self.is_render_thread():
            raise RuntimeError("flush() must be called on the render thread")
        self._drain()

    @pyqtSlot()
    def _drain(self):
        with self._lock:
            jobs = self._queue
            self._queue = []
            self._keys.clear()
            self._wake_posted = False
        for _key, job in jobs:
            job()
