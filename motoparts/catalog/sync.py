from __future__ import annotations

import contextlib
import logging
import threading
from typing import Callable, ContextManager, Optional

from motoparts.catalog.stores import ProductStore

logger = logging.getLogger(__name__)

SYNC_INTERVAL = 1.4


class CatalogSyncPoller:
    """Background reconciliation for catalog writes made by other processes.

    In-process writes already reach the ProductStore through store
    notifications; this thread catches the rest, at most one interval late.
    """

    def __init__(
        self,
        products: ProductStore,
        interval: float = SYNC_INTERVAL,
        context: Optional[Callable[[], ContextManager]] = None,
        on_change: Optional[Callable[[], None]] = None,
    ):
        self.products = products
        self.interval = interval
        self._context = context or contextlib.nullcontext
        self._on_change = on_change
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def poll_once(self) -> bool:
        with self._context():
            changed = self.products.refresh()
        if changed and self._on_change:
            self._on_change()
        return changed

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            try:
                self.poll_once()
            except Exception:
                logger.exception("Catalog sync poll failed")

    def start(self) -> None:
        if self._thread and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="catalog-sync", daemon=True)
        self._thread.start()
        logger.info("Catalog sync poller started (every %.1fs)", self.interval)

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self._thread:
            self._thread.join(timeout)
            self._thread = None

    @property
    def running(self) -> bool:
        return bool(self._thread and self._thread.is_alive())
