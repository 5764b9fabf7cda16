"""Flask-bound key-value backends and the catalog storage extension."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from flask import Flask, current_app, session

from motoparts.app.extensions import db
from motoparts.app.models import KeyValueEntry
from motoparts.catalog.storage import KeyValueStore, MemoryStore
from motoparts.catalog.stores import ProductStore
from motoparts.catalog.sync import CatalogSyncPoller

logger = logging.getLogger(__name__)


class SqlStore(KeyValueStore):
    """Blobs in the `kv_entries` table. Needs an app context."""

    def _read(self, key: str) -> Optional[str]:
        entry = db.session.get(KeyValueEntry, key)
        return entry.value if entry else None

    def _write(self, key: str, value: str) -> None:
        entry = db.session.get(KeyValueEntry, key)
        if entry:
            entry.value = value
        else:
            db.session.add(KeyValueEntry(key=key, value=value))
        db.session.commit()


class SessionStore(KeyValueStore):
    """Per-browser blobs kept in the Flask session cookie."""

    def _read(self, key: str) -> Optional[str]:
        return session.get(key)

    def _write(self, key: str, value: str) -> None:
        session[key] = value
        session.modified = True


class _CatalogState:
    def __init__(self, store: KeyValueStore, poller: Optional[CatalogSyncPoller] = None):
        self.store = store
        self.products = ProductStore(store)
        self.poller = poller
        self.loaded = False
        self.lock = threading.Lock()


class CatalogStorage:
    """Flask extension owning the shared product store (and its sync poller)."""

    def __init__(self, app: Optional[Flask] = None):
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        backend = app.config.get("STORE_BACKEND", "sql")
        if backend == "memory":
            store: KeyValueStore = MemoryStore()
        elif backend == "sql":
            with app.app_context():
                db.create_all()
            store = SqlStore()
        else:
            raise ValueError(f"Unknown STORE_BACKEND: {backend!r}")

        state = _CatalogState(store)
        if backend == "sql" and app.config.get("CATALOG_SYNC_ENABLED"):
            state.poller = CatalogSyncPoller(
                state.products,
                interval=app.config.get("CATALOG_SYNC_INTERVAL", 1.4),
                context=app.app_context,
            )
            state.poller.start()

        app.extensions["catalog"] = state
        logger.info("Catalog storage ready (backend=%s)", backend)

    @staticmethod
    def _state() -> _CatalogState:
        return current_app.extensions["catalog"]

    @property
    def store(self) -> KeyValueStore:
        return self._state().store

    @property
    def products(self) -> ProductStore:
        """The shared product store, seeded/loaded on first use."""
        state = self._state()
        if not state.loaded:
            with state.lock:
                if not state.loaded:
                    state.products.load()
                    state.loaded = True
        return state.products

    @property
    def poller(self) -> Optional[CatalogSyncPoller]:
        return self._state().poller


catalog = CatalogStorage()
