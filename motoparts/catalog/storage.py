"""Key-value blob storage used by the catalog and cart stores.

Values are UTF-8 JSON text. Every successful `set` is published to the
subscribers registered for that key (or for all keys) after the write.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

Listener = Callable[[str, str], None]


class KeyValueStore:
    def __init__(self) -> None:
        self._listeners: Dict[Optional[str], List[Listener]] = {}
        self._listeners_lock = threading.Lock()

    # Backends implement these two
    def _read(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def _write(self, key: str, value: str) -> None:
        raise NotImplementedError

    def get(self, key: str) -> Optional[str]:
        return self._read(key)

    def set(self, key: str, value: str) -> None:
        self._write(key, value)
        self.publish(key, value)

    def subscribe(self, listener: Listener, key: Optional[str] = None) -> Callable[[], None]:
        """Register `listener(key, value)`; returns an unsubscribe callable."""
        with self._listeners_lock:
            self._listeners.setdefault(key, []).append(listener)

        def unsubscribe() -> None:
            with self._listeners_lock:
                listeners = self._listeners.get(key, [])
                if listener in listeners:
                    listeners.remove(listener)

        return unsubscribe

    def publish(self, key: str, value: str) -> None:
        with self._listeners_lock:
            targets = list(self._listeners.get(key, [])) + list(self._listeners.get(None, []))
        for listener in targets:
            listener(key, value)


class MemoryStore(KeyValueStore):
    """Process-local store. Used in tests and for the `memory` backend."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        super().__init__()
        self._data: Dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def _read(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def _write(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value
