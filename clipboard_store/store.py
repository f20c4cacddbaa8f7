# clipboard_store/store.py
"""In-memory clipboard store with absolute per-entry expiry.

- One TTL shared by every entry, measured from the last `set` of that id
- Reads never refresh the TTL
- Expired entries are dropped lazily on `get` and periodically by a sweep thread
"""
from __future__ import annotations
import math
import threading
import time
from typing import Callable, Dict, NamedTuple, Optional, Tuple

import structlog

logger = structlog.get_logger(__name__)

DEFAULT_SWEEP_INTERVAL = 60 * 60  # 1 h


class Entry(NamedTuple):
    value: str
    recorded_at: float


class ValueStore:
    def __init__(
        self,
        ttl: float,
        sweep_interval: float = DEFAULT_SWEEP_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        start: bool = True,
    ):
        if not (math.isfinite(ttl) and ttl > 0):
            raise ValueError(f"ttl must be a positive finite number, got {ttl!r}")
        if not (math.isfinite(sweep_interval) and sweep_interval > 0):
            raise ValueError(f"sweep_interval must be a positive finite number, got {sweep_interval!r}")
        self.ttl = float(ttl)
        self.sweep_interval = float(sweep_interval)
        self._clock = clock
        self._values: Dict[str, Entry] = {}
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        if start:
            self.start()

    def _expired(self, entry: Entry, now: float) -> bool:
        return now - entry.recorded_at > self.ttl

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._values[key] = Entry(value, self._clock())

    def get(self, key: str) -> Optional[str]:
        """Return the live value for `key`, or None if it was never set or has expired."""
        # check and delete under one lock so a concurrent set is never erased
        with self._lock:
            entry = self._values.get(key)
            if entry is None:
                return None
            if self._expired(entry, self._clock()):
                del self._values[key]
                return None
            return entry.value

    def lookup(self, key: str) -> Tuple[str, bool]:
        value = self.get(key)
        if value is None:
            return "", False
        return value, True

    def sweep(self) -> int:
        """Drop every expired entry in one pass. Returns how many were removed."""
        with self._lock:
            now = self._clock()
            expired = [k for k, e in self._values.items() if self._expired(e, now)]
            for k in expired:
                del self._values[k]
            remaining = len(self._values)
        if expired:
            logger.info("sweep_completed", removed=len(expired), remaining=remaining)
        else:
            logger.debug("sweep_completed", removed=0, remaining=remaining)
        return len(expired)

    # --- background sweep ---

    def _run(self) -> None:
        logger.debug("sweep_started", interval=self.sweep_interval)
        while not self._stop.wait(self.sweep_interval):
            self.sweep()
        logger.debug("sweep_stopped")

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="clipboard-sweep", daemon=True)
        self._thread.start()

    def close(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    def __enter__(self) -> "ValueStore":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # --- inspection ---

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._values
