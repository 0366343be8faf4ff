"""Key-value cache stores holding the serialized flight aggregate."""

import hashlib
import json
import logging
import threading
import time
from pathlib import Path
from typing import Callable, Dict, Optional, Protocol, Tuple, runtime_checkable

from flightboard.tracker.errors import CacheUnavailableError

logger = logging.getLogger(__name__)


@runtime_checkable
class CacheStore(Protocol):
    """Minimal string key-value store with per-entry expiration."""

    def get(self, key: str) -> Optional[str]:
        ...

    def put(self, key: str, value: str, ttl: int) -> None:
        ...


class MemoryCache:
    """In-process cache. Entries expire ttl seconds after being written."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: Dict[str, Tuple[float, str]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def put(self, key: str, value: str, ttl: int) -> None:
        now = self._clock()
        with self._lock:
            self._evict_expired(now)
            self._entries[key] = (now + ttl, value)

    def _evict_expired(self, now: float) -> None:
        # Caller holds the lock
        expired = [k for k, (expires_at, _) in self._entries.items() if now >= expires_at]
        for k in expired:
            del self._entries[k]


class FileCache:
    """Cache persisted as one JSON file per key, shared between processes."""

    def __init__(self, directory: Path, clock: Callable[[], float] = time.time):
        self.directory = Path(directory)
        self._clock = clock

    def _path(self, key: str) -> Path:
        digest = hashlib.sha1(key.encode("utf-8")).hexdigest()[:16]
        return self.directory / f"{digest}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            with path.open(encoding="utf-8") as f:
                entry = json.load(f)
        except FileNotFoundError:
            return None
        except json.JSONDecodeError:
            logger.warning("Discarding corrupt cache file %s", path)
            return None
        except OSError as e:
            raise CacheUnavailableError(f"Cannot read cache file {path}: {e}") from e

        if not isinstance(entry, dict):
            logger.warning("Discarding cache file %s with unexpected layout", path)
            return None
        if entry.get("key") != key or self._clock() >= float(entry.get("expires_at", 0)):
            return None
        return entry.get("value")

    def put(self, key: str, value: str, ttl: int) -> None:
        path = self._path(key)
        entry = {"key": key, "expires_at": self._clock() + ttl, "value": value}
        tmp = path.with_suffix(".tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with tmp.open("w", encoding="utf-8") as f:
                json.dump(entry, f)
            tmp.replace(path)
        except OSError as e:
            raise CacheUnavailableError(f"Cannot write cache file {path}: {e}") from e
