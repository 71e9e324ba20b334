import hashlib
import logging
import threading
import time

from cachetools import TTLCache

logger = logging.getLogger(__name__)

DEFAULT_MAXSIZE = 50
DEFAULT_TTL = 3600


def fingerprint(identity):
    """Stable cache key for an outbound client identity (e.g. a user agent)."""
    return hashlib.md5(identity.encode('utf-8')).hexdigest()


class CredentialCache:
    """Thread-safe upstream cookie store with LRU eviction and per-entry TTL."""

    def __init__(self, maxsize=DEFAULT_MAXSIZE, ttl=DEFAULT_TTL, timer=time.monotonic):
        self._entries = TTLCache(maxsize=maxsize, ttl=ttl, timer=timer)
        self._lock = threading.Lock()

    def get(self, key):
        with self._lock:
            # Drop expired entries so they stop occupying slots
            self._entries.expire()
            cookie = self._entries.get(key)
        if cookie is None:
            logger.debug(f"Credential cache MISS for {key}")
        else:
            logger.debug(f"Credential cache HIT for {key}")
        return cookie

    def put(self, key, cookie):
        with self._lock:
            self._entries[key] = cookie

    def clear(self):
        with self._lock:
            self._entries.clear()

    def __len__(self):
        with self._lock:
            self._entries.expire()
            return len(self._entries)
