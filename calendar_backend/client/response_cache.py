"""
response_cache.py — Last-known API responses
In-memory cache keyed by SHA-256 of (method + path + query params).
Feeds the offline fallback with the last successful read of the same request.
Entries expire after their TTL; expired entries are pruned on every write.
"""

import hashlib
import json
import time


class ResponseCache:
    """In-memory API response cache with TTL."""

    def __init__(self, ttl_seconds: int = 24 * 3600, clock=time.time):
        # hash → {response, timestamp, ttl}
        self._cache: dict[str, dict] = {}
        self.ttl_seconds = ttl_seconds
        self.clock = clock

    def __len__(self) -> int:
        return len(self._cache)

    # ------------------------------------------------------------------
    @staticmethod
    def _hash(method: str, path: str, params: dict | None) -> str:
        """SHA-256 of concatenated inputs."""
        raw = f"{method.upper()}||{path}||{json.dumps(params or {}, sort_keys=True, default=str)}"
        return hashlib.sha256(raw.encode("utf-8")).hexdigest()

    def _expired(self, entry: dict) -> bool:
        return self.clock() - entry["timestamp"] > entry["ttl"]

    # ------------------------------------------------------------------
    def get(self, method: str, path: str, params: dict | None = None) -> dict | None:
        """Return cached response or None on miss / expiry."""
        key = self._hash(method, path, params)
        entry = self._cache.get(key)
        if entry is None:
            return None
        if self._expired(entry):
            del self._cache[key]
            return None
        return entry["response"]

    def set(self, method: str, path: str, params: dict | None, response: dict, ttl_seconds: int | None = None):
        """Store a response. ttl_seconds=0 → don't cache."""
        self._prune()
        ttl = self.ttl_seconds if ttl_seconds is None else ttl_seconds
        if ttl <= 0:
            return
        self._cache[self._hash(method, path, params)] = {
            "response": response,
            "timestamp": self.clock(),
            "ttl": ttl,
        }

    def _prune(self):
        for key in [k for k, v in self._cache.items() if self._expired(v)]:
            del self._cache[key]
